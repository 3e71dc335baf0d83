"""
Snippetbox — Snippet Route Handlers
====================================

What:  Home page, snippet detail page, and the snippet create form.
How:   Routes read the request, call SnippetService and render a template.

Routes:
    GET  /                   latest snippets
    GET  /snippet/view/{id}  one snippet (404 when missing, expired or not an id)
    GET  /snippet/create     empty form             (login required)
    POST /snippet/create     validate, store, redirect (login required)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.auth import NO_STORE, authenticated_user_id, require_authentication
from snippetbox.database import get_db_session
from snippetbox.exceptions import NotFoundError
from snippetbox.schemas.forms import SnippetForm, validate_form
from snippetbox.services.snippet_service import snippet_service
from snippetbox.templating import flash, render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Snippets"])


def parse_snippet_id(raw_id: str) -> int:
    """Snippet ids are positive integers; anything else is a missing page."""
    if not raw_id.isdigit() or int(raw_id) < 1:
        raise NotFoundError(resource="snippet", resource_id=raw_id)
    return int(raw_id)


@router.get("/", summary="Latest snippets")
async def home(
    request: Request,
    user_id: Optional[int] = Depends(authenticated_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    snippets = await snippet_service.latest(db)
    return render(request, "home.html", {"snippets": snippets})


@router.get("/snippet/view/{snippet_id}", summary="View a snippet")
async def snippet_view(
    snippet_id: str,
    request: Request,
    user_id: Optional[int] = Depends(authenticated_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    snippet = await snippet_service.get(db, parse_snippet_id(snippet_id))
    return render(request, "view.html", {"snippet": snippet})


@router.get("/snippet/create", summary="Snippet form")
async def snippet_create(
    request: Request,
    user_id: int = Depends(require_authentication),
):
    return render(
        request,
        "create.html",
        {"form": {"expires": "365"}},
        headers=NO_STORE,
    )


@router.post("/snippet/create", summary="Create a snippet")
async def snippet_create_post(
    request: Request,
    user_id: int = Depends(require_authentication),
    db: AsyncSession = Depends(get_db_session),
):
    submitted = await request.form()
    form, field_errors = validate_form(SnippetForm, submitted)

    if form is None:
        return render(
            request,
            "create.html",
            {"form": dict(submitted), "field_errors": field_errors},
            status_code=422,
            headers=NO_STORE,
        )

    snippet_id = await snippet_service.insert(
        db,
        title=form.title,
        content=form.content,
        expires_days=form.expires_days,
    )
    flash(request, "Snippet successfully created!")
    return RedirectResponse(url=f"/snippet/view/{snippet_id}", status_code=303)
