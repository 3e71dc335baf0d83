"""
Snippetbox — Template Rendering
================================

What:  Jinja2 environment and the render() helper used by every page route.
How:   render() adds the data every page needs (current year, one-shot
       flash message, authentication state) before rendering.

Flash messages live in the session under "flash" and are removed the
first time a page renders them.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from fastapi.templating import Jinja2Templates
from starlette.requests import Request
from starlette.responses import Response

from snippetbox.config import PACKAGE_DIR

FLASH_KEY = "flash"

templates = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))


def human_date(value: Optional[datetime]) -> str:
    """Format a timestamp as "02 Jan 2024 at 15:04" in UTC."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%d %b %Y at %H:%M")


templates.env.filters["human_date"] = human_date


def flash(request: Request, message: str) -> None:
    """Queue a message for the next rendered page."""
    request.session[FLASH_KEY] = message


def render(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
    headers: Optional[Mapping[str, str]] = None,
) -> Response:
    data: Dict[str, Any] = {
        "current_year": datetime.now(timezone.utc).year,
        "flash": request.session.pop(FLASH_KEY, None),
        "is_authenticated": getattr(request.state, "is_authenticated", False),
        "form": {},
        "field_errors": {},
        "non_field_errors": [],
    }
    data.update(context or {})
    return templates.TemplateResponse(
        request,
        name,
        data,
        status_code=status_code,
        headers=dict(headers) if headers else None,
    )
