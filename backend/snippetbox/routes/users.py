"""
Snippetbox — User Route Handlers
=================================

What:  Signup, login, logout and the account page.

Routes:
    GET/POST /user/signup    create an account
    GET/POST /user/login     start an authenticated session
    POST     /user/logout    end it (login required)
    GET      /account/view   account details (login required)

Form errors (blank fields, duplicate email, wrong password) re-render the
page with 422 Unprocessable Entity; successful submissions redirect (303)
so a browser refresh does not resubmit the form.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.auth import (
    NO_STORE,
    SESSION_NEXT_KEY,
    SESSION_USER_KEY,
    authenticated_user_id,
    require_authentication,
)
from snippetbox.database import get_db_session
from snippetbox.exceptions import DuplicateEmailError, InvalidCredentialsError
from snippetbox.schemas.forms import LoginForm, SignupForm, validate_form
from snippetbox.services.user_service import user_service
from snippetbox.templating import flash, render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


def _redisplay(submitted) -> dict:
    # Passwords are never echoed back into the form
    form = dict(submitted)
    form.pop("password", None)
    return form


@router.get("/user/signup", summary="Signup form")
async def user_signup(
    request: Request,
    user_id: Optional[int] = Depends(authenticated_user_id),
):
    return render(request, "signup.html")


@router.post("/user/signup", summary="Create an account")
async def user_signup_post(
    request: Request,
    user_id: Optional[int] = Depends(authenticated_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    submitted = await request.form()
    form, field_errors = validate_form(SignupForm, submitted)

    if form is not None:
        try:
            await user_service.insert(db, name=form.name, email=form.email, password=form.password)
        except DuplicateEmailError as e:
            field_errors = {"email": e.message}

    if field_errors:
        return render(
            request,
            "signup.html",
            {"form": _redisplay(submitted), "field_errors": field_errors},
            status_code=422,
        )

    flash(request, "Your signup was successful. Please log in.")
    return RedirectResponse(url="/user/login", status_code=303)


@router.get("/user/login", summary="Login form")
async def user_login(
    request: Request,
    user_id: Optional[int] = Depends(authenticated_user_id),
):
    return render(request, "login.html")


@router.post("/user/login", summary="Log in")
async def user_login_post(
    request: Request,
    user_id: Optional[int] = Depends(authenticated_user_id),
    db: AsyncSession = Depends(get_db_session),
):
    submitted = await request.form()
    form, field_errors = validate_form(LoginForm, submitted)
    non_field_errors = []

    if form is not None:
        try:
            user_id = await user_service.authenticate(db, email=form.email, password=form.password)
        except InvalidCredentialsError as e:
            non_field_errors.append(e.message)

    if field_errors or non_field_errors:
        return render(
            request,
            "login.html",
            {
                "form": _redisplay(submitted),
                "field_errors": field_errors,
                "non_field_errors": non_field_errors,
            },
            status_code=422,
        )

    # New login, new session: drop anything stored under the old identity
    next_path = request.session.get(SESSION_NEXT_KEY) or "/snippet/create"
    request.session.clear()
    request.session[SESSION_USER_KEY] = user_id
    logger.info("User %s logged in", user_id)
    return RedirectResponse(url=next_path, status_code=303)


@router.post("/user/logout", summary="Log out")
async def user_logout_post(
    request: Request,
    user_id: int = Depends(require_authentication),
):
    request.session.pop(SESSION_USER_KEY, None)
    flash(request, "You've been logged out successfully!")
    logger.info("User %s logged out", user_id)
    return RedirectResponse(url="/", status_code=303)


@router.get("/account/view", summary="Account details")
async def account_view(
    request: Request,
    user_id: int = Depends(require_authentication),
    db: AsyncSession = Depends(get_db_session),
):
    user = await user_service.get(db, user_id)
    return render(request, "account.html", {"user": user}, headers=NO_STORE)
