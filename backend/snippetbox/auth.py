"""
Snippetbox — Authentication Dependencies
=========================================

What:  FastAPI dependencies deciding whether a request is authenticated.
How:   The session stores the user id after a successful login. A request
       counts as authenticated only while that user still exists, so
       deleting an account logs it out everywhere.

Protected routes depend on require_authentication; unauthenticated
requests raise AuthenticationRequired, which the global handler turns into
a 303 redirect to the login page. The requested path is remembered in
the session and used as the post-login destination.
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.database import get_db_session
from snippetbox.exceptions import AuthenticationRequired
from snippetbox.services.user_service import user_service

SESSION_USER_KEY = "authenticated_user_id"
SESSION_NEXT_KEY = "redirect_after_login"

# Protected pages must not be stored by the browser
NO_STORE = {"Cache-Control": "no-store"}


async def authenticated_user_id(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> Optional[int]:
    """The id of the logged-in user, or None. Also sets request.state.is_authenticated."""
    request.state.is_authenticated = False

    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        return None

    if not await user_service.exists(db, user_id):
        return None

    request.state.is_authenticated = True
    return user_id


async def require_authentication(
    request: Request,
    user_id: Optional[int] = Depends(authenticated_user_id),
) -> int:
    if user_id is None:
        if request.method == "GET":
            request.session[SESSION_NEXT_KEY] = request.url.path
        raise AuthenticationRequired(next_path=request.url.path)
    return user_id
