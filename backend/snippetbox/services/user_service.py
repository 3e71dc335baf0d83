"""
Snippetbox — User Service
==========================

What:  Signup, authentication and account lookup.
Who:   Called by the user route handlers and the authentication dependency.

Duplicate emails:
    The insert runs inside a SAVEPOINT so a unique-constraint violation
    only rolls back the failed insert. The request transaction stays usable
    and the signup form can be re-rendered with a field error.
"""

import logging

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.exceptions import (
    DatabaseError,
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
)
from snippetbox.models.user import User
from snippetbox.schemas.views import UserView
from snippetbox.services.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    async def insert(self, db: AsyncSession, name: str, email: str, password: str) -> int:
        """
        Create a user account and return its id.

        Raises:
            DuplicateEmailError: The email address is already registered
            DatabaseError: Any other database failure
        """
        user = User(name=name, email=email, hashed_password=hash_password(password))
        try:
            async with db.begin_nested():
                db.add(user)
                await db.flush()
        except IntegrityError as e:
            if "email" in str(e.orig).lower():
                raise DuplicateEmailError(email=email)
            logger.error("Integrity error creating user: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})
        except Exception as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User %s signed up", user.id)
        return user.id

    async def authenticate(self, db: AsyncSession, email: str, password: str) -> int:
        """
        Check an email/password pair and return the user id.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            DatabaseError: Query execution failed
        """
        try:
            result = await db.execute(
                select(User.id, User.hashed_password).where(User.email == email)
            )
            row = result.one_or_none()
        except Exception as e:
            logger.error("Database error authenticating user: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

        if row is None:
            raise InvalidCredentialsError()

        user_id, hashed_password = row
        if not verify_password(password, hashed_password):
            raise InvalidCredentialsError()

        return user_id

    async def exists(self, db: AsyncSession, user_id: int) -> bool:
        try:
            result = await db.execute(select(exists().where(User.id == user_id)))
            return bool(result.scalar())
        except Exception as e:
            logger.error("Database error checking user %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": user_id})

    async def get(self, db: AsyncSession, user_id: int) -> UserView:
        """
        Fetch account details.

        Raises:
            NotFoundError: No user with that id
            DatabaseError: Query execution failed
        """
        try:
            result = await db.execute(select(User).where(User.id == user_id))
            user = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise DatabaseError(context={"user_id": user_id})

        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))

        return UserView.model_validate(user)


user_service = UserService()
