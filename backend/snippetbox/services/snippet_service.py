"""
Snippetbox — Snippet Service
=============================

What:  Inserts and retrieves snippets.
Who:   Called by the home and snippet route handlers.

Visibility rule:
    A snippet is visible until its `expires` timestamp. get() and latest()
    both filter on `expires > now`, so an expired snippet behaves exactly
    like a missing one.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox.exceptions import DatabaseError, NotFoundError
from snippetbox.models.snippet import Snippet
from snippetbox.schemas.views import SnippetView

logger = logging.getLogger(__name__)


class SnippetService:
    """
    Business logic layer for snippets.

    Error Handling Strategy:
        Missing or expired rows raise NotFoundError. Any other failure is
        logged and wrapped in DatabaseError so no SQL detail reaches a page.
    """

    async def insert(
        self,
        db: AsyncSession,
        title: str,
        content: str,
        expires_days: int,
    ) -> int:
        """
        Store a new snippet and return its id.

        Args:
            db: Async database session (injected by FastAPI)
            title: Snippet title (already validated)
            content: Snippet body (already validated)
            expires_days: Days until the snippet expires

        Raises:
            DatabaseError: The insert failed
        """
        now = datetime.now(timezone.utc)
        snippet = Snippet(
            title=title,
            content=content,
            created=now,
            expires=now + timedelta(days=expires_days),
        )
        try:
            db.add(snippet)
            await db.flush()  # Assigns the id without committing
        except Exception as e:
            logger.error("Database error inserting snippet: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the snippet. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Snippet %s created (expires in %d days)", snippet.id, expires_days)
        return snippet.id

    async def get(self, db: AsyncSession, snippet_id: int) -> SnippetView:
        """
        Fetch one visible snippet.

        Raises:
            NotFoundError: No snippet with that id, or it has expired
            DatabaseError: Query execution failed
        """
        try:
            result = await db.execute(
                select(Snippet).where(
                    Snippet.id == snippet_id,
                    Snippet.expires > datetime.now(timezone.utc),
                )
            )
            snippet = result.scalar_one_or_none()
        except Exception as e:
            logger.error("Database error fetching snippet %s: %s", snippet_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the snippet. Please try again.",
                context={"snippet_id": snippet_id},
            )

        if snippet is None:
            raise NotFoundError(resource="snippet", resource_id=str(snippet_id))

        return SnippetView.model_validate(snippet)

    async def latest(self, db: AsyncSession, limit: int = 10) -> List[SnippetView]:
        """Most recently created visible snippets, newest first."""
        try:
            result = await db.execute(
                select(Snippet)
                .where(Snippet.expires > datetime.now(timezone.utc))
                .order_by(desc(Snippet.id))
                .limit(limit)
            )
            snippets = list(result.scalars().all())
        except Exception as e:
            logger.error("Database error listing snippets: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve snippets. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [SnippetView.model_validate(snippet) for snippet in snippets]


snippet_service = SnippetService()
