"""
Snippetbox — Snippet SQLAlchemy Model
======================================

What:  ORM model for the `snippets` table.
Who:   Used by SnippetService and by Alembic for schema management.

Table Design:
    - Integer primary key: snippet ids appear in URLs (/snippet/view/42)
    - title: VARCHAR(100), the form rejects anything longer
    - created / expires: UTC timestamps; expired snippets are never returned
    - Index on created: the home page lists the most recent snippets
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from snippetbox.database import Base


class Snippet(Base):
    """A titled piece of text that expires after a fixed number of days."""

    __tablename__ = "snippets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(100), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    expires: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_snippets_created", "created"),
    )

    def __repr__(self) -> str:
        return f"<Snippet(id={self.id}, title='{self.title}', expires='{self.expires}')>"
