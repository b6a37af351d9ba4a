# src/microblog/models/post.py
"""SQLAlchemy models for posts and their comment references."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from microblog.db.ids import new_id
from microblog.db.session import Base
from microblog.db.time import utcnow

if TYPE_CHECKING:
    from .comment import Comment

# The composite primary key keeps at most one reference per (post, comment) pair.
post_comment = Table(
    "post_comment",
    Base.metadata,
    Column("post_id", String(32), ForeignKey("post.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "comment_id",
        String(32),
        ForeignKey("comment.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Post(Base):
    """A blog post owning a set of comment references.

    Deleting a post drops its references but leaves the comments in storage.
    """

    __tablename__ = "post"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Listing order only; not part of the serialized record.
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        secondary=post_comment,
        back_populates="posts",
    )
