# src/microblog/models/comment.py
"""SQLAlchemy model for comments."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from microblog.db.ids import new_id
from microblog.db.session import Base

if TYPE_CHECKING:
    from .post import Post


class Comment(Base):
    """Standalone comment body, referenced from posts through ``post_comment``."""

    __tablename__ = "comment"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    body: Mapped[str] = mapped_column(Text, nullable=False)

    posts: Mapped[list[Post]] = relationship(
        "Post",
        secondary="post_comment",
        back_populates="comments",
    )
