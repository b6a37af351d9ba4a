"""Data access helpers for working with comments."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from microblog.models.comment import Comment
from microblog.models.post import post_comment

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, *, body: str) -> Comment:
        """Insert a standalone comment."""
        comment = Comment(body=body)
        self.session.add(comment)
        self.session.flush()
        return comment

    def list_unreferenced(self) -> list[Comment]:
        """Return comments that no post references."""
        referenced = select(post_comment.c.comment_id)
        stmt = select(Comment).where(Comment.id.not_in(referenced))
        return list(self.session.scalars(stmt))
