"""Data access helpers for working with posts."""
from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from microblog.models.comment import Comment
from microblog.models.post import Post, post_comment

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: str) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def list_all(self) -> list[Post]:
        """Return every post in creation order with its comments loaded."""
        stmt = (
            select(Post)
            .options(selectinload(Post.comments))
            .order_by(Post.created_at, Post.id)
        )
        return list(self.session.scalars(stmt))

    def create(self, *, title: str | None, description: str | None) -> Post:
        """Insert a new post with an empty comment set."""
        post = Post(title=title, description=description)
        self.session.add(post)
        self.session.flush()
        return post

    def replace_text(self, post: Post, *, title: str | None, description: str | None) -> Post:
        """Overwrite the title and description; every other field is left alone."""
        post.title = title
        post.description = description
        self.session.flush()
        return post

    def delete(self, post: Post) -> None:
        """Remove a post. Its comment references go with it, its comments do not."""
        self.session.delete(post)
        self.session.flush()

    def has_comment(self, post_id: str, comment_id: str) -> bool:
        """Return True if the post already references the comment."""
        stmt = select(post_comment.c.post_id).where(
            post_comment.c.post_id == post_id,
            post_comment.c.comment_id == comment_id,
        )
        return self.session.execute(stmt).first() is not None

    def add_comment(self, post: Post, comment: Comment) -> bool:
        """Add a comment reference to ``post`` with set semantics.

        Returns:
            True if a reference was inserted, False if it was already present.
        """
        if self.has_comment(post.id, comment.id):
            return False
        try:
            self.session.execute(
                insert(post_comment).values(post_id=post.id, comment_id=comment.id)
            )
            self.session.flush()
        except IntegrityError:
            # A concurrent attach inserted the same pair first.
            self.session.rollback()
            return False
        finally:
            self.session.expire(post, ["comments"])
            self.session.expire(comment, ["posts"])
        return True
