"""Service-level helpers for the post resource."""
from __future__ import annotations

from sqlalchemy.orm import Session

from microblog.core.errors import NotFoundError
from microblog.db.ids import parse_identifier
from microblog.models.post import Post
from microblog.repositories.post_repo import PostRepository
from microblog.schemas.post import ExpandedPostResponse, PostResponse, PostWrite

__all__ = [
    "list_posts",
    "create_post",
    "get_post",
    "update_post",
    "delete_post",
    "to_post_response",
]


def to_post_response(post: Post, *, expand_comments: bool = False) -> PostResponse | ExpandedPostResponse:
    """Convert a Post ORM instance to an API schema."""
    if expand_comments:
        return ExpandedPostResponse.from_post(post)
    return PostResponse.from_post(post)


def list_posts(db: Session, *, expand_comments: bool = False) -> list[PostResponse | ExpandedPostResponse]:
    """Return every post, optionally joining comment bodies in at read time."""
    posts = PostRepository(db).list_all()
    return [to_post_response(post, expand_comments=expand_comments) for post in posts]


def create_post(db: Session, payload: PostWrite) -> Post:
    """Persist a new post with an empty comment set."""
    post = PostRepository(db).create(title=payload.title, description=payload.description)
    db.commit()
    db.refresh(post)
    return post


def get_post(db: Session, post_id: str) -> Post:
    """Resolve a post by its path identifier.

    Raises:
        InvalidIdentifierError: If ``post_id`` is not a well-formed key.
        NotFoundError: If no post has that identifier.
    """
    post = PostRepository(db).get_by_id(parse_identifier(post_id))
    if post is None:
        raise NotFoundError("Post not found")
    return post


def update_post(db: Session, post_id: str, payload: PostWrite) -> Post:
    """Overwrite a post's title and description."""
    repo = PostRepository(db)
    post = get_post(db, post_id)
    repo.replace_text(post, title=payload.title, description=payload.description)
    db.commit()
    db.refresh(post)
    return post


def delete_post(db: Session, post_id: str) -> PostResponse:
    """Delete a post and return the record as it was before removal.

    Comments referenced by the post stay in storage.
    """
    repo = PostRepository(db)
    post = get_post(db, post_id)
    snapshot = PostResponse.from_post(post)
    repo.delete(post)
    db.commit()
    return snapshot
