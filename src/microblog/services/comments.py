"""Service-level helpers for creating comments and attaching them to posts."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from microblog.core.errors import NotFoundError
from microblog.models.comment import Comment
from microblog.repositories.comment_repo import CommentRepository
from microblog.repositories.post_repo import PostRepository
from microblog.services.posts import get_post

logger = logging.getLogger(__name__)


def create_and_attach_comment(db: Session, post_id: str, body: str) -> Comment:
    """Persist a comment, then add its reference to the named post.

    The two steps commit separately. If the post cannot be resolved the
    comment stays persisted without any post referencing it.

    Raises:
        NotFoundError: If ``post_id`` is malformed or names no post.
    """
    comment = CommentRepository(db).create(body=body)
    db.commit()
    db.refresh(comment)

    try:
        post = get_post(db, post_id)
    except NotFoundError:
        logger.warning("Comment %s left unattached: post %r not found", comment.id, post_id)
        raise

    if not PostRepository(db).add_comment(post, comment):
        logger.debug("Post %s already references comment %s", post.id, comment.id)
    db.commit()
    db.refresh(comment)
    return comment
