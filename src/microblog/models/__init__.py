# src/microblog/models/__init__.py
"""SQLAlchemy models for the microblog application."""

from .comment import Comment
from .post import Post, post_comment
from .user import User

__all__ = [
    "Comment",
    "Post", "post_comment",
    "User",
]
