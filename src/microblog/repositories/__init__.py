"""Repository layer wrapping SQLAlchemy access per entity."""

from .comment_repo import CommentRepository
from .post_repo import PostRepository
from .user_repo import UserRepository

__all__ = ["CommentRepository", "PostRepository", "UserRepository"]
