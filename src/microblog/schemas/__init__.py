"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentCreate, CommentResponse
from .common import ErrorResponse
from .post import ExpandedPostResponse, PostListResponse, PostResponse, PostWrite
from .user import ExternalProfile, UserResponse

__all__ = [
    "CommentCreate", "CommentResponse",
    "ErrorResponse",
    "ExpandedPostResponse", "PostListResponse", "PostResponse", "PostWrite",
    "ExternalProfile", "UserResponse",
]
