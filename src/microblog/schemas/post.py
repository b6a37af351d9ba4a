"""Post-related Pydantic schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from .comment import CommentResponse

if TYPE_CHECKING:
    from microblog.models import Post


class PostWrite(BaseModel):
    """Schema for creating or replacing a post's text fields."""

    title: str | None = Field(None, description="Post title")
    description: str | None = Field(None, description="Post body text")


class PostResponse(BaseModel):
    """Post record with comment references as identifiers."""

    id: str
    title: str | None
    description: str | None
    comments: list[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_post(cls, post: Post) -> PostResponse:
        return cls(
            id=post.id,
            title=post.title,
            description=post.description,
            comments=[comment.id for comment in post.comments],
        )


class ExpandedPostResponse(BaseModel):
    """Post record with comment references resolved to full comments."""

    id: str
    title: str | None
    description: str | None
    comments: list[CommentResponse] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_post(cls, post: Post) -> ExpandedPostResponse:
        return cls(
            id=post.id,
            title=post.title,
            description=post.description,
            comments=[CommentResponse.model_validate(comment) for comment in post.comments],
        )


class PostListResponse(BaseModel):
    """Envelope returned by the post listing endpoint."""

    posts: list[ExpandedPostResponse | PostResponse]
