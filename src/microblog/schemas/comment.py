"""Comment-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """Schema for creating a comment under a post."""

    body: str = Field(..., description="Comment text")


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: str
    body: str

    model_config = ConfigDict(from_attributes=True)
