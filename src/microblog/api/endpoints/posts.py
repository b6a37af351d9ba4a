# src/microblog/api/endpoints/posts.py
"""Post-related JSON endpoints."""

from typing import Literal

from fastapi import APIRouter, Query, status

from microblog.api.dependencies import PostWriteBody, SessionDep
from microblog.schemas.common import ErrorResponse
from microblog.schemas.post import (
    ExpandedPostResponse,
    PostListResponse,
    PostResponse,
)
from microblog.services import posts as post_service

router = APIRouter(
    prefix="/api/posts",
    tags=["posts"],
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}


@router.get("", response_model=PostListResponse)
def list_posts(
    db: SessionDep,
    expand: Literal["comments"] | None = Query(
        None,
        description="Set to 'comments' to replace comment ids with full comments",
    ),
) -> PostListResponse:
    """List every post in creation order.

    Args:
        db: Database session
        expand: When ``comments``, each post's comment references are resolved

    Returns:
        Envelope holding all posts
    """
    posts = post_service.list_posts(db, expand_comments=expand == "comments")
    return PostListResponse(posts=posts)


@router.post("", response_model=PostResponse, status_code=status.HTTP_200_OK)
def create_post(payload: PostWriteBody, db: SessionDep) -> PostResponse:
    """Create a post with an empty comment set and return it with its id.

    Accepts a form-encoded or JSON body.
    """
    post = post_service.create_post(db, payload)
    return PostResponse.from_post(post)


@router.get(
    "/{post_id}",
    response_model=ExpandedPostResponse | PostResponse,
    responses=_NOT_FOUND,
)
def get_post(
    post_id: str,
    db: SessionDep,
    expand: Literal["comments"] | None = Query(None),
) -> PostResponse | ExpandedPostResponse:
    """Get a single post.

    Raises:
        InvalidIdentifierError: If ``post_id`` is malformed (404)
        NotFoundError: If no post has that id (404)
    """
    post = post_service.get_post(db, post_id)
    return post_service.to_post_response(post, expand_comments=expand == "comments")


@router.put("/{post_id}", response_model=PostResponse, responses=_NOT_FOUND)
def update_post(post_id: str, payload: PostWriteBody, db: SessionDep) -> PostResponse:
    """Overwrite a post's title and description and return the updated record."""
    post = post_service.update_post(db, post_id, payload)
    return PostResponse.from_post(post)


@router.delete("/{post_id}", response_model=PostResponse, responses=_NOT_FOUND)
def delete_post(post_id: str, db: SessionDep) -> PostResponse:
    """Delete a post and return the removed record.

    The post's comments are not deleted.
    """
    return post_service.delete_post(db, post_id)
