# src/microblog/api/endpoints/comments.py
"""Comment endpoints nested under posts."""

from fastapi import APIRouter, status

from microblog.api.dependencies import CommentCreateBody, SessionDep
from microblog.schemas.comment import CommentResponse
from microblog.schemas.common import ErrorResponse
from microblog.services.comments import create_and_attach_comment

router = APIRouter(prefix="/api/posts", tags=["comments"])


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
def create_comment(
    post_id: str,
    payload: CommentCreateBody,
    db: SessionDep,
) -> CommentResponse:
    """Create a comment and attach it to a post.

    The comment is saved before the post is looked up; a 404 for a missing
    post leaves the comment stored but unreferenced.
    """
    comment = create_and_attach_comment(db, post_id, payload.body)
    return CommentResponse.model_validate(comment)
