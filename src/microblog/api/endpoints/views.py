# src/microblog/api/endpoints/views.py
"""Server-rendered home and profile views."""

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse, Response

from microblog.api.dependencies import SessionUserDep, templates
from microblog.schemas.user import UserResponse

router = APIRouter(tags=["views"])


@router.get("/", response_model=None)
def home(request: Request, user: SessionUserDep) -> Response:
    """Render the home view."""
    return templates.TemplateResponse(request, "index.html", {"user": user})


@router.get("/profile", response_model=None)
def profile(request: Request, user: SessionUserDep) -> Response:
    """Render the signed-in user's profile, or send anonymous visitors to login."""
    if user is None:
        return RedirectResponse("/login", status_code=status.HTTP_302_FOUND)
    return templates.TemplateResponse(
        request,
        "profile.html",
        {"user": UserResponse.model_validate(user)},
    )
