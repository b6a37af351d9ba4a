"""Shared API dependencies for sessions, settings and collaborators."""

import json
from pathlib import Path
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from microblog.core.settings import Settings
from microblog.db.session import get_db
from microblog.models import User
from microblog.schemas.comment import CommentCreate
from microblog.schemas.post import PostWrite
from microblog.services.identity import resolve_session_user
from microblog.services.oauth import ExternalIdentityProvider, OAuthConfig

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))


def get_settings(request: Request) -> Settings:
    """Return the settings the application was built with."""
    return request.app.state.settings


# Type aliases for settings and database session dependencies
SettingsDep = Annotated[Settings, Depends(get_settings)]
SessionDep = Annotated[Session, Depends(get_db)]


def get_session_user(request: Request, db: SessionDep, settings: SettingsDep) -> User | None:
    """Resolve the session cookie to the full user record.

    Returns:
        The signed-in user, or None when the cookie is absent, invalid,
        expired or names an unknown account.
    """
    token = request.cookies.get(settings.session_cookie_name)
    return resolve_session_user(db, token, settings)


def get_identity_provider(settings: SettingsDep) -> ExternalIdentityProvider:
    """Return the external identity provider client."""
    return ExternalIdentityProvider(OAuthConfig.from_settings(settings))


# Type aliases for identity dependencies
SessionUserDep = Annotated[User | None, Depends(get_session_user)]
IdentityProviderDep = Annotated[ExternalIdentityProvider, Depends(get_identity_provider)]


FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_body_fields(request: Request) -> dict[str, Any]:
    """Return the request body as a field mapping.

    Form-encoded and JSON bodies are both accepted; an empty body yields no fields.

    Raises:
        RequestValidationError: If a JSON body cannot be decoded.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError as err:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}}]
        ) from err
    if not isinstance(data, dict):
        raise RequestValidationError(
            [{"type": "model_attributes_type", "loc": ("body",), "msg": "Body must be an object", "input": data}]
        )
    return data


def _validate_body(model: type[BaseModel], fields: dict[str, Any]) -> Any:
    try:
        return model.model_validate(fields)
    except ValidationError as err:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in err.errors()]
        ) from err


async def get_post_write(request: Request) -> PostWrite:
    """Parse a post's title and description from a form or JSON body."""
    return _validate_body(PostWrite, await read_body_fields(request))


async def get_comment_create(request: Request) -> CommentCreate:
    """Parse a comment body from a form or JSON body."""
    return _validate_body(CommentCreate, await read_body_fields(request))


# Type aliases for request bodies
PostWriteBody = Annotated[PostWrite, Depends(get_post_write)]
CommentCreateBody = Annotated[CommentCreate, Depends(get_comment_create)]
