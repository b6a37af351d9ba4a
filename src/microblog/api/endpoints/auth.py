# src/microblog/api/endpoints/auth.py
"""Signup, login, logout and external-provider login routes."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import RedirectResponse, Response
from starlette.concurrency import run_in_threadpool

from microblog.api.dependencies import (
    IdentityProviderDep,
    SessionDep,
    SessionUserDep,
    SettingsDep,
    templates,
)
from microblog.core import security
from microblog.core.errors import (
    AuthenticationError,
    DuplicateUsernameError,
    ExternalIdentityError,
)
from microblog.core.settings import Settings
from microblog.models import User
from microblog.services import identity

router = APIRouter(tags=["authentication"])
logger = logging.getLogger(__name__)

OAUTH_STATE_COOKIE = "microblog_oauth_state"
OAUTH_STATE_MAX_AGE_SECONDS = 600


def _establish_session(response: Response, user: User, settings: Settings) -> None:
    """Attach the session cookie identifying ``user`` to ``response``."""
    response.set_cookie(
        settings.session_cookie_name,
        security.create_session_token(user.id, settings),
        max_age=settings.session_max_age_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def _redirect(url: str, *, after_post: bool = False) -> RedirectResponse:
    code = status.HTTP_303_SEE_OTHER if after_post else status.HTTP_302_FOUND
    return RedirectResponse(url, status_code=code)


@router.get("/signup", response_model=None)
def signup_form(request: Request, user: SessionUserDep) -> Response:
    """Show the signup view unless a session is already present."""
    if user is not None:
        return _redirect("/profile")
    return templates.TemplateResponse(request, "signup.html", {"user": None})


@router.post("/signup", response_model=None)
def signup(
    request: Request,
    username: Annotated[str, Form()],
    password: Annotated[str, Form()],
    user: SessionUserDep,
    db: SessionDep,
    settings: SettingsDep,
) -> Response:
    """Create a local account, sign it in and redirect to the profile."""
    if user is not None:
        return _redirect("/profile", after_post=True)

    try:
        new_user = identity.register_local_user(db, username, password)
    except DuplicateUsernameError as err:
        return templates.TemplateResponse(
            request,
            "signup.html",
            {"user": None, "error": err.message, "username": username},
            status_code=err.status_code,
        )

    response = _redirect("/profile", after_post=True)
    _establish_session(response, new_user, settings)
    return response


@router.get("/login", response_model=None)
def login_form(request: Request, user: SessionUserDep, settings: SettingsDep) -> Response:
    """Show the login view unless a session is already present."""
    if user is not None:
        return _redirect("/profile")
    return templates.TemplateResponse(
        request,
        "login.html",
        {
            "user": None,
            "provider_name": settings.oauth_provider_name,
            "provider_enabled": settings.oauth_enabled,
        },
    )


@router.post("/login", response_model=None)
def login(
    username: Annotated[str, Form()],
    password: Annotated[str, Form()],
    db: SessionDep,
    settings: SettingsDep,
) -> Response:
    """Verify credentials; redirect to the profile on success and back to login otherwise."""
    try:
        user = identity.authenticate_local_user(db, username, password)
    except AuthenticationError:
        logger.info("Rejected login for username %r", username)
        return _redirect("/login", after_post=True)

    response = _redirect("/profile", after_post=True)
    _establish_session(response, user, settings)
    return response


@router.get("/logout", response_model=None)
def logout(settings: SettingsDep) -> Response:
    """Clear the session and return to the home view."""
    response = _redirect("/")
    response.delete_cookie(settings.session_cookie_name)
    return response


@router.get("/auth/external", response_model=None)
async def external_login(provider: IdentityProviderDep) -> Response:
    """Redirect the browser to the external identity provider."""
    if not provider.enabled:
        logger.warning("%s login requested but no client credentials are configured", provider.config.name)
        return _redirect("/login")

    state = security.generate_state()
    response = RedirectResponse(provider.authorization_url(state), status_code=status.HTTP_302_FOUND)
    response.set_cookie(
        OAUTH_STATE_COOKIE,
        state,
        max_age=OAUTH_STATE_MAX_AGE_SECONDS,
        httponly=True,
        samesite="lax",
    )
    return response


@router.get("/auth/external/callback", response_model=None)
async def external_callback(
    request: Request,
    provider: IdentityProviderDep,
    db: SessionDep,
    settings: SettingsDep,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> Response:
    """Complete the provider round trip, sign the account in and redirect to the profile."""
    failure = _redirect("/login")
    failure.delete_cookie(OAUTH_STATE_COOKIE)

    if error or not code:
        logger.warning("%s callback without a code (error=%r)", provider.config.name, error)
        return failure
    if not security.states_match(request.cookies.get(OAUTH_STATE_COOKIE), state):
        logger.warning("%s callback state mismatch", provider.config.name)
        return failure

    try:
        profile = await provider.authenticate(code)
        user = await run_in_threadpool(identity.resolve_external_user, db, profile)
    except (ExternalIdentityError, DuplicateUsernameError) as err:
        logger.warning("%s login failed: %s", provider.config.name, err)
        return failure

    response = _redirect("/profile")
    response.delete_cookie(OAUTH_STATE_COOKIE)
    _establish_session(response, user, settings)
    return response
