"""Account creation, credential verification and session resolution."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from microblog.core import security
from microblog.core.errors import AuthenticationError, DuplicateUsernameError
from microblog.core.settings import Settings
from microblog.models.user import User
from microblog.repositories.user_repo import UserRepository
from microblog.schemas.user import ExternalProfile

__all__ = [
    "register_local_user",
    "authenticate_local_user",
    "resolve_external_user",
    "resolve_session_user",
]

logger = logging.getLogger(__name__)


def _create_user(
    db: Session,
    *,
    username: str,
    password_hash: str | None = None,
    external_id: str | None = None,
    external_username: str | None = None,
) -> User:
    repo = UserRepository(db)
    if repo.get_by_username(username) is not None:
        raise DuplicateUsernameError()
    try:
        user = repo.create(
            username=username,
            password_hash=password_hash,
            external_id=external_id,
            external_username=external_username,
        )
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise DuplicateUsernameError() from err
    db.refresh(user)
    return user


def register_local_user(db: Session, username: str, password: str) -> User:
    """Create a local account with a hashed password.

    Raises:
        DuplicateUsernameError: If ``username`` is already taken.
    """
    user = _create_user(
        db,
        username=username,
        password_hash=security.hash_password(password),
    )
    logger.info("Registered local user %s", user.id)
    return user


def authenticate_local_user(db: Session, username: str, password: str) -> User:
    """Return the user whose credentials match.

    Raises:
        AuthenticationError: If the username is unknown or the password does not verify.
    """
    user = UserRepository(db).get_by_username(username)
    if user is None or not security.verify_password(password, user.password_hash):
        raise AuthenticationError()
    return user


def resolve_external_user(db: Session, profile: ExternalProfile) -> User:
    """Return the account linked to an external identity, creating it on first login.

    An existing local account with the same username is never merged; the
    insert fails with :class:`DuplicateUsernameError` instead.
    """
    user = UserRepository(db).get_by_external_id(profile.subject_id)
    if user is not None:
        return user

    user = _create_user(
        db,
        username=profile.username,
        external_id=profile.subject_id,
        external_username=profile.username,
    )
    logger.info("Created user %s for external subject %s", user.id, profile.subject_id)
    return user


def resolve_session_user(db: Session, token: str | None, settings: Settings) -> User | None:
    """Resolve a session token to the full user record, or None."""
    if not token:
        return None
    user_id = security.decode_session_token(token, settings)
    if user_id is None:
        return None
    return UserRepository(db).get_by_id(user_id)
