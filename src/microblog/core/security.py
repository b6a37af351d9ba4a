"""Password hashing and session-token helpers."""
from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from microblog.core.settings import Settings

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Return a salted hash of ``password``."""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check ``password`` against a stored hash.

    Accounts created through the external provider carry no hash and never verify.
    """
    if not password_hash:
        return False
    return pwd_context.verify(password, password_hash)


def create_session_token(user_id: str, settings: Settings) -> str:
    """Create the signed session token identifying ``user_id``."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.session_max_age_minutes)
    to_encode: dict[str, object] = {"sub": user_id, "exp": expire}
    encoded: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded


def decode_session_token(token: str, settings: Settings) -> str | None:
    """Return the user id carried by ``token``, or None if it is invalid or expired."""
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None
    subject = payload.get("sub")
    if not isinstance(subject, str):
        return None
    return subject


def generate_state() -> str:
    """Return an unguessable value for the OAuth ``state`` round trip."""
    return secrets.token_urlsafe(24)


def states_match(expected: str | None, received: str | None) -> bool:
    """Compare OAuth state values in constant time."""
    if not expected or not received:
        return False
    return secrets.compare_digest(expected, received)
