"""Error taxonomy and the single error-to-status mapping used by the API."""

from __future__ import annotations

from fastapi import status
from fastapi.exceptions import RequestValidationError

VALIDATION_STATUS = 422


class MicroblogError(RuntimeError):
    """Base exception for failures surfaced to API callers.

    Subclasses pin the HTTP status they translate to.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class NotFoundError(MicroblogError):
    """Raised when a record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidIdentifierError(NotFoundError):
    """Raised when an identifier is not a well-formed store key."""

    default_message = "Nothing found by this ID."


class DuplicateUsernameError(MicroblogError):
    """Raised when a username is already taken."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Username is already taken"


class AuthenticationError(MicroblogError):
    """Raised when a credential pair does not verify."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password"


class ExternalIdentityError(MicroblogError):
    """Raised when the external identity provider exchange fails."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "External identity provider request failed"


def error_status(exc: BaseException) -> int:
    """Map an exception to the HTTP status returned to the caller."""
    if isinstance(exc, MicroblogError):
        return exc.status_code
    if isinstance(exc, RequestValidationError):
        return VALIDATION_STATUS
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_message(exc: BaseException) -> str:
    """Return the message placed in the ``{"error": ...}`` body."""
    if isinstance(exc, MicroblogError):
        return exc.message
    if isinstance(exc, RequestValidationError):
        return _describe_validation(exc)
    return str(exc) or MicroblogError.default_message


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in {"body", "query", "path"}:
            loc = loc[1:]
        msg = err.get("msg", "Invalid value")
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"
