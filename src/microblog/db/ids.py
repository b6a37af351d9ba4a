# src/microblog/db/ids.py
"""Store-assigned identifiers."""

import uuid

from microblog.core.errors import InvalidIdentifierError


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


def parse_identifier(value: str) -> str:
    """Normalize ``value`` to the stored identifier form.

    Raises:
        InvalidIdentifierError: If ``value`` is not a well-formed key.
    """
    try:
        return uuid.UUID(value).hex
    except (ValueError, AttributeError, TypeError) as err:
        raise InvalidIdentifierError() from err
