"""Data access helpers for working with user accounts."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from microblog.models.user import User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user accounts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by identifier."""
        return self.session.get(User, user_id)

    def get_by_username(self, username: str) -> User | None:
        """Return the user holding ``username``."""
        return self.session.scalars(select(User).where(User.username == username)).first()

    def get_by_external_id(self, external_id: str) -> User | None:
        """Return the user linked to an external subject id."""
        return self.session.scalars(select(User).where(User.external_id == external_id)).first()

    def create(
        self,
        *,
        username: str,
        password_hash: str | None = None,
        external_id: str | None = None,
        external_username: str | None = None,
    ) -> User:
        """Insert a new account."""
        user = User(
            username=username,
            password_hash=password_hash,
            external_id=external_id,
            external_username=external_username,
        )
        self.session.add(user)
        self.session.flush()
        return user
