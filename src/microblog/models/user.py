# src/microblog/models/user.py
"""SQLAlchemy model for user accounts."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from microblog.db.ids import new_id
from microblog.db.session import Base


class User(Base):
    """Local or externally-authenticated account.

    Local accounts carry a password hash; accounts created on first external
    login carry the provider's subject id instead.
    """

    __tablename__ = "user_account"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String(150), unique=True, nullable=False)
    password_hash: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Stable subject id issued by the external identity provider.
    external_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    external_username: Mapped[str | None] = mapped_column(String(255), nullable=True)
