"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every JSON API failure."""

    error: str = Field(..., description="Human-readable failure message")
