"""User-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ExternalProfile(BaseModel):
    """Identity returned by the external provider after a code exchange."""

    subject_id: str = Field(..., description="Stable subject id issued by the provider")
    username: str = Field(..., description="Provider display/login name")


class UserResponse(BaseModel):
    """Public view of an account, as rendered on the profile page."""

    id: str
    username: str
    external_username: str | None = None

    model_config = ConfigDict(from_attributes=True)
