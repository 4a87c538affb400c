"""Pydantic models for the ``profiles`` table.

``id`` equals the Supabase Auth user id of the account.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from app.services.social_links import normalize_username


class Profile(BaseModel):
    """Full profile record returned from the database."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    full_name: str | None = None
    email: str | None = None
    username: str | None = None
    created_at: datetime
    updated_at: datetime


class ProfileUsernameUpdate(BaseModel):
    """Payload for setting the global username used by link auto-sync."""
    username: str

    @field_validator("username")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = normalize_username(value)
        if not value:
            raise ValueError("username is required")
        return value


class Account(BaseModel):
    """Identity of the caller, resolved from the Supabase access token."""
    id: UUID
    email: str | None = None
    full_name: str | None = None
