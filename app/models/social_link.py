"""Pydantic models for the ``social_links`` table and the editor draft."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.models.enums import SocialPlatform


class SocialLinkDraft(BaseModel):
    """One entry of the in-memory link collection being edited.

    ``platform`` may be unset while the user is still filling the row in;
    such entries are dropped on persist.
    """
    platform: SocialPlatform | None = None
    username: str = ""
    url: str | None = None
    display_order: int = 0
    is_active: bool = True
    is_auto_synced: bool = False


class SocialLinkCreate(BaseModel):
    """Payload for inserting a social link row."""
    card_id: UUID
    platform: SocialPlatform
    username: str = ""
    url: str
    display_order: int
    is_active: bool = True
    is_auto_synced: bool = False


class SocialLink(BaseModel):
    """Full ``social_links`` record returned from the database."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    card_id: UUID
    platform: SocialPlatform
    username: str = ""
    url: str
    display_order: int = 0
    is_active: bool = True
    is_auto_synced: bool = False
    created_at: datetime

    def to_draft(self) -> SocialLinkDraft:
        return SocialLinkDraft(
            platform=self.platform,
            username=self.username,
            url=self.url,
            display_order=self.display_order,
            is_active=self.is_active,
            is_auto_synced=self.is_auto_synced,
        )


class SocialLinksReplace(BaseModel):
    """Request body for replacing a card's whole link set."""
    links: list[SocialLinkDraft] = []
