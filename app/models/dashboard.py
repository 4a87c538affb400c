"""Response models for the dashboard and editor endpoints."""

from uuid import UUID

from pydantic import BaseModel, Field

from app.models.card import CardInput
from app.models.social_link import SocialLinkDraft


class DashboardSummary(BaseModel):
    """Per-owner card totals shown on the dashboard."""
    total_cards: int = 0
    published_cards: int = 0
    draft_cards: int = 0
    total_views: int = 0


class CardEditorState(BaseModel):
    """Everything the card editor screen holds: card fields plus link draft.

    ``card_id`` is None for a card that has not been saved yet.
    """
    card_id: UUID | None = None
    card: CardInput
    links: list[SocialLinkDraft] = Field(default_factory=list)
    is_published: bool = False
    public_url: str | None = None


class EditorLinkUpsert(BaseModel):
    """Add (no index) or replace (index) one draft link in an editor state."""
    state: CardEditorState
    link: SocialLinkDraft
    index: int | None = Field(default=None, ge=0)


class EditorLinkRemove(BaseModel):
    """Remove the draft link at ``index`` from an editor state."""
    state: CardEditorState
    index: int = Field(ge=0)
