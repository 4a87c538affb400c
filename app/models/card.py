"""Pydantic models for the ``business_cards`` table.

``theme`` and ``layout`` are stored as JSONB columns.  ``id``,
``created_at`` and ``view_count`` are managed by the database and are
read-only from the API's point of view.
"""

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.constants import DEFAULT_FONT, DEFAULT_THEME, SLUG_PATTERN
from app.models.enums import CardShape, FetchStatus, LayoutAlignment, LayoutStyle

_SLUG_RE = re.compile(SLUG_PATTERN)


class CardTheme(BaseModel):
    """Named color set applied to a card."""
    name: str = DEFAULT_THEME["name"]
    primary: str = DEFAULT_THEME["primary"]
    secondary: str = DEFAULT_THEME["secondary"]
    background: str = DEFAULT_THEME["background"]
    text: str = DEFAULT_THEME["text"]


class CardLayout(BaseModel):
    """Layout style, alignment and font."""
    style: LayoutStyle = LayoutStyle.modern
    alignment: LayoutAlignment = LayoutAlignment.center
    font: str = DEFAULT_FONT


class CardInput(BaseModel):
    """Editable card fields, as submitted by the editor form."""
    title: str
    slug: str | None = None
    company: str | None = None
    position: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    phone: str | None = None
    whatsapp: str | None = None
    email: str | None = None
    website: str | None = None
    address: str | None = None
    map_link: str | None = None
    theme: CardTheme = Field(default_factory=CardTheme)
    shape: CardShape = CardShape.rounded
    layout: CardLayout = Field(default_factory=CardLayout)

    @field_validator("title")
    @classmethod
    def _title_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title is required")
        return value

    @field_validator("slug")
    @classmethod
    def _slug_url_safe(cls, value: str | None) -> str | None:
        if value is None or value == "":
            return None
        if not _SLUG_RE.fullmatch(value):
            raise ValueError(
                "slug must be lowercase letters and digits separated by single hyphens"
            )
        return value


class Card(BaseModel):
    """Full ``business_cards`` record returned from the database."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    slug: str | None = None
    company: str | None = None
    position: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    phone: str | None = None
    whatsapp: str | None = None
    email: str | None = None
    website: str | None = None
    address: str | None = None
    map_link: str | None = None
    theme: CardTheme = Field(default_factory=CardTheme)
    shape: CardShape = CardShape.rounded
    layout: CardLayout = Field(default_factory=CardLayout)
    is_published: bool = False
    view_count: int = 0
    created_at: datetime
    updated_at: datetime

    def to_input(self) -> CardInput:
        """Return the editable subset of this card."""
        return CardInput.model_validate(
            self.model_dump(include=set(CardInput.model_fields))
        )


class CardResponse(Card):
    """Card as returned by the API, with the public page URL attached."""
    public_url: str | None = None


class CardFetchResult(BaseModel):
    """Single-row fetch outcome: found, not found, or failed.

    Callers decide per call site how to treat ``not_found``.
    """
    status: FetchStatus
    card: Card | None = None
    reason: str | None = None

    @classmethod
    def found(cls, card: Card) -> "CardFetchResult":
        return cls(status=FetchStatus.found, card=card)

    @classmethod
    def not_found(cls) -> "CardFetchResult":
        return cls(status=FetchStatus.not_found)

    @classmethod
    def failed(cls, reason: str) -> "CardFetchResult":
        return cls(status=FetchStatus.failed, reason=reason)
