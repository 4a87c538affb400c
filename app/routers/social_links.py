"""Social link endpoints for one card."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from app.dependencies import get_current_owner
from app.models.social_link import SocialLink, SocialLinksReplace
from app.routers.errors import service_errors
from app.services.cards import require_card
from app.services.social_links import list_links, persist_all

router = APIRouter()


@router.get("/{card_id}/links", response_model=list[SocialLink])
async def get_links(
    card_id: UUID,
    owner_id: UUID = Depends(get_current_owner),
) -> list[SocialLink]:
    """Active links of the card in display order."""
    with service_errors():
        require_card(card_id, owner_id)
        return list_links(card_id)


@router.put("/{card_id}/links", response_model=list[SocialLink])
async def replace_links(
    card_id: UUID,
    body: SocialLinksReplace,
    owner_id: UUID = Depends(get_current_owner),
) -> list[SocialLink]:
    """Replace the card's whole link set with the submitted draft.

    Entries without a platform or URL are dropped; display orders are
    renumbered 0..n-1 in submitted order.
    """
    with service_errors():
        require_card(card_id, owner_id)
        return persist_all(card_id, body.links)
