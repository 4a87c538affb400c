"""Card CRUD endpoints, scoped to the authenticated account."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response

from app.dependencies import get_current_owner
from app.models.card import CardInput, CardResponse
from app.models.enums import FetchStatus
from app.routers.errors import service_errors
from app.services.cards import (
    delete_card,
    fetch_card,
    fetch_cards_for_owner,
    save_card,
    to_response,
    toggle_publish,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[CardResponse])
async def list_cards(owner_id: UUID = Depends(get_current_owner)) -> list[CardResponse]:
    """Return the caller's cards, most recently updated first."""
    with service_errors():
        cards = fetch_cards_for_owner(owner_id)
    return [to_response(card) for card in cards]


@router.post("", response_model=CardResponse, status_code=201)
async def create_card(
    fields: CardInput,
    owner_id: UUID = Depends(get_current_owner),
) -> CardResponse:
    """Create a card; a slug is generated from the title when omitted."""
    with service_errors():
        card = save_card(owner_id, fields)
    return to_response(card)


@router.get("/{card_id}", response_model=CardResponse)
async def get_card(
    card_id: UUID,
    owner_id: UUID = Depends(get_current_owner),
) -> CardResponse:
    """Return one card: 404 when missing, 502 when the store failed."""
    outcome = fetch_card(card_id, owner_id)
    if outcome.status == FetchStatus.not_found:
        raise HTTPException(status_code=404, detail="Card not found")
    if outcome.status == FetchStatus.failed or outcome.card is None:
        raise HTTPException(status_code=502, detail="Failed to load card")
    return to_response(outcome.card)


@router.put("/{card_id}", response_model=CardResponse)
async def update_card(
    card_id: UUID,
    fields: CardInput,
    owner_id: UUID = Depends(get_current_owner),
) -> CardResponse:
    """Overwrite the card's editable fields (last write wins)."""
    with service_errors():
        card = save_card(owner_id, fields, card_id)
    return to_response(card)


@router.delete("/{card_id}", status_code=204)
async def remove_card(
    card_id: UUID,
    owner_id: UUID = Depends(get_current_owner),
) -> Response:
    """Delete the card together with its social links."""
    with service_errors():
        delete_card(card_id, owner_id)
    return Response(status_code=204)


@router.post("/{card_id}/publish", response_model=CardResponse)
async def publish_toggle(
    card_id: UUID,
    owner_id: UUID = Depends(get_current_owner),
) -> CardResponse:
    """Flip the card between published and draft."""
    with service_errors():
        card = toggle_publish(card_id, owner_id)
    return to_response(card)
