"""Public, unauthenticated card page data (``/c/{slug}``)."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from app.core.errors import StoreError
from app.models.enums import FetchStatus
from app.services.cards import fetch_published_card, record_card_view, to_response
from app.services.social_links import list_links

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/c/{slug}")
async def public_card(slug: str) -> dict[str, Any]:
    """Return a published card with its active links and count the view.

    Unpublished and unknown slugs both yield 404.  A failure to count the
    view is logged and does not fail the request.
    """
    outcome = fetch_published_card(slug)
    if outcome.status == FetchStatus.not_found:
        raise HTTPException(status_code=404, detail="Card not found")
    if outcome.status == FetchStatus.failed or outcome.card is None:
        raise HTTPException(status_code=502, detail="Failed to load card")

    card = outcome.card
    try:
        links = list_links(card.id)
    except StoreError as exc:
        raise HTTPException(status_code=502, detail=exc.user_message)

    try:
        card.view_count = record_card_view(card.id)
    except StoreError:
        logger.warning("public_card_view_not_counted", extra={"card_id": str(card.id)})

    return {
        "card": to_response(card).model_dump(mode="json", exclude={"user_id"}),
        "links": [link.model_dump(mode="json") for link in links],
    }
