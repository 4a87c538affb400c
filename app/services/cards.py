"""Card repository backed by the ``business_cards`` table.

Translates editor payloads to and from stored rows.  All store failures are
logged with structured ``extra`` and re-raised as ``StoreError`` carrying a
generic message; nothing is retried and nothing is rolled back.

Ownership is enforced by filtering every owner-facing query on ``user_id``.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from app.core.config import settings
from app.core.constants import (
    CARDS_TABLE,
    FALLBACK_SLUG,
    MSG_DELETE_FAILED,
    MSG_LOAD_FAILED,
    MSG_PUBLISH_FAILED,
    MSG_SAVE_FAILED,
    SOCIAL_LINKS_TABLE,
)
from app.core.errors import CardNotFoundError, StoreError, ValidationError
from app.db.supabase import get_supabase
from app.models.card import Card, CardFetchResult, CardInput, CardResponse
from app.models.enums import FetchStatus

logger = logging.getLogger(__name__)

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Slugs
# ---------------------------------------------------------------------------

def generate_slug(title: str) -> str:
    """Derive a URL-safe slug from a card title.

    Lowercases, collapses every run of characters outside ``[a-z0-9]`` into
    a single hyphen and trims hyphens from both ends::

        >>> generate_slug("Jane O'Brien & Co.")
        'jane-o-brien-co'

    May return an empty string (e.g. for ``"!!!"``).
    """
    return _NON_ALNUM_RUN.sub("-", title.lower()).strip("-")


def _slug_owner(slug: str) -> str | None:
    """Return the id of the card currently holding *slug*, if any."""
    client = get_supabase()
    result = (
        client.table(CARDS_TABLE)
        .select("id")
        .eq("slug", slug)
        .limit(1)
        .execute()
    )
    if not result.data:
        return None
    return str(result.data[0]["id"])


def _unique_slug(base: str) -> str:
    """Return *base*, or *base* suffixed ``-2``, ``-3``... until unused."""
    base = base or FALLBACK_SLUG
    candidate = base
    suffix = 2
    while _slug_owner(candidate) is not None:
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


def public_card_url(slug: str | None) -> str | None:
    """Public page URL for a card, or None while it has no slug."""
    if not slug:
        return None
    return f"{settings.PUBLIC_CARD_BASE_URL.rstrip('/')}/c/{slug}"


def to_response(card: Card) -> CardResponse:
    return CardResponse(**card.model_dump(), public_url=public_card_url(card.slug))


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def fetch_cards_for_owner(owner_id: UUID) -> list[Card]:
    """Return every card of the account, most recently updated first."""
    client = get_supabase()
    try:
        result = (
            client.table(CARDS_TABLE)
            .select("*")
            .eq("user_id", str(owner_id))
            .order("updated_at", desc=True)
            .execute()
        )
    except Exception as exc:
        logger.error(
            "cards_list_failed",
            extra={"owner_id": str(owner_id), "error_message": str(exc)},
        )
        raise StoreError(MSG_LOAD_FAILED) from exc

    return [Card(**row) for row in result.data or []]


def fetch_card(card_id: UUID, owner_id: UUID) -> CardFetchResult:
    """Fetch one card scoped to its owner.

    Never raises for store problems: the outcome is reported as
    ``found`` / ``not_found`` / ``failed`` so each caller picks its policy.
    """
    client = get_supabase()
    try:
        result = (
            client.table(CARDS_TABLE)
            .select("*")
            .eq("id", str(card_id))
            .eq("user_id", str(owner_id))
            .limit(1)
            .execute()
        )
    except Exception as exc:
        logger.error(
            "card_fetch_failed",
            extra={
                "card_id": str(card_id),
                "owner_id": str(owner_id),
                "error_message": str(exc),
            },
        )
        return CardFetchResult.failed(str(exc))

    if not result.data:
        return CardFetchResult.not_found()
    return CardFetchResult.found(Card(**result.data[0]))


def require_card(card_id: UUID, owner_id: UUID) -> Card:
    """Fetch a card, treating "not found" as an error.

    Raises ``CardNotFoundError`` or ``StoreError``.
    """
    outcome = fetch_card(card_id, owner_id)
    if outcome.status == FetchStatus.not_found:
        raise CardNotFoundError(card_id)
    if outcome.status == FetchStatus.failed or outcome.card is None:
        raise StoreError(MSG_LOAD_FAILED)
    return outcome.card


def fetch_published_card(slug: str) -> CardFetchResult:
    """Resolve a published card by slug for the public ``/c/{slug}`` page."""
    client = get_supabase()
    try:
        result = (
            client.table(CARDS_TABLE)
            .select("*")
            .eq("slug", slug)
            .eq("is_published", True)
            .limit(1)
            .execute()
        )
    except Exception as exc:
        logger.error(
            "public_card_fetch_failed",
            extra={"slug": slug, "error_message": str(exc)},
        )
        return CardFetchResult.failed(str(exc))

    if not result.data:
        return CardFetchResult.not_found()
    return CardFetchResult.found(Card(**result.data[0]))


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def _card_payload(fields: CardInput) -> dict[str, Any]:
    payload = fields.model_dump(mode="json")
    if fields.slug is None:
        payload.pop("slug")
    return payload


def _check_explicit_slug(slug: str, card_id: UUID | None) -> None:
    holder = _slug_owner(slug)
    if holder is not None and holder != str(card_id):
        raise ValidationError(f"Slug '{slug}' is already in use")


def save_card(
    owner_id: UUID,
    fields: CardInput,
    card_id: UUID | None = None,
) -> Card:
    """Create or update a card.

    Without *card_id* a new row is inserted with default publish state,
    counters and (when no slug was given) a unique slug generated from the
    title.  With *card_id* the owner's existing row is updated in place and
    no row is ever inserted.  There is no concurrency token: the last write
    wins.

    Raises ``ValidationError`` for a slug taken by another card,
    ``CardNotFoundError`` when updating a card the owner does not have, and
    ``StoreError`` for any store failure.
    """
    client = get_supabase()
    payload = _card_payload(fields)

    try:
        if fields.slug is not None:
            _check_explicit_slug(fields.slug, card_id)

        if card_id is None:
            if fields.slug is None:
                payload["slug"] = _unique_slug(generate_slug(fields.title))
            now = _now_iso()
            payload.update(
                {
                    "user_id": str(owner_id),
                    "is_published": False,
                    "view_count": 0,
                    "created_at": now,
                    "updated_at": now,
                }
            )
            result = client.table(CARDS_TABLE).insert(payload).execute()
        else:
            payload["updated_at"] = _now_iso()
            result = (
                client.table(CARDS_TABLE)
                .update(payload)
                .eq("id", str(card_id))
                .eq("user_id", str(owner_id))
                .execute()
            )
    except ValidationError:
        raise
    except Exception as exc:
        logger.error(
            "card_save_failed",
            extra={
                "card_id": str(card_id) if card_id else None,
                "owner_id": str(owner_id),
                "error_message": str(exc),
            },
        )
        raise StoreError(MSG_SAVE_FAILED) from exc

    if not result.data:
        if card_id is not None:
            raise CardNotFoundError(card_id)
        logger.error("card_insert_returned_no_row", extra={"owner_id": str(owner_id)})
        raise StoreError(MSG_SAVE_FAILED)

    card = Card(**result.data[0])
    logger.info(
        "card_saved",
        extra={
            "card_id": str(card.id),
            "owner_id": str(owner_id),
            "is_new": card_id is None,
        },
    )
    return card


def delete_card(card_id: UUID, owner_id: UUID) -> None:
    """Delete a card and its social links.

    Links go first; if the card delete then fails the card survives
    without links.
    """
    require_card(card_id, owner_id)
    client = get_supabase()

    try:
        client.table(SOCIAL_LINKS_TABLE).delete().eq("card_id", str(card_id)).execute()
        result = (
            client.table(CARDS_TABLE)
            .delete()
            .eq("id", str(card_id))
            .eq("user_id", str(owner_id))
            .execute()
        )
    except Exception as exc:
        logger.error(
            "card_delete_failed",
            extra={
                "card_id": str(card_id),
                "owner_id": str(owner_id),
                "error_message": str(exc),
            },
        )
        raise StoreError(MSG_DELETE_FAILED) from exc

    if not result.data:
        raise CardNotFoundError(card_id)

    logger.info("card_deleted", extra={"card_id": str(card_id), "owner_id": str(owner_id)})


def toggle_publish(card_id: UUID, owner_id: UUID) -> Card:
    """Flip ``is_published`` and stamp ``updated_at``."""
    card = require_card(card_id, owner_id)
    client = get_supabase()

    try:
        result = (
            client.table(CARDS_TABLE)
            .update({"is_published": not card.is_published, "updated_at": _now_iso()})
            .eq("id", str(card_id))
            .eq("user_id", str(owner_id))
            .execute()
        )
    except Exception as exc:
        logger.error(
            "card_publish_toggle_failed",
            extra={"card_id": str(card_id), "error_message": str(exc)},
        )
        raise StoreError(MSG_PUBLISH_FAILED) from exc

    if not result.data:
        raise CardNotFoundError(card_id)
    return Card(**result.data[0])


def record_card_view(card_id: UUID) -> int:
    """Increment ``view_count`` and return the new value.

    Read-then-write: concurrent views can be lost.
    """
    client = get_supabase()
    try:
        current = (
            client.table(CARDS_TABLE)
            .select("view_count")
            .eq("id", str(card_id))
            .limit(1)
            .execute()
        )
        count = (current.data[0].get("view_count") or 0) if current.data else 0
        client.table(CARDS_TABLE).update({"view_count": count + 1}).eq(
            "id", str(card_id)
        ).execute()
    except Exception as exc:
        logger.warning(
            "card_view_record_failed",
            extra={"card_id": str(card_id), "error_message": str(exc)},
        )
        raise StoreError(MSG_LOAD_FAILED) from exc
    return count + 1
