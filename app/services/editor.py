"""Card editor controller.

The editor screen's whole state (card fields plus the social link draft) is
one ``CardEditorState``.  This module loads it, applies draft link edits,
and saves it: card first, then the link set.
"""

from __future__ import annotations

import logging
from uuid import UUID

from app.core.constants import MSG_LINKS_SAVE_FAILED
from app.core.errors import PartialSaveError, StoreError, ValidationError
from app.models.dashboard import CardEditorState
from app.models.social_link import SocialLinkDraft
from app.services.cards import public_card_url, require_card, save_card
from app.services.profiles import get_or_create_profile
from app.services.social_links import SocialLinkCollection, list_links, persist_all

logger = logging.getLogger(__name__)


def load_editor(owner_id: UUID, card_id: UUID) -> CardEditorState:
    """Load a saved card and all of its links (inactive included)."""
    card = require_card(card_id, owner_id)
    links = list_links(card.id, include_inactive=True)
    return CardEditorState(
        card_id=card.id,
        card=card.to_input(),
        links=[link.to_draft() for link in links],
        is_published=card.is_published,
        public_url=public_card_url(card.slug),
    )


def save_editor(owner_id: UUID, state: CardEditorState) -> CardEditorState:
    """Save the card, then replace its links, then reload.

    If the card saved but the links did not, ``PartialSaveError`` names the
    saved card; the stored card and links are then out of step.
    """
    card = save_card(owner_id, state.card, state.card_id)
    try:
        persist_all(card.id, state.links)
    except StoreError as exc:
        logger.error(
            "editor_partial_save",
            extra={"card_id": str(card.id), "owner_id": str(owner_id)},
        )
        raise PartialSaveError(card.id, MSG_LINKS_SAVE_FAILED) from exc
    return load_editor(owner_id, card.id)


def upsert_editor_link(
    state: CardEditorState,
    link: SocialLinkDraft,
    index: int | None = None,
) -> CardEditorState:
    collection = SocialLinkCollection(state.links)
    collection.upsert(link, index)
    return state.model_copy(update={"links": collection.links})


def remove_editor_link(state: CardEditorState, index: int) -> CardEditorState:
    collection = SocialLinkCollection(state.links)
    collection.remove(index)
    return state.model_copy(update={"links": collection.links})


def sync_editor_links(owner_id: UUID, state: CardEditorState) -> CardEditorState:
    """Append auto-synced links built from the profile's global username.

    Nothing is persisted.  Raises ``ValidationError`` if the profile has no
    username set.
    """
    profile = get_or_create_profile(owner_id)
    if not profile.username:
        raise ValidationError("Set a profile username before syncing social links")

    collection = SocialLinkCollection(state.links)
    added = collection.auto_sync(profile.username)
    logger.info(
        "editor_links_synced",
        extra={"owner_id": str(owner_id), "added": len(added)},
    )
    return state.model_copy(update={"links": collection.links})
