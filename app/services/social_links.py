"""Social links of a card.

Two halves:

* ``SocialLinkCollection`` -- the in-memory, ordered draft the editor works
  on (add/update/remove entries, auto-sync from a global username).  Pure;
  no store access.
* ``list_links`` / ``persist_all`` -- reads and whole-set replacement
  against the ``social_links`` table.

``persist_all`` inserts the new set before deleting the old rows by id, so a
failed insert leaves the previous links in place.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from urllib.parse import quote
from uuid import UUID

from app.core.constants import (
    MSG_LINKS_LOAD_FAILED,
    MSG_LINKS_SAVE_FAILED,
    PLATFORM_URL_TEMPLATES,
    SOCIAL_LINKS_TABLE,
)
from app.core.errors import StoreError
from app.db.supabase import get_supabase
from app.models.enums import SocialPlatform
from app.models.social_link import SocialLink, SocialLinkCreate, SocialLinkDraft

logger = logging.getLogger(__name__)


def normalize_username(username: str) -> str:
    """Trim whitespace and a leading ``@``."""
    return username.strip().lstrip("@").strip()


def build_platform_url(
    platform: SocialPlatform | str | None,
    username: str,
) -> str | None:
    """Return the profile URL for *username* on *platform*.

    None when the platform has no URL template (``website``, ``custom``) or
    the username is blank.
    """
    if platform is None:
        return None
    template = PLATFORM_URL_TEMPLATES.get(SocialPlatform(platform).value)
    handle = normalize_username(username)
    if template is None or not handle:
        return None
    return template.format(username=quote(handle, safe=""))


def syncable_platforms() -> list[SocialPlatform]:
    """Platforms whose URL can be derived from a username alone."""
    return [p for p in SocialPlatform if p.value in PLATFORM_URL_TEMPLATES]


class SocialLinkCollection:
    """Ordered draft of a card's links, as edited before saving.

    Entries keep whatever ``display_order`` they were given; orders are only
    made dense by ``persistable()``.
    """

    def __init__(self, links: Iterable[SocialLinkDraft] = ()) -> None:
        self.links: list[SocialLinkDraft] = [link.model_copy() for link in links]

    def __len__(self) -> int:
        return len(self.links)

    def __iter__(self) -> Iterator[SocialLinkDraft]:
        return iter(self.links)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.links):
            raise IndexError(f"No social link at position {index}")

    def upsert(self, link: SocialLinkDraft, index: int | None = None) -> SocialLinkDraft:
        """Append *link*, or replace the entry at *index* with it.

        When the platform or username differs from the entry being replaced
        (always the case for a new entry) the URL is regenerated for
        platforms that support it.  For the others the URL is kept only if
        the caller set it explicitly, otherwise it is cleared.
        """
        previous: SocialLinkDraft | None = None
        if index is not None:
            self._check_index(index)
            previous = self.links[index]

        entry = link.model_copy()
        identity_changed = (
            previous is None
            or previous.platform != entry.platform
            or previous.username != entry.username
        )
        if identity_changed:
            derived = build_platform_url(entry.platform, entry.username)
            if derived is not None:
                entry.url = derived
            elif previous is not None and entry.url == previous.url:
                entry.url = None

        if index is None:
            entry.display_order = max(
                (existing.display_order for existing in self.links), default=-1
            ) + 1
            self.links.append(entry)
        else:
            self.links[index] = entry
        return entry

    def remove(self, index: int) -> SocialLinkDraft:
        """Remove and return the entry at *index*; other orders are untouched."""
        self._check_index(index)
        return self.links.pop(index)

    def auto_sync(self, username: str) -> list[SocialLinkDraft]:
        """Append one auto-synced entry per syncable platform.

        Existing entries for the same platform are not checked, so running
        this twice adds every platform twice.
        """
        handle = normalize_username(username)
        added: list[SocialLinkDraft] = []
        for platform in syncable_platforms():
            added.append(
                self.upsert(
                    SocialLinkDraft(
                        platform=platform,
                        username=handle,
                        is_auto_synced=True,
                    )
                )
            )
        return added

    def persistable(self) -> list[SocialLinkDraft]:
        """Entries with a platform and a non-empty URL, orders made dense."""
        kept = [
            link
            for link in self.links
            if link.platform is not None and link.url and link.url.strip()
        ]
        return [
            link.model_copy(update={"display_order": position})
            for position, link in enumerate(kept)
        ]


# ---------------------------------------------------------------------------
# Store access
# ---------------------------------------------------------------------------

def list_links(card_id: UUID, include_inactive: bool = False) -> list[SocialLink]:
    """Return the card's links ordered by ``display_order`` ascending.

    Only active links unless *include_inactive* (the editor needs all of
    them so a save does not drop the inactive ones).
    """
    client = get_supabase()
    try:
        query = client.table(SOCIAL_LINKS_TABLE).select("*").eq("card_id", str(card_id))
        if not include_inactive:
            query = query.eq("is_active", True)
        result = query.order("display_order").execute()
    except Exception as exc:
        logger.error(
            "social_links_list_failed",
            extra={"card_id": str(card_id), "error_message": str(exc)},
        )
        raise StoreError(MSG_LINKS_LOAD_FAILED) from exc

    return [SocialLink(**row) for row in result.data or []]


def persist_all(
    card_id: UUID,
    links: SocialLinkCollection | Iterable[SocialLinkDraft],
) -> list[SocialLink]:
    """Replace every stored link of the card with the persistable drafts.

    Steps: read the ids currently stored, insert the new rows, delete the
    old ids.  A failed insert leaves the old set untouched; a failed delete
    leaves old and new rows side by side.  Either way ``StoreError`` is
    raised.
    """
    collection = links if isinstance(links, SocialLinkCollection) else SocialLinkCollection(links)
    rows = [
        SocialLinkCreate(
            card_id=card_id,
            platform=draft.platform,
            username=normalize_username(draft.username),
            url=draft.url,
            display_order=draft.display_order,
            is_active=draft.is_active,
            is_auto_synced=draft.is_auto_synced,
        ).model_dump(mode="json")
        for draft in collection.persistable()
    ]

    client = get_supabase()
    try:
        existing = (
            client.table(SOCIAL_LINKS_TABLE)
            .select("id")
            .eq("card_id", str(card_id))
            .execute()
        )
    except Exception as exc:
        logger.error(
            "social_links_read_failed",
            extra={"card_id": str(card_id), "error_message": str(exc)},
        )
        raise StoreError(MSG_LINKS_SAVE_FAILED) from exc
    old_ids = [row["id"] for row in existing.data or []]

    inserted: list[dict] = []
    if rows:
        try:
            result = client.table(SOCIAL_LINKS_TABLE).insert(rows).execute()
        except Exception as exc:
            logger.error(
                "social_links_insert_failed",
                extra={
                    "card_id": str(card_id),
                    "links": len(rows),
                    "error_message": str(exc),
                },
            )
            raise StoreError(MSG_LINKS_SAVE_FAILED) from exc
        inserted = result.data or []

    if old_ids:
        try:
            client.table(SOCIAL_LINKS_TABLE).delete().in_("id", old_ids).execute()
        except Exception as exc:
            logger.error(
                "social_links_cleanup_failed",
                extra={
                    "card_id": str(card_id),
                    "stale_ids": old_ids,
                    "error_message": str(exc),
                },
            )
            raise StoreError(MSG_LINKS_SAVE_FAILED) from exc

    logger.info(
        "social_links_persisted",
        extra={"card_id": str(card_id), "count": len(inserted), "replaced": len(old_ids)},
    )
    return [SocialLink(**row) for row in inserted]
