"""Account profile service (``profiles`` table).

The profile holds the global username used to auto-sync social links.
Loading a profile that does not exist yet creates a default one.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from app.core.constants import MSG_PROFILE_FAILED, PROFILES_TABLE
from app.core.errors import StoreError
from app.db.supabase import get_supabase
from app.models.profile import Profile

logger = logging.getLogger(__name__)


def get_or_create_profile(
    owner_id: UUID,
    email: str | None = None,
    full_name: str | None = None,
) -> Profile:
    """Return the account's profile, inserting a default row if missing."""
    client = get_supabase()
    try:
        result = (
            client.table(PROFILES_TABLE)
            .select("*")
            .eq("id", str(owner_id))
            .limit(1)
            .execute()
        )
        if result.data:
            return Profile(**result.data[0])

        now = datetime.now(timezone.utc).isoformat()
        created = (
            client.table(PROFILES_TABLE)
            .insert(
                {
                    "id": str(owner_id),
                    "email": email,
                    "full_name": full_name or "",
                    "created_at": now,
                    "updated_at": now,
                }
            )
            .execute()
        )
    except Exception as exc:
        logger.error(
            "profile_load_failed",
            extra={"owner_id": str(owner_id), "error_message": str(exc)},
        )
        raise StoreError(MSG_PROFILE_FAILED) from exc

    if not created.data:
        raise StoreError(MSG_PROFILE_FAILED)
    logger.info("profile_created", extra={"owner_id": str(owner_id)})
    return Profile(**created.data[0])


def update_profile_username(owner_id: UUID, username: str) -> Profile:
    """Set the global username, creating the profile first if needed."""
    get_or_create_profile(owner_id)
    client = get_supabase()
    try:
        result = (
            client.table(PROFILES_TABLE)
            .update(
                {
                    "username": username,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                }
            )
            .eq("id", str(owner_id))
            .execute()
        )
    except Exception as exc:
        logger.error(
            "profile_update_failed",
            extra={"owner_id": str(owner_id), "error_message": str(exc)},
        )
        raise StoreError(MSG_PROFILE_FAILED) from exc

    if not result.data:
        raise StoreError(MSG_PROFILE_FAILED)
    return Profile(**result.data[0])
