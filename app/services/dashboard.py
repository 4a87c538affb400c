"""Dashboard totals computed from the owner's stored cards."""

from __future__ import annotations

import logging
from uuid import UUID

from app.core.constants import CARDS_TABLE, MSG_LOAD_FAILED
from app.core.errors import StoreError
from app.db.supabase import get_supabase
from app.models.dashboard import DashboardSummary

logger = logging.getLogger(__name__)


def get_dashboard_summary(owner_id: UUID) -> DashboardSummary:
    """Count cards, published cards and drafts, and sum their views."""
    client = get_supabase()
    try:
        result = (
            client.table(CARDS_TABLE)
            .select("is_published, view_count")
            .eq("user_id", str(owner_id))
            .execute()
        )
    except Exception as exc:
        logger.error(
            "dashboard_summary_failed",
            extra={"owner_id": str(owner_id), "error_message": str(exc)},
        )
        raise StoreError(MSG_LOAD_FAILED) from exc

    rows = result.data or []
    published = sum(1 for row in rows if row.get("is_published"))
    return DashboardSummary(
        total_cards=len(rows),
        published_cards=published,
        draft_cards=len(rows) - published,
        total_views=sum(int(row.get("view_count") or 0) for row in rows),
    )
