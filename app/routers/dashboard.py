"""Dashboard summary endpoint."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from app.dependencies import get_current_owner
from app.models.dashboard import DashboardSummary
from app.routers.errors import service_errors
from app.services.dashboard import get_dashboard_summary

router = APIRouter()


@router.get("/summary", response_model=DashboardSummary)
async def dashboard_summary(owner_id: UUID = Depends(get_current_owner)) -> DashboardSummary:
    """Card, publish and view totals for the caller."""
    with service_errors():
        return get_dashboard_summary(owner_id)
