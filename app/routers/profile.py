"""Account profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.dependencies import get_current_account
from app.models.profile import Account, Profile, ProfileUsernameUpdate
from app.routers.errors import service_errors
from app.services.profiles import get_or_create_profile, update_profile_username

router = APIRouter()


@router.get("", response_model=Profile)
async def get_profile(account: Account = Depends(get_current_account)) -> Profile:
    """Return the caller's profile, creating a default one on first visit."""
    with service_errors():
        return get_or_create_profile(account.id, account.email, account.full_name)


@router.put("/username", response_model=Profile)
async def set_username(
    body: ProfileUsernameUpdate,
    account: Account = Depends(get_current_account),
) -> Profile:
    """Set the global username used by social link auto-sync."""
    with service_errors():
        return update_profile_username(account.id, body.username)
