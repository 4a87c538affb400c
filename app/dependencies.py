"""FastAPI dependencies for route handlers."""

import logging
from uuid import UUID

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.db.supabase import get_supabase
from app.models.profile import Account

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


def get_current_account(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Account:
    """Resolve the caller from a Supabase Auth access token."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        response = get_supabase().auth.get_user(credentials.credentials)
    except Exception:
        logger.warning("auth_token_rejected", exc_info=True)
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    user = getattr(response, "user", None)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    metadata = user.user_metadata or {}
    return Account(id=user.id, email=user.email, full_name=metadata.get("full_name"))


def get_current_owner(account: Account = Depends(get_current_account)) -> UUID:
    """Account id used to scope every card query."""
    return account.id
