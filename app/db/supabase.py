"""Process-wide Supabase client.

Every service goes through ``get_supabase()``; tests patch it per module
(``app.services.cards.get_supabase`` and friends).
"""

from supabase import Client, create_client

from app.core.config import settings

_client: Client | None = None


def get_supabase() -> Client:
    """Return the shared Supabase client, creating it on first use."""
    global _client
    if _client is None:
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    return _client


def reset_supabase() -> None:
    """Drop the cached client so the next call builds a fresh one."""
    global _client
    _client = None
