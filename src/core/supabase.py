"""Supabase client construction: admin singleton and per-request scoped clients."""

from functools import lru_cache
from typing import Any

from supabase import Client, create_client
from supabase.lib.client_options import SyncClientOptions
from supabase_auth import SyncMemoryStorage

from src.core.config import get_settings


@lru_cache
def get_supabase_admin_client() -> Client:
    """Get cached Supabase client authenticated with the service role key.

    The service role bypasses row level security, so this client must never
    be handed to request handlers that read user data. It is only used for
    infrastructure checks.

    Returns:
        Client: Supabase client instance.
    """
    settings = get_settings()
    return create_client(
        settings.supabase_url,
        settings.supabase_secret_key,
    )


def create_scoped_client(access_token: str | None = None) -> Client:
    """Create a fresh Supabase client bound to the caller's authorization.

    The client uses the publishable key. When an access token is given, every
    PostgREST request carries it, so the store applies row level security
    for that user. Clients are never shared between requests.

    Args:
        access_token: The caller's verified JWT, or None for anonymous callers.

    Returns:
        Client: Fresh Supabase client instance with isolated session storage.
    """
    settings = get_settings()
    options = SyncClientOptions(
        storage=SyncMemoryStorage(),
        auto_refresh_token=False,
        persist_session=False,
    )
    client = create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
        options=options,
    )
    if access_token:
        client.postgrest.auth(access_token)
    return client


async def check_database_connection() -> dict[str, Any]:
    """Check if database connection is healthy.

    Returns:
        dict: Connection status with 'healthy' boolean and optional 'error' message.
    """
    settings = get_settings()
    try:
        client = get_supabase_admin_client()
        client.table(settings.profiles_table).select("id").limit(1).execute()
        return {"healthy": True}
    except Exception as e:
        return {"healthy": False, "error": str(e)}
