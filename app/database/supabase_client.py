from typing import Callable
from supabase import create_client, Client
from supabase.client import ClientOptions
from supabase_auth import SyncSupportedStorage
from app.config import settings

# PostgREST error code returned by .single() when no row matches
NO_ROWS_FOUND = "PGRST116"


class SupabaseClient:
    _client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(
                settings.supabase_url,
                settings.supabase_key,
                options=ClientOptions(flow_type=settings.auth_flow_type),
            )
        return cls._client


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def create_flow_client(storage: SyncSupportedStorage) -> Client:
    """Short-lived client for one auth flow (login, code exchange, refresh).

    Sessions and PKCE verifiers land in `storage` and are dropped with the client;
    the shared client from get_supabase() never holds a user session.
    """
    return create_client(
        settings.supabase_url,
        settings.supabase_key,
        options=ClientOptions(
            flow_type=settings.auth_flow_type,
            storage=storage,
            auto_refresh_token=False,
            persist_session=False,
        ),
    )


def get_flow_client_factory() -> Callable[[SyncSupportedStorage], Client]:
    return create_flow_client


def is_no_rows_error(error: Exception) -> bool:
    """True when a PostgREST error means .single() matched nothing."""
    return getattr(error, "code", None) == NO_ROWS_FOUND
