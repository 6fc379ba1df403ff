"""
db.py — Process-wide Supabase clients, one per key role.

Reads (directory, analytics) use the anon key so row-level security
applies. API writes and bulk imports use the service key.

Usage:
    from htw_shared.db import get_supabase_client

    client = get_supabase_client(service_role=True)

Application code takes a DataStore instead of a raw client; see
htw_shared.datastore.get_datastore.
"""

from __future__ import annotations

import threading

import structlog
from supabase import Client, create_client

from htw_shared.config import settings

logger = structlog.get_logger(__name__)

_lock = threading.Lock()
_clients: dict[str, Client] = {}

_KEY_SETTINGS = {
    "anon": ("supabase_anon_key", "SUPABASE_ANON_KEY"),
    "service_role": ("supabase_service_key", "SUPABASE_SERVICE_KEY"),
}


def get_supabase_client(*, service_role: bool = False) -> Client:
    """
    Return the shared client for the requested role, creating it on first use.

    Raises:
        RuntimeError: the key for that role is not configured.
    """
    role = "service_role" if service_role else "anon"
    with _lock:
        client = _clients.get(role)
        if client is None:
            attr, env_name = _KEY_SETTINGS[role]
            key = getattr(settings, attr)
            if not key:
                raise RuntimeError(f"{env_name} is not set; add it to the environment or .env")
            client = create_client(settings.supabase_url, key)
            _clients[role] = client
            logger.info("supabase_client_created", role=role, url=settings.supabase_url)
        return client


def reset_supabase_clients() -> None:
    """Forget cached clients so the next call re-reads settings."""
    with _lock:
        _clients.clear()
