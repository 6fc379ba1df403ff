"""Shared FastAPI dependencies."""

from __future__ import annotations

from htw_shared.datastore import DataStore, get_datastore


def get_store() -> DataStore:
    """Read store (anon key, row-level security applies); tests override this."""
    return get_datastore()


def get_write_store() -> DataStore:
    """Store for inserts, edits, deletes and bulk imports (service key)."""
    return get_datastore(service_role=True)


__all__ = ["DataStore", "get_store", "get_write_store"]
