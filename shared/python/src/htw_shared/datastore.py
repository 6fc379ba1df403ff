"""
datastore.py — Injected data-access interface over the hosted tables.

The importer, the analytics builder and the API services all take a
DataStore argument instead of reaching for the global Supabase client,
so tests and dry runs can swap in InMemoryStore.

Usage:
    from htw_shared.datastore import get_datastore, InMemoryStore

    store = get_datastore()                       # Supabase, anon key
    rows = store.fetch("industries", order_by="member_count", descending=True)

    store = InMemoryStore({"industries": [{"name": "Technology"}]})
    store.insert("industries", [{"name": "Tourism"}])
"""

from __future__ import annotations

import copy
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable

import structlog
from supabase import Client

from htw_shared.db import get_supabase_client
from htw_shared.exceptions import BackendError, BatchWriteError

log = structlog.get_logger(__name__)

Row = dict[str, Any]
Filters = dict[str, Any]

# Top-level commas only; commas inside an embed's parentheses belong to it
_SELECT_SPLIT = re.compile(r",(?![^()]*\))")
# alias:fk_column(col,col)
_EMBED = re.compile(r"^(\w+):(\w+)\s*\(([^)]*)\)$")


@runtime_checkable
class DataStore(Protocol):
    """Row-level contract: column name -> value mappings in, the same out."""

    def fetch(
        self,
        table: str,
        filters: Filters | None = None,
        *,
        columns: str = "*",
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]: ...

    def insert(self, table: str, rows: list[Row]) -> list[Row]: ...

    def update(self, table: str, row_id: str, values: Row) -> list[Row]: ...

    def delete(self, table: str, row_id: str) -> None: ...


# ---------------------------------------------------------------------------
# Supabase
# ---------------------------------------------------------------------------


class SupabaseStore:
    """
    DataStore backed by the Supabase PostgREST query builder.

    Filters are equality matches; a list/tuple value becomes an IN filter
    and None becomes IS NULL. Every backend exception is re-raised as a
    BackendError (reads) or BatchWriteError (writes) with the cause chained.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    def fetch(
        self,
        table: str,
        filters: Filters | None = None,
        *,
        columns: str = "*",
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        query = self._client.table(table).select(columns)
        for column, value in (filters or {}).items():
            if isinstance(value, (list, tuple, set)):
                query = query.in_(column, list(value))
            elif value is None:
                query = query.is_(column, "null")
            else:
                query = query.eq(column, value)
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit is not None:
            query = query.limit(limit)

        try:
            result = query.execute()
        except Exception as exc:
            log.error("fetch_failed", table=table, error=str(exc))
            raise BackendError(f"Failed to fetch {table}", detail=str(exc)) from exc

        return list(result.data or [])

    def insert(self, table: str, rows: list[Row]) -> list[Row]:
        try:
            result = self._client.table(table).insert(rows).execute()
        except Exception as exc:
            log.error("insert_failed", table=table, rows=len(rows), error=str(exc))
            raise BatchWriteError(
                f"Failed to insert {len(rows)} {table} rows", detail=str(exc)
            ) from exc
        return list(result.data or [])

    def update(self, table: str, row_id: str, values: Row) -> list[Row]:
        try:
            result = self._client.table(table).update(values).eq("id", row_id).execute()
        except Exception as exc:
            log.error("update_failed", table=table, row_id=row_id, error=str(exc))
            raise BatchWriteError(f"Failed to update {table} row", detail=str(exc)) from exc
        return list(result.data or [])

    def delete(self, table: str, row_id: str) -> None:
        try:
            self._client.table(table).delete().eq("id", row_id).execute()
        except Exception as exc:
            log.error("delete_failed", table=table, row_id=row_id, error=str(exc))
            raise BatchWriteError(f"Failed to delete {table} row", detail=str(exc)) from exc


def get_datastore(*, service_role: bool = False) -> SupabaseStore:
    """Return a SupabaseStore around the process-wide client for the given role."""
    return SupabaseStore(get_supabase_client(service_role=service_role))


# ---------------------------------------------------------------------------
# In-memory
# ---------------------------------------------------------------------------


class InMemoryStore:
    """
    Dictionary-backed DataStore with the same semantics as SupabaseStore.

    Inserts assign a UUID id and created_at/updated_at timestamps when the
    row has none. Rows are deep-copied on the way in and out so callers
    can't mutate stored state.
    """

    def __init__(self, tables: dict[str, list[Row]] | None = None) -> None:
        self._tables: dict[str, list[Row]] = {}
        for table, rows in (tables or {}).items():
            self._tables[table] = [self._stamp(row) for row in rows]

    @staticmethod
    def _stamp(row: Row) -> Row:
        stored = copy.deepcopy(row)
        now = datetime.now(timezone.utc).isoformat()
        stored.setdefault("id", str(uuid.uuid4()))
        stored.setdefault("created_at", now)
        stored.setdefault("updated_at", now)
        return stored

    @staticmethod
    def _matches(row: Row, filters: Filters) -> bool:
        for column, value in filters.items():
            if isinstance(value, (list, tuple, set)):
                if row.get(column) not in value:
                    return False
            elif row.get(column) != value:
                return False
        return True

    def rows(self, table: str) -> list[Row]:
        """All stored rows for a table, in insertion order."""
        return copy.deepcopy(self._tables.get(table, []))

    def fetch(
        self,
        table: str,
        filters: Filters | None = None,
        *,
        columns: str = "*",
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        rows = [r for r in self._tables.get(table, []) if self._matches(r, filters or {})]

        if order_by:
            present = [r for r in rows if r.get(order_by) is not None]
            missing = [r for r in rows if r.get(order_by) is None]
            present.sort(key=lambda r: r[order_by], reverse=descending)
            rows = present + missing

        if limit is not None:
            rows = rows[:limit]

        if columns.strip() != "*":
            rows = [self._project(r, columns) for r in rows]

        return copy.deepcopy(rows)

    def _project(self, row: Row, columns: str) -> Row:
        """Apply a PostgREST-style select list.

        Embeds are written ``table:fk_column(col,col)``; the alias names the
        linked table, and a dangling or null foreign key embeds as None.
        """
        out: Row = {}
        for part in (p.strip() for p in _SELECT_SPLIT.split(columns)):
            if not part:
                continue
            if part == "*":
                out.update(row)
                continue
            embed = _EMBED.match(part)
            if embed is None:
                out[part] = row.get(part)
                continue
            alias, fk, cols = embed.groups()
            wanted = [c.strip() for c in cols.split(",") if c.strip()]
            key = row.get(fk)
            linked = None
            if key is not None:
                linked = next((r for r in self._tables.get(alias, []) if r.get("id") == key), None)
            out[alias] = {c: linked.get(c) for c in wanted} if linked is not None else None
        return out

    def insert(self, table: str, rows: list[Row]) -> list[Row]:
        # Validate the whole batch before touching state so a bad row commits nothing
        for row in rows:
            if not isinstance(row, dict):
                raise BatchWriteError(
                    f"Failed to insert {len(rows)} {table} rows",
                    detail=f"row is not a mapping: {row!r}",
                )
        stamped = [self._stamp(row) for row in rows]
        self._tables.setdefault(table, []).extend(stamped)
        return copy.deepcopy(stamped)

    def update(self, table: str, row_id: str, values: Row) -> list[Row]:
        updated: list[Row] = []
        for row in self._tables.get(table, []):
            if row.get("id") == row_id:
                row.update(copy.deepcopy(values))
                row["updated_at"] = datetime.now(timezone.utc).isoformat()
                updated.append(copy.deepcopy(row))
        return updated

    def delete(self, table: str, row_id: str) -> None:
        self._tables[table] = [
            r for r in self._tables.get(table, []) if r.get("id") != row_id
        ]
