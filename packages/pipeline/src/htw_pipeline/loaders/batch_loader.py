"""
loaders/batch_loader.py — Single-batch insert loader for the bulk import.

The bulk import funnels its parsed records through this module to write
to the hosted database. The loader:
  - Converts table models to JSON-serialisable dicts (dates as ISO strings,
    nulls omitted so column defaults apply)
  - Sends every row in ONE insert call, so the backend commits all or nothing
  - Never retries; a rejected batch is reported in the LoadResult
  - Logs start / complete / failed with structlog

Usage:
    from htw_pipeline.loaders.batch_loader import BatchLoader

    loader = BatchLoader(store)
    result = loader.insert_batch("industries", batch.records)
    print(result.status, result.records_loaded)
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Sequence

import structlog

from htw_shared.datastore import DataStore
from htw_shared.exceptions import BatchWriteError
from htw_shared.models.base import TableModel

log = structlog.get_logger(__name__)


@dataclass
class LoadResult:
    """Summary of one batch insert."""

    table: str
    records_loaded: int = 0
    records_failed: int = 0
    error: BatchWriteError | None = None
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def status(self) -> str:
        return "success" if self.error is None else "failure"


class BatchLoader:
    """Writes a whole parsed file to one table through the injected store."""

    def __init__(self, store: DataStore) -> None:
        self._store = store

    def insert_batch(self, table: str, records: Sequence[TableModel]) -> LoadResult:
        """
        Insert all records in a single call.

        Args:
            table:   Target table name.
            records: Validated table models, in file order.

        Returns:
            LoadResult; on failure ``error`` holds the BatchWriteError and
            nothing is counted as loaded.
        """
        result = LoadResult(table=table)
        t0 = time.monotonic()

        if not records:
            log.warning("insert_empty_batch", table=table)
            return result

        loader_log = log.bind(table=table, total_rows=len(records))
        loader_log.info("insert_start")

        rows = self._to_dicts(records)
        try:
            self._store.insert(table, rows)
            result.records_loaded = len(rows)
        except BatchWriteError as exc:
            loader_log.error("insert_failed", error=str(exc))
            result.records_failed = len(rows)
            result.error = exc

        result.duration_ms = int((time.monotonic() - t0) * 1000)
        loader_log.info(
            "insert_complete",
            records_loaded=result.records_loaded,
            records_failed=result.records_failed,
            duration_ms=result.duration_ms,
            status=result.status,
        )
        return result

    @staticmethod
    def _to_dicts(records: Sequence[TableModel]) -> list[dict[str, Any]]:
        """
        Convert models to insert payloads.

        - date/datetime values → ISO strings
        - None values omitted (use DB defaults)
        - server-assigned columns (id, timestamps) dropped
        """
        return [record.to_insert_dict() for record in records]
