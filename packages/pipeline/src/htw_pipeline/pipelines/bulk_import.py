"""
pipelines/bulk_import.py — CSV bulk upload: parse, then one batch insert.

Wires importers.csv_parser → loaders.batch_loader for one record type.
Expected failures (wrong file type, bad structure, rejected batch) come
back as an ImportResult with status "failure"; the caller decides how to
show them. Nothing is retried and nothing is partially written.

Usage:
    from htw_pipeline.pipelines.bulk_import import run_import

    result = run_import("industries", "industries.csv", text, store=store)
    if result.success:
        print(result.message)             # "2 industries uploaded successfully."
    else:
        print(result.error.code, result.error.message)
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any

from htw_shared.config import settings
from htw_shared.constants import ImportStatus
from htw_shared.datastore import DataStore
from htw_shared.exceptions import HTWError, ImportStructureError, UnsupportedFileError
from htw_pipeline.importers.csv_parser import SCHEMAS, parse_csv
from htw_pipeline.loaders.batch_loader import BatchLoader
from htw_pipeline.utils.logging import get_logger

log = get_logger(__name__, pipeline="bulk_import")


@dataclass
class ImportResult:
    """Outcome of one bulk upload."""

    record_type: str
    file_name: str
    records_parsed: int = 0
    records_loaded: int = 0
    rows_total: int = 0
    rows_dropped: int = 0
    error: HTWError | None = None
    duration_ms: int = 0

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def status(self) -> ImportStatus:
        return "success" if self.error is None else "failure"

    @property
    def message(self) -> str:
        if self.error is not None:
            return self.error.message
        return f"{self.records_loaded} {self.record_type} uploaded successfully."

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "record_type": self.record_type,
            "file_name": self.file_name,
            "status": self.status,
            "message": self.message,
            "records_parsed": self.records_parsed,
            "records_loaded": self.records_loaded,
            "rows_total": self.rows_total,
            "rows_dropped": self.rows_dropped,
            "duration_ms": self.duration_ms,
            "error": None,
        }
        if self.error is not None:
            data["error"] = {
                "code": self.error.code,
                "message": self.error.message,
                "details": self.error.to_details(),
            }
        return data


def decode_upload(content: bytes | str) -> str:
    """Uploaded bytes → text. A UTF-8 byte-order mark is dropped."""
    if isinstance(content, str):
        return content
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ImportStructureError(
            "File is not UTF-8 encoded text",
            detail=str(exc),
            suggestion="Export the spreadsheet as CSV (UTF-8)",
        ) from exc


def run_import(
    record_type: str,
    file_name: str,
    content: bytes | str,
    *,
    store: DataStore,
    max_rows: int | None = None,
) -> ImportResult:
    """
    Import one uploaded CSV file into the table for ``record_type``.

    Args:
        record_type: "industries", "companies", "members" or "events".
        file_name:   Uploaded file name; must end in ``.csv``.
        content:     File body as bytes or text.
        store:       Data store receiving the single batch insert.
        max_rows:    Override settings.import_max_rows.

    Returns:
        ImportResult. Unknown record types raise KeyError since they can
        only come from code, never from an upload.
    """
    schema = SCHEMAS[record_type]
    result = ImportResult(record_type=record_type, file_name=file_name)
    limit = max_rows if max_rows is not None else settings.import_max_rows
    t0 = time.monotonic()

    import_log = log.bind(record_type=record_type, file_name=file_name)
    import_log.info("import_start")

    try:
        if not file_name.lower().endswith(".csv"):
            raise UnsupportedFileError(detail=f"Got '{file_name}'")

        batch = parse_csv(decode_upload(content), schema)
        result.records_parsed = len(batch)
        result.rows_total = batch.rows_total
        result.rows_dropped = batch.rows_dropped

        if batch.rows_total > limit:
            raise ImportStructureError(
                f"File has {batch.rows_total} data rows; the limit is {limit}",
                suggestion="Split the file and upload each part separately",
            )
        if not batch.records:
            raise ImportStructureError(
                "No valid data rows found",
                detail=f"{batch.rows_dropped} row(s) were malformed",
            )

        load = BatchLoader(store).insert_batch(schema.table, batch.records)
        if load.error is not None:
            raise load.error
        result.records_loaded = load.records_loaded

    except HTWError as exc:
        result.error = exc
        import_log.warning("import_failed", code=exc.code, error=str(exc))

    result.duration_ms = int((time.monotonic() - t0) * 1000)
    import_log.info(
        "import_complete",
        status=result.status,
        records_parsed=result.records_parsed,
        records_loaded=result.records_loaded,
        rows_dropped=result.rows_dropped,
        duration_ms=result.duration_ms,
    )
    return result
