"""
exceptions.py — HTW error hierarchy.

Every error carries a machine-readable ``code`` plus a three-part message:
what happened, technical detail, and what the user can do about it. The
API maps codes to HTTP statuses; the CLI prints ``str(exc)``.
"""

from __future__ import annotations

from typing import Any


class HTWError(Exception):
    """Base exception for all HTW errors."""

    code = "error"

    def __init__(
        self,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.detail:
            parts.append(f"Detail: {self.detail}")
        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")
        return " | ".join(parts)

    def to_details(self) -> dict[str, Any]:
        details: dict[str, Any] = {}
        if self.detail:
            details["detail"] = self.detail
        if self.suggestion:
            details["suggestion"] = self.suggestion
        return details


# ---------------------------------------------------------------------------
# Import errors (the whole batch is refused)
# ---------------------------------------------------------------------------


class ImportStructureError(HTWError):
    """The uploaded file does not have a header plus at least one data row."""

    code = "structure"

    def __init__(
        self,
        message: str = "CSV file must have a header row and at least one data row",
        detail: str | None = None,
        suggestion: str | None = "Download the template and fill it in",
    ) -> None:
        super().__init__(message, detail, suggestion)


class MissingColumnsError(ImportStructureError):
    """The header lacks one or more required columns."""

    code = "missing_columns"

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            f"Missing required columns: {', '.join(self.missing)}",
            suggestion="Add the missing columns to the header row",
        )

    def to_details(self) -> dict[str, Any]:
        details = super().to_details()
        details["missing"] = self.missing
        return details


class UnsupportedFileError(HTWError):
    """Only .csv uploads are accepted."""

    code = "unsupported_file"

    def __init__(
        self,
        message: str = "Please upload a CSV file",
        detail: str | None = None,
        suggestion: str | None = "Save the spreadsheet as .csv and try again",
    ) -> None:
        super().__init__(message, detail, suggestion)


# ---------------------------------------------------------------------------
# Backend errors
# ---------------------------------------------------------------------------


class BackendError(HTWError):
    """A read from the hosted database failed."""

    code = "backend"

    def __init__(
        self,
        message: str = "Failed to fetch data",
        detail: str | None = None,
        suggestion: str | None = "Check Supabase connectivity and try again",
    ) -> None:
        super().__init__(message, detail, suggestion)


class BatchWriteError(BackendError):
    """The hosted database rejected a write; nothing from the batch is committed."""

    code = "batch_write"

    def __init__(
        self,
        message: str = "Failed to upload data",
        detail: str | None = None,
        suggestion: str | None = "Fix the file and upload it again",
    ) -> None:
        super().__init__(message, detail, suggestion)


class RecordNotFoundError(HTWError):
    """A row looked up by id does not exist."""

    code = "not_found"

    def __init__(self, table: str, row_id: str) -> None:
        self.table = table
        self.row_id = row_id
        super().__init__(f"No {table} row with id '{row_id}'")
