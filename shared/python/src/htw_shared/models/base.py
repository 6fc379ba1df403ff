"""
models/base.py — Behaviour shared by every table model.

Rows arrive from Supabase as loosely-typed dicts (nulls where a count
should be, timestamps where a date is wanted, joined relations nested
under extra keys). TableModel validates them once at the boundary so the
importer and the aggregator only ever see typed records.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from htw_shared.time_utils import parse_date


class TableModel(BaseModel):
    """Base for all hosted-table row models."""

    model_config = ConfigDict(extra="ignore")

    table: ClassVar[str] = ""
    # Columns the backend fills in; never sent on insert
    server_fields: ClassVar[frozenset[str]] = frozenset({"id", "created_at", "updated_at"})
    # Linked rows embedded on read: field name -> "fk_column(col,col)"
    relations: ClassVar[dict[str, str]] = {}

    @classmethod
    def select_columns(cls) -> str:
        """Select list for reads: every column plus one embed per relation."""
        embeds = [f"{alias}:{target}" for alias, target in cls.relations.items()]
        return ", ".join(["*", *embeds])

    @classmethod
    def read_only_fields(cls) -> frozenset[str]:
        return cls.server_fields | frozenset(cls.relations)

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "TableModel":
        return cls.model_validate(row)

    def to_insert_dict(self) -> dict[str, Any]:
        """JSON-serialisable insert payload; nulls omitted so DB defaults apply."""
        return self.model_dump(mode="json", exclude=set(self.read_only_fields()), exclude_none=True)


def zero_if_none(v: Any) -> Any:
    return 0 if v is None else v


def empty_if_none(v: Any) -> Any:
    return [] if v is None else v


def to_date(v: Any) -> Any:
    """Pass through values parse_date can't read so pydantic reports them."""
    if v is None or (isinstance(v, str) and not v.strip()):
        return None
    parsed = parse_date(v)
    return parsed if parsed is not None else v
