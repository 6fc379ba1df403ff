"""
models/geography.py — Pydantic model for the island_data table.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import field_validator

from htw_shared.models.base import TableModel, zero_if_none


class IslandData(TableModel):
    """Matches the island_data table row: a precomputed per-island rollup."""

    table = "island_data"

    id: str | None = None
    name: str
    member_count: int = 0
    company_count: int = 0
    population: int | None = None
    tech_percentage: float | None = None
    coordinates: Any = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("member_count", "company_count", mode="before")
    @classmethod
    def zero_counts(cls, v: Any) -> Any:
        return zero_if_none(v)
