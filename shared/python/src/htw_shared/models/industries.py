"""
models/industries.py — Pydantic model for the industries table.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

from htw_shared.constants import DEFAULT_COLOR, DEFAULT_ICON
from htw_shared.models.base import TableModel, zero_if_none


class RelatedIndustry(BaseModel):
    """Industry columns embedded in a company or member read."""

    id: str | None = None
    name: str | None = None
    color: str | None = None
    icon: str | None = None


class Industry(TableModel):
    """Matches the industries table row.

    member_count and company_count are rollups maintained by the backend;
    nothing in this codebase recomputes them.
    """

    table = "industries"

    id: str | None = None
    name: str
    description: str | None = None
    member_count: int = 0
    company_count: int = 0
    growth_rate: float = 0.0
    color: str = DEFAULT_COLOR
    icon: str | None = DEFAULT_ICON
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("member_count", "company_count", "growth_rate", mode="before")
    @classmethod
    def zero_counts(cls, v: Any) -> Any:
        return zero_if_none(v)

    @field_validator("color", mode="before")
    @classmethod
    def default_color(cls, v: Any) -> Any:
        return DEFAULT_COLOR if v in (None, "") else v
