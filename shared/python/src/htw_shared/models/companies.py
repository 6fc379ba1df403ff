"""
models/companies.py — Pydantic model for the companies table.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

from htw_shared.constants import DEFAULT_COMPANY_SIZE, DEFAULT_LEVEL
from htw_shared.models.base import TableModel, zero_if_none
from htw_shared.models.industries import RelatedIndustry


class Coordinates(BaseModel):
    lat: float
    lng: float


class RelatedCompany(BaseModel):
    id: str | None = None
    name: str | None = None
    island: str | None = None


class Company(TableModel):
    """Matches the companies table row. Belongs to at most one industry."""

    table = "companies"
    relations = {"industries": "industry_id(id,name,color,icon)"}

    id: str | None = None
    name: str
    website: str | None = None
    island: str | None = None
    location: str | None = None
    industry_id: str | None = None
    company_size: str | None = DEFAULT_COMPANY_SIZE
    engagement_level: str | None = DEFAULT_LEVEL
    member_count: int = 0
    coordinates: Coordinates | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    industries: RelatedIndustry | None = None

    @field_validator("member_count", mode="before")
    @classmethod
    def zero_counts(cls, v: Any) -> Any:
        return zero_if_none(v)

    @field_validator("coordinates", mode="before")
    @classmethod
    def drop_partial_coordinates(cls, v: Any) -> Any:
        # Geocoding writes {"lat", "lng"}; anything else is treated as unknown
        if isinstance(v, dict) and "lat" in v and "lng" in v:
            return v
        return None

    @field_validator("industry_id", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        return None if v == "" else v
