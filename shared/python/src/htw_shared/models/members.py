"""
models/members.py — Pydantic model for the members table.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import Field, field_validator

from htw_shared.constants import DEFAULT_LEVEL
from htw_shared.models.base import TableModel, empty_if_none, to_date, zero_if_none
from htw_shared.models.companies import RelatedCompany
from htw_shared.models.industries import RelatedIndustry


class Member(TableModel):
    """Matches the members table row. Optionally linked to a company and an industry."""

    table = "members"
    relations = {
        "companies": "company_id(id,name,island)",
        "industries": "industry_id(id,name,color,icon)",
    }

    id: str | None = None
    name: str
    email: str | None = None
    job_title: str | None = None
    island: str | None = None
    bio: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    skills: list[str] = Field(default_factory=list)
    activity_level: str | None = DEFAULT_LEVEL
    company_id: str | None = None
    industry_id: str | None = None
    events_attended: int = 0
    member_since: date | None = None
    last_event_date: date | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    companies: RelatedCompany | None = None
    industries: RelatedIndustry | None = None

    @field_validator("events_attended", mode="before")
    @classmethod
    def zero_counts(cls, v: Any) -> Any:
        return zero_if_none(v)

    @field_validator("skills", mode="before")
    @classmethod
    def split_skills(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return empty_if_none(v)

    @field_validator("member_since", "last_event_date", mode="before")
    @classmethod
    def dates(cls, v: Any) -> Any:
        return to_date(v)

    @field_validator("company_id", "industry_id", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        return None if v == "" else v

    @property
    def joined_on(self) -> date | None:
        """member_since, falling back to the row's creation date."""
        if self.member_since is not None:
            return self.member_since
        return self.created_at.date() if self.created_at else None
