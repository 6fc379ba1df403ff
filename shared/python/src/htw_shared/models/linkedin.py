"""
models/linkedin.py — Pydantic models for the linkedin_posts table.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from htw_shared.models.base import TableModel, to_date


class EngagementMetrics(BaseModel):
    """Loosely structured metrics blob; unknown keys are kept as-is."""

    model_config = ConfigDict(extra="allow")

    likes: int = 0
    comments: int = 0
    shares: int = 0

    @property
    def total(self) -> int:
        return self.likes + self.comments + self.shares


class LinkedInPost(TableModel):
    """Matches the linkedin_posts table row."""

    table = "linkedin_posts"

    id: str | None = None
    company_id: str | None = None
    member_id: str | None = None
    post_url: str
    post_content: str | None = None
    post_date: date
    post_type: str | None = None
    engagement_metrics: EngagementMetrics = Field(default_factory=EngagementMetrics)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("post_date", mode="before")
    @classmethod
    def dates(cls, v: Any) -> Any:
        return to_date(v)

    @field_validator("engagement_metrics", mode="before")
    @classmethod
    def empty_metrics(cls, v: Any) -> Any:
        return {} if v is None else v
