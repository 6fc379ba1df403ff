"""
models/events.py — Pydantic models for events and event_attendees.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import Field, field_validator

from htw_shared.constants import DEFAULT_EVENT_TYPE, EventType
from htw_shared.models.base import TableModel, empty_if_none, to_date, zero_if_none
from htw_shared.models.companies import RelatedCompany


class Event(TableModel):
    """Matches the events table row. company_id is set only for company-hosted events."""

    table = "events"
    relations = {"companies": "company_id(id,name)"}

    id: str | None = None
    name: str
    description: str | None = None
    event_type: EventType = DEFAULT_EVENT_TYPE
    company_id: str | None = None
    event_date: date
    location: str | None = None
    organizer_name: str | None = None
    organizer_email: str | None = None
    promotion_channels: list[str] = Field(default_factory=list)
    attendee_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    companies: RelatedCompany | None = None

    @field_validator("attendee_count", mode="before")
    @classmethod
    def zero_counts(cls, v: Any) -> Any:
        return zero_if_none(v)

    @field_validator("promotion_channels", mode="before")
    @classmethod
    def empty_channels(cls, v: Any) -> Any:
        return empty_if_none(v)

    @field_validator("event_date", mode="before")
    @classmethod
    def dates(cls, v: Any) -> Any:
        return to_date(v)

    @field_validator("event_type", mode="before")
    @classmethod
    def normalise_type(cls, v: Any) -> Any:
        if v in (None, ""):
            return DEFAULT_EVENT_TYPE
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("company_id", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        return None if v == "" else v


class EventAttendee(TableModel):
    """Matches the event_attendees table row."""

    table = "event_attendees"
    server_fields = frozenset({"id", "created_at"})

    id: str | None = None
    event_id: str
    member_id: str | None = None
    attendee_name: str | None = None
    attendee_email: str | None = None
    attendee_title: str | None = None
    attendee_company: str | None = None
    created_at: datetime | None = None
