"""Event endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response

from htw_shared.constants import EventType
from htw_shared.models import Event, EventAttendee

from htw_api.dependencies import DataStore, get_store, get_write_store
from htw_api.responses import wrap_response
from htw_api.services import directory_service as directory

router = APIRouter(prefix="/events", tags=["events"])

SEARCH_FIELDS = ("name", "organizer_name", "location", "companies.name")


@router.get("")
async def list_events(
    q: str | None = Query(None, description="Search name, organizer, location and host company name"),
    event_type: EventType | None = Query(None),
    company_id: str | None = Query(None),
    limit: int | None = Query(None, ge=1, le=1000),
    store: DataStore = Depends(get_store),
):
    records = directory.list_rows(
        store, Event,
        filters={"event_type": event_type, "company_id": company_id},
        q=q, search_fields=SEARCH_FIELDS, order_by="event_date", limit=limit,
    )
    return wrap_response(directory.dump(records), total_count=len(records))


@router.post("", status_code=201)
async def create_event(event: Event, store: DataStore = Depends(get_write_store)):
    created = directory.create_row(store, event)
    return wrap_response(created.model_dump(mode="json"))


@router.get("/{event_id}")
async def get_event(event_id: str, store: DataStore = Depends(get_store)):
    return wrap_response(directory.get_row(store, Event, event_id).model_dump(mode="json"))


@router.get("/{event_id}/attendees")
async def list_attendees(event_id: str, store: DataStore = Depends(get_store)):
    directory.get_row(store, Event, event_id)
    attendees = directory.list_rows(
        store, EventAttendee, filters={"event_id": event_id},
        order_by="created_at", descending=False,
    )
    return wrap_response(directory.dump(attendees), total_count=len(attendees))


@router.patch("/{event_id}")
async def update_event(
    event_id: str,
    values: dict[str, Any] = Body(...),
    store: DataStore = Depends(get_write_store),
):
    updated = directory.update_row(store, Event, event_id, values)
    return wrap_response(updated.model_dump(mode="json"))


@router.delete("/{event_id}", status_code=204)
async def delete_event(event_id: str, store: DataStore = Depends(get_write_store)):
    directory.delete_row(store, Event, event_id)
    return Response(status_code=204)
