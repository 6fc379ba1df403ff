"""Industry endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response

from htw_shared.models import Industry

from htw_api.dependencies import DataStore, get_store, get_write_store
from htw_api.responses import wrap_response
from htw_api.services import directory_service as directory

router = APIRouter(prefix="/industries", tags=["industries"])

SEARCH_FIELDS = ("name", "description")


@router.get("")
async def list_industries(
    q: str | None = Query(None, description="Search name and description"),
    limit: int | None = Query(None, ge=1, le=1000),
    store: DataStore = Depends(get_store),
):
    records = directory.list_rows(
        store, Industry, q=q, search_fields=SEARCH_FIELDS,
        order_by="member_count", limit=limit,
    )
    return wrap_response(directory.dump(records), total_count=len(records))


@router.post("", status_code=201)
async def create_industry(industry: Industry, store: DataStore = Depends(get_write_store)):
    created = directory.create_row(store, industry)
    return wrap_response(created.model_dump(mode="json"))


@router.get("/{industry_id}")
async def get_industry(industry_id: str, store: DataStore = Depends(get_store)):
    return wrap_response(directory.get_row(store, Industry, industry_id).model_dump(mode="json"))


@router.patch("/{industry_id}")
async def update_industry(
    industry_id: str,
    values: dict[str, Any] = Body(...),
    store: DataStore = Depends(get_write_store),
):
    updated = directory.update_row(store, Industry, industry_id, values)
    return wrap_response(updated.model_dump(mode="json"))


@router.delete("/{industry_id}", status_code=204)
async def delete_industry(industry_id: str, store: DataStore = Depends(get_write_store)):
    directory.delete_row(store, Industry, industry_id)
    return Response(status_code=204)
