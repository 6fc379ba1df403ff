"""Company endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response

from htw_shared.constants import Island
from htw_shared.models import Company, Member

from htw_api.dependencies import DataStore, get_store, get_write_store
from htw_api.responses import wrap_response
from htw_api.services import directory_service as directory

router = APIRouter(prefix="/companies", tags=["companies"])

SEARCH_FIELDS = ("name", "location", "island", "industries.name")


@router.get("")
async def list_companies(
    q: str | None = Query(None, description="Search name, location, island and industry name"),
    industry_id: str | None = Query(None),
    island: Island | None = Query(None),
    limit: int | None = Query(None, ge=1, le=1000),
    store: DataStore = Depends(get_store),
):
    records = directory.list_rows(
        store, Company,
        filters={"industry_id": industry_id, "island": island},
        q=q, search_fields=SEARCH_FIELDS, order_by="member_count", limit=limit,
    )
    return wrap_response(directory.dump(records), total_count=len(records))


@router.post("", status_code=201)
async def create_company(company: Company, store: DataStore = Depends(get_write_store)):
    created = directory.create_row(store, company)
    return wrap_response(created.model_dump(mode="json"))


@router.get("/{company_id}")
async def get_company(company_id: str, store: DataStore = Depends(get_store)):
    return wrap_response(directory.get_row(store, Company, company_id).model_dump(mode="json"))


@router.get("/{company_id}/members")
async def list_company_members(company_id: str, store: DataStore = Depends(get_store)):
    directory.get_row(store, Company, company_id)
    records = directory.list_rows(
        store, Member, filters={"company_id": company_id}, order_by="name", descending=False,
    )
    return wrap_response(directory.dump(records), total_count=len(records))


@router.patch("/{company_id}")
async def update_company(
    company_id: str,
    values: dict[str, Any] = Body(...),
    store: DataStore = Depends(get_write_store),
):
    updated = directory.update_row(store, Company, company_id, values)
    return wrap_response(updated.model_dump(mode="json"))


@router.delete("/{company_id}", status_code=204)
async def delete_company(company_id: str, store: DataStore = Depends(get_write_store)):
    directory.delete_row(store, Company, company_id)
    return Response(status_code=204)
