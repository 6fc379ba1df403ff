"""Member endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response

from htw_shared.models import LinkedInPost, Member

from htw_api.dependencies import DataStore, get_store, get_write_store
from htw_api.responses import wrap_response
from htw_api.services import directory_service as directory

router = APIRouter(prefix="/members", tags=["members"])

SEARCH_FIELDS = ("name", "job_title", "skills", "companies.name", "email")


@router.get("")
async def list_members(
    q: str | None = Query(None, description="Search name, job title, skills, company name and email"),
    industry_id: str | None = Query(None),
    company_id: str | None = Query(None),
    limit: int | None = Query(None, ge=1, le=1000),
    store: DataStore = Depends(get_store),
):
    records = directory.list_rows(
        store, Member,
        filters={"industry_id": industry_id, "company_id": company_id},
        q=q, search_fields=SEARCH_FIELDS, order_by="events_attended", limit=limit,
    )
    return wrap_response(directory.dump(records), total_count=len(records))


@router.post("", status_code=201)
async def create_member(member: Member, store: DataStore = Depends(get_write_store)):
    created = directory.create_row(store, member)
    return wrap_response(created.model_dump(mode="json"))


@router.get("/{member_id}")
async def get_member(member_id: str, store: DataStore = Depends(get_store)):
    return wrap_response(directory.get_row(store, Member, member_id).model_dump(mode="json"))


@router.get("/{member_id}/linkedin-posts")
async def list_member_posts(member_id: str, store: DataStore = Depends(get_store)):
    directory.get_row(store, Member, member_id)
    posts = directory.list_rows(
        store, LinkedInPost, filters={"member_id": member_id}, order_by="post_date",
    )
    return wrap_response(directory.dump(posts), total_count=len(posts))


@router.patch("/{member_id}")
async def update_member(
    member_id: str,
    values: dict[str, Any] = Body(...),
    store: DataStore = Depends(get_write_store),
):
    updated = directory.update_row(store, Member, member_id, values)
    return wrap_response(updated.model_dump(mode="json"))


@router.delete("/{member_id}", status_code=204)
async def delete_member(member_id: str, store: DataStore = Depends(get_write_store)):
    directory.delete_row(store, Member, member_id)
    return Response(status_code=204)
