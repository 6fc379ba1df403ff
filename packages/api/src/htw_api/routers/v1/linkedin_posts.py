"""LinkedIn post endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from htw_shared.models import LinkedInPost

from htw_api.dependencies import DataStore, get_store, get_write_store
from htw_api.responses import wrap_response
from htw_api.services import directory_service as directory

router = APIRouter(prefix="/linkedin-posts", tags=["linkedin"])


@router.get("")
async def list_posts(
    company_id: str | None = Query(None),
    member_id: str | None = Query(None),
    q: str | None = Query(None, description="Search post content"),
    limit: int | None = Query(None, ge=1, le=1000),
    store: DataStore = Depends(get_store),
):
    posts = directory.list_rows(
        store, LinkedInPost,
        filters={"company_id": company_id, "member_id": member_id},
        q=q, search_fields=("post_content",), order_by="post_date", limit=limit,
    )
    return wrap_response(directory.dump(posts), total_count=len(posts))


@router.post("", status_code=201)
async def create_post(post: LinkedInPost, store: DataStore = Depends(get_write_store)):
    created = directory.create_row(store, post)
    return wrap_response(created.model_dump(mode="json"))
