"""Island geography endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from htw_shared.models import IslandData
from htw_pipeline.analytics.aggregator import island_summary

from htw_api.dependencies import DataStore, get_store
from htw_api.responses import wrap_response
from htw_api.services import directory_service as directory

router = APIRouter(prefix="/islands", tags=["geography"])


@router.get("")
async def list_islands(store: DataStore = Depends(get_store)):
    islands = directory.list_rows(store, IslandData, order_by="member_count")
    summary = island_summary(islands)
    return wrap_response(summary.model_dump(mode="json"), total_count=len(summary.islands))
