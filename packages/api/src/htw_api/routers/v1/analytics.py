"""Dashboard analytics endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from htw_shared.constants import Timeframe
from htw_pipeline.analytics.dashboard import build_dashboard

from htw_api.dependencies import DataStore, get_store
from htw_api.responses import wrap_response

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("")
async def get_analytics(
    timeframe: Timeframe | None = Query(None, description="Growth window; defaults to settings"),
    top: int | None = Query(None, ge=1, le=50, description="Length of ranked lists"),
    store: DataStore = Depends(get_store),
):
    analytics = build_dashboard(store, timeframe=timeframe, top=top).unwrap()
    return wrap_response(
        analytics.model_dump(mode="json"),
        source="supabase",
        last_updated=analytics.generated_at,
    )
