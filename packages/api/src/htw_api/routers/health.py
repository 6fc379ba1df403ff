"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from htw_shared.exceptions import BackendError

from htw_api import __version__
from htw_api.dependencies import DataStore, get_store

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def ready(store: DataStore = Depends(get_store)):
    """Ready once the hosted database answers a one-row read."""
    try:
        store.fetch("industries", columns="id", limit=1)
    except BackendError as exc:
        return JSONResponse(status_code=503, content={"status": "unavailable", "detail": exc.detail})
    return {"status": "ready"}
