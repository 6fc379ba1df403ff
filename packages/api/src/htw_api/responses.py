"""
Response envelopes shared by every route.

Success:  {"data": ..., "meta": {...}, "links": {...}}
Failure:  {"error": {"code": ..., "message": ..., "details": {...}}}

``meta`` carries only the keys a route actually sets: ``total_count`` on
list endpoints, ``source`` and ``last_updated`` on analytics.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any


def wrap_response(
    data: Any,
    *,
    total_count: int | None = None,
    source: str | None = None,
    last_updated: datetime | None = None,
    links: dict[str, str] | None = None,
) -> dict[str, Any]:
    meta: dict[str, Any] = {}
    if total_count is not None:
        meta["total_count"] = total_count
    if source:
        meta["source"] = source
    if last_updated is not None:
        meta["last_updated"] = last_updated.isoformat()
    return {"data": data, "meta": meta, "links": dict(links or {})}


def error_response(
    code: str,
    message: str,
    *,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Error envelope; ``details`` is left out when empty."""
    body: dict[str, Any] = {"code": code, "message": message}
    if details:
        body["details"] = details
    return {"error": body}
