"""Tests for the dashboard analytics endpoint."""

from __future__ import annotations

import pytest

from htw_shared.exceptions import BackendError


def test_get_analytics(client):
    response = client.get("/v1/analytics", params={"timeframe": "yearly", "top": 1})
    assert response.status_code == 200
    body = response.json()
    data = body["data"]

    assert data["timeframe"] == "yearly"
    assert data["total_members"] == 2
    assert data["total_companies"] == 3
    assert data["total_industries"] == 2
    assert data["average_growth_rate"] == 9.75
    assert [i["id"] for i in data["top_industries"]] == ["ind-tech"]
    assert [i["id"] for i in data["fastest_growing"]] == ["ind-tech"]
    assert data["top_skills"] == [{"skill": "Python", "count": 1}]
    assert data["events"]["total_events"] == 2
    assert data["events"]["average_attendance"] == 30.0
    assert len(data["member_trend"]) == 12

    assert body["meta"]["source"] == "supabase"
    assert body["meta"]["last_updated"]


def test_industry_distribution_sums_to_100(client):
    data = client.get("/v1/analytics").json()["data"]
    shares = [d["percentage"] for d in data["industry_distribution"]]
    assert shares == pytest.approx([60.0, 40.0])
    assert sum(shares) == pytest.approx(100.0)


def test_analytics_rejects_unknown_timeframe(client):
    assert client.get("/v1/analytics", params={"timeframe": "weekly"}).status_code == 422


def test_analytics_backend_failure(make_client, failing_store):
    client = make_client(failing_store(BackendError("Failed to fetch industries")))
    response = client.get("/v1/analytics")
    assert response.status_code == 502
    assert response.json()["error"]["code"] == "backend"
    assert response.json()["error"]["message"] == "Failed to fetch industries"
