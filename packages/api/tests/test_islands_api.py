"""Tests for the island geography endpoint."""

from __future__ import annotations

from htw_shared.datastore import InMemoryStore


def test_list_islands(client):
    response = client.get("/v1/islands")
    assert response.status_code == 200
    body = response.json()
    data = body["data"]

    assert body["meta"]["total_count"] == 2
    assert data["total_members"] == 100
    assert data["total_companies"] == 20
    oahu, maui = data["islands"]
    assert oahu["name"] == "Oahu"
    assert oahu["percentage"] == 75.0
    assert oahu["members_per_company"] == 5.0
    assert oahu["population"] == 1000000
    assert maui["members_per_company"] == 5.0


def test_list_islands_empty(make_client):
    client = make_client(InMemoryStore())
    data = client.get("/v1/islands").json()["data"]
    assert data == {"total_members": 0, "total_companies": 0, "islands": []}
