"""
tests/conftest.py — Shared pytest fixtures for the API test suite.

Provides:
  reset_structlog() — autouse; restores structlog defaults after each test
  store()           — InMemoryStore seeded with a small network
  make_client()     — factory: TestClient over create_app() with both stores overridden
  client()          — make_client(store)
  failing_store()   — factory: DataStore mock whose every call raises the given error
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import structlog
from fastapi.testclient import TestClient

from htw_shared.datastore import InMemoryStore


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore({
        "industries": [
            {"id": "ind-tech", "name": "Technology", "description": "Software and IT",
             "member_count": 120, "company_count": 30, "growth_rate": 15.5, "icon": "💻"},
            {"id": "ind-tour", "name": "Tourism", "description": "Hotels and travel",
             "member_count": 80, "company_count": 20, "growth_rate": 4.0, "icon": "🏨"},
        ],
        "companies": [
            {"id": "co-aloha", "name": "Aloha Analytics", "island": "Oahu",
             "location": "Honolulu", "industry_id": "ind-tech", "member_count": 12},
            {"id": "co-maui", "name": "Maui Cloud", "island": "Maui",
             "location": "Kahului", "industry_id": "ind-tech", "member_count": 4},
            {"id": "co-surf", "name": "North Shore Tours", "island": "Oahu",
             "location": "Haleiwa", "industry_id": "ind-tour", "member_count": 2},
        ],
        "members": [
            {"id": "mem-keoni", "name": "Keoni Kahale", "email": "keoni@example.com",
             "job_title": "Software Engineer", "skills": ["Python", "AWS"],
             "company_id": "co-aloha", "industry_id": "ind-tech", "events_attended": 5,
             "member_since": "2024-01-15"},
            {"id": "mem-leilani", "name": "Leilani Akana", "email": "leilani@example.com",
             "job_title": "Product Manager", "skills": ["SQL"],
             "company_id": "co-maui", "industry_id": "ind-tech", "events_attended": 9},
        ],
        "events": [
            {"id": "ev-meetup", "name": "Tech Meetup", "event_type": "htw",
             "event_date": "2024-05-10", "organizer_name": "Kai Palakiko",
             "location": "Honolulu", "attendee_count": 40},
            {"id": "ev-workshop", "name": "Cloud Workshop", "event_type": "company",
             "company_id": "co-maui", "event_date": "2024-06-02",
             "location": "Kahului", "attendee_count": 20},
        ],
        "event_attendees": [
            {"event_id": "ev-meetup", "member_id": "mem-keoni", "attendee_name": "Keoni Kahale"},
        ],
        "linkedin_posts": [
            {"id": "post-1", "member_id": "mem-keoni", "company_id": "co-aloha",
             "post_url": "https://linkedin.com/p/1", "post_date": "2024-05-01",
             "post_content": "Shipping our new data platform",
             "engagement_metrics": {"likes": 4}},
            {"id": "post-2", "member_id": "mem-keoni", "post_url": "https://linkedin.com/p/2",
             "post_date": "2024-06-01", "post_content": "We are hiring engineers"},
        ],
        "island_data": [
            {"name": "Maui", "member_count": 25, "company_count": 5},
            {"name": "Oahu", "member_count": 75, "company_count": 15, "population": 1000000},
        ],
    })


@pytest.fixture
def make_client():
    from htw_api.app import create_app
    from htw_api.dependencies import get_store, get_write_store

    def _make(data_store, write_store=None) -> TestClient:
        app = create_app()
        app.dependency_overrides[get_store] = lambda: data_store
        app.dependency_overrides[get_write_store] = lambda: write_store if write_store is not None else data_store
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client, store) -> TestClient:
    return make_client(store)


@pytest.fixture
def failing_store():
    def _make(error: Exception) -> MagicMock:
        mock = MagicMock()
        for method in ("fetch", "insert", "update", "delete"):
            getattr(mock, method).side_effect = error
        return mock

    return _make
