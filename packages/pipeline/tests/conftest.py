"""
tests/conftest.py — Shared pytest fixtures for the pipeline test suite.

Provides:
  reset_structlog()      — autouse; restores structlog defaults after each test
  fixture_path()         — resolves paths to tests/fixtures/
  mock_supabase_client() — MagicMock of the Supabase client (prevents real DB calls)
  store()                — empty InMemoryStore
  seeded_store()         — InMemoryStore with a small network of rows
  today()                — fixed reference date for growth/trend tests
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import structlog

from htw_shared.datastore import InMemoryStore

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo configure_logging() calls made by CLI tests (they bind CliRunner streams)."""
    yield
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def fixture_path() -> Path:
    return FIXTURES_DIR


# ---------------------------------------------------------------------------
# Supabase client mock
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_supabase_client() -> MagicMock:
    """
    A MagicMock that simulates the supabase.Client query builder.

    Every builder method returns the same query mock, so any
    .table().select().eq().order().limit().execute() chain ends at
    ``client.query.execute``, which returns empty data by default.
    Override per test: mock_supabase_client.query.execute.return_value.data = [...]
    """
    client = MagicMock()
    query = MagicMock()

    default_result = MagicMock()
    default_result.data = []
    default_result.count = 0

    for method in ("select", "eq", "in_", "is_", "order", "limit", "insert", "update", "delete"):
        getattr(query, method).return_value = query
    query.execute.return_value = default_result

    client.table.return_value = query
    client.query = query
    return client


# ---------------------------------------------------------------------------
# Data stores
# ---------------------------------------------------------------------------

@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def today() -> date:
    return date(2024, 6, 15)


@pytest.fixture
def seeded_store() -> InMemoryStore:
    """Three industries, two islands, four members, two companies, two events."""
    return InMemoryStore({
        "industries": [
            {"id": "ind-tech", "name": "Technology", "member_count": 120,
             "company_count": 30, "growth_rate": 15.5, "color": "#1E88E5", "icon": "💻"},
            {"id": "ind-tour", "name": "Tourism", "member_count": 80,
             "company_count": 20, "growth_rate": 4.0, "color": None, "icon": "🏨"},
            {"id": "ind-health", "name": "Healthcare", "member_count": None,
             "company_count": 5, "growth_rate": 22.0, "icon": "🏥"},
        ],
        "island_data": [
            {"name": "Maui", "member_count": 25, "company_count": 5, "population": 164000},
            {"name": "Oahu", "member_count": 75, "company_count": 0, "population": 1016000},
        ],
        "members": [
            {"name": "Keoni", "industry_id": "ind-tech", "skills": ["Python", "AWS"],
             "member_since": "2024-06-01", "events_attended": 5},
            {"name": "Leilani", "industry_id": "ind-tech", "skills": ["React", "Python"],
             "member_since": "2024-04-20", "events_attended": 2},
            {"name": "Kai", "industry_id": "ind-tour", "skills": None,
             "member_since": "2023-01-10", "events_attended": 0},
            {"name": "Malia", "industry_id": "ind-health", "skills": ["SQL"],
             "member_since": None, "created_at": "2022-11-02T08:00:00+00:00"},
        ],
        "companies": [
            {"name": "Aloha Analytics", "industry_id": "ind-tech", "member_count": 12,
             "created_at": "2024-05-01T00:00:00+00:00"},
            {"name": "Maui Cloud", "industry_id": "ind-tech", "member_count": 4,
             "created_at": "2021-03-01T00:00:00+00:00"},
        ],
        "events": [
            {"name": "Tech Meetup", "event_type": "htw", "event_date": "2024-05-10",
             "attendee_count": 40},
            {"name": "Cloud Workshop", "event_type": "company", "event_date": "2024-06-02",
             "attendee_count": 20, "company_id": "co-1"},
        ],
    })
