"""
tests/test_loaders/test_batch_loader.py — Tests for the single-batch insert loader.
"""

from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock

from htw_shared.datastore import SupabaseStore
from htw_shared.exceptions import BatchWriteError
from htw_shared.models import Event, Industry
from htw_pipeline.loaders.batch_loader import BatchLoader, LoadResult


def _industries(n: int) -> list[Industry]:
    return [Industry(name=f"Industry {i}", description="d", member_count=i) for i in range(n)]


class TestLoadResult:
    def test_success_status(self):
        result = LoadResult(table="industries", records_loaded=3)
        assert result.success
        assert result.status == "success"

    def test_failure_status(self):
        result = LoadResult(table="industries", records_failed=3, error=BatchWriteError())
        assert not result.success
        assert result.status == "failure"


class TestInsertBatch:
    def test_all_rows_in_one_call(self):
        store = MagicMock()
        result = BatchLoader(store).insert_batch("industries", _industries(750))

        store.insert.assert_called_once()
        table, rows = store.insert.call_args.args
        assert table == "industries"
        assert len(rows) == 750
        assert result.records_loaded == 750
        assert result.success

    def test_rows_are_json_payloads(self):
        store = MagicMock()
        event = Event(name="Meetup", event_date=date(2024, 6, 12), attendee_count=4)
        BatchLoader(store).insert_batch("events", [event])

        (row,) = store.insert.call_args.args[1]
        assert row["event_date"] == "2024-06-12"
        assert "id" not in row
        assert "description" not in row  # None omitted so DB defaults apply

    def test_empty_batch_skips_store(self):
        store = MagicMock()
        result = BatchLoader(store).insert_batch("industries", [])
        store.insert.assert_not_called()
        assert result.records_loaded == 0

    def test_rejected_batch_loads_nothing(self):
        store = MagicMock()
        store.insert.side_effect = BatchWriteError(detail="duplicate key")
        result = BatchLoader(store).insert_batch("industries", _industries(3))

        assert result.status == "failure"
        assert result.records_loaded == 0
        assert result.records_failed == 3
        assert result.error.detail == "duplicate key"

    def test_supabase_error_becomes_batch_write_error(self, mock_supabase_client):
        mock_supabase_client.query.execute.side_effect = RuntimeError("violates not-null constraint")
        result = BatchLoader(SupabaseStore(mock_supabase_client)).insert_batch(
            "industries", _industries(2)
        )
        assert isinstance(result.error, BatchWriteError)
        assert "violates not-null constraint" in result.error.detail
        mock_supabase_client.table.assert_called_with("industries")

    def test_in_memory_store_receives_rows(self, store):
        BatchLoader(store).insert_batch("industries", _industries(2))
        assert [r["name"] for r in store.rows("industries")] == ["Industry 0", "Industry 1"]
