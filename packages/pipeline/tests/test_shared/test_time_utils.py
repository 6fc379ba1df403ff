"""
tests/test_shared/test_time_utils.py — Tests for date parsing and month helpers.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from htw_shared.time_utils import (
    month_key,
    parse_date,
    timeframe_cutoff,
    trailing_months,
)


class TestParseDate:
    @pytest.mark.parametrize(("raw", "expected"), [
        ("2024-01-15", date(2024, 1, 15)),
        ("2024-01-15T09:30:00+00:00", date(2024, 1, 15)),
        ("2024-01-15T09:30:00.123456Z", date(2024, 1, 15)),
        ("2024-01", date(2024, 1, 1)),
        (date(2024, 1, 15), date(2024, 1, 15)),
        (datetime(2024, 1, 15, 9, tzinfo=timezone.utc), date(2024, 1, 15)),
    ])
    def test_accepted_shapes(self, raw, expected):
        assert parse_date(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "  ", "someday", "2024-13-01", "2024-02-30", 20240115])
    def test_unreadable_is_none(self, raw):
        assert parse_date(raw) is None


class TestTimeframeCutoff:
    def test_calendar_month_arithmetic(self):
        assert timeframe_cutoff(date(2024, 5, 31), "monthly") == date(2024, 4, 30)
        assert timeframe_cutoff(date(2024, 5, 31), "quarterly") == date(2024, 2, 29)
        assert timeframe_cutoff(date(2024, 2, 29), "yearly") == date(2023, 2, 28)

    def test_unknown(self):
        with pytest.raises(ValueError, match="weekly"):
            timeframe_cutoff(date(2024, 5, 31), "weekly")


class TestTrailingMonths:
    def test_twelve_months_across_year_boundary(self):
        months = trailing_months(date(2024, 3, 9))
        assert len(months) == 12
        assert months[0] == date(2023, 4, 1)
        assert months[-1] == date(2024, 3, 1)
        assert len(set(months)) == 12

    def test_zero(self):
        assert trailing_months(date(2024, 3, 9), 0) == []

    def test_month_key(self):
        assert month_key(date(2024, 3, 9)) == "2024-03"
