"""
time_utils.py — Date parsing and calendar-month helpers.

Supabase returns dates in a few shapes:
- Date columns: "2024-01-15"
- Timestamps: "2024-01-15T09:30:00+00:00", "2024-01-15T09:30:00.123456Z"
- Partial months typed by hand into CSVs: "2024-01"

Usage:
    from htw_shared.time_utils import parse_date, timeframe_cutoff, trailing_months

    parse_date("2024-01-15T09:30:00+00:00")        # date(2024, 1, 15)
    parse_date("2024-01")                           # date(2024, 1, 1)
    timeframe_cutoff(date(2024, 5, 20), "quarterly")  # date(2024, 2, 20)
    trailing_months(date(2024, 5, 20), 3)
    # [date(2024, 3, 1), date(2024, 4, 1), date(2024, 5, 1)]
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

from dateutil.relativedelta import relativedelta

from htw_shared.constants import TIMEFRAME_MONTHS

_ISO_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_ISO_MONTH = re.compile(r"(\d{4})-(\d{2})")


def parse_date(raw: Any) -> date | None:
    """
    Coerce a backend or CSV value into a date.

    Timestamps are truncated to their calendar date; anything that cannot
    be read returns None rather than raising.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        return None

    s = raw.strip()
    if not s:
        return None

    m = _ISO_DATE.match(s)
    if m:
        try:
            return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            return None

    m = _ISO_MONTH.fullmatch(s)
    if m:
        try:
            return date(int(m.group(1)), int(m.group(2)), 1)
        except ValueError:
            return None

    return None


def timeframe_cutoff(now: date, timeframe: str) -> date:
    """
    Return the first date counted as "in timeframe" for a dashboard timeframe.

    Calendar months are subtracted, so 31 May minus one month is 30 April.

    Raises:
        ValueError: for an unknown timeframe.
    """
    try:
        months = TIMEFRAME_MONTHS[timeframe]
    except KeyError:
        raise ValueError(
            f"Unknown timeframe {timeframe!r}; expected one of {', '.join(TIMEFRAME_MONTHS)}"
        ) from None
    return now - relativedelta(months=months)


def trailing_months(now: date, months: int = 12) -> list[date]:
    """First-of-month dates for the `months` calendar months ending with now's month."""
    if months <= 0:
        return []
    end = now.replace(day=1)
    return [end - relativedelta(months=back) for back in range(months - 1, -1, -1)]


def month_key(d: date) -> str:
    """'YYYY-MM' label for a calendar month."""
    return f"{d.year:04d}-{d.month:02d}"
