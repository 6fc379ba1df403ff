"""
analytics/aggregator.py — Dashboard aggregations over typed table records.

Pure functions: records in, small pydantic result models out. Grouping,
ranking and bucketing run on polars frames built from the records.

Every function accepts an empty (or None) collection and returns zeros or
an empty list; no function ever returns NaN or infinity.

Usage:
    from htw_pipeline.analytics.aggregator import (
        average_growth_rate, monthly_trend, top_n, timeframe_growth,
    )

    top = top_n(industries, "member_count", 5)
    growth = timeframe_growth([m.joined_on for m in members], "quarterly", date.today())
    trend = monthly_trend([m.joined_on for m in members], date.today())
"""

from __future__ import annotations

import math
from datetime import date
from typing import Any, Iterable, Sequence, TypeVar

import polars as pl
from pydantic import BaseModel

from htw_shared.models import Company, Event, Industry, IslandData, Member
from htw_shared.time_utils import month_key, timeframe_cutoff, trailing_months

T = TypeVar("T")


class DistributionItem(BaseModel):
    name: str
    count: int
    percentage: float


class TimeframeGrowth(BaseModel):
    timeframe: str
    cutoff: date
    in_timeframe: int
    prior: int
    growth_rate: float


class TrendPoint(BaseModel):
    month: str
    month_start: date
    new: int
    cumulative: int


class SkillCount(BaseModel):
    skill: str
    count: int


class EventSummary(BaseModel):
    total_events: int = 0
    htw_events: int = 0
    company_events: int = 0
    total_attendees: int = 0
    average_attendance: float = 0.0


class IslandShare(BaseModel):
    name: str
    member_count: int
    company_count: int
    percentage: float
    members_per_company: float
    population: int | None = None
    tech_percentage: float | None = None


class IslandSummary(BaseModel):
    total_members: int = 0
    total_companies: int = 0
    islands: list[IslandShare] = []


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _number(value: Any) -> float:
    if value is None:
        return 0.0
    number = float(value)
    return number if math.isfinite(number) else 0.0


def _column(rows: Sequence[Any] | None, field: str) -> pl.Series:
    """Numeric field of each row as Float64; None and non-finite become 0."""
    return pl.Series(field, [_number(getattr(r, field, None)) for r in rows or []], dtype=pl.Float64)


def _dates(dates: Iterable[date | None], until: date) -> pl.DataFrame:
    """Known dates up to and including ``until``; later ones are not counted anywhere."""
    return pl.DataFrame(
        {"d": [d for d in dates if d is not None]},
        schema={"d": pl.Date},
    ).filter(pl.col("d") <= until)


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------


def sum_field(rows: Sequence[Any] | None, field: str) -> float:
    """Sum of a numeric field; missing values count as 0."""
    return float(_column(rows, field).sum())


def total_members(
    industries: Sequence[Industry] | None,
    members: Sequence[Member] | None = None,
) -> int:
    """
    Member total for the dashboard.

    When member rows are supplied their count wins; the industry
    member_count rollup is used only when they are not.
    """
    if members is not None:
        return len(members)
    return int(sum_field(industries, "member_count"))


def total_companies(
    industries: Sequence[Industry] | None,
    companies: Sequence[Company] | None = None,
) -> int:
    """Company total; same precedence rule as total_members."""
    if companies is not None:
        return len(companies)
    return int(sum_field(industries, "company_count"))


def average_growth_rate(industries: Sequence[Industry] | None) -> float:
    """Mean industry growth_rate, 0.0 when there are no industries."""
    if not industries:
        return 0.0
    mean = _column(industries, "growth_rate").mean()
    return float(mean) if mean is not None else 0.0


# ---------------------------------------------------------------------------
# Rankings and shares
# ---------------------------------------------------------------------------


def top_n(rows: Sequence[T] | None, field: str, n: int) -> list[T]:
    """
    The ``n`` rows with the largest ``field``, descending.

    Ties keep their input order. None values rank as 0.
    """
    if not rows or n <= 0:
        return []
    ranked = (
        pl.DataFrame([
            pl.Series("idx", list(range(len(rows))), dtype=pl.Int64),
            _column(rows, field).alias("key"),
        ])
        .sort("key", descending=True, maintain_order=True)
        .head(n)
    )
    return [rows[i] for i in ranked.get_column("idx").to_list()]


def percentage_distribution(
    rows: Sequence[Any] | None,
    field: str = "member_count",
    *,
    label: str = "name",
    sort: bool = True,
) -> list[DistributionItem]:
    """
    Each row's share of the field total, in percent.

    All shares are 0.0 when the total is zero. With ``sort`` the result is
    ordered by count descending (stable); otherwise input order is kept.
    """
    if not rows:
        return []
    df = pl.DataFrame(
        {
            "name": [str(getattr(r, label, "") or "") for r in rows],
            "count": [int(_number(getattr(r, field, None))) for r in rows],
        },
        schema={"name": pl.String, "count": pl.Int64},
    )
    total = df.get_column("count").sum()
    if total > 0:
        share = (pl.col("count") / total * 100).alias("percentage")
    else:
        share = pl.lit(0.0, dtype=pl.Float64).alias("percentage")
    df = df.with_columns(share)
    if sort:
        df = df.sort("count", descending=True, maintain_order=True)
    return [DistributionItem(**row) for row in df.iter_rows(named=True)]


def skill_frequency(members: Sequence[Member] | None, n: int = 5) -> list[SkillCount]:
    """Most common member skills, count descending; ties by first appearance."""
    if not members or n <= 0:
        return []
    counts = (
        pl.DataFrame(
            {"skill": [list(m.skills) for m in members]},
            schema={"skill": pl.List(pl.String)},
        )
        .explode("skill")
        .with_columns(pl.col("skill").str.strip_chars())
        .filter(pl.col("skill").is_not_null() & (pl.col("skill") != ""))
        .group_by("skill", maintain_order=True)
        .agg(pl.len().alias("count"))
        .sort("count", descending=True, maintain_order=True)
        .head(n)
    )
    return [SkillCount(skill=s, count=int(c)) for s, c in counts.iter_rows()]


# ---------------------------------------------------------------------------
# Time buckets
# ---------------------------------------------------------------------------


def timeframe_growth(
    dates: Iterable[date | None],
    timeframe: str,
    now: date,
) -> TimeframeGrowth:
    """
    Compare records dated on/after the timeframe cutoff with those before it.

    growth_rate = in_timeframe / max(prior, 1) * 100. The floor of 1 on the
    denominator means a first-ever batch of N rows reports N * 100 percent.
    Undated rows and rows dated after ``now`` are ignored, matching
    monthly_trend.

    Raises:
        ValueError: unknown timeframe.
    """
    cutoff = timeframe_cutoff(now, timeframe)
    df = _dates(dates, now)
    in_timeframe = df.filter(pl.col("d") >= cutoff).height
    prior = df.height - in_timeframe
    return TimeframeGrowth(
        timeframe=timeframe,
        cutoff=cutoff,
        in_timeframe=in_timeframe,
        prior=prior,
        growth_rate=in_timeframe / max(prior, 1) * 100,
    )


def monthly_trend(
    dates: Iterable[date | None],
    now: date,
    months: int = 12,
) -> list[TrendPoint]:
    """
    New records per calendar month for the trailing ``months`` months.

    Always one point per month (zero-filled), oldest first, ending with
    now's month. ``cumulative`` starts from the number of records dated
    before the window. Records dated after ``now`` are left out.
    """
    spine = trailing_months(now, months)
    if not spine:
        return []
    first, last = spine[0], spine[-1]

    df = _dates(dates, now).with_columns(pl.col("d").dt.truncate("1mo").alias("month"))
    before = df.filter(pl.col("month") < first).height
    counts = (
        df.filter((pl.col("month") >= first) & (pl.col("month") <= last))
        .group_by("month")
        .agg(pl.len().alias("new"))
    )

    trend = (
        pl.DataFrame({"month": spine}, schema={"month": pl.Date})
        .join(counts, on="month", how="left")
        .sort("month")
        .with_columns(pl.col("new").fill_null(0).cast(pl.Int64))
        .with_columns((pl.col("new").cum_sum() + before).alias("cumulative"))
    )
    return [
        TrendPoint(
            month=month_key(row["month"]),
            month_start=row["month"],
            new=row["new"],
            cumulative=row["cumulative"],
        )
        for row in trend.iter_rows(named=True)
    ]


# ---------------------------------------------------------------------------
# Screen summaries
# ---------------------------------------------------------------------------


def event_summary(events: Sequence[Event] | None) -> EventSummary:
    if not events:
        return EventSummary()
    total = len(events)
    attendees = sum(e.attendee_count for e in events)
    return EventSummary(
        total_events=total,
        htw_events=sum(1 for e in events if e.event_type == "htw"),
        company_events=sum(1 for e in events if e.event_type == "company"),
        total_attendees=attendees,
        average_attendance=attendees / total,
    )


def island_summary(islands: Sequence[IslandData] | None) -> IslandSummary:
    """
    Per-island share of members plus members-per-company.

    Islands are ordered by member_count descending (stable).
    """
    if not islands:
        return IslandSummary()

    df = pl.DataFrame(
        {
            "name": [i.name for i in islands],
            "member_count": [i.member_count for i in islands],
            "company_count": [i.company_count for i in islands],
            "population": [i.population for i in islands],
            "tech_percentage": [i.tech_percentage for i in islands],
        },
        schema={
            "name": pl.String,
            "member_count": pl.Int64,
            "company_count": pl.Int64,
            "population": pl.Int64,
            "tech_percentage": pl.Float64,
        },
    )
    members = int(df.get_column("member_count").sum())
    companies = int(df.get_column("company_count").sum())

    df = df.with_columns(
        (
            (pl.col("member_count") / members * 100) if members > 0
            else pl.lit(0.0, dtype=pl.Float64)
        ).alias("percentage"),
        pl.when(pl.col("company_count") > 0)
        .then(pl.col("member_count") / pl.col("company_count"))
        .otherwise(0.0)
        .alias("members_per_company"),
    ).sort("member_count", descending=True, maintain_order=True)

    return IslandSummary(
        total_members=members,
        total_companies=companies,
        islands=[IslandShare(**row) for row in df.iter_rows(named=True)],
    )
