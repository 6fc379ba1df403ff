"""
analytics/dashboard.py — Fetch the dashboard tables and compose DashboardAnalytics.

Usage:
    from htw_pipeline.analytics.dashboard import build_dashboard

    result = build_dashboard(store, timeframe="yearly")
    if result.success:
        print(result.value.total_members)
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from htw_shared.config import settings
from htw_shared.datastore import DataStore
from htw_shared.exceptions import BackendError
from htw_shared.models import Company, Event, Industry, IslandData, Member
from htw_shared.models.base import TableModel
from htw_shared.result import Result
from htw_shared.time_utils import timeframe_cutoff
from htw_pipeline.analytics.aggregator import (
    DistributionItem,
    EventSummary,
    IslandSummary,
    SkillCount,
    TimeframeGrowth,
    TrendPoint,
    average_growth_rate,
    event_summary,
    island_summary,
    monthly_trend,
    percentage_distribution,
    skill_frequency,
    timeframe_growth,
    top_n,
    total_companies,
    total_members,
)

log = structlog.get_logger(__name__)

M = TypeVar("M", bound=TableModel)


class DashboardAnalytics(BaseModel):
    """Everything the analytics screen renders, computed in one pass."""

    timeframe: str
    as_of: date
    generated_at: datetime
    total_members: int
    total_companies: int
    total_industries: int
    total_events: int
    average_growth_rate: float
    member_growth: TimeframeGrowth
    company_growth: TimeframeGrowth
    top_industries: list[Industry]
    fastest_growing: list[Industry]
    industry_distribution: list[DistributionItem]
    islands: IslandSummary
    member_trend: list[TrendPoint]
    top_skills: list[SkillCount]
    events: EventSummary


def _load(store: DataStore, model: type[M], **fetch_kwargs) -> list[M]:
    """Fetch a table and validate each row; rows that fail validation are skipped."""
    records: list[M] = []
    skipped = 0
    for row in store.fetch(model.table, **fetch_kwargs):
        try:
            records.append(model.from_db_row(row))
        except ValidationError:
            skipped += 1
    if skipped:
        log.warning("rows_skipped", table=model.table, skipped=skipped)
    return records


def build_dashboard(
    store: DataStore,
    *,
    timeframe: str | None = None,
    now: date | None = None,
    top: int | None = None,
) -> Result[DashboardAnalytics]:
    """
    Fetch industries, islands, members, companies and events, then aggregate.

    Args:
        store:     Data store to read from.
        timeframe: "monthly" | "quarterly" | "yearly"; defaults to settings.default_timeframe.
        now:       Reference date for growth and trend; defaults to today.
        top:       Length of the ranked lists; defaults to settings.top_n.

    Returns:
        Result.ok(DashboardAnalytics), or Result.fail(BackendError) with the
        store's error unchanged when any fetch fails.

    Raises:
        ValueError: unknown timeframe.
    """
    timeframe = timeframe or settings.default_timeframe
    today = now or date.today()
    if isinstance(today, datetime):
        today = today.date()
    top = settings.top_n if top is None else top
    timeframe_cutoff(today, timeframe)

    dash_log = log.bind(timeframe=timeframe, as_of=today.isoformat())
    try:
        industries = _load(store, Industry, order_by="member_count", descending=True)
        islands = _load(store, IslandData, order_by="member_count", descending=True)
        members = _load(store, Member)
        companies = _load(store, Company)
        events = _load(store, Event, order_by="event_date", descending=True)
    except BackendError as exc:
        dash_log.error("dashboard_fetch_failed", code=exc.code, error=str(exc))
        return Result.fail(exc)

    member_dates = [m.joined_on for m in members]
    company_dates = [c.created_at.date() if c.created_at else None for c in companies]

    analytics = DashboardAnalytics(
        timeframe=timeframe,
        as_of=today,
        generated_at=datetime.now(timezone.utc),
        total_members=total_members(industries, members),
        total_companies=total_companies(industries, companies),
        total_industries=len(industries),
        total_events=len(events),
        average_growth_rate=average_growth_rate(industries),
        member_growth=timeframe_growth(member_dates, timeframe, today),
        company_growth=timeframe_growth(company_dates, timeframe, today),
        top_industries=top_n(industries, "member_count", top),
        fastest_growing=top_n(industries, "growth_rate", top),
        industry_distribution=percentage_distribution(industries, "member_count"),
        islands=island_summary(islands),
        member_trend=monthly_trend(member_dates, today),
        top_skills=skill_frequency(members, top),
        events=event_summary(events),
    )
    dash_log.info(
        "dashboard_built",
        industries=len(industries),
        members=len(members),
        companies=len(companies),
        events=len(events),
    )
    return Result.ok(analytics)
