"""Burndown projection: planned vs. actual remaining points per day."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, tzinfo

import pandas as pd

from linear_app.core.config import (
    DAYS_PER_POINT,
    DEFAULT_BURNDOWN_DAYS,
    DEFAULT_ESTIMATE,
    DISPLAY_ORDER_BURNDOWN,
    MIN_ESTIMATED_DAYS,
)
from linear_app.core.models import BurndownPoint, Cycle, Issue, TimeRange
from linear_app.core.state import is_completed

from .dates import (
    add_days,
    end_of_day,
    generate_date_grid,
    max_date,
    min_date,
    parse_instant,
    resolve_zone,
    start_of_day,
)
from .layout import cycle_time_range


def effective_estimate(issue: Issue) -> float:
    """Points an issue contributes; missing (or zero) estimates count as DEFAULT_ESTIMATE."""
    return issue.estimate or DEFAULT_ESTIMATE


def total_planned(issues: Sequence[Issue]) -> float:
    return sum(effective_estimate(issue) for issue in issues)


def compute_burndown_range(
    issues: Sequence[Issue],
    cycle: Cycle | None,
    now,
    tz: tzinfo | str | None = None,
) -> TimeRange:
    """Cycle bounds, else the span of due/created dates, else the next 30 days."""
    zone = resolve_zone(tz)
    if cycle is not None:
        return cycle_time_range(cycle, zone)
    dates = [d for issue in issues for d in (issue.due_date or issue.created_at, issue.created_at) if d]
    if not dates:
        return TimeRange(
            start=start_of_day(now, zone),
            end=end_of_day(add_days(now, DEFAULT_BURNDOWN_DAYS, zone), zone),
        )
    return TimeRange(
        start=start_of_day(min_date(dates, now, zone), zone),
        end=end_of_day(max_date(dates, now, zone), zone),
    )


def planned_target_date(
    issue: Issue,
    cycle: Cycle | None,
    tz: tzinfo | str | None = None,
) -> datetime | None:
    """When an issue is planned to be done.

    In a cycle: its due date capped at the cycle end, or the cycle end when it
    has no due date. Outside a cycle: its due date, or ``created_at`` plus
    ``max(MIN_ESTIMATED_DAYS, points * DAYS_PER_POINT)`` days.
    """
    zone = resolve_zone(tz)
    due = parse_instant(issue.due_date, zone)
    if cycle is not None:
        cycle_end = parse_instant(cycle.ends_at, zone)
        if due is None or (cycle_end is not None and due > cycle_end):
            return cycle_end
        return due
    if due is not None:
        return due
    estimated_days = max(MIN_ESTIMATED_DAYS, effective_estimate(issue) * DAYS_PER_POINT)
    return add_days(issue.created_at, estimated_days, zone)


def actual_completion_date(
    issue: Issue,
    cycle: Cycle | None,
    tz: tzinfo | str | None = None,
) -> datetime | None:
    """``updated_at`` of a completed issue, clamped into the cycle when one is selected."""
    if not is_completed(issue.state.type):
        return None
    zone = resolve_zone(tz)
    completed = parse_instant(issue.updated_at, zone)
    if completed is None or cycle is None:
        return completed
    cycle_start = parse_instant(cycle.starts_at, zone)
    cycle_end = parse_instant(cycle.ends_at, zone)
    if cycle_start is not None and completed < cycle_start:
        return cycle_start
    if cycle_end is not None and completed > cycle_end:
        return cycle_end
    return completed


def _local_day(value: datetime | None, zone: tzinfo) -> date | None:
    instant = parse_instant(value, zone)
    return instant.date() if instant is not None else None


def compute_burndown(
    issues: Sequence[Issue],
    cycle: Cycle | None,
    now,
    tz: tzinfo | str | None = None,
    *,
    time_range: TimeRange | None = None,
) -> list[BurndownPoint]:
    """One point per grid day; an event on day ``d`` already counts on ``d``.

    ``time_range`` defaults to ``compute_burndown_range`` for the same inputs.
    """
    zone = resolve_zone(tz)
    if time_range is None:
        time_range = compute_burndown_range(issues, cycle, now, zone)
    total = total_planned(issues)
    events = [
        (
            effective_estimate(issue),
            _local_day(planned_target_date(issue, cycle, zone), zone),
            _local_day(actual_completion_date(issue, cycle, zone), zone),
        )
        for issue in issues
    ]
    points: list[BurndownPoint] = []
    for day in generate_date_grid(time_range.start, time_range.end, zone):
        current = day.date()
        planned_done = sum(pts for pts, target, _ in events if target is not None and target <= current)
        actual_done = sum(pts for pts, _, done in events if done is not None and done <= current)
        points.append(
            BurndownPoint(
                date=day,
                planned_remaining=max(0, total - planned_done),
                actual_remaining=max(0, total - actual_done),
                total_planned=total,
            )
        )
    return points


def today_index(points: Sequence[BurndownPoint], now, tz: tzinfo | str | None = None) -> int | None:
    """Position of today's point in the series, or None when today is out of range."""
    zone = resolve_zone(tz)
    today = _local_day(now, zone)
    for idx, point in enumerate(points):
        if _local_day(point.date, zone) == today:
            return idx
    return None


def burndown_frame(points: Sequence[BurndownPoint]) -> pd.DataFrame:
    if not points:
        return pd.DataFrame(columns=list(DISPLAY_ORDER_BURNDOWN))
    rows = [
        {
            "date": p.date,
            "planned_remaining": p.planned_remaining,
            "actual_remaining": p.actual_remaining,
            "total_planned": p.total_planned,
        }
        for p in points
    ]
    return pd.DataFrame(rows, columns=list(DISPLAY_ORDER_BURNDOWN))
