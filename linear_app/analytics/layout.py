"""Gantt layout: time range derivation and bar positions (pure functions)."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import tzinfo

from linear_app.core.config import MIN_BAR_WIDTH_PERCENT
from linear_app.core.models import Cycle, ItemPosition, TimelineItem, TimeRange

from .dates import days_diff, end_of_day, max_date, min_date, resolve_zone, start_of_day


def cycle_time_range(cycle: Cycle, tz: tzinfo | str | None = None) -> TimeRange:
    zone = resolve_zone(tz)
    return TimeRange(start=start_of_day(cycle.starts_at, zone), end=end_of_day(cycle.ends_at, zone))


def compute_time_range(
    items: Sequence[TimelineItem],
    cycle: Cycle | None,
    now,
    tz: tzinfo | str | None = None,
) -> TimeRange:
    """Cycle bounds when a cycle is selected, else the span of all item dates.

    Both ends are day-aligned. With no items the range is today.
    """
    zone = resolve_zone(tz)
    if cycle is not None:
        return cycle_time_range(cycle, zone)
    dates = [d for item in items for d in (item.start_date, item.end_date) if d is not None]
    if not dates:
        return TimeRange(start=start_of_day(now, zone), end=end_of_day(now, zone))
    return TimeRange(
        start=start_of_day(min_date(dates, now, zone), zone),
        end=end_of_day(max_date(dates, now, zone), zone),
    )


def compute_item_position(item: TimelineItem, time_range: TimeRange) -> ItemPosition:
    """Left offset and width of an item's bar, as percentages of the range.

    Zero-length ranges count as one day. Bars never get narrower than
    MIN_BAR_WIDTH_PERCENT so that same-day items stay visible.
    """
    total_days = days_diff(time_range.start, time_range.end) or 1
    if item.start_date is None:
        return ItemPosition(left=0.0, width=MIN_BAR_WIDTH_PERCENT)
    start_offset = days_diff(time_range.start, item.start_date)
    duration = days_diff(item.start_date, item.end_date) if item.end_date is not None else 1
    return ItemPosition(
        left=start_offset / total_days * 100,
        width=max(duration / total_days * 100, MIN_BAR_WIDTH_PERCENT),
    )


def compute_layout(items: Sequence[TimelineItem], time_range: TimeRange) -> list[ItemPosition]:
    return [compute_item_position(item, time_range) for item in items]
