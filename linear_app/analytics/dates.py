"""Date-grid utilities (pure functions).

All helpers accept timestamp-like values (``datetime``, ``date``,
``pd.Timestamp`` or ISO strings) and return timezone-aware ``datetime``
objects in the dashboard timezone unless another zone is passed. Nothing
here reads the wall clock except ``current_instant``; callers pass ``now``
explicitly so results are reproducible.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime, time, timedelta, tzinfo

import pandas as pd
import pytz

from linear_app.core.config import TIMEZONE

SECONDS_PER_DAY = 86400.0


def resolve_zone(tz: tzinfo | str | None = None) -> tzinfo:
    if tz is None:
        return pytz.timezone(TIMEZONE)
    if isinstance(tz, str):
        return pytz.timezone(tz)
    return tz


def _localize(zone: tzinfo, naive: datetime) -> datetime:
    localize = getattr(zone, "localize", None)
    if localize is not None:
        return localize(naive)
    return naive.replace(tzinfo=zone)


def current_instant(tz: tzinfo | str | None = None) -> datetime:
    """Wall-clock ``now`` in the dashboard timezone (page layer only)."""
    return datetime.now(resolve_zone(tz))


def parse_instant(value, tz: tzinfo | str | None = None) -> datetime | None:
    """Parse ``value`` into an aware datetime in ``tz``.

    Naive values are read as UTC. Returns None for empty or unparseable input.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    ts = pd.to_datetime(value, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.tz_convert(resolve_zone(tz)).to_pydatetime()


def start_of_day(value, tz: tzinfo | str | None = None) -> datetime | None:
    zone = resolve_zone(tz)
    instant = parse_instant(value, zone)
    if instant is None:
        return None
    return _localize(zone, datetime.combine(instant.date(), time.min))


def end_of_day(value, tz: tzinfo | str | None = None) -> datetime | None:
    zone = resolve_zone(tz)
    instant = parse_instant(value, zone)
    if instant is None:
        return None
    return _localize(zone, datetime.combine(instant.date(), time.max))


def add_days(value, days: int, tz: tzinfo | str | None = None) -> datetime | None:
    """Shift by calendar days, keeping the local wall-clock time."""
    zone = resolve_zone(tz)
    instant = parse_instant(value, zone)
    if instant is None:
        return None
    naive = instant.replace(tzinfo=None) + timedelta(days=days)
    return _localize(zone, naive)


def days_diff(start, end) -> int:
    """Whole days from ``start`` to ``end``; partial days round up."""
    start_dt = parse_instant(start)
    end_dt = parse_instant(end)
    if start_dt is None or end_dt is None:
        return 0
    return math.ceil((end_dt - start_dt).total_seconds() / SECONDS_PER_DAY)


def generate_date_grid(start, end, tz: tzinfo | str | None = None) -> list[datetime]:
    """Day-aligned instants from ``start``'s day through ``end``'s day, inclusive.

    Returns an empty list when ``end`` precedes ``start``.
    """
    zone = resolve_zone(tz)
    start_dt = parse_instant(start, zone)
    end_dt = parse_instant(end, zone)
    if start_dt is None or end_dt is None or start_dt > end_dt:
        return []
    days = pd.date_range(start_dt.date(), end_dt.date(), freq="D")
    return [_localize(zone, datetime.combine(day.date(), time.min)) for day in days]


def _valid_instants(values: Iterable, zone: tzinfo) -> list[datetime]:
    out: list[datetime] = []
    for value in values:
        instant = parse_instant(value, zone)
        if instant is not None:
            out.append(instant)
    return out


def min_date(values: Iterable, now, tz: tzinfo | str | None = None) -> datetime:
    """Earliest non-null value, or the start of ``now``'s day when there is none."""
    zone = resolve_zone(tz)
    valid = _valid_instants(values, zone)
    if not valid:
        return start_of_day(now, zone)
    return min(valid)


def max_date(values: Iterable, now, tz: tzinfo | str | None = None) -> datetime:
    """Latest non-null value, or the start of ``now``'s day when there is none."""
    zone = resolve_zone(tz)
    valid = _valid_instants(values, zone)
    if not valid:
        return start_of_day(now, zone)
    return max(valid)


def is_today(value, now, tz: tzinfo | str | None = None) -> bool:
    zone = resolve_zone(tz)
    instant = parse_instant(value, zone)
    current = parse_instant(now, zone)
    if instant is None or current is None:
        return False
    return instant.date() == current.date()


def is_weekend(value, tz: tzinfo | str | None = None) -> bool:
    instant = parse_instant(value, resolve_zone(tz))
    if instant is None:
        return False
    return instant.weekday() >= 5


def format_date_short(value, tz: tzinfo | str | None = None) -> str:
    instant = parse_instant(value, resolve_zone(tz))
    if instant is None:
        return ""
    return f"{instant.month}/{instant.day}"
