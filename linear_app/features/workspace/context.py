"""Pure helpers to build the chart workspace context (no Streamlit)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, tzinfo

from linear_app.analytics.burndown import compute_burndown, compute_burndown_range, today_index
from linear_app.analytics.collation import CollationKey, default_collation_key
from linear_app.analytics.dates import generate_date_grid, resolve_zone
from linear_app.analytics.layout import compute_layout, compute_time_range
from linear_app.analytics.timeline import build_timeline
from linear_app.core.models import (
    BurndownPoint,
    Cycle,
    Issue,
    ItemPosition,
    Snapshot,
    TimelineItem,
    TimeRange,
    UserRef,
)

from .filters import assignee_options, filter_issues, find_cycle


@dataclass(slots=True)
class WorkspaceContext:
    now: datetime
    issues: list[Issue]
    cycle: Cycle | None
    timeline: list[TimelineItem]
    time_range: TimeRange
    positions: list[ItemPosition]
    date_grid: list[datetime]
    burndown: list[BurndownPoint]
    burndown_range: TimeRange
    today_index: int | None
    assignees: list[UserRef] = field(default_factory=list)

    @property
    def total_points(self) -> float:
        return self.burndown[0].total_planned if self.burndown else 0

    @property
    def remaining_points(self) -> float:
        return self.burndown[-1].actual_remaining if self.burndown else 0


def build_workspace_context(
    snapshot: Snapshot,
    now: datetime,
    *,
    cycle_id: str | None = None,
    assignee_id: str | None = None,
    tz: tzinfo | str | None = None,
    collate: CollationKey = default_collation_key,
) -> WorkspaceContext:
    """Filter one snapshot and run both chart pipelines over it."""
    zone = resolve_zone(tz)
    cycle = find_cycle(snapshot.cycles, cycle_id)
    # An unknown cycle id filters nothing rather than everything
    issues = filter_issues(snapshot.issues, cycle.id if cycle else None, assignee_id)

    timeline = build_timeline(issues, cycle, now, zone, collate=collate)
    time_range = compute_time_range(timeline, cycle, now, zone)
    burndown_range = compute_burndown_range(issues, cycle, now, zone)
    burndown = compute_burndown(issues, cycle, now, zone, time_range=burndown_range)
    return WorkspaceContext(
        now=now,
        issues=issues,
        cycle=cycle,
        timeline=timeline,
        time_range=time_range,
        positions=compute_layout(timeline, time_range),
        date_grid=generate_date_grid(time_range.start, time_range.end, zone),
        burndown=burndown,
        burndown_range=burndown_range,
        today_index=today_index(burndown, now, zone),
        assignees=assignee_options(snapshot.issues, collate),
    )
