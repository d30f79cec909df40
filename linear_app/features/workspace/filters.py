"""Snapshot filtering helpers for the workspace view (pure functions)."""

from __future__ import annotations

from collections.abc import Sequence

from linear_app.analytics.collation import CollationKey, default_collation_key
from linear_app.analytics.dates import days_diff, format_date_short
from linear_app.core.models import Cycle, Issue, UserRef

UNASSIGNED = "unassigned"


def by_cycle(issues: Sequence[Issue], cycle_id: str | None) -> list[Issue]:
    if not cycle_id:
        return list(issues)
    return [i for i in issues if i.cycle is not None and i.cycle.id == cycle_id]


def by_assignee(issues: Sequence[Issue], assignee_id: str | None) -> list[Issue]:
    """Keep one assignee's issues; ``"unassigned"`` keeps issues with nobody assigned."""
    if not assignee_id:
        return list(issues)
    if assignee_id == UNASSIGNED:
        return [i for i in issues if i.assignee is None]
    return [i for i in issues if i.assignee is not None and i.assignee.id == assignee_id]


def filter_issues(
    issues: Sequence[Issue],
    cycle_id: str | None = None,
    assignee_id: str | None = None,
) -> list[Issue]:
    return by_assignee(by_cycle(issues, cycle_id), assignee_id)


def assignee_options(
    issues: Sequence[Issue],
    collate: CollationKey = default_collation_key,
) -> list[UserRef]:
    """Unique assignees of ``issues`` ordered by display name."""
    unique: dict[str, UserRef] = {}
    for issue in issues:
        if issue.assignee is not None:
            unique[issue.assignee.id] = issue.assignee
    return sorted(unique.values(), key=lambda a: collate(a.display_name))


def find_cycle(cycles: Sequence[Cycle], cycle_id: str | None) -> Cycle | None:
    if not cycle_id:
        return None
    return next((c for c in cycles if c.id == cycle_id), None)


def format_cycle_period(cycle: Cycle) -> str:
    """``"9/1 - 9/14 (14 days)"`` label shown beside the cycle selector."""
    length = abs(days_diff(cycle.starts_at, cycle.ends_at))
    return f"{format_date_short(cycle.starts_at)} - {format_date_short(cycle.ends_at)} ({length} days)"
