"""Timeline item building and ordering for the Gantt view."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, tzinfo

from linear_app.core.models import Cycle, Issue, TimelineItem
from linear_app.core.state import progress_from_state, state_priority

from .collation import CollationKey, default_collation_key
from .dates import end_of_day, parse_instant, resolve_zone
from .hierarchy import HierarchyInfo, build_children_map, resolve_hierarchy


def resolve_start_date(
    issue: Issue,
    cycle: Cycle | None = None,
    tz: tzinfo | str | None = None,
) -> datetime | None:
    """``started_at`` when known, else ``created_at``.

    With a cycle selected, a never-started issue created before the cycle
    opened is pulled forward to the cycle start. Late starts are left alone.
    """
    zone = resolve_zone(tz)
    started = parse_instant(issue.started_at, zone)
    if started is not None:
        return started
    created = parse_instant(issue.created_at, zone)
    if cycle is None or created is None:
        return created
    cycle_start = parse_instant(cycle.starts_at, zone)
    if cycle_start is not None and created < cycle_start:
        return cycle_start
    return created


def resolve_end_date(issue: Issue, now, tz: tzinfo | str | None = None) -> datetime | None:
    """``due_date`` when set, else the end of ``now``'s day."""
    zone = resolve_zone(tz)
    due = parse_instant(issue.due_date, zone)
    if due is not None:
        return due
    return end_of_day(now, zone)


def build_timeline_items(
    issues: Sequence[Issue],
    cycle: Cycle | None,
    now,
    tz: tzinfo | str | None = None,
) -> list[TimelineItem]:
    """Project issues onto display-ready timeline items (input order kept)."""
    zone = resolve_zone(tz)
    hierarchy = resolve_hierarchy(issues)
    children = build_children_map(issues)
    items: list[TimelineItem] = []
    for issue in issues:
        info = hierarchy.get(issue.id) or HierarchyInfo(level=0, path=issue.identifier)
        items.append(
            TimelineItem(
                id=issue.id,
                title=issue.title,
                identifier=issue.identifier,
                assignee=issue.assignee,
                start_date=resolve_start_date(issue, cycle, zone),
                end_date=resolve_end_date(issue, now, zone),
                state=issue.state,
                progress=progress_from_state(issue.state.type),
                estimate=issue.estimate,
                parent=issue.parent,
                has_children=bool(children.get(issue.id)),
                hierarchy_level=info.level,
                hierarchy_path=info.path,
            )
        )
    return items


def timeline_sort_key(item: TimelineItem, collate: CollationKey = default_collation_key) -> tuple:
    """Total-order key: assignee, hierarchy path, start, state priority, identifier.

    Unassigned items follow every assigned one; a missing start date sorts
    before any real date; the issue id settles exact ties.
    """
    name = item.assignee.display_name if item.assignee is not None else None
    assignee_key = (0, collate(name)) if name else (1, ())
    start_key = (1, item.start_date.timestamp()) if item.start_date is not None else (0, 0.0)
    return (
        assignee_key,
        collate(item.hierarchy_path),
        start_key,
        state_priority(item.state.type),
        collate(item.identifier),
        item.id,
    )


def sort_timeline_items(
    items: Iterable[TimelineItem],
    collate: CollationKey = default_collation_key,
) -> list[TimelineItem]:
    return sorted(items, key=lambda item: timeline_sort_key(item, collate))


def build_timeline(
    issues: Sequence[Issue],
    cycle: Cycle | None,
    now,
    tz: tzinfo | str | None = None,
    *,
    collate: CollationKey = default_collation_key,
) -> list[TimelineItem]:
    """Build and sort timeline items for the current view."""
    return sort_timeline_items(build_timeline_items(issues, cycle, now, tz), collate)
