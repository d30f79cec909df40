"""Mapping raw Linear GraphQL nodes into domain models (and models into DataFrames)."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime
from typing import Any

import pandas as pd
import pytz

from .config import TIMEZONE
from .models import Cycle, CycleRef, Issue, IssueState, ParentRef, Team, TimelineItem, User, UserRef

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_dt(val) -> datetime | None:
    if not val:
        return None
    ts = pd.to_datetime(val, utc=True, errors="coerce")
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def parse_due_date(val) -> datetime | None:
    """Linear due dates are timeless ("2024-09-30"): read them as local midnight."""
    if isinstance(val, str) and _DATE_ONLY.match(val.strip()):
        ts = pd.Timestamp(val.strip()).tz_localize(pytz.timezone(TIMEZONE))
        return ts.to_pydatetime()
    return parse_dt(val)


def _estimate(val) -> float | None:
    if val is None or val == "":
        return None
    try:
        number = float(val)
    except (TypeError, ValueError):
        return None
    if pd.isna(number) or number < 0:
        return None
    return number


def map_user_ref(raw: dict[str, Any] | None) -> UserRef | None:
    if not raw or not raw.get("id"):
        return None
    name = raw.get("name") or ""
    return UserRef(id=raw["id"], name=name, display_name=raw.get("displayName") or name)


def map_cycle_ref(raw: dict[str, Any] | None) -> CycleRef | None:
    if not raw or not raw.get("id"):
        return None
    return CycleRef(
        id=raw["id"],
        name=raw.get("name") or f"Cycle {raw.get('number') or 'Unknown'}",
        starts_at=parse_dt(raw.get("startsAt")),
        ends_at=parse_dt(raw.get("endsAt")),
    )


def map_parent_ref(raw: dict[str, Any] | None) -> ParentRef | None:
    if not raw or not raw.get("id"):
        return None
    return ParentRef(
        id=raw["id"],
        title=raw.get("title") or "Untitled",
        identifier=raw.get("identifier") or "",
    )


def map_issue(raw: dict[str, Any]) -> Issue | None:
    """Map one issue node; returns None for issues without a workflow state."""
    state_raw = raw.get("state")
    if not state_raw:
        return None
    created = parse_dt(raw.get("createdAt"))
    updated = parse_dt(raw.get("updatedAt")) or created
    if created is None:
        raise ValueError(f"Issue {raw.get('identifier')!r} has no createdAt")
    return Issue(
        id=raw["id"],
        title=raw.get("title") or "Untitled",
        identifier=raw.get("identifier") or "",
        description=raw.get("description") or None,
        state=IssueState(
            id=state_raw.get("id") or "",
            name=state_raw.get("name") or "",
            type=state_raw.get("type") or "",
        ),
        assignee=map_user_ref(raw.get("assignee")),
        cycle=map_cycle_ref(raw.get("cycle")),
        parent=map_parent_ref(raw.get("parent")),
        created_at=created,
        updated_at=updated,
        due_date=parse_due_date(raw.get("dueDate")),
        started_at=parse_dt(raw.get("startedAt")),
        estimate=_estimate(raw.get("estimate")),
    )


def map_cycle(raw: dict[str, Any], *, now: datetime | None = None) -> Cycle:
    # Cycles without bounds collapse onto "now", mirroring how Linear shows drafts
    fallback = now or datetime.now(pytz.UTC)
    return Cycle(
        id=raw["id"],
        name=raw.get("name") or f"Cycle {raw.get('number') or 'Unknown'}",
        starts_at=parse_dt(raw.get("startsAt")) or fallback,
        ends_at=parse_dt(raw.get("endsAt")) or fallback,
        number=raw.get("number"),
    )


def map_user(raw: dict[str, Any]) -> User:
    name = raw.get("name") or ""
    return User(
        id=raw["id"],
        name=name,
        display_name=raw.get("displayName") or name,
        email=raw.get("email"),
    )


def map_team(raw: dict[str, Any]) -> Team:
    return Team(id=raw["id"], key=raw.get("key") or "", name=raw.get("name") or "")


def timeline_to_dataframe(items: Iterable[TimelineItem]) -> pd.DataFrame:
    rows = []
    for i in items:
        rows.append(
            {
                "id": i.id,
                "identifier": i.identifier,
                "title": i.title,
                "assignee": i.assignee.display_name if i.assignee else "Unassigned",
                "assignee_id": i.assignee.id if i.assignee else None,
                "state": i.state.name,
                "state_type": i.state.type,
                "progress": i.progress,
                "estimate": i.estimate,
                "start_date": i.start_date,
                "end_date": i.end_date,
                "parent": i.parent.identifier if i.parent else None,
                "has_children": i.has_children,
                "hierarchy_level": i.hierarchy_level,
                "hierarchy_path": i.hierarchy_path,
            }
        )
    return pd.DataFrame(rows)
