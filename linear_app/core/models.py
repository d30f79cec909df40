"""Domain data models for Linear issues, cycles, users, teams and derived chart rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class IssueState:
    id: str
    name: str
    type: str


@dataclass(slots=True)
class UserRef:
    id: str
    name: str
    display_name: str


@dataclass(slots=True)
class CycleRef:
    id: str
    name: str
    starts_at: datetime | None
    ends_at: datetime | None


@dataclass(slots=True)
class ParentRef:
    id: str
    title: str
    identifier: str


@dataclass(slots=True)
class Issue:
    id: str
    title: str
    identifier: str
    state: IssueState
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    assignee: UserRef | None = None
    cycle: CycleRef | None = None
    parent: ParentRef | None = None
    due_date: datetime | None = None
    started_at: datetime | None = None
    estimate: float | None = None


@dataclass(slots=True)
class Cycle:
    id: str
    name: str
    starts_at: datetime
    ends_at: datetime
    number: int | None = None


@dataclass(slots=True)
class User:
    id: str
    name: str
    display_name: str
    email: str | None = None


@dataclass(slots=True)
class Team:
    id: str
    key: str
    name: str


@dataclass(slots=True)
class Snapshot:
    """One complete fetch of the workspace; replaced wholesale on every sync."""

    issues: list[Issue] = field(default_factory=list)
    cycles: list[Cycle] = field(default_factory=list)
    users: list[User] = field(default_factory=list)
    teams: list[Team] = field(default_factory=list)
    fetched_at: datetime | None = None


# Derived (chart-facing) models


@dataclass(slots=True)
class TimelineItem:
    id: str
    title: str
    identifier: str
    assignee: UserRef | None
    start_date: datetime | None
    end_date: datetime | None
    state: IssueState
    progress: int
    estimate: float | None
    parent: ParentRef | None = None
    has_children: bool = False
    hierarchy_level: int = 0
    hierarchy_path: str = ""


@dataclass(slots=True)
class TimeRange:
    start: datetime
    end: datetime


@dataclass(slots=True)
class ItemPosition:
    left: float
    width: float


@dataclass(slots=True)
class BurndownPoint:
    date: datetime
    planned_remaining: float
    actual_remaining: float
    total_planned: float
