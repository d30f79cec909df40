"""Sample builders shared by the test modules."""

from __future__ import annotations

from datetime import datetime

import pytz

from linear_app.core.config import TIMEZONE
from linear_app.core.models import Cycle, CycleRef, Issue, IssueState, ParentRef, UserRef

TZ = pytz.timezone(TIMEZONE)

ALICE = UserRef(id="user-alice", name="alice", display_name="Alice")
BOB = UserRef(id="user-bob", name="bob", display_name="Bob")

STATE_NAMES = {
    "backlog": "Backlog",
    "unstarted": "Todo",
    "started": "In Progress",
    "completed": "Done",
    "canceled": "Canceled",
}


def at(day: int, hour: int = 9, minute: int = 0, month: int = 9) -> datetime:
    """Local instant in September 2024 (2024-09-01 is a Sunday)."""
    return TZ.localize(datetime(2024, month, day, hour, minute))


def make_issue(
    identifier: str,
    *,
    state: str = "unstarted",
    assignee: UserRef | None = None,
    parent: Issue | None = None,
    created: datetime | None = None,
    updated: datetime | None = None,
    due: datetime | None = None,
    started: datetime | None = None,
    estimate: float | None = None,
    cycle: Cycle | None = None,
) -> Issue:
    created = created or at(1)
    return Issue(
        id=f"id-{identifier}",
        title=f"Issue {identifier}",
        identifier=identifier,
        state=IssueState(id=f"state-{state}", name=STATE_NAMES.get(state, state), type=state),
        created_at=created,
        updated_at=updated or created,
        assignee=assignee,
        parent=ParentRef(id=parent.id, title=parent.title, identifier=parent.identifier) if parent else None,
        cycle=CycleRef(id=cycle.id, name=cycle.name, starts_at=cycle.starts_at, ends_at=cycle.ends_at)
        if cycle
        else None,
        due_date=due,
        started_at=started,
        estimate=estimate,
    )


def make_cycle(start_day: int = 2, end_day: int = 8, cycle_id: str = "cycle-1") -> Cycle:
    return Cycle(
        id=cycle_id,
        name=f"Cycle {cycle_id}",
        starts_at=at(start_day, 0),
        ends_at=at(end_day, 23, 59),
        number=1,
    )
