from datetime import UTC, datetime

import pytest
from linear_samples import ALICE, TZ, at, make_issue

from linear_app.analytics.timeline import build_timeline_items
from linear_app.core.mappers import (
    map_cycle,
    map_issue,
    map_team,
    map_user,
    parse_due_date,
    timeline_to_dataframe,
)


def _raw_issue(**overrides):
    raw = {
        "id": "4f1c6d1e-0000-4000-8000-000000000001",
        "title": "Write docs",
        "identifier": "ENG-7",
        "description": "",
        "state": {"id": "s1", "name": "In Progress", "type": "started"},
        "assignee": {"id": "u1", "name": "alice", "displayName": "Alice"},
        "cycle": {"id": "c1", "name": None, "number": 12, "startsAt": "2024-09-02T00:00:00.000Z", "endsAt": None},
        "parent": {"id": "p1", "title": "Epic", "identifier": "ENG-1"},
        "createdAt": "2024-09-01T00:00:00.000Z",
        "updatedAt": "2024-09-03T12:00:00.000Z",
        "dueDate": "2024-09-30",
        "startedAt": None,
        "estimate": 3,
    }
    raw.update(overrides)
    return raw


def test_map_issue_full_node():
    issue = map_issue(_raw_issue())
    assert issue.identifier == "ENG-7"
    assert issue.description is None
    assert issue.state.type == "started"
    assert issue.assignee.display_name == "Alice"
    assert issue.cycle.name == "Cycle 12"
    assert issue.cycle.ends_at is None
    assert issue.parent.identifier == "ENG-1"
    assert issue.created_at == datetime(2024, 9, 1, tzinfo=UTC)
    assert issue.started_at is None
    assert issue.estimate == 3.0


def test_due_date_is_local_midnight():
    due = parse_due_date("2024-09-30")
    assert due == TZ.localize(datetime(2024, 9, 30))
    assert parse_due_date(None) is None
    assert parse_due_date("2024-09-30T05:00:00Z") == datetime(2024, 9, 30, 5, tzinfo=UTC)


def test_map_issue_without_state_is_skipped():
    assert map_issue(_raw_issue(state=None)) is None


def test_map_issue_requires_created_at():
    with pytest.raises(ValueError):
        map_issue(_raw_issue(createdAt=None))


def test_map_issue_optional_fields():
    issue = map_issue(_raw_issue(assignee=None, parent=None, cycle=None, estimate=None, updatedAt=None, dueDate=None))
    assert issue.assignee is None
    assert issue.parent is None
    assert issue.cycle is None
    assert issue.estimate is None
    assert issue.due_date is None
    assert issue.updated_at == issue.created_at


def test_map_cycle_falls_back_to_now():
    now = at(10)
    cycle = map_cycle({"id": "c2", "number": 4, "startsAt": None, "endsAt": "2024-09-20T00:00:00Z"}, now=now)
    assert cycle.name == "Cycle 4"
    assert cycle.starts_at == now
    assert cycle.ends_at == datetime(2024, 9, 20, tzinfo=UTC)


def test_map_user_and_team():
    user = map_user({"id": "u2", "name": "bob", "displayName": None, "email": "bob@example.com"})
    assert user.display_name == "bob"
    assert user.email == "bob@example.com"
    team = map_team({"id": "t1", "key": "ENG", "name": "Engineering"})
    assert (team.key, team.name) == ("ENG", "Engineering")


def test_timeline_to_dataframe():
    items = build_timeline_items([make_issue("ENG-1", assignee=ALICE), make_issue("ENG-2")], None, at(10))
    df = timeline_to_dataframe(items)
    assert list(df["assignee"]) == ["Alice", "Unassigned"]
    assert set(df["progress"]) == {0}
    assert "hierarchy_path" in df.columns
