from linear_samples import ALICE, BOB, at, make_cycle, make_issue

from linear_app.core.models import Snapshot, UserRef
from linear_app.features.workspace import (
    UNASSIGNED,
    assignee_options,
    build_workspace_context,
    filter_issues,
    format_cycle_period,
)

NOW = at(5, 12)


def _snapshot():
    cycle = make_cycle(start_day=2, end_day=8)
    other = make_cycle(start_day=9, end_day=15, cycle_id="cycle-2")
    issues = [
        make_issue("ENG-1", assignee=ALICE, cycle=cycle, estimate=3, state="started", created=at(1)),
        make_issue("ENG-2", assignee=BOB, cycle=cycle, estimate=2, state="completed", updated=at(4)),
        make_issue("ENG-3", cycle=cycle),
        make_issue("ENG-4", assignee=ALICE, cycle=other, due=at(14)),
    ]
    return Snapshot(issues=issues, cycles=[cycle, other], users=[], teams=[], fetched_at=NOW)


def test_filters_combine():
    issues = _snapshot().issues
    assert [i.identifier for i in filter_issues(issues, "cycle-1")] == ["ENG-1", "ENG-2", "ENG-3"]
    assert [i.identifier for i in filter_issues(issues, None, ALICE.id)] == ["ENG-1", "ENG-4"]
    assert [i.identifier for i in filter_issues(issues, "cycle-1", UNASSIGNED)] == ["ENG-3"]
    assert filter_issues(issues, "cycle-2", BOB.id) == []


def test_assignee_options_are_unique_and_sorted():
    assert assignee_options(_snapshot().issues) == [ALICE, BOB]


def test_cycle_period_label():
    assert format_cycle_period(make_cycle(start_day=2, end_day=8)) == "9/2 - 9/8 (7 days)"


def test_context_for_cycle():
    ctx = build_workspace_context(_snapshot(), NOW, cycle_id="cycle-1")
    assert ctx.cycle.id == "cycle-1"
    assert [i.identifier for i in ctx.timeline] == ["ENG-1", "ENG-2", "ENG-3"]
    assert len(ctx.positions) == len(ctx.timeline)
    assert [d.day for d in ctx.date_grid] == [2, 3, 4, 5, 6, 7, 8]
    assert ctx.today_index == 3
    assert ctx.total_points == 6
    assert ctx.remaining_points == 4
    assert ctx.assignees == [ALICE, BOB]


def test_unknown_cycle_does_not_filter():
    ctx = build_workspace_context(_snapshot(), NOW, cycle_id="missing")
    assert ctx.cycle is None
    assert len(ctx.issues) == 4


def test_empty_selection_still_renders():
    ctx = build_workspace_context(_snapshot(), NOW, cycle_id="cycle-2", assignee_id=BOB.id)
    assert ctx.timeline == []
    assert ctx.positions == []
    assert [p.total_planned for p in ctx.burndown] == [0] * 7
    assert ctx.today_index is None


def test_assignee_options_fold_accents():
    zoe = UserRef(id="user-zoe", name="zoe", display_name="Zoe")
    emile = UserRef(id="user-emile", name="emile", display_name="Émile")
    issues = [make_issue("ENG-1", assignee=zoe), make_issue("ENG-2", assignee=emile)]
    assert [a.display_name for a in assignee_options(issues)] == ["Émile", "Zoe"]


def test_burndown_points_cover_burndown_range():
    ctx = build_workspace_context(_snapshot(), NOW, cycle_id="cycle-1")
    assert ctx.burndown[0].date == ctx.burndown_range.start
    assert ctx.burndown[-1].date.date() == ctx.burndown_range.end.date()
