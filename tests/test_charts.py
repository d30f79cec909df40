import pandas as pd
from linear_samples import ALICE, at, make_cycle, make_issue

from linear_app.analytics.burndown import compute_burndown, today_index
from linear_app.analytics.layout import compute_layout, compute_time_range
from linear_app.analytics.timeline import build_timeline
from linear_app.core.config import ASSIGNEE_COLORS, DEFAULT_ASSIGNEE_COLOR, DEFAULT_STATE_COLOR
from linear_app.visual.burndown import burndown_chart, burndown_long
from linear_app.visual.colors import assignee_color, state_color
from linear_app.visual.gantt import gantt_chart, hierarchy_label, timeline_frame
from linear_app.visual.tables import prepare_timeline_table

NOW = at(5, 12)


def _timeline():
    parent = make_issue("ENG-1", assignee=ALICE, state="started", created=at(2), due=at(6))
    child = make_issue("ENG-2", assignee=ALICE, parent=parent, created=at(3))
    items = build_timeline([child, parent], None, NOW)
    time_range = compute_time_range(items, None, NOW)
    return items, compute_layout(items, time_range), time_range


def test_colors_are_stable():
    assert assignee_color(None) == DEFAULT_ASSIGNEE_COLOR
    assert assignee_color("user-alice") == assignee_color("user-alice")
    assert assignee_color("user-alice") in ASSIGNEE_COLORS
    assert state_color("Completed") == state_color("completed")
    assert state_color("triage") == DEFAULT_STATE_COLOR


def test_hierarchy_label_marks_children():
    items, _, _ = _timeline()
    assert hierarchy_label(items[0]) == "ENG-1 Issue ENG-1"
    assert hierarchy_label(items[1]) == "|_ ENG-2 Issue ENG-2"


def test_timeline_frame_progress_overlay():
    items, positions, _ = _timeline()
    frame = timeline_frame(items, positions)
    assert list(frame["identifier"]) == ["ENG-1", "ENG-2"]
    started = frame.iloc[0]
    assert started["progress_end"] == at(2) + (at(6) - at(2)) / 2
    assert pd.isna(frame.iloc[1]["progress_end"])


def test_gantt_chart_builds():
    items, positions, time_range = _timeline()
    assert gantt_chart(items, positions, time_range, NOW) is not None
    assert gantt_chart([], [], time_range, NOW) is None


def test_burndown_chart_builds():
    points = compute_burndown([make_issue("ENG-1", estimate=3)], make_cycle(), NOW)
    long = burndown_long(points)
    assert set(long["series"]) == {"Planned", "Actual"}
    assert len(long) == 2 * len(points)
    assert burndown_chart(points, NOW, today_index(points, NOW)) is not None
    assert burndown_chart([], NOW) is None


def test_prepare_timeline_table():
    items, _, _ = _timeline()
    df, cols, cfg = prepare_timeline_table(items)
    assert cols[0] == "Issue"
    assert df["Issue"].iloc[0].endswith("/ENG-1")
    assert df["title"].iloc[1] == "|_ Issue ENG-2"
    assert "progress" in cfg
    empty, empty_cols, empty_cfg = prepare_timeline_table([])
    assert empty.empty and empty_cols == [] and empty_cfg == {}


def test_gantt_tooltip_reports_layout_positions():
    items, positions, time_range = _timeline()
    chart = gantt_chart(items, positions, time_range, NOW)
    spec = chart.to_dict()
    fields = [t["field"] for layer in spec["layer"] for t in layer.get("encoding", {}).get("tooltip", [])]
    assert "left" in fields and "width" in fields
    frame = timeline_frame(items, positions)
    assert list(frame["left"]) == [round(p.left, 2) for p in positions]
