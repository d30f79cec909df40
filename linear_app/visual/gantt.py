"""Gantt chart builder (Altair) for sorted timeline items."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

import altair as alt
import pandas as pd

from linear_app.analytics.dates import end_of_day, generate_date_grid, is_weekend, start_of_day
from linear_app.core.config import CHILD_PREFIX, SETTINGS, TODAY_COLOR, WEEKEND_COLOR
from linear_app.core.models import ItemPosition, TimelineItem, TimeRange

from .colors import assignee_color, state_color


def hierarchy_label(item: TimelineItem) -> str:
    """Row label with the child marker indented by hierarchy level."""
    text = f"{item.identifier} {item.title}"
    if item.hierarchy_level <= 0:
        return text
    indent = "  " * (item.hierarchy_level - 1)
    return f"{indent}{CHILD_PREFIX} {text}"


def timeline_frame(items: Sequence[TimelineItem], positions: Sequence[ItemPosition]) -> pd.DataFrame:
    rows = []
    for item, pos in zip(items, positions, strict=True):
        start = item.start_date
        end = item.end_date or item.start_date
        progress_end = None
        if start is not None and end is not None and item.progress > 0:
            progress_end = start + (end - start) * (item.progress / 100)
        rows.append(
            {
                "id": item.id,
                "identifier": item.identifier,
                "label": hierarchy_label(item),
                "title": item.title,
                "assignee": item.assignee.display_name if item.assignee else "Unassigned",
                "color": assignee_color(item.assignee.id if item.assignee else None),
                "state": item.state.name,
                "state_color": state_color(item.state.type),
                "progress": item.progress,
                "start": start,
                "end": end,
                "progress_end": progress_end,
                "left": round(pos.left, 2),
                "width": round(pos.width, 2),
                "hierarchy_level": item.hierarchy_level,
            }
        )
    return pd.DataFrame(rows)


def _day_bands(time_range: TimeRange) -> pd.DataFrame:
    days = generate_date_grid(time_range.start, time_range.end)
    return pd.DataFrame(
        {
            "date": days,
            "date_end": [end_of_day(d) for d in days],
            "weekend": [is_weekend(d) for d in days],
        }
    )


def gantt_chart(
    items: Sequence[TimelineItem],
    positions: Sequence[ItemPosition],
    time_range: TimeRange,
    now: datetime,
):
    """Layered chart: weekend shading, today band, assignee-colored bars, progress fill."""
    if not items:
        return None
    frame = timeline_frame(items, positions).dropna(subset=["start", "end"])
    if frame.empty:
        return None
    order = frame["label"].tolist()
    domain = [time_range.start.timestamp() * 1000, time_range.end.timestamp() * 1000]
    x_scale = alt.Scale(domain=domain)
    y = alt.Y("label:N", sort=order, title=None, axis=alt.Axis(labelLimit=360))
    height = max(SETTINGS.row_height * len(order), 120)

    layers = []
    bands = _day_bands(time_range)
    weekend = bands[bands["weekend"]]
    if not weekend.empty:
        layers.append(
            alt.Chart(weekend)
            .mark_rect(color=WEEKEND_COLOR)
            .encode(x=alt.X("date:T", scale=x_scale), x2="date_end:T")
        )
    today = pd.DataFrame({"start": [start_of_day(now)], "end": [end_of_day(now)]})
    today_band = (
        alt.Chart(today)
        .mark_rect(color=TODAY_COLOR, opacity=0.15)
        .encode(x=alt.X("start:T", scale=x_scale), x2="end:T")
    )

    bars = (
        alt.Chart(frame)
        .mark_bar(cornerRadius=4, opacity=0.9)
        .encode(
            x=alt.X("start:T", title="Date", scale=x_scale),
            x2="end:T",
            y=y,
            color=alt.Color("color:N", scale=None),
            tooltip=[
                alt.Tooltip("identifier:N", title="Issue"),
                alt.Tooltip("title:N", title="Title"),
                alt.Tooltip("assignee:N", title="Assignee"),
                alt.Tooltip("state:N", title="State"),
                alt.Tooltip("progress:Q", title="Progress %"),
                alt.Tooltip("start:T", title="Start"),
                alt.Tooltip("end:T", title="End"),
                alt.Tooltip("left:Q", title="Offset %"),
                alt.Tooltip("width:Q", title="Span %"),
            ],
        )
    )
    layers += [today_band, bars]
    started = frame.dropna(subset=["progress_end"])
    if not started.empty:
        layers.append(
            alt.Chart(started)
            .mark_bar(color="white", opacity=0.3, cornerRadius=4)
            .encode(x=alt.X("start:T", scale=x_scale), x2="progress_end:T", y=y)
        )
    return alt.layer(*layers).properties(height=height)
