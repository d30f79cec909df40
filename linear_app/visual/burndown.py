"""Burndown chart builder (Altair)."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

import altair as alt
import pandas as pd

from linear_app.analytics.burndown import burndown_frame
from linear_app.analytics.dates import start_of_day
from linear_app.core.config import ACTUAL_LINE_COLOR, PLANNED_LINE_COLOR, SETTINGS, TODAY_COLOR
from linear_app.core.models import BurndownPoint

SERIES_LABELS = {
    "planned_remaining": "Planned",
    "actual_remaining": "Actual",
}


def burndown_long(points: Sequence[BurndownPoint]) -> pd.DataFrame:
    """Planned/actual series in long form (one row per day and series)."""
    frame = burndown_frame(points)
    if frame.empty:
        return pd.DataFrame(columns=["date", "series", "remaining"])
    long = frame.melt(
        id_vars=["date"],
        value_vars=list(SERIES_LABELS),
        var_name="series",
        value_name="remaining",
    )
    long["series"] = long["series"].map(SERIES_LABELS)
    return long


def burndown_chart(points: Sequence[BurndownPoint], now: datetime, today_idx: int | None = None):
    if not points:
        return None
    long = burndown_long(points)
    max_y = max(1, *(max(p.planned_remaining, p.actual_remaining, p.total_planned) for p in points))
    color = alt.Color(
        "series:N",
        scale=alt.Scale(domain=list(SERIES_LABELS.values()), range=[PLANNED_LINE_COLOR, ACTUAL_LINE_COLOR]),
        legend=alt.Legend(title=None, orient="top"),
    )
    lines = (
        alt.Chart(long)
        .mark_line(point=True)
        .encode(
            x=alt.X("date:T", title="Date"),
            y=alt.Y("remaining:Q", title="Remaining Points", scale=alt.Scale(domain=[0, max_y])),
            color=color,
            strokeDash=alt.condition(
                alt.datum.series == "Planned",
                alt.value([6, 4]),
                alt.value([1, 0]),
            ),
            tooltip=[
                alt.Tooltip("date:T", title="Date"),
                alt.Tooltip("series:N", title="Series"),
                alt.Tooltip("remaining:Q", title="Remaining", format=".1f"),
            ],
        )
    )
    layers = [lines]
    if today_idx is not None:
        today = pd.DataFrame({"date": [start_of_day(now)]})
        layers.append(alt.Chart(today).mark_rule(color=TODAY_COLOR, strokeWidth=2).encode(x="date:T"))
    return alt.layer(*layers).properties(height=SETTINGS.chart_height)
