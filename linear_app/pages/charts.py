"""Charts page: burndown above the Gantt timeline for the filtered snapshot.

A sync fetches one complete snapshot and swaps it into session state only
after every collection arrived; failures keep the previous snapshot and
offer a retry.
"""

from __future__ import annotations

import logging

import streamlit as st

from linear_app.analytics.dates import current_instant, format_date_short
from linear_app.app import register_page
from linear_app.core.config import SETTINGS
from linear_app.core.linear_client import LinearAPIError
from linear_app.core.models import Snapshot
from linear_app.core.service import IssueService
from linear_app.features.workspace import (
    UNASSIGNED,
    assignee_options,
    build_workspace_context,
    format_cycle_period,
)
from linear_app.visual.burndown import burndown_chart
from linear_app.visual.gantt import gantt_chart
from linear_app.visual.progress import ProgressReporter
from linear_app.visual.tables import prepare_timeline_table

logger = logging.getLogger(__name__)


def sync_snapshot(service: IssueService) -> Snapshot | None:
    reporter = ProgressReporter("Syncing with Linear")
    try:
        snapshot = service.fetch_snapshot(now=current_instant(), progress=reporter.callback)
    except LinearAPIError as exc:
        logger.error("Sync failed: %s", exc)
        reporter.error(str(exc))
        st.session_state["sync_error"] = str(exc)
        return None
    st.session_state["snapshot"] = snapshot
    st.session_state.pop("sync_error", None)
    reporter.complete(f"Loaded {len(snapshot.issues)} issue(s) and {len(snapshot.cycles)} cycle(s).")
    return snapshot


def _filters(snapshot: Snapshot, assignees) -> tuple[str | None, str | None]:
    col_cycle, col_assignee = st.columns(2)
    cycle_labels = {"": "All cycles", **{c.id: c.name for c in snapshot.cycles}}
    cycle_id = col_cycle.selectbox(
        "Cycle",
        list(cycle_labels),
        format_func=lambda cid: cycle_labels[cid],
        key="cycle_filter",
    )
    selected = next((c for c in snapshot.cycles if c.id == cycle_id), None)
    if selected is not None:
        col_cycle.caption(format_cycle_period(selected))
    assignee_labels = {"": "All assignees", UNASSIGNED: "Unassigned"}
    assignee_labels.update({a.id: a.display_name for a in assignees})
    assignee_id = col_assignee.selectbox(
        "Assignee",
        list(assignee_labels),
        format_func=lambda aid: assignee_labels[aid],
        key="assignee_filter",
    )
    return cycle_id or None, assignee_id or None


@register_page("Charts")
def charts_page():
    st.title("Timeline & Burndown")
    service: IssueService | None = st.session_state.get("issue_service")
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return

    snapshot: Snapshot | None = st.session_state.get("snapshot")
    col_sync, col_info = st.columns([1, 3])
    first_load = snapshot is None and "sync_error" not in st.session_state
    if col_sync.button("Sync", type="primary") or first_load:
        snapshot = sync_snapshot(service) or snapshot
    if st.session_state.get("sync_error"):
        st.error(st.session_state["sync_error"])
        if st.button("Retry sync"):
            snapshot = sync_snapshot(service) or snapshot
    if snapshot is None:
        st.info("No data loaded yet.")
        return
    if snapshot.fetched_at is not None:
        col_info.caption(f"Last sync: {snapshot.fetched_at:%Y-%m-%d %H:%M:%S}")

    now = current_instant()
    cycle_id, assignee_id = _filters(snapshot, assignee_options(snapshot.issues))
    ctx = build_workspace_context(snapshot, now, cycle_id=cycle_id, assignee_id=assignee_id)

    if not ctx.issues:
        st.info("No issues match the current filters.")
        return

    st.subheader("Burndown")
    basis = "Cycle completion target" if ctx.cycle else "Due date based"
    period = f"{format_date_short(ctx.burndown_range.start)} - {format_date_short(ctx.burndown_range.end)}"
    st.caption(
        f"Total points: {ctx.total_points:g} • Remaining: {ctx.remaining_points:.1f} • {basis} • {period}"
    )
    chart = burndown_chart(ctx.burndown, now, ctx.today_index)
    if chart is not None:
        st.altair_chart(chart, use_container_width=True)

    st.subheader("Timeline")
    st.caption(
        f"{format_date_short(ctx.time_range.start)} - {format_date_short(ctx.time_range.end)} "
        f"• {len(ctx.date_grid)} day(s) • {len(ctx.timeline)} issue(s)"
    )
    chart = gantt_chart(ctx.timeline, ctx.positions, ctx.time_range, now)
    if chart is not None:
        st.altair_chart(chart, use_container_width=True)

    table, display_cols, cfg = prepare_timeline_table(ctx.timeline)
    if display_cols:
        st.dataframe(
            table[display_cols].head(SETTINGS.max_table_rows),
            hide_index=True,
            column_config=cfg,
        )
        csv = table[display_cols].to_csv(index=False).encode(SETTINGS.download_encoding)
        st.download_button("Download Timeline CSV", data=csv, file_name="linear_timeline.csv", mime="text/csv")
