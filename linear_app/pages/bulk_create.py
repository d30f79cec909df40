"""Bulk issue creation page: edit rows in a grid, validate, create sequentially."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from linear_app.app import register_page
from linear_app.core.config import ESTIMATE_OPTIONS
from linear_app.core.linear_client import LinearAPIError
from linear_app.core.models import Snapshot
from linear_app.core.service import IssueService
from linear_app.core.validation import BulkValidationError, validate_bulk_rows
from linear_app.pages.charts import sync_snapshot
from linear_app.visual.progress import ProgressReporter

ROW_COLUMNS = ("title", "description", "cycle_id", "estimate", "due_date", "assignee_id", "parent_id")


def empty_rows(count: int = 1) -> pd.DataFrame:
    frame = pd.DataFrame({col: [None] * count for col in ROW_COLUMNS})
    frame["due_date"] = pd.to_datetime(frame["due_date"])
    return frame


def labels_to_ids(records: list[dict], choices: dict[str, dict[str, str]]) -> list[dict]:
    """Replace selectbox labels with the ids Linear expects."""
    out = []
    for record in records:
        row = dict(record)
        for col, mapping in choices.items():
            value = row.get(col)
            if isinstance(value, str):
                row[col] = mapping.get(value, value)
        out.append(row)
    return out


@register_page("Bulk Create Issues")
def bulk_create_page():
    st.title("Bulk Create Issues")
    service: IssueService | None = st.session_state.get("issue_service")
    if service is None:
        st.warning("Initialize connection on Setup page first.")
        return
    snapshot: Snapshot | None = st.session_state.get("snapshot") or sync_snapshot(service)
    if snapshot is None:
        return
    if not snapshot.teams:
        st.error("No teams available in this workspace.")
        return

    team_labels = {t.id: f"{t.name} ({t.key})" for t in snapshot.teams}
    team_id = st.selectbox("Team *", list(team_labels), format_func=lambda tid: team_labels[tid])

    choices = {
        "cycle_id": {c.name: c.id for c in snapshot.cycles},
        "assignee_id": {u.display_name: u.id for u in snapshot.users},
        "parent_id": {f"{i.identifier} {i.title}": i.id for i in snapshot.issues},
    }

    rows = st.data_editor(
        st.session_state.get("bulk_rows", empty_rows()),
        num_rows="dynamic",
        hide_index=True,
        key="bulk_editor",
        column_config={
            "title": st.column_config.TextColumn("Title *", max_chars=255),
            "description": st.column_config.TextColumn("Description", max_chars=5000),
            "cycle_id": st.column_config.SelectboxColumn("Cycle", options=list(choices["cycle_id"])),
            "estimate": st.column_config.SelectboxColumn("Estimate", options=list(ESTIMATE_OPTIONS)),
            "due_date": st.column_config.DateColumn("Due Date"),
            "assignee_id": st.column_config.SelectboxColumn("Assignee", options=list(choices["assignee_id"])),
            "parent_id": st.column_config.SelectboxColumn("Parent Issue", options=list(choices["parent_id"])),
        },
    )
    if not st.button("Create Issues", type="primary"):
        return
    try:
        validated = validate_bulk_rows(labels_to_ids(rows.to_dict(orient="records"), choices))
    except BulkValidationError as exc:
        st.error(f"Input error: {exc}")
        return

    reporter = ProgressReporter(f"Creating {len(validated)} issue(s)")
    try:
        created = service.create_bulk_issues(
            validated,
            team_id,
            teams=snapshot.teams,
            progress=reporter.callback,
        )
    except LinearAPIError as exc:
        reporter.error(str(exc))
        return
    reporter.complete(f"Created {len(created)} issue(s): {', '.join(created)}")
    st.session_state["bulk_rows"] = empty_rows()
    sync_snapshot(service)
