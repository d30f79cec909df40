"""Reusable table helpers for Streamlit rendering."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd
import streamlit as st

from linear_app.core.column_config import get_columns
from linear_app.core.config import CHILD_PREFIX, LINEAR_ISSUE_URL
from linear_app.core.mappers import timeline_to_dataframe
from linear_app.core.models import TimelineItem


def add_issue_link(df: pd.DataFrame, key_col: str = "identifier", label: str = "Issue"):
    if df.empty or key_col not in df.columns:
        return df, {}
    out = df.copy()
    base = LINEAR_ISSUE_URL.rstrip("/")
    out[label] = out[key_col].astype(str).apply(lambda k: f"{base}/{k}" if k and k != "nan" else "")
    cfg = {
        label: st.column_config.LinkColumn(
            label,
            display_text=r"issue/(.*)$",
            help="Open in Linear",
            width="small",
        ),
        "progress": st.column_config.ProgressColumn("Progress", min_value=0, max_value=100, format="%d%%"),
    }
    return out, cfg


def indent_titles(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty or "hierarchy_level" not in df.columns:
        return df
    out = df.copy()

    def _indent(row):
        level = int(row.get("hierarchy_level") or 0)
        if level <= 0:
            return row["title"]
        return f"{'  ' * (level - 1)}{CHILD_PREFIX} {row['title']}"

    out["title"] = out.apply(_indent, axis=1)
    return out


def prepare_timeline_table(items: Sequence[TimelineItem]) -> tuple[pd.DataFrame, list[str], dict[str, object]]:
    df = timeline_to_dataframe(items)
    if df.empty:
        return df, [], {}
    table, cfg = add_issue_link(indent_titles(df))
    display_cols = [col for col in get_columns("timeline") if col in table.columns]
    if not display_cols:
        display_cols = [col for col in table.columns if col not in {"id", "assignee_id"}]
    return table, display_cols, cfg
