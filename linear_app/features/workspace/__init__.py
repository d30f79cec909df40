"""Workspace feature module: filtered snapshot -> timeline and burndown context."""

from linear_app.features.workspace.context import WorkspaceContext, build_workspace_context
from linear_app.features.workspace.filters import (
    UNASSIGNED,
    assignee_options,
    by_assignee,
    by_cycle,
    filter_issues,
    find_cycle,
    format_cycle_period,
)

__all__ = [
    "UNASSIGNED",
    "WorkspaceContext",
    "assignee_options",
    "build_workspace_context",
    "by_assignee",
    "by_cycle",
    "filter_issues",
    "find_cycle",
    "format_cycle_period",
]
