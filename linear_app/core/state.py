"""Workflow state-type helpers.

Linear groups every workflow state into a small set of types
(``backlog``, ``unstarted``, ``started``, ``completed``, ``canceled``).
These helpers turn a state type into the progress percentage and sort
priority used by the timeline and burndown views, using the tables in
config.py (PROGRESS_BY_STATE, STATE_TYPE_PRIORITY).
"""

from __future__ import annotations

from .config import DEFAULT_PROGRESS, PROGRESS_BY_STATE, STATE_TYPE_PRIORITY, UNKNOWN_STATE_PRIORITY

COMPLETED_PROGRESS: int = PROGRESS_BY_STATE["completed"]


def normalize_state_type(value: str | None) -> str:
    """Lowercase and strip a raw state type; empty values become ``""``.

    Examples
    --------
    >>> normalize_state_type(" Started ")
    'started'
    >>> normalize_state_type(None)
    ''
    """
    if not value:
        return ""
    return str(value).strip().lower()


def progress_from_state(state_type: str | None) -> int:
    """Map a state type to 0/50/100. Unknown types map to 0.

    Parameters
    ----------
    state_type : str | None
        Raw state type from Linear.

    Returns
    -------
    int
        100 for ``completed``, 50 for ``started``, 0 otherwise.
    """
    return PROGRESS_BY_STATE.get(normalize_state_type(state_type), DEFAULT_PROGRESS)


def state_priority(state_type: str | None) -> int:
    """Sort priority of a state type; unknown types sort last."""
    return STATE_TYPE_PRIORITY.get(normalize_state_type(state_type), UNKNOWN_STATE_PRIORITY)


def is_completed(state_type: str | None) -> bool:
    return progress_from_state(state_type) == COMPLETED_PROGRESS
