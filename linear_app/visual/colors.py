"""Stable color assignment for assignees and workflow states."""

from __future__ import annotations

from linear_app.core.config import ASSIGNEE_COLORS, DEFAULT_ASSIGNEE_COLOR, DEFAULT_STATE_COLOR, STATE_COLORS
from linear_app.core.state import normalize_state_type


def _string_hash(value: str) -> int:
    # 32-bit signed "hash * 31 + char" rolling hash
    h = 0
    for ch in value:
        h = ord(ch) + ((h << 5) - h)
        h = (h + 2**31) % 2**32 - 2**31
    return h


def assignee_color(assignee_id: str | None) -> str:
    """Same assignee id -> same palette color; unassigned is gray."""
    if not assignee_id:
        return DEFAULT_ASSIGNEE_COLOR
    return ASSIGNEE_COLORS[abs(_string_hash(assignee_id)) % len(ASSIGNEE_COLORS)]


def state_color(state_type: str | None) -> str:
    return STATE_COLORS.get(normalize_state_type(state_type), DEFAULT_STATE_COLOR)
