"""Central configuration, constants, and shared column definitions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Linear Connection Settings
# =============================================================================
LINEAR_API_URL = "https://api.linear.app/graphql"
LINEAR_ISSUE_URL = "https://linear.app/issue"
TIMEZONE = "Asia/Tokyo"

REQUEST_TIMEOUT_SECONDS: float = 10.0
MAX_RETRIES: int = 3
RETRY_INITIAL_DELAY_SECONDS: float = 1.0
CACHE_TTL_SECONDS: float = 300.0

# Page sizes per collection (Linear caps "first" at 250)
ISSUES_PAGE_SIZE: int = 100
CYCLES_PAGE_SIZE: int = 50
USERS_PAGE_SIZE: int = 100
TEAMS_PAGE_SIZE: int = 50
MAX_PAGES: int = 20

# Pause between sequential issueCreate calls to stay under the rate limit
BULK_CREATE_DELAY_SECONDS: float = 0.5

RATE_LIMIT_MESSAGE = "Linear API rate limit reached. Please wait a moment and try again."

# =============================================================================
# Workflow State Configuration
# =============================================================================
PROGRESS_BY_STATE: dict[str, int] = {
    "completed": 100,
    "started": 50,
}
DEFAULT_PROGRESS: int = 0

# Sort order within the same assignee/hierarchy/start date
STATE_TYPE_PRIORITY: dict[str, int] = {
    "unstarted": 0,
    "backlog": 1,
    "started": 2,
    "completed": 3,
    "canceled": 4,
    "cancelled": 4,  # alternative spelling
}
UNKNOWN_STATE_PRIORITY: int = 999

# =============================================================================
# Gantt Layout
# =============================================================================
HIERARCHY_SEPARATOR = " > "
CHILD_PREFIX = "|_"
MIN_BAR_WIDTH_PERCENT: float = 1.0

# =============================================================================
# Colors
# =============================================================================
ASSIGNEE_COLORS: Sequence[str] = (
    "#ef4444",  # red
    "#f97316",  # orange
    "#eab308",  # yellow
    "#22c55e",  # green
    "#06b6d4",  # cyan
    "#3b82f6",  # blue
    "#8b5cf6",  # violet
    "#ec4899",  # pink
    "#f59e0b",  # amber
    "#10b981",  # emerald
    "#6366f1",  # indigo
    "#d946ef",  # fuchsia
)
DEFAULT_ASSIGNEE_COLOR = "#6b7280"  # gray

STATE_COLORS: dict[str, str] = {
    "completed": "#4ade80",
    "started": "#60a5fa",
    "canceled": "#f87171",
    "cancelled": "#f87171",
    "unstarted": "#9ca3af",
    "backlog": "#facc15",
}
DEFAULT_STATE_COLOR = "#9ca3af"

TODAY_COLOR = "#22c55e"
WEEKEND_COLOR = "#f2f2f2"
PLANNED_LINE_COLOR = "#3b82f6"
ACTUAL_LINE_COLOR = "#ef4444"

# =============================================================================
# Estimates & Burndown
# =============================================================================
# Points counted for issues without an estimate (burndown and layout only)
DEFAULT_ESTIMATE: int = 1

# Fibonacci-like scale offered in the bulk creation form
ESTIMATE_OPTIONS: Sequence[int] = (0, 1, 2, 3, 4, 8, 13, 21)

# Issues without a due date are planned to finish after
# max(MIN_ESTIMATED_DAYS, estimate * DAYS_PER_POINT) days
MIN_ESTIMATED_DAYS: int = 3
DAYS_PER_POINT: int = 2

DEFAULT_BURNDOWN_DAYS: int = 30

# =============================================================================
# Bulk Creation Limits
# =============================================================================
TITLE_MAX_LENGTH: int = 255
DESCRIPTION_MAX_LENGTH: int = 5000

# =============================================================================
# Table Columns
# =============================================================================
TIMELINE_CORE_COLUMNS: Sequence[str] = (
    "identifier",
    "title",
    "assignee",
    "state",
    "state_type",
    "progress",
    "estimate",
    "start_date",
    "end_date",
    "hierarchy_level",
    "hierarchy_path",
    "has_children",
)

DISPLAY_ORDER_TIMELINE: Sequence[str] = (
    "Issue",
    "title",
    "assignee",
    "state",
    "progress",
    "estimate",
    "start_date",
    "end_date",
)

DISPLAY_ORDER_BURNDOWN: Sequence[str] = (
    "date",
    "planned_remaining",
    "actual_remaining",
    "total_planned",
)


@dataclass(slots=True)
class AppSettings:
    max_table_rows: int = 1000
    download_encoding: str = "utf-8"
    chart_height: int = 320
    row_height: int = 28


SETTINGS = AppSettings()
