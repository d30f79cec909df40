"""IssueService: orchestrates fetching, mapping, and bulk issue creation."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from typing import Any

import pytz

from .config import BULK_CREATE_DELAY_SECONDS, RATE_LIMIT_MESSAGE, TIMEZONE
from .linear_client import LinearAPI, LinearAPIError, RateLimitError
from .mappers import map_cycle, map_issue, map_team, map_user
from .models import Cycle, Issue, Snapshot, Team, User
from .validation import BulkIssueRow, validate_bulk_rows

ProgressCallback = Callable[[str, int | None, int | None], None]

logger = logging.getLogger(__name__)


class IssueService:
    def __init__(
        self,
        api: LinearAPI,
        *,
        create_delay: float = BULK_CREATE_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.api = api
        self._tz = pytz.timezone(TIMEZONE)
        self._create_delay = create_delay
        self._sleep = sleep

    # ------------------ Fetch Methods ------------------
    def fetch_issues(self) -> list[Issue]:
        issues: list[Issue] = []
        for raw in self.api.fetch_issues():
            try:
                issue = map_issue(raw)
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping issue %s: %s", raw.get("identifier") or raw.get("id"), exc)
                continue
            if issue is None:
                logger.debug("Skipping issue %s without state", raw.get("identifier"))
                continue
            issues.append(issue)
        return issues

    def fetch_cycles(self, *, now: datetime | None = None) -> list[Cycle]:
        return [map_cycle(raw, now=now) for raw in self.api.fetch_cycles()]

    def fetch_users(self) -> list[User]:
        return [map_user(raw) for raw in self.api.fetch_users()]

    def fetch_teams(self) -> list[Team]:
        return [map_team(raw) for raw in self.api.fetch_teams()]

    def fetch_snapshot(
        self,
        *,
        now: datetime | None = None,
        progress: ProgressCallback | None = None,
    ) -> Snapshot:
        """Fetch issues, cycles, users and teams as one fresh snapshot.

        The client cache is cleared first so a sync always reflects Linear's
        current state. Any failure aborts the whole snapshot; callers keep
        showing the previous one.
        """
        now = now or datetime.now(self._tz)
        if hasattr(self.api, "clear_cache"):
            self.api.clear_cache()
        steps: list[tuple[str, Callable[[], list]]] = [
            ("Fetching issues", self.fetch_issues),
            ("Fetching cycles", lambda: self.fetch_cycles(now=now)),
            ("Fetching users", self.fetch_users),
            ("Fetching teams", self.fetch_teams),
        ]
        results: list[list] = []
        try:
            for idx, (label, step) in enumerate(steps):
                if progress:
                    progress(label, idx, len(steps))
                results.append(step())
        except RateLimitError as exc:
            logger.error("Snapshot fetch rate limited: %s", exc)
            raise LinearAPIError(RATE_LIMIT_MESSAGE) from exc
        except LinearAPIError as exc:
            logger.error("Snapshot fetch failed: %s", exc)
            raise LinearAPIError(f"Linear API Error: {exc}") from exc
        if progress:
            progress("Sync complete", len(steps), len(steps))
        issues, cycles, users, teams = results
        return Snapshot(issues=issues, cycles=cycles, users=users, teams=teams, fetched_at=now)

    # ------------------ Bulk Creation ------------------
    def create_bulk_issues(
        self,
        rows: Iterable[Mapping[str, Any] | BulkIssueRow],
        team_id: str,
        *,
        teams: Iterable[Team] | None = None,
        progress: ProgressCallback | None = None,
    ) -> list[str]:
        """Create issues one by one in ``team_id``; returns created identifiers.

        Rows may be raw form mappings (validated here) or ``BulkIssueRow``.
        Creation stops at the first failure; issues already created stay.
        """
        rows = list(rows)
        if rows and all(isinstance(r, BulkIssueRow) for r in rows):
            validated = rows
        else:
            validated = validate_bulk_rows(rows)
        known_teams = list(teams) if teams is not None else self.fetch_teams()
        if not any(t.id == team_id for t in known_teams):
            raise LinearAPIError(f"Team with ID {team_id} not found in Linear workspace")

        created: list[str] = []
        try:
            for idx, row in enumerate(validated):
                if progress:
                    progress(f"Creating {row.title}", idx, len(validated))
                issue = self.api.create_issue(row.to_payload(team_id))
                created.append(issue.get("identifier") or issue.get("id") or row.title)
                if idx < len(validated) - 1:
                    self._sleep(self._create_delay)
        except RateLimitError as exc:
            logger.error("Bulk creation rate limited after %d issue(s)", len(created))
            raise LinearAPIError(RATE_LIMIT_MESSAGE) from exc
        except LinearAPIError as exc:
            logger.error("Bulk creation failed after %d issue(s): %s", len(created), exc)
            raise LinearAPIError(f"Issue creation failed: {exc}") from exc
        if progress:
            progress("Issues created", len(validated), len(validated))
        logger.info("Successfully created %d issues", len(created))
        return created
