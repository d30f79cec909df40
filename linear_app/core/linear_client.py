"""Linear API client wrapper (GraphQL over HTTP + cursor pagination)."""

from __future__ import annotations

import hashlib
import json
import logging
import time
from collections.abc import Callable
from typing import Any

import requests

from .config import (
    CACHE_TTL_SECONDS,
    CYCLES_PAGE_SIZE,
    ISSUES_PAGE_SIZE,
    LINEAR_API_URL,
    MAX_PAGES,
    MAX_RETRIES,
    REQUEST_TIMEOUT_SECONDS,
    RETRY_INITIAL_DELAY_SECONDS,
    TEAMS_PAGE_SIZE,
    USERS_PAGE_SIZE,
)

logger = logging.getLogger(__name__)

ISSUES_QUERY = """
query Issues($first: Int!, $after: String) {
  issues(first: $first, after: $after, includeArchived: false) {
    nodes {
      id
      title
      identifier
      description
      state { id name type }
      assignee { id name displayName }
      cycle { id name number startsAt endsAt }
      parent { id title identifier }
      createdAt
      updatedAt
      dueDate
      startedAt
      estimate
    }
    pageInfo { hasNextPage endCursor }
  }
}
"""

CYCLES_QUERY = """
query Cycles($first: Int!, $after: String) {
  cycles(first: $first, after: $after) {
    nodes { id name number startsAt endsAt }
    pageInfo { hasNextPage endCursor }
  }
}
"""

USERS_QUERY = """
query Users($first: Int!, $after: String) {
  users(first: $first, after: $after) {
    nodes { id name displayName email }
    pageInfo { hasNextPage endCursor }
  }
}
"""

TEAMS_QUERY = """
query Teams($first: Int!, $after: String) {
  teams(first: $first, after: $after) {
    nodes { id key name }
    pageInfo { hasNextPage endCursor }
  }
}
"""

CREATE_ISSUE_MUTATION = """
mutation IssueCreate($input: IssueCreateInput!) {
  issueCreate(input: $input) {
    success
    issue { id identifier title }
  }
}
"""


class LinearAPIError(RuntimeError):
    """Any failed request to the Linear API."""


class RateLimitError(LinearAPIError):
    """Linear answered with HTTP 429 or a RATELIMITED GraphQL error."""


def _is_rate_limited(errors: list[dict[str, Any]]) -> bool:
    for err in errors:
        code = ((err.get("extensions") or {}).get("code") or "").upper()
        message = str(err.get("message") or "").lower()
        if code == "RATELIMITED" or "rate limit" in message or "ratelimit" in message:
            return True
    return False


class LinearAPI:
    def __init__(
        self,
        api_key: str,
        *,
        url: str = LINEAR_API_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        max_retries: int = MAX_RETRIES,
        initial_delay: float = RETRY_INITIAL_DELAY_SECONDS,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if not api_key:
            raise ValueError("Linear API key is required")
        self.url = url
        self.timeout = timeout
        self.max_retries = max_retries
        self.initial_delay = initial_delay
        self._sleep = sleep
        self.session = session or requests.Session()
        self.session.headers.update({"Authorization": api_key, "Content-Type": "application/json"})
        # Simple in-memory cache: {(hash): (timestamp, data)}
        self._cache: dict[str, tuple[float, Any]] = {}
        self._cache_ttl = CACHE_TTL_SECONDS

    def clear_cache(self) -> None:
        """Reset the in-memory query cache."""
        self._cache.clear()

    def _cache_key(self, query: str, variables: dict[str, Any] | None) -> str:
        payload = {"query": query, "variables": variables or {}}
        return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()

    # ------------------ Transport ------------------
    def _post(self, query: str, variables: dict[str, Any] | None) -> dict[str, Any]:
        try:
            resp = self.session.post(
                self.url,
                json={"query": query, "variables": variables or {}},
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            raise LinearAPIError(f"Operation timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise LinearAPIError(f"Request to Linear failed: {exc}") from exc
        if resp.status_code == 429:
            raise RateLimitError(f"Linear rate limit hit (429): {resp.text[:200]}")
        try:
            data = resp.json()
        except ValueError as exc:
            raise LinearAPIError(f"Invalid response {resp.status_code}: {resp.text[:200]}") from exc
        errors = data.get("errors") or []
        if errors:
            message = "; ".join(str(e.get("message")) for e in errors)
            if _is_rate_limited(errors):
                raise RateLimitError(f"Linear rate limit hit: {message}")
            raise LinearAPIError(f"GraphQL error: {message}")
        if resp.status_code >= 400:
            raise LinearAPIError(f"Request failed {resp.status_code}: {resp.text[:200]}")
        return data.get("data") or {}

    def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a GraphQL operation, retrying rate-limit errors with exponential backoff."""
        attempt = 0
        while True:
            try:
                return self._post(query, variables)
            except RateLimitError:
                if attempt >= self.max_retries:
                    raise
                delay = self.initial_delay * (2**attempt)
                attempt += 1
                logger.warning(
                    "Rate limit hit. Retrying in %.1fs (attempt %d/%d)", delay, attempt, self.max_retries
                )
                self._sleep(delay)

    def paginate(
        self,
        query: str,
        root: str,
        *,
        page_size: int,
        max_pages: int = MAX_PAGES,
    ) -> list[dict[str, Any]]:
        key = self._cache_key(query, {"root": root, "page_size": page_size})
        now = time.time()
        cached = self._cache.get(key)
        if cached and (now - cached[0]) < self._cache_ttl:
            logger.debug("Cache hit for %s", root)
            return cached[1]
        out: list[dict[str, Any]] = []
        cursor = None
        for _ in range(max_pages):
            data = self.execute(query, {"first": page_size, "after": cursor})
            block = data.get(root) or {}
            out.extend(block.get("nodes") or [])
            page_info = block.get("pageInfo") or {}
            cursor = page_info.get("endCursor")
            if not page_info.get("hasNextPage") or not cursor:
                break
        else:
            logger.warning("Stopped paginating %s after %d pages", root, max_pages)
        self._cache[key] = (now, out)
        return out

    # ------------------ Collections ------------------
    def fetch_issues(self) -> list[dict[str, Any]]:
        return self.paginate(ISSUES_QUERY, "issues", page_size=ISSUES_PAGE_SIZE)

    def fetch_cycles(self) -> list[dict[str, Any]]:
        return self.paginate(CYCLES_QUERY, "cycles", page_size=CYCLES_PAGE_SIZE)

    def fetch_users(self) -> list[dict[str, Any]]:
        return self.paginate(USERS_QUERY, "users", page_size=USERS_PAGE_SIZE)

    def fetch_teams(self) -> list[dict[str, Any]]:
        return self.paginate(TEAMS_QUERY, "teams", page_size=TEAMS_PAGE_SIZE)

    def create_issue(self, payload: dict[str, Any]) -> dict[str, Any]:
        data = self.execute(CREATE_ISSUE_MUTATION, {"input": payload})
        result = data.get("issueCreate") or {}
        if not result.get("success"):
            raise LinearAPIError(f"issueCreate failed for {payload.get('title')!r}")
        return result.get("issue") or {}
