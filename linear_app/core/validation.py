"""Validation of bulk issue-creation rows."""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .config import DESCRIPTION_MAX_LENGTH, ESTIMATE_OPTIONS, TITLE_MAX_LENGTH


class BulkValidationError(ValueError):
    """First problem found in a batch of bulk-create rows."""

    def __init__(self, message: str, *, row: int | None = None, field: str | None = None):
        super().__init__(message)
        self.row = row
        self.field = field


def _blank_to_none(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        # Data editors hand back NaN for untouched numeric/date cells
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if isinstance(value, datetime):
        return value.date()
    return value


class BulkIssueRow(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    cycle_id: str | None = None
    estimate: int | None = None
    due_date: date | None = None
    assignee_id: str | None = None
    parent_id: str | None = None

    @field_validator("description", "cycle_id", "assignee_id", "parent_id", "estimate", "due_date", mode="before")
    @classmethod
    def _empty_as_missing(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("cycle_id", "assignee_id", "parent_id")
    @classmethod
    def _must_be_uuid(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            uuid.UUID(value)
        except ValueError as exc:
            raise ValueError("must be a valid UUID") from exc
        return value

    @field_validator("estimate")
    @classmethod
    def _must_be_option(cls, value: int | None) -> int | None:
        if value is not None and value not in ESTIMATE_OPTIONS:
            options = ", ".join(str(o) for o in ESTIMATE_OPTIONS)
            raise ValueError(f"estimate must be one of {options}")
        return value

    def to_payload(self, team_id: str) -> dict[str, Any]:
        """IssueCreateInput for the Linear mutation (unset fields omitted)."""
        payload: dict[str, Any] = {"title": self.title, "teamId": team_id}
        if self.description:
            payload["description"] = self.description
        if self.cycle_id:
            payload["cycleId"] = self.cycle_id
        if self.estimate is not None:
            payload["estimate"] = self.estimate
        if self.due_date is not None:
            payload["dueDate"] = self.due_date.isoformat()
        if self.parent_id:
            payload["parentId"] = self.parent_id
        if self.assignee_id:
            payload["assigneeId"] = self.assignee_id
        return payload


def validate_bulk_rows(rows: Iterable[Mapping[str, Any]]) -> list[BulkIssueRow]:
    """Validate form rows, skipping those with a blank title.

    Raises
    ------
    BulkValidationError
        When no titled row remains, or on the first invalid row (1-based
        ``row`` numbers refer to the submitted rows).
    """
    out: list[BulkIssueRow] = []
    for idx, raw in enumerate(rows, start=1):
        title = raw.get("title")
        if not isinstance(title, str) or not title.strip():
            continue
        try:
            out.append(BulkIssueRow.model_validate(dict(raw)))
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(p) for p in first.get("loc", ())) or None
            raise BulkValidationError(
                f"Row {idx}: {field} - {first.get('msg')}",
                row=idx,
                field=field,
            ) from exc
    if not out:
        raise BulkValidationError("Enter a title for at least one issue.")
    return out
