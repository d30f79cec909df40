from datetime import date

import pandas as pd
import pytest

from linear_app.core.validation import BulkIssueRow, BulkValidationError, validate_bulk_rows

UUID = "0b6f3c52-7a4e-4d1b-9c2f-5e8a1d3b7c90"


def test_blank_titles_are_skipped():
    rows = validate_bulk_rows([{"title": " Ship it "}, {"title": ""}, {"title": None}, {}])
    assert [r.title for r in rows] == ["Ship it"]


def test_nothing_to_create():
    with pytest.raises(BulkValidationError, match="at least one issue"):
        validate_bulk_rows([{"title": "  "}])


def test_editor_blanks_become_missing():
    row = validate_bulk_rows(
        [
            {
                "title": "A",
                "description": "",
                "cycle_id": None,
                "estimate": float("nan"),
                "due_date": pd.NaT,
                "assignee_id": "  ",
                "parent_id": None,
            }
        ]
    )[0]
    assert row.to_payload("team") == {"title": "A", "teamId": "team"}


def test_full_row_payload():
    row = BulkIssueRow.model_validate(
        {
            "title": "Write docs",
            "description": "Cover setup",
            "cycle_id": UUID,
            "estimate": 8,
            "due_date": pd.Timestamp("2024-09-30 00:00"),
            "assignee_id": UUID,
            "parent_id": UUID,
        }
    )
    assert row.due_date == date(2024, 9, 30)
    assert row.to_payload("team") == {
        "title": "Write docs",
        "teamId": "team",
        "description": "Cover setup",
        "cycleId": UUID,
        "estimate": 8,
        "dueDate": "2024-09-30",
        "parentId": UUID,
        "assigneeId": UUID,
    }


def test_zero_estimate_is_sent():
    row = validate_bulk_rows([{"title": "A", "estimate": 0}])[0]
    assert row.to_payload("t")["estimate"] == 0


def test_estimate_outside_options_is_rejected():
    with pytest.raises(BulkValidationError) as info:
        validate_bulk_rows([{"title": "A"}, {"title": "B", "estimate": 5}])
    assert info.value.row == 2
    assert info.value.field == "estimate"
    assert str(info.value).startswith("Row 2: estimate - ")


def test_identifiers_must_be_uuids():
    with pytest.raises(BulkValidationError) as info:
        validate_bulk_rows([{"title": "A", "assignee_id": "alice"}])
    assert info.value.field == "assignee_id"
    assert "valid UUID" in str(info.value)


def test_length_limits():
    with pytest.raises(BulkValidationError) as info:
        validate_bulk_rows([{"title": "x" * 256}])
    assert info.value.field == "title"
    with pytest.raises(BulkValidationError) as info:
        validate_bulk_rows([{"title": "x", "description": "y" * 5001}])
    assert info.value.field == "description"
    assert validate_bulk_rows([{"title": "x" * 255, "description": "y" * 5000}])
