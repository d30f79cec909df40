"""Put the project root and this directory on sys.path.

The root makes ``import linear_app`` work without an editable install; the
tests directory makes the shared ``linear_samples`` builders importable.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

HERE = Path(__file__).resolve().parent
for path in (HERE.parent, HERE):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture(autouse=True)
def _fresh_column_sets():
    from linear_app.core.column_config import load_column_sets

    load_column_sets(reload=True)
    yield
