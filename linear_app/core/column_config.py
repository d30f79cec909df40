"""Load and expose table column configuration from YAML (with fallbacks)."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .config import DISPLAY_ORDER_BURNDOWN, DISPLAY_ORDER_TIMELINE, TIMELINE_CORE_COLUMNS

_CACHE: dict[str, list[str]] | None = None


def _defaults() -> dict[str, list[str]]:
    return {
        "timeline": list(DISPLAY_ORDER_TIMELINE),
        "core": list(TIMELINE_CORE_COLUMNS),
        "burndown": list(DISPLAY_ORDER_BURNDOWN),
    }


def load_column_sets(base_path: str | Path | None = None, *, reload: bool = False):
    global _CACHE
    if _CACHE is not None and not reload:
        return _CACHE
    base = Path(base_path or Path(__file__).resolve().parent.parent)
    yaml_path = base / "columns.yaml"
    defaults = _defaults()
    if not yaml_path.exists():
        _CACHE = defaults
        return _CACHE
    try:
        data = yaml.safe_load(yaml_path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        logging.getLogger(__name__).warning("Ignoring unreadable %s: %s", yaml_path, exc)
        _CACHE = defaults
        return _CACHE
    sets = data.get("sets", {}) or {}
    _CACHE = {name: list(sets.get(name) or cols) for name, cols in defaults.items()}
    return _CACHE


def get_columns(set_name: str) -> list[str]:
    sets = load_column_sets()
    return sets.get(set_name, [])
