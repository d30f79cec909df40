"""Parent/child hierarchy resolution over a flat issue list."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from linear_app.core.config import HIERARCHY_SEPARATOR
from linear_app.core.models import Issue

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class HierarchyInfo:
    level: int
    path: str


def build_children_map(issues: Sequence[Issue]) -> dict[str, list[str]]:
    """Parent id -> child ids, restricted to parents present in ``issues``."""
    present = {issue.id for issue in issues}
    children: dict[str, list[str]] = {}
    for issue in issues:
        parent = issue.parent
        if parent is None or parent.id not in present:
            continue
        children.setdefault(parent.id, []).append(issue.id)
    return children


def resolve_hierarchy(
    issues: Sequence[Issue],
    *,
    separator: str = HIERARCHY_SEPARATOR,
) -> dict[str, HierarchyInfo]:
    """Compute depth and ancestor path for every issue.

    Parent links are followed only while the parent is part of ``issues``;
    an issue whose parent was filtered out of the view becomes a root. The
    walk is capped at ``len(issues)`` hops; a self-reference or parent cycle
    trips the cap and the issue is treated as a root.
    """
    by_id = {issue.id: issue for issue in issues}
    max_hops = len(by_id)
    out: dict[str, HierarchyInfo] = {}
    for issue in issues:
        ancestors: list[str] = []
        current = issue
        cyclic = False
        while current.parent is not None and current.parent.id in by_id:
            if len(ancestors) >= max_hops:
                cyclic = True
                break
            current = by_id[current.parent.id]
            ancestors.append(current.identifier)
        if cyclic:
            logger.warning("Parent cycle detected at %s; treating as root", issue.identifier)
            ancestors = []
        ancestors.reverse()
        path = separator.join([*ancestors, issue.identifier])
        out[issue.id] = HierarchyInfo(level=len(ancestors), path=path)
    return out
