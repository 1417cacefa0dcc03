"""Helpers for the dot-delimited hierarchy strings of linkset menus.

A hierarchy such as ``"1.2.3"`` gives an item's position in the tree: each
segment is a sibling position, and dropping the last segment names the
parent. Ordering is segment by segment, so ``"1.10"`` sorts after ``"1.2"``.
"""

from __future__ import annotations

from typing import Any, Optional

SEPARATOR = "."


def parent_hierarchy(hierarchy: str) -> Optional[str]:
    """Return the parent's hierarchy string, or None for a root item."""
    parent, sep, _ = hierarchy.rpartition(SEPARATOR)
    if not sep:
        return None
    return parent or None


def hierarchy_key(hierarchy: str) -> tuple:
    """Sort key comparing a hierarchy string segment by segment.

    Numeric segments compare as numbers and sort before non-numeric ones,
    which compare as strings.
    """
    key = []
    for segment in hierarchy.split(SEPARATOR):
        if segment.isdigit():
            key.append((0, int(segment), ""))
        else:
            key.append((1, 0, segment))
    return tuple(key)


def weight_key(weight: Any) -> tuple:
    """Sort key for an entity weight of any strategy.

    Numbers sort numerically, hierarchy strings segment-wise. Missing
    weights sort first.
    """
    if weight is None:
        return (0,)
    if isinstance(weight, (int, float)) and not isinstance(weight, bool):
        return (1, weight)
    return (2, hierarchy_key(str(weight)))
