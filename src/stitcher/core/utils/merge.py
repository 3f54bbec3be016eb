"""Dictionary merging for layered configuration.

Lists replace by default; a leading ``"+"`` element appends the remaining
items to the lower layer's list instead (e.g. ``rootExclude: ["+", "*.tmp.html"]``).
"""
from __future__ import annotations

from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` onto ``base`` without mutating either.

    Example:
        >>> deep_merge({"render": {"detectCycles": True}}, {"render": {"maxDepth": 4}})
        {'render': {'detectCycles': True, 'maxDepth': 4}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            result[key] = merge_lists(current, value)
        else:
            result[key] = value
    return result


def merge_lists(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge two lists, honouring the ``"+"`` append marker."""
    if override and override[0] == "+":
        return [*base, *override[1:]]
    return list(override)


__all__ = ["deep_merge", "merge_lists"]
