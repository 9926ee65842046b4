"""Key canonicalization for parsed JSON values."""

from __future__ import annotations

from typing import Any


def sort_keys(value: Any) -> Any:
    """Return a copy of ``value`` with every object's keys in ordinal order.

    Lists keep their element order; scalars are returned unchanged.
    """
    if isinstance(value, list):
        return [sort_keys(item) for item in value]
    if not isinstance(value, dict):
        return value
    return {key: sort_keys(value[key]) for key in sorted(value)}
