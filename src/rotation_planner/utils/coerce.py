"""Coercion helpers for lenient parsing of persisted plan data."""

from __future__ import annotations

from typing import Any, FrozenSet, Iterable, Optional

# Null/empty representations found in stored records and form input
_NULLS = {None, "", "-", "—", "N/A", "NA", "null", "NULL", "None", "NONE", "--"}


def _is_null(x: Any) -> bool:
    """Check if a value represents null/empty data.

    Args:
        x: Value to check

    Returns:
        True if value represents null/empty data
    """
    if x is None:
        return True

    s = str(x).strip()
    return s in _NULLS or s == ""


def to_int_or_none(x: Any) -> Optional[int]:
    """Convert value to integer or None if null/invalid.

    Handles:
    - Empty/null values: None, "", "-", "N/A" → None
    - Float strings: "12.0" → 12
    - Already integers: 42 → 42

    Args:
        x: Value to convert

    Returns:
        Integer value or None if conversion fails or value is null
    """
    if _is_null(x):
        return None

    if isinstance(x, bool):
        return None

    try:
        s = str(x).replace(",", "").strip()
        return int(float(s))
    except (ValueError, TypeError, OverflowError):
        return None


def to_str_or_none(x: Any) -> Optional[str]:
    """Convert value to string or None if null/empty.

    Args:
        x: Value to convert

    Returns:
        String value or None if value represents null/empty data
    """
    if _is_null(x):
        return None

    result = str(x).strip()
    return result if result and result not in _NULLS else None


def to_id_set(x: Any, delimiter: str = ",") -> FrozenSet[str]:
    """Parse a delimited string (or any iterable of ids) into a set of ids.

    "pos1, pos2,," → {"pos1", "pos2"}. Null input gives an empty set.
    """
    if _is_null(x):
        return frozenset()

    if isinstance(x, str):
        parts: Iterable[Any] = x.split(delimiter)
    elif isinstance(x, Iterable):
        parts = x
    else:
        parts = [x]

    return frozenset(
        s for s in (to_str_or_none(p) for p in parts) if s is not None
    )
