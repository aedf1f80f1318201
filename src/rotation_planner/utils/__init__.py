"""Utilities for parsing and presenting rotation plan data."""

from .coerce import to_id_set, to_int_or_none, to_str_or_none
from .formatting import format_minutes, format_play_time

__all__ = [
    "to_id_set",
    "to_int_or_none",
    "to_str_or_none",
    "format_minutes",
    "format_play_time",
]
