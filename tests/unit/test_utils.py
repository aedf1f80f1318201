"""Tests for coercion and formatting utilities."""

import pytest

from rotation_planner.utils.coerce import _is_null, to_id_set, to_int_or_none, to_str_or_none
from rotation_planner.utils.formatting import format_minutes, format_play_time


class TestCoerce:
    """Test lenient parsing helpers."""

    def test_is_null(self):
        """Test common null representations."""
        for val in [None, "", "  ", "-", "N/A", "null", "None"]:
            assert _is_null(val) is True, f"Expected {val!r} to be detected as null"
        assert _is_null("0") is False

    def test_to_int_or_none(self):
        assert to_int_or_none("12") == 12
        assert to_int_or_none("12.0") == 12
        assert to_int_or_none("1,200") == 1200
        assert to_int_or_none("abc") is None
        assert to_int_or_none(True) is None
        assert to_int_or_none("N/A") is None

    def test_to_str_or_none(self):
        assert to_str_or_none("  pos1 ") == "pos1"
        assert to_str_or_none("--") is None

    def test_to_id_set(self):
        """Test delimited strings and iterables become id sets."""
        assert to_id_set("pos1, pos2,,pos1") == frozenset({"pos1", "pos2"})
        assert to_id_set(["pos1", 2, None]) == frozenset({"pos1", "2"})
        assert to_id_set("pos1|pos2", delimiter="|") == frozenset({"pos1", "pos2"})
        assert to_id_set(None) == frozenset()
        assert to_id_set(7) == frozenset({"7"})


class TestFormatPlayTime:
    """Test play-time formatting."""

    @pytest.mark.parametrize("seconds, fmt, expected", [
        (0, "short", "0:00"),
        (2400, "short", "40:00"),
        (125, "short", "2:05"),
        (600, "long", "10m"),
        (5000, "long", "1h 23m"),
        (3660, "verbose", "1 hour 1 minute"),
        (45, "verbose", "45 seconds"),
        (1, "verbose", "1 second"),
    ])
    def test_formats(self, seconds, fmt, expected):
        assert format_play_time(seconds, fmt) == expected

    def test_format_minutes(self):
        assert format_minutes(25) == "25:00"
        assert format_minutes(90, "long") == "1h 30m"
