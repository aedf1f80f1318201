"""Tests for match timing."""

import pytest
from pydantic import ValidationError

from rotation_planner.models import MatchTiming


class TestMatchTiming:
    """Test cases for MatchTiming."""

    def test_default_rotations_per_half(self):
        """Test rotations per half default to what fits inside a half."""
        timing = MatchTiming(interval_minutes=10, half_length_minutes=30)
        assert timing.rotations_per_half == 2
        assert timing.total_rotations == 5
        assert timing.halftime_index == 3

    def test_minute_of(self):
        """Test the minute of every rotation in a 60-minute game."""
        timing = MatchTiming(interval_minutes=10, half_length_minutes=30)
        assert [timing.minute_of(i) for i in range(6)] == [0, 10, 20, 30, 40, 50]

    def test_minute_of_uneven_interval(self):
        """Test halftime lands on the half length even when the interval does not divide it."""
        timing = MatchTiming(interval_minutes=8, half_length_minutes=20)
        assert timing.rotations_per_half == 1
        assert [timing.minute_of(i) for i in range(4)] == [0, 8, 20, 28]

    def test_minute_of_out_of_range(self):
        timing = MatchTiming(interval_minutes=10, half_length_minutes=30)
        with pytest.raises(ValueError):
            timing.minute_of(6)
        with pytest.raises(ValueError):
            timing.minute_of(-1)

    def test_halves_and_boundaries(self):
        """Test half membership and last-of-half flags."""
        timing = MatchTiming(interval_minutes=5, half_length_minutes=20)
        assert [timing.half_of(i) for i in range(1, 8)] == [1, 1, 1, 2, 2, 2, 2]
        assert timing.is_halftime(4)
        assert [i for i in range(1, 8) if timing.is_last_of_half(i)] == [3, 7]

    def test_no_rotations_inside_halves(self):
        """Test a half shorter than two intervals only has the halftime change."""
        timing = MatchTiming(interval_minutes=20, half_length_minutes=20)
        assert timing.total_rotations == 1
        assert not timing.is_last_of_half(1)

    def test_rotations_must_fit(self):
        """Test explicit rotation counts that overrun the half are refused."""
        with pytest.raises(ValidationError):
            MatchTiming(interval_minutes=10, half_length_minutes=30, rotations_per_half=3)

    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            MatchTiming(interval_minutes=0, half_length_minutes=30)

    def test_for_game(self):
        """Test timing from a total game length."""
        timing = MatchTiming.for_game(10, 40)
        assert timing.half_length_minutes == 20
        assert timing.game_length_minutes == 40
        with pytest.raises(ValueError):
            MatchTiming.for_game(10, 45)
