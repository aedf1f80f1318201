"""Test configuration and fixtures for the rotation planner test suite."""

import os
import sys
import pathlib

# Force test-safe defaults before any other imports
os.environ.setdefault('ENV', 'TEST')
os.environ.setdefault('LOG_LEVEL', 'WARNING')

# Ensure tests can import from src/
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from typing import Dict, List, Optional

import pytest

from rotation_planner.models import Lineup, MatchTiming, Position, PositionGroup, RosterPlayer
from rotation_planner.models.positions import groups_by_position, max_continuous_rotations
from rotation_planner.transformers.lineups import apply_rotations


def make_roster(count: int, goalkeeper: Optional[str] = "pos1", **overrides) -> List[RosterPlayer]:
    """Players p1..pN; p1 prefers the goalkeeper slot.

    Keyword overrides are keyed by player id, e.g. ``p7={"availableFromMinute": 20}``.
    """
    roster = []
    for i in range(1, count + 1):
        player_id = f"p{i}"
        data = {"playerId": player_id, "playerNumber": i}
        if i == 1 and goalkeeper:
            data["preferredPositions"] = goalkeeper
        data.update(overrides.get(player_id, {}))
        roster.append(RosterPlayer.model_validate(data))
    return roster


def make_lineup(count: int) -> Lineup:
    """pos1..posN held by p1..pN."""
    return Lineup({f"pos{i}": f"p{i}" for i in range(1, count + 1)})


def max_stints(rotations, starting_lineup: Lineup, timing: MatchTiming, positions, goalie: str = "pos1") -> Dict[str, int]:
    """Longest run of consecutive intervals per player within one half.

    Also asserts that no run exceeds the limit of the position being played.
    """
    groups = groups_by_position(positions)
    longest: Dict[str, int] = {}
    streaks: Dict[str, int] = {}
    for interval in range(timing.total_rotations + 1):
        if interval == timing.halftime_index:
            streaks = {}
        lineup = apply_rotations(starting_lineup, rotations, interval)
        current = {}
        for position_id, player_id in lineup.items():
            if position_id == goalie:
                continue
            current[player_id] = streaks.get(player_id, 0) + 1
            limit = max_continuous_rotations(groups.get(position_id, PositionGroup.UNKNOWN))
            assert limit is None or current[player_id] <= limit, (
                f"{player_id} played {current[player_id]} straight intervals at {position_id} "
                f"(limit {limit}) in interval {interval}"
            )
            longest[player_id] = max(longest.get(player_id, 0), current[player_id])
        streaks = current
    return longest


@pytest.fixture
def five_a_side_positions() -> List[Position]:
    """Goalkeeper, two defenders and two midfielders."""
    return [
        Position(positionId="pos1", abbreviation="GK"),
        Position(positionId="pos2", abbreviation="CB"),
        Position(positionId="pos3", abbreviation="CB"),
        Position(positionId="pos4", abbreviation="CM"),
        Position(positionId="pos5", abbreviation="CM"),
    ]


@pytest.fixture
def striker_positions() -> List[Position]:
    """Goalkeeper, striker, midfielder and two defenders."""
    return [
        Position(positionId="pos1", abbreviation="GK"),
        Position(positionId="pos2", abbreviation="ST"),
        Position(positionId="pos3", abbreviation="MF"),
        Position(positionId="pos4", abbreviation="DF"),
        Position(positionId="pos5", abbreviation="DF"),
    ]


@pytest.fixture
def forty_minute_timing() -> MatchTiming:
    """Two 20-minute halves, rotations every 5 minutes."""
    return MatchTiming(interval_minutes=5, half_length_minutes=20)


@pytest.fixture
def test_settings():
    """Get test-specific settings."""
    from rotation_planner.config import get_settings
    return get_settings()
