"""Play-time projector: replays a plan and totals minutes per player."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from ..models.lineups import Lineup, Rotation, sort_rotations
from ..models.timing import MatchTiming
from ..planner_logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RotationState:
    """Where a player stands right after one rotation boundary."""

    rotation_index: int
    game_minute: int
    on_field: bool
    position_id: Optional[str] = None


@dataclass
class PlayerPlayTime:
    """Projected minutes for one player."""

    player_id: str
    total_minutes: int = 0
    states: List[RotationState] = field(default_factory=list)
    minutes_by_position: Dict[str, int] = field(default_factory=dict)

    def add_minutes(self, position_id: str, minutes: int) -> None:
        self.total_minutes += minutes
        self.minutes_by_position[position_id] = self.minutes_by_position.get(position_id, 0) + minutes


class PlayTimeProjector:
    """Replays rotations against the match clock."""

    def __init__(self, timing: MatchTiming):
        self.timing = timing

    def project(
        self,
        rotations: Iterable[Rotation],
        starting_lineup: Mapping[str, str],
        player_ids: Optional[Iterable[str]] = None,
    ) -> Dict[str, PlayerPlayTime]:
        """Minutes per player over the whole match.

        Args:
            rotations: Planned rotations, any order
            starting_lineup: Lineup at kickoff
            player_ids: Extra players to report even if they never play

        Returns:
            Mapping of player_id to PlayerPlayTime
        """
        lineup = Lineup.from_assignments(starting_lineup)
        ordered = sort_rotations(rotations)

        # Everyone who appears anywhere gets a state at every boundary
        results: Dict[str, PlayerPlayTime] = {}
        known = list(lineup.values()) + list(player_ids or ())
        for rotation in ordered:
            for sub in rotation.substitutions:
                known += [sub.player_out_id, sub.player_in_id]
        for player_id in known:
            results.setdefault(player_id, PlayerPlayTime(player_id=player_id))

        self._record_states(results, lineup, 0, 0)
        segment_start = 0
        for rotation in ordered:
            if rotation.index > self.timing.total_rotations:
                logger.warning(
                    "Ignoring rotation beyond the planned total",
                    rotation=rotation.index,
                    total_rotations=self.timing.total_rotations,
                )
                continue

            minute = self.timing.minute_of(rotation.index)
            self._accrue(results, lineup, minute - segment_start)
            segment_start = minute

            if rotation.is_corrupt:
                logger.warning(
                    "Skipping rotation with unreadable substitutions",
                    rotation=rotation.index,
                    error=rotation.payload_error,
                )
            else:
                lineup = lineup.apply_all(rotation.substitutions)
            self._record_states(results, lineup, rotation.index, minute)

        self._accrue(results, lineup, self.timing.game_length_minutes - segment_start)
        return results

    def _accrue(self, results: Dict[str, PlayerPlayTime], lineup: Lineup, minutes: int) -> None:
        for position_id, player_id in lineup.items():
            entry = results.setdefault(player_id, PlayerPlayTime(player_id=player_id))
            entry.add_minutes(position_id, minutes)

    def _record_states(
        self,
        results: Dict[str, PlayerPlayTime],
        lineup: Lineup,
        index: int,
        minute: int,
    ) -> None:
        for player_id, entry in results.items():
            position_id = lineup.position_of(player_id)
            entry.states.append(RotationState(
                rotation_index=index,
                game_minute=minute,
                on_field=position_id is not None,
                position_id=position_id,
            ))


def project_play_time(
    rotations: Iterable[Rotation],
    starting_lineup: Mapping[str, str],
    interval_minutes: int,
    total_game_minutes: int,
    rotations_per_half: Optional[int] = None,
    player_ids: Optional[Iterable[str]] = None,
) -> Dict[str, PlayerPlayTime]:
    """Project minutes per player for a plan.

    Minutes of an on-field segment are the end minute minus the start
    minute; the final segment runs to ``total_game_minutes``.
    """
    timing = MatchTiming.for_game(interval_minutes, total_game_minutes, rotations_per_half)
    return PlayTimeProjector(timing).project(rotations, starting_lineup, player_ids=player_ids)


def total_minutes(projection: Mapping[str, PlayerPlayTime]) -> Dict[str, int]:
    """Flatten a projection to player_id -> minutes."""
    return {player_id: entry.total_minutes for player_id, entry in projection.items()}
