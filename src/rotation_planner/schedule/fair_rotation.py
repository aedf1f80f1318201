"""Fair rotation scheduler.

Walks the match rotation by rotation, tracking minutes played and how long
each player has been on without a rest, and emits the substitutions that
keep play time even while respecting fatigue limits, availability windows
and the goalkeeper slot. The heuristic is greedy and rule-prioritized, not
an optimizer.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..config import AppSettings, get_settings
from ..models.enums import PositionGroup
from ..models.lineups import Lineup, Rotation, Substitution
from ..models.positions import Position, groups_by_position, max_continuous_rotations
from ..models.roster import RosterPlayer
from ..models.timing import MatchTiming
from ..planner_logging import get_logger, log_timing
from ..transformers.lineups import diff_lineups

logger = get_logger(__name__)


class ScheduleOptions(BaseModel):
    """Explicit knobs for one scheduling run."""

    model_config = ConfigDict(frozen=True)

    interval_minutes: int = Field(default=10, gt=0, description="Minutes between rotations")
    half_length_minutes: int = Field(default=30, gt=0, description="Length of each half")
    positions: Tuple[Position, ...] = Field(default_factory=tuple, description="Position catalog")
    fatigue_limits: Dict[PositionGroup, Optional[int]] = Field(
        default_factory=dict,
        description="Per-group overrides of the continuous-rotation limit",
    )
    min_players_per_group: int = Field(default=3, gt=0, description="Baseline subs = ceil(field / this)")
    must_on_share: float = Field(default=0.5, ge=0.0, le=1.0, description="Share of window a player must reach")

    @classmethod
    def from_settings(cls, settings: Optional[AppSettings] = None, **overrides: Any) -> "ScheduleOptions":
        """Options seeded from application settings; keyword overrides win."""
        settings = settings or get_settings()
        values = {
            "interval_minutes": settings.DEFAULT_ROTATION_INTERVAL_MINUTES,
            "half_length_minutes": settings.DEFAULT_HALF_LENGTH_MINUTES,
            "min_players_per_group": settings.MIN_PLAYERS_PER_GROUP,
            "must_on_share": settings.MUST_ON_SHARE,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class ScheduleResult(BaseModel):
    """Generated rotations plus anything the coach should look at."""

    model_config = ConfigDict(frozen=True)

    rotations: Tuple[Rotation, ...] = Field(default_factory=tuple)
    warnings: Tuple[str, ...] = Field(default_factory=tuple)
    play_time: Dict[str, int] = Field(default_factory=dict, description="Minutes per player at full time")


@dataclass
class PlayerState:
    """Running bookkeeping for one player during the walk."""

    player: RosterPlayer
    order: int
    minutes_played: int = 0
    continuous_rotations: int = 0

    @property
    def player_id(self) -> str:
        return self.player.player_id


class FairRotationScheduler:
    """Generates a full rotation plan for one game."""

    def __init__(self, options: Optional[ScheduleOptions] = None):
        """Initialize scheduler.

        Args:
            options: Timing, position catalog and heuristic knobs
        """
        self.options = options or ScheduleOptions()
        self._groups = groups_by_position(self.options.positions)

    @log_timing("schedule.fair_rotation")
    def schedule(
        self,
        roster: Iterable[RosterPlayer],
        starting_lineup: Any,
        total_rotations: int,
        rotations_per_half: int,
        max_players_on_field: int,
        goalie_position_id: Optional[str] = None,
        halftime_lineup: Any = None,
    ) -> ScheduleResult:
        """Generate substitutions for every rotation of the match.

        Args:
            roster: Players available for the game
            starting_lineup: Kickoff lineup (Lineup, mapping or stored assignments)
            total_rotations: Rotations including the halftime change
            rotations_per_half: Rotations strictly inside each half
            max_players_on_field: Field slots in the formation
            goalie_position_id: Goalkeeper slot, never rotated outside halftime
            halftime_lineup: Coach-set second-half lineup, applied verbatim

        Returns:
            ScheduleResult with one Rotation per index 1..total_rotations

        Raises:
            ValueError: if the rotation counts do not match the match timing
                or the starting lineup does not fit on the field
        """
        timing = MatchTiming(
            interval_minutes=self.options.interval_minutes,
            half_length_minutes=self.options.half_length_minutes,
            rotations_per_half=rotations_per_half,
        )
        if total_rotations != timing.total_rotations:
            raise ValueError(
                f"total_rotations must be rotations_per_half * 2 + 1 = {timing.total_rotations} "
                f"(got: {total_rotations})"
            )
        if max_players_on_field <= 0:
            raise ValueError(f"max_players_on_field must be positive (got: {max_players_on_field})")

        lineup = Lineup.from_assignments(starting_lineup)
        if len(lineup) > max_players_on_field:
            raise ValueError(
                f"starting lineup has {len(lineup)} players for {max_players_on_field} field slots"
            )
        halftime_target = Lineup.from_assignments(halftime_lineup) if halftime_lineup else None

        walk = _RotationWalk(
            options=self.options,
            groups=self._groups,
            timing=timing,
            max_players_on_field=max_players_on_field,
            goalie_position_id=goalie_position_id,
        )
        walk.seed(roster, lineup, halftime_target)

        rotations = []
        for index in range(1, total_rotations + 1):
            rotations.append(walk.step(index))
        play_time = walk.finish()

        logger.info(
            "Rotation plan generated",
            rotations=len(rotations),
            substitutions=sum(len(r.substitutions) for r in rotations),
            warnings=len(walk.warnings),
        )
        return ScheduleResult(
            rotations=tuple(rotations),
            warnings=tuple(walk.warnings),
            play_time=play_time,
        )


class _RotationWalk:
    """Mutable state of one scheduling run. Never escapes the scheduler."""

    def __init__(
        self,
        options: ScheduleOptions,
        groups: Mapping[str, PositionGroup],
        timing: MatchTiming,
        max_players_on_field: int,
        goalie_position_id: Optional[str],
    ):
        self.options = options
        self.groups = groups
        self.timing = timing
        self.max_players_on_field = max_players_on_field
        self.goalie_position_id = goalie_position_id
        self.states: Dict[str, PlayerState] = {}
        self.lineup = Lineup()
        self.halftime_target: Optional[Lineup] = None
        self.fielded_this_half: Set[str] = set()
        self.warnings: List[str] = []

    # -------------------------
    # Setup
    # -------------------------
    def seed(self, roster: Iterable[RosterPlayer], lineup: Lineup, halftime_target: Optional[Lineup]) -> None:
        self.lineup = lineup
        self.halftime_target = halftime_target
        on_field = lineup.player_ids
        skipped: Dict[str, RosterPlayer] = {}

        for player in roster:
            if player.player_id in self.states:
                continue
            if not player.is_schedulable and player.player_id not in on_field:
                logger.debug("Skipping player", player_id=player.player_id, status=player.status.value)
                skipped[player.player_id] = player
                continue
            self._add_player(player)

        for position_id, player_id in lineup.items():
            if player_id not in self.states:
                self.warnings.append(
                    f"Starting lineup player {player_id} at {position_id} is not on the roster"
                )
                self._add_player(RosterPlayer(player_id=player_id))

        if halftime_target is not None:
            for position_id, player_id in halftime_target.items():
                if player_id in self.states:
                    continue
                player = skipped.get(player_id)
                if player is None:
                    self.warnings.append(
                        f"Halftime lineup player {player_id} at {position_id} is not on the roster"
                    )
                    player = RosterPlayer(player_id=player_id)
                else:
                    self.warnings.append(
                        f"Halftime lineup player {player_id} at {position_id} is marked {player.status.value}"
                    )
                self._add_player(player)

        goalie = self.goalie_position_id
        if goalie and not any(s.player.prefers(goalie) for s in self.states.values()):
            self.warnings.append(
                "No player on the roster prefers the goalkeeper position; "
                "assign a goalkeeper manually."
            )

        self.fielded_this_half = set(on_field)

    def _add_player(self, player: RosterPlayer) -> None:
        self.states[player.player_id] = PlayerState(player=player, order=len(self.states))

    # -------------------------
    # Walk
    # -------------------------
    def step(self, index: int) -> Rotation:
        minute = self.timing.minute_of(index)
        halftime = self.timing.is_halftime(index)
        self._accrue(minute - self.timing.minute_of(index - 1), count_rotation=not halftime)

        if halftime:
            subs = self._halftime_substitutions(index, minute)
        else:
            subs = self._regular_substitutions(index, minute)

        self.lineup = self.lineup.apply_all(subs)
        on_field = self.lineup.player_ids
        for state in self.states.values():
            if halftime or state.player_id not in on_field:
                state.continuous_rotations = 0

        if halftime:
            self.fielded_this_half = set(on_field)
        else:
            self.fielded_this_half.update(on_field)

        logger.debug(
            "Rotation scheduled",
            rotation=index,
            minute=minute,
            halftime=halftime,
            substitutions=len(subs),
        )
        return Rotation(index=index, substitutions=tuple(subs))

    def finish(self) -> Dict[str, int]:
        last = self.timing.total_rotations
        self._accrue(self.timing.game_length_minutes - self.timing.minute_of(last), count_rotation=False)
        return {pid: state.minutes_played for pid, state in self.states.items()}

    def _accrue(self, minutes: int, count_rotation: bool) -> None:
        for player_id in self.lineup.values():
            state = self.states[player_id]
            state.minutes_played += minutes
            if count_rotation:
                state.continuous_rotations += 1

    # -------------------------
    # Regular rotation
    # -------------------------
    def _regular_substitutions(self, index: int, minute: int) -> List[Substitution]:
        field = self._outfield()
        eligible_bench = self._eligible_bench(minute)

        forced = self._forced_off(field, minute)
        must_on = [s for s in eligible_bench if self._must_play_now(s, minute)]
        priority = list(must_on)
        if self.timing.is_last_of_half(index):
            priority += [
                s for s in eligible_bench
                if s.player_id not in self.fielded_this_half and s not in must_on
            ]
        normal = [s for s in eligible_bench if s not in priority]
        candidates = _least_played(priority) + _least_played(normal)

        if not candidates:
            self._warn_unreplaced(index, forced)
            return []

        baseline = min(
            math.ceil(self.max_players_on_field / self.options.min_players_per_group),
            len(eligible_bench),
            len(field),
        )
        count = max(len(forced), len(must_on), baseline)
        count = min(count, len(candidates), len(field))

        outgoing = forced[:count]
        self._warn_unreplaced(index, forced[count:])
        taken = {pid for _, pid in outgoing}
        rested = sorted(
            (slot for slot in field if slot[1] not in taken),
            key=lambda slot: self._most_played_key(slot, field),
        )
        outgoing += rested[:count - len(outgoing)]

        return self._assign(outgoing, candidates[:count])

    def _outfield(self) -> List[Tuple[str, str]]:
        return [
            (pos, pid) for pos, pid in self.lineup.items()
            if pos != self.goalie_position_id
        ]

    def _eligible_bench(self, minute: int) -> List[PlayerState]:
        on_field = self.lineup.player_ids
        game_length = self.timing.game_length_minutes
        return [
            s for s in self.states.values()
            if s.player_id not in on_field
            and s.player.is_schedulable
            and s.player.is_available_at(minute, game_length)
        ]

    def _forced_off(self, field: List[Tuple[str, str]], minute: int) -> List[Tuple[str, str]]:
        """Field slots whose occupant must come off: window closed or fatigue limit hit."""
        game_length = self.timing.game_length_minutes
        forced = []
        for order, (pos, pid) in enumerate(field):
            state = self.states[pid]
            _, until = state.player.window(game_length)
            limit = self._fatigue_limit(pos)
            if minute >= until:
                forced.append(((0, 0, -state.minutes_played, order), (pos, pid)))
            elif limit is not None and state.continuous_rotations >= limit:
                overshoot = state.continuous_rotations - limit
                forced.append(((1, -overshoot, -state.minutes_played, order), (pos, pid)))
        return [slot for _, slot in sorted(forced)]

    def _fatigue_limit(self, position_id: str) -> Optional[int]:
        group = self.groups.get(position_id, PositionGroup.UNKNOWN)
        return max_continuous_rotations(group, self.options.fatigue_limits)

    def _must_play_now(self, state: PlayerState, minute: int) -> bool:
        """True if skipping this rotation would leave the player short of their share."""
        start, until = state.player.window(self.timing.game_length_minutes)
        window = until - start
        if window <= 0:
            return False
        return state.minutes_played + (until - minute) <= self.options.must_on_share * window

    def _most_played_key(self, slot: Tuple[str, str], field: Sequence[Tuple[str, str]]):
        state = self.states[slot[1]]
        return (-state.minutes_played, -state.continuous_rotations, field.index(slot))

    def _warn_unreplaced(self, index: int, slots: Sequence[Tuple[str, str]]) -> None:
        for pos, pid in slots:
            self.warnings.append(
                f"Rotation {index}: no bench player available to replace {pid} at {pos}"
            )

    # -------------------------
    # Halftime
    # -------------------------
    def _halftime_substitutions(self, index: int, minute: int) -> List[Substitution]:
        if self.halftime_target is not None:
            subs = diff_lineups(self.lineup, self.halftime_target)
            incoming = {sub.player_in_id for sub in subs}
            for sub in subs:
                if sub.player_out_id in incoming:
                    self.warnings.append(
                        f"Rotation {index}: halftime lineup moves {sub.player_out_id} off "
                        f"{sub.position_id}, so the plan lists them both in and out"
                    )
            return subs

        goalie = self.goalie_position_id
        bench = _least_played(self._eligible_bench(minute))
        keepers = [s for s in bench if s.player.prefers(goalie)] if goalie else []

        slots = [
            (pos, pid) for pos, pid in self.lineup.items()
            if pos != goalie or keepers
        ]
        game_length = self.timing.game_length_minutes

        def vacate_key(slot: Tuple[str, str]):
            state = self.states[slot[1]]
            _, until = state.player.window(game_length)
            closed = 0 if minute >= until else 1
            return (closed,) + self._most_played_key(slot, slots)

        count = min(self.max_players_on_field, len(bench), len(slots))
        outgoing = sorted(slots, key=vacate_key)[:count]
        incoming = bench[:count]

        vacated = {pos for pos, _ in outgoing}
        if goalie in vacated and not any(s.player.prefers(goalie) for s in incoming):
            incoming = incoming[:-1] + [keepers[0]]

        return self._assign(outgoing, incoming)

    # -------------------------
    # Assignment
    # -------------------------
    def _assign(
        self,
        outgoing: Sequence[Tuple[str, str]],
        incoming: Sequence[PlayerState],
    ) -> List[Substitution]:
        """Match incoming players to vacated slots.

        Pass 1 gives players a slot they prefer, least-played first. Pass 2
        fills what is left in vacated order. The goalkeeper slot only takes
        a goalkeeper-preferring player.
        """
        goalie = self.goalie_position_id
        positions = [pos for pos, _ in outgoing]
        assignments: Dict[str, str] = {}
        placed: Set[str] = set()

        preferred_order = sorted(positions, key=lambda pos: pos != goalie)
        for state in incoming:
            for pos in preferred_order:
                if pos not in assignments and state.player.prefers(pos):
                    assignments[pos] = state.player_id
                    placed.add(state.player_id)
                    break

        for state in incoming:
            if state.player_id in placed:
                continue
            for pos in positions:
                if pos not in assignments and pos != goalie:
                    assignments[pos] = state.player_id
                    placed.add(state.player_id)
                    break

        return [
            Substitution(player_out_id=pid, player_in_id=assignments[pos], position_id=pos)
            for pos, pid in outgoing
            if pos in assignments
        ]


def _least_played(states: Iterable[PlayerState]) -> List[PlayerState]:
    # sorted() is stable, so ties keep roster order
    return sorted(states, key=lambda s: s.minutes_played)


def schedule(
    roster: Iterable[RosterPlayer],
    starting_lineup: Any,
    total_rotations: int,
    rotations_per_half: int,
    max_players_on_field: int,
    goalie_position_id: Optional[str] = None,
    halftime_lineup: Any = None,
    options: Optional[ScheduleOptions] = None,
) -> ScheduleResult:
    """Generate a fair rotation plan. See FairRotationScheduler.schedule."""
    return FairRotationScheduler(options).schedule(
        roster,
        starting_lineup,
        total_rotations,
        rotations_per_half,
        max_players_on_field,
        goalie_position_id=goalie_position_id,
        halftime_lineup=halftime_lineup,
    )
