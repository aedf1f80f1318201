"""Lineup snapshot, substitution and rotation models."""

import json
from collections.abc import Mapping
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Substitution(BaseModel):
    """One slot change: ``player_in_id`` takes ``position_id`` from ``player_out_id``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    player_out_id: str = Field(..., alias="playerOutId", description="Player leaving the slot")
    player_in_id: str = Field(..., alias="playerInId", description="Player entering the slot")
    position_id: str = Field(..., alias="positionId", description="Slot being changed")

    @field_validator("player_out_id", "player_in_id", "position_id", mode="before")
    @classmethod
    def coerce_ids(cls, v: Any) -> str:
        if v is None:
            raise ValueError("substitution ids are required")
        s = str(v).strip()
        if not s:
            raise ValueError("substitution ids must not be blank")
        return s

    def to_payload(self) -> Dict[str, str]:
        """Wire form used by the persistence layer."""
        return self.model_dump(by_alias=True)


class Lineup(Mapping):
    """Immutable snapshot of who occupies which slot: position_id -> player_id.

    Iteration follows insertion order of positions, which keeps diffs
    between two snapshots deterministic.
    """

    __slots__ = ("_slots",)

    def __init__(self, slots: Optional[Any] = None):
        data: Dict[str, str] = {}
        items = slots.items() if isinstance(slots, Mapping) else (slots or ())
        for position_id, player_id in items:
            data[str(position_id)] = str(player_id)
        object.__setattr__(self, "_slots", data)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Lineup is immutable")

    def __getitem__(self, position_id: str) -> str:
        return self._slots[position_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"Lineup({self._slots!r})"

    @classmethod
    def from_assignments(cls, assignments: Any) -> "Lineup":
        """Build from the stored ``[{playerId, positionId}]`` form.

        Accepts the JSON string, a list of dicts (camelCase or snake_case
        keys), a plain mapping, or an existing Lineup.

        Raises:
            ValueError: if a player or position is assigned twice
        """
        if isinstance(assignments, Lineup):
            return assignments
        if isinstance(assignments, Mapping):
            return cls(assignments)
        if assignments is None:
            return cls()
        if isinstance(assignments, str):
            assignments = json.loads(assignments) if assignments.strip() else []

        pairs: List[Tuple[str, str]] = []
        seen_players = set()
        seen_positions = set()
        for entry in assignments:
            position_id = entry.get("positionId", entry.get("position_id"))
            player_id = entry.get("playerId", entry.get("player_id"))
            if position_id is None or player_id is None:
                raise ValueError(f"lineup entry is missing playerId/positionId: {entry!r}")
            position_id, player_id = str(position_id), str(player_id)
            if position_id in seen_positions:
                raise ValueError(f"position {position_id} is assigned more than once")
            if player_id in seen_players:
                raise ValueError(f"player {player_id} is assigned more than once")
            seen_positions.add(position_id)
            seen_players.add(player_id)
            pairs.append((position_id, player_id))
        return cls(pairs)

    def to_assignments(self) -> List[Dict[str, str]]:
        return [
            {"playerId": player_id, "positionId": position_id}
            for position_id, player_id in self._slots.items()
        ]

    @property
    def player_ids(self) -> FrozenSet[str]:
        return frozenset(self._slots.values())

    def position_of(self, player_id: str) -> Optional[str]:
        for position_id, occupant in self._slots.items():
            if occupant == player_id:
                return position_id
        return None

    def assign(self, position_id: str, player_id: str) -> "Lineup":
        """Put ``player_id`` at ``position_id``.

        The player is first removed from any other slot they held; whoever
        currently holds ``position_id`` is overwritten.
        """
        data = {
            pos: pid
            for pos, pid in self._slots.items()
            if not (pid == player_id and pos != position_id)
        }
        data[position_id] = player_id
        return Lineup(data)

    def apply(self, substitution: Substitution) -> "Lineup":
        """Apply one stored substitution.

        The outgoing id is not checked against the current occupant; the
        stored diff is trusted.
        """
        return self.assign(substitution.position_id, substitution.player_in_id)

    def apply_all(self, substitutions: Iterable[Substitution]) -> "Lineup":
        lineup = self
        for sub in substitutions:
            lineup = lineup.apply(sub)
        return lineup


class Rotation(BaseModel):
    """One planned rotation step.

    ``substitutions`` is the diff from the previous rotation's lineup.
    ``payload_error`` is set when the stored payload could not be decoded;
    such a rotation carries no substitutions and replays as a no-op.
    """

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=1, description="1-based rotation number")
    substitutions: Tuple[Substitution, ...] = Field(default_factory=tuple)
    payload_error: Optional[str] = Field(None, description="Decode failure for the stored payload")

    @property
    def is_corrupt(self) -> bool:
        return self.payload_error is not None

    def with_substitutions(self, substitutions: Iterable[Substitution]) -> "Rotation":
        return Rotation(index=self.index, substitutions=tuple(substitutions))


def sort_rotations(rotations: Iterable[Rotation]) -> List[Rotation]:
    """Rotations in ascending index order (stable for duplicate indices)."""
    return sorted(rotations, key=lambda r: r.index)
