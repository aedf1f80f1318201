"""Roster player Pydantic model."""

from typing import Any, FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..utils.coerce import to_id_set, to_int_or_none
from .enums import AvailabilityStatus


class RosterPlayer(BaseModel):
    """A player available to the coach for one game.

    The availability window is half-open, ``[from, until)``, in game
    minutes. A missing bound means kickoff or the final whistle.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    player_id: str = Field(..., alias="playerId", description="Player identifier")
    player_number: Optional[int] = Field(None, alias="playerNumber", description="Jersey number")
    preferred_positions: FrozenSet[str] = Field(
        default_factory=frozenset,
        alias="preferredPositions",
        description="Position ids the player prefers",
    )
    available_from_minute: Optional[int] = Field(
        None, alias="availableFromMinute", ge=0, description="First minute the player may be on field"
    )
    available_until_minute: Optional[int] = Field(
        None, alias="availableUntilMinute", gt=0, description="Minute the player must be off field"
    )
    status: AvailabilityStatus = Field(default=AvailabilityStatus.AVAILABLE, description="Game-day status")

    @field_validator("player_id", mode="before")
    @classmethod
    def coerce_player_id(cls, v: Any) -> str:
        return str(v).strip() if v is not None else v

    @field_validator("player_number", mode="before")
    @classmethod
    def coerce_player_number(cls, v: Any) -> Optional[int]:
        return to_int_or_none(v)

    @field_validator("preferred_positions", mode="before")
    @classmethod
    def parse_preferred_positions(cls, v: Any) -> FrozenSet[str]:
        """Accept the stored comma-delimited form as well as real collections."""
        return to_id_set(v)

    @field_validator("available_from_minute", "available_until_minute", mode="before")
    @classmethod
    def coerce_minutes(cls, v: Any) -> Optional[int]:
        if v is None or isinstance(v, int):
            return v
        coerced = to_int_or_none(v)
        if coerced is None and str(v).strip():
            raise ValueError(f"availability minute must be a whole number (got: {v!r})")
        return coerced

    @model_validator(mode="after")
    def check_window(self) -> "RosterPlayer":
        start = self.available_from_minute
        end = self.available_until_minute
        if start is not None and end is not None and end <= start:
            raise ValueError(
                f"availability window for player {self.player_id} is empty or inverted: "
                f"[{start}, {end})"
            )
        return self

    @property
    def is_schedulable(self) -> bool:
        """Absent and injured players are never brought on by the scheduler."""
        return self.status not in (AvailabilityStatus.ABSENT, AvailabilityStatus.INJURED)

    def prefers(self, position_id: Optional[str]) -> bool:
        return position_id is not None and position_id in self.preferred_positions

    def window(self, game_length_minutes: int) -> Tuple[int, int]:
        """Availability window clipped to the game."""
        start = self.available_from_minute or 0
        end = self.available_until_minute
        if end is None or end > game_length_minutes:
            end = game_length_minutes
        return min(start, game_length_minutes), end

    def is_available_at(self, minute: int, game_length_minutes: int) -> bool:
        start, end = self.window(game_length_minutes)
        return start <= minute < end
