"""Match timing: the single source of truth for rotation game-minutes."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..utils.coerce import to_int_or_none


class MatchTiming(BaseModel):
    """Rotation layout of a two-half match.

    Rotations ``1..rotations_per_half`` fall inside the first half,
    rotation ``rotations_per_half + 1`` is the halftime change, and the
    remaining ``rotations_per_half`` rotations fall inside the second half.

    Game minute of rotation ``n``:

    - ``n <= rotations_per_half``: ``n * interval``
    - halftime: ``half_length``
    - after halftime: ``half_length + (n - rotations_per_half - 1) * interval``
    """

    model_config = ConfigDict(frozen=True)

    interval_minutes: int = Field(..., gt=0, description="Minutes between rotations")
    half_length_minutes: int = Field(..., gt=0, description="Length of each half")
    rotations_per_half: int = Field(..., ge=0, description="Rotations strictly inside each half")

    @model_validator(mode="before")
    @classmethod
    def derive_rotations_per_half(cls, data: Any) -> Any:
        """Default rotations_per_half to the rotations that fit inside a half."""
        if isinstance(data, dict) and data.get("rotations_per_half") is None:
            interval = to_int_or_none(data.get("interval_minutes"))
            half = to_int_or_none(data.get("half_length_minutes"))
            if interval and half and interval > 0:
                data = {**data, "rotations_per_half": max(0, half // interval - 1)}
        return data

    @model_validator(mode="after")
    def check_rotations_fit(self) -> "MatchTiming":
        if self.rotations_per_half * self.interval_minutes >= self.half_length_minutes:
            raise ValueError(
                f"{self.rotations_per_half} rotations every {self.interval_minutes} minutes "
                f"do not fit inside a {self.half_length_minutes}-minute half"
            )
        return self

    @classmethod
    def for_game(
        cls,
        interval_minutes: int,
        total_game_minutes: int,
        rotations_per_half: Optional[int] = None,
    ) -> "MatchTiming":
        """Timing for a game of two equal halves."""
        if total_game_minutes % 2:
            raise ValueError(f"game length must split into two equal halves (got: {total_game_minutes})")
        return cls(
            interval_minutes=interval_minutes,
            half_length_minutes=total_game_minutes // 2,
            rotations_per_half=rotations_per_half,
        )

    @property
    def total_rotations(self) -> int:
        return self.rotations_per_half * 2 + 1

    @property
    def halftime_index(self) -> int:
        return self.rotations_per_half + 1

    @property
    def game_length_minutes(self) -> int:
        return self.half_length_minutes * 2

    def minute_of(self, index: int) -> int:
        """Game minute at which rotation ``index`` happens (0 is kickoff)."""
        if index < 0 or index > self.total_rotations:
            raise ValueError(f"rotation {index} is outside 0..{self.total_rotations}")
        if index <= self.rotations_per_half:
            return index * self.interval_minutes
        return self.half_length_minutes + (index - self.halftime_index) * self.interval_minutes

    def half_of(self, index: int) -> int:
        """1 for first-half rotations, 2 from halftime on."""
        return 1 if index <= self.rotations_per_half else 2

    def is_halftime(self, index: int) -> bool:
        return index == self.halftime_index

    def is_last_of_half(self, index: int) -> bool:
        """Final regular rotation of either half."""
        if self.rotations_per_half == 0:
            return False
        return index in (self.rotations_per_half, self.total_rotations)
