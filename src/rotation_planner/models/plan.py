"""Rotation plan Pydantic model."""

from typing import Any, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .lineups import Lineup, Rotation, sort_rotations
from .timing import MatchTiming


class RotationPlan(BaseModel):
    """A game's full rotation plan.

    The plan is a value: edits return a new plan.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    starting_lineup: Lineup = Field(..., description="Lineup at kickoff")
    halftime_lineup: Optional[Lineup] = Field(None, description="Coach-set lineup for the second half")
    rotations: Tuple[Rotation, ...] = Field(default_factory=tuple, description="Rotations by ascending index")
    timing: MatchTiming = Field(..., description="Rotation layout of the match")

    @field_validator("starting_lineup", mode="before")
    @classmethod
    def parse_starting_lineup(cls, v: Any) -> Lineup:
        return Lineup.from_assignments(v)

    @field_validator("halftime_lineup", mode="before")
    @classmethod
    def parse_halftime_lineup(cls, v: Any) -> Optional[Lineup]:
        if v is None:
            return None
        lineup = Lineup.from_assignments(v)
        return lineup if len(lineup) else None

    @field_validator("rotations", mode="after")
    @classmethod
    def order_rotations(cls, v: Tuple[Rotation, ...]) -> Tuple[Rotation, ...]:
        return tuple(sort_rotations(v))

    @model_validator(mode="after")
    def check_rotation_indices(self) -> "RotationPlan":
        indices = [r.index for r in self.rotations]
        if len(set(indices)) != len(indices):
            raise ValueError(f"rotation indices must be unique (got: {indices})")
        total = self.timing.total_rotations
        out_of_range = [i for i in indices if i > total]
        if out_of_range:
            raise ValueError(f"rotations {out_of_range} exceed the planned total of {total}")
        return self

    @property
    def rotations_per_half(self) -> int:
        return self.timing.rotations_per_half

    @property
    def total_rotations(self) -> int:
        return self.timing.total_rotations

    def rotation(self, index: int) -> Optional[Rotation]:
        for rotation in self.rotations:
            if rotation.index == index:
                return rotation
        return None

    def minute_of(self, index: int) -> int:
        return self.timing.minute_of(index)

    def lineup_at(self, index: int) -> Lineup:
        """Absolute lineup after rotation ``index`` (0 is kickoff)."""
        # Import here to avoid circular imports
        from ..transformers.lineups import apply_rotations

        return apply_rotations(self.starting_lineup, self.rotations, index)

    def with_rotations(self, rotations: Iterable[Rotation]) -> "RotationPlan":
        return type(self)(
            starting_lineup=self.starting_lineup,
            halftime_lineup=self.halftime_lineup,
            rotations=tuple(rotations),
            timing=self.timing,
        )
