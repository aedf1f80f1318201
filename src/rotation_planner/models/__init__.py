"""Pydantic data models for the rotation planner."""

from .enums import AvailabilityStatus, PositionGroup, DEFAULT_FATIGUE_LIMITS
from .positions import Position, classify, groups_by_position, max_continuous_rotations
from .roster import RosterPlayer
from .lineups import Lineup, Rotation, Substitution, sort_rotations
from .timing import MatchTiming
from .plan import RotationPlan
from .game import GameDefinition
from .records import (
    StoredRotation,
    decode_rotations,
    decode_substitutions,
    encode_rotation,
    encode_rotations,
    encode_substitutions,
)

__all__ = [
    # Enums
    "AvailabilityStatus",
    "PositionGroup",
    "DEFAULT_FATIGUE_LIMITS",
    # Positions
    "Position",
    "classify",
    "groups_by_position",
    "max_continuous_rotations",
    # Models
    "RosterPlayer",
    "Lineup",
    "Rotation",
    "Substitution",
    "sort_rotations",
    "MatchTiming",
    "RotationPlan",
    "GameDefinition",
    # Persistence boundary
    "StoredRotation",
    "decode_rotations",
    "decode_substitutions",
    "encode_rotation",
    "encode_rotations",
    "encode_substitutions",
]
