"""Pure transformations over lineups and rotation plans."""

from .lineups import apply_rotations, apply_substitutions, diff_lineups
from .playtime import PlayerPlayTime, PlayTimeProjector, RotationState, project_play_time, total_minutes
from .cascade import copy_previous_rotation, recalculate, set_rotation_lineup, swap_player

__all__ = [
    "apply_rotations",
    "apply_substitutions",
    "diff_lineups",
    "PlayerPlayTime",
    "PlayTimeProjector",
    "RotationState",
    "project_play_time",
    "total_minutes",
    "copy_previous_rotation",
    "recalculate",
    "set_rotation_lineup",
    "swap_player",
]
