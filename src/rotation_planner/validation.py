"""Structural checks for stored rotation plans."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Set

from .models.lineups import Rotation, sort_rotations
from .models.plan import RotationPlan
from .planner_logging import get_logger

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of validating one rotation plan."""
    is_valid: bool
    rotations_checked: int
    issues: List[str] = field(default_factory=list)


def validate_rotation_plan(
    rotations: Iterable[Rotation],
    max_players_on_field: int,
    starting_lineup: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Check a plan for structural problems.

    Walks the rotations in order with a simulated on-field set and collects
    every problem found instead of stopping at the first.

    Args:
        rotations: Planned rotations, any order
        max_players_on_field: Field size limit
        starting_lineup: Kickoff lineup. Without it, the first rotation's
            outgoing players are trusted to have been on the field.

    Returns:
        Human-readable error strings; empty when the plan is sound
    """
    ordered = sort_rotations(rotations)
    if not ordered:
        return ["No rotations planned"]

    errors: List[str] = []
    seeded = starting_lineup is not None
    on_field: Set[str] = set(starting_lineup.values()) if seeded else set()

    for position, rotation in enumerate(ordered):
        n = rotation.index
        if rotation.is_corrupt:
            errors.append(f"Rotation {n}: Failed to parse substitutions data")
            continue

        subs = rotation.substitutions
        outs = [s.player_out_id for s in subs]
        ins = [s.player_in_id for s in subs]

        if len(set(outs)) != len(outs):
            errors.append(f"Rotation {n}: Duplicate players being subbed out")
        if len(set(ins)) != len(ins):
            errors.append(f"Rotation {n}: Duplicate players being subbed in")

        for sub in subs:
            if sub.player_out_id == sub.player_in_id:
                errors.append(f"Rotation {n}: Player {sub.player_out_id} substituted for themselves")

        # Self-substitutions are reported above, not as in-and-out
        in_counts = Counter(ins)
        reported: Set[str] = set()
        for sub in subs:
            pid = sub.player_out_id
            others_in = in_counts[pid] - (1 if sub.player_in_id == pid else 0)
            if others_in > 0 and pid not in reported:
                errors.append(f"Rotation {n}: Player {pid} both subbed in and out")
                reported.add(pid)

        # Unseeded walks have no prior state for the first rotation
        trusted = not seeded and position == 0
        for pid in outs:
            if pid not in on_field and not trusted:
                errors.append(f"Rotation {n}: Player {pid} not on field")

        on_field = (on_field - set(outs)) | set(ins)

        if len(on_field) > max_players_on_field:
            errors.append(f"Rotation {n}: Too many players on field ({len(on_field)})")

    if errors:
        logger.debug("Rotation plan has issues", rotations=len(ordered), issues=len(errors))
    return errors


def validate_plan(plan: RotationPlan, max_players_on_field: int) -> ValidationResult:
    """Validate a RotationPlan against its own starting lineup."""
    issues = validate_rotation_plan(plan.rotations, max_players_on_field, plan.starting_lineup)
    return ValidationResult(
        is_valid=not issues,
        rotations_checked=len(plan.rotations),
        issues=issues,
    )
