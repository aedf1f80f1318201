"""Cascade recalculation and plan edits.

Rotations store diffs, so changing one rotation shifts the starting point of
every later diff. The recalculator rewrites later diffs so that each later
rotation still ends in the lineup it produced before the edit.
"""

from typing import Any, Dict, Iterable, List, Mapping

from ..models.lineups import Lineup, Rotation, Substitution, sort_rotations
from ..models.plan import RotationPlan
from ..planner_logging import get_logger
from .lineups import apply_rotations, diff_lineups

logger = get_logger(__name__)


def recalculate(
    starting_lineup: Mapping[str, str],
    rotations: Iterable[Rotation],
    changed_index: int,
    new_substitutions: Iterable[Substitution],
) -> List[Rotation]:
    """Replace one rotation's substitutions and repair every later rotation.

    Args:
        starting_lineup: Lineup at kickoff
        rotations: Current rotations of the plan
        changed_index: Rotation being edited; added if the plan lacks it
        new_substitutions: Substitutions for ``changed_index``

    Returns:
        Full rotation list in ascending order. Rotations before
        ``changed_index`` are returned unchanged.
    """
    ordered = sort_rotations(rotations)

    # Intended lineups of later rotations, taken before the edit
    intended: Dict[int, Lineup] = {
        r.index: apply_rotations(starting_lineup, ordered, r.index)
        for r in ordered
        if r.index > changed_index
    }

    updated = [r for r in ordered if r.index < changed_index]
    updated.append(Rotation(index=changed_index, substitutions=tuple(new_substitutions)))

    actual = apply_rotations(starting_lineup, updated, changed_index)
    for rotation in ordered:
        if rotation.index <= changed_index:
            continue
        subs = diff_lineups(actual, intended[rotation.index])
        updated.append(rotation.with_substitutions(subs))
        actual = actual.apply_all(subs)

    logger.debug(
        "Cascade recalculated",
        changed_rotation=changed_index,
        downstream=len(intended),
    )
    return updated


def _check_index(plan: RotationPlan, index: int) -> None:
    if index < 1 or index > plan.total_rotations:
        raise ValueError(f"rotation {index} is outside 1..{plan.total_rotations}")


def set_rotation_lineup(plan: RotationPlan, index: int, lineup: Any) -> RotationPlan:
    """Make ``lineup`` the lineup after rotation ``index``; later lineups are kept."""
    _check_index(plan, index)
    target = Lineup.from_assignments(lineup)
    subs = diff_lineups(plan.lineup_at(index - 1), target)
    return plan.with_rotations(recalculate(plan.starting_lineup, plan.rotations, index, subs))


def swap_player(plan: RotationPlan, index: int, position_id: str, player_id: str) -> RotationPlan:
    """Put a bench player at ``position_id`` from rotation ``index`` on.

    Raises:
        ValueError: if the position is empty at that rotation, or the player
            already holds another position
    """
    _check_index(plan, index)
    current = plan.lineup_at(index)
    if position_id not in current:
        raise ValueError(f"position {position_id} is empty after rotation {index}")
    held = current.position_of(player_id)
    if held is not None and held != position_id:
        raise ValueError(
            f"player {player_id} already plays {held} after rotation {index}; "
            "use set_rotation_lineup to reshuffle positions"
        )
    return set_rotation_lineup(plan, index, current.assign(position_id, player_id))


def copy_previous_rotation(plan: RotationPlan, index: int) -> RotationPlan:
    """Keep the previous lineup through rotation ``index`` (no changes there)."""
    _check_index(plan, index)
    return plan.with_rotations(recalculate(plan.starting_lineup, plan.rotations, index, ()))
