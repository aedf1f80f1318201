"""Lineup diff/apply functions - pure, synchronous."""

from typing import Iterable, List, Mapping

from ..models.lineups import Lineup, Rotation, Substitution, sort_rotations
from ..planner_logging import get_logger

logger = get_logger(__name__)


def apply_substitutions(lineup: Mapping[str, str], substitutions: Iterable[Substitution]) -> Lineup:
    """Apply substitutions to a lineup in list order.

    Args:
        lineup: Lineup (or plain position -> player mapping) to start from
        substitutions: Substitutions to apply

    Returns:
        New Lineup; the input is left untouched
    """
    return Lineup.from_assignments(lineup).apply_all(substitutions)


def apply_rotations(
    starting_lineup: Mapping[str, str],
    rotations: Iterable[Rotation],
    target_index: int,
) -> Lineup:
    """Compute the lineup after every rotation up to and including ``target_index``.

    Rotations are applied in ascending index order. A rotation whose stored
    payload could not be decoded is a no-op for its step.

    Args:
        starting_lineup: Lineup at kickoff
        rotations: Planned rotations, in any order
        target_index: Last rotation to apply; 0 returns a copy of the
            starting lineup

    Returns:
        New Lineup
    """
    lineup = Lineup.from_assignments(starting_lineup)
    if target_index <= 0:
        return lineup

    for rotation in sort_rotations(rotations):
        if rotation.index > target_index:
            break
        if rotation.is_corrupt:
            logger.debug(
                "Skipping rotation with unreadable substitutions",
                rotation=rotation.index,
                error=rotation.payload_error,
            )
            continue
        lineup = lineup.apply_all(rotation.substitutions)

    return lineup


def diff_lineups(old_lineup: Mapping[str, str], new_lineup: Mapping[str, str]) -> List[Substitution]:
    """Substitutions that turn ``old_lineup`` into ``new_lineup``.

    One substitution per position of ``new_lineup`` whose occupant differs
    from ``old_lineup``. Positions with no previous occupant are skipped.
    Output follows the iteration order of ``new_lineup``.
    """
    subs = []
    for position_id, new_player_id in new_lineup.items():
        old_player_id = old_lineup.get(position_id)
        if old_player_id and new_player_id and old_player_id != new_player_id:
            subs.append(Substitution(
                player_out_id=old_player_id,
                player_in_id=new_player_id,
                position_id=position_id,
            ))
    return subs
