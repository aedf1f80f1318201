"""Persistence boundary: stored rotation records to and from engine models.

Stored records keep substitutions as a JSON string. Decoding never raises
on a bad payload; the resulting Rotation carries ``payload_error`` and is
replayed as a no-op.
"""

import json
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..planner_logging import get_logger
from ..utils.coerce import to_int_or_none
from .lineups import Rotation, Substitution
from .timing import MatchTiming

logger = get_logger(__name__)


def decode_substitutions(payload: Any) -> Tuple[Tuple[Substitution, ...], Optional[str]]:
    """Decode a stored substitution payload.

    Args:
        payload: JSON string, list of substitution dicts, or None

    Returns:
        (substitutions, error). On failure substitutions is empty and error
        describes the problem.
    """
    if payload is None:
        return (), None

    data = payload
    if isinstance(payload, (bytes, str)):
        try:
            data = json.loads(payload) if payload.strip() else []
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return (), f"invalid JSON: {e}"

    if not isinstance(data, list):
        return (), f"expected a list of substitutions, got {type(data).__name__}"

    try:
        subs = tuple(
            item if isinstance(item, Substitution) else Substitution.model_validate(item)
            for item in data
        )
    except ValidationError as e:
        return (), f"invalid substitution entry: {e.errors()[0].get('msg', 'invalid')}"
    return subs, None


def encode_substitutions(substitutions: Iterable[Substitution]) -> str:
    return json.dumps([sub.to_payload() for sub in substitutions])


class StoredRotation(BaseModel):
    """Rotation record as the persistence layer holds it."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    rotation_number: int = Field(..., alias="rotationNumber", ge=1, description="1-based rotation number")
    game_minute: Optional[int] = Field(None, alias="gameMinute", description="Stored game minute")
    half: Optional[int] = Field(None, description="Stored half (1 or 2)")
    planned_substitutions: Any = Field(None, alias="plannedSubstitutions", description="Substitution payload")

    @field_validator("game_minute", "half", mode="before")
    @classmethod
    def coerce_ints(cls, v: Any) -> Optional[int]:
        return to_int_or_none(v)

    def to_rotation(self, timing: Optional[MatchTiming] = None) -> Rotation:
        """Decode into an engine Rotation.

        The stored game minute is not carried over; when ``timing`` is given
        a disagreement with the derived minute is logged.
        """
        subs, error = decode_substitutions(self.planned_substitutions)
        if error:
            logger.warning(
                "Failed to parse plannedSubstitutions",
                rotation=self.rotation_number,
                error=error,
            )

        if timing is not None and self.game_minute is not None:
            if self.rotation_number <= timing.total_rotations:
                derived = timing.minute_of(self.rotation_number)
                if derived != self.game_minute:
                    logger.warning(
                        "Stored game minute disagrees with derived minute",
                        rotation=self.rotation_number,
                        stored=self.game_minute,
                        derived=derived,
                    )

        return Rotation(index=self.rotation_number, substitutions=subs, payload_error=error)


def decode_rotations(records: Iterable[Any], timing: Optional[MatchTiming] = None) -> List[Rotation]:
    """Decode stored rotation records (dicts or StoredRotation) in ascending order."""
    rotations = []
    for record in records:
        stored = record if isinstance(record, StoredRotation) else StoredRotation.model_validate(record)
        rotations.append(stored.to_rotation(timing))
    return sorted(rotations, key=lambda r: r.index)


def encode_rotation(rotation: Rotation, timing: MatchTiming) -> Dict[str, Any]:
    """Outbound record with the derived game minute and half."""
    return {
        "rotationNumber": rotation.index,
        "gameMinute": timing.minute_of(rotation.index),
        "half": timing.half_of(rotation.index),
        "plannedSubstitutions": encode_substitutions(rotation.substitutions),
    }


def encode_rotations(rotations: Iterable[Rotation], timing: MatchTiming) -> List[Dict[str, Any]]:
    return [encode_rotation(r, timing) for r in sorted(rotations, key=lambda r: r.index)]
