"""Position catalog model and position-group classification."""

from typing import Any, Dict, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import DEFAULT_FATIGUE_LIMITS, PositionGroup

_GROUP_LABELS = {
    PositionGroup.GOALKEEPER: frozenset({
        "GK", "G", "GOAL", "GOALIE", "GOALKEEPER",
    }),
    PositionGroup.STRIKER: frozenset({
        "FW", "ST", "CF", "LW", "RW", "F", "S", "SS", "LF", "RF",
        "STRIKER", "FORWARD",
    }),
    PositionGroup.MIDFIELDER: frozenset({
        "MF", "CM", "AM", "DM", "M", "LM", "RM", "CAM", "CDM",
        "LCM", "RCM", "LAM", "RAM", "LDM", "RDM", "MIDFIELDER",
    }),
    PositionGroup.DEFENDER: frozenset({
        "DF", "CB", "LB", "RB", "D", "LD", "RD", "CD", "LCB", "RCB",
        "WB", "LWB", "RWB", "SW", "DEFENDER",
    }),
}


def classify(abbreviation: Optional[str]) -> PositionGroup:
    """Map a position label to its semantic group.

    Matching is exact and case-insensitive. Anything unrecognized,
    including a missing label, is UNKNOWN.
    """
    if abbreviation is None:
        return PositionGroup.UNKNOWN

    label = str(abbreviation).strip().upper()
    for group, labels in _GROUP_LABELS.items():
        if label in labels:
            return group
    return PositionGroup.UNKNOWN


def max_continuous_rotations(
    group: PositionGroup,
    overrides: Optional[Mapping[PositionGroup, Optional[int]]] = None,
) -> Optional[int]:
    """Fatigue limit for a group, honouring caller overrides."""
    if overrides and group in overrides:
        return overrides[group]
    return DEFAULT_FATIGUE_LIMITS[group]


class Position(BaseModel):
    """A slot in the formation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    position_id: str = Field(..., alias="positionId", description="Position identifier")
    abbreviation: Optional[str] = Field(None, description="Short label, e.g. GK, CB, ST")
    name: Optional[str] = Field(None, alias="positionName", description="Display name")

    @field_validator("position_id", mode="before")
    @classmethod
    def coerce_position_id(cls, v: Any) -> str:
        return str(v).strip() if v is not None else v

    @property
    def group(self) -> PositionGroup:
        group = classify(self.abbreviation)
        if group is PositionGroup.UNKNOWN and self.name:
            return classify(self.name)
        return group


def groups_by_position(positions: Optional[Iterable[Position]]) -> Dict[str, PositionGroup]:
    """Build a position_id -> group lookup from a position catalog."""
    return {p.position_id: p.group for p in positions or ()}
