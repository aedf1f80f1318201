"""Enumerations for rotation planning models."""

from enum import Enum
from typing import Any, Optional


class PositionGroup(str, Enum):
    """Semantic category of a field slot."""

    GOALKEEPER = "GOALKEEPER"
    STRIKER = "STRIKER"
    MIDFIELDER = "MIDFIELDER"
    DEFENDER = "DEFENDER"
    UNKNOWN = "UNKNOWN"


# UNKNOWN inherits the defender limit
DEFAULT_FATIGUE_LIMITS = {
    PositionGroup.GOALKEEPER: None,
    PositionGroup.STRIKER: 1,
    PositionGroup.MIDFIELDER: 2,
    PositionGroup.DEFENDER: 2,
    PositionGroup.UNKNOWN: 2,
}


class AvailabilityStatus(str, Enum):
    """Game-day availability of a roster player."""

    AVAILABLE = "available"
    ABSENT = "absent"
    INJURED = "injured"
    LATE_ARRIVAL = "late-arrival"

    @classmethod
    def _missing_(cls, value: Any) -> Optional["AvailabilityStatus"]:
        """Accept case and separator variations (LATE_ARRIVAL, Late Arrival)."""
        if isinstance(value, str):
            normalized = value.strip().lower().replace("_", "-").replace(" ", "-")
            for member in cls:
                if member.value == normalized:
                    return member
        return None
