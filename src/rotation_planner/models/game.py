"""Game definition: everything the CLI reads from a game file."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config import AppSettings, get_settings
from .lineups import Lineup, Rotation
from .positions import Position
from .records import decode_rotations
from .roster import RosterPlayer
from .timing import MatchTiming


class GameDefinition(BaseModel):
    """One game as stored by the planner UI.

    Timing fields left out fall back to the application settings.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    half_length_minutes: Optional[int] = Field(None, alias="halfLengthMinutes", gt=0)
    rotation_interval_minutes: Optional[int] = Field(None, alias="rotationIntervalMinutes", gt=0)
    rotations_per_half: Optional[int] = Field(None, alias="rotationsPerHalf", ge=0)
    max_players_on_field: Optional[int] = Field(None, alias="maxPlayersOnField", gt=0)
    goalie_position_id: Optional[str] = Field(None, alias="goaliePositionId")
    positions: List[Position] = Field(default_factory=list)
    roster: List[RosterPlayer] = Field(default_factory=list)
    starting_lineup: Any = Field(None, alias="startingLineup", description="[{playerId, positionId}]")
    halftime_lineup: Any = Field(None, alias="halftimeLineup", description="[{playerId, positionId}]")
    rotations: List[Dict[str, Any]] = Field(default_factory=list, description="Stored rotation records")

    def timing(self, settings: Optional[AppSettings] = None) -> MatchTiming:
        settings = settings or get_settings()
        return MatchTiming(
            interval_minutes=self.rotation_interval_minutes or settings.DEFAULT_ROTATION_INTERVAL_MINUTES,
            half_length_minutes=self.half_length_minutes or settings.DEFAULT_HALF_LENGTH_MINUTES,
            rotations_per_half=self.rotations_per_half,
        )

    def field_size(self, settings: Optional[AppSettings] = None) -> int:
        settings = settings or get_settings()
        return self.max_players_on_field or settings.DEFAULT_MAX_PLAYERS_ON_FIELD

    def lineup(self) -> Lineup:
        return Lineup.from_assignments(self.starting_lineup)

    def stored_rotations(self, timing: Optional[MatchTiming] = None) -> List[Rotation]:
        return decode_rotations(self.rotations, timing)
