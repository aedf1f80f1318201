"""Tests for the play-time projector."""

import pytest

from rotation_planner.models import Lineup, Rotation, Substitution
from rotation_planner.models.records import StoredRotation
from rotation_planner.transformers.playtime import project_play_time, total_minutes


def _sub(out_id, in_id, position_id):
    return Substitution(player_out_id=out_id, player_in_id=in_id, position_id=position_id)


class TestProjectPlayTime:
    """Test cases for project_play_time."""

    def setup_method(self):
        """Setup a 40-minute game with rotations at 10, 20 (halftime) and 30."""
        self.start = Lineup({f"pos{i}": f"p{i}" for i in range(1, 6)})
        self.rotations = [
            Rotation(index=1, substitutions=(_sub("p1", "p6", "pos1"),)),
            Rotation(index=2, substitutions=(_sub("p6", "p1", "pos1"), _sub("p2", "p7", "pos2"))),
            Rotation(index=3, substitutions=(_sub("p7", "p2", "pos2"),)),
        ]

    def test_concrete_scenario(self):
        """Test minutes follow the rotation boundaries."""
        result = project_play_time(self.rotations, self.start, 10, 40)
        assert total_minutes(result) == {
            "p1": 30, "p2": 30, "p3": 40, "p4": 40, "p5": 40, "p6": 10, "p7": 10,
        }

    def test_rotation_order_does_not_matter(self):
        """Test rotations are replayed by index, not list order."""
        result = project_play_time(list(reversed(self.rotations)), self.start, 10, 40)
        assert result["p1"].total_minutes == 30
        assert result["p7"].total_minutes == 10

    def test_minutes_by_position(self):
        """Test minutes are split by the slot they were played in."""
        result = project_play_time(self.rotations, self.start, 10, 40)
        assert result["p1"].minutes_by_position == {"pos1": 30}
        assert result["p6"].minutes_by_position == {"pos1": 10}

    def test_states_per_boundary(self):
        """Test each player has a state at kickoff and after every rotation."""
        result = project_play_time(self.rotations, self.start, 10, 40)
        states = result["p6"].states
        assert [s.rotation_index for s in states] == [0, 1, 2, 3]
        assert [s.game_minute for s in states] == [0, 10, 20, 30]
        assert [s.on_field for s in states] == [False, True, False, False]
        assert states[1].position_id == "pos1"

    def test_bench_players_reported_with_zero(self):
        """Test player_ids adds players who never play."""
        result = project_play_time(self.rotations, self.start, 10, 40, player_ids=["p8"])
        assert result["p8"].total_minutes == 0
        assert all(not s.on_field for s in result["p8"].states)

    def test_no_rotations_gives_full_game(self):
        """Test starters play the whole game when nothing is planned."""
        result = project_play_time([], self.start, 10, 40)
        assert total_minutes(result) == {f"p{i}": 40 for i in range(1, 6)}

    def test_corrupt_rotation_is_skipped(self):
        """Test an unreadable rotation leaves the lineup unchanged for that step."""
        corrupt = StoredRotation.model_validate(
            {"rotationNumber": 1, "plannedSubstitutions": "{not json"}
        ).to_rotation()
        assert corrupt.is_corrupt

        rotations = [corrupt, self.rotations[1], self.rotations[2]]
        result = project_play_time(rotations, self.start, 10, 40)
        # p6 never came on, so the halftime swap puts p1 back where p1 already is
        assert result["p1"].total_minutes == 40
        assert result["p2"].total_minutes == 30
        assert result["p7"].total_minutes == 10

    def test_odd_game_length_rejected(self):
        """Test a game that cannot split into two halves raises."""
        with pytest.raises(ValueError):
            project_play_time(self.rotations, self.start, 10, 41)
