"""Tests for rotation plan validation."""

from rotation_planner.models import Lineup, MatchTiming, Rotation, RotationPlan, Substitution
from rotation_planner.validation import ValidationResult, validate_plan, validate_rotation_plan


def _sub(out_id, in_id, position_id):
    return Substitution(player_out_id=out_id, player_in_id=in_id, position_id=position_id)


class TestValidateRotationPlan:
    """Test cases for validate_rotation_plan."""

    def setup_method(self):
        """Setup a five-player starting lineup."""
        self.start = Lineup({f"pos{i}": f"p{i}" for i in range(1, 6)})

    def test_empty_plan(self):
        assert validate_rotation_plan([], 5) == ["No rotations planned"]

    def test_valid_plan(self):
        """Test a sound plan has no issues."""
        rotations = [
            Rotation(index=1, substitutions=(_sub("p2", "p6", "pos2"),)),
            Rotation(index=2, substitutions=(_sub("p6", "p2", "pos2"),)),
        ]
        assert validate_rotation_plan(rotations, 5, self.start) == []

    def test_corrupt_rotation_reported_and_skipped(self):
        """Test a parse failure is reported and the rotation is not applied."""
        rotations = [
            Rotation(index=1, payload_error="invalid JSON"),
            Rotation(index=2, substitutions=(_sub("p2", "p6", "pos2"),)),
        ]
        assert validate_rotation_plan(rotations, 5, self.start) == [
            "Rotation 1: Failed to parse substitutions data",
        ]

    def test_duplicates(self):
        """Test duplicate outs and ins are both reported."""
        rotations = [Rotation(index=1, substitutions=(
            _sub("p2", "p6", "pos2"),
            _sub("p2", "p6", "pos3"),
        ))]
        errors = validate_rotation_plan(rotations, 5, self.start)
        assert "Rotation 1: Duplicate players being subbed out" in errors
        assert "Rotation 1: Duplicate players being subbed in" in errors

    def test_player_in_and_out(self):
        """Test a player subbed both in and out in one rotation."""
        rotations = [Rotation(index=1, substitutions=(
            _sub("p2", "p6", "pos2"),
            _sub("p6", "p7", "pos3"),
        ))]
        errors = validate_rotation_plan(rotations, 5, self.start)
        assert "Rotation 1: Player p6 both subbed in and out" in errors

    def test_self_substitution(self):
        """Test a player replacing themselves is reported once."""
        rotations = [Rotation(index=1, substitutions=(_sub("p2", "p2", "pos2"),))]
        errors = validate_rotation_plan(rotations, 5, self.start)
        assert errors == ["Rotation 1: Player p2 substituted for themselves"]

    def test_player_not_on_field(self):
        """Test subbing out a bench player."""
        rotations = [Rotation(index=1, substitutions=(_sub("p9", "p6", "pos2"),))]
        errors = validate_rotation_plan(rotations, 5, self.start)
        assert "Rotation 1: Player p9 not on field" in errors

    def test_too_many_players(self):
        """Test the field size limit after applying a rotation."""
        rotations = [Rotation(index=1, substitutions=(_sub("p9", "p6", "pos2"),))]
        errors = validate_rotation_plan(rotations, 5, self.start)
        assert "Rotation 1: Too many players on field (6)" in errors

    def test_errors_are_collected(self):
        """Test problems in several rotations are all reported."""
        rotations = [
            Rotation(index=1, payload_error="bad"),
            Rotation(index=2, substitutions=(_sub("p9", "p6", "pos2"),)),
        ]
        errors = validate_rotation_plan(rotations, 6, self.start)
        assert errors == [
            "Rotation 1: Failed to parse substitutions data",
            "Rotation 2: Player p9 not on field",
        ]

    def test_without_starting_lineup(self):
        """Test the first rotation is trusted when no starting lineup is given."""
        rotations = [
            Rotation(index=1, substitutions=(_sub("p2", "p6", "pos2"),)),
            Rotation(index=2, substitutions=(_sub("p2", "p7", "pos3"),)),
        ]
        errors = validate_rotation_plan(rotations, 5)
        assert errors == ["Rotation 2: Player p2 not on field"]

    def test_unknown_player_after_first_rotation(self):
        """Test an unknown outgoing player is only trusted in the first rotation."""
        rotations = [
            Rotation(index=1, substitutions=(_sub("p1", "p6", "pos1"),)),
            Rotation(index=2, substitutions=(_sub("ghost", "p7", "pos2"),)),
        ]
        errors = validate_rotation_plan(rotations, 5)
        assert errors == ["Rotation 2: Player ghost not on field"]


class TestValidatePlan:
    """Test validate_plan on a RotationPlan."""

    def test_result(self):
        timing = MatchTiming(interval_minutes=10, half_length_minutes=20)
        plan = RotationPlan(
            starting_lineup={"pos1": "p1", "pos2": "p2"},
            rotations=(Rotation(index=1, substitutions=(_sub("p2", "p3", "pos2"),)),),
            timing=timing,
        )
        result = validate_plan(plan, 2)
        assert isinstance(result, ValidationResult)
        assert result.is_valid
        assert result.rotations_checked == 1

        bad = plan.with_rotations([Rotation(index=1, substitutions=(_sub("p9", "p3", "pos2"),))])
        result = validate_plan(bad, 2)
        assert not result.is_valid
        assert "Rotation 1: Player p9 not on field" in result.issues
