"""Rotation Planner CLI using Typer."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

app = typer.Typer(help="Fair substitution planning for youth and amateur matches")

GameFile = Annotated[Path, typer.Argument(help="Game definition JSON file", exists=True, dir_okay=False)]
LogLevel = Annotated[str, typer.Option("--log-level", help="Logging level for diagnostics on stderr")]
Summary = Annotated[bool, typer.Option("--summary", help="Print a play-time table instead of JSON")]


def _load_game(game_file: Path, log_level: str):
    """Configure logging and parse the game file, exiting on bad input."""
    from .models.game import GameDefinition
    from .planner_logging import bind_plan_context, clear_plan_context, configure_logging

    configure_logging(level=log_level)
    clear_plan_context()
    bind_plan_context(game_file=game_file.name)
    try:
        return GameDefinition.model_validate(json.loads(game_file.read_text()))
    except (json.JSONDecodeError, ValidationError, ValueError) as e:
        typer.echo(f"❌ Invalid game file {game_file}: {e}", err=True)
        raise typer.Exit(1)


def _echo_json(payload: Dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _echo_summary(minutes: Dict[str, int]) -> None:
    from .utils.formatting import format_minutes

    for player_id, total in sorted(minutes.items(), key=lambda item: (-item[1], item[0])):
        typer.echo(f"{player_id:<12} {format_minutes(total)}")


@app.command()
def plan(
    game_file: GameFile,
    interval: Annotated[Optional[int], typer.Option(help="Override the rotation interval (minutes)")] = None,
    summary: Summary = False,
    log_level: LogLevel = "WARNING",
):
    """Generate a fair rotation plan for a game."""
    from .models.records import encode_rotations
    from .models.timing import MatchTiming
    from .schedule.fair_rotation import ScheduleOptions, schedule

    game = _load_game(game_file, log_level)
    try:
        options = ScheduleOptions.from_settings(
            interval_minutes=interval or game.rotation_interval_minutes,
            half_length_minutes=game.half_length_minutes,
            positions=tuple(game.positions),
        )
        timing = MatchTiming(
            interval_minutes=options.interval_minutes,
            half_length_minutes=options.half_length_minutes,
            rotations_per_half=game.rotations_per_half,
        )
        result = schedule(
            game.roster,
            game.lineup(),
            total_rotations=timing.total_rotations,
            rotations_per_half=timing.rotations_per_half,
            max_players_on_field=game.field_size(),
            goalie_position_id=game.goalie_position_id,
            halftime_lineup=game.halftime_lineup,
            options=options,
        )
    except (ValidationError, ValueError) as e:
        typer.echo(f"❌ Planning failed: {e}", err=True)
        raise typer.Exit(1)

    for warning in result.warnings:
        typer.echo(f"⚠️  {warning}", err=True)

    if summary:
        _echo_summary(result.play_time)
        return
    _echo_json({
        "startingLineup": game.lineup().to_assignments(),
        "rotations": encode_rotations(result.rotations, timing),
        "warnings": list(result.warnings),
        "playTime": result.play_time,
    })


@app.command()
def playtime(
    game_file: GameFile,
    summary: Summary = False,
    log_level: LogLevel = "WARNING",
):
    """Project minutes per player for a stored plan."""
    from .transformers.playtime import PlayTimeProjector

    game = _load_game(game_file, log_level)
    try:
        timing = game.timing()
        projection = PlayTimeProjector(timing).project(
            game.stored_rotations(timing),
            game.lineup(),
            player_ids=[p.player_id for p in game.roster],
        )
    except (ValidationError, ValueError) as e:
        typer.echo(f"❌ Projection failed: {e}", err=True)
        raise typer.Exit(1)

    if summary:
        _echo_summary({pid: entry.total_minutes for pid, entry in projection.items()})
        return
    _echo_json({
        pid: {
            "totalMinutes": entry.total_minutes,
            "minutesByPosition": entry.minutes_by_position,
        }
        for pid, entry in projection.items()
    })


@app.command()
def validate(
    game_file: GameFile,
    log_level: LogLevel = "WARNING",
):
    """Check a stored plan for structural problems. Exits 1 when any are found."""
    from .validation import validate_rotation_plan

    game = _load_game(game_file, log_level)
    try:
        timing = game.timing()
        starting = game.lineup() if game.starting_lineup else None
        issues = validate_rotation_plan(game.stored_rotations(timing), game.field_size(), starting)
    except (ValidationError, ValueError) as e:
        typer.echo(f"❌ Validation failed: {e}", err=True)
        raise typer.Exit(1)

    _echo_json({"valid": not issues, "issues": issues})
    if issues:
        raise typer.Exit(1)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    app()
