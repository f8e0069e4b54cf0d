"""Typer CLI for keeping a voyage log."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer

from voyage_tracker.cli import config_cmd, mail_cmd, render_cmd
from voyage_tracker.cli.state import CliState, fail, reported_errors
from voyage_tracker.core.config import DEFAULT_CONFIG_FILE, load_config
from voyage_tracker.core.geodesy import Geocoordinate
from voyage_tracker.core.leg import Leg
from voyage_tracker.core.logging_config import configure_logging
from voyage_tracker.core.timeutil import EPOCH, parse_time
from voyage_tracker.core.voyage import Voyage
from voyage_tracker.core.waypoint import Waypoint, WaypointSource

app = typer.Typer(help="Keep a voyage log of waypoints, messages and tracker fixes")
app.add_typer(config_cmd.app, name="config")
app.add_typer(mail_cmd.app, name="mail")
app.add_typer(render_cmd.app, name="render")

IGNORE_DUPLICATION = typer.Option(
    False, "--ignore-duplication", help="Add the point even if one of the same kind is within 5 minutes",
)


@app.callback()
def main(
    ctx: typer.Context,
    config: Path = typer.Option(DEFAULT_CONFIG_FILE, "--config", "-c", help="YAML configuration file"),
    data_file: Optional[Path] = typer.Option(None, "--file", "-f", help="Voyage data file (overrides storage.data_file)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Output detailed processing information"),
) -> None:
    with reported_errors():
        cfg = load_config(config)
    configure_logging("DEBUG" if verbose else cfg.logging.level)
    ctx.obj = CliState(config=cfg, config_path=config, data_file=data_file or Path(cfg.storage.data_file))


@app.command()
def new(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Voyage name"),
    description: str = typer.Argument(..., help="Voyage description"),
    author: Optional[str] = typer.Argument(None, help="Voyage author"),
) -> None:
    """Create a new, empty voyage data file."""
    state: CliState = ctx.obj
    if state.data_file.exists():
        fail(f"Data file {state.data_file} already exists.")
    voyage = Voyage(name, description, author)
    with reported_errors():
        state.save(voyage)
    typer.echo(f"Created new voyage:\n{voyage}")


@app.command()
def show(ctx: typer.Context) -> None:
    """Print a summary of the entire voyage."""
    with reported_errors():
        voyage = ctx.obj.load()
    typer.echo(str(voyage))


def _time_range(start: Optional[str], end: Optional[str]) -> tuple[datetime, datetime]:
    return (
        parse_time(start) if start else EPOCH,
        parse_time(end) if end else datetime.now(timezone.utc),
    )


@app.command("show-legs")
def show_legs(
    ctx: typer.Context,
    start: Optional[str] = typer.Argument(None, help="Only legs touching this time or later"),
    end: Optional[str] = typer.Argument(None, help="Only legs touching this time or earlier"),
) -> None:
    """Print the legs that start or end between two times."""
    with reported_errors():
        voyage = ctx.obj.load()
        lower, upper = _time_range(start, end)
    for i, leg in enumerate(voyage.legs_between(lower, upper), start=1):
        typer.echo(f"{i:2d}. {leg}")


@app.command("show-points")
def show_points(
    ctx: typer.Context,
    start: Optional[str] = typer.Argument(None, help="Only waypoints at this time or later"),
    end: Optional[str] = typer.Argument(None, help="Only waypoints at this time or earlier"),
) -> None:
    """Print the waypoints between two times."""
    with reported_errors():
        voyage = ctx.obj.load()
        lower, upper = _time_range(start, end)
    for i, point in enumerate(voyage.waypoints_between(lower, upper), start=1):
        typer.echo(f"{i:3d}. {point}")


@app.command("add-leg")
def add_leg(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Leg name"),
    start: str = typer.Argument(..., help="Leg start time"),
    end: str = typer.Argument(..., help="Leg end time (exclusive)"),
) -> None:
    """Add a new leg to the voyage."""
    state: CliState = ctx.obj
    with reported_errors():
        leg = Leg(name, parse_time(start), parse_time(end))
        voyage = state.load()
        if not voyage.add_leg(leg):
            fail(f"Failed to add leg to voyage, it clashes with an existing leg:\n{leg}")
        voyage.update()
        state.save(voyage)
    typer.echo(f"Successfully added leg to voyage:\n{leg}")


def _add_point(state: CliState, point: Waypoint, ignore_duplication: bool, kind: str) -> None:
    with reported_errors():
        voyage = state.load()
        if not voyage.add_waypoint(point, ignore_duplication):
            fail(
                f"Failed to add {kind} to voyage, probably because of deduplication. "
                f"To override this, use --ignore-duplication\n{point}"
            )
        voyage.update()
        state.save(voyage)
    typer.echo(f"Successfully added {kind} to voyage:\n{point}")


@app.command("add-waypoint")
def add_waypoint(
    ctx: typer.Context,
    time: str = typer.Argument(..., help="Time of the fix"),
    latitude: float = typer.Argument(..., help="Latitude in decimal degrees (put -- before negative values)"),
    longitude: float = typer.Argument(..., help="Longitude in decimal degrees"),
    ignore_duplication: bool = IGNORE_DUPLICATION,
) -> None:
    """Add a manually observed position."""
    with reported_errors():
        point = Waypoint(WaypointSource.MANUAL_POINT, parse_time(time), Geocoordinate(latitude, longitude))
    _add_point(ctx.obj, point, ignore_duplication, "waypoint")


@app.command("add-message")
def add_message(
    ctx: typer.Context,
    time: str = typer.Argument(..., help="Time of the message"),
    title: str = typer.Argument(..., help="Message title"),
    text: str = typer.Argument(..., help="Message text"),
    ignore_duplication: bool = IGNORE_DUPLICATION,
) -> None:
    """Add a message; its location is interpolated from the track."""
    with reported_errors():
        point = Waypoint(WaypointSource.MESSAGE, parse_time(time), None, title, text)
    _add_point(ctx.obj, point, ignore_duplication, "message")


@app.command("add-log")
def add_log(
    ctx: typer.Context,
    time: str = typer.Argument(..., help="Time of the log entry"),
    text: str = typer.Argument(..., help="Log entry text"),
    ignore_duplication: bool = IGNORE_DUPLICATION,
) -> None:
    """Add a ship's log entry; its location and title are computed."""
    with reported_errors():
        point = Waypoint(WaypointSource.LOG, parse_time(time), None, "Ship's Log", text)
    _add_point(ctx.obj, point, ignore_duplication, "log entry")


@app.command()
def calculate(ctx: typer.Context) -> None:
    """(Re)calculate route statistics and save them."""
    state: CliState = ctx.obj
    with reported_errors():
        voyage = state.load()
        voyage.update()
        state.save(voyage)
    typer.echo(str(voyage))


if __name__ == "__main__":
    app()
