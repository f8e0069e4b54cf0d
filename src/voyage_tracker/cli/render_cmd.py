"""Map output commands."""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from voyage_tracker.cli.state import CliState, reported_errors
from voyage_tracker.render.geojson import render_geojson
from voyage_tracker.render.kml import render_kml

app = typer.Typer(help="Render the voyage as KML or GeoJSON")


class KmlStyle(str, Enum):
    map = "map"
    earth = "earth"


def _emit(document: str, output: Optional[Path]) -> None:
    if output:
        output.write_text(document, encoding="utf-8")
        typer.echo(f"Saved route to {output}")
    else:
        typer.echo(document)


@app.command()
def kml(
    ctx: typer.Context,
    style: Optional[KmlStyle] = typer.Option(
        None, "--style", help="'earth' adds time spans and leg folders, 'map' leaves both out; defaults to render.* config",
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Path to save KML"),
) -> None:
    """Print a KML document of the voyage."""
    state: CliState = ctx.obj
    time_info = state.config.render.time_info
    leg_folders = state.config.render.leg_folders
    if style is not None:
        time_info = leg_folders = style == KmlStyle.earth
    with reported_errors():
        voyage = state.load()
    _emit(render_kml(voyage, time_info=time_info, leg_folders=leg_folders), output)


@app.command()
def geojson(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Path to save GeoJSON"),
) -> None:
    """Print a GeoJSON FeatureCollection of the voyage."""
    with reported_errors():
        voyage = ctx.obj.load()
    _emit(render_geojson(voyage), output)
