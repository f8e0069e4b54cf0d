"""Configuration commands."""
from __future__ import annotations

import typer
import yaml

from voyage_tracker.cli.state import CliState, reported_errors

app = typer.Typer(help="Show or change the YAML configuration")


@app.command("show")
def show(ctx: typer.Context) -> None:
    """Print the current configuration as YAML."""
    state: CliState = ctx.obj
    typer.echo(yaml.safe_dump(state.config.to_dict(), sort_keys=False).rstrip())


@app.command("set")
def set_value(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Dotted key, e.g. mail.server"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set a configuration value and write the config file."""
    state: CliState = ctx.obj
    with reported_errors():
        state.config.set_value(key, value)
    state.config.to_yaml(state.config_path)
    typer.echo(f"Set configuration value for {key}")
