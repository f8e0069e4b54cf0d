"""Shared state handed from the CLI callback to each command."""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import typer

from voyage_tracker.core.config import TrackerConfig
from voyage_tracker.core.errors import VoyageError
from voyage_tracker.core.voyage import Voyage
from voyage_tracker.data.store import load_voyage, save_voyage


@dataclass
class CliState:
    config: TrackerConfig
    config_path: Path
    data_file: Path

    def load(self) -> Voyage:
        if not self.data_file.exists():
            fail(f"Data file {self.data_file} does not exist. Create one with 'new'.")
        return load_voyage(self.data_file)

    def save(self, voyage: Voyage) -> None:
        save_voyage(voyage, self.data_file)


def fail(message: str) -> None:
    typer.echo(message, err=True)
    raise typer.Exit(1)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn voyage errors into a one-line message and exit code 1."""
    try:
        yield
    except VoyageError as exc:
        fail(str(exc))
