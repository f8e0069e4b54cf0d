"""Whole-file YAML persistence for a voyage."""
from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from voyage_tracker.core.errors import InvalidInputError, StaleVoyageError
from voyage_tracker.core.logging_config import timed
from voyage_tracker.core.voyage import Voyage
from voyage_tracker.data.records import VoyageRecord


logger = logging.getLogger(__name__)


def load_voyage(path: Path) -> Voyage:
    """Load a voyage from ``path`` and recompute its route.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        InvalidInputError: the file does not describe a voyage.
    """
    with timed(f"Loading data from {path}"):
        with open(path, 'r', encoding='utf-8') as f:
            try:
                document = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise InvalidInputError(f"Data file {path} is not valid YAML: {exc}") from exc
        if not isinstance(document, dict):
            raise InvalidInputError(f"Data file {path} does not describe a voyage")
        try:
            record = VoyageRecord.model_validate(document)
        except ValidationError as exc:
            raise InvalidInputError(f"Data file {path} is invalid: {exc}") from exc

        voyage = record.to_voyage()
        voyage.update()

    logger.info("[STORE] Loaded %d waypoints and %d legs from %s", len(voyage.waypoints), len(voyage.legs), path)
    return voyage


def save_voyage(voyage: Voyage, path: Path) -> None:
    """Write the whole voyage to ``path``.

    Raises:
        StaleVoyageError: the voyage changed since its last recomputation.
    """
    if voyage.stale:
        raise StaleVoyageError("Voyage must be updated before it is saved")

    document = VoyageRecord.from_voyage(voyage).to_document()
    with timed(f"Saving data to {path}"):
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(document, f, sort_keys=False, allow_unicode=True)
    logger.info("[STORE] Saved %d waypoints to %s", len(voyage.waypoints), path)
