"""Dependency wiring for the API service."""
from __future__ import annotations

from pathlib import Path

from fastapi import Depends, HTTPException, Request

from voyage_tracker.core.config import TrackerConfig
from voyage_tracker.core.errors import InvalidInputError
from voyage_tracker.core.voyage import Voyage
from voyage_tracker.data.store import load_voyage


def get_config(request: Request) -> TrackerConfig:
    return request.app.state.config


def get_voyage(config: TrackerConfig = Depends(get_config)) -> Voyage:
    """Load the voyage fresh for each request; the data file may change between runs."""
    path = Path(config.storage.data_file)
    if not path.exists():
        raise HTTPException(status_code=404, detail=f"No voyage data at {path}")
    try:
        return load_voyage(path)
    except InvalidInputError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
