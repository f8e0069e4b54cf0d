"""FastAPI application entrypoint."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from voyage_tracker.api.endpoints import router as voyage_router
from voyage_tracker.core.config import DEFAULT_CONFIG_FILE, TrackerConfig, load_config


def create_app(config: Optional[TrackerConfig] = None) -> FastAPI:
    """Build the read-only voyage API.

    Without an explicit config, ``VOYAGE_TRACKER_CONFIG`` names the YAML file
    to load (default ``config.yml``).
    """
    if config is None:
        config = load_config(Path(os.environ.get("VOYAGE_TRACKER_CONFIG", DEFAULT_CONFIG_FILE)))

    app = FastAPI(title="Voyage Tracker")
    app.state.config = config

    # the API only serves GET requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.include_router(voyage_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
