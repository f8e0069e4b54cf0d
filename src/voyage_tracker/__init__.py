"""Voyage tracking: waypoint log, route reconstruction, mail ingestion and map output."""

__all__ = [
    "core",
    "route",
    "data",
    "ingest",
    "render",
    "api",
    "cli",
]
