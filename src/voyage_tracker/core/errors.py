"""Exception types shared across the voyage tracker."""
from __future__ import annotations


class VoyageError(Exception):
    """Base class for all voyage tracker errors."""


class InvalidInputError(VoyageError, ValueError):
    """Raised when caller-supplied data cannot be used as given."""


class UnknownSourceError(VoyageError, RuntimeError):
    """Raised when route reconstruction meets a waypoint source it cannot handle."""

    def __init__(self, source: object) -> None:
        super().__init__(f"Unknown waypoint source {source!r}")
        self.source = source


class StaleVoyageError(VoyageError, RuntimeError):
    """Raised when a voyage is persisted without recomputing its route."""
