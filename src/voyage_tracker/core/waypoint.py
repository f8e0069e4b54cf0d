"""Time-stamped waypoint records."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from voyage_tracker.core.errors import InvalidInputError
from voyage_tracker.core.geodesy import Geocoordinate
from voyage_tracker.core.timeutil import TimeLike, seconds_between, to_utc


DUPLICATE_WINDOW_S = 300.0


class WaypointSource(str, Enum):
    """Where a waypoint came from. Values are persisted as-is."""

    MANUAL_POINT = "manual_point"  # manual entry, time and location given
    MESSAGE = "message"  # manual message, location interpolated
    LOG = "log"  # ship's log entry, location and title computed
    TRACKER_FIX = "tracker_fix"  # satellite tracker mail, time and location parsed
    RELAY_MAIL = "relay_mail"  # relayed mail, time parsed, location interpolated


OBSERVED_SOURCES = frozenset({WaypointSource.MANUAL_POINT, WaypointSource.TRACKER_FIX})
INTERPOLATED_SOURCES = frozenset({WaypointSource.MESSAGE, WaypointSource.LOG, WaypointSource.RELAY_MAIL})

SOURCE_STYLES = {
    WaypointSource.MANUAL_POINT: "location",
    WaypointSource.TRACKER_FIX: "location",
    WaypointSource.MESSAGE: "message",
    WaypointSource.RELAY_MAIL: "message",
    WaypointSource.LOG: "ship_log",
}


@dataclass(eq=False)
class Waypoint:
    """A single time-stamped record in a voyage.

    Attributes:
        source: Origin of the record.
        time: Aware UTC datetime of the event.
        location: Measured location for observed sources, otherwise filled in
            by route reconstruction.
        title: Optional heading; computed for observed points and log entries.
        text: Optional body text.
    """

    source: WaypointSource
    time: TimeLike
    location: Optional[Geocoordinate] = None
    title: Optional[str] = None
    text: Optional[str] = None

    def __post_init__(self) -> None:
        try:
            self.source = WaypointSource(self.source)
        except ValueError:
            valid = ", ".join(s.value for s in WaypointSource)
            raise InvalidInputError(f"source must be one of {valid}, got {self.source!r}") from None

        if self.source in OBSERVED_SOURCES:
            if not isinstance(self.location, Geocoordinate):
                raise InvalidInputError(f"{self.source.value} waypoints require a Geocoordinate location")
        elif self.location is not None:
            raise InvalidInputError(f"{self.source.value} waypoints cannot be given a location")

        self.time = to_utc(self.time)

    @property
    def is_observed(self) -> bool:
        """True when the location was measured rather than interpolated."""
        return self.source in OBSERVED_SOURCES

    @property
    def style(self) -> str:
        return SOURCE_STYLES[self.source]

    def duplicates(self, other: "Waypoint") -> bool:
        """Same source within five minutes of each other, both ends inclusive."""
        if self.source != other.source:
            return False
        return abs(seconds_between(self.time, other.time)) <= DUPLICATE_WINDOW_S

    def __str__(self) -> str:
        latitude = self.location.latitude if self.location else -1.0
        longitude = self.location.longitude if self.location else -1.0
        title = f" - {self.title}" if self.title else ""
        text = self.text.rstrip("\r\n") if self.text else ""
        return f"({latitude:+10.5f}, {longitude:+10.5f}) [{self.time:%Y-%m-%d %H:%M:%S}{title}] {text}"
