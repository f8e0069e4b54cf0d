"""The voyage aggregate: waypoints, legs and derived route statistics."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from voyage_tracker.core.errors import InvalidInputError
from voyage_tracker.core.leg import Leg
from voyage_tracker.core.waypoint import Waypoint, WaypointSource
from voyage_tracker.route.engine import RouteStatistics, reconstruct_route


logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


class Voyage:
    """A named voyage owning its waypoints and legs.

    Adding waypoints or legs marks the voyage stale; its statistics only
    describe the current waypoints again after :meth:`update`.
    """

    def __init__(self, name: str, description: str, author: Optional[str] = None) -> None:
        self.name = name
        self.description = description
        self.author = author

        self.legs: List[Leg] = []
        self.waypoints: List[Waypoint] = []
        self.statistics = RouteStatistics()
        self.stale = False

    @property
    def distance(self) -> float:
        """Route distance in nautical miles."""
        return self.statistics.distance_nm

    @property
    def duration(self) -> float:
        """Seconds between the first and last waypoint."""
        return self.statistics.duration_s

    @property
    def average_speed(self) -> Optional[float]:
        return self.statistics.average_speed_kn

    @property
    def max_speed(self) -> Optional[float]:
        return self.statistics.max_speed_kn

    def add_leg(self, leg: Leg) -> bool:
        """Add ``leg`` unless its name is taken or it overlaps an existing leg."""
        if leg is None:
            raise InvalidInputError("Cannot add a missing leg to a voyage")
        if any(existing.name == leg.name for existing in self.legs):
            logger.info("[LEG] A leg named %r already exists", leg.name)
            return False
        for existing in self.legs:
            # half-open intervals: a leg may start exactly where another ends
            if leg.start < existing.end and existing.start < leg.end or existing.contains(leg.start):
                logger.info("[LEG] %s would overlap %s", leg, existing)
                return False

        self.legs.append(leg)
        self.legs.sort()
        self.stale = True
        return True

    def find_duplicate(self, point: Waypoint) -> Optional[Waypoint]:
        return next((existing for existing in self.waypoints if point.duplicates(existing)), None)

    def add_waypoint(self, point: Waypoint, ignore_duplicate: bool = False) -> bool:
        """Append ``point`` unless it duplicates an existing waypoint.

        The route is not recomputed; call :meth:`update` once all additions
        are done.
        """
        if point is None:
            raise InvalidInputError("Cannot add a missing waypoint to a voyage")
        if not ignore_duplicate and self.find_duplicate(point) is not None:
            return False

        self.waypoints.append(point)
        self.waypoints.sort(key=lambda p: p.time)
        self.stale = True
        return True

    def update(self) -> RouteStatistics:
        """Recompute interpolated locations, titles and route statistics.

        If the recompute raises, the voyage is left stale.
        """
        self.stale = True
        statistics = reconstruct_route(self.waypoints)
        self.statistics = statistics
        self.stale = False
        return statistics

    def waypoints_in(self, leg: Leg) -> List[Waypoint]:
        return [point for point in self.waypoints if leg.contains(point.time)]

    def unassigned_waypoints(self) -> List[Waypoint]:
        """Waypoints that fall inside no leg."""
        return [point for point in self.waypoints if not any(leg.contains(point.time) for leg in self.legs)]

    def waypoints_between(self, start: datetime, end: datetime) -> List[Waypoint]:
        return [point for point in self.waypoints if start <= point.time <= end]

    def legs_between(self, start: datetime, end: datetime) -> List[Leg]:
        return [leg for leg in self.legs if start <= leg.start <= end or start <= leg.end <= end]

    def last_waypoint(self, source: WaypointSource) -> Optional[Waypoint]:
        return next((point for point in reversed(self.waypoints) if point.source == source), None)

    def __str__(self) -> str:
        lines = [f"=== {self.name} ===", self.description]
        if self.author:
            lines.append(f"Author: {self.author}")
        lines.append("")

        if self.waypoints:
            lines.append(f"Voyage begun {self.waypoints[0].time:%Y-%m-%d}")
            lines.append(f"Last updated {self.waypoints[-1].time:%Y-%m-%d}")
            lines.append(
                f"{self.distance:.2f} nautical miles covered in {int(self.duration // SECONDS_PER_DAY)} days"
            )
            if self.average_speed is not None:
                lines.append(f"Average speed {self.average_speed:.2f} knots, top speed {self.max_speed:.2f} knots")
            lines.append("")

        lines.append(f"{len(self.waypoints)} waypoints in {len(self.legs)} legs")
        return "\n".join(lines)
