"""Route reconstruction over a voyage's waypoints.

A single pass over the time-sorted waypoints:

* observed points (manual entries, tracker fixes) accumulate segment distance
  and elapsed time and are titled by voyage day;
* every other point gets a location blended linearly in time between the
  nearest observed points before and after it, or a copy of whichever of the
  two exists;
* aggregates (distance, duration, average and top speed) are returned as a
  :class:`RouteStatistics`.

Only observed points are ever used as interpolation anchors.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from voyage_tracker.core.errors import UnknownSourceError
from voyage_tracker.core.timeutil import seconds_between
from voyage_tracker.core.waypoint import INTERPOLATED_SOURCES, OBSERVED_SOURCES, Waypoint, WaypointSource


logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60
SECONDS_PER_HOUR = 60 * 60


@dataclass(frozen=True)
class RouteStatistics:
    """Aggregates derived from a voyage's waypoints.

    Attributes:
        distance_nm: Sum of great-circle segments between observed points.
        duration_s: Seconds between the first and last waypoint.
        elapsed_s: Seconds covered by observed segments.
        average_speed_kn: ``distance_nm`` over ``elapsed_s``, if any time elapsed.
        max_speed_kn: Fastest observed segment, if any had a duration.
    """

    distance_nm: float = 0.0
    duration_s: float = 0.0
    elapsed_s: float = 0.0
    average_speed_kn: Optional[float] = None
    max_speed_kn: Optional[float] = None


def _next_observed_index(waypoints: List[Waypoint], start: int) -> int:
    """Index of the first observed waypoint at or after ``start``, or ``len(waypoints)``."""
    index = start
    while index < len(waypoints) and waypoints[index].source not in OBSERVED_SOURCES:
        index += 1
    return index


def reconstruct_route(waypoints: List[Waypoint]) -> RouteStatistics:
    """Sort ``waypoints`` in place, fill in derived fields and return aggregates.

    Raises:
        UnknownSourceError: a waypoint carries a source outside
            :class:`WaypointSource`. Waypoints processed before it keep their
            new titles and locations.
    """
    waypoints.sort(key=lambda point: point.time)
    if not waypoints:
        return RouteStatistics()

    first_time = waypoints[0].time
    total_distance = 0.0
    total_elapsed = 0.0
    max_speed: Optional[float] = None

    prev_known: Optional[Waypoint] = None
    # index of the next observed point; only moves forward, len(waypoints) once exhausted
    next_index = -1

    for i, point in enumerate(waypoints):
        day = math.floor(seconds_between(first_time, point.time) / SECONDS_PER_DAY)

        if point.source in OBSERVED_SOURCES:
            distance = 0.0
            elapsed = 0.0
            if prev_known is not None:
                distance = prev_known.location.distance_to(point.location)
                elapsed = seconds_between(prev_known.time, point.time)
            speed = distance / (elapsed / SECONDS_PER_HOUR) if elapsed > 0 else None

            total_distance += distance
            total_elapsed += elapsed
            if speed is not None and (max_speed is None or speed > max_speed):
                max_speed = speed

            point.title = f"Day {day}"
            if speed is not None:
                point.text = f"Traveled {distance:.1f} nmi at {speed:.1f} knots"

            prev_known = point

        elif point.source in INTERPOLATED_SOURCES:
            if next_index < i:
                next_index = _next_observed_index(waypoints, i + 1)
            next_known = waypoints[next_index] if next_index < len(waypoints) else None

            if prev_known is not None and next_known is not None:
                span = seconds_between(prev_known.time, next_known.time)
                fraction = seconds_between(prev_known.time, point.time) / span if span > 0 else 0.0
                point.location = prev_known.location.interpolate(next_known.location, fraction)
            elif prev_known is not None or next_known is not None:
                anchor = prev_known if prev_known is not None else next_known
                point.location = anchor.location.clone()

            if point.source == WaypointSource.LOG:
                point.title = f"Ship's Log Day {day}"

        else:
            raise UnknownSourceError(point.source)

    duration = seconds_between(first_time, waypoints[-1].time)
    average_speed = total_distance / (total_elapsed / SECONDS_PER_HOUR) if total_elapsed > 0 else None

    logger.debug(
        "[ROUTE] %d waypoints, %.2f nmi over %.0f s",
        len(waypoints), total_distance, duration,
    )
    return RouteStatistics(
        distance_nm=total_distance,
        duration_s=duration,
        elapsed_s=total_elapsed,
        average_speed_kn=average_speed,
        max_speed_kn=max_speed,
    )
