"""Route reconstruction: ordering, interpolation and statistics."""

from voyage_tracker.route.engine import RouteStatistics, reconstruct_route

__all__ = [
    "RouteStatistics",
    "reconstruct_route",
]
