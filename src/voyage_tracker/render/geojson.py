"""GeoJSON rendering of a voyage."""
from __future__ import annotations

import json
from typing import Any, Dict, List

from voyage_tracker.core.timeutil import format_iso
from voyage_tracker.core.voyage import Voyage
from voyage_tracker.core.waypoint import Waypoint


def waypoint_feature(point: Waypoint) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "properties": {
            "source": point.source.value,
            "style": point.style,
            "time": format_iso(point.time),
            "title": point.title,
            "text": point.text,
            "interpolated": not point.is_observed,
        },
        "geometry": {
            "type": "Point",
            "coordinates": [point.location.longitude, point.location.latitude],
        },
    }


def route_feature(voyage: Voyage) -> Dict[str, Any]:
    """LineString through the observed points, carrying the route totals."""
    coordinates = [
        [point.location.longitude, point.location.latitude]
        for point in voyage.waypoints if point.is_observed
    ]
    return {
        "type": "Feature",
        "properties": {
            "name": "Route",
            "distance_nm": voyage.distance,
            "duration_s": voyage.duration,
            "average_speed_kn": voyage.average_speed,
            "max_speed_kn": voyage.max_speed,
        },
        "geometry": {"type": "LineString", "coordinates": coordinates},
    }


def voyage_feature_collection(voyage: Voyage) -> Dict[str, Any]:
    features: List[Dict[str, Any]] = [
        waypoint_feature(point) for point in voyage.waypoints if point.location is not None
    ]
    features.append(route_feature(voyage))
    return {
        "type": "FeatureCollection",
        "name": voyage.name,
        "features": features,
    }


def render_geojson(voyage: Voyage, indent: int = 2) -> str:
    return json.dumps(voyage_feature_collection(voyage), indent=indent)
