"""Map document renderers."""

from voyage_tracker.render.geojson import render_geojson, voyage_feature_collection
from voyage_tracker.render.kml import render_kml

__all__ = [
    "render_geojson",
    "render_kml",
    "voyage_feature_collection",
]
