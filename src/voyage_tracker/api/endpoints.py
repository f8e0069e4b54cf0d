"""API routers."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from voyage_tracker.api.dependencies import get_voyage
from voyage_tracker.api.schemas import LegOut, VoyageSummary, WaypointOut
from voyage_tracker.core.timeutil import EPOCH, to_utc
from voyage_tracker.core.voyage import Voyage
from voyage_tracker.render.geojson import voyage_feature_collection
from voyage_tracker.render.kml import render_kml

router = APIRouter(prefix="/voyage")

KML_MEDIA_TYPE = "application/vnd.google-earth.kml+xml"


@router.get("", response_model=VoyageSummary)
def voyage_summary(voyage: Voyage = Depends(get_voyage)) -> VoyageSummary:
    return VoyageSummary.from_voyage(voyage)


@router.get("/waypoints", response_model=List[WaypointOut])
def list_waypoints(
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    voyage: Voyage = Depends(get_voyage),
) -> List[WaypointOut]:
    lower = to_utc(start) if start else EPOCH
    points = voyage.waypoints_between(lower, to_utc(end)) if end else [p for p in voyage.waypoints if p.time >= lower]
    return [WaypointOut.from_waypoint(point) for point in points]


@router.get("/legs", response_model=List[LegOut])
def list_legs(voyage: Voyage = Depends(get_voyage)) -> List[LegOut]:
    return [LegOut.from_leg(leg, voyage) for leg in voyage.legs]


@router.get("/legs/{name}/waypoints", response_model=List[WaypointOut])
def leg_waypoints(name: str, voyage: Voyage = Depends(get_voyage)) -> List[WaypointOut]:
    leg = next((leg for leg in voyage.legs if leg.name == name), None)
    if leg is None:
        raise HTTPException(status_code=404, detail=f"No leg named {name!r}")
    return [WaypointOut.from_waypoint(point) for point in voyage.waypoints_in(leg)]


@router.get("/route.geojson")
def route_geojson(voyage: Voyage = Depends(get_voyage)) -> dict:
    return voyage_feature_collection(voyage)


@router.get("/route.kml")
def route_kml(
    time_info: bool = False,
    leg_folders: bool = False,
    voyage: Voyage = Depends(get_voyage),
) -> Response:
    return Response(content=render_kml(voyage, time_info=time_info, leg_folders=leg_folders), media_type=KML_MEDIA_TYPE)
