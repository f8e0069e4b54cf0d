"""API response models."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from voyage_tracker.core.leg import Leg
from voyage_tracker.core.voyage import Voyage
from voyage_tracker.core.waypoint import Waypoint, WaypointSource


class WaypointOut(BaseModel):
    source: WaypointSource
    style: str
    time: datetime
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    interpolated: bool = Field(..., description="Location computed from neighbouring fixes")
    title: Optional[str] = None
    text: Optional[str] = None

    @classmethod
    def from_waypoint(cls, point: Waypoint) -> "WaypointOut":
        return cls(
            source=point.source,
            style=point.style,
            time=point.time,
            latitude=point.location.latitude if point.location else None,
            longitude=point.location.longitude if point.location else None,
            interpolated=not point.is_observed,
            title=point.title,
            text=point.text,
        )


class LegOut(BaseModel):
    name: str
    start: datetime
    end: datetime
    waypoint_count: int

    @classmethod
    def from_leg(cls, leg: Leg, voyage: Voyage) -> "LegOut":
        return cls(name=leg.name, start=leg.start, end=leg.end, waypoint_count=len(voyage.waypoints_in(leg)))


class VoyageSummary(BaseModel):
    name: str
    description: str
    author: Optional[str] = None
    distance_nm: float
    duration_s: float
    average_speed_kn: Optional[float] = None
    max_speed_kn: Optional[float] = None
    waypoint_count: int
    leg_count: int
    started: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    legs: List[LegOut] = []

    @classmethod
    def from_voyage(cls, voyage: Voyage) -> "VoyageSummary":
        return cls(
            name=voyage.name,
            description=voyage.description,
            author=voyage.author,
            distance_nm=voyage.distance,
            duration_s=voyage.duration,
            average_speed_kn=voyage.average_speed,
            max_speed_kn=voyage.max_speed,
            waypoint_count=len(voyage.waypoints),
            leg_count=len(voyage.legs),
            started=voyage.waypoints[0].time if voyage.waypoints else None,
            last_updated=voyage.waypoints[-1].time if voyage.waypoints else None,
            legs=[LegOut.from_leg(leg, voyage) for leg in voyage.legs],
        )
