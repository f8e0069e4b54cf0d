"""Persisted record shapes for the YAML data file."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from voyage_tracker.core.errors import InvalidInputError
from voyage_tracker.core.geodesy import Geocoordinate
from voyage_tracker.core.leg import Leg
from voyage_tracker.core.voyage import Voyage
from voyage_tracker.core.waypoint import Waypoint, WaypointSource


class WaypointRecord(BaseModel):
    source: WaypointSource
    time: datetime
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    title: Optional[str] = None
    text: Optional[str] = None

    @model_validator(mode="after")
    def location_pairs(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be given together")
        return self

    @classmethod
    def from_waypoint(cls, point: Waypoint) -> "WaypointRecord":
        # interpolated locations are derived data and are not stored
        location = point.location if point.is_observed else None
        return cls(
            source=point.source,
            time=point.time,
            latitude=location.latitude if location else None,
            longitude=location.longitude if location else None,
            title=point.title,
            text=point.text,
        )

    def to_waypoint(self) -> Waypoint:
        location = None
        if self.latitude is not None and self.source in (WaypointSource.MANUAL_POINT, WaypointSource.TRACKER_FIX):
            location = Geocoordinate(self.latitude, self.longitude)
        return Waypoint(self.source, self.time, location, self.title, self.text)


class LegRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    start: datetime = Field(..., alias="from")
    end: datetime = Field(..., alias="to")

    @classmethod
    def from_leg(cls, leg: Leg) -> "LegRecord":
        return cls(name=leg.name, start=leg.start, end=leg.end)

    def to_leg(self) -> Leg:
        return Leg(self.name, self.start, self.end)


class VoyageRecord(BaseModel):
    name: str
    description: str = ""
    author: Optional[str] = None
    legs: List[LegRecord] = []
    waypoints: List[WaypointRecord] = []

    @classmethod
    def from_voyage(cls, voyage: Voyage) -> "VoyageRecord":
        return cls(
            name=voyage.name,
            description=voyage.description,
            author=voyage.author,
            legs=[LegRecord.from_leg(leg) for leg in voyage.legs],
            waypoints=[WaypointRecord.from_waypoint(point) for point in voyage.waypoints],
        )

    def to_voyage(self) -> Voyage:
        """Rebuild the voyage; duplicates stored on purpose are kept."""
        voyage = Voyage(self.name, self.description, self.author)
        for record in self.legs:
            if not voyage.add_leg(record.to_leg()):
                raise InvalidInputError(f"Stored leg {record.name!r} clashes with another leg")
        for record in self.waypoints:
            voyage.add_waypoint(record.to_waypoint(), ignore_duplicate=True)
        return voyage

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
