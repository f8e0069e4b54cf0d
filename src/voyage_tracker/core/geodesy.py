"""Spherical-earth geocoordinates with nautical-mile distances."""
from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from voyage_tracker.core.errors import InvalidInputError


EARTH_RADIUS_NM = 3440.07
DEGREE_SIGN = "°"

_DMS_PART = r"([+-])(\d+)°\s*(\d+)'\s*(\d+(?:\.\d+)?)\""
_DMS_PATTERN = re.compile(rf"^\s*{_DMS_PART}\s*,\s*{_DMS_PART}\s*$")


def _is_real(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _wrap_180(value: float) -> float:
    """Reduce an angle modulo 360 into (-180, 180]."""
    if -180.0 < value <= 180.0:
        return value
    value %= 360.0
    if value > 180.0:
        value -= 360.0
    return value


def _dms_to_degrees(degrees: float, minutes: float, seconds: float) -> float:
    for part in (degrees, minutes, seconds):
        if not _is_real(part):
            raise InvalidInputError(f"DMS components must be numeric, got {part!r}")
    minutes = abs(minutes)
    seconds = abs(seconds)
    if minutes >= 60 or seconds >= 60:
        raise InvalidInputError(f"Minutes and seconds must be below 60, got {minutes}' {seconds}\"")
    sign = math.copysign(1.0, degrees)
    return degrees + sign * (minutes + seconds / 60.0) / 60.0


def _degrees_to_dms(value: float) -> Tuple[str, int, int, float]:
    sign = "-" if value < 0 else "+"
    # work in hundredths of an arc second so rounding carries into minutes and degrees
    hundredths = round(abs(value) * 360000)
    degrees, hundredths = divmod(hundredths, 360000)
    minutes, hundredths = divmod(hundredths, 6000)
    return sign, degrees, minutes, hundredths / 100


@dataclass
class Geocoordinate:
    """A latitude/longitude pair in decimal degrees.

    Instances are normalized on construction so that latitude lies in
    [-90, 90] and longitude in (-180, 180]. Crossing a pole reflects the
    latitude and moves the longitude to the opposite meridian.
    """

    latitude: float = 0.0
    longitude: float = 0.0

    def __post_init__(self) -> None:
        if not _is_real(self.latitude):
            raise InvalidInputError(f"latitude must be numeric, got {self.latitude!r}")
        if not _is_real(self.longitude):
            raise InvalidInputError(f"longitude must be numeric, got {self.longitude!r}")
        self.latitude = float(self.latitude)
        self.longitude = float(self.longitude)
        self.normalize()

    def normalize(self) -> "Geocoordinate":
        """Fold latitude and longitude back into their canonical ranges."""
        latitude = _wrap_180(self.latitude)
        longitude = self.longitude
        if latitude > 90.0:
            latitude = 180.0 - latitude
            longitude += 180.0
        elif latitude < -90.0:
            latitude = -180.0 - latitude
            longitude += 180.0
        self.latitude = latitude
        self.longitude = _wrap_180(longitude)
        return self

    def distance_to(self, other: Optional["Geocoordinate"]) -> Optional[float]:
        """Return the great-circle distance to ``other`` in nautical miles."""
        if other is None:
            return None

        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        dlon = math.radians(abs(other.longitude - self.longitude))

        # central angle, well conditioned for both tiny and antipodal separations
        angle = math.atan2(
            math.sqrt(
                (math.cos(lat2) * math.sin(dlon)) ** 2
                + (math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)) ** 2
            ),
            math.sin(lat1) * math.sin(lat2) + math.cos(lat1) * math.cos(lat2) * math.cos(dlon),
        )
        return EARTH_RADIUS_NM * angle

    def interpolate(self, other: "Geocoordinate", fraction: float) -> "Geocoordinate":
        """Blend latitude and longitude linearly towards ``other``."""
        return Geocoordinate(
            self.latitude + fraction * (other.latitude - self.latitude),
            self.longitude + fraction * (other.longitude - self.longitude),
        )

    def clone(self) -> "Geocoordinate":
        return Geocoordinate(self.latitude, self.longitude)

    def to_dms(self) -> str:
        """Render as degrees, minutes and seconds."""
        parts = []
        for value in (self.latitude, self.longitude):
            sign, degrees, minutes, seconds = _degrees_to_dms(value)
            parts.append(f"{sign}{degrees}{DEGREE_SIGN} {minutes}' {seconds:.2f}\"")
        return ", ".join(parts)

    @classmethod
    def from_dms(
        cls,
        lat_degrees: float,
        lat_minutes: float,
        lat_seconds: float,
        lon_degrees: float,
        lon_minutes: float,
        lon_seconds: float,
    ) -> "Geocoordinate":
        """Build a coordinate from two degrees/minutes/seconds triples.

        The sign of each axis comes from its degrees component; minutes and
        seconds are magnitudes added on away from zero.
        """
        return cls(
            _dms_to_degrees(lat_degrees, lat_minutes, lat_seconds),
            _dms_to_degrees(lon_degrees, lon_minutes, lon_seconds),
        )

    @classmethod
    def parse_dms(cls, text: str) -> "Geocoordinate":
        """Parse the output of :meth:`to_dms`."""
        match = _DMS_PATTERN.match(text)
        if match is None:
            raise InvalidInputError(f"Malformed degrees/minutes/seconds: {text!r}")
        lat_sign, lat_d, lat_m, lat_s, lon_sign, lon_d, lon_m, lon_s = match.groups()
        lat_degrees = float(lat_d) * (-1.0 if lat_sign == "-" else 1.0)
        lon_degrees = float(lon_d) * (-1.0 if lon_sign == "-" else 1.0)
        return cls.from_dms(
            lat_degrees, float(lat_m), float(lat_s),
            lon_degrees, float(lon_m), float(lon_s),
        )

    def __str__(self) -> str:
        return f"{self.latitude:+.5f}, {self.longitude:+.5f}"
