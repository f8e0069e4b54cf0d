from __future__ import annotations

import math

import pytest

from voyage_tracker.core.errors import InvalidInputError
from voyage_tracker.core.geodesy import EARTH_RADIUS_NM, Geocoordinate


def test_over_the_pole_reflects_latitude_and_flips_longitude() -> None:
    point = Geocoordinate(100.0, 10.0)
    assert point.latitude == pytest.approx(80.0)
    assert point.longitude == pytest.approx(-170.0)

    north = Geocoordinate(91.0, 0.0)
    assert north.latitude == pytest.approx(89.0)
    assert north.longitude == pytest.approx(180.0)

    south = Geocoordinate(-91.0, 20.0)
    assert south.latitude == pytest.approx(-89.0)
    assert south.longitude == pytest.approx(-160.0)


def test_longitude_wraps_into_half_open_range() -> None:
    assert Geocoordinate(0.0, -180.0).longitude == 180.0
    assert Geocoordinate(0.0, 190.0).longitude == pytest.approx(-170.0)
    assert Geocoordinate(0.0, 540.0).longitude == pytest.approx(180.0)
    assert Geocoordinate(370.0, 0.0).latitude == pytest.approx(10.0)


@pytest.mark.parametrize(
    "lat, lon",
    [(0.0, 0.0), (-10.1, 33.3), (91.0, 0.0), (-91.0, 20.0), (725.5, -913.25), (-90.0, 180.0)],
)
def test_normalize_is_idempotent(lat: float, lon: float) -> None:
    point = Geocoordinate(lat, lon)
    once = (point.latitude, point.longitude)
    point.normalize()
    assert (point.latitude, point.longitude) == once
    assert -90.0 <= point.latitude <= 90.0
    assert -180.0 < point.longitude <= 180.0


@pytest.mark.parametrize("lat, lon", [("12", 0.0), (0.0, None), (True, 0.0)])
def test_non_numeric_input_is_rejected(lat, lon) -> None:
    with pytest.raises(InvalidInputError):
        Geocoordinate(lat, lon)


def test_distance_properties() -> None:
    a = Geocoordinate(0.0, 0.0)
    b = Geocoordinate(0.0, 90.0)
    c = Geocoordinate(47.6, -122.3)

    assert a.distance_to(a) == 0.0
    assert a.distance_to(b) == pytest.approx(EARTH_RADIUS_NM * math.pi / 2)
    assert c.distance_to(b) == pytest.approx(b.distance_to(c))
    assert a.distance_to(None) is None


def test_distance_across_antimeridian_is_short() -> None:
    west = Geocoordinate(0.0, 179.5)
    east = Geocoordinate(0.0, -179.5)
    assert west.distance_to(east) == pytest.approx(60.0, rel=1e-3)


def test_clone_is_independent() -> None:
    original = Geocoordinate(12.5, -45.0)
    copy = original.clone()
    assert copy == original
    assert copy is not original
    copy.latitude = 0.0
    assert original.latitude == 12.5


def test_dms_round_trip() -> None:
    point = Geocoordinate(21.30694, -157.85833)
    rendered = point.to_dms()
    assert rendered.startswith("+21° 18' ")
    assert "-157° 51' " in rendered

    parsed = Geocoordinate.parse_dms(rendered)
    assert parsed.latitude == pytest.approx(point.latitude, abs=1e-5)
    assert parsed.longitude == pytest.approx(point.longitude, abs=1e-5)


def test_dms_keeps_sign_below_one_degree() -> None:
    point = Geocoordinate(-0.5, 0.25)
    assert point.to_dms() == "-0° 30' 0.00\", +0° 15' 0.00\""
    parsed = Geocoordinate.parse_dms(point.to_dms())
    assert parsed.latitude == pytest.approx(-0.5)
    assert parsed.longitude == pytest.approx(0.25)


@pytest.mark.parametrize(
    "lat, expected",
    [
        (12.333332, "+12° 20' 0.00\""),
        (0.9999999, "+1° 0' 0.00\""),
        (-45.0166666, "-45° 1' 0.00\""),
    ],
)
def test_dms_rounding_carries_into_minutes_and_degrees(lat: float, expected: str) -> None:
    point = Geocoordinate(lat, 0.0)
    rendered = point.to_dms()
    assert rendered.startswith(expected)

    parsed = Geocoordinate.parse_dms(rendered)
    assert parsed.latitude == pytest.approx(lat, abs=1e-5)


def test_from_dms_takes_sign_from_degrees() -> None:
    point = Geocoordinate.from_dms(-33, 52, 4.2, 151, 12, 36)
    assert point.latitude == pytest.approx(-(33 + 52 / 60 + 4.2 / 3600))
    assert point.longitude == pytest.approx(151 + 12 / 60 + 36 / 3600)

    # minutes and seconds are magnitudes
    assert Geocoordinate.from_dms(-10, -30, 0, 0, 0, 0).latitude == pytest.approx(-10.5)


def test_malformed_dms_is_rejected() -> None:
    with pytest.raises(InvalidInputError):
        Geocoordinate.from_dms(10, 60, 0, 0, 0, 0)
    with pytest.raises(InvalidInputError):
        Geocoordinate.from_dms(10, "5", 0, 0, 0, 0)
    with pytest.raises(InvalidInputError):
        Geocoordinate.parse_dms("somewhere near Fiji")


def test_decimal_format() -> None:
    assert str(Geocoordinate(1.5, -2.25)) == "+1.50000, -2.25000"
