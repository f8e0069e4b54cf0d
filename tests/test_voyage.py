from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from voyage_tracker.core.errors import InvalidInputError, StaleVoyageError, UnknownSourceError
from voyage_tracker.core.geodesy import EARTH_RADIUS_NM, Geocoordinate
from voyage_tracker.core.leg import Leg
from voyage_tracker.core.voyage import Voyage
from voyage_tracker.core.waypoint import Waypoint, WaypointSource
from voyage_tracker.data.store import save_voyage

T0 = datetime(2011, 5, 1, tzinfo=timezone.utc)
STEP_60NM = math.degrees(60.0 / EARTH_RADIUS_NM)


def days(n: float) -> datetime:
    return T0 + timedelta(days=n)


def fix(when: datetime, lon: float = 0.0) -> Waypoint:
    return Waypoint(WaypointSource.TRACKER_FIX, when, Geocoordinate(0.0, lon))


def test_add_leg_rejects_duplicates_and_overlaps() -> None:
    voyage = Voyage("Kallisti", "Around the world")
    assert voyage.add_leg(Leg("Pacific", days(10), days(20)))

    assert not voyage.add_leg(Leg("Pacific", days(30), days(40)))
    assert not voyage.add_leg(Leg("starts inside", days(15), days(25)))
    assert not voyage.add_leg(Leg("ends inside", days(5), days(11)))
    assert not voyage.add_leg(Leg("encloses", days(0), days(30)))
    assert [leg.name for leg in voyage.legs] == ["Pacific"]

    with pytest.raises(InvalidInputError):
        voyage.add_leg(None)


def test_adjacent_legs_are_accepted_in_either_order() -> None:
    voyage = Voyage("Kallisti", "Around the world")
    assert voyage.add_leg(Leg("second", days(10), days(20)))
    assert voyage.add_leg(Leg("first", days(0), days(10)))
    assert voyage.add_leg(Leg("third", days(20), days(25)))
    assert [leg.name for leg in voyage.legs] == ["first", "second", "third"]


def test_add_waypoint_rejects_duplicates_unless_told_otherwise() -> None:
    voyage = Voyage("Kallisti", "Around the world")
    first = fix(T0)
    assert voyage.add_waypoint(first)

    again = fix(T0 + timedelta(minutes=5))
    assert not voyage.add_waypoint(again)
    assert voyage.find_duplicate(again) is first
    assert voyage.add_waypoint(again, ignore_duplicate=True)
    assert len(voyage.waypoints) == 2

    with pytest.raises(InvalidInputError):
        voyage.add_waypoint(None)


def test_add_keeps_time_order_but_does_not_recompute() -> None:
    voyage = Voyage("Kallisti", "Around the world")
    voyage.add_waypoint(fix(T0 + timedelta(hours=1), STEP_60NM))
    voyage.add_waypoint(fix(T0))

    assert [p.time for p in voyage.waypoints] == [T0, T0 + timedelta(hours=1)]
    assert voyage.stale
    assert voyage.distance == 0.0

    voyage.update()
    assert not voyage.stale
    assert voyage.distance == pytest.approx(60.0)
    assert voyage.duration == 3600
    assert voyage.average_speed == pytest.approx(60.0)


def test_failed_update_keeps_previous_statistics_and_stays_stale() -> None:
    voyage = Voyage("Kallisti", "Around the world")
    voyage.add_waypoint(fix(T0))
    voyage.add_waypoint(fix(T0 + timedelta(hours=1), STEP_60NM))
    voyage.update()

    stray = Waypoint(WaypointSource.MESSAGE, T0 + timedelta(minutes=30))
    voyage.add_waypoint(stray)
    stray.source = "carrier_pigeon"

    with pytest.raises(UnknownSourceError):
        voyage.update()
    assert voyage.stale
    assert voyage.distance == pytest.approx(60.0)


def test_failed_update_of_clean_voyage_marks_it_stale(tmp_path: Path) -> None:
    voyage = Voyage("Kallisti", "Around the world")
    voyage.add_waypoint(fix(T0))
    voyage.add_waypoint(Waypoint(WaypointSource.MESSAGE, T0 + timedelta(minutes=30)))
    voyage.add_waypoint(fix(T0 + timedelta(hours=1), STEP_60NM))
    voyage.update()
    assert not voyage.stale

    voyage.waypoints[1].source = "carrier_pigeon"
    with pytest.raises(UnknownSourceError):
        voyage.update()
    assert voyage.stale
    with pytest.raises(StaleVoyageError):
        save_voyage(voyage, tmp_path / "voyage.yml")
    assert not (tmp_path / "voyage.yml").exists()


def test_leg_membership() -> None:
    voyage = Voyage("Kallisti", "Around the world")
    voyage.add_leg(Leg("Pacific", days(1), days(3)))
    for n in (0, 1, 2, 3):
        voyage.add_waypoint(fix(days(n), n))

    pacific = voyage.legs[0]
    assert [p.time for p in voyage.waypoints_in(pacific)] == [days(1), days(2)]
    assert [p.time for p in voyage.unassigned_waypoints()] == [days(0), days(3)]
    assert voyage.legs_between(days(2.5), days(4)) == [pacific]
    assert voyage.legs_between(days(4), days(5)) == []
    assert [p.time for p in voyage.waypoints_between(days(1), days(2))] == [days(1), days(2)]


def test_last_waypoint_by_source() -> None:
    voyage = Voyage("Kallisti", "Around the world")
    voyage.add_waypoint(fix(days(0)))
    voyage.add_waypoint(fix(days(1)))
    voyage.add_waypoint(Waypoint(WaypointSource.RELAY_MAIL, days(2)))
    assert voyage.last_waypoint(WaypointSource.TRACKER_FIX).time == days(1)
    assert voyage.last_waypoint(WaypointSource.LOG) is None


def test_summary_text() -> None:
    voyage = Voyage("Kallisti", "Around the world", "Greg")
    assert str(voyage).endswith("0 waypoints in 0 legs")

    voyage.add_waypoint(fix(days(0)))
    voyage.add_waypoint(fix(days(2), STEP_60NM))
    voyage.update()
    summary = str(voyage)
    assert "Author: Greg" in summary
    assert "Voyage begun 2011-05-01" in summary
    assert "60.00 nautical miles covered in 2 days" in summary
    assert summary.endswith("2 waypoints in 0 legs")
