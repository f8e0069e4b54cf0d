from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import yaml

from voyage_tracker.core.errors import InvalidInputError, StaleVoyageError
from voyage_tracker.core.geodesy import Geocoordinate
from voyage_tracker.core.leg import Leg
from voyage_tracker.core.voyage import Voyage
from voyage_tracker.core.waypoint import Waypoint, WaypointSource
from voyage_tracker.data.store import load_voyage, save_voyage

T0 = datetime(2011, 5, 1, tzinfo=timezone.utc)


def _voyage() -> Voyage:
    voyage = Voyage("Kallisti", "Around the world", "Greg")
    voyage.add_leg(Leg("Pacific", T0, T0 + timedelta(days=30)))
    voyage.add_waypoint(Waypoint(WaypointSource.MANUAL_POINT, T0, Geocoordinate(21.3, -157.8)))
    voyage.add_waypoint(Waypoint(WaypointSource.LOG, T0 + timedelta(hours=6), None, "Ship's Log", "Wind backing"))
    voyage.add_waypoint(Waypoint(WaypointSource.TRACKER_FIX, T0 + timedelta(hours=12), Geocoordinate(20.0, -160.0)))
    voyage.update()
    return voyage


def test_save_and_load_keep_raw_records(tmp_path: Path) -> None:
    path = tmp_path / "data.yml"
    voyage = _voyage()
    save_voyage(voyage, path)

    document = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert document["name"] == "Kallisti"
    assert document["legs"][0]["from"] is not None
    log_record = document["waypoints"][1]
    assert log_record["source"] == "log"
    # interpolated locations are recomputed, never stored
    assert "latitude" not in log_record

    loaded = load_voyage(path)
    assert not loaded.stale
    assert loaded.author == "Greg"
    assert [leg.name for leg in loaded.legs] == ["Pacific"]
    assert [p.source for p in loaded.waypoints] == [p.source for p in voyage.waypoints]
    assert loaded.distance == pytest.approx(voyage.distance)
    assert loaded.waypoints[1].location == voyage.waypoints[1].location
    assert loaded.waypoints[1].title == "Ship's Log Day 0"


def test_stale_voyage_is_not_saved(tmp_path: Path) -> None:
    voyage = _voyage()
    voyage.add_waypoint(Waypoint(WaypointSource.MESSAGE, T0 + timedelta(days=2)))
    with pytest.raises(StaleVoyageError):
        save_voyage(voyage, tmp_path / "data.yml")
    assert not (tmp_path / "data.yml").exists()


def test_new_voyage_can_be_saved_empty(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "data.yml"
    save_voyage(Voyage("Kallisti", "Around the world"), path)
    loaded = load_voyage(path)
    assert loaded.waypoints == []
    assert loaded.distance == 0.0


def test_invalid_documents_are_rejected(tmp_path: Path) -> None:
    path = tmp_path / "data.yml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(InvalidInputError):
        load_voyage(path)

    path.write_text(
        "name: Kallisti\nwaypoints:\n  - source: manual_point\n    time: 2011-05-01T00:00:00Z\n",
        encoding="utf-8",
    )
    with pytest.raises(InvalidInputError):
        load_voyage(path)

    path.write_text(
        "name: Kallisti\nwaypoints:\n  - source: smoke_signal\n    time: 2011-05-01T00:00:00Z\n",
        encoding="utf-8",
    )
    with pytest.raises(InvalidInputError):
        load_voyage(path)


def test_broken_yaml_is_invalid_input(tmp_path: Path) -> None:
    path = tmp_path / "data.yml"
    path.write_text("name: [Kallisti\nwaypoints: {\n", encoding="utf-8")
    with pytest.raises(InvalidInputError):
        load_voyage(path)
