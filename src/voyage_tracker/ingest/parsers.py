"""Turn tracker and relay mail bodies into waypoints."""
from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from voyage_tracker.core.errors import InvalidInputError
from voyage_tracker.core.geodesy import Geocoordinate
from voyage_tracker.core.timeutil import parse_time, to_utc
from voyage_tracker.core.waypoint import Waypoint, WaypointSource


SIGNATURE_SEPARATOR = "-" * 49
REDACTED = "--- ADDRESS REDACTED ---"

_TIME = re.compile(r"Time:(.+?)\s*\r?\n")
_LATITUDE = re.compile(r"Latitude:(-?[0-9]+\.[0-9]+)")
_LONGITUDE = re.compile(r"Longitude:(-?[0-9]+\.[0-9]+)")
_STATUS_OK = re.compile(r"Message:Everything is OK")
_SOFT_BREAK = re.compile(r"=\r?\n")


class MailParseError(InvalidInputError):
    """Raised when a mail body lacks a field the waypoint needs."""


def _search(pattern: re.Pattern, body: str, what: str) -> str:
    match = pattern.search(body)
    if match is None:
        raise MailParseError(f"Could not parse {what} from tracker message body: {body!r}")
    return match.group(1).strip()


def parse_tracker_fix(body: str) -> Waypoint:
    """Parse a satellite tracker check-in into a ``tracker_fix`` waypoint.

    The body carries ``Time:``, ``Latitude:`` and ``Longitude:`` lines; the
    status line becomes the waypoint text (``OK`` or ``SOS``).
    """
    time = parse_time(_search(_TIME, body, "time"))
    latitude = float(_search(_LATITUDE, body, "latitude"))
    longitude = float(_search(_LONGITUDE, body, "longitude"))
    status = "OK" if _STATUS_OK.search(body) else "SOS"
    return Waypoint(WaypointSource.TRACKER_FIX, time, Geocoordinate(latitude, longitude), text=status)


def clean_relay_body(body: str, address: Optional[str] = None) -> str:
    """Trim the relay signature, hide the sender address and join soft line breaks."""
    body = body.split(SIGNATURE_SEPARATOR)[0]
    if address:
        body = re.sub(re.escape(address), REDACTED, body, flags=re.IGNORECASE)
    body = _SOFT_BREAK.sub("", body)
    return body.rstrip("\r\n")


def parse_relay_mail(subject: Optional[str], date: Optional[datetime | str], body: str,
                     address: Optional[str] = None) -> Waypoint:
    """Build a ``relay_mail`` waypoint from a relayed message."""
    if date is None:
        raise MailParseError(f"Relay mail {subject!r} has no date")
    time = parse_time(date) if isinstance(date, str) else to_utc(date)
    return Waypoint(WaypointSource.RELAY_MAIL, time, None, subject, clean_relay_body(body, address))
