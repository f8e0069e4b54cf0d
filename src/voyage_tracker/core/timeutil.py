"""UTC time helpers."""
from __future__ import annotations

import numbers
from datetime import datetime, timezone
from typing import Union

from dateutil import parser as date_parser

from voyage_tracker.core.errors import InvalidInputError


TimeLike = Union[datetime, int, float]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_utc(value: TimeLike) -> datetime:
    """Coerce a datetime or epoch seconds to an aware UTC datetime.

    Naive datetimes are taken to already be in UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return datetime.fromtimestamp(float(value), tz=timezone.utc)
    raise InvalidInputError(f"time must be a datetime or epoch seconds, got {value!r}")


def parse_time(text: str) -> datetime:
    """Parse a free-form timestamp, defaulting to UTC when no zone is given."""
    try:
        parsed = date_parser.parse(text)
    except (ValueError, OverflowError) as exc:
        raise InvalidInputError(f"Could not parse time {text!r}: {exc}") from exc
    return to_utc(parsed)


def seconds_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds()


def format_iso(value: datetime) -> str:
    """Render as ``YYYY-MM-DDTHH:MM:SSZ``."""
    return to_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")
