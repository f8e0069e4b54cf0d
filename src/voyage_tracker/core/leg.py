"""Named time windows grouping waypoints."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from voyage_tracker.core.errors import InvalidInputError
from voyage_tracker.core.timeutil import TimeLike, to_utc


@dataclass(order=True)
class Leg:
    """A named half-open interval ``[start, end)``.

    Legs compare by ``start`` only, which keeps a voyage's legs sorted
    chronologically.
    """

    name: str = field(compare=False)
    start: TimeLike
    end: TimeLike = field(compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidInputError("Leg name must not be empty")
        self.start = to_utc(self.start)
        self.end = to_utc(self.end)
        if self.end < self.start:
            raise InvalidInputError(f"Leg {self.name!r} ends before it starts")

    def contains(self, time: datetime) -> bool:
        return self.start <= time < self.end

    def __str__(self) -> str:
        return f"{self.name} [{self.start:%Y-%m-%d %H:%M} - {self.end:%Y-%m-%d %H:%M}]"
