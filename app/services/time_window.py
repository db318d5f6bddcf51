from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterator

from app.core.errors import InvalidWindow


def windows_overlap(a_start: time, a_end: time, b_start: time, b_end: time) -> bool:
    """Half-open overlap test; windows that only touch at an endpoint do not overlap."""
    return a_start < b_end and b_start < a_end


def daterange(start: date, end: date) -> Iterator[date]:
    cur = start
    while cur <= end:
        yield cur
        cur = cur + timedelta(days=1)


def ensure_valid_window(start: time, end: time) -> None:
    if start >= end:
        raise InvalidWindow(f"End time {end.strftime('%H:%M')} must be after start time {start.strftime('%H:%M')}")


@dataclass(frozen=True)
class TimeWindow:
    """A wall-clock window on a single calendar day."""

    day: date
    start: time
    end: time

    def __post_init__(self) -> None:
        ensure_valid_window(self.start, self.end)

    def overlaps(self, other_start: time, other_end: time) -> bool:
        return windows_overlap(self.start, self.end, other_start, other_end)

    def contains(self, start: time, end: time) -> bool:
        return self.start <= start and end <= self.end

    @property
    def hours(self) -> float:
        delta = datetime.combine(self.day, self.end) - datetime.combine(self.day, self.start)
        return delta.total_seconds() / 3600

    def label(self) -> str:
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}"
