# barberbook/core.py
"""
Calendar primitives: minute-of-day intervals and weekday arithmetic.

Times of day are minutes since midnight. An end time of 00:00 is read as
1440 (end of day) so a shift may run until midnight.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, Iterator, List

import pytz

from barberbook.errors import InvalidInterval

MINUTES_PER_DAY = 24 * 60


def time_to_minutes(t: time, *, is_end_time: bool = False) -> int:
    minutes = t.hour * 60 + t.minute
    if is_end_time and minutes == 0:
        return MINUTES_PER_DAY
    return minutes


def minutes_to_time(minutes: int) -> time:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"minutes out of range: {minutes}")
    return time(minutes // 60, minutes % 60)


@dataclass(frozen=True, order=True)
class Interval:
    """Half-open [start, end) span of a single day, in minutes."""

    start: int
    end: int

    def __post_init__(self):
        if self.end <= self.start:
            raise InvalidInterval(
                "interval end must be after its start",
                details={"start": self.start, "end": self.end},
            )
        if self.start < 0 or self.end > MINUTES_PER_DAY:
            raise InvalidInterval(
                "interval must lie within a single day",
                details={"start": self.start, "end": self.end},
            )

    @classmethod
    def from_times(cls, start_time: time, end_time: time) -> "Interval":
        return cls(time_to_minutes(start_time), time_to_minutes(end_time, is_end_time=True))

    @property
    def duration(self) -> int:
        return self.end - self.start

    def contains(self, other: "Interval") -> bool:
        return self.start <= other.start and other.end <= self.end


def weekday_of(day: date) -> int:
    """Weekday with 0 = Sunday ... 6 = Saturday."""
    return (day.weekday() + 1) % 7


def overlaps(a: Interval, b: Interval) -> bool:
    # a.end == b.start is adjacency, not a conflict
    return a.start < b.end and b.start < a.end


def subtract_interval(base: Interval, cut: Interval) -> List[Interval]:
    if not overlaps(base, cut):
        return [base]
    pieces = []
    if base.start < cut.start:
        pieces.append(Interval(base.start, cut.start))
    if cut.end < base.end:
        pieces.append(Interval(cut.end, base.end))
    return pieces


def subtract_all(intervals: Iterable[Interval], cut: Interval) -> List[Interval]:
    result = []
    for interval in intervals:
        result.extend(subtract_interval(interval, cut))
    return result


def merge_intervals(intervals: Iterable[Interval]) -> List[Interval]:
    """Sorted union; touching intervals are joined."""
    merged: List[Interval] = []
    for interval in sorted(intervals):
        if merged and interval.start <= merged[-1].end:
            last = merged[-1]
            merged[-1] = Interval(last.start, max(last.end, interval.end))
        else:
            merged.append(interval)
    return merged


def shop_timezone(name: str):
    return pytz.timezone(name)


def shop_now(tz) -> datetime:
    return datetime.now(tz)


def shop_today(tz) -> date:
    return shop_now(tz).date()


def date_range(date_from: date, date_to: date) -> Iterator[date]:
    """Every calendar day from date_from to date_to, inclusive."""
    for offset in range((date_to - date_from).days + 1):
        yield date_from + timedelta(days=offset)
