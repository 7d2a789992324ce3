# barberbook/domain.py
"""
In-memory schedule data the availability engine works on.

These are plain values built by the repositories from database rows; the
engine never touches a session.
"""

from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from typing import Dict, List, Optional, Set, Union

from barberbook.core import MINUTES_PER_DAY, Interval, time_to_minutes


class BreakType(str, Enum):
    custom = "custom"
    weekly = "weekly"
    everyday = "everyday"


class OverrideKind(str, Enum):
    open = "open"
    closed = "closed"


@dataclass(frozen=True)
class CustomBreak:
    date: date
    interval: Interval
    note: Optional[str] = None
    type = BreakType.custom

    def applies_to(self, day: date, weekday: int) -> bool:
        return day == self.date


@dataclass(frozen=True)
class WeeklyBreak:
    weekday: int
    interval: Interval
    note: Optional[str] = None
    type = BreakType.weekly

    def applies_to(self, day: date, weekday: int) -> bool:
        return weekday == self.weekday


@dataclass(frozen=True)
class EverydayBreak:
    interval: Interval
    note: Optional[str] = None
    type = BreakType.everyday

    def applies_to(self, day: date, weekday: int) -> bool:
        return True


BreakRule = Union[CustomBreak, WeeklyBreak, EverydayBreak]


@dataclass(frozen=True)
class AvailabilityOverride:
    date: date
    interval: Interval
    kind: OverrideKind


@dataclass(frozen=True)
class BookedSlot:
    date: date
    start_time: time
    duration_minutes: int

    @property
    def interval(self) -> Interval:
        start = time_to_minutes(self.start_time)
        # a booking running past midnight only blocks the rest of its own day
        return Interval(start, min(start + self.duration_minutes, MINUTES_PER_DAY))


@dataclass
class ScheduleSnapshot:
    working_hours: Dict[int, Interval] = field(default_factory=dict)
    breaks: List[BreakRule] = field(default_factory=list)
    days_off: Set[date] = field(default_factory=set)
    overrides: List[AvailabilityOverride] = field(default_factory=list)

    def breaks_for(self, day: date, weekday: int) -> List[BreakRule]:
        return [b for b in self.breaks if b.applies_to(day, weekday)]

    def overrides_for(self, day: date, kind: OverrideKind) -> List[AvailabilityOverride]:
        return [o for o in self.overrides if o.date == day and o.kind == kind]
