# barberbook/formatting.py
"""
Slot formatter: turns engine start times into what the booking pages show.
"""

from datetime import date, datetime, time
from typing import Iterable, List, Optional, Union

from barberbook.core import MINUTES_PER_DAY, minutes_to_time, time_to_minutes
from barberbook.errors import SlotFormatError

SlotValue = Union[time, int]

STYLES = ("24h", "12h")
SNAP_MODES = ("nearest", "floor", "ceil")


def _as_minutes(value: SlotValue) -> int:
    minutes = time_to_minutes(value) if isinstance(value, time) else value
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise SlotFormatError(
            "slot time must fall within a 24-hour day",
            details={"minutes": minutes},
        )
    return minutes


def snap_minutes(value: SlotValue, granularity: int, mode: str = "nearest") -> int:
    """Snap a start time onto a granularity boundary (ties round up)."""
    if granularity <= 0:
        raise SlotFormatError("granularity must be positive")
    if mode not in SNAP_MODES:
        raise SlotFormatError(f"unknown snap mode: {mode}")

    minutes = _as_minutes(value)
    below = minutes - minutes % granularity
    if mode == "floor" or below == minutes:
        snapped = below
    elif mode == "ceil":
        snapped = below + granularity
    else:
        snapped = below + granularity if minutes - below >= granularity / 2 else below
    if snapped >= MINUTES_PER_DAY:
        # stay on the last boundary of the day
        snapped = (MINUTES_PER_DAY - 1) // granularity * granularity
    return snapped


def format_slot(value: SlotValue, style: str = "24h") -> str:
    """'09:00' for 24h, '9:00 AM' for 12h."""
    minutes = _as_minutes(value)
    hour, minute = divmod(minutes, 60)
    if style == "24h":
        return f"{hour:02d}:{minute:02d}"
    if style == "12h":
        suffix = "AM" if hour < 12 else "PM"
        return f"{hour % 12 or 12}:{minute:02d} {suffix}"
    raise SlotFormatError(f"unknown style: {style}")


def format_slots(
    starts: Iterable[SlotValue],
    style: str = "24h",
    snap_to: Optional[int] = None,
    mode: str = "nearest",
) -> List[str]:
    """Format an ordered run of start times, dropping duplicates created by snapping."""
    seen = set()
    labels = []
    for start in starts:
        minutes = snap_minutes(start, snap_to, mode) if snap_to else _as_minutes(start)
        if minutes in seen:
            continue
        seen.add(minutes)
        labels.append(format_slot(minutes, style))
    return labels


def localize_slot(day: date, start: SlotValue, tz) -> datetime:
    """Aware datetime for a start time on a given shop-local date."""
    naive = datetime.combine(day, minutes_to_time(_as_minutes(start)))
    return tz.localize(naive)


def to_shop_time(moment: datetime, tz) -> time:
    """Shop-local time of day for an aware datetime."""
    if moment.tzinfo is None:
        raise SlotFormatError("datetime must be timezone aware")
    local = moment.astimezone(tz)
    return time(local.hour, local.minute)
