# barberbook/schedule.py
"""
Write helpers for schedule rows.

Shared by the barber schedule routes and by schedule-request approval, so
both paths validate the same way. Helpers add to the session; callers commit.
"""

from datetime import date, time
from typing import Optional

from sqlmodel import Session, select

from barberbook.core import Interval
from barberbook.domain import BreakType, OverrideKind
from barberbook.errors import Conflict, InvalidRequest, NotFound
from barberbook.models import (
    AvailabilityOverride,
    Barber,
    Break,
    DayOff,
    WorkingHours,
)


def get_barber_or_404(session: Session, barber_id: int) -> Barber:
    barber = session.get(Barber, barber_id)
    if barber is None:
        raise NotFound("Barber not found", details={"barber_id": barber_id})
    return barber


def upsert_working_hours(
    session: Session, barber_id: int, weekday: int, start_time: time, end_time: time
) -> WorkingHours:
    # one row per (barber, weekday)
    if not 0 <= weekday <= 6:
        raise InvalidRequest("weekday must be between 0 (Sunday) and 6 (Saturday)")
    Interval.from_times(start_time, end_time)

    row = session.exec(
        select(WorkingHours)
        .where(WorkingHours.barber_id == barber_id)
        .where(WorkingHours.weekday == weekday)
    ).first()
    if row is None:
        row = WorkingHours(barber_id=barber_id, weekday=weekday, start_time=start_time, end_time=end_time)
    else:
        row.start_time = start_time
        row.end_time = end_time
    session.add(row)
    return row


def add_break(
    session: Session,
    barber_id: int,
    break_type: BreakType,
    start_time: time,
    end_time: time,
    on_date: Optional[date] = None,
    weekday: Optional[int] = None,
    note: Optional[str] = None,
) -> Break:
    Interval.from_times(start_time, end_time)
    if break_type == BreakType.custom and on_date is None:
        raise InvalidRequest("custom breaks require a date")
    if break_type == BreakType.weekly and (weekday is None or not 0 <= weekday <= 6):
        raise InvalidRequest("weekly breaks require a weekday between 0 and 6")

    row = Break(
        barber_id=barber_id,
        type=break_type.value,
        date=on_date if break_type == BreakType.custom else None,
        weekday=weekday if break_type == BreakType.weekly else None,
        start_time=start_time,
        end_time=end_time,
        note=note,
    )
    session.add(row)
    return row


def add_day_off(session: Session, barber_id: int, on_date: date) -> DayOff:
    existing = session.exec(
        select(DayOff)
        .where(DayOff.barber_id == barber_id)
        .where(DayOff.date == on_date)
    ).first()
    if existing is not None:
        raise Conflict("Day off already recorded", details={"date": str(on_date)})

    row = DayOff(barber_id=barber_id, date=on_date)
    session.add(row)
    return row


def add_override(
    session: Session,
    barber_id: int,
    on_date: date,
    start_time: time,
    end_time: time,
    kind: OverrideKind,
    note: Optional[str] = None,
) -> AvailabilityOverride:
    Interval.from_times(start_time, end_time)
    row = AvailabilityOverride(
        barber_id=barber_id,
        date=on_date,
        start_time=start_time,
        end_time=end_time,
        kind=kind.value,
        note=note,
    )
    session.add(row)
    return row
