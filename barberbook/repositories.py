# barberbook/repositories.py
"""
Read-side access to schedule and booking rows.

Both repositories turn table rows into the plain values from
barberbook.domain so the availability engine can run without a session.
"""

import logging
from datetime import date
from typing import List, Optional

from sqlmodel import Session, and_, or_, select

from barberbook.core import Interval
from barberbook.domain import (
    AvailabilityOverride,
    BookedSlot,
    BreakRule,
    BreakType,
    CustomBreak,
    EverydayBreak,
    OverrideKind,
    ScheduleSnapshot,
    WeeklyBreak,
)
from barberbook.models import (
    Appointment,
    AvailabilityOverride as AvailabilityOverrideModel,
    Barber,
    Break as BreakModel,
    DayOff as DayOffModel,
    WorkingHours as WorkingHoursModel,
)

logger = logging.getLogger(__name__)

CANCELLED = "cancelled"


def break_rule_from_row(row: BreakModel) -> BreakRule:
    interval = Interval.from_times(row.start_time, row.end_time)
    kind = BreakType(row.type)
    if kind == BreakType.custom:
        return CustomBreak(date=row.date, interval=interval, note=row.note)
    if kind == BreakType.weekly:
        return WeeklyBreak(weekday=row.weekday, interval=interval, note=row.note)
    return EverydayBreak(interval=interval, note=row.note)


class BarberRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_active(self, barber_id: int) -> Optional[Barber]:
        barber = self.session.get(Barber, barber_id)
        if barber is None or not barber.is_active:
            return None
        return barber

    def list_active(self) -> List[Barber]:
        return self.session.exec(
            select(Barber).where(Barber.is_active == True).order_by(Barber.id)  # noqa: E712
        ).all()


class ScheduleRepository:
    def __init__(self, session: Session):
        self.session = session

    def fetch_schedule(self, barber_id: int, date_from: date, date_to: date) -> ScheduleSnapshot:
        working_rows = self.session.exec(
            select(WorkingHoursModel).where(WorkingHoursModel.barber_id == barber_id)
        ).all()

        # recurring breaks always apply; one-off ones only inside the range
        break_rows = self.session.exec(
            select(BreakModel)
            .where(BreakModel.barber_id == barber_id)
            .where(
                or_(
                    BreakModel.type != BreakType.custom.value,
                    and_(BreakModel.date >= date_from, BreakModel.date <= date_to),
                )
            )
        ).all()

        day_off_rows = self.session.exec(
            select(DayOffModel)
            .where(DayOffModel.barber_id == barber_id)
            .where(DayOffModel.date >= date_from)
            .where(DayOffModel.date <= date_to)
        ).all()

        override_rows = self.session.exec(
            select(AvailabilityOverrideModel)
            .where(AvailabilityOverrideModel.barber_id == barber_id)
            .where(AvailabilityOverrideModel.date >= date_from)
            .where(AvailabilityOverrideModel.date <= date_to)
        ).all()

        snapshot = ScheduleSnapshot(
            working_hours={
                row.weekday: Interval.from_times(row.start_time, row.end_time)
                for row in working_rows
            },
            breaks=[break_rule_from_row(row) for row in break_rows],
            days_off={row.date for row in day_off_rows},
            overrides=[
                AvailabilityOverride(
                    date=row.date,
                    interval=Interval.from_times(row.start_time, row.end_time),
                    kind=OverrideKind(row.kind),
                )
                for row in override_rows
            ],
        )
        logger.debug(
            "schedule for barber %s %s..%s: %d weekdays, %d breaks, %d days off, %d overrides",
            barber_id, date_from, date_to,
            len(snapshot.working_hours), len(snapshot.breaks),
            len(snapshot.days_off), len(snapshot.overrides),
        )
        return snapshot


class BookingRepository:
    def __init__(self, session: Session):
        self.session = session

    def fetch_bookings(
        self,
        barber_id: int,
        date_from: date,
        date_to: date,
        exclude_appointment_id: Optional[int] = None,
    ) -> List[BookedSlot]:
        stmt = (
            select(Appointment)
            .where(Appointment.barber_id == barber_id)
            .where(Appointment.appointment_date >= date_from)
            .where(Appointment.appointment_date <= date_to)
            .where(Appointment.status != CANCELLED)
        )
        if exclude_appointment_id is not None:
            stmt = stmt.where(Appointment.id != exclude_appointment_id)

        return [
            BookedSlot(
                date=a.appointment_date,
                start_time=a.start_time,
                duration_minutes=a.duration_minutes,
            )
            for a in self.session.exec(stmt.order_by(Appointment.appointment_date, Appointment.start_time)).all()
        ]
