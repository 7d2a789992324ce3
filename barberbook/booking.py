# barberbook/booking.py
"""
Booking write path.

Availability is re-checked inside the writing transaction with the barber
row locked (SELECT ... FOR UPDATE where the database supports it; SQLite
serializes writers on its own). A partial unique index on (barber_id,
appointment_date, start_time) over non-cancelled rows is the last line: an
IntegrityError at commit is reported as SlotUnavailable.
"""

import logging
from datetime import date, datetime, time
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from barberbook.availability import AvailabilityService
from barberbook.config import Settings, settings as default_settings
from barberbook.errors import Conflict, NotFound, SlotUnavailable
from barberbook.models import Appointment, Barber, Service, utcnow
from barberbook.schemas import AppointmentCreate, AppointmentStatus

logger = logging.getLogger(__name__)

RESCHEDULABLE = (AppointmentStatus.scheduled.value, AppointmentStatus.confirmed.value)


def _lock_barber(session: Session, barber_id: int) -> Barber:
    barber = session.exec(
        select(Barber).where(Barber.id == barber_id).with_for_update()
    ).first()
    if barber is None or not barber.is_active:
        raise NotFound("Barber not found", details={"barber_id": barber_id})
    return barber


def _get_appointment(session: Session, appointment_id: int) -> Appointment:
    appointment = session.get(Appointment, appointment_id)
    if appointment is None:
        raise NotFound("Appointment not found", details={"appointment_id": appointment_id})
    return appointment


def ensure_slot_free(
    session: Session,
    barber_id: int,
    day: date,
    start_time: time,
    duration_minutes: int,
    settings: Settings = default_settings,
    now: Optional[datetime] = None,
    exclude_appointment_id: Optional[int] = None,
) -> None:
    availability = AvailabilityService(session, settings).compute(
        barber_id,
        day,
        day,
        duration_minutes,
        now=now,
        exclude_appointment_id=exclude_appointment_id,
    )
    if start_time not in availability[day]:
        logger.warning(
            "rejected slot %s %s for barber %s (%d min)", day, start_time, barber_id, duration_minutes
        )
        raise SlotUnavailable(
            "Time slot not available",
            details={"date": str(day), "start_time": start_time.strftime("%H:%M")},
        )


def _commit_or_unavailable(session: Session, appointment: Appointment) -> Appointment:
    session.add(appointment)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise SlotUnavailable("Appointment already exists for that start time")
    session.refresh(appointment)
    return appointment


def book_appointment(
    session: Session,
    data: AppointmentCreate,
    settings: Settings = default_settings,
    now: Optional[datetime] = None,
) -> Appointment:
    _lock_barber(session, data.barber_id)

    service = session.get(Service, data.service_id)
    if service is None or not service.is_active:
        raise NotFound("Service not found", details={"service_id": data.service_id})

    start_time = data.start_time.replace(second=0, microsecond=0, tzinfo=None)
    ensure_slot_free(
        session, data.barber_id, data.appointment_date, start_time,
        service.duration_minutes, settings=settings, now=now,
    )

    appointment = Appointment(
        barber_id=data.barber_id,
        service_id=service.id,
        client_name=data.client_name,
        client_email=data.client_email.strip().lower(),
        client_phone=data.client_phone,
        notes=data.notes,
        appointment_date=data.appointment_date,
        start_time=start_time,
        duration_minutes=service.duration_minutes,
        status=AppointmentStatus.scheduled.value,
    )
    appointment = _commit_or_unavailable(session, appointment)
    logger.info(
        "booked appointment %s: barber %s on %s at %s",
        appointment.id, appointment.barber_id, appointment.appointment_date, appointment.start_time,
    )
    return appointment


def cancel_appointment(session: Session, appointment_id: int) -> Appointment:
    appointment = _get_appointment(session, appointment_id)
    if appointment.status == AppointmentStatus.cancelled.value:
        raise Conflict("Appointment already cancelled")

    appointment.status = AppointmentStatus.cancelled.value
    appointment.updated_at = utcnow()
    session.add(appointment)
    session.commit()
    session.refresh(appointment)
    logger.info("cancelled appointment %s", appointment.id)
    return appointment


def reschedule_appointment(
    session: Session,
    appointment_id: int,
    new_date: date,
    new_start: time,
    settings: Settings = default_settings,
    now: Optional[datetime] = None,
) -> Appointment:
    appointment = _get_appointment(session, appointment_id)
    if appointment.status not in RESCHEDULABLE:
        raise Conflict(
            f"{appointment.status.capitalize()} appointments cannot be rescheduled",
            details={"status": appointment.status},
        )

    _lock_barber(session, appointment.barber_id)
    new_start = new_start.replace(second=0, microsecond=0, tzinfo=None)
    ensure_slot_free(
        session, appointment.barber_id, new_date, new_start, appointment.duration_minutes,
        settings=settings, now=now, exclude_appointment_id=appointment.id,
    )

    appointment.appointment_date = new_date
    appointment.start_time = new_start
    appointment.updated_at = utcnow()
    appointment = _commit_or_unavailable(session, appointment)
    logger.info("rescheduled appointment %s to %s %s", appointment.id, new_date, new_start)
    return appointment


def update_status(session: Session, appointment_id: int, status: AppointmentStatus) -> Appointment:
    appointment = _get_appointment(session, appointment_id)
    if status == AppointmentStatus.cancelled:
        return cancel_appointment(session, appointment_id)
    # reopening would skip the availability check
    if appointment.status == AppointmentStatus.cancelled.value:
        raise Conflict("Cancelled appointments cannot be reopened")

    appointment.status = status.value
    appointment.updated_at = utcnow()
    session.add(appointment)
    session.commit()
    session.refresh(appointment)
    return appointment
