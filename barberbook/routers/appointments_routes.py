# barberbook/routers/appointments_routes.py

from datetime import date
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from barberbook import booking
from barberbook.config import Settings, get_settings
from barberbook.db import get_session
from barberbook.models import Appointment
from barberbook.schemas import (
    AppointmentCreate,
    AppointmentPublic,
    AppointmentReschedule,
    AppointmentStatus,
    AppointmentStatusUpdate,
)

router = APIRouter(
    prefix="/appointments",
    tags=["appointments"],
)


@router.post("", response_model=AppointmentPublic, status_code=201)
def create_appointment(
    appt: AppointmentCreate,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    return booking.book_appointment(session, appt, settings=settings)


@router.get("", response_model=List[AppointmentPublic])
def list_appointments(
    barber_id: Optional[int] = None,
    on_date: Optional[date] = None,
    status: Optional[AppointmentStatus] = None,
    session: Session = Depends(get_session),
):
    stmt = select(Appointment)

    if barber_id is not None:
        stmt = stmt.where(Appointment.barber_id == barber_id)
    if on_date is not None:
        stmt = stmt.where(Appointment.appointment_date == on_date)
    if status is not None:
        stmt = stmt.where(Appointment.status == status.value)

    stmt = stmt.order_by(Appointment.appointment_date, Appointment.start_time)
    return session.exec(stmt).all()


@router.get("/{appt_id}", response_model=AppointmentPublic)
def get_appointment(appt_id: int, session: Session = Depends(get_session)):
    appointment = session.get(Appointment, appt_id)
    if appointment is None:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment


@router.patch("/{appt_id}/cancel", response_model=AppointmentPublic)
def cancel_appointment(appt_id: int, session: Session = Depends(get_session)):
    return booking.cancel_appointment(session, appt_id)


@router.patch("/{appt_id}/reschedule", response_model=AppointmentPublic)
def reschedule_appointment(
    appt_id: int,
    payload: AppointmentReschedule,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    return booking.reschedule_appointment(
        session, appt_id, payload.appointment_date, payload.start_time, settings=settings
    )


@router.patch("/{appt_id}/status", response_model=AppointmentPublic)
def update_appointment_status(
    appt_id: int,
    payload: AppointmentStatusUpdate,
    session: Session = Depends(get_session),
):
    return booking.update_status(session, appt_id, payload.status)
