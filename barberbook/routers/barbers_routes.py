# barberbook/routers/barbers_routes.py

from datetime import date
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlmodel import Session, select

from barberbook.availability import AvailabilityService
from barberbook.config import Settings, get_settings
from barberbook.db import get_session
from barberbook.domain import BreakType
from barberbook.formatting import format_slots
from barberbook.models import (
    AvailabilityOverride as AvailabilityOverrideModel,
    Barber,
    Break as BreakModel,
    DayOff as DayOffModel,
    Service,
    WorkingHours as WorkingHoursModel,
)
from barberbook.schedule import (
    add_break,
    add_day_off,
    add_override,
    get_barber_or_404,
    upsert_working_hours,
)
from barberbook.schemas import (
    AvailabilityResponse,
    BarberCreate,
    BarberPublic,
    BreakCreate,
    BreakPublic,
    DayAvailability,
    DayOffCreate,
    DayOffPublic,
    OverrideCreate,
    OverridePublic,
    WorkingHoursIn,
    WorkingHoursPublic,
)

router = APIRouter(
    prefix="/barbers",
    tags=["barbers"],
)


@router.post("", response_model=BarberPublic, status_code=201)
def create_barber(
    barber: BarberCreate,
    session: Session = Depends(get_session),
):
    db_barber = Barber(full_name=barber.full_name, is_active=barber.is_active)
    session.add(db_barber)
    session.commit()
    session.refresh(db_barber)
    return db_barber


@router.get("", response_model=List[BarberPublic])
def list_barbers(
    active_only: bool = False,
    session: Session = Depends(get_session),
):
    stmt = select(Barber)
    if active_only:
        stmt = stmt.where(Barber.is_active == True)  # noqa: E712
    return session.exec(stmt.order_by(Barber.id)).all()


@router.get("/{barber_id}", response_model=BarberPublic)
def get_barber(barber_id: int, session: Session = Depends(get_session)):
    return get_barber_or_404(session, barber_id)


# Working hours

@router.put("/{barber_id}/working-hours/{weekday}", response_model=WorkingHoursPublic)
def set_working_hours(
    barber_id: int,
    weekday: int,
    hours: WorkingHoursIn,
    session: Session = Depends(get_session),
):
    get_barber_or_404(session, barber_id)
    row = upsert_working_hours(session, barber_id, weekday, hours.start_time, hours.end_time)
    session.commit()
    session.refresh(row)
    return row


@router.get("/{barber_id}/working-hours", response_model=List[WorkingHoursPublic])
def list_working_hours(barber_id: int, session: Session = Depends(get_session)):
    get_barber_or_404(session, barber_id)
    return session.exec(
        select(WorkingHoursModel)
        .where(WorkingHoursModel.barber_id == barber_id)
        .order_by(WorkingHoursModel.weekday)
    ).all()


@router.delete("/{barber_id}/working-hours/{weekday}", status_code=204)
def delete_working_hours(barber_id: int, weekday: int, session: Session = Depends(get_session)):
    row = session.exec(
        select(WorkingHoursModel)
        .where(WorkingHoursModel.barber_id == barber_id)
        .where(WorkingHoursModel.weekday == weekday)
    ).first()
    if row is None:
        raise HTTPException(status_code=404, detail="Working hours not set for that weekday")
    session.delete(row)
    session.commit()
    return Response(status_code=204)


# Breaks

@router.post("/{barber_id}/breaks", response_model=BreakPublic, status_code=201)
def create_break(
    barber_id: int,
    payload: BreakCreate,
    session: Session = Depends(get_session),
):
    get_barber_or_404(session, barber_id)
    row = add_break(
        session,
        barber_id,
        BreakType(payload.type),
        payload.start_time,
        payload.end_time,
        on_date=getattr(payload, "date", None),
        weekday=getattr(payload, "weekday", None),
        note=payload.note,
    )
    session.commit()
    session.refresh(row)
    return row


@router.get("/{barber_id}/breaks", response_model=List[BreakPublic])
def list_breaks(barber_id: int, session: Session = Depends(get_session)):
    get_barber_or_404(session, barber_id)
    return session.exec(
        select(BreakModel)
        .where(BreakModel.barber_id == barber_id)
        .order_by(BreakModel.created_at.desc(), BreakModel.id.desc())
    ).all()


@router.delete("/{barber_id}/breaks/{break_id}", status_code=204)
def delete_break(barber_id: int, break_id: int, session: Session = Depends(get_session)):
    row = session.get(BreakModel, break_id)
    if row is None or row.barber_id != barber_id:
        raise HTTPException(status_code=404, detail="Break not found")
    session.delete(row)
    session.commit()
    return Response(status_code=204)


# Days off

@router.post("/{barber_id}/days-off", response_model=DayOffPublic, status_code=201)
def create_day_off(
    barber_id: int,
    payload: DayOffCreate,
    session: Session = Depends(get_session),
):
    get_barber_or_404(session, barber_id)
    row = add_day_off(session, barber_id, payload.date)
    session.commit()
    session.refresh(row)
    return row


@router.get("/{barber_id}/days-off", response_model=List[DayOffPublic])
def list_days_off(barber_id: int, session: Session = Depends(get_session)):
    get_barber_or_404(session, barber_id)
    return session.exec(
        select(DayOffModel)
        .where(DayOffModel.barber_id == barber_id)
        .order_by(DayOffModel.date.desc())
    ).all()


@router.delete("/{barber_id}/days-off/{day_off_id}", status_code=204)
def delete_day_off(barber_id: int, day_off_id: int, session: Session = Depends(get_session)):
    row = session.get(DayOffModel, day_off_id)
    if row is None or row.barber_id != barber_id:
        raise HTTPException(status_code=404, detail="Day off not found")
    session.delete(row)
    session.commit()
    return Response(status_code=204)


# Overrides

@router.post("/{barber_id}/overrides", response_model=OverridePublic, status_code=201)
def create_override(
    barber_id: int,
    payload: OverrideCreate,
    session: Session = Depends(get_session),
):
    get_barber_or_404(session, barber_id)
    row = add_override(
        session, barber_id, payload.date, payload.start_time, payload.end_time,
        payload.kind, note=payload.note,
    )
    session.commit()
    session.refresh(row)
    return row


@router.get("/{barber_id}/overrides", response_model=List[OverridePublic])
def list_overrides(barber_id: int, session: Session = Depends(get_session)):
    get_barber_or_404(session, barber_id)
    return session.exec(
        select(AvailabilityOverrideModel)
        .where(AvailabilityOverrideModel.barber_id == barber_id)
        .order_by(AvailabilityOverrideModel.date, AvailabilityOverrideModel.start_time)
    ).all()


@router.delete("/{barber_id}/overrides/{override_id}", status_code=204)
def delete_override(barber_id: int, override_id: int, session: Session = Depends(get_session)):
    row = session.get(AvailabilityOverrideModel, override_id)
    if row is None or row.barber_id != barber_id:
        raise HTTPException(status_code=404, detail="Override not found")
    session.delete(row)
    session.commit()
    return Response(status_code=204)


# Availability

@router.get("/{barber_id}/availability", response_model=AvailabilityResponse)
def barber_availability(
    barber_id: int,
    from_date: date,
    to_date: Optional[date] = None,
    service_id: Optional[int] = None,
    service_duration: Optional[int] = Query(default=None, gt=0),
    granularity: Optional[int] = Query(default=None, gt=0),
    lead_time: Optional[int] = Query(default=None, ge=0, le=24 * 60),
    style: Literal["24h", "12h"] = "24h",
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    get_barber_or_404(session, barber_id)
    to_date = to_date or from_date

    # 1) Resolve the service length
    if service_id is not None:
        service = session.get(Service, service_id)
        if service is None:
            raise HTTPException(status_code=404, detail="Service not found")
        duration = service.duration_minutes
    else:
        duration = service_duration or settings.DEFAULT_SERVICE_MINUTES
    granularity = granularity or settings.SLOT_MINUTES

    # 2) Compute; a day without slots is a normal, empty answer
    availability = AvailabilityService(session, settings).compute(
        barber_id,
        from_date,
        to_date,
        duration,
        granularity_minutes=granularity,
        lead_time_minutes=lead_time,
    )

    return {
        "barber_id": barber_id,
        "from_date": from_date,
        "to_date": to_date,
        "service_duration": duration,
        "granularity": granularity,
        "days": [
            DayAvailability(date=day, time_slots=format_slots(starts, style=style))
            for day, starts in availability.items()
        ],
    }
