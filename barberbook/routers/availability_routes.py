# barberbook/routers/availability_routes.py

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from barberbook.availability import AvailabilityService
from barberbook.config import Settings, get_settings
from barberbook.db import get_session
from barberbook.formatting import format_slots
from barberbook.repositories import BarberRepository
from barberbook.schemas import TodayAvailability

router = APIRouter(
    prefix="/availability",
    tags=["availability"],
)


@router.get("/today", response_model=List[TodayAvailability])
def today_availability(
    limit: Optional[int] = Query(default=None, gt=0),
    service_duration: Optional[int] = Query(default=None, gt=0),
    style: Literal["24h", "12h"] = "24h",
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    preview = AvailabilityService(session, settings).today_preview(
        limit=limit, service_duration_minutes=service_duration
    )
    names = {b.id: b.full_name for b in BarberRepository(session).list_active()}
    return [
        {
            "barber_id": barber_id,
            "full_name": names[barber_id],
            "time_slots": format_slots(starts, style=style),
        }
        for barber_id, starts in preview.items()
    ]
