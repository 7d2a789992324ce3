# barberbook/routers/schedule_requests_routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from barberbook import schedule_requests
from barberbook.db import get_session
from barberbook.schemas import (
    RequestStatus,
    ScheduleRequestCreate,
    ScheduleRequestPublic,
    ScheduleRequestReview,
)

router = APIRouter(
    prefix="/schedule-requests",
    tags=["schedule-requests"],
)


@router.post("", response_model=ScheduleRequestPublic, status_code=201)
def create_schedule_request(
    payload: ScheduleRequestCreate,
    session: Session = Depends(get_session),
):
    return schedule_requests.create_request(session, payload)


@router.get("", response_model=List[ScheduleRequestPublic])
def list_schedule_requests(
    barber_id: Optional[int] = None,
    status: Optional[RequestStatus] = None,
    session: Session = Depends(get_session),
):
    return schedule_requests.list_requests(session, barber_id=barber_id, status=status)


@router.post("/{request_id}/review", response_model=ScheduleRequestPublic)
def review_schedule_request(
    request_id: int,
    review: ScheduleRequestReview,
    session: Session = Depends(get_session),
):
    return schedule_requests.review_request(session, request_id, review.approve, note=review.note)
