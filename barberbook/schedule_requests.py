# barberbook/schedule_requests.py
"""
Schedule change approval.

Barbers ask for working-hour, break or day-off changes; an admin approves or
rejects each request once. Only approval writes the schedule rows the
availability engine reads.

    pending --approve--> approved
    pending --reject---> rejected
"""

import logging
from typing import List, Optional, Union

from sqlmodel import Session, select

from barberbook.domain import BreakType
from barberbook.errors import Conflict, NotFound
from barberbook.models import ScheduleChangeRequest, utcnow
from barberbook.schedule import add_break, add_day_off, get_barber_or_404, upsert_working_hours
from barberbook.schemas import (
    BreakRequest,
    DayOffRequest,
    RequestKind,
    RequestStatus,
    WorkingHoursRequest,
)

logger = logging.getLogger(__name__)


def create_request(
    session: Session,
    payload: Union[WorkingHoursRequest, BreakRequest, DayOffRequest],
) -> ScheduleChangeRequest:
    get_barber_or_404(session, payload.barber_id)

    row = ScheduleChangeRequest(
        barber_id=payload.barber_id,
        kind=payload.kind,
        status=RequestStatus.pending.value,
        note=payload.note,
    )
    if isinstance(payload, WorkingHoursRequest):
        row.weekday = payload.weekday
        row.start_time = payload.start_time
        row.end_time = payload.end_time
    elif isinstance(payload, BreakRequest):
        row.break_kind = payload.break_kind.value
        row.date = payload.date
        row.weekday = payload.weekday
        row.start_time = payload.start_time
        row.end_time = payload.end_time
    else:
        row.date = payload.date

    session.add(row)
    session.commit()
    session.refresh(row)
    logger.info("schedule request %s (%s) created for barber %s", row.id, row.kind, row.barber_id)
    return row


def list_requests(
    session: Session,
    barber_id: Optional[int] = None,
    status: Optional[RequestStatus] = None,
) -> List[ScheduleChangeRequest]:
    stmt = select(ScheduleChangeRequest)
    if barber_id is not None:
        stmt = stmt.where(ScheduleChangeRequest.barber_id == barber_id)
    if status is not None:
        stmt = stmt.where(ScheduleChangeRequest.status == status.value)
    stmt = stmt.order_by(ScheduleChangeRequest.created_at.desc(), ScheduleChangeRequest.id.desc())
    return session.exec(stmt).all()


def _apply(session: Session, request: ScheduleChangeRequest) -> None:
    kind = RequestKind(request.kind)
    if kind == RequestKind.working_hours:
        upsert_working_hours(
            session, request.barber_id, request.weekday, request.start_time, request.end_time
        )
    elif kind == RequestKind.breaks:
        add_break(
            session,
            request.barber_id,
            BreakType(request.break_kind),
            request.start_time,
            request.end_time,
            on_date=request.date,
            weekday=request.weekday,
            note=request.note,
        )
    else:
        add_day_off(session, request.barber_id, request.date)


def review_request(
    session: Session,
    request_id: int,
    approve: bool,
    note: Optional[str] = None,
) -> ScheduleChangeRequest:
    request = session.get(ScheduleChangeRequest, request_id)
    if request is None:
        raise NotFound("Request not found", details={"request_id": request_id})
    if request.status != RequestStatus.pending.value:
        raise Conflict("Request already reviewed", details={"status": request.status})

    if approve:
        _apply(session, request)

    request.status = (RequestStatus.approved if approve else RequestStatus.rejected).value
    request.review_note = note
    request.reviewed_at = utcnow()
    session.add(request)
    session.commit()
    session.refresh(request)
    logger.info("schedule request %s %s", request.id, request.status)
    return request
