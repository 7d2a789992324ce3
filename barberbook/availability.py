# barberbook/availability.py
"""
Appointment slot availability.

The engine reconciles a barber's weekly working hours, days off, breaks,
single-day overrides and existing bookings into the start times at which a
service of a given length can begin. compute_availability() is pure: it
works on a ScheduleSnapshot plus booked slots already fetched from the
database. AvailabilityService does the fetching.

Candidates are advisory. Two requests may both see a slot as free; the
booking write path in barberbook.booking is what refuses the second one.
"""

import logging
from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional

from sqlmodel import Session

from barberbook.config import Settings, settings as default_settings
from barberbook.core import (
    MINUTES_PER_DAY,
    Interval,
    date_range,
    merge_intervals,
    minutes_to_time,
    shop_now,
    subtract_all,
    weekday_of,
)
from barberbook.domain import BookedSlot, OverrideKind, ScheduleSnapshot
from barberbook.errors import InvalidRequest
from barberbook.repositories import BarberRepository, BookingRepository, ScheduleRepository

logger = logging.getLogger(__name__)

Availability = Dict[date, List[time]]


def validate_request(
    date_from: date,
    date_to: date,
    service_duration_minutes: int,
    granularity_minutes: int,
    lead_time_minutes: int = 0,
) -> None:
    if date_from > date_to:
        raise InvalidRequest(
            "from_date must not be after to_date",
            details={"from_date": str(date_from), "to_date": str(date_to)},
        )
    if service_duration_minutes <= 0:
        raise InvalidRequest("service duration must be positive")
    if granularity_minutes <= 0:
        raise InvalidRequest("granularity must be positive")
    if not 0 <= lead_time_minutes <= MINUTES_PER_DAY:
        raise InvalidRequest("lead time must be between 0 and 1440 minutes")


def free_intervals(
    schedule: ScheduleSnapshot,
    bookings: Iterable[BookedSlot],
    day: date,
) -> List[Interval]:
    """Free time left on one date once every exclusion is removed."""
    if day in schedule.days_off:
        return []

    weekday = weekday_of(day)
    working = schedule.working_hours.get(weekday)
    if working is None:
        return []

    opened = [o.interval for o in schedule.overrides_for(day, OverrideKind.open)]
    free = merge_intervals([working, *opened])

    # each exclusion is subtracted on its own; overlapping ones need no merging
    for rule in schedule.breaks_for(day, weekday):
        free = subtract_all(free, rule.interval)
    for override in schedule.overrides_for(day, OverrideKind.closed):
        free = subtract_all(free, override.interval)
    for booking in bookings:
        if booking.date == day:
            free = subtract_all(free, booking.interval)

    return sorted(free)


def candidate_starts(interval: Interval, service_duration_minutes: int, granularity_minutes: int) -> List[int]:
    """Start minutes s, s+g, ... whose service still ends inside the interval."""
    if interval.duration < service_duration_minutes:
        return []
    last_start = interval.end - service_duration_minutes
    return list(range(interval.start, last_start + 1, granularity_minutes))


def _earliest_start(now: Optional[datetime], tz, lead_time_minutes: int) -> datetime:
    tz = tz or default_settings.tz
    if now is None:
        now = shop_now(tz)
    elif now.tzinfo is not None:
        now = now.astimezone(tz)
    # compare as shop wall-clock time
    return now.replace(tzinfo=None) + timedelta(minutes=lead_time_minutes)


def compute_availability(
    schedule: ScheduleSnapshot,
    bookings: Iterable[BookedSlot],
    date_from: date,
    date_to: date,
    service_duration_minutes: int,
    granularity_minutes: int,
    lead_time_minutes: int = 0,
    now: Optional[datetime] = None,
    tz=None,
) -> Availability:
    """
    Valid start times for every date in [date_from, date_to].

    Args:
        schedule: working hours, breaks, days off and overrides of one barber
        bookings: non-cancelled appointments of that barber in the range
        service_duration_minutes: length of the service being booked
        granularity_minutes: step between candidate start times
        lead_time_minutes: candidates earlier than now + lead are dropped
        now: current time; naive values are read as shop-local wall time
        tz: shop timezone used for "now" when now is omitted or aware

    Returns:
        Every date in the range mapped to its ordered start times. A date
        with no availability maps to an empty list.
    """
    validate_request(date_from, date_to, service_duration_minutes, granularity_minutes, lead_time_minutes)
    earliest = _earliest_start(now, tz, lead_time_minutes)

    by_day = defaultdict(list)
    for booking in bookings:
        by_day[booking.date].append(booking)

    result: Availability = {}
    for day in date_range(date_from, date_to):
        starts = set()
        for interval in free_intervals(schedule, by_day.get(day, []), day):
            starts.update(candidate_starts(interval, service_duration_minutes, granularity_minutes))

        result[day] = [
            minutes_to_time(minute)
            for minute in sorted(starts)
            if datetime.combine(day, minutes_to_time(minute)) >= earliest
        ]
    return result


class AvailabilityService:
    """Fetches one barber's schedule and bookings and runs the engine."""

    def __init__(self, session: Session, settings: Settings = default_settings):
        self.session = session
        self.settings = settings
        self.barbers = BarberRepository(session)
        self.schedules = ScheduleRepository(session)
        self.bookings = BookingRepository(session)

    def compute(
        self,
        barber_id: int,
        date_from: date,
        date_to: date,
        service_duration_minutes: int,
        granularity_minutes: Optional[int] = None,
        lead_time_minutes: Optional[int] = None,
        now: Optional[datetime] = None,
        exclude_appointment_id: Optional[int] = None,
    ) -> Availability:
        if granularity_minutes is None:
            granularity_minutes = self.settings.SLOT_MINUTES
        if lead_time_minutes is None:
            lead_time_minutes = self.settings.LEAD_TIME_MINUTES

        validate_request(date_from, date_to, service_duration_minutes, granularity_minutes, lead_time_minutes)
        if (date_to - date_from).days + 1 > self.settings.MAX_RANGE_DAYS:
            raise InvalidRequest(
                f"date range is limited to {self.settings.MAX_RANGE_DAYS} days",
                details={"from_date": str(date_from), "to_date": str(date_to)},
            )

        if self.barbers.get_active(barber_id) is None:
            logger.debug("barber %s unknown or inactive, no availability", barber_id)
            return {day: [] for day in date_range(date_from, date_to)}

        schedule = self.schedules.fetch_schedule(barber_id, date_from, date_to)
        bookings = self.bookings.fetch_bookings(
            barber_id, date_from, date_to, exclude_appointment_id=exclude_appointment_id
        )
        result = compute_availability(
            schedule,
            bookings,
            date_from,
            date_to,
            service_duration_minutes,
            granularity_minutes,
            lead_time_minutes,
            now=now,
            tz=self.settings.tz,
        )
        logger.debug(
            "availability for barber %s %s..%s (%d min): %d slots",
            barber_id, date_from, date_to, service_duration_minutes,
            sum(len(starts) for starts in result.values()),
        )
        return result

    def today_preview(
        self,
        limit: Optional[int] = None,
        service_duration_minutes: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Dict[int, List[time]]:
        """Next few open start times today for every active barber."""
        limit = limit or self.settings.TODAY_PREVIEW_SLOTS
        duration = service_duration_minutes or self.settings.DEFAULT_SERVICE_MINUTES
        if now is None:
            now = shop_now(self.settings.tz)
        elif now.tzinfo is not None:
            now = now.astimezone(self.settings.tz)
        today = now.date()

        preview = {}
        for barber in self.barbers.list_active():
            day = self.compute(barber.id, today, today, duration, now=now)
            preview[barber.id] = day[today][:limit]
        return preview
