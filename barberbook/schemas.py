# barberbook/schemas.py

from datetime import datetime, date as Date, time
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from barberbook.core import Interval
from barberbook.domain import BreakType, OverrideKind


class AppointmentStatus(str, Enum):
    scheduled = "scheduled"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


class RequestKind(str, Enum):
    working_hours = "working_hours"
    breaks = "breaks"
    day_off = "day_off"


class RequestStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class TimeRange(BaseModel):
    start_time: time
    end_time: time  # 00:00 means midnight

    @model_validator(mode="after")
    def _start_before_end(self):
        # raises InvalidInterval, a ValueError, so pydantic reports a 422
        Interval.from_times(self.start_time, self.end_time)
        return self


# Barbers and services

class BarberCreate(BaseModel):
    full_name: str = Field(min_length=1)
    is_active: bool = True


class BarberPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    is_active: bool


class ServiceCreate(BaseModel):
    name: str = Field(min_length=1)
    duration_minutes: int = Field(gt=0, le=24 * 60)


class ServicePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    duration_minutes: int
    is_active: bool


# Schedule

class WorkingHoursIn(TimeRange):
    pass


class WorkingHoursPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    barber_id: int
    weekday: int
    start_time: time
    end_time: time


class CustomBreakCreate(TimeRange):
    type: Literal["custom"]
    date: Date
    note: Optional[str] = None


class WeeklyBreakCreate(TimeRange):
    type: Literal["weekly"]
    weekday: int = Field(ge=0, le=6)  # 0=Sun
    note: Optional[str] = None


class EverydayBreakCreate(TimeRange):
    type: Literal["everyday"]
    note: Optional[str] = None


BreakCreate = Annotated[
    Union[CustomBreakCreate, WeeklyBreakCreate, EverydayBreakCreate],
    Field(discriminator="type"),
]


class BreakPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    barber_id: int
    type: BreakType
    date: Optional[Date] = None
    weekday: Optional[int] = None
    start_time: time
    end_time: time
    note: Optional[str] = None


class DayOffCreate(BaseModel):
    date: Date


class DayOffPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    barber_id: int
    date: Date


class OverrideCreate(TimeRange):
    date: Date
    kind: OverrideKind
    note: Optional[str] = None


class OverridePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    barber_id: int
    date: Date
    start_time: time
    end_time: time
    kind: OverrideKind
    note: Optional[str] = None


# Availability

class DayAvailability(BaseModel):
    date: Date
    time_slots: List[str]


class AvailabilityResponse(BaseModel):
    barber_id: int
    from_date: Date
    to_date: Date
    service_duration: int
    granularity: int
    days: List[DayAvailability]


class TodayAvailability(BaseModel):
    barber_id: int
    full_name: str
    time_slots: List[str]


# Appointments

class AppointmentCreate(BaseModel):
    barber_id: int
    service_id: int
    appointment_date: Date
    start_time: time
    client_name: str = Field(min_length=1)
    client_email: str
    client_phone: Optional[str] = None
    notes: Optional[str] = None


class AppointmentReschedule(BaseModel):
    appointment_date: Date
    start_time: time


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class AppointmentPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    barber_id: int
    service_id: int
    appointment_date: Date
    start_time: time
    duration_minutes: int
    client_name: str
    client_email: str
    client_phone: Optional[str] = None
    notes: Optional[str] = None
    status: AppointmentStatus
    created_at: datetime
    updated_at: datetime


# Schedule change requests

class WorkingHoursRequest(TimeRange):
    kind: Literal["working_hours"]
    barber_id: int
    weekday: int = Field(ge=0, le=6)
    note: Optional[str] = None


class BreakRequest(TimeRange):
    kind: Literal["breaks"]
    barber_id: int
    break_kind: BreakType
    date: Optional[Date] = None
    weekday: Optional[int] = Field(default=None, ge=0, le=6)
    note: Optional[str] = None

    @model_validator(mode="after")
    def _fields_match_break_kind(self):
        if self.break_kind == BreakType.custom and self.date is None:
            raise ValueError("custom breaks require a date")
        if self.break_kind == BreakType.weekly and self.weekday is None:
            raise ValueError("weekly breaks require a weekday")
        if self.break_kind != BreakType.custom and self.date is not None:
            raise ValueError("only custom breaks take a date")
        if self.break_kind != BreakType.weekly and self.weekday is not None:
            raise ValueError("only weekly breaks take a weekday")
        return self


class DayOffRequest(BaseModel):
    kind: Literal["day_off"]
    barber_id: int
    date: Date
    note: Optional[str] = None


ScheduleRequestCreate = Annotated[
    Union[WorkingHoursRequest, BreakRequest, DayOffRequest],
    Field(discriminator="kind"),
]


class ScheduleRequestReview(BaseModel):
    approve: bool
    note: Optional[str] = None


class ScheduleRequestPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    barber_id: int
    kind: RequestKind
    status: RequestStatus
    weekday: Optional[int] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    break_kind: Optional[BreakType] = None
    date: Optional[Date] = None
    note: Optional[str] = None
    review_note: Optional[str] = None
    created_at: datetime
    reviewed_at: Optional[datetime] = None
