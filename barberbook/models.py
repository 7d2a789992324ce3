# barberbook/models.py

from typing import Optional
from datetime import datetime, date as Date, time, timezone

from sqlalchemy import CheckConstraint, DateTime, Index, UniqueConstraint, text
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Barber(SQLModel, table=True):
    __tablename__ = "barbers"

    id: Optional[int] = Field(default=None, primary_key=True)
    full_name: str
    is_active: bool = True


class Service(SQLModel, table=True):
    __tablename__ = "services"
    __table_args__ = (
        CheckConstraint("duration_minutes > 0", name="ck_service_duration_positive"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True)
    duration_minutes: int
    is_active: bool = True


class WorkingHours(SQLModel, table=True):
    __tablename__ = "working_hours"
    __table_args__ = (
        UniqueConstraint("barber_id", "weekday", name="uq_working_hours_barber_weekday"),
        CheckConstraint("weekday >= 0 AND weekday <= 6", name="ck_working_hours_weekday"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    barber_id: int = Field(foreign_key="barbers.id", index=True)
    weekday: int  # 0=Sun, 1=Mon....
    start_time: time
    end_time: time


class DayOff(SQLModel, table=True):
    __tablename__ = "days_off"
    __table_args__ = (
        UniqueConstraint("barber_id", "date", name="uq_day_off_barber_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    barber_id: int = Field(foreign_key="barbers.id", index=True)
    date: Date = Field(index=True)


class Break(SQLModel, table=True):
    __tablename__ = "breaks"

    id: Optional[int] = Field(default=None, primary_key=True)
    barber_id: int = Field(foreign_key="barbers.id", index=True)
    type: str  # "custom", "weekly" or "everyday"
    date: Optional[Date] = None
    weekday: Optional[int] = None
    start_time: time
    end_time: time
    note: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class AvailabilityOverride(SQLModel, table=True):
    __tablename__ = "availability_overrides"

    id: Optional[int] = Field(default=None, primary_key=True)
    barber_id: int = Field(foreign_key="barbers.id", index=True)
    date: Date = Field(index=True)
    start_time: time
    end_time: time
    kind: str  # "open" or "closed"
    note: Optional[str] = None


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    __table_args__ = (
        # cancelled rows no longer hold their start time
        Index(
            "uq_barber_start",
            "barber_id",
            "appointment_date",
            "start_time",
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    barber_id: int = Field(foreign_key="barbers.id", index=True)
    service_id: int = Field(foreign_key="services.id")
    client_name: str
    client_email: str = Field(index=True)
    client_phone: Optional[str] = None
    notes: Optional[str] = None

    appointment_date: Date = Field(index=True)
    start_time: time
    duration_minutes: int
    status: str = "scheduled"

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class ScheduleChangeRequest(SQLModel, table=True):
    __tablename__ = "schedule_change_requests"

    id: Optional[int] = Field(default=None, primary_key=True)
    barber_id: int = Field(foreign_key="barbers.id", index=True)
    kind: str  # "working_hours", "breaks" or "day_off"
    status: str = "pending"

    weekday: Optional[int] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    break_kind: Optional[str] = None
    date: Optional[Date] = None
    note: Optional[str] = None

    review_note: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    reviewed_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
