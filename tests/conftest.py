from datetime import time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from barberbook import models  # noqa: F401
from barberbook.config import Settings, get_settings
from barberbook.db import get_session
from barberbook.main import app
from barberbook.models import Appointment, Barber, Service, WorkingHours


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def test_settings():
    return Settings(
        _env_file=None,
        SHOP_TIMEZONE="America/New_York",
        SLOT_MINUTES=15,
        LEAD_TIME_MINUTES=0,
        MAX_RANGE_DAYS=31,
    )


@pytest.fixture
def client(engine, test_settings):
    def override_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def barber(session):
    """Active barber working 09:00-18:00 Monday to Saturday."""
    db_barber = Barber(full_name="Sam Fade")
    session.add(db_barber)
    session.commit()
    session.refresh(db_barber)
    for weekday in range(1, 7):
        session.add(
            WorkingHours(
                barber_id=db_barber.id,
                weekday=weekday,
                start_time=time(9, 0),
                end_time=time(18, 0),
            )
        )
    session.commit()
    return db_barber


@pytest.fixture
def haircut(session):
    service = Service(name="Haircut", duration_minutes=30)
    session.add(service)
    session.commit()
    session.refresh(service)
    return service


@pytest.fixture
def beard_combo(session):
    service = Service(name="Cut and Beard", duration_minutes=45)
    session.add(service)
    session.commit()
    session.refresh(service)
    return service


@pytest.fixture
def add_appointment(session):
    def _add(barber_id, service, day, start, status="scheduled"):
        appointment = Appointment(
            barber_id=barber_id,
            service_id=service.id,
            client_name="Client",
            client_email="client@example.com",
            appointment_date=day,
            start_time=start,
            duration_minutes=service.duration_minutes,
            status=status,
        )
        session.add(appointment)
        session.commit()
        session.refresh(appointment)
        return appointment

    return _add
