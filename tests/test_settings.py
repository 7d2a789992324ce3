import logging

import pytest
from pydantic import ValidationError
from sqlmodel import select

from barberbook.config import Settings
from barberbook.data import DEFAULT_SERVICES, seed_services
from barberbook.errors import NotFound, SlotUnavailable
from barberbook.logging_config import setup_logging
from barberbook.models import Service


def test_settings_defaults():
    s = Settings(_env_file=None)
    assert s.SLOT_MINUTES == 15
    assert s.tz.zone == "America/New_York"


@pytest.mark.parametrize(
    "overrides",
    [
        {"SHOP_TIMEZONE": "Mars/Olympus_Mons"},
        {"SLOT_MINUTES": 0},
        {"LEAD_TIME_MINUTES": -5},
        {"LEAD_TIME_MINUTES": 1441},
    ],
)
def test_settings_rejects_bad_values(overrides):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("SLOT_MINUTES", "20")
    monkeypatch.setenv("SHOP_TIMEZONE", "Europe/London")
    s = Settings(_env_file=None)
    assert s.SLOT_MINUTES == 20
    assert s.tz.zone == "Europe/London"


def test_seed_services_only_fills_an_empty_catalog(session):
    assert seed_services(session) == len(DEFAULT_SERVICES)
    assert seed_services(session) == 0
    names = {s.name for s in session.exec(select(Service)).all()}
    assert names == set(DEFAULT_SERVICES)


def test_setup_logging_adds_one_handler():
    root = logging.getLogger()
    before = len(root.handlers)
    setup_logging("debug")
    setup_logging("warning")
    assert len(root.handlers) <= before + 1
    assert root.level == logging.WARNING


def test_errors_render_as_http_detail():
    exc = SlotUnavailable("Time slot not available", details={"date": "2031-01-06"}).to_http_exception()
    assert exc.status_code == 409
    assert exc.detail == {
        "message": "Time slot not available",
        "code": "SlotUnavailable",
        "details": {"date": "2031-01-06"},
    }
    assert NotFound("x").to_http_exception().status_code == 404
