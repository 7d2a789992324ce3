# barberbook/data.py

import logging

from sqlmodel import Session, select

from barberbook.models import Service

logger = logging.getLogger(__name__)

# name -> duration in minutes
DEFAULT_SERVICES = {
    "Shape Up": 15,
    "Beard Trim": 15,
    "Haircut": 30,
    "Fade": 30,
    "Scissors Cut": 30,
    "Cut and Beard": 45,
}


def seed_services(session: Session) -> int:
    """Insert the default service menu into an empty catalog."""
    if session.exec(select(Service)).first() is not None:
        return 0
    for name, minutes in DEFAULT_SERVICES.items():
        session.add(Service(name=name, duration_minutes=minutes))
    session.commit()
    logger.info("seeded %d default services", len(DEFAULT_SERVICES))
    return len(DEFAULT_SERVICES)
