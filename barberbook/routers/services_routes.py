# barberbook/routers/services_routes.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from barberbook.db import get_session
from barberbook.models import Service
from barberbook.schemas import ServiceCreate, ServicePublic

router = APIRouter(
    prefix="/services",
    tags=["services"],
)


@router.post("", response_model=ServicePublic, status_code=201)
def create_service(
    service: ServiceCreate,
    session: Session = Depends(get_session),
):
    existing = session.exec(
        select(Service).where(Service.name == service.name)
    ).first()
    if existing is not None:
        raise HTTPException(status_code=409, detail="Service already exists")

    db_service = Service(name=service.name, duration_minutes=service.duration_minutes)
    session.add(db_service)
    session.commit()
    session.refresh(db_service)
    return db_service


@router.get("", response_model=List[ServicePublic])
def list_services(session: Session = Depends(get_session)):
    return session.exec(
        select(Service).where(Service.is_active == True).order_by(Service.name)  # noqa: E712
    ).all()
