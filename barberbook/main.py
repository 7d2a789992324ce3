# barberbook/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlmodel import Session

from barberbook.config import settings
from barberbook.data import seed_services
from barberbook.db import create_db_and_tables, engine
from barberbook.errors import BarberbookError
from barberbook.logging_config import setup_logging
from barberbook.routers import (
    appointments_routes,
    availability_routes,
    barbers_routes,
    schedule_requests_routes,
    services_routes,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    create_db_and_tables()
    if settings.SEED_SERVICES:
        with Session(engine) as session:
            seed_services(session)
    logger.info("%s started (timezone %s)", settings.PROJECT_NAME, settings.SHOP_TIMEZONE)
    yield


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)


@app.exception_handler(BarberbookError)
async def barberbook_error_handler(request: Request, exc: BarberbookError):
    http_exc = exc.to_http_exception()
    return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})


app.include_router(services_routes.router)
app.include_router(barbers_routes.router)
app.include_router(availability_routes.router)
app.include_router(appointments_routes.router)
app.include_router(schedule_requests_routes.router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
