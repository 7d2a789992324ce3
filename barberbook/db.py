# barberbook/db.py

from sqlmodel import SQLModel, create_engine, Session

from barberbook.config import settings


def make_engine(url: str, echo: bool = False):
    connect_args = {}
    if url.startswith("sqlite"):
        # required for SQLite + FastAPI
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=echo, connect_args=connect_args)


engine = make_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)


def create_db_and_tables(bind=None):
    # models must be imported so their tables are registered on the metadata
    from barberbook import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session
