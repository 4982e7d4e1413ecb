"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from
`settings.DATABASE_URL` (a local SQLite file `students.db` by default)
and provides small helpers used by the application and tests.
"""

from sqlmodel import SQLModel, create_engine, Session
from .config import settings


def build_engine(url: str):
    """Create an engine for `url`; SQLite connections may cross threads."""
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=settings.SQL_ECHO, connect_args=connect_args)


engine = build_engine(settings.DATABASE_URL)


def create_db_and_tables(bind=None):
    """Create database tables using SQLModel metadata.

    This function is intended for local development and lightweight
    scripts; there is no migration tooling, tables are created as
    declared in `models`.
    """
    # register table models on the metadata before create_all
    from . import models  # noqa: F401
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
