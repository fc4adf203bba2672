"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from the
application settings and provides small helpers used by the application,
scripts and tests. By default the database is a local SQLite file at the
repository root (`app.db`).
"""

from sqlmodel import SQLModel, create_engine, Session

from .config import settings

connect_args = {"check_same_thread": False} if settings.is_sqlite else {}
engine = create_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO, connect_args=connect_args)


def create_db_and_tables(bind=None):
    """Create database tables using SQLModel metadata.

    This function is intended for local development and lightweight
    scripts; schema migrations are out of scope for this service.
    """
    # models must be imported so their tables are registered on the metadata
    from . import models  # noqa: F401
    SQLModel.metadata.create_all(bind or engine)


def drop_db_and_tables(bind=None):
    """Drop every table known to the SQLModel metadata."""
    from . import models  # noqa: F401
    SQLModel.metadata.drop_all(bind or engine)


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
