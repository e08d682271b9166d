"""Database configuration and session management for SQLite.

The database plays the role of a durable key-value medium: domain data is
stored as JSON strings in the ``storageentry`` table (see
``app.storage.kv``) and the organizer session lives in ``appstate``.

SQLite Configuration Choices:
    - **WAL (Write-Ahead Logging)**: Allows concurrent readers while writing.
      Background jobs (note autosave, upload completion) write while
      requests read collections.

    - **check_same_thread=False**: Required for FastAPI/async and for the
      scheduler, whose jobs run on worker threads with their own sessions.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import settings

connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


@sa_event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def create_db_and_tables():
    """Create all database tables."""
    # Import models so their tables are registered on the metadata
    import app.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def new_session() -> Session:
    """Open a session outside of request handling (scheduler jobs)."""
    return Session(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
