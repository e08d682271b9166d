"""Shared test fixtures."""

import time

import pytest
from apscheduler.schedulers.background import BackgroundScheduler
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.core.config import settings
from app.core.database import get_session
from app.main import app
from app.models import Event, EventCreate
from app.routes.deps import get_autosaver, get_upload_manager
from app.services.events import create_event
from app.services.notes import NoteAutosaver
from app.services.uploads import UploadManager
from app.storage import KeyValueStore


def wait_for(predicate, timeout: float = 3.0, interval: float = 0.02) -> bool:
    """Poll predicate until it is truthy or the timeout passes."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return bool(predicate())


@pytest.fixture(name="wait")
def wait_fixture():
    """Poll a condition written to by a scheduler job."""
    return wait_for


@pytest.fixture(autouse=True)
def fast_settings(monkeypatch):
    """Skip the artificial RSVP submission delay."""
    monkeypatch.setattr(settings, "rsvp_submit_delay_seconds", 0.0)
    monkeypatch.setattr(settings, "seed_demo_data", True)
    monkeypatch.setattr(settings, "note_history_limit", None)


@pytest.fixture(name="engine")
def engine_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Create a new database session for each test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="store")
def store_fixture(session: Session) -> KeyValueStore:
    return KeyValueStore(session)


@pytest.fixture(name="fresh_store")
def fresh_store_fixture(engine):
    """Factory for stores on new sessions, to observe writes made by jobs."""
    sessions = []

    def make() -> KeyValueStore:
        session = Session(engine)
        sessions.append(session)
        return KeyValueStore(session)

    yield make
    for s in sessions:
        s.close()


@pytest.fixture(name="scheduler")
def scheduler_fixture():
    scheduler = BackgroundScheduler()
    scheduler.start()
    yield scheduler
    scheduler.shutdown(wait=False)


@pytest.fixture(name="autosaver")
def autosaver_fixture(scheduler, engine) -> NoteAutosaver:
    return NoteAutosaver(scheduler, lambda: Session(engine), delay_seconds=0.1)


@pytest.fixture(name="upload_manager")
def upload_manager_fixture(scheduler, engine, tmp_path) -> UploadManager:
    return UploadManager(
        scheduler,
        lambda: Session(engine),
        tmp_path / "uploads",
        tick_seconds=0.02,
        step=25,
    )


@pytest.fixture(name="client")
def client_fixture(session: Session, autosaver: NoteAutosaver, upload_manager: UploadManager):
    """Create a test client with the test database session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_autosaver] = lambda: autosaver
    app.dependency_overrides[get_upload_manager] = lambda: upload_manager
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="auth_client")
def auth_client_fixture(client: TestClient) -> TestClient:
    """A test client with the organizer logged in."""
    response = client.post(
        "/auth/login",
        json={"email": settings.admin_email, "password": settings.admin_password},
    )
    assert response.status_code == 200
    return client


@pytest.fixture(name="sample_event")
def sample_event_fixture(store: KeyValueStore) -> Event:
    """Create a sample event for testing."""
    return create_event(
        store,
        EventCreate(
            name="Summer Gala",
            description="Annual fundraiser",
            date="2026-07-18",
            time="19:00",
            venue="Rooftop Terrace",
        ),
        owner_id="1",
    )


@pytest.fixture(name="other_event")
def other_event_fixture(store: KeyValueStore) -> Event:
    return create_event(
        store,
        EventCreate(name="Board Retreat", date="2026-09-02", venue="Lakeside Lodge"),
        owner_id="1",
    )
