"""Shared route dependencies."""
from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from app.core.database import get_session
from app.models import Event
from app.services.auth import is_authenticated
from app.services.events import get_event
from app.services.notes import NoteAutosaver
from app.services.uploads import UploadManager
from app.storage import KeyValueStore


def get_store(session: Session = Depends(get_session)) -> KeyValueStore:
    """Key-value store bound to the request's database session."""
    return KeyValueStore(session)


def require_login(session: Session = Depends(get_session)) -> None:
    """Reject organizer requests when nobody is logged in."""
    if not is_authenticated(session):
        raise HTTPException(status_code=401, detail="Login required")


def get_event_or_404(event_id: str, store: KeyValueStore = Depends(get_store)) -> Event:
    event = get_event(store, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


def get_autosaver(request: Request) -> NoteAutosaver:
    return request.app.state.note_autosaver


def get_upload_manager(request: Request) -> UploadManager:
    return request.app.state.upload_manager
