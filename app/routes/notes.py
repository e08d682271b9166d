"""Note routes: immediate save, debounced drafts and version history."""
from fastapi import APIRouter, Depends

from app.core.config import settings
from app.models import Event, NoteDraft
from app.routes.deps import get_autosaver, get_event_or_404, get_store, require_login
from app.services import notes as note_service
from app.services.notes import NoteAutosaver
from app.storage import KeyValueStore

router = APIRouter(
    prefix="/events/{event_id}/notes",
    tags=["notes"],
    dependencies=[Depends(require_login)],
)


@router.get("")
async def get_notes(
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
    autosaver: NoteAutosaver = Depends(get_autosaver),
):
    """Current note, earlier versions (newest first) and whether a draft is pending."""
    notes = note_service.list_notes(store, event.id)
    return {
        "current": notes[0] if notes else None,
        "history": notes[1:],
        "draft_pending": autosaver.pending(event.id),
    }


@router.post("")
async def save_note(
    body: NoteDraft,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
    autosaver: NoteAutosaver = Depends(get_autosaver),
):
    """
    Save the note now.

    Any pending draft is dropped. Blank
    content is not saved and returns a null note.
    """
    autosaver.discard(event.id)
    note = note_service.save_note(store, event.id, body.content, settings.note_history_limit)
    return {"saved": note is not None, "note": note}


@router.put("/draft", status_code=202)
async def save_draft(
    body: NoteDraft,
    event: Event = Depends(get_event_or_404),
    autosaver: NoteAutosaver = Depends(get_autosaver),
):
    """Schedule an autosave of the draft after the idle window."""
    run_date = autosaver.edit(event.id, body.content)
    return {"scheduled": True, "save_at": run_date.isoformat()}


@router.delete("/draft")
async def discard_draft(
    event: Event = Depends(get_event_or_404),
    autosaver: NoteAutosaver = Depends(get_autosaver),
):
    """Drop a pending draft, e.g. when the editor is closed."""
    return {"discarded": autosaver.discard(event.id)}


@router.post("/draft/flush")
async def flush_draft(
    event: Event = Depends(get_event_or_404),
    autosaver: NoteAutosaver = Depends(get_autosaver),
):
    """Save a pending draft without waiting for the idle window."""
    return {"flushed": autosaver.flush(event.id)}
