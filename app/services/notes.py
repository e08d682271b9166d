"""Notes service with version history and debounced autosave.

An event's note list holds the current note first, followed by earlier
versions, newest first. Saving replaces the current note in place (same id,
same ``created_at``) and keeps what it replaced as a history entry.
"""
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger
from sqlmodel import Session

from app.models import Note
from app.models.common import new_id, utcnow
from app.storage import Collection, KeyValueStore, keys

logger = logging.getLogger(__name__)


def note_collection(store: KeyValueStore, event_id: str) -> Collection[Note]:
    return Collection(store, keys.notes(event_id), Note)


def list_notes(store: KeyValueStore, event_id: str) -> list[Note]:
    return note_collection(store, event_id).all()


def save_note(
    store: KeyValueStore,
    event_id: str,
    content: str,
    history_limit: int | None = None,
) -> Note | None:
    """
    Save note content for an event.

    Blank content is ignored and returns None. Content identical to the
    current note is not written again. Otherwise the first save creates the
    note and later saves update it, pushing the previous version onto the
    history. history_limit caps the number of history entries kept; None
    keeps them all.
    """
    content = content.strip()
    if not content:
        return None

    collection = note_collection(store, event_id)
    notes = collection.all()
    now = utcnow()

    if not notes:
        note = Note(event_id=event_id, content=content, created_at=now, updated_at=now)
        collection.replace_all([note])
        logger.info(f"Created note for event {event_id}")
        return note

    current = notes[0]
    if current.content == content:
        return current

    previous = current.model_copy(update={"id": new_id()})
    updated = current.model_copy(update={"content": content, "updated_at": now})
    history = [previous, *notes[1:]]
    if history_limit is not None:
        history = history[:history_limit]

    collection.replace_all([updated, *history])
    return updated


class NoteAutosaver:
    """Save note drafts after a period of inactivity.

    Every ``edit`` (re)schedules a one-shot job that saves the latest draft
    once ``delay_seconds`` have passed without another edit. ``discard``
    drops a pending save and ``flush`` performs it immediately.
    """

    def __init__(
        self,
        scheduler: BaseScheduler,
        session_factory: Callable[[], Session],
        delay_seconds: float,
        history_limit: int | None = None,
    ):
        self.scheduler = scheduler
        self.session_factory = session_factory
        self.delay_seconds = delay_seconds
        self.history_limit = history_limit

    @staticmethod
    def job_id(event_id: str) -> str:
        return f"note_autosave_{event_id}"

    def edit(self, event_id: str, content: str) -> datetime:
        """Record a draft and return when it will be saved."""
        run_date = datetime.now(UTC) + timedelta(seconds=self.delay_seconds)
        self.scheduler.add_job(
            self._save,
            trigger=DateTrigger(run_date=run_date),
            args=[event_id, content],
            id=self.job_id(event_id),
            replace_existing=True,
        )
        return run_date

    def pending(self, event_id: str) -> bool:
        return self.scheduler.get_job(self.job_id(event_id)) is not None

    def discard(self, event_id: str) -> bool:
        """Cancel a pending save. Returns False if nothing was pending."""
        try:
            self.scheduler.remove_job(self.job_id(event_id))
        except JobLookupError:
            return False
        logger.debug(f"Discarded pending note save for event {event_id}")
        return True

    def flush(self, event_id: str) -> bool:
        """Save a pending draft now. Returns False if nothing was pending."""
        job = self.scheduler.get_job(self.job_id(event_id))
        if job is None or not self.discard(event_id):
            return False
        self._save(*job.args)
        return True

    def _save(self, event_id: str, content: str) -> None:
        try:
            with self.session_factory() as session:
                save_note(KeyValueStore(session), event_id, content, self.history_limit)
            logger.info(f"Autosaved note for event {event_id}")
        except Exception as e:
            logger.error(f"Note autosave failed for event {event_id}: {e}")
