"""Simulated file uploads with observable progress.

The blob is written to disk as soon as an upload starts; the "upload" then
advances by a fixed step on every scheduler tick. When progress reaches 100
the file record is added to the event's file list. Each upload is tracked
by an ``UploadHandle`` that reports progress and its outcome: completed,
cancelled, or failed with an error. Finished handles stay readable for
``retention_seconds`` and are then dropped.
"""
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from pathlib import Path

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger
from sqlmodel import Session

from app.models import FileRecord
from app.models.common import new_id
from app.services.files import add_file
from app.storage import KeyValueStore

logger = logging.getLogger(__name__)


class UploadStatus(str, Enum):
    UPLOADING = "uploading"
    COMPLETING = "completing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


TERMINAL = {UploadStatus.COMPLETED, UploadStatus.CANCELLED, UploadStatus.FAILED}


@dataclass
class UploadHandle:
    """Progress and outcome of one upload."""
    id: str
    event_id: str
    name: str
    content_type: str
    size: int
    path: Path
    progress: int = 0
    status: UploadStatus = UploadStatus.UPLOADING
    error: str | None = None
    record: FileRecord | None = field(default=None, repr=False)

    @property
    def done(self) -> bool:
        return self.status in TERMINAL

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "event_id": self.event_id,
            "name": self.name,
            "progress": self.progress,
            "status": self.status.value,
            "error": self.error,
            "file": self.record.model_dump(mode="json") if self.record else None,
        }


def safe_filename(name: str) -> str:
    """Strip directory components from a client-supplied file name."""
    return Path(name.replace("\\", "/")).name or "file"


class UploadManager:
    """Run simulated uploads as interval jobs on a scheduler."""

    def __init__(
        self,
        scheduler: BaseScheduler,
        session_factory: Callable[[], Session],
        upload_dir: str | Path,
        tick_seconds: float = 0.2,
        step: int = 10,
        retention_seconds: float = 60.0,
    ):
        self.scheduler = scheduler
        self.session_factory = session_factory
        self.upload_dir = Path(upload_dir).expanduser()
        self.tick_seconds = tick_seconds
        self.step = step
        self.retention_seconds = retention_seconds
        self._uploads: dict[str, UploadHandle] = {}
        self._lock = threading.Lock()

    @staticmethod
    def job_id(upload_id: str) -> str:
        return f"upload_{upload_id}"

    @staticmethod
    def evict_job_id(upload_id: str) -> str:
        return f"upload_evict_{upload_id}"

    def url_for(self, event_id: str, path: Path) -> str:
        return f"/uploads/{event_id}/{path.name}"

    def start(self, event_id: str, name: str, content_type: str, data: bytes) -> UploadHandle:
        """Store the blob and begin advancing the upload's progress."""
        upload_id = new_id()
        name = safe_filename(name)
        path = self.upload_dir / event_id / f"{upload_id}_{name}"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

        handle = UploadHandle(
            id=upload_id,
            event_id=event_id,
            name=name,
            content_type=content_type or "application/octet-stream",
            size=len(data),
            path=path,
        )
        with self._lock:
            self._uploads[upload_id] = handle

        self.scheduler.add_job(
            self._tick,
            trigger=IntervalTrigger(seconds=self.tick_seconds),
            args=[upload_id],
            id=self.job_id(upload_id),
            replace_existing=True,
        )
        logger.info(f"Started upload {upload_id} ({name}, {len(data)} bytes) for event {event_id}")
        return handle

    def get(self, upload_id: str) -> UploadHandle | None:
        return self._uploads.get(upload_id)

    def active(self, event_id: str) -> list[UploadHandle]:
        """Uploads for an event that are still in progress."""
        with self._lock:
            return [
                h for h in self._uploads.values()
                if h.event_id == event_id and not h.done
            ]

    def cancel(self, upload_id: str) -> bool:
        """Stop an upload that has not reached 100 yet and remove its blob."""
        with self._lock:
            handle = self._uploads.get(upload_id)
            if handle is None or handle.status != UploadStatus.UPLOADING:
                return False
            handle.status = UploadStatus.CANCELLED
        self._stop(upload_id)
        handle.path.unlink(missing_ok=True)
        self._schedule_eviction(upload_id)
        logger.info(f"Cancelled upload {upload_id}")
        return True

    def _stop(self, upload_id: str) -> None:
        try:
            self.scheduler.remove_job(self.job_id(upload_id))
        except JobLookupError:
            pass

    def _schedule_eviction(self, upload_id: str) -> None:
        run_date = datetime.now(UTC) + timedelta(seconds=self.retention_seconds)
        self.scheduler.add_job(
            self._evict,
            trigger=DateTrigger(run_date=run_date),
            args=[upload_id],
            id=self.evict_job_id(upload_id),
            replace_existing=True,
        )

    def _evict(self, upload_id: str) -> None:
        with self._lock:
            self._uploads.pop(upload_id, None)
        logger.debug(f"Dropped tracker for upload {upload_id}")

    def _tick(self, upload_id: str) -> None:
        with self._lock:
            handle = self._uploads.get(upload_id)
            if handle is None or handle.status != UploadStatus.UPLOADING:
                finished = True
            else:
                finished = False
                handle.progress = min(100, handle.progress + self.step)
                if handle.progress >= 100:
                    handle.status = UploadStatus.COMPLETING
        if finished:
            self._stop(upload_id)
            return
        if handle.status == UploadStatus.COMPLETING:
            self._stop(upload_id)
            self._complete(handle)

    def _complete(self, handle: UploadHandle) -> None:
        record = FileRecord(
            id=handle.id,
            event_id=handle.event_id,
            name=handle.name,
            url=self.url_for(handle.event_id, handle.path),
            type=handle.content_type,
            size=handle.size,
        )
        try:
            with self.session_factory() as session:
                add_file(KeyValueStore(session), record)
        except Exception as e:
            logger.error(f"Upload {handle.id} failed: {e}")
            handle.path.unlink(missing_ok=True)
            with self._lock:
                handle.error = str(e)
                handle.status = UploadStatus.FAILED
        else:
            with self._lock:
                handle.record = record
                handle.status = UploadStatus.COMPLETED
        self._schedule_eviction(handle.id)
