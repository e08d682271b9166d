"""File record service.

Only the list of completed uploads lives here; the upload itself is driven
by ``app.services.uploads``.
"""
import logging

from app.models import FileRecord
from app.storage import Collection, KeyValueStore, keys

logger = logging.getLogger(__name__)


def file_collection(store: KeyValueStore, event_id: str) -> Collection[FileRecord]:
    return Collection(store, keys.files(event_id), FileRecord)


def list_files(store: KeyValueStore, event_id: str) -> list[FileRecord]:
    return file_collection(store, event_id).all()


def add_file(store: KeyValueStore, record: FileRecord) -> FileRecord:
    file_collection(store, record.event_id).append(record)
    logger.info(f"Added file {record.name} to event {record.event_id}")
    return record


def delete_file(store: KeyValueStore, event_id: str, file_id: str) -> bool:
    """Remove a file from the event's list. The stored blob is left in place."""
    return file_collection(store, event_id).remove(file_id)


def format_file_size(size: int) -> str:
    """Human readable size, e.g. ``1.5 KB``."""
    if size == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(units) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {units[unit]}"
