from app.models.app_state import AppState
from app.models.event import Event, EventCreate
from app.models.file import FileRecord
from app.models.note import Note, NoteDraft
from app.models.resource import QuantityAdjust, Resource, ResourceCreate, ResourceUpdate
from app.models.rsvp import (
    FieldType,
    RSVPField,
    RSVPFieldCreate,
    RSVPFieldUpdate,
    RSVPForm,
    RSVPFormUpdate,
    RSVPResponse,
    RSVPSubmission,
)
from app.models.storage import StorageEntry
from app.models.task import Task, TaskCreate, TaskUpdate

__all__ = [
    "AppState",
    "Event",
    "EventCreate",
    "FieldType",
    "FileRecord",
    "Note",
    "NoteDraft",
    "QuantityAdjust",
    "RSVPField",
    "RSVPFieldCreate",
    "RSVPFieldUpdate",
    "RSVPForm",
    "RSVPFormUpdate",
    "RSVPResponse",
    "RSVPSubmission",
    "Resource",
    "ResourceCreate",
    "ResourceUpdate",
    "StorageEntry",
    "Task",
    "TaskCreate",
    "TaskUpdate",
]
