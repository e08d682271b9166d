"""Note model for the per-event notes editor."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from app.models.common import new_id, utcnow


class Note(SQLModel):
    """One version of an event's notes.

    The first entry of an event's note list is the current note; the
    entries after it are earlier versions, newest first.

    Attributes:
        id: Timestamp-based identifier, stable across edits of the current note.
        event_id: Owning event.
        content: Note text (trimmed).
        created_at: When this note was first written.
        updated_at: When this version was saved.
    """
    id: str = Field(default_factory=new_id)
    event_id: str
    content: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class NoteDraft(SQLModel):
    content: str
