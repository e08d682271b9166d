"""File record model for documents attached to an event."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from app.models.common import new_id, utcnow


class FileRecord(SQLModel):
    """A file attached to an event once its upload has completed.

    Attributes:
        id: Identifier shared with the upload that produced it.
        event_id: Owning event.
        name: Original file name.
        url: Where the stored blob is served from.
        type: MIME type reported by the client.
        size: Size in bytes.
        created_at: When the upload completed.
    """
    id: str = Field(default_factory=new_id)
    event_id: str
    name: str
    url: str
    type: str = ""
    size: int = 0
    created_at: datetime = Field(default_factory=utcnow)
