"""Key-value entry model backing the persistent store."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from app.models.common import utcnow


class StorageEntry(SQLModel, table=True):
    """One key of the persistent key-value store.

    Attributes:
        key: Namespaced storage key (see ``app.storage.keys``).
        value: JSON-encoded text written by a collection or document.
        updated_at: When the key was last written.
    """
    key: str = Field(primary_key=True)
    value: str
    updated_at: datetime = Field(default_factory=utcnow)
