"""Persistent key-value store over the ``storageentry`` table.

This is the durable medium every feature area reads and writes. Values are
opaque text (JSON in practice). Each write commits immediately; there is no
atomicity across keys and the last writer of a key wins.
"""
import logging

from sqlmodel import Session, col, select

from app.models.common import utcnow
from app.models.storage import StorageEntry

logger = logging.getLogger(__name__)


class KeyValueStore:
    """String-keyed get/set/remove on top of a database session."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, key: str) -> str | None:
        entry = self.session.get(StorageEntry, key)
        return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        entry = self.session.get(StorageEntry, key)
        if entry:
            entry.value = value
            entry.updated_at = utcnow()
        else:
            entry = StorageEntry(key=key, value=value)
        self.session.add(entry)
        self.session.commit()
        logger.debug(f"Wrote {len(value)} bytes to {key}")

    def remove(self, key: str) -> None:
        entry = self.session.get(StorageEntry, key)
        if entry:
            self.session.delete(entry)
            self.session.commit()
            logger.debug(f"Removed {key}")

    def __contains__(self, key: str) -> bool:
        return self.session.get(StorageEntry, key) is not None

    def keys(self, prefix: str = "") -> list[str]:
        """List stored keys, optionally only those starting with prefix."""
        statement = select(StorageEntry.key).order_by(StorageEntry.key)
        if prefix:
            statement = statement.where(col(StorageEntry.key).startswith(prefix, autoescape=True))
        return list(self.session.exec(statement).all())
