from app.storage.collection import Collection, Document
from app.storage.kv import KeyValueStore

__all__ = ["Collection", "Document", "KeyValueStore"]
