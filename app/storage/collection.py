"""Keyed collections persisted through the key-value store.

A ``Collection`` is the ordered list of one entity kind stored under one
key. It is loaded lazily on first access and written back in full after
every mutation. A stored value that cannot be decoded is logged and treated
as empty; the caller never sees the parse error.

A ``Document`` is the single-record counterpart, used for the RSVP form.
"""
import json
import logging
from collections.abc import Callable, Iterator
from typing import Generic, TypeVar

from pydantic import ValidationError
from sqlmodel import SQLModel

from app.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


class Collection(Generic[ModelT]):
    """Ordered list of entities under one storage key, indexed by id."""

    def __init__(self, store: KeyValueStore, key: str, model: type[ModelT]):
        self.store = store
        self.key = key
        self.model = model
        self._items: dict[str, ModelT] | None = None

    def exists(self) -> bool:
        """Whether anything (even an empty list) has been stored yet."""
        return self.key in self.store

    @property
    def items(self) -> dict[str, ModelT]:
        if self._items is None:
            self._items = {item.id: item for item in self._load()}
        return self._items

    def _load(self) -> list[ModelT]:
        raw = self.store.get(self.key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected a list, got {type(data).__name__}")
            return [self.model.model_validate(obj) for obj in data]
        except (ValueError, TypeError, ValidationError) as e:
            logger.error(f"Error loading {self.key}, treating as empty: {e}")
            return []

    def save(self) -> None:
        """Serialize the whole list and overwrite the key."""
        payload = [item.model_dump(mode="json") for item in self.items.values()]
        self.store.set(self.key, json.dumps(payload))

    def all(self) -> list[ModelT]:
        return list(self.items.values())

    def __iter__(self) -> Iterator[ModelT]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self.items)

    def get(self, item_id: str) -> ModelT | None:
        return self.items.get(item_id)

    def append(self, item: ModelT) -> ModelT:
        self.items[item.id] = item
        self.save()
        return item

    def replace_all(self, items: list[ModelT]) -> None:
        self._items = {item.id: item for item in items}
        self.save()

    def update(self, item_id: str, change: Callable[[ModelT], None]) -> ModelT | None:
        """Apply change to the item in place and persist. None if absent."""
        item = self.items.get(item_id)
        if item is None:
            return None
        change(item)
        self.save()
        return item

    def remove(self, item_id: str) -> bool:
        if item_id not in self.items:
            return False
        del self.items[item_id]
        self.save()
        return True


class Document(Generic[ModelT]):
    """A single entity stored under one key."""

    def __init__(self, store: KeyValueStore, key: str, model: type[ModelT]):
        self.store = store
        self.key = key
        self.model = model

    def load(self) -> ModelT | None:
        raw = self.store.get(self.key)
        if raw is None:
            return None
        try:
            return self.model.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Error loading {self.key}, treating as absent: {e}")
            return None

    def save(self, item: ModelT) -> ModelT:
        self.store.set(self.key, item.model_dump_json())
        return item

    def clear(self) -> None:
        self.store.remove(self.key)
