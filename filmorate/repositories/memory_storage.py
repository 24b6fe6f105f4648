"""In-memory keyed storage backing films and users.

State is volatile: it lives for the process lifetime and starts empty.
Entities are copied on the way in and out so callers can only change
stored state through ``update``.
"""
from __future__ import annotations

import copy
import threading
from typing import Dict, Generic, Optional, TypeVar

from filmorate.core.errors import InvalidArgumentError, NotFoundError

T = TypeVar("T")


class IdGenerator:
    """Monotonic identifier allocator; first issued id is 1, ids are never reused."""

    def __init__(self, start: int = 0) -> None:
        self._value = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def current(self) -> int:
        with self._lock:
            return self._value


class InMemoryStorage(Generic[T]):
    """CRUD-by-identifier repository for one entity type."""

    def __init__(self, entity_name: str = "entity") -> None:
        self.entity_name = entity_name
        self._items: Dict[int, T] = {}
        self._lock = threading.Lock()

    def get_all(self) -> list[T]:
        with self._lock:
            return [copy.deepcopy(item) for item in self._items.values()]

    def get_by_id(self, entity_id: Optional[int]) -> Optional[T]:
        if entity_id is None:
            raise InvalidArgumentError(f"{self.entity_name} id must not be null")
        with self._lock:
            item = self._items.get(entity_id)
            return copy.deepcopy(item) if item is not None else None

    def add(self, entity: Optional[T]) -> T:
        entity_id = self._require_id(entity)
        with self._lock:
            if entity_id in self._items:
                raise InvalidArgumentError(f"{self.entity_name} with id={entity_id} already exists")
            self._items[entity_id] = copy.deepcopy(entity)
            return copy.deepcopy(entity)

    def update(self, entity: Optional[T]) -> T:
        entity_id = self._require_id(entity)
        with self._lock:
            if entity_id not in self._items:
                raise NotFoundError(f"{self.entity_name} with id={entity_id} not found")
            self._items[entity_id] = copy.deepcopy(entity)
            return copy.deepcopy(entity)

    def delete(self, entity_id: Optional[int]) -> None:
        if entity_id is None:
            raise InvalidArgumentError(f"{self.entity_name} id must not be null")
        with self._lock:
            if entity_id not in self._items:
                raise NotFoundError(f"{self.entity_name} with id={entity_id} not found")
            del self._items[entity_id]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def _require_id(self, entity: Optional[T]) -> int:
        if entity is None:
            raise InvalidArgumentError(f"{self.entity_name} must not be null")
        entity_id = getattr(entity, "id", None)
        if entity_id is None:
            raise InvalidArgumentError(f"{self.entity_name} id must not be null")
        return entity_id
