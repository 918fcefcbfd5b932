"""Thread-safe in-memory keyed collection shared by both entity stores."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import replace
from typing import Generic, TypeVar

from agropecuario.core.clock import Clock
from agropecuario.core.entities import Harvest, Product
from agropecuario.core.ids import EntityKind, IdGenerator
from agropecuario.core.outcome import Failure, Outcome
from agropecuario.infra.logging import get_logger

logger = get_logger(__name__)

E = TypeVar("E", Product, Harvest)


class InMemoryStore(ABC, Generic[E]):
    """Keyed collection of immutable entities.

    Every public method takes the store lock, so callers never need external
    locking. Entries keep insertion order. Reads return the stored instances
    directly; they are frozen, so nobody can mutate them behind the store.
    """

    kind: EntityKind

    def __init__(self, id_generator: IdGenerator, clock: Clock) -> None:
        self._ids = id_generator
        self._clock = clock
        self._items: dict[str, E] = {}
        self._lock = threading.RLock()

    @abstractmethod
    def _not_found(self, entity_id: str) -> Failure:
        """Failure reported when ``entity_id`` is unknown."""

    @abstractmethod
    def _already_exists(self, entity_id: str) -> Failure:
        """Failure reported when a supplied id is already taken."""

    def create(self, entity: E) -> Outcome[E]:
        """Insert ``entity``, generating an id when it has none."""
        with self._lock:
            if entity.id is None:
                entity_id = self._ids.next(self.kind)
                while entity_id in self._items:
                    entity_id = self._ids.next(self.kind)
            else:
                entity_id = entity.id
                if entity_id in self._items:
                    logger.debug("Duplicate id rejected", kind=self.kind.value, id=entity_id)
                    return Outcome.fail(self._already_exists(entity_id))
                self._ids.observe(self.kind, entity_id)

            stored = replace(entity, id=entity_id, created_at=self._clock(), updated_at=None)
            self._items[entity_id] = stored

        logger.debug("Entity created", kind=self.kind.value, id=entity_id)
        return Outcome.success(stored)

    def get(self, entity_id: str) -> E | None:
        with self._lock:
            return self._items.get(entity_id)

    def exists(self, entity_id: str) -> bool:
        with self._lock:
            return entity_id in self._items

    def list(self) -> list[E]:
        """Snapshot of all entities in insertion order."""
        with self._lock:
            return list(self._items.values())

    def update(self, entity_id: str, entity: E) -> Outcome[E]:
        """Replace every mutable field, keeping id and creation timestamp."""
        with self._lock:
            current = self._items.get(entity_id)
            if current is None:
                return Outcome.fail(self._not_found(entity_id))

            stored = replace(
                entity,
                id=entity_id,
                created_at=current.created_at,
                updated_at=self._clock(),
            )
            self._items[entity_id] = stored

        logger.debug("Entity updated", kind=self.kind.value, id=entity_id)
        return Outcome.success(stored)

    def delete(self, entity_id: str) -> Outcome[E]:
        """Remove an entity and return what was removed."""
        with self._lock:
            removed = self._items.pop(entity_id, None)

        if removed is None:
            return Outcome.fail(self._not_found(entity_id))

        logger.debug("Entity deleted", kind=self.kind.value, id=entity_id)
        return Outcome.success(removed)

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def find(self, predicate: Callable[[E], bool]) -> list[E]:
        """Snapshot of the entities matching ``predicate``."""
        return [item for item in self.list() if predicate(item)]
