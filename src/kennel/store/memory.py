"""In-memory relational store."""

import threading
from collections.abc import Iterable

from ..logging import get_logger
from .base import EntityBuilder, Predicate, RelationalStore, StoreException
from .ids import CountPlusOneIds, IdStrategy
from .models import Collection, Entity

logger = get_logger(__name__)


class InMemoryStore(RelationalStore):
    """Relational store backed by one Python list per collection.

    All access goes through a single re-entrant lock: an insert computes its
    id and appends as one critical section, and reads copy the collection
    into a tuple, so readers never see a half-applied insert.
    """

    def __init__(self, id_strategy: IdStrategy | None = None):
        self.id_strategy = id_strategy or CountPlusOneIds()
        self._collections: dict[Collection, list[Entity]] = {c: [] for c in Collection}
        self._lock = threading.RLock()

    def load(self, collection: Collection, entities: Iterable[Entity]) -> None:
        """Append pre-built entities (with their own ids) to ``collection``."""
        with self._lock:
            rows = self._collections[collection]
            before = len(rows)
            rows.extend(entities)
            logger.debug("Loaded entities", collection=collection.value, count=len(rows) - before)

    def find_by_id(self, collection: Collection, entity_id: int) -> Entity | None:
        with self._lock:
            for entity in self._collections[collection]:
                if entity.id == entity_id:
                    return entity
        return None

    def scan_all(self, collection: Collection) -> tuple[Entity, ...]:
        with self._lock:
            return tuple(self._collections[collection])

    def find_where(self, collection: Collection, predicate: Predicate) -> tuple[Entity, ...]:
        # Snapshot first so the predicate never runs under the lock
        return tuple(entity for entity in self.scan_all(collection) if predicate(entity))

    def insert(self, collection: Collection, build: EntityBuilder) -> Entity:
        with self._lock:
            rows = self._collections[collection]
            entity_id = self.id_strategy.next_id(collection, rows)
            entity = build(entity_id)
            if entity.id != entity_id:
                raise StoreException(
                    f"Entity built for {collection.value} has id {entity.id}, expected {entity_id}"
                )
            rows.append(entity)
        return entity

    def count(self, collection: Collection) -> int:
        with self._lock:
            return len(self._collections[collection])
