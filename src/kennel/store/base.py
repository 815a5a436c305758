"""Core relational store interface."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from .models import Collection, Entity

EntityBuilder = Callable[[int], Entity]
Predicate = Callable[[Entity], bool]


class StoreException(Exception):
    """Base exception for store operations."""

    pass


class RelationalStore(ABC):
    """Abstract base class for relational stores.

    A store holds the owner and pet collections in insertion order. Lookups
    that find nothing return ``None`` or an empty tuple rather than raising.
    Stores are append-only: entities are never updated or deleted.
    """

    @abstractmethod
    def find_by_id(self, collection: Collection, entity_id: int) -> Entity | None:
        """Return the first entity in ``collection`` with the given id, if any."""
        pass

    @abstractmethod
    def scan_all(self, collection: Collection) -> tuple[Entity, ...]:
        """Return every entity in ``collection`` in insertion order."""
        pass

    @abstractmethod
    def find_where(self, collection: Collection, predicate: Predicate) -> tuple[Entity, ...]:
        """Return the entities in ``collection`` matching ``predicate``, in insertion order."""
        pass

    @abstractmethod
    def insert(self, collection: Collection, build: EntityBuilder) -> Entity:
        """Assign the next identifier, build the entity with it and append it.

        Args:
            collection: Target collection
            build: Callable receiving the assigned id and returning the entity

        Returns:
            The stored entity

        Raises:
            StoreException: If ``build`` returns an entity with a different id
        """
        pass

    @abstractmethod
    def count(self, collection: Collection) -> int:
        """Return the number of entities in ``collection``."""
        pass
