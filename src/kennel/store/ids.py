"""
Identifier assignment strategies for store inserts.

The store asks its strategy for the next id while holding its write lock,
so strategies themselves need no locking.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from .models import Collection, Entity


class IdStrategy(ABC):
    """Computes the identifier for the next entity appended to a collection."""

    name: str

    @abstractmethod
    def next_id(self, collection: Collection, existing: Sequence[Entity]) -> int:
        pass


class CountPlusOneIds(IdStrategy):
    """Next id is the collection size plus one.

    Matches the reference deployment. Seed data with gaps or out-of-order
    ids (or any future deletion) makes this hand out an id that is already
    taken; use :class:`SequenceIds` where that matters.
    """

    name = "count"

    def next_id(self, collection: Collection, existing: Sequence[Entity]) -> int:
        return len(existing) + 1


class SequenceIds(IdStrategy):
    """Per-collection monotonic counter, seeded from the highest existing id."""

    name = "sequence"

    def __init__(self) -> None:
        self._last: dict[Collection, int] = {}

    def next_id(self, collection: Collection, existing: Sequence[Entity]) -> int:
        highest = max((entity.id for entity in existing), default=0)
        next_value = max(self._last.get(collection, 0), highest) + 1
        self._last[collection] = next_value
        return next_value


_STRATEGIES: dict[str, type[IdStrategy]] = {
    CountPlusOneIds.name: CountPlusOneIds,
    SequenceIds.name: SequenceIds,
}


def get_id_strategy(name: str) -> IdStrategy:
    """Create an id strategy by its configured name.

    Raises:
        ValueError: If the name is unknown
    """
    try:
        return _STRATEGIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown id strategy '{name}'. Available: {', '.join(sorted(_STRATEGIES))}"
        ) from None
