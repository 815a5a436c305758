"""Factory for creating stores from configuration."""

from ..config import Settings
from ..logging import get_logger
from .ids import get_id_strategy
from .memory import InMemoryStore
from .seed_data import seed_store

logger = get_logger(__name__)


def create_store(
    settings: Settings | None = None,
    *,
    id_strategy: str | None = None,
    seed: bool | None = None,
) -> InMemoryStore:
    """Create a new, independent store.

    Args:
        settings: Settings to read defaults from (the global settings if None)
        id_strategy: Overrides ``settings.id_strategy``
        seed: Overrides ``settings.seed_data``

    Returns:
        A fresh InMemoryStore
    """
    if settings is None:
        from ..config import settings as global_settings

        settings = global_settings

    strategy_name = id_strategy or settings.id_strategy
    should_seed = settings.seed_data if seed is None else seed

    store = InMemoryStore(id_strategy=get_id_strategy(strategy_name))
    if should_seed:
        seed_store(store)

    logger.debug("Store created", id_strategy=strategy_name, seeded=should_seed)
    return store
