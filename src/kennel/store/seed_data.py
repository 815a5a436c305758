"""
Sample owners and pets loaded into a fresh store.
"""

from ..logging import get_logger
from .memory import InMemoryStore
from .models import Collection, Owner, Pet

logger = get_logger(__name__)

SEED_OWNERS: tuple[Owner, ...] = (
    Owner(id=1, name="Joey Calamad"),
    Owner(id=2, name="Johnny Basanagol"),
    Owner(id=3, name="Vinny Gabagool"),
    Owner(id=4, name="Bob"),
)

SEED_PETS: tuple[Pet, ...] = (
    Pet(id=1, name="Groucho Barks", owner_id=1),
    Pet(id=2, name="Bark Twain", owner_id=4),
    Pet(id=3, name="Kanye Westie", owner_id=1),
    Pet(id=4, name="Mary Puppins", owner_id=2),
    Pet(id=5, name="Jimmy Chew", owner_id=4),
    Pet(id=6, name="Snoop Dog", owner_id=3),
    Pet(id=7, name="Dogzilla", owner_id=3),
    Pet(id=8, name="Pup Tart", owner_id=4),
    Pet(id=9, name="Chew-barka", owner_id=3),
    Pet(id=10, name="Meatball", owner_id=1),
)


def seed_store(store: InMemoryStore) -> None:
    """Load the sample owners and pets into ``store``."""
    store.load(Collection.OWNERS, SEED_OWNERS)
    store.load(Collection.PETS, SEED_PETS)
    logger.info("Seed data loaded", owners=len(SEED_OWNERS), pets=len(SEED_PETS))
