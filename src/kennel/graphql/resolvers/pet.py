from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ...logging import get_logger
from ...store import Collection, Owner, Pet, RelationalStore

logger = get_logger(__name__)


def resolve_pet_by_id(arguments: Mapping[str, Any], store: RelationalStore) -> Pet | None:
    pet_id = arguments.get("id")
    if pet_id is None:
        return None
    return store.find_by_id(Collection.PETS, pet_id)


def resolve_pets(arguments: Mapping[str, Any], store: RelationalStore) -> Sequence[Pet]:
    return store.scan_all(Collection.PETS)


def resolve_pet_owner(pet: Pet, store: RelationalStore) -> Owner | None:
    """Get the pet's owner, or None when ``owner_id`` matches no owner."""
    return store.find_by_id(Collection.OWNERS, pet.owner_id)


def add_new_pet(arguments: Mapping[str, Any], store: RelationalStore) -> Pet:
    """Append a pet to the store; ``ownerId`` is stored as given."""
    name = arguments["name"]
    owner_id = arguments["ownerId"]

    pet = store.insert(
        Collection.PETS, lambda new_id: Pet(id=new_id, name=name, owner_id=owner_id)
    )
    logger.info("Pet created", pet_id=pet.id, owner_id=pet.owner_id)
    return pet
