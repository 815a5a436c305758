from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ...logging import get_logger
from ...store import Collection, Owner, Pet, RelationalStore

logger = get_logger(__name__)


def resolve_owner_by_id(arguments: Mapping[str, Any], store: RelationalStore) -> Owner | None:
    owner_id = arguments.get("id")
    if owner_id is None:
        return None
    return store.find_by_id(Collection.OWNERS, owner_id)


def resolve_owners(arguments: Mapping[str, Any], store: RelationalStore) -> Sequence[Owner]:
    return store.scan_all(Collection.OWNERS)


def resolve_owner_pets(owner: Owner, store: RelationalStore) -> Sequence[Pet]:
    """Get the owner's pets in insertion order."""
    return store.find_where(Collection.PETS, lambda pet: pet.owner_id == owner.id)


def add_new_owner(arguments: Mapping[str, Any], store: RelationalStore) -> Owner:
    name = arguments["name"]

    owner = store.insert(Collection.OWNERS, lambda new_id: Owner(id=new_id, name=name))
    logger.info("Owner created", owner_id=owner.id)
    return owner
