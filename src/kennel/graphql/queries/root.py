"""
Root query field definitions
"""

from ..fields import Argument, Cardinality, RootField, ScalarKind
from ..resolvers.owner import resolve_owner_by_id, resolve_owners
from ..resolvers.pet import resolve_pet_by_id, resolve_pets

QUERY_FIELDS: tuple[RootField, ...] = (
    RootField(
        "pet",
        returns="Pet",
        cardinality=Cardinality.SINGLE,
        resolve=resolve_pet_by_id,
        arguments=(Argument("id", ScalarKind.INT),),
        description="A single pet",
    ),
    RootField(
        "pets",
        returns="Pet",
        cardinality=Cardinality.LIST,
        resolve=resolve_pets,
        description="A list of all pets",
    ),
    RootField(
        "owner",
        returns="Owner",
        cardinality=Cardinality.SINGLE,
        resolve=resolve_owner_by_id,
        arguments=(Argument("id", ScalarKind.INT),),
        description="A single owner",
    ),
    RootField(
        "owners",
        returns="Owner",
        cardinality=Cardinality.LIST,
        resolve=resolve_owners,
        description="A list of all owners",
    ),
)
