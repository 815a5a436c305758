"""
Root mutation field definitions
"""

from ..fields import Argument, Cardinality, RootField, ScalarKind
from ..resolvers.owner import add_new_owner
from ..resolvers.pet import add_new_pet

MUTATION_FIELDS: tuple[RootField, ...] = (
    RootField(
        "addNewPet",
        returns="Pet",
        cardinality=Cardinality.SINGLE,
        resolve=add_new_pet,
        arguments=(
            Argument("name", ScalarKind.STRING, required=True),
            Argument("ownerId", ScalarKind.INT, required=True),
        ),
        description="Add a new pet",
    ),
    RootField(
        "addNewOwner",
        returns="Owner",
        cardinality=Cardinality.SINGLE,
        resolve=add_new_owner,
        arguments=(Argument("name", ScalarKind.STRING, required=True),),
        description="Add a new owner",
    ),
)
