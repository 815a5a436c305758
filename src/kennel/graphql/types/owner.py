"""
Owner entity type definition
"""

from ..fields import Cardinality, EntityType, RelationshipField, ScalarField, ScalarKind
from ..resolvers.owner import resolve_owner_pets

OwnerType = EntityType(
    name="Owner",
    description="This represents an owner of a pet",
    fields=lambda: (
        ScalarField("id", ScalarKind.INT),
        ScalarField("name", ScalarKind.STRING),
        RelationshipField(
            "pets",
            target="Pet",
            cardinality=Cardinality.LIST,
            resolve=resolve_owner_pets,
        ),
    ),
)
