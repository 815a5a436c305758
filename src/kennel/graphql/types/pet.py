"""
Pet entity type definition
"""

from ..fields import Cardinality, EntityType, RelationshipField, ScalarField, ScalarKind
from ..resolvers.pet import resolve_pet_owner

PetType = EntityType(
    name="Pet",
    description="This represents a pet owned by an owner",
    fields=lambda: (
        ScalarField("id", ScalarKind.INT),
        ScalarField("name", ScalarKind.STRING),
        ScalarField("ownerId", ScalarKind.INT, attribute="owner_id"),
        # Owner is referenced by name; the registry binds it at resolution time
        RelationshipField(
            "owner",
            target="Owner",
            cardinality=Cardinality.SINGLE,
            resolve=resolve_pet_owner,
        ),
    ),
)
