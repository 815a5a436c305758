"""
Field definitions for entity types and root operations.

Every field is one of a closed set of variants (ScalarField or
RelationshipField on entity types, RootField on operations) and the engine
dispatches on the variant rather than inspecting entity attributes.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Any, Union

from ..store import Entity, RelationalStore
from .errors import UnknownField


class ScalarKind(Enum):
    """Scalar kinds with their GraphQL type names."""

    INT = "Int"
    STRING = "String"

    def accepts(self, value: Any) -> bool:
        """Check whether ``value`` is of this kind."""
        if self is ScalarKind.INT:
            return isinstance(value, int) and not isinstance(value, bool)
        return isinstance(value, str)


class Cardinality(Enum):
    """How many entities a relationship or root field yields."""

    SINGLE = "single"
    LIST = "list"


ResolvedValue = Union[Entity, None, Sequence[Entity]]
RelationshipResolver = Callable[[Entity, RelationalStore], ResolvedValue]
RootResolver = Callable[[Mapping[str, Any], RelationalStore], ResolvedValue]


@dataclass(frozen=True)
class ScalarField:
    """A stored value read straight off the entity."""

    name: str
    kind: ScalarKind
    required: bool = True
    attribute: str | None = None
    description: str | None = None

    def read(self, entity: Entity) -> Any:
        return getattr(entity, self.attribute or self.name)

    def type_ref(self) -> str:
        return f"{self.kind.value}!" if self.required else self.kind.value


@dataclass(frozen=True)
class RelationshipField:
    """A field computed by looking up related entities in the store."""

    name: str
    target: str
    cardinality: Cardinality
    resolve: RelationshipResolver
    description: str | None = None

    def type_ref(self) -> str:
        return f"[{self.target}]" if self.cardinality is Cardinality.LIST else self.target


Field = ScalarField | RelationshipField


@dataclass(frozen=True)
class Argument:
    """An argument accepted by a root field."""

    name: str
    kind: ScalarKind
    required: bool = False

    def type_ref(self) -> str:
        return f"{self.kind.value}!" if self.required else self.kind.value


@dataclass(frozen=True)
class RootField:
    """An entry point of a query or mutation operation."""

    name: str
    returns: str
    cardinality: Cardinality
    resolve: RootResolver
    arguments: tuple[Argument, ...] = ()
    description: str | None = None

    def get_argument(self, name: str) -> Argument | None:
        for argument in self.arguments:
            if argument.name == name:
                return argument
        return None

    def type_ref(self) -> str:
        return f"[{self.returns}]" if self.cardinality is Cardinality.LIST else self.returns


@dataclass
class EntityType:
    """An entity type and its fields.

    ``fields`` is a thunk evaluated on first use, so two types may refer to
    each other by name regardless of which is declared first.
    """

    name: str
    fields: Callable[[], Sequence[Field]]
    description: str | None = None

    @cached_property
    def field_map(self) -> dict[str, Field]:
        return {f.name: f for f in self.fields()}

    def get_field(self, name: str) -> Field:
        """Look up a field by name.

        Raises:
            UnknownField: If the type declares no such field
        """
        try:
            return self.field_map[name]
        except KeyError:
            raise UnknownField(self.name, name) from None
