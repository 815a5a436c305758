"""
Type registry: entity types plus the root fields of each operation kind.
"""

from enum import Enum

from ..logging import get_logger
from .errors import UnknownField
from .fields import EntityType, RelationshipField, RootField

logger = get_logger(__name__)


class OperationKind(Enum):
    """Kinds of root operation."""

    QUERY = "query"
    MUTATION = "mutation"

    @property
    def type_name(self) -> str:
        return self.value.capitalize()


class TypeRegistry:
    """
    Central registry of entity types and root fields.

    Relationship fields name their target type; the target is looked up here
    when the field is resolved, so registration order does not matter.
    """

    def __init__(self):
        self._types: dict[str, EntityType] = {}
        self._roots: dict[OperationKind, dict[str, RootField]] = {
            kind: {} for kind in OperationKind
        }

    def register_type(self, entity_type: EntityType) -> None:
        """
        Register an entity type.

        Raises:
            ValueError: If a type with the same name is already registered
        """
        if entity_type.name in self._types:
            raise ValueError(f"Type '{entity_type.name}' is already registered")
        self._types[entity_type.name] = entity_type
        logger.debug("Registered entity type", name=entity_type.name)

    def get_type(self, name: str) -> EntityType:
        """
        Get an entity type by name.

        Raises:
            KeyError: If no such type is registered
        """
        try:
            return self._types[name]
        except KeyError:
            raise KeyError(f"Type '{name}' is not registered") from None

    def list_types(self) -> list[EntityType]:
        return list(self._types.values())

    def register_root_field(self, kind: OperationKind | str, root_field: RootField) -> None:
        """
        Register a root field under an operation kind.

        Raises:
            ValueError: If the kind already has a root field with this name
        """
        roots = self._roots[OperationKind(kind)]
        if root_field.name in roots:
            raise ValueError(f"Root field '{root_field.name}' is already registered")
        roots[root_field.name] = root_field
        logger.debug("Registered root field", kind=OperationKind(kind).value, name=root_field.name)

    def get_root_field(self, kind: OperationKind | str, name: str) -> RootField:
        """
        Get a root field by operation kind and name.

        Raises:
            UnknownField: If the field is not registered under ``kind``
        """
        kind = OperationKind(kind)
        try:
            return self._roots[kind][name]
        except KeyError:
            raise UnknownField(kind.type_name, name) from None

    def list_root_fields(self, kind: OperationKind | str) -> list[RootField]:
        return list(self._roots[OperationKind(kind)].values())

    def validate(self) -> None:
        """Bind every type's fields and check that all referenced types exist.

        Raises:
            ValueError: If a relationship or root field targets an unknown type
        """
        missing: list[str] = []
        for entity_type in self._types.values():
            for f in entity_type.field_map.values():
                if isinstance(f, RelationshipField) and f.target not in self._types:
                    missing.append(f"{entity_type.name}.{f.name} -> {f.target}")
        for kind, roots in self._roots.items():
            for root in roots.values():
                if root.returns not in self._types:
                    missing.append(f"{kind.type_name}.{root.name} -> {root.returns}")
        if missing:
            raise ValueError(f"Unresolved type references: {'; '.join(missing)}")

    def to_sdl(self) -> str:
        """Render the registry as a GraphQL SDL document."""
        blocks: list[str] = []

        for entity_type in self._types.values():
            lines = _describe(entity_type.description)
            lines.append(f"type {entity_type.name} {{")
            for f in entity_type.field_map.values():
                lines.append(f"  {f.name}: {f.type_ref()}")
            lines.append("}")
            blocks.append("\n".join(lines))

        schema_lines = []
        for kind, roots in self._roots.items():
            if not roots:
                continue
            lines = [f"type {kind.type_name} {{"]
            for root in roots.values():
                args = ""
                if root.arguments:
                    args = ", ".join(f"{a.name}: {a.type_ref()}" for a in root.arguments)
                    args = f"({args})"
                lines.extend(_describe(root.description, indent="  "))
                lines.append(f"  {root.name}{args}: {root.type_ref()}")
            lines.append("}")
            blocks.append("\n".join(lines))
            schema_lines.append(f"  {kind.value}: {kind.type_name}")

        blocks.insert(0, "schema {\n" + "\n".join(schema_lines) + "\n}")
        return "\n\n".join(blocks) + "\n"


def _describe(description: str | None, indent: str = "") -> list[str]:
    if not description:
        return []
    escaped = description.replace("\\", "\\\\").replace('"', '\\"')
    return [f'{indent}"{escaped}"']
