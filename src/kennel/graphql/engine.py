"""
Query resolution engine.

Walks a selection tree against the type registry and a store. The engine
only ever resolves fields the selection names, so the cyclic Owner/Pet
type graph is never expanded beyond the depth the caller asked for.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..logging import get_logger
from ..store import Entity, RelationalStore
from .errors import FieldError, MissingArgument, TypeMismatch, UnknownArgument, UnknownField
from .fields import (
    Cardinality,
    EntityType,
    RelationshipField,
    ResolvedValue,
    RootField,
    ScalarField,
)
from .registry import OperationKind, TypeRegistry
from .selection import FieldSelection

logger = get_logger(__name__)

TYPENAME = "__typename"

Path = tuple[str | int, ...]


@dataclass
class ExecutionResult:
    """Result of executing one root field."""

    data: dict[str, Any]
    errors: list[FieldError] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"data": self.data}
        if self.errors:
            result["errors"] = [error.to_dict() for error in self.errors]
        return result


@dataclass
class _ExecutionContext:
    """State scoped to a single ``execute`` call."""

    errors: list[FieldError] = field(default_factory=list)
    memo: dict[tuple[str, int, str], ResolvedValue] | None = None


class Engine:
    """Resolves root fields and their selections against a store.

    Args:
        registry: Type registry declaring entity types and root fields
        store: Store passed to every resolver call
        memoize: Cache relationship lookups per execution, keyed by
            (entity type, entity id, relationship name)
    """

    def __init__(self, registry: TypeRegistry, store: RelationalStore, memoize: bool = False):
        self.registry = registry
        self.store = store
        self.memoize = memoize

    def execute(
        self,
        operation_kind: OperationKind | str,
        root_field_name: str,
        arguments: Mapping[str, Any] | None = None,
        selection: Sequence[FieldSelection] = (),
        alias: str | None = None,
    ) -> ExecutionResult:
        """Execute one root field and resolve ``selection`` on its value.

        Args:
            operation_kind: ``query`` or ``mutation``
            root_field_name: Root field registered under the operation kind
            arguments: Argument values keyed by argument name
            selection: Fields to resolve on the returned entity or entities
            alias: Response key for the root field (defaults to its name)

        Returns:
            ExecutionResult whose ``data`` maps the response key to the
            resolved value

        Raises:
            UnknownField: If the root field or any selected field is not declared
            MissingArgument: If a required argument is absent or null
            TypeMismatch: If an argument is undeclared or of the wrong kind
        """
        try:
            kind = OperationKind(operation_kind)
        except ValueError:
            raise UnknownField(str(operation_kind), root_field_name) from None
        root = self.registry.get_root_field(kind, root_field_name)
        root_type = self.registry.get_type(root.returns)

        # All checks run before the resolver so a mutation never half-applies
        coerced = self._coerce_arguments(root, arguments or {})
        self._check_selection(root_type, selection)

        key = alias or root.name
        context = _ExecutionContext(memo={} if self.memoize else None)
        logger.debug("Executing root field", kind=kind.value, field=root.name)

        try:
            value = root.resolve(coerced, self.store)
        except Exception as e:
            self._record_error(context, (key,), e)
            return ExecutionResult(data={key: None}, errors=context.errors)

        data = {key: self._complete(context, root_type, root.cardinality, value, selection, (key,))}
        return ExecutionResult(data=data, errors=context.errors)

    def _coerce_arguments(self, root: RootField, arguments: Mapping[str, Any]) -> dict[str, Any]:
        for name in arguments:
            if root.get_argument(name) is None:
                raise UnknownArgument(root.name, name)

        coerced: dict[str, Any] = {}
        for argument in root.arguments:
            value = arguments.get(argument.name)
            if value is None:
                if argument.required:
                    raise MissingArgument(root.name, argument.name, argument.type_ref())
                continue
            if not argument.kind.accepts(value):
                raise TypeMismatch(root.name, argument.name, argument.type_ref(), value)
            coerced[argument.name] = value
        return coerced

    def _check_selection(
        self, entity_type: EntityType, selection: Sequence[FieldSelection]
    ) -> None:
        for selected in selection:
            if selected.name == TYPENAME:
                continue
            f = entity_type.get_field(selected.name)
            if isinstance(f, RelationshipField):
                self._check_selection(self.registry.get_type(f.target), selected.selections)

    def _complete(
        self,
        context: _ExecutionContext,
        entity_type: EntityType,
        cardinality: Cardinality,
        value: ResolvedValue,
        selection: Sequence[FieldSelection],
        path: Path,
    ) -> Any:
        if cardinality is Cardinality.LIST:
            if value is None:
                return []
            return [
                self._resolve_entity(context, entity_type, item, selection, path + (index,))
                for index, item in enumerate(value)
            ]

        if value is None:
            return None
        return self._resolve_entity(context, entity_type, value, selection, path)

    def _resolve_entity(
        self,
        context: _ExecutionContext,
        entity_type: EntityType,
        entity: Entity,
        selection: Sequence[FieldSelection],
        path: Path,
    ) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for selected in selection:
            key = selected.response_key
            if selected.name == TYPENAME:
                result[key] = entity_type.name
                continue

            f = entity_type.get_field(selected.name)
            try:
                if isinstance(f, ScalarField):
                    result[key] = f.read(entity)
                    continue
                child = self._resolve_relationship(context, entity_type, f, entity)
            except Exception as e:
                # One field's failure leaves its siblings untouched
                self._record_error(context, path + (key,), e)
                result[key] = None
                continue

            result[key] = self._complete(
                context,
                self.registry.get_type(f.target),
                f.cardinality,
                child,
                selected.selections,
                path + (key,),
            )
        return result

    def _resolve_relationship(
        self,
        context: _ExecutionContext,
        entity_type: EntityType,
        relationship: RelationshipField,
        entity: Entity,
    ) -> ResolvedValue:
        if context.memo is None:
            return relationship.resolve(entity, self.store)

        memo_key = (entity_type.name, entity.id, relationship.name)
        if memo_key not in context.memo:
            context.memo[memo_key] = relationship.resolve(entity, self.store)
        return context.memo[memo_key]

    def _record_error(self, context: _ExecutionContext, path: Path, error: Exception) -> None:
        logger.exception("Field resolution failed", path=list(path), error=str(error))
        context.errors.append(FieldError(path=path, message=str(error)))
