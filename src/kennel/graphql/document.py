"""
GraphQL document handling for the HTTP transport.

Parses and validates query text with graphql-core, turns the chosen
operation into selection trees and runs each root field through the engine.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from graphql import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLError,
    GraphQLIncludeDirective,
    GraphQLSchema,
    GraphQLSkipDirective,
    InlineFragmentNode,
    OperationDefinitionNode,
    OperationType,
    SelectionSetNode,
    graphql_sync,
    parse,
    validate,
)
from graphql.execution.values import get_variable_values
from graphql.pyutils import Undefined
from graphql.utilities import value_from_ast_untyped

from ..logging import get_logger
from .engine import TYPENAME, Engine
from .errors import KennelError
from .registry import OperationKind
from .selection import FieldSelection

logger = get_logger(__name__)

INTROSPECTION_FIELDS = frozenset({"__schema", "__type"})


class DocumentError(KennelError):
    """The document could not be parsed, validated or matched to an operation."""

    def __init__(self, errors: list[dict[str, Any]], status_code: int = 400):
        self.errors = errors
        self.status_code = status_code
        super().__init__("; ".join(error["message"] for error in errors))

    @classmethod
    def from_message(cls, message: str, status_code: int = 400) -> "DocumentError":
        return cls([{"message": message}], status_code=status_code)


def parse_document(schema: GraphQLSchema, query: str) -> DocumentNode:
    """Parse ``query`` and validate it against ``schema``.

    Raises:
        DocumentError: On syntax or validation errors
    """
    try:
        document = parse(query)
    except GraphQLError as e:
        raise DocumentError([e.formatted]) from e

    errors = validate(schema, document)
    if errors:
        raise DocumentError([error.formatted for error in errors])
    return document


def get_operation(document: DocumentNode, operation_name: str | None) -> OperationDefinitionNode:
    """Pick the operation to run from ``document``.

    Raises:
        DocumentError: If the operation is ambiguous, unknown or a subscription
    """
    operations = [d for d in document.definitions if isinstance(d, OperationDefinitionNode)]

    if operation_name is None:
        if len(operations) != 1:
            raise DocumentError.from_message(
                "Must provide operation name if query contains multiple operations."
            )
        operation = operations[0]
    else:
        matches = [op for op in operations if op.name and op.name.value == operation_name]
        if not matches:
            raise DocumentError.from_message(f"Unknown operation named '{operation_name}'.")
        operation = matches[0]

    if operation.operation is OperationType.SUBSCRIPTION:
        raise DocumentError.from_message("Subscriptions are not supported.")
    return operation


def build_selection(
    selection_set: SelectionSetNode | None,
    fragments: Mapping[str, FragmentDefinitionNode],
    variables: Mapping[str, Any],
) -> tuple[FieldSelection, ...]:
    """Flatten a selection set into field selections.

    Fragment spreads and inline fragments are expanded in place, fields
    skipped by ``@skip``/``@include`` are dropped, and fields sharing a
    response key are merged.
    """
    if selection_set is None:
        return ()

    fields: list[FieldSelection] = []
    for node in selection_set.selections:
        if not _should_include(node, variables):
            continue
        if isinstance(node, FieldNode):
            fields.append(
                FieldSelection(
                    name=node.name.value,
                    selections=build_selection(node.selection_set, fragments, variables),
                    alias=node.alias.value if node.alias else None,
                    arguments=_argument_values(node, variables),
                )
            )
        elif isinstance(node, FragmentSpreadNode):
            fragment = fragments[node.name.value]
            fields.extend(build_selection(fragment.selection_set, fragments, variables))
        elif isinstance(node, InlineFragmentNode):
            fields.extend(build_selection(node.selection_set, fragments, variables))

    return _merge_fields(fields)


def _should_include(node: Any, variables: Mapping[str, Any]) -> bool:
    for directive in node.directives or ():
        name = directive.name.value
        if name not in (GraphQLSkipDirective.name, GraphQLIncludeDirective.name):
            continue
        condition = next(
            (
                value_from_ast_untyped(argument.value, variables)
                for argument in directive.arguments
                if argument.name.value == "if"
            ),
            None,
        )
        if name == GraphQLSkipDirective.name and condition is True:
            return False
        if name == GraphQLIncludeDirective.name and condition is False:
            return False
    return True


def coerce_variables(
    schema: GraphQLSchema, operation: OperationDefinitionNode, variables: Mapping[str, Any] | None
) -> dict[str, Any]:
    """Coerce request variables against the operation's variable definitions.

    Raises:
        DocumentError: If a variable is missing, null where required or of the
            wrong type
    """
    coerced = get_variable_values(
        schema, operation.variable_definitions or (), dict(variables or {})
    )
    if isinstance(coerced, list):
        raise DocumentError([error.formatted for error in coerced])
    # graphql-core 3.3 returns VariableValues(sources, coerced)
    return dict(getattr(coerced, "coerced", coerced))


def _argument_values(node: FieldNode, variables: Mapping[str, Any]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for argument in node.arguments or ():
        value = value_from_ast_untyped(argument.value, variables)
        if value is not Undefined:
            values[argument.name.value] = value
    return values


def _merge_fields(fields: Sequence[FieldSelection]) -> tuple[FieldSelection, ...]:
    merged: dict[str, FieldSelection] = {}
    for f in fields:
        existing = merged.get(f.response_key)
        if existing is None:
            merged[f.response_key] = f
            continue
        merged[f.response_key] = FieldSelection(
            name=existing.name,
            selections=_merge_fields(existing.selections + f.selections),
            alias=existing.alias,
            arguments=existing.arguments,
        )
    return tuple(merged.values())


class DocumentExecutor:
    """Runs GraphQL documents through an engine."""

    def __init__(self, engine: Engine, schema: GraphQLSchema):
        self.engine = engine
        self.schema = schema

    def execute(
        self,
        query: str,
        variables: Mapping[str, Any] | None = None,
        operation_name: str | None = None,
        allow_mutations: bool = True,
    ) -> dict[str, Any]:
        """Execute a document and return a ``{"data": ..., "errors": ...}`` response.

        Root fields run one after another in document order. A root field
        failing with a KennelError resolves to null with an error entry;
        the remaining root fields still run.

        Raises:
            DocumentError: If the document is invalid, the operation cannot be
                chosen, variables fail to coerce, or a mutation is sent when
                ``allow_mutations`` is False
        """
        document = parse_document(self.schema, query)
        operation = get_operation(document, operation_name)

        if operation.operation is OperationType.MUTATION and not allow_mutations:
            raise DocumentError.from_message(
                "Can only perform a mutation operation from a POST request.", status_code=405
            )

        coerced = coerce_variables(self.schema, operation, variables)

        fragments = {
            d.name.value: d for d in document.definitions if isinstance(d, FragmentDefinitionNode)
        }
        kind = OperationKind(operation.operation.value)
        roots = build_selection(operation.selection_set, fragments, coerced)

        data: dict[str, Any] = {}
        errors: list[dict[str, Any]] = []
        introspection: dict[str, Any] | None = None
        for root in roots:
            key = root.response_key
            if root.name == TYPENAME:
                data[key] = kind.type_name
                continue
            if root.name in INTROSPECTION_FIELDS:
                if introspection is None:
                    introspection = self._introspect(query, variables, operation_name)
                data[key] = introspection["data"].get(key)
                errors.extend(
                    error for error in introspection["errors"] if error["path"][0] == key
                )
                continue
            try:
                result = self.engine.execute(
                    kind, root.name, root.arguments, root.selections, alias=root.alias
                )
            except KennelError as e:
                logger.warning("Root field failed", field=root.name, path=[key], error=str(e))
                data[key] = None
                errors.append({"message": str(e), "path": [key]})
                continue

            data.update(result.data)
            errors.extend(error.to_dict() for error in result.errors)

        response: dict[str, Any] = {"data": data}
        if errors:
            response["errors"] = errors
        return response

    def _introspect(
        self, query: str, variables: Mapping[str, Any] | None, operation_name: str | None
    ) -> dict[str, Any]:
        # Meta fields are answered by graphql-core from the schema alone; the
        # other root fields of the document resolve to null here and are dropped.
        result = graphql_sync(
            self.schema,
            query,
            variable_values=dict(variables or {}),
            operation_name=operation_name,
        )
        return {
            "data": result.data or {},
            "errors": [error.formatted for error in result.errors or () if error.path],
        }
