"""Query resolution for owners and pets.

Main components:
- TypeRegistry: Entity types and root fields per operation kind
- Engine: Resolves a root field and a selection tree against a store
- DocumentExecutor: Runs GraphQL documents through an engine (transport side)
"""

from .document import DocumentError, DocumentExecutor
from .engine import Engine, ExecutionResult
from .errors import (
    ArgumentError,
    FieldError,
    KennelError,
    MissingArgument,
    TypeMismatch,
    UnknownArgument,
    UnknownField,
)
from .fields import (
    Argument,
    Cardinality,
    EntityType,
    RelationshipField,
    RootField,
    ScalarField,
    ScalarKind,
)
from .registry import OperationKind, TypeRegistry
from .schema import build_graphql_schema, build_registry, create_engine, validate_schema
from .selection import FieldSelection, field, select

__all__ = [
    # Engine
    "Engine",
    "ExecutionResult",
    "OperationKind",
    "create_engine",
    # Registry and field variants
    "TypeRegistry",
    "EntityType",
    "ScalarField",
    "ScalarKind",
    "RelationshipField",
    "RootField",
    "Argument",
    "Cardinality",
    "build_registry",
    "build_graphql_schema",
    "validate_schema",
    # Selections
    "FieldSelection",
    "field",
    "select",
    # Errors
    "KennelError",
    "UnknownField",
    "ArgumentError",
    "MissingArgument",
    "TypeMismatch",
    "UnknownArgument",
    "FieldError",
    # Documents
    "DocumentExecutor",
    "DocumentError",
]
