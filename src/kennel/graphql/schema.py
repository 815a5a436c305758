"""
Schema composition: registry, engine and the graphql-core view of the registry
"""

from graphql import GraphQLSchema, build_schema
from graphql import validate_schema as gql_validate_schema

from ..config import Settings
from ..logging import get_logger
from ..store import RelationalStore, create_store
from .engine import Engine
from .mutations.root import MUTATION_FIELDS
from .queries.root import QUERY_FIELDS
from .registry import OperationKind, TypeRegistry
from .types import OwnerType, PetType

logger = get_logger(__name__)


def build_registry() -> TypeRegistry:
    """Create a registry holding the Owner and Pet types and all root fields."""
    registry = TypeRegistry()
    registry.register_type(PetType)
    registry.register_type(OwnerType)

    for root_field in QUERY_FIELDS:
        registry.register_root_field(OperationKind.QUERY, root_field)
    for root_field in MUTATION_FIELDS:
        registry.register_root_field(OperationKind.MUTATION, root_field)

    return registry


def create_engine(
    store: RelationalStore | None = None,
    settings: Settings | None = None,
    registry: TypeRegistry | None = None,
) -> Engine:
    """Compose an engine over ``store`` (a new store built from settings if None)."""
    if settings is None:
        from ..config import settings as global_settings

        settings = global_settings

    if store is None:
        store = create_store(settings)

    return Engine(
        registry or build_registry(),
        store,
        memoize=settings.memoize_relationships,
    )


def build_graphql_schema(registry: TypeRegistry) -> GraphQLSchema:
    """Build a graphql-core schema from the registry's SDL, for document validation."""
    return build_schema(registry.to_sdl())


def validate_schema(registry: TypeRegistry) -> GraphQLSchema:
    """Validate the registry at startup and return its graphql-core schema.

    Catches unresolved type references early, causing the server to fail
    fast rather than erroring at request time.

    Raises:
        Exception: If the registry or the generated schema is invalid
    """
    try:
        registry.validate()
        graphql_schema = build_graphql_schema(registry)

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")
        return graphql_schema

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise
