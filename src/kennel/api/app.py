"""
Main FastAPI application for the Kennel server
"""

import json
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from .. import __version__
from ..config import Settings
from ..graphql import DocumentError, DocumentExecutor, build_registry, validate_schema
from ..graphql.engine import Engine
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..store import RelationalStore, create_store
from .graphiql import render_graphiql, wants_html

logger = get_logger(__name__)


class GraphQLRequest(BaseModel):
    """JSON body of a POST to the GraphQL endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    variables: dict[str, Any] | None = None
    operation_name: str | None = Field(default=None, alias="operationName")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(
        "Running a GraphQL API server",
        graphql_path=app.state.settings.graphql_path,
        id_strategy=app.state.settings.id_strategy,
    )
    yield
    logger.info("Shutting down Kennel API...")


def _run(
    executor: DocumentExecutor, request: GraphQLRequest, allow_mutations: bool
) -> JSONResponse:
    try:
        result = executor.execute(
            request.query,
            variables=request.variables,
            operation_name=request.operation_name,
            allow_mutations=allow_mutations,
        )
    except DocumentError as e:
        logger.warning("Rejected GraphQL document", errors=e.errors)
        return JSONResponse({"errors": e.errors}, status_code=e.status_code)
    return JSONResponse(result)


def _invalid_variables() -> JSONResponse:
    return JSONResponse({"errors": [{"message": "Variables are invalid JSON."}]}, status_code=400)


def create_app(settings: Settings | None = None, store: RelationalStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (the global settings if None)
        store: Store to serve (a new store built from settings if None)
    """
    if settings is None:
        from ..config import settings as global_settings

        settings = global_settings

    configure_logging(debug=settings.debug, log_level=settings.log_level)

    registry = build_registry()
    # Fail fast on a broken registry rather than at request time
    graphql_schema = validate_schema(registry)

    if store is None:
        store = create_store(settings)
    engine = Engine(registry, store, memoize=settings.memoize_relationships)
    executor = DocumentExecutor(engine, graphql_schema)

    app = FastAPI(
        title="Kennel API",
        description="Owners and their pets behind a single GraphQL endpoint",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.engine = engine
    app.state.executor = executor

    app.add_middleware(LoggingContextMiddleware, graphql_path=settings.graphql_path)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    @app.post(settings.graphql_path)
    def graphql_post(  # pyright: ignore [reportUnusedFunction]
        body: GraphQLRequest, request: Request
    ):
        """Execute a query or mutation document."""
        return _run(request.app.state.executor, body, allow_mutations=True)

    @app.get(settings.graphql_path)
    def graphql_get(  # pyright: ignore [reportUnusedFunction]
        request: Request,
        query: str | None = Query(default=None),
        variables: str | None = Query(default=None),
        operation_name: str | None = Query(default=None, alias="operationName"),
    ):
        """Execute a query document passed in the query string.

        Without a query, browsers get the GraphiQL IDE when it is enabled.
        """
        app_settings = request.app.state.settings
        if query is None:
            if app_settings.graphiql and wants_html(request.headers.get("accept")):
                return HTMLResponse(render_graphiql(app_settings.graphql_path))
            return JSONResponse(
                {"errors": [{"message": "Must provide query string."}]}, status_code=400
            )

        try:
            parsed_variables = json.loads(variables) if variables else None
        except json.JSONDecodeError:
            return _invalid_variables()
        if parsed_variables is not None and not isinstance(parsed_variables, dict):
            return _invalid_variables()

        body = GraphQLRequest(
            query=query, variables=parsed_variables, operation_name=operation_name
        )
        return _run(request.app.state.executor, body, allow_mutations=False)

    logger.info("GraphQL endpoint initialized successfully", endpoint=settings.graphql_path)
    return app


if __name__ == "__main__":
    import uvicorn

    from ..config import settings as global_settings

    uvicorn.run(
        "kennel.api.app:create_app",
        factory=True,
        host=global_settings.api_host,
        port=global_settings.api_port,
        reload=global_settings.api_reload,
        log_level=global_settings.log_level.lower(),
    )
