#!/usr/bin/env python3
"""
Main CLI entry point for the Kennel server.
"""

import json
import os
import sys

import click
import uvicorn

from kennel import __version__
from kennel.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="kennel")
def cli() -> None:
    """Kennel CLI - serve and query the owners and pets graph."""
    pass


@cli.command()
@click.option(
    "--host",
    default=None,
    help="Host to bind to (default: KENNEL_API_HOST or 0.0.0.0)",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Port to bind to (default: KENNEL_API_PORT or 8080)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str | None, port: int | None, reload: bool, log_level: str) -> None:
    """Start the Kennel API server.

    The store lives in process memory, so the server always runs a single
    worker.
    """
    from kennel.config import settings

    if host is None:
        host = settings.api_host
    if port is None:
        port = settings.api_port
    reload = reload or settings.api_reload

    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting Kennel API server", host=host, port=port, reload=reload, log_level=log_level
    )

    # Settings are read again when the app factory is imported by uvicorn
    if log_level == "debug":
        os.environ["KENNEL_DEBUG"] = "true"
        os.environ["KENNEL_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("KENNEL_DEBUG", "false")
        os.environ.setdefault("KENNEL_LOG_LEVEL", log_level)

    try:
        uvicorn.run(
            "kennel.api.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command()
@click.argument("document")
@click.option("--variables", default=None, help="Variables as a JSON object")
@click.option(
    "--operation-name", default=None, help="Operation to run in a multi-operation document"
)
@click.option("--no-seed", is_flag=True, default=False, help="Start from an empty store")
def query(document: str, variables: str | None, operation_name: str | None, no_seed: bool) -> None:
    """Run a GraphQL DOCUMENT against a fresh in-memory store and print the JSON result."""
    from kennel.graphql import DocumentError, DocumentExecutor, build_registry, validate_schema
    from kennel.graphql.engine import Engine
    from kennel.store import create_store

    configure_logging(log_level="warning")

    try:
        parsed = json.loads(variables) if variables else None
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--variables") from e

    registry = build_registry()
    executor = DocumentExecutor(
        Engine(registry, create_store(seed=not no_seed)), validate_schema(registry)
    )

    try:
        result = executor.execute(document, variables=parsed, operation_name=operation_name)
    except DocumentError as e:
        click.echo(json.dumps({"errors": e.errors}, indent=2), err=True)
        sys.exit(1)

    click.echo(json.dumps(result, indent=2))


@cli.command()
def schema() -> None:
    """Print the GraphQL schema (SDL)."""
    from kennel.graphql import build_registry

    click.echo(build_registry().to_sdl(), nl=False)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
