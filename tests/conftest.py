"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import Generator
from typing import Any

import pytest

from kennel.config import Settings
from kennel.graphql import Engine, TypeRegistry, build_registry
from kennel.logging import configure_logging
from kennel.store import InMemoryStore, create_store


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    """Route logs through structlog's stdlib integration at WARNING."""
    configure_logging(debug=False, log_level="WARNING")


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    return Settings(_env_file=None, debug=False, log_level="WARNING")


@pytest.fixture
def store(settings: Settings) -> InMemoryStore:
    """A freshly seeded store, independent of every other test."""
    return create_store(settings)


@pytest.fixture
def empty_store(settings: Settings) -> InMemoryStore:
    return create_store(settings, seed=False)


@pytest.fixture
def registry() -> TypeRegistry:
    return build_registry()


@pytest.fixture
def engine(registry: TypeRegistry, store: InMemoryStore) -> Engine:
    return Engine(registry, store)


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
