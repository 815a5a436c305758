"""
Configuration management for the Kennel server
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="KENNEL_",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    api_reload: bool = False
    graphql_path: str = "/graphql"
    cors_origins: list[str] = ["*"]
    graphiql: bool = True  # Serve the GraphiQL IDE on GET requests from browsers

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    log_level: str = "INFO"

    # Store
    seed_data: bool = True
    id_strategy: Literal["count", "sequence"] = "count"

    # Engine
    memoize_relationships: bool = False


# Global settings instance
settings = Settings()

# Debug: Log settings initialization (only in debug mode)
if settings.debug:
    from .logging import get_logger

    _logger = get_logger(__name__)
    _logger.debug(
        "Settings initialized",
        environment=settings.environment,
        id_strategy=settings.id_strategy,
    )
