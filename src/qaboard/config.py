"""Runtime configuration for the qaboard API."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings read from the environment (``QABOARD_`` prefix)."""

    model_config = {"env_prefix": "QABOARD_", "case_sensitive": False}

    app_name: str = Field(default="qaboard", description="Service name used in logs")
    database_url: str = Field(
        default="sqlite:///./qaboard.db",
        validation_alias=AliasChoices("QABOARD_DATABASE_URL", "DATABASE_URL"),
        description="SQLAlchemy database URL",
    )
    database_echo: bool = Field(default=False, description="Echo SQL statements")
    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(default=True, description="Render logs as JSON lines")
    access_token_ttl_seconds: int = Field(
        default=60 * 60,
        ge=60,
        description="Lifetime of issued access tokens",
    )
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma separated list of allowed CORS origins",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
