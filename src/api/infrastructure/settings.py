"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        PEPPLANNER_DB_HOST: Database host (default: localhost)
        PEPPLANNER_DB_PORT: Database port (default: 5432)
        PEPPLANNER_DB_DATABASE: Database name (default: pepplanner)
        PEPPLANNER_DB_USERNAME: Database user (default: pepplanner)
        PEPPLANNER_DB_PASSWORD: Database password (required in production)
        PEPPLANNER_DB_URL / DATABASE_URL: Full connection URL, overrides the
            individual fields when set
        PEPPLANNER_DB_POOL_SIZE: Connections kept in the pool (default: 10)
        PEPPLANNER_DB_POOL_MAX_OVERFLOW: Extra connections under load (default: 0)
        PEPPLANNER_DB_CONNECT_TIMEOUT: Connect timeout in seconds (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="PEPPLANNER_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="pepplanner", description="Database name")
    username: str = Field(default="pepplanner", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    url: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("PEPPLANNER_DB_URL", "DATABASE_URL"),
        description="Full database URL (takes precedence over individual fields)",
    )
    pool_size: int = Field(
        default=10,
        description="Connections kept in the pool",
        ge=1,
        le=100,
    )
    pool_max_overflow: int = Field(
        default=0,
        description="Connections allowed beyond pool_size under load",
        ge=0,
        le=100,
    )
    connect_timeout: float = Field(
        default=10.0,
        description="Connection timeout in seconds",
        gt=0,
    )


class SSOSettings(BaseSettings):
    """Discourse SSO settings.

    Environment variables:
        PEPPLANNER_SSO_SECRET / DISCOURSE_SSO_SECRET: Shared HMAC secret
        PEPPLANNER_SSO_ALLOW_UNSIGNED_PAYLOADS: Trust payloads that arrive
            without a signature (default: true)

    The unsigned tier exists for the theme-component iframe deployment,
    where the forum itself is the only party able to load the page with a
    payload. Disable it when the API is reachable by anything else.
    """

    model_config = SettingsConfigDict(
        env_prefix="PEPPLANNER_SSO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    secret: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("PEPPLANNER_SSO_SECRET", "DISCOURSE_SSO_SECRET"),
        description="Shared secret used to sign SSO payloads",
    )
    allow_unsigned_payloads: bool = Field(
        default=True,
        description="Accept SSO payloads without a signature",
    )

    @property
    def has_secret(self) -> bool:
        """Whether a non-empty secret is configured."""
        return self.secret is not None and self.secret.get_secret_value() != ""


class AppSettings(BaseSettings):
    """Main application settings.

    Environment variables:
        PEPPLANNER_APP_NAME: Application name
        PEPPLANNER_ENVIRONMENT: development, test or production (default: production)
        PEPPLANNER_CORS_ORIGIN: Browser origin allowed to call the API
        PEPPLANNER_LOG_LEVEL: Minimum log level (default: info)
    """

    model_config = SettingsConfigDict(
        env_prefix="PEPPLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Pepplanner API", description="Application name")
    environment: Literal["development", "test", "production"] = Field(
        default="production",
        description="Deployment environment",
    )
    cors_origin: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origin",
    )
    log_level: str = Field(default="info", description="Minimum log level")

    @property
    def is_production(self) -> bool:
        """Whether the application runs in production mode."""
        return self.environment == "production"


@lru_cache
def get_app_settings() -> AppSettings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return AppSettings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_sso_settings() -> SSOSettings:
    """Get cached SSO settings."""
    return SSOSettings()
