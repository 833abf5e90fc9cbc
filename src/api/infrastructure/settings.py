"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared_kernel.events.ports import DispatchMode


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        ADMIN_DB_HOST: Database host (default: localhost)
        ADMIN_DB_PORT: Database port (default: 5432)
        ADMIN_DB_DATABASE: Database name (default: admin)
        ADMIN_DB_USERNAME: Database user (default: admin)
        ADMIN_DB_PASSWORD: Database password (required in production)
        ADMIN_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        ADMIN_DB_POOL_RECYCLE_SECONDS: Connection lifetime (default: 1800)
        ADMIN_DB_ECHO_SQL: Log SQL statements (default: false)
        ADMIN_DB_APPLICATION_NAME: application_name reported to PostgreSQL
    """

    model_config = SettingsConfigDict(
        env_prefix="ADMIN_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="admin", description="Database name")
    username: str = Field(default="admin", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    pool_recycle_seconds: int = Field(
        default=1800,
        description="Replace pooled connections older than this",
        ge=60,
    )
    echo_sql: bool = Field(default=False, description="Log every SQL statement")
    application_name: str = Field(
        default="admin-backend",
        description="Reported to PostgreSQL as application_name",
    )

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class AuthSettings(BaseSettings):
    """Personal access token settings.

    Environment variables:
        ADMIN_AUTH_TOKEN_NAME: Name recorded on issued tokens (default: auth_token)
    """

    model_config = SettingsConfigDict(
        env_prefix="ADMIN_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    token_name: str = Field(
        default="auth_token",
        description="Name recorded on tokens issued by register/login/refresh",
        min_length=1,
        max_length=255,
    )


# Deletion revokes credentials and must never be deferred.
SYNC_ONLY_EVENT_TYPES: frozenset[str] = frozenset({"UserDeleted"})


class EventSettings(BaseSettings):
    """Domain event dispatch settings.

    Environment variables:
        ADMIN_EVENTS_DEFAULT_DISPATCH_MODE: sync or async (default: sync)
        ADMIN_EVENTS_ASYNC_EVENT_TYPES: JSON list of event type names that
            are dispatched in the background regardless of the default,
            e.g. '["UserCreated", "UserRestored"]'
    """

    model_config = SettingsConfigDict(
        env_prefix="ADMIN_EVENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_dispatch_mode: DispatchMode = Field(
        default=DispatchMode.SYNC,
        description="Dispatch mode for event types not listed explicitly",
    )
    async_event_types: list[str] = Field(
        default_factory=list,
        description="Event types dispatched as background tasks",
    )

    @field_validator("async_event_types")
    @classmethod
    def reject_sync_only_types(cls, value: list[str]) -> list[str]:
        """Security-relevant events cannot be configured as async."""
        forbidden = sorted(SYNC_ONLY_EVENT_TYPES.intersection(value))
        if forbidden:
            raise ValueError(f"Event types must be dispatched synchronously: {forbidden}")
        return value

    def mode_for(self, event_type: str) -> DispatchMode:
        """Resolve the dispatch mode for an event type name."""
        if event_type in SYNC_ONLY_EVENT_TYPES:
            return DispatchMode.SYNC
        if event_type in self.async_event_types:
            return DispatchMode.ASYNC
        return self.default_dispatch_mode


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections.

    Environment variables (no prefix):
        APP_NAME: Name reported in the startup log
        DEBUG: Debug mode (default: false)
        ADMIN_EMAIL: Recipient of new-user notifications
        CREATE_SCHEMA: Create missing tables at startup (default: false)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Admin Backend API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    admin_email: str = Field(
        default="admin@example.com",
        description="Recipient of new-user notifications",
    )
    create_schema: bool = Field(
        default=False,
        description="Create missing tables at startup (development only)",
    )

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings."""
    return DatabaseSettings()


@lru_cache
def get_auth_settings() -> AuthSettings:
    """Get cached auth settings."""
    return AuthSettings()


@lru_cache
def get_event_settings() -> EventSettings:
    """Get cached event dispatch settings."""
    return EventSettings()
