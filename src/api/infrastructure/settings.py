"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Relational store connection settings.

    Environment variables:
        LEVEL_DB_HOST: Database host (default: localhost)
        LEVEL_DB_PORT: Database port (default: 5432)
        LEVEL_DB_DATABASE: Database name (default: level)
        LEVEL_DB_USERNAME: Database user (default: level)
        LEVEL_DB_PASSWORD: Database password (required in production)
        LEVEL_DB_URL: Full SQLAlchemy URL, overrides the fields above
            (e.g. sqlite+aiosqlite:///level.db for local runs)
        LEVEL_DB_POOL_SIZE: Connections kept in the pool (default: 10)
        LEVEL_DB_POOL_MAX_OVERFLOW: Extra connections allowed (default: 0)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEVEL_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="level", description="Database name")
    username: str = Field(default="level", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL overriding host/port/database",
    )
    pool_size: int = Field(
        default=10,
        description="Connections kept in the pool",
        ge=1,
        le=100,
    )
    pool_max_overflow: int = Field(
        default=0,
        description="Connections allowed above pool_size",
        ge=0,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL")

    @model_validator(mode="after")
    def validate_url_scheme(self) -> "DatabaseSettings":
        """Only async drivers can back an AsyncSession."""
        if self.url is not None and "+" not in self.url.split("://", 1)[0]:
            raise ValueError(
                f"url must name an async driver (e.g. postgresql+asyncpg), "
                f"got {self.url.split('://', 1)[0]!r}"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        if self.url is not None:
            return self.url
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class PubsubSettings(BaseSettings):
    """In-process event queue settings.

    Environment variables:
        LEVEL_PUBSUB_QUEUE_SIZE: Max undelivered events before dropping (default: 1000)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEVEL_PUBSUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    queue_size: int = Field(
        default=1000,
        description="Max undelivered events before new ones are dropped",
        ge=1,
    )


class I18nSettings(BaseSettings):
    """Message catalog settings.

    Environment variables:
        LEVEL_I18N_LOCALE_DIR: Directory holding compiled .mo catalogs
        LEVEL_I18N_DEFAULT_LOCALE: Locale used when none is requested (default: en)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEVEL_I18N_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    locale_dir: str | None = Field(
        default=None,
        description="Directory holding compiled gettext catalogs",
    )
    default_locale: str = Field(default="en", description="Default locale")


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Level", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def pubsub(self) -> PubsubSettings:
        """Get pubsub settings."""
        return get_pubsub_settings()

    @property
    def i18n(self) -> I18nSettings:
        """Get message catalog settings."""
        return get_i18n_settings()


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
def get_pubsub_settings() -> PubsubSettings:
    """Get cached pubsub settings."""
    return PubsubSettings()


@lru_cache
def get_i18n_settings() -> I18nSettings:
    """Get cached message catalog settings."""
    return I18nSettings()
