"""
Application Configuration Module

Type-safe configuration management with Pydantic Settings.

Values are read from environment variables (case-insensitive) and fall
back to a local .env file. Invalid values fail fast at startup, which is
where a missing or placeholder SECRET_KEY gets caught.

Usage:
    from catalog.config import Settings, get_settings

    settings = get_settings()          # process-wide instance
    settings = Settings(debug=True)    # explicit instance (tests)

Only the process bootstrap calls get_settings(). Everything downstream
receives the Settings object it was built with, so several independently
configured app instances can live in one process.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    SECURITY NOTE:
    ==============
    secret_key signs every bearer token. Placeholder or short values
    raise a ValidationError when the settings are created.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Book Catalog API",
        description="Application name displayed in docs and logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (unmasked errors, auto-reload)"
    )
    api_version: str = Field(
        default="v1",
        description="API version reported by the root and health endpoints"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=4000,
        description="Port to bind the server to"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # -------------------------------------------------------------------------
    # Database Settings
    # -------------------------------------------------------------------------
    database_url: str = Field(
        default="sqlite:///./catalog.db",
        description="SQLAlchemy connection URL (PostgreSQL in production)"
    )
    db_pool_size: int = Field(
        default=5,
        description="Number of permanent database connections (non-SQLite only)"
    )
    db_max_overflow: int = Field(
        default=10,
        description="Maximum additional connections during high load (non-SQLite only)"
    )
    create_tables_on_startup: bool = Field(
        default=True,
        description="Create missing tables at startup (use Alembic in production)"
    )

    # -------------------------------------------------------------------------
    # Security Settings
    # -------------------------------------------------------------------------
    secret_key: str = Field(
        default="REPLACE_WITH_YOUR_GENERATED_SECRET_KEY",
        description="Secret key used to sign bearer tokens"
    )
    access_token_expire_minutes: int | None = Field(
        default=None,
        description="Token lifetime in minutes (None: tokens never expire)"
    )
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins"
    )

    # -------------------------------------------------------------------------
    # GraphQL Settings
    # -------------------------------------------------------------------------
    graphql_ide_enabled: bool = Field(
        default=True,
        description="Serve the in-browser GraphQL IDE at /graphql"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def allowed_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate that log_level is a valid Python logging level.

        Raises:
            ValueError: If log level is invalid
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """
        Validate that secret_key is not a placeholder value.

        The application refuses to start with an unset or weak key,
        since every issued token would be forgeable.

        Raises:
            ValueError: If secret key is a placeholder or too short
        """
        placeholder_indicators = [
            "REPLACE_WITH",
            "change-me",
            "your-secret",
            "generate-with",
        ]

        for indicator in placeholder_indicators:
            if indicator.lower() in v.lower():
                raise ValueError(
                    "SECRET_KEY contains a placeholder value. "
                    "Generate a secure key with: openssl rand -hex 32"
                )

        if len(v) < 32:
            raise ValueError(
                "SECRET_KEY must be at least 32 characters long. "
                "Generate a secure key with: openssl rand -hex 32"
            )

        return v

    @field_validator("access_token_expire_minutes")
    @classmethod
    def validate_token_expiry(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            raise ValueError("access_token_expire_minutes must be positive")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        valid_envs = {"development", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    The first call reads the environment and .env file and validates the
    result; later calls return the same instance. Used by the process
    bootstrap (catalog.main) and by tooling such as Alembic and the seed
    script.

    Returns:
        Cached Settings instance
    """
    return Settings()
