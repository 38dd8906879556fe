"""
Application Settings.

Centralized configuration using Pydantic Settings with environment variable loading.
Every value has a development default so the API boots against a local SQLite file.

Production Mode:
    When app_env="production", additional validations apply:
    - jwt_secret_key must not be the development default
    - debug must be False
    - cors_allowed_origins cannot be ["*"]
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Database
    # -------------------------------------------------------------------------
    database_url: str = Field(
        default="sqlite:///./data/businesshub.db",
        description="SQLAlchemy database URL (SQLite for development, PostgreSQL for production)",
    )
    db_pool_size: int = Field(default=5, description="Connection pool size (PostgreSQL only)")
    db_max_overflow: int = Field(default=10, description="Pool overflow connections (PostgreSQL only)")
    db_connect_retries: int = Field(
        default=5,
        ge=1,
        description="Attempts to reach the database at startup before giving up",
    )
    db_echo: bool = Field(default=False, description="Log every SQL statement")

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------
    jwt_secret_key: SecretStr = Field(
        default=SecretStr(DEFAULT_JWT_SECRET),
        description="Secret used to sign access tokens",
    )
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        description="Access token lifetime in minutes (default 24 hours)",
    )
    admin_email: str | None = Field(
        default=None,
        description="Bootstrap admin account created at startup when missing",
    )
    admin_password: SecretStr | None = Field(
        default=None,
        description="Password for the bootstrap admin account",
    )
    admin_emails: list[str] = Field(
        default_factory=list,
        description="Emails that receive the admin role on registration",
    )

    # -------------------------------------------------------------------------
    # Redis (Rate Limiting)
    # -------------------------------------------------------------------------
    redis_url: str | None = Field(default=None, description="Redis connection URL")

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    api_host: str = Field(default="0.0.0.0", description="Bind address for the API server")
    api_port: int = Field(default=8000, description="Port for the API server")

    # -------------------------------------------------------------------------
    # CORS Settings
    # -------------------------------------------------------------------------
    cors_allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173", "http://localhost:8000"],
        description="Allowed CORS origins. Use ['*'] for development only.",
    )
    cors_allow_credentials: bool = Field(
        default=True,
        description="Allow credentials in CORS requests",
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    rate_limit_enabled: bool = Field(default=True, description="Apply per-client rate limiting")
    rate_limit_requests: int = Field(default=100, description="Requests allowed per window")
    rate_limit_window_seconds: int = Field(default=60, description="Rate limit window in seconds")
    rate_limit_trust_forwarded_for: bool = Field(
        default=False,
        description="Key clients by the first X-Forwarded-For hop (enable only behind a trusted proxy)",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production settings are secure."""
        if self.app_env == "production":
            errors = []

            if self.jwt_secret_key.get_secret_value() == DEFAULT_JWT_SECRET:
                errors.append("jwt_secret_key must be changed in production")

            if self.debug:
                errors.append("debug must be False in production")

            if "*" in self.cors_allowed_origins:
                errors.append("cors_allowed_origins cannot contain '*' in production")

            if errors:
                raise ValueError(
                    f"Production configuration errors: {'; '.join(errors)}"
                )

        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings if needed.
    """
    return Settings()
