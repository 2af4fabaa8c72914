# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#   print(settings.DO_SPACE_NAME)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Settings are built once at startup and handed to the services that need
# them. Business logic never reads the environment directly.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    Variable names for the database and Spaces follow the names the
    deployment already exports (DB_ADDR, DO_SPACE_NAME, ACCESS_KEY, ...).
    """

    # -------------------------------------------------------------------------
    # Database Configuration
    # -------------------------------------------------------------------------

    DB_ADDR: str = Field(
        default="localhost",
        description="PostgreSQL host"
    )

    DB_PORT: int = Field(
        default=5432,
        ge=1,
        le=65535,
        description="PostgreSQL port"
    )

    DB_USER: str = Field(
        default="postgres",
        description="PostgreSQL user"
    )

    DB_PASSWORD: str = Field(
        default="",
        description="PostgreSQL password"
    )

    DB_NAME: str = Field(
        default="postgres",
        description="PostgreSQL database name"
    )

    DB_SSLMODE: str = Field(
        default="require",
        description="libpq sslmode for the PostgreSQL connection"
    )

    # Full SQLAlchemy URL. When set it wins over the DB_* parts
    # (e.g. sqlite:///./dev.db for local development).
    DATABASE_URL: str | None = Field(
        default=None,
        description="Complete database URL overriding the DB_* settings"
    )

    # -------------------------------------------------------------------------
    # Object Storage (DigitalOcean Spaces / S3-compatible)
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    DO_SPACE_NAME: str = Field(
        ...,
        description="Bucket (Space) that receives profile images"
    )

    DO_SPACE_REGION: str = Field(
        ...,
        description="Region of the Space (e.g. fra1)"
    )

    SPACE_ENDPOINT: str = Field(
        ...,
        description="S3 endpoint URL (e.g. https://fra1.digitaloceanspaces.com)"
    )

    ACCESS_KEY: str = Field(
        ...,
        description="Spaces access key id"
    )

    SECRET_KEY: str = Field(
        ...,
        description="Spaces secret access key"
    )

    SPACE_DOMAIN: str = Field(
        default="digitaloceanspaces.com",
        description="Provider domain used to build public object URLs"
    )

    SPACE_CONNECT_TIMEOUT: float = Field(
        default=5.0,
        gt=0,
        description="Seconds to wait for a connection to the object store"
    )

    SPACE_READ_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        description="Seconds to wait for an object store response"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    PORT: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Users & Uploads
    # -------------------------------------------------------------------------

    DEFAULT_IMAGE_URI: str = Field(
        default="",
        description="Image URI assigned to new users before any upload"
    )

    MAX_UPLOAD_SIZE_MB: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum profile image size in MB"
    )

    ALLOWED_EXTENSIONS: str = Field(
        default=".png,.jpg,.jpeg,.gif,.webp",
        description="Allowed image extensions (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Treat empty variables as unset so defaults apply
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def database_url(self) -> str:
        """
        SQLAlchemy connection URL.

        Built from the DB_* parts with psycopg2 and the configured sslmode,
        unless DATABASE_URL is set. Credentials are escaped by SQLAlchemy.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL

        url = URL.create(
            "postgresql+psycopg2",
            username=self.DB_USER,
            password=self.DB_PASSWORD or None,
            host=self.DB_ADDR,
            port=self.DB_PORT,
            database=self.DB_NAME,
            query={"sslmode": self.DB_SSLMODE},
        )
        return url.render_as_string(hide_password=False)

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def allowed_extensions_list(self) -> list[str]:
        """
        Parse ALLOWED_EXTENSIONS string into a list.

        Example: ".png, .JPG" -> [".png", ".jpg"]
        """
        return [ext.strip().lower() for ext in self.ALLOWED_EXTENSIONS.split(",")]

    @property
    def max_upload_size_bytes(self) -> int:
        """
        Convert MB to bytes for file size validation.
        """
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()
