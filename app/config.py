# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.STORE_BACKEND)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The Settings class validates all values at startup, catching configuration
# errors early rather than at runtime.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    The defaults run the API fully locally: in-memory store, images on
    disk. Switch STORE_BACKEND / IMAGE_BACKEND to "supabase" for a real
    database and bucket.
    """

    # -------------------------------------------------------------------------
    # Backends
    # -------------------------------------------------------------------------

    STORE_BACKEND: Literal["memory", "supabase"] = Field(
        default="memory",
        description="Where characters are persisted"
    )

    IMAGE_BACKEND: Literal["local", "supabase"] = Field(
        default="local",
        description="Where character images are stored"
    )

    SEED_SAMPLE_CHARACTERS: bool = Field(
        default=True,
        description="Insert the sample characters when the store starts empty"
    )

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # Only required when one of the backends above is "supabase"

    SUPABASE_URL: str | None = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str | None = Field(
        default=None,
        description="Supabase service_role key"
    )

    CHARACTERS_TABLE: str = Field(
        default="characters",
        description="Table holding character rows"
    )

    IMAGE_BUCKET: str = Field(
        default="characters",
        description="Storage bucket holding character images"
    )

    DATABASE_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="Timeout for character table queries"
    )

    IMAGE_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        gt=0,
        le=60,
        description="Timeout for image storage calls before giving up on the image"
    )

    # -------------------------------------------------------------------------
    # Local Image Storage
    # -------------------------------------------------------------------------

    IMAGE_DIR: str = Field(
        default="./images",
        description="Directory holding images when IMAGE_BACKEND=local"
    )

    IMAGE_BASE_URL: str = Field(
        default="http://localhost:8000/images",
        description="Public URL prefix for images when IMAGE_BACKEND=local"
    )

    # -------------------------------------------------------------------------
    # Image Upload Settings
    # -------------------------------------------------------------------------

    MAX_IMAGE_SIZE_MB: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum image upload size in MB"
    )

    ALLOWED_IMAGE_TYPES: str = Field(
        default="image/jpeg",
        description="Allowed image content types (comma-separated)"
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

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,https://localhost:3001",
        description="Allowed CORS origins (comma-separated)"
    )

    PUBLIC_CONFIG_PREFIX: str = Field(
        default="CATALOG_",
        min_length=1,
        description="Only env vars with this prefix are readable via /api/config"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Treat empty env vars as unset so defaults apply
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
        # .env may also hold CATALOG_* public settings
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_supabase_credentials(self) -> "Settings":
        if self.uses_supabase and not (self.SUPABASE_URL and self.SUPABASE_SERVICE_KEY):
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required when "
                "STORE_BACKEND or IMAGE_BACKEND is 'supabase'"
            )
        return self

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def uses_supabase(self) -> bool:
        return self.STORE_BACKEND == "supabase" or self.IMAGE_BACKEND == "supabase"

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def allowed_image_types_list(self) -> list[str]:
        """
        Parse ALLOWED_IMAGE_TYPES string into a list.

        Example: "image/jpeg, image/png" -> ["image/jpeg", "image/png"]
        """
        return [t.strip().lower() for t in self.ALLOWED_IMAGE_TYPES.split(",")]

    @property
    def max_image_size_bytes(self) -> int:
        """Convert MB to bytes for image size validation."""
        return self.MAX_IMAGE_SIZE_MB * 1024 * 1024

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


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
