"""Configuration management for the image gateway."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Supports loading from .env files and environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Service configuration
    host: str = "0.0.0.0"
    port: int = 3000

    # Cloudinary credentials
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    cloudinary_base_url: str = "https://api.cloudinary.com/v1_1"

    # Remote store selection ("memory" keeps objects in-process, for local development)
    remote_store: Literal["cloudinary", "memory"] = "cloudinary"
    remote_timeout_seconds: float = 60.0

    # Upload policy
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    category_required: bool = True
    storage_folder: str = "my_images"

    # CORS settings - stored as comma-separated string for env var compatibility
    cors_origins_str: str = Field(default="*", validation_alias="CORS_ALLOWED_ORIGINS")

    # Error reporting
    expose_error_details: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_json: bool = False

    @property
    def cors_allowed_origins(self) -> list[str]:
        """CORS allowed origins as a list."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def has_cloudinary_credentials(self) -> bool:
        """Check if all Cloudinary credentials are configured."""
        return bool(
            self.cloudinary_cloud_name and self.cloudinary_api_key and self.cloudinary_api_secret
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
