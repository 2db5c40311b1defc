"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management using Pydantic Settings.

A single cached Settings instance is shared across the application via
get_settings(). Tests and embedding code may build their own Settings and
hand it to the Application factory instead.

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        products_file: Path to the catalogue JSON file
        upload_directory: Directory holding uploaded product images
        public_base_url: Base address used to build image URLs
        cors_origins: Allowed CORS origins (JSON array string)
        cors_methods: Allowed CORS methods (JSON array string)

    Example:
        >>> settings = Settings(upload_directory="/tmp/uploads")
        >>> settings.upload_path
        PosixPath('/tmp/uploads')
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Product Image Catalogue",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # STORAGE SETTINGS
    # =========================================================================
    products_file: str = Field(
        default="products.json",
        description="Path to the catalogue JSON file"
    )

    upload_directory: str = Field(
        default="uploads",
        description="Directory holding uploaded product images"
    )

    public_base_url: str = Field(
        default="http://localhost:5000",
        description="Base address prepended to /images/{filename}"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["http://localhost:3000"]',
        description="Allowed CORS origins as JSON array string"
    )

    cors_methods: str = Field(
        default='["GET", "POST"]',
        description="Allowed CORS methods as JSON array string"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """
        Validate and normalize application environment.

        Unknown values fall back to 'development' with a warning.
        """
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("public_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Drop trailing slashes so URL concatenation stays clean."""
        return value.rstrip("/")

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def products_path(self) -> Path:
        """Catalogue file as a Path object."""
        return Path(self.products_file)

    @property
    def upload_path(self) -> Path:
        """Image directory as a Path object."""
        return Path(self.upload_directory)

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from JSON string to list."""
        return self._parse_json_list(self.cors_origins, "origins", ["*"])

    @property
    def cors_methods_list(self) -> List[str]:
        """Parse CORS methods from JSON string to list."""
        return self._parse_json_list(self.cors_methods, "methods", ["GET", "POST"])

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================
    @staticmethod
    def _parse_json_list(raw: str, label: str, fallback: List[str]) -> List[str]:
        try:
            values = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Invalid CORS {label} JSON: {raw}, defaulting to {fallback}")
            return fallback
        if isinstance(values, list):
            return [str(value) for value in values]
        return fallback

    def ensure_directories(self) -> None:
        """
        Create all required directories.

        Creates:
        - Image upload directory
        - Parent directory of the catalogue file
        """
        self.upload_path.mkdir(parents=True, exist_ok=True)
        self.products_path.parent.mkdir(parents=True, exist_ok=True)

        logger.debug("Required directories created/verified")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance (singleton pattern).

    Returns:
        Global Settings instance
    """
    settings = Settings()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
