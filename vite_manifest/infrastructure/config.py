"""
Centralized configuration management for the Vite manifest bridge.

Provides environment-specific configuration with validation, type safety,
and comprehensive settings management using Pydantic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Literal

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings

from ..domain.schemas import ContainerSpec

DEFAULT_DEV_ORIGIN = "https://0.0.0.0"
DEFAULT_DEV_PORT = 3000


class DevServerSettings(BaseSettings):
    """
    Vite dev server defaults used when no manifest file is present.

    The origin and port are read from ``VITE_MANIFEST_ORIGIN`` (or the legacy
    ``WP_VITE_MANIFEST_ORIGIN``) and ``VITE_SERVER_PORT``.

    Example:
        >>> dev = DevServerSettings(origin="http://localhost", port=5173)
        >>> dev.composed_origin()
        'http://localhost:5173'
    """

    origin: str = Field(
        DEFAULT_DEV_ORIGIN,
        validation_alias=AliasChoices("VITE_MANIFEST_ORIGIN", "WP_VITE_MANIFEST_ORIGIN"),
        description="Dev server origin without port",
    )
    port: int = Field(
        DEFAULT_DEV_PORT,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("VITE_SERVER_PORT"),
        description="Dev server port",
    )
    base: str = Field("/", description="Vite public base path")
    plugins: list[str] = Field(default_factory=list, description="Dev server plugin names")

    model_config = {"env_prefix": "VITE_DEV_", "case_sensitive": False, "populate_by_name": True}

    @field_validator("origin")
    def strip_trailing_slash(cls, v):
        """Origins are joined with ':port' so a trailing slash is dropped."""
        return v.rstrip("/")

    def composed_origin(self) -> str:
        return f"{self.origin}:{self.port}"

    def to_descriptor(self, manifest_dir: str) -> dict[str, Any]:
        """Raw dev descriptor as handed to the dev-server filter."""
        return {
            "base": self.base,
            "origin": self.origin,
            "port": self.port,
            "plugins": list(self.plugins),
            "manifest_dir": manifest_dir,
        }


class ViteConfig(BaseSettings):
    """
    Asset pipeline settings: where the manifest lives and which containers to bind.

    Example:
        >>> vite = ViteConfig(manifest_dir="./dist", base_url="/dist")
        >>> vite.containers["main"].src
        'src/main.ts'
    """

    manifest_dir: str = Field("./dist", description="Directory containing manifest.json")
    base_url: str = Field("/dist", description="URL prefix for production assets")
    static_mount: str = Field("/dist", description="Path the FastAPI host serves the build under")
    containers: dict[str, ContainerSpec] = Field(
        default_factory=lambda: {
            "main": ContainerSpec(src="src/main.ts", handle="app", enqueue=True, frontend_only=True),
            "admin": ContainerSpec(src="src/admin.ts", handle="admin", enqueue=True, admin_only=True),
        },
        description="Asset containers keyed by logical name",
    )

    model_config = {"env_prefix": "VITE_", "case_sensitive": False}

    @field_validator("base_url")
    def validate_base_url(cls, v):
        """Asset URLs are built as '{base_url}/{file}'."""
        return v.rstrip("/")


class LoggingConfig(BaseSettings):
    """
    Logging configuration settings.

    Example:
        >>> log_config = LoggingConfig(level="DEBUG", file_path=None)
        >>> log_config.get_file_handler_config() is None
        True
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Minimum logging level"
    )
    file_path: str | None = Field(None, description="Log file path")
    max_bytes: int = Field(10 * 1024 * 1024, ge=1024, description="Max log file size in bytes")
    backup_count: int = Field(5, ge=1, description="Number of backup log files")
    structured: bool = Field(False, description="Use structured JSON logging")
    console_enabled: bool = Field(True, description="Enable console output")

    model_config = {"env_prefix": "LOG_", "case_sensitive": False}

    def get_file_handler_config(self) -> dict[str, Any] | None:
        """Get file handler configuration if file logging is enabled."""
        if not self.file_path:
            return None

        return {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": self.file_path,
            "maxBytes": self.max_bytes,
            "backupCount": self.backup_count,
            "encoding": "utf-8",
        }


class ServerConfig(BaseSettings):
    """Settings for the uvicorn launcher."""

    host: str = Field("127.0.0.1", description="Bind address")
    port: int = Field(8000, ge=1, le=65535, description="Bind port")
    reload: bool = Field(False, description="Enable auto-reload")

    model_config = {"env_prefix": "SERVER_", "case_sensitive": False}


class ApplicationConfig(BaseSettings):
    """
    Main application configuration.

    ``debug`` switches asset pipeline faults (missing entries, unknown
    containers, malformed manifests) from silent degradation to raised errors.
    """

    environment: Literal["development", "testing", "production"] = Field(
        "development", description="Application environment"
    )
    debug: bool = Field(False, description="Enable debug mode")
    version: str = Field("0.1.0", description="Application version")
    title: str = Field("Vite Manifest", description="Page title for the demo host")

    model_config = {"env_prefix": "APP_", "case_sensitive": False}

    @model_validator(mode="after")
    def debug_implies_development(self):
        """Ensure debug mode is only enabled outside production."""
        if self.debug and self.environment == "production":
            raise ValueError("Debug mode cannot be enabled in production")
        return self


class Settings:
    """
    Complete application settings container.

    Provides structured access to all configuration sections
    with lazy loading and caching.

    Example:
        >>> settings = get_settings()
        >>> settings.vite.manifest_dir
        './dist'
    """

    def __init__(self):
        self._app: ApplicationConfig | None = None
        self._vite: ViteConfig | None = None
        self._dev_server: DevServerSettings | None = None
        self._logging: LoggingConfig | None = None
        self._server: ServerConfig | None = None

    @property
    def app(self) -> ApplicationConfig:
        if self._app is None:
            self._app = ApplicationConfig()
        return self._app

    @property
    def vite(self) -> ViteConfig:
        if self._vite is None:
            self._vite = ViteConfig()
        return self._vite

    @property
    def dev_server(self) -> DevServerSettings:
        if self._dev_server is None:
            self._dev_server = DevServerSettings()
        return self._dev_server

    @property
    def logging(self) -> LoggingConfig:
        if self._logging is None:
            level = "DEBUG" if self.app.debug else "INFO"
            if self.app.environment == "production":
                level = "WARNING"
            self._logging = LoggingConfig(level=level)
        return self._logging

    @property
    def server(self) -> ServerConfig:
        if self._server is None:
            self._server = ServerConfig()
        return self._server

    def is_production(self) -> bool:
        return self.app.environment == "production"

    def get_environment_info(self) -> dict[str, Any]:
        """Get summary of current environment configuration."""
        return {
            "environment": self.app.environment,
            "version": self.app.version,
            "debug": self.app.debug,
            "manifest_dir": self.vite.manifest_dir,
            "containers": sorted(self.vite.containers),
            "logging_level": self.logging.level,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get application settings instance (cached).

    Returns:
        Settings instance with all configuration loaded
    """
    return Settings()


def override_settings(**kwargs) -> Settings:
    """
    Override specific settings for testing or development.

    Args:
        **kwargs: Settings to override as environment variable names

    Returns:
        Settings instance with overrides applied

    Example:
        >>> settings = override_settings(app_debug=True, vite_manifest_dir="/tmp/dist")
    """
    for key, value in kwargs.items():
        os.environ[key.upper()] = str(value)

    get_settings.cache_clear()
    return get_settings()


def reset_settings() -> None:
    """Reset settings cache to reload from environment."""
    get_settings.cache_clear()
