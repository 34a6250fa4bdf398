"""
Custom exception classes for the Vite manifest bridge.

Provides structured error handling with user-friendly messages and proper
error categorization for asset pipeline failures.
"""

from __future__ import annotations

from typing import Any


class ViteManifestError(Exception):
    """Base exception for all asset pipeline errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        user_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.user_message = user_message or self._get_default_user_message()

    def _get_default_user_message(self) -> str:
        """Provide a user-friendly version of the error message."""
        return "The page assets could not be loaded."

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"


class ManifestLoadError(ViteManifestError):
    """Raised when a manifest file exists but cannot be read or parsed."""

    def __init__(self, message: str, path: str, details: dict[str, Any] | None = None):
        self.path = path
        super().__init__(
            message=f"Unable to load manifest {path}: {message}",
            details=details or {"path": path},
            user_message="The asset manifest is unreadable. Rebuild the frontend bundle.",
        )


class MissingEntryError(ViteManifestError):
    """Raised when an entry key is not present in the manifest."""

    def __init__(self, entry: str, manifest_dir: str | None = None):
        self.entry = entry
        self.manifest_dir = manifest_dir
        super().__init__(
            message=f"[Vite] Entry {entry} not found.",
            details={"entry": entry, "manifest_dir": manifest_dir},
        )

    def _get_default_user_message(self) -> str:
        return f"The asset entry '{self.entry}' is missing from the build manifest."


class UnknownAssetError(ViteManifestError):
    """Raised when enqueueing a container name that was never registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(message=f"Invalid asset name: {name}", details={"name": name})

    def _get_default_user_message(self) -> str:
        return f"No assets were registered under '{self.name}'."


class ConfigurationError(ViteManifestError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            details=details or {"config_key": config_key},
            user_message="Configuration error. Please check your settings.",
        )


def create_user_friendly_error_message(error: Exception) -> str:
    """
    Create a user-friendly error message from any exception.

    Args:
        error: The exception to convert

    Returns:
        User-friendly error message

    Example:
        >>> error = MissingEntryError("src/main.ts")
        >>> print(create_user_friendly_error_message(error))
        The asset entry 'src/main.ts' is missing from the build manifest.
    """
    if isinstance(error, ViteManifestError):
        return error.user_message

    error_type = type(error).__name__
    messages = {
        "ValueError": "Invalid asset configuration provided.",
        "KeyError": "Required asset information is missing.",
        "OSError": "An asset file could not be read.",
    }
    return messages.get(error_type, "An unexpected error occurred while loading assets.")


def log_error_details(error: Exception, context: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Create structured error details for logging.

    Args:
        error: The exception to log
        context: Additional context information

    Returns:
        Dictionary with structured error details
    """
    details = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "context": context or {},
    }

    if isinstance(error, ViteManifestError):
        details.update({"user_message": error.user_message, "error_details": error.details})

    return details
