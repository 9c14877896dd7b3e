"""Exception hierarchy for the storage backends."""

from __future__ import annotations


class StorageError(Exception):
    """Base exception for all storage backend errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationLoadError(StorageError):
    """Raised when the client configuration or cloud session cannot be built."""
    pass


class EndpointResolutionError(StorageError):
    """Raised when no endpoint is known for a region/service pair."""
    pass


class ObjectNotFoundError(StorageError, FileNotFoundError):
    """Raised when a source file, remote object or listed directory is missing."""
    pass


class StorageIOError(StorageError, OSError):
    """Raised on read, write or transport failures that are not a missing target."""
    pass


__all__ = [
    "StorageError",
    "ConfigurationLoadError",
    "EndpointResolutionError",
    "ObjectNotFoundError",
    "StorageIOError",
]
