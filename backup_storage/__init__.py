"""Pluggable storage backends for backup runs."""

from .exceptions import (
    ConfigurationLoadError,
    EndpointResolutionError,
    ObjectNotFoundError,
    StorageError,
    StorageIOError,
)
from .base import ClientConfig, Entry, StorageClient
from .keys import cloud_key
from .local_backend import LocalStorage
from .s3_backend import S3Storage, resolve_endpoint
from .split_upload import SPLIT_THRESHOLD
from .get_backend import get_backend

__all__ = [
    "ClientConfig",
    "Entry",
    "StorageClient",
    "LocalStorage",
    "S3Storage",
    "get_backend",
    "cloud_key",
    "resolve_endpoint",
    "SPLIT_THRESHOLD",
    "StorageError",
    "ConfigurationLoadError",
    "EndpointResolutionError",
    "ObjectNotFoundError",
    "StorageIOError",
]
