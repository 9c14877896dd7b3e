from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime

from .exceptions import ConfigurationLoadError


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings shared by every backend.

    ``root`` is the base directory (local) or key prefix (remote). A trailing
    separator is kept as given and stripped only when keys are built.
    """

    region: str = "ru-central1"
    access_key_id: str = field(default="", repr=False)
    access_key_secret: str = field(default="", repr=False)
    bucket_name: str = ""
    root: str = ""

    def __post_init__(self) -> None:
        if not self.root:
            raise ConfigurationLoadError("Storage root must not be empty")


@dataclass(frozen=True)
class Entry:
    """A single listing result: final path segment and modification time."""

    name: str
    last_modified: datetime


class StorageClient(ABC):
    """Abstract interface for storage backends.

    Keys and prefixes are interpreted relative to the backend root. Failures
    are raised as :class:`~backup_storage.exceptions.StorageError` subclasses.
    """

    @abstractmethod
    def read(self, key: str) -> bytes:
        """Return the full content stored at ``key``."""

    @abstractmethod
    def write(self, src: str | os.PathLike, dst: str) -> None:
        """Copy the local file ``src`` to ``dst`` within the backend."""

    @abstractmethod
    def list(self, prefix: str = "") -> list[Entry]:
        """List entries under ``prefix`` in backend order."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key``; a missing target is not an error."""

    def close(self) -> None:
        """Release held resources. Backends without a connection do nothing."""

    def __enter__(self) -> StorageClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
