from __future__ import annotations

import os
import shutil
from datetime import datetime, timezone
from pathlib import Path

from utils.logging import get_logger

from .base import ClientConfig, Entry, StorageClient
from .exceptions import ObjectNotFoundError, StorageIOError

logger = get_logger(__name__)

READ_BLOCK_SIZE = 2048
WRITE_BLOCK_SIZE = 4096


class LocalStorage(StorageClient):
    """Storage backend that reads and writes under a local root directory."""

    def __init__(self, client_config: ClientConfig):
        self._root = Path(client_config.root)

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, key: str) -> Path:
        return self._root / key

    def read(self, key: str) -> bytes:
        path = self._path(key)
        try:
            with open(path, "rb") as fd:
                size = os.fstat(fd.fileno()).st_size
                data = bytearray(size)
                view = memoryview(data)
                offset = 0
                while offset < size:
                    n = fd.readinto(view[offset : offset + READ_BLOCK_SIZE])
                    if not n:
                        break
                    offset += n
        except FileNotFoundError as exc:
            raise ObjectNotFoundError(f"File not found: {path}", {"path": str(path)}) from exc
        except OSError as exc:
            raise StorageIOError(f"Failed to read {path}: {exc}", {"path": str(path)}) from exc
        return bytes(data[:offset])

    def write(self, src: str | os.PathLike, dst: str) -> None:
        src_path = Path(src)
        target = self._path(dst)
        try:
            rd = open(src_path, "rb")
        except FileNotFoundError as exc:
            raise ObjectNotFoundError(
                f"Source file not found: {src_path}", {"path": str(src_path)}
            ) from exc
        except OSError as exc:
            raise StorageIOError(f"Failed to open {src_path}: {exc}", {"path": str(src_path)}) from exc

        try:
            with rd:
                self._root.mkdir(parents=True, exist_ok=True)
                target.parent.mkdir(parents=True, exist_ok=True)
                _remove_path(target)
                with open(target, "wb") as fd:
                    shutil.copyfileobj(rd, fd, WRITE_BLOCK_SIZE)
        except OSError as exc:
            raise StorageIOError(f"Failed to write {target}: {exc}", {"path": str(target)}) from exc
        logger.debug("object_written", src=str(src_path), dst=str(target))

    def list(self, prefix: str = "") -> list[Entry]:
        path = self._path(prefix)
        if not path.exists():
            raise ObjectNotFoundError(f"Directory not found: {path}", {"path": str(path)})
        if not path.is_dir():
            raise ObjectNotFoundError(f"Not a directory: {path}", {"path": str(path)})
        try:
            with os.scandir(path) as it:
                return [
                    Entry(
                        name=item.name,
                        last_modified=datetime.fromtimestamp(
                            item.stat(follow_symlinks=False).st_mtime, tz=timezone.utc
                        ),
                    )
                    for item in it
                ]
        except OSError as exc:
            raise StorageIOError(f"Failed to list {path}: {exc}", {"path": str(path)}) from exc

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            _remove_path(path)
        except OSError as exc:
            raise StorageIOError(f"Failed to remove {path}: {exc}", {"path": str(path)}) from exc


def _remove_path(path: Path) -> None:
    """Delete ``path`` recursively; do nothing when it does not exist."""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


__all__ = ["LocalStorage", "READ_BLOCK_SIZE", "WRITE_BLOCK_SIZE"]
