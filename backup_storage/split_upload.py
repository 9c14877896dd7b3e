"""Chunked upload of files larger than the split threshold.

Each part is staged as ``zip.NNN`` in the temp directory, uploaded as a
whole object under ``<dst>/zip.NNN`` and deleted before the next part is
read. Parts go up strictly one after another. Nothing is rolled back when a
later part fails; re-running the upload rewrites the same part keys as long
as the threshold is unchanged.
"""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

from utils.logging import get_logger

from .exceptions import ObjectNotFoundError, StorageIOError
from .keys import join_key

logger = get_logger(__name__)

SPLIT_THRESHOLD = 536870912
PART_PREFIX = "zip"

__all__ = ["SPLIT_THRESHOLD", "SplitUploader", "part_name", "part_count", "temp_part"]


def part_name(index: int) -> str:
    """Return the deterministic file name of part ``index`` (1-based)."""
    return f"{PART_PREFIX}.{index:03d}"


def part_count(size: int, threshold: int = SPLIT_THRESHOLD) -> int:
    """Return how many parts a file of ``size`` bytes is split into."""
    return -(-size // threshold)


@contextmanager
def temp_part(temp_dir: str | os.PathLike, index: int, data: memoryview | bytes) -> Iterator[Path]:
    """Stage ``data`` as part ``index`` and delete the file on exit.

    A failed delete after a successful upload raises :class:`StorageIOError`;
    when the body already failed, the original error wins.
    """
    path = Path(temp_dir) / part_name(index)
    try:
        with open(path, "wb") as fd:
            fd.write(data)
    except OSError as exc:
        _discard(path)
        raise StorageIOError(f"Failed to stage part {path}: {exc}", {"path": str(path)}) from exc

    try:
        yield path
    except BaseException:
        _discard(path)
        raise
    try:
        path.unlink()
    except OSError as exc:
        raise StorageIOError(
            f"Failed to remove temporary part {path}: {exc}", {"path": str(path)}
        ) from exc


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("temp_part_left_behind", path=str(path), error=str(exc))


class SplitUploader:
    """Upload a large file as sequential fixed-size parts.

    ``put_once`` uploads one local file to one destination key; the backend
    applies its own root/key normalization there.
    """

    def __init__(
        self,
        put_once: Callable[[Path, str], None],
        split_threshold: int = SPLIT_THRESHOLD,
        temp_dir: str | os.PathLike | None = None,
    ) -> None:
        if split_threshold <= 0:
            raise ValueError("split_threshold must be positive")
        self._put_once = put_once
        self.split_threshold = split_threshold
        self.temp_dir = Path(temp_dir) if temp_dir is not None else Path(tempfile.gettempdir())

    def upload(self, src: str | os.PathLike, dst: str) -> int:
        """Upload ``src`` in parts under ``dst`` and return the part count."""
        buf = bytearray(self.split_threshold)
        view = memoryview(buf)
        try:
            fd = open(src, "rb")
        except FileNotFoundError as exc:
            raise ObjectNotFoundError(f"Source file not found: {src}", {"path": str(src)}) from exc
        except OSError as exc:
            raise StorageIOError(f"Failed to open {src}: {exc}", {"path": str(src)}) from exc

        with fd:
            index = 1
            while True:
                try:
                    n = fd.readinto(buf)
                except OSError as exc:
                    raise StorageIOError(
                        f"Failed to read part {index} of {src}: {exc}", {"path": str(src)}
                    ) from exc
                if not n:
                    break
                with temp_part(self.temp_dir, index, view[:n]) as part_path:
                    key = join_key(dst, part_path.name)
                    self._put_once(part_path, key)
                    logger.debug("split_part_uploaded", part=index, key=key, size=n)
                index += 1
        return index - 1
