"""Helpers converting local paths into object storage keys."""

from __future__ import annotations

KEY_SEP = "/"
_LOCAL_SEPS = ("/", "\\")

__all__ = ["KEY_SEP", "cloud_key", "join_key"]


def cloud_key(root: str, dst: str, sep: str = KEY_SEP) -> str:
    """Return the object key for ``dst`` under ``root``.

    One trailing ``/`` or ``\\`` is stripped from ``root`` and every backslash
    in ``dst`` becomes a forward slash. ``..`` segments are kept as given.

    >>> cloud_key("a/b/", "c\\\\d.txt")
    'a/b/c/d.txt'
    """

    if root and root[-1] in _LOCAL_SEPS:
        root = root[:-1]
    dst = dst.replace("\\", sep)
    return f"{root}{sep}{dst}"


def join_key(*parts: str) -> str:
    """Join non-empty ``parts`` with the key separator, keeping each part as given.

    Separators inside a part are left for :func:`cloud_key`, so a destination
    is normalized the same way whether it is uploaded whole or in parts.
    """

    return KEY_SEP.join(p for p in parts if p)

