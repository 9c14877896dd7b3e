from __future__ import annotations

from config import get_env, load_client_config, split_threshold

from .base import ClientConfig, StorageClient
from .local_backend import LocalStorage
from .s3_backend import S3Storage
from .split_upload import SPLIT_THRESHOLD


def get_backend(name: str | None = None, client_config: ClientConfig | None = None) -> StorageClient:
    """Return a storage backend instance for ``name``.

    Parameters
    ----------
    name:
        Identifier of the backend implementation. Defaults to the
        ``STORAGE_BACKEND`` environment variable, then ``"local"``.
    client_config:
        Connection settings. Loaded from ``STORAGE_*`` variables when omitted.

    Returns
    -------
    StorageClient

    Raises
    ------
    ValueError
        If ``name`` is not one of ``"local"`` or ``"s3"``.
    """

    name = (name or get_env("STORAGE_BACKEND", "local")).lower()
    if name not in {"local", "s3"}:
        raise ValueError(
            f"Unknown backend '{name}'. Supported: 'local', 's3'."
        )
    if client_config is None:
        client_config = load_client_config()
    if name == "s3":
        return S3Storage(client_config, split_threshold=split_threshold(SPLIT_THRESHOLD))
    return LocalStorage(client_config)
