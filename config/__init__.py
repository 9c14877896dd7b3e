import os
from typing import TYPE_CHECKING

from dotenv import load_dotenv

load_dotenv()

if TYPE_CHECKING:
    from backup_storage.base import ClientConfig


def get_env(name: str, default: str | None = None, required: bool = False) -> str:
    """Return environment variable ``name`` with optional default.

    Raises a ``RuntimeError`` if the variable is required but not present.
    """
    value = os.getenv(name, default)
    if required and value is None:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def get_int(name: str, default: int = 0) -> int:
    """Return environment variable ``name`` parsed as an integer."""
    val = get_env(name, None)
    if val is None:
        return default
    try:
        return int(val)
    except (TypeError, ValueError):
        return default


LOG_LEVEL = get_env("LOG_LEVEL", "INFO")
LOG_DIR = get_env("LOG_DIR", "")
LOG_FILE = get_env("LOG_FILE", "storage.log")
DEFAULT_REGION = "ru-central1"


def split_threshold(default: int) -> int:
    """Return the split-upload threshold, overridable for test buckets."""
    value = get_int("STORAGE_SPLIT_THRESHOLD", default)
    return value if value > 0 else default


def load_client_config() -> "ClientConfig":
    """Build a ``ClientConfig`` from ``STORAGE_*`` environment variables."""
    from backup_storage.base import ClientConfig

    return ClientConfig(
        region=get_env("STORAGE_REGION", DEFAULT_REGION),
        access_key_id=get_env("STORAGE_ACCESS_KEY_ID", ""),
        access_key_secret=get_env("STORAGE_ACCESS_KEY_SECRET", ""),
        bucket_name=get_env("STORAGE_BUCKET", ""),
        root=get_env("STORAGE_ROOT", ""),
    )
