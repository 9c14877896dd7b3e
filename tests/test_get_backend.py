from pathlib import Path

import pytest

from backup_storage import StorageClient
from backup_storage.base import ClientConfig
from backup_storage.exceptions import ConfigurationLoadError, EndpointResolutionError
from backup_storage.get_backend import get_backend
from backup_storage.local_backend import LocalStorage


def test_get_backend_invalid(tmp_path: Path):
    with pytest.raises(ValueError):
        get_backend("missing", ClientConfig(root=str(tmp_path)))


def test_get_backend_local_case_insensitive(tmp_path: Path):
    backend = get_backend("LOCAL", ClientConfig(root=str(tmp_path)))
    assert isinstance(backend, LocalStorage)
    assert isinstance(backend, StorageClient)


def test_get_backend_from_environment(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "local")
    monkeypatch.setenv("STORAGE_ROOT", str(tmp_path / "env-root"))
    backend = get_backend()
    assert isinstance(backend, LocalStorage)
    assert backend.root == tmp_path / "env-root"


def test_get_backend_requires_root(monkeypatch):
    monkeypatch.delenv("STORAGE_ROOT", raising=False)
    with pytest.raises(ConfigurationLoadError):
        get_backend("local")


def test_get_backend_s3_unknown_region(monkeypatch):
    config = ClientConfig(region="us-west-2", bucket_name="b", root="r")
    with pytest.raises(EndpointResolutionError):
        get_backend("s3", config)


@pytest.mark.parametrize("kind", ["local", "s3"])
def test_callers_drive_backends_through_contract(kind, local_storage, s3_storage, make_file):
    backend = local_storage if kind == "local" else s3_storage
    src = make_file("payload.txt", b"payload")

    with backend:
        backend.write(src, "run1/payload.txt")
        assert backend.read("run1/payload.txt") == b"payload"
        assert [e.name for e in backend.list("run1")] == ["payload.txt"]
        backend.remove("run1/payload.txt")
        backend.remove("run1/payload.txt")
