import pytest

from config import get_env, get_int, load_client_config, split_threshold
from backup_storage.base import ClientConfig
from backup_storage.exceptions import ConfigurationLoadError

@pytest.mark.parametrize("required", [True, False])
def test_get_env_missing(monkeypatch, required):
    var = "NON_EXISTENT_ENV"
    monkeypatch.delenv(var, raising=False)
    if required:
        with pytest.raises(RuntimeError):
            get_env(var, required=True)
    else:
        assert get_env(var, default="x") == "x"


def test_get_env_present(monkeypatch):
    var = "EXISTING_ENV"
    monkeypatch.setenv(var, "val")
    assert get_env(var, required=True) == "val"


def test_get_int_falls_back_on_garbage(monkeypatch):
    monkeypatch.setenv("COUNT", "oops")
    assert get_int("COUNT", 7) == 7


def test_split_threshold_override(monkeypatch):
    monkeypatch.setenv("STORAGE_SPLIT_THRESHOLD", "1024")
    assert split_threshold(10) == 1024
    monkeypatch.setenv("STORAGE_SPLIT_THRESHOLD", "-1")
    assert split_threshold(10) == 10


def test_load_client_config(monkeypatch):
    monkeypatch.setenv("STORAGE_ROOT", "backups/")
    monkeypatch.setenv("STORAGE_BUCKET", "bucket")
    monkeypatch.setenv("STORAGE_ACCESS_KEY_ID", "id")
    monkeypatch.setenv("STORAGE_ACCESS_KEY_SECRET", "secret")
    monkeypatch.delenv("STORAGE_REGION", raising=False)

    conf = load_client_config()

    assert conf == ClientConfig(
        region="ru-central1",
        access_key_id="id",
        access_key_secret="secret",
        bucket_name="bucket",
        root="backups/",
    )
    assert conf.root == "backups/"
    assert "secret" not in repr(conf)


def test_client_config_requires_root():
    with pytest.raises(ConfigurationLoadError):
        ClientConfig(root="")


def test_config_module_has_no_client_config_copy():
    import config

    assert not hasattr(config, "ClientConfig")
    assert load_client_config.__annotations__["return"] == "ClientConfig"
