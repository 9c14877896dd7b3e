import sys
from pathlib import Path

import boto3
import pytest
from moto import mock_aws

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from backup_storage.base import ClientConfig
from backup_storage.local_backend import LocalStorage
from backup_storage.s3_backend import S3Storage

BUCKET = "test-bucket"
SMALL_THRESHOLD = 10


@pytest.fixture
def local_storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(ClientConfig(root=str(tmp_path / "store")))


@pytest.fixture
def s3_client():
    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket=BUCKET)
        yield client


@pytest.fixture
def s3_storage(s3_client, tmp_path: Path) -> S3Storage:
    parts_dir = tmp_path / "parts"
    parts_dir.mkdir()
    config = ClientConfig(bucket_name=BUCKET, root="backups/")
    return S3Storage(
        config,
        client=s3_client,
        split_threshold=SMALL_THRESHOLD,
        temp_dir=parts_dir,
    )


@pytest.fixture
def make_file(tmp_path: Path):
    def _make(name: str, data: bytes) -> Path:
        path = tmp_path / "src" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _make
