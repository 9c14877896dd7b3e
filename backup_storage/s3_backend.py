from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from utils.logging import get_logger

from .base import ClientConfig, Entry, StorageClient
from .exceptions import (
    ConfigurationLoadError,
    EndpointResolutionError,
    ObjectNotFoundError,
    StorageIOError,
)
from .keys import KEY_SEP, cloud_key
from .split_upload import SPLIT_THRESHOLD, SplitUploader

logger = get_logger(__name__)

S3_SERVICE = "s3"
_NOT_FOUND_CODES = {"NoSuchKey", "NoSuchBucket", "NotFound", "404"}


@dataclass(frozen=True)
class Endpoint:
    url: str
    partition_id: str
    signing_region: str


_ENDPOINTS: dict[tuple[str, str], Endpoint] = {
    (S3_SERVICE, "ru-central1"): Endpoint(
        url="https://storage.yandexcloud.net",
        partition_id="yc",
        signing_region="ru-central1",
    ),
}


def resolve_endpoint(service: str, region: str) -> Endpoint:
    """Return the custom endpoint for ``service`` in ``region``.

    Raises
    ------
    EndpointResolutionError
        If the region/service pair is not known.
    """

    try:
        return _ENDPOINTS[(service, region)]
    except KeyError:
        raise EndpointResolutionError(
            "unknown endpoint requested", {"service": service, "region": region}
        ) from None


def build_s3_client(client_config: ClientConfig):
    """Return a boto3 S3 client bound to the endpoint of the configured region.

    Credentials are handed to the session directly and never exported to the
    process environment.
    """

    endpoint = resolve_endpoint(S3_SERVICE, client_config.region)
    try:
        session = boto3.session.Session(
            aws_access_key_id=client_config.access_key_id or None,
            aws_secret_access_key=client_config.access_key_secret or None,
            region_name=endpoint.signing_region,
        )
        return session.client(S3_SERVICE, endpoint_url=endpoint.url)
    except (BotoCoreError, ValueError) as exc:
        raise ConfigurationLoadError(
            "failed to load cloud configuration", {"region": client_config.region}
        ) from exc


def _translate(exc: Exception, action: str, key: str) -> Exception:
    details = {"key": key, "action": action}
    if isinstance(exc, ClientError):
        code = str(exc.response.get("Error", {}).get("Code", ""))
        if code in _NOT_FOUND_CODES:
            return ObjectNotFoundError(f"Object not found: {key}", details)
        details["code"] = code
    return StorageIOError(f"Failed to {action} {key}: {exc}", details)


class S3Storage(StorageClient):
    """Storage backend for a single bucket of an S3-compatible object store."""

    def __init__(
        self,
        client_config: ClientConfig,
        client=None,
        split_threshold: int = SPLIT_THRESHOLD,
        temp_dir: str | os.PathLike | None = None,
    ):
        self.bucket = client_config.bucket_name
        self.root = client_config.root
        self.sep = KEY_SEP
        self.s3 = client if client is not None else build_s3_client(client_config)
        self._splitter = SplitUploader(self._put_once, split_threshold, temp_dir)

    @property
    def split_threshold(self) -> int:
        return self._splitter.split_threshold

    def _key(self, key: str) -> str:
        return cloud_key(self.root, key, self.sep)

    def read(self, key: str) -> bytes:
        s3_key = self._key(key)
        try:
            resp = self.s3.get_object(Bucket=self.bucket, Key=s3_key)
            body = resp["Body"]
            try:
                return body.read()
            finally:
                body.close()
        except (ClientError, BotoCoreError) as exc:
            raise _translate(exc, "read", s3_key) from exc

    def write(self, src: str | os.PathLike, dst: str) -> None:
        src_path = Path(src)
        try:
            size = src_path.stat().st_size
        except FileNotFoundError as exc:
            raise ObjectNotFoundError(
                f"Source file not found: {src_path}", {"path": str(src_path)}
            ) from exc
        except OSError as exc:
            raise StorageIOError(f"Failed to stat {src_path}: {exc}", {"path": str(src_path)}) from exc

        if size > self.split_threshold:
            parts = self._splitter.upload(src_path, dst)
            logger.debug("split_upload_done", src=str(src_path), dst=dst, parts=parts)
        else:
            self._put_once(src_path, dst)

    def _put_once(self, src: Path, dst: str) -> None:
        s3_key = self._key(dst)
        try:
            with open(src, "rb") as fd:
                size = os.fstat(fd.fileno()).st_size
                self.s3.put_object(
                    Bucket=self.bucket, Key=s3_key, Body=fd, ContentLength=size
                )
        except FileNotFoundError as exc:
            raise ObjectNotFoundError(f"Source file not found: {src}", {"path": str(src)}) from exc
        except OSError as exc:
            raise StorageIOError(f"Failed to open {src}: {exc}", {"path": str(src)}) from exc
        except (ClientError, BotoCoreError) as exc:
            raise _translate(exc, "write", s3_key) from exc
        logger.debug("object_written", src=str(src), key=s3_key, size=size)

    def list(self, prefix: str = "") -> list[Entry]:
        s3_prefix = self._key(prefix)
        entries: list[Entry] = []
        try:
            paginator = self.s3.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket, Prefix=s3_prefix):
                for obj in page.get("Contents", []):
                    name = obj["Key"].split(self.sep)[-1]
                    if name:
                        entries.append(Entry(name=name, last_modified=obj["LastModified"]))
        except (ClientError, BotoCoreError) as exc:
            raise _translate(exc, "list", s3_prefix) from exc
        return entries

    def remove(self, key: str) -> None:
        s3_key = self._key(key)
        try:
            self.s3.delete_object(Bucket=self.bucket, Key=s3_key)
        except ClientError as exc:
            # some S3-compatible stores answer a missing key with an error
            if exc.response.get("Error", {}).get("Code") == "NoSuchKey":
                return
            raise _translate(exc, "remove", s3_key) from exc
        except BotoCoreError as exc:
            raise _translate(exc, "remove", s3_key) from exc


__all__ = ["S3Storage", "Endpoint", "resolve_endpoint", "build_s3_client"]
