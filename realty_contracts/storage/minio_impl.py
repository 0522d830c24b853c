"""MinIO-backed implementation of the object storage interface."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Mapping

from minio import Minio
from minio.error import S3Error

from realty_contracts.storage.contracts import ObjectStorage, StorageError


@contextmanager
def _wrapped(op: str, bucket: str | None, key: str | None) -> Iterator[None]:
    try:
        yield
    except S3Error as exc:
        raise StorageError(op=op, bucket=bucket, key=key, message=f"{exc.code}: {exc.message}") from exc
    except Exception as exc:
        raise StorageError(op=op, bucket=bucket, key=key, message=str(exc)) from exc


class MinioStorage(ObjectStorage):
    """Reads contract uploads through the MinIO SDK."""

    def __init__(self, client: Minio):
        self._client = client

    def get_bytes(self, bucket: str, key: str) -> tuple[bytes, Mapping[str, str]]:
        with _wrapped("get", bucket, key):
            obj = self._client.get_object(bucket, key)
            try:
                return obj.read(), dict(obj.headers or {})
            finally:
                obj.close()
                obj.release_conn()

    def ensure_bucket(self, name: str) -> None:
        with _wrapped("ensure_bucket", name, None):
            if not self._client.bucket_exists(name):
                self._client.make_bucket(name)


__all__ = ["MinioStorage"]
