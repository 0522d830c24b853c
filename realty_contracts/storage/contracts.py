"""Object storage interface and error type."""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable

from realty_contracts.errors import UpstreamServiceError


class StorageError(UpstreamServiceError):
    """Wraps underlying storage exceptions with operation context."""

    def __init__(self, op: str, bucket: str | None, key: str | None, message: str):
        self.op = op
        self.bucket = bucket
        self.key = key
        self.message = message
        super().__init__(self.__str__())

    def __str__(self) -> str:  # pragma: no cover - trivial string formatting
        bucket_repr = self.bucket or "<unknown>"
        key_repr = self.key or "<unknown>"
        return f"{self.op} failed for bucket={bucket_repr} key={key_repr}: {self.message}"


@runtime_checkable
class ObjectStorage(Protocol):
    """Contract for object storage implementations (synchronous SDKs)."""

    def get_bytes(self, bucket: str, key: str) -> tuple[bytes, Mapping[str, str]]:
        ...

    def ensure_bucket(self, name: str) -> None:
        ...


__all__ = ["StorageError", "ObjectStorage"]
