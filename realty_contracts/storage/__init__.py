"""Storage package: object storage for uploaded contracts."""

from realty_contracts.storage.contracts import ObjectStorage, StorageError
from realty_contracts.storage.minio_impl import MinioStorage

__all__ = ["ObjectStorage", "StorageError", "MinioStorage"]
