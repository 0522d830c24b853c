"""Factory for building object storage from settings."""

from __future__ import annotations

from urllib.parse import urlparse

from minio import Minio

from realty_contracts.core.config import Settings, settings as default_settings
from realty_contracts.storage.minio_impl import MinioStorage


def _normalize_endpoint(endpoint: str) -> tuple[str, bool]:
    """Extract host:port from endpoint URL and determine if secure (https)."""
    parsed = urlparse(endpoint)
    secure = parsed.scheme == "https"
    host = parsed.netloc or parsed.path.rstrip("/")
    return host, secure


def build_storage(cfg: Settings | None = None) -> MinioStorage:
    """Build MinioStorage and make sure the uploads bucket exists."""
    cfg = cfg or default_settings
    host, secure = _normalize_endpoint(cfg.S3_ENDPOINT)
    client = Minio(host, access_key=cfg.S3_ACCESS_KEY, secret_key=cfg.S3_SECRET_KEY, secure=secure)
    storage = MinioStorage(client)
    storage.ensure_bucket(cfg.S3_BUCKET_UPLOADS)
    return storage


__all__ = ["build_storage"]
