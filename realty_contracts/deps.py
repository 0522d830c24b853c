"""Shared dependencies for the orchestrator and workers."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from realty_contracts.core.config import settings

if TYPE_CHECKING:
    from realty_contracts.llm.transform import GenerativeTransform
    from realty_contracts.pipelines.context import WorkflowServices
    from realty_contracts.storage.minio_impl import MinioStorage
    from realty_contracts.vectorstore.contracts import VectorStore

_storage: "MinioStorage | None" = None
_vector_store: "VectorStore | None" = None
_transform: "GenerativeTransform | None" = None


def get_storage() -> "MinioStorage":
    """Get or lazily initialize the storage singleton.

    Lazy initialization avoids failures at import time when MinIO is unavailable.
    """
    global _storage
    if _storage is None:
        from realty_contracts.storage.factory import build_storage

        _storage = build_storage()
    return _storage


async def get_vector_store() -> "VectorStore":
    global _vector_store
    if _vector_store is None:
        from realty_contracts.vectorstore.factory import build_vector_store

        _vector_store = await build_vector_store()
    return _vector_store


def get_transform() -> "GenerativeTransform":
    global _transform
    if _transform is None:
        from realty_contracts.llm.transform import GenerativeTransform

        _transform = GenerativeTransform()
    return _transform


async def build_services() -> "WorkflowServices":
    """Assemble the collaborators for one workflow run from the singletons."""
    from realty_contracts.pipelines.context import WorkflowServices
    from realty_contracts.retrieval import DocumentStoreAdapter, SearchHistory, SimilarityRetriever
    from realty_contracts.services.document_loader import DocumentLoader

    store = await get_vector_store()
    storage = await asyncio.to_thread(get_storage)
    return WorkflowServices(
        transform=get_transform(),
        retriever=SimilarityRetriever(store, history=SearchHistory()),
        document_store=DocumentStoreAdapter(store),
        loader=DocumentLoader(storage, settings.S3_BUCKET_UPLOADS),
        chunk_size=settings.CHUNK_SIZE,
        chunk_overlap=settings.CHUNK_OVERLAP,
    )


__all__ = ["build_services", "get_storage", "get_transform", "get_vector_store"]
