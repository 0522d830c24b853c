"""Vector store abstractions and implementations."""

from realty_contracts.vectorstore.contracts import (
    MetadataFilter,
    StoredRecord,
    VectorStore,
    VectorStoreError,
)
from realty_contracts.vectorstore.memory_impl import InMemoryVectorStore

__all__ = [
    "InMemoryVectorStore",
    "MetadataFilter",
    "StoredRecord",
    "VectorStore",
    "VectorStoreError",
]
