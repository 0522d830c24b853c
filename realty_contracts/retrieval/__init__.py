"""Similarity retrieval, search history and document persistence."""

from realty_contracts.retrieval.document_store import DocumentStoreAdapter
from realty_contracts.retrieval.history import SearchHistory
from realty_contracts.retrieval.similarity import SearchError, SimilarityRetriever, build_filters

__all__ = [
    "DocumentStoreAdapter",
    "SearchError",
    "SearchHistory",
    "SimilarityRetriever",
    "build_filters",
]
