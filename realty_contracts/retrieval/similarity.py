"""Similarity retrieval over stored contracts.

Wraps a vector store with metadata filtering, a score threshold, 1-based
ranking and result validation. Successful queries are recorded in the search
history when one is configured.
"""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from realty_contracts.db.repository import Timeframe
from realty_contracts.errors import UpstreamServiceError
from realty_contracts.retrieval.history import SearchHistory
from realty_contracts.schemas.search import SearchFilters, SearchOptions, SearchSuggestion, SimilarityMatch
from realty_contracts.validation import format_validation_error
from realty_contracts.vectorstore.contracts import MetadataFilter, VectorStore

logger = logging.getLogger(__name__)


class SearchError(UpstreamServiceError):
    """Similarity search failed or returned malformed results."""

    pass


def build_filters(filters: Optional[SearchFilters] = None) -> list[MetadataFilter]:
    """Translate search filters into metadata predicates.

    Archived documents are excluded unless ``include_archived`` is set. Date
    bounds become UTC timestamps; a date-only end is an exclusive bound on the
    following midnight.
    """
    filters = filters or SearchFilters()
    result: list[MetadataFilter] = []

    if not filters.include_archived:
        result.append(MetadataFilter("archived", "eq", False))
    if filters.contract_type:
        result.append(MetadataFilter("type", "eq", filters.contract_type))
    if filters.jurisdiction:
        result.append(MetadataFilter("jurisdiction", "eq", filters.jurisdiction))
    if filters.property_type:
        result.append(MetadataFilter("propertyType", "eq", filters.property_type))
    if filters.date_range is not None:
        lower = filters.date_range.lower_bound()
        if lower is not None:
            result.append(MetadataFilter("createdAt", "gte", lower.isoformat()))
        upper = filters.date_range.upper_bound()
        if upper is not None:
            operator, limit = upper
            result.append(MetadataFilter("createdAt", operator, limit.isoformat()))
    if filters.price_range is not None:
        if filters.price_range.min is not None:
            result.append(MetadataFilter("price", "gte", filters.price_range.min))
        if filters.price_range.max is not None:
            result.append(MetadataFilter("price", "lte", filters.price_range.max))

    return result


class SimilarityRetriever:
    def __init__(self, store: VectorStore, history: Optional[SearchHistory] = None):
        self._store = store
        self._history = history

    async def search(
        self,
        query: str,
        filters: Optional[SearchFilters] = None,
        options: Optional[SearchOptions] = None,
        *,
        user_id: Optional[str] = None,
    ) -> list[SimilarityMatch]:
        """Return stored documents scoring at least ``options.min_score``, best first.

        Raises:
            SearchError: A backend row does not form a valid match.
            VectorStoreError: The backend call failed.
        """
        options = options or SearchOptions()
        candidates = await self._store.similarity_search(query, build_filters(filters), options.limit)

        kept = [
            (record, score)
            for record, score in candidates
            if score is None or score >= options.min_score
        ]
        kept.sort(key=lambda item: item[1] if item[1] is not None else 0.0, reverse=True)

        matches: list[SimilarityMatch] = []
        for rank, (record, score) in enumerate(kept, start=1):
            try:
                matches.append(
                    SimilarityMatch.model_validate(
                        {
                            "document": {"text": record.content, "metadata": record.metadata},
                            "score": score,
                            "rank": rank,
                        }
                    )
                )
            except ValidationError as e:
                raise SearchError(f"Invalid search result: {format_validation_error(e)}") from e

        logger.info("Similarity search returned %d/%d matches", len(matches), len(candidates))
        await self._track(query, user_id)
        return matches

    async def _track(self, query: str, user_id: Optional[str]) -> None:
        if self._history is None:
            return
        try:
            await self._history.track(query, user_id)
        except Exception:
            # tracking must never fail a search
            logger.warning("Failed to track search query", exc_info=True)

    async def get_search_suggestions(self, partial: str, limit: int = 5) -> list[SearchSuggestion]:
        if self._history is None:
            return []
        return await self._history.suggestions(partial, limit)

    async def get_trending_searches(self, limit: int = 5, timeframe: Timeframe = "week") -> list[SearchSuggestion]:
        if self._history is None:
            return []
        return await self._history.trending(limit, timeframe)


__all__ = ["SearchError", "SimilarityRetriever", "build_filters"]
