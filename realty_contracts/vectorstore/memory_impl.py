"""In-process vector store using keyword overlap as the similarity score.

Used for local runs and tests when no Supabase project is configured. Scores
are in [0, 1] like cosine similarity, but only reflect shared tokens.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Sequence
from uuid import uuid4

from realty_contracts.vectorstore.contracts import MetadataFilter, StoredRecord, VectorStore

_TOKEN = re.compile(r"\b\w+\b")


def _tokenize(text: str) -> list[str]:
    return _TOKEN.findall(text.lower())


def keyword_score(query: str, content: str) -> float:
    """Share of query tokens found in ``content``, with a bonus for the exact phrase."""
    query_tokens = _tokenize(query)
    content_lower = content.lower()
    content_tokens = set(_tokenize(content_lower))
    if not query_tokens or not content_tokens:
        return 0.0

    matches = sum(1 for token in query_tokens if token in content_tokens)
    if " ".join(query_tokens) in content_lower:
        matches += len(query_tokens)

    return min(matches / (len(query_tokens) + 1), 1.0)


class InMemoryVectorStore(VectorStore):
    """Dict-backed store; records live as long as the instance."""

    def __init__(self) -> None:
        self._records: dict[str, StoredRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    async def similarity_search(
        self,
        query: str,
        filters: Sequence[MetadataFilter],
        limit: int,
    ) -> list[tuple[StoredRecord, float]]:
        scored = [
            (record, keyword_score(query, record.content))
            for record in self._records.values()
            if all(f.matches(record.metadata) for f in filters)
        ]
        scored.sort(key=lambda item: item[1], reverse=True)
        return scored[:limit]

    async def add(self, content: str, metadata: Mapping[str, Any]) -> str:
        record_id = str(uuid4())
        self._records[record_id] = StoredRecord(id=record_id, content=content, metadata=dict(metadata))
        return record_id

    async def find(self, filters: Sequence[MetadataFilter]) -> list[StoredRecord]:
        return [r for r in self._records.values() if all(f.matches(r.metadata) for f in filters)]

    async def update_metadata(self, record_id: str, metadata: Mapping[str, Any]) -> None:
        record = self._records.get(record_id)
        if record is not None:
            self._records[record_id] = StoredRecord(
                id=record.id, content=record.content, metadata=dict(metadata)
            )

    async def delete(self, record_ids: Sequence[str]) -> int:
        removed = 0
        for record_id in record_ids:
            if self._records.pop(record_id, None) is not None:
                removed += 1
        return removed


__all__ = ["InMemoryVectorStore", "keyword_score"]
