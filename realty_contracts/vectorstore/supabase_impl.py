"""Supabase (pgvector) implementation of the vector store interface.

Expects the table layout used by the common ``match_documents`` setup:
``id``, ``content``, ``metadata jsonb`` and ``embedding vector``. Metadata
filters are applied as PostgREST filters on ``metadata->>field``.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from supabase import AsyncClient

from realty_contracts.llm.embeddings import OpenAIEmbedder
from realty_contracts.vectorstore.contracts import (
    MetadataFilter,
    StoredRecord,
    VectorStore,
    VectorStoreError,
)

logger = logging.getLogger(__name__)


def _wrap_error(op: str, table: str | None, exc: Exception) -> VectorStoreError:
    return VectorStoreError(op=op, table=table, message=str(exc))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _column(f: MetadataFilter) -> str:
    # numbers compare as jsonb so ordering is numeric; everything else as text
    return f"metadata->{f.field}" if _is_number(f.value) else f"metadata->>{f.field}"


def _encode(value: Any) -> str:
    # ->> yields text, so compare against the JSON text form
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _apply_filters(builder: Any, filters: Sequence[MetadataFilter]) -> Any:
    """Fold filters into PostgREST predicates.

    Timestamps are stored and queried as UTC ISO-8601 text, which orders
    chronologically.
    """
    for f in filters:
        builder = builder.filter(_column(f), f.operator, _encode(f.value))
    return builder


def _to_record(row: Mapping[str, Any]) -> StoredRecord:
    return StoredRecord(
        id=str(row.get("id")),
        content=row.get("content"),
        metadata=row.get("metadata") or {},
    )


class SupabaseVectorStore(VectorStore):
    """Vector store backed by a Supabase table and similarity RPC."""

    def __init__(
        self,
        client: AsyncClient,
        embedder: OpenAIEmbedder,
        *,
        table_name: str,
        query_name: str,
    ):
        self._client = client
        self._embedder = embedder
        self.table_name = table_name
        self.query_name = query_name

    async def similarity_search(
        self,
        query: str,
        filters: Sequence[MetadataFilter],
        limit: int,
    ) -> list[tuple[StoredRecord, float]]:
        embedding = await self._embedder.embed(query)
        try:
            builder = self._client.rpc(
                self.query_name,
                {"query_embedding": embedding, "match_count": limit, "filter": {}},
            )
            response = await _apply_filters(builder, filters).execute()
        except Exception as exc:  # pragma: no cover - covered via wrapping
            raise _wrap_error("similarity_search", self.table_name, exc) from exc

        rows = response.data or []
        logger.debug("Similarity RPC %s returned %d rows", self.query_name, len(rows))
        return [(_to_record(row), row.get("similarity")) for row in rows]

    async def add(self, content: str, metadata: Mapping[str, Any]) -> str:
        embedding = await self._embedder.embed(content)
        try:
            response = await (
                self._client.table(self.table_name)
                .insert({"content": content, "metadata": dict(metadata), "embedding": embedding})
                .execute()
            )
        except Exception as exc:  # pragma: no cover - covered via wrapping
            raise _wrap_error("add", self.table_name, exc) from exc

        if not response.data:
            raise VectorStoreError(op="add", table=self.table_name, message="insert returned no rows")
        return str(response.data[0]["id"])

    async def find(self, filters: Sequence[MetadataFilter]) -> list[StoredRecord]:
        try:
            builder = self._client.table(self.table_name).select("id, content, metadata")
            response = await _apply_filters(builder, filters).execute()
        except Exception as exc:  # pragma: no cover - covered via wrapping
            raise _wrap_error("find", self.table_name, exc) from exc
        return [_to_record(row) for row in response.data or []]

    async def update_metadata(self, record_id: str, metadata: Mapping[str, Any]) -> None:
        try:
            await (
                self._client.table(self.table_name)
                .update({"metadata": dict(metadata)})
                .eq("id", record_id)
                .execute()
            )
        except Exception as exc:  # pragma: no cover - covered via wrapping
            raise _wrap_error("update_metadata", self.table_name, exc) from exc

    async def delete(self, record_ids: Sequence[str]) -> int:
        if not record_ids:
            return 0
        try:
            response = await (
                self._client.table(self.table_name)
                .delete()
                .in_("id", list(record_ids))
                .execute()
            )
        except Exception as exc:  # pragma: no cover - covered via wrapping
            raise _wrap_error("delete", self.table_name, exc) from exc
        return len(response.data or [])


__all__ = ["SupabaseVectorStore"]
