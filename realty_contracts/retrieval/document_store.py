"""Persistence of contract documents in the vector store.

Documents are addressed by the caller-supplied ``contractId`` metadata key;
one document may span several rows. Rows carry an ``archived`` flag that the
similarity retriever excludes by default.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from realty_contracts.errors import InputValidationError
from realty_contracts.schemas.documents import StoreResult
from realty_contracts.schemas.search import as_utc
from realty_contracts.vectorstore.contracts import MetadataFilter, StoredRecord, VectorStore

logger = logging.getLogger(__name__)


def _now_iso(now: Optional[datetime] = None) -> str:
    return as_utc(now or datetime.now(timezone.utc)).isoformat()


class DocumentStoreAdapter:
    def __init__(self, store: VectorStore):
        self._store = store

    async def _rows_for(self, document_id: str) -> list[StoredRecord]:
        return await self._store.find([MetadataFilter("contractId", "eq", document_id)])

    async def store(self, content: str, metadata: Mapping[str, Any]) -> StoreResult:
        """Add a document; ``archived`` defaults to False."""
        document_id = metadata.get("contractId")
        if not document_id:
            raise InputValidationError("Document metadata must include contractId")

        await self._store.add(content, {"archived": False, **metadata})
        logger.info("Stored document contract_id=%s", document_id)
        return StoreResult(success=True, document_id=str(document_id))

    async def update(
        self,
        document_id: str,
        content: str,
        metadata: Mapping[str, Any],
        *,
        now: Optional[datetime] = None,
    ) -> StoreResult:
        """Replace a document's rows with a new version.

        The new row is written before the old rows are removed, so a failed
        write leaves the previous version in place.
        """
        old_rows = await self._rows_for(document_id)
        new_metadata = {
            "archived": False,
            **metadata,
            "contractId": document_id,
            "updatedAt": _now_iso(now),
        }
        await self._store.add(content, new_metadata)
        if old_rows:
            await self._store.delete([row.id for row in old_rows])

        logger.info("Updated document contract_id=%s replaced_rows=%d", document_id, len(old_rows))
        return StoreResult(success=True, document_id=document_id)

    async def archive(self, document_id: str, *, now: Optional[datetime] = None) -> StoreResult:
        rows = await self._rows_for(document_id)
        stamp = _now_iso(now)
        for row in rows:
            await self._store.update_metadata(row.id, {**row.metadata, "archived": True, "updatedAt": stamp})

        logger.info("Archived document contract_id=%s rows=%d", document_id, len(rows))
        return StoreResult(success=bool(rows), document_id=document_id)

    async def delete(self, document_id: str) -> StoreResult:
        rows = await self._rows_for(document_id)
        removed = await self._store.delete([row.id for row in rows])

        logger.info("Deleted document contract_id=%s rows=%d", document_id, removed)
        return StoreResult(success=bool(rows), document_id=document_id)


__all__ = ["DocumentStoreAdapter"]
