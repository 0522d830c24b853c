"""Tests for the document store adapter over the in-memory vector store."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from realty_contracts.errors import InputValidationError
from realty_contracts.retrieval.document_store import DocumentStoreAdapter
from realty_contracts.vectorstore.contracts import MetadataFilter, StoredRecord, VectorStoreError


def by_contract(document_id):
    return [MetadataFilter("contractId", "eq", document_id)]


class TestStore:
    @pytest.mark.asyncio
    async def test_store_defaults_archived_false(self, vector_store):
        result = await DocumentStoreAdapter(vector_store).store("body", {"contractId": "purchase-1"})

        assert result.success is True
        assert result.document_id == "purchase-1"
        rows = await vector_store.find(by_contract("purchase-1"))
        assert rows[0].metadata == {"archived": False, "contractId": "purchase-1"}

    @pytest.mark.asyncio
    async def test_store_keeps_explicit_archived_flag(self, vector_store):
        await DocumentStoreAdapter(vector_store).store("body", {"contractId": "c1", "archived": True})
        rows = await vector_store.find(by_contract("c1"))
        assert rows[0].metadata["archived"] is True

    @pytest.mark.asyncio
    async def test_store_requires_contract_id(self, vector_store):
        with pytest.raises(InputValidationError, match="contractId"):
            await DocumentStoreAdapter(vector_store).store("body", {"title": "untitled"})


class TestUpdate:
    @pytest.mark.asyncio
    async def test_update_replaces_rows_and_refreshes_updated_at(self, vector_store):
        adapter = DocumentStoreAdapter(vector_store)
        await adapter.store("v1", {"contractId": "c1", "updatedAt": "2020-01-01T00:00:00+00:00"})
        now = datetime(2025, 5, 1, tzinfo=timezone.utc)

        result = await adapter.update("c1", "v2", {"title": "Updated"}, now=now)

        assert result.success is True
        rows = await vector_store.find(by_contract("c1"))
        assert [r.content for r in rows] == ["v2"]
        assert rows[0].metadata["updatedAt"] == now.isoformat()
        assert rows[0].metadata["title"] == "Updated"
        assert rows[0].metadata["archived"] is False

    @pytest.mark.asyncio
    async def test_update_writes_new_row_before_deleting_old(self):
        calls = []
        store = MagicMock()
        store.find = AsyncMock(return_value=[StoredRecord(id="old", content="v1", metadata={"contractId": "c1"})])
        store.add = AsyncMock(side_effect=lambda *a: calls.append("add") or "new")
        store.delete = AsyncMock(side_effect=lambda ids: calls.append(("delete", list(ids))) or 1)

        await DocumentStoreAdapter(store).update("c1", "v2", {})

        assert calls == ["add", ("delete", ["old"])]

    @pytest.mark.asyncio
    async def test_failed_write_keeps_previous_version(self, vector_store):
        adapter = DocumentStoreAdapter(vector_store)
        await adapter.store("v1", {"contractId": "c1"})
        vector_store.add = AsyncMock(side_effect=VectorStoreError("add", "t", "boom"))

        with pytest.raises(VectorStoreError):
            await adapter.update("c1", "v2", {})

        rows = await vector_store.find(by_contract("c1"))
        assert [r.content for r in rows] == ["v1"]


class TestArchiveAndDelete:
    @pytest.mark.asyncio
    async def test_archive_flips_flag(self, vector_store):
        adapter = DocumentStoreAdapter(vector_store)
        await adapter.store("body", {"contractId": "c1"})

        result = await adapter.archive("c1")

        assert result.success is True
        rows = await vector_store.find(by_contract("c1"))
        assert rows[0].metadata["archived"] is True
        assert rows[0].content == "body"

    @pytest.mark.asyncio
    async def test_archive_unknown_document(self, vector_store):
        result = await DocumentStoreAdapter(vector_store).archive("nope")
        assert result.success is False

    @pytest.mark.asyncio
    async def test_delete_removes_rows(self, vector_store):
        adapter = DocumentStoreAdapter(vector_store)
        await adapter.store("body", {"contractId": "c1"})
        await adapter.store("other", {"contractId": "c2"})

        result = await adapter.delete("c1")

        assert result.success is True
        assert await vector_store.find(by_contract("c1")) == []
        assert len(await vector_store.find(by_contract("c2"))) == 1
