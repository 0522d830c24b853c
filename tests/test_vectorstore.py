"""Tests for metadata filters and the vector store backends."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from realty_contracts.core.config import Settings
from realty_contracts.vectorstore.contracts import MetadataFilter, VectorStoreError
from realty_contracts.vectorstore.factory import build_vector_store
from realty_contracts.vectorstore.memory_impl import InMemoryVectorStore, keyword_score
from realty_contracts.vectorstore.supabase_impl import SupabaseVectorStore


class TestMetadataFilter:
    def test_eq(self):
        f = MetadataFilter("archived", "eq", False)
        assert f.matches({"archived": False})
        assert not f.matches({"archived": True})
        assert not f.matches({})

    def test_gte_and_lte_on_iso_strings(self):
        meta = {"createdAt": "2025-03-01T00:00:00+00:00"}
        assert MetadataFilter("createdAt", "gte", "2025-01-01").matches(meta)
        assert not MetadataFilter("createdAt", "gte", "2025-04-01").matches(meta)
        assert MetadataFilter("createdAt", "lte", "2025-12-31").matches(meta)

    def test_range_on_missing_field_never_matches(self):
        assert not MetadataFilter("createdAt", "gte", "2025-01-01").matches({})

    def test_incomparable_types_do_not_match(self):
        assert not MetadataFilter("createdAt", "gte", "2025-01-01").matches({"createdAt": 5})

    def test_lt_is_exclusive(self):
        meta = {"createdAt": "2024-02-01T00:00:00+00:00"}
        assert not MetadataFilter("createdAt", "lt", "2024-02-01T00:00:00+00:00").matches(meta)
        assert MetadataFilter("createdAt", "lt", "2024-02-01T00:00:00.000001+00:00").matches(meta)

    def test_timestamps_compare_as_instants(self):
        # equal instant written with a different offset and fractional seconds
        meta = {"createdAt": "2024-01-31T12:00:00.500000+02:00"}
        assert MetadataFilter("createdAt", "gte", "2024-01-31T10:00:00+00:00").matches(meta)
        assert MetadataFilter("createdAt", "lte", "2024-01-31T10:00:00.500000+00:00").matches(meta)

    def test_numeric_bounds(self):
        assert MetadataFilter("price", "gte", 300000).matches({"price": 400000.0})
        assert not MetadataFilter("price", "lte", 300000).matches({"price": 400000.0})
        assert not MetadataFilter("price", "gte", 0).matches({"price": True})


class TestKeywordScore:
    def test_no_overlap_scores_zero(self):
        assert keyword_score("condo lease", "purchase agreement for a house") == 0.0

    def test_exact_phrase_scores_highest(self):
        content = "Residential purchase agreement for 1 Main St"
        assert keyword_score("residential 1 main st", content) > keyword_score("residential harbor", content)

    def test_score_is_bounded(self):
        assert 0.0 <= keyword_score("a a a", "a") <= 1.0

    def test_empty_inputs(self):
        assert keyword_score("", "text") == 0.0
        assert keyword_score("text", "") == 0.0


class TestInMemoryVectorStore:
    """Tests for the dict-backed store."""

    @pytest.mark.asyncio
    async def test_add_find_update_delete(self):
        store = InMemoryVectorStore()
        row_id = await store.add("contract body", {"contractId": "c1", "archived": False})

        rows = await store.find([MetadataFilter("contractId", "eq", "c1")])
        assert [r.id for r in rows] == [row_id]

        await store.update_metadata(row_id, {"contractId": "c1", "archived": True})
        rows = await store.find([MetadataFilter("archived", "eq", True)])
        assert rows[0].content == "contract body"

        assert await store.delete([row_id, "missing"]) == 1
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_similarity_search_filters_sorts_and_limits(self):
        store = InMemoryVectorStore()
        await store.add("residential home purchase on Main St", {"archived": False})
        await store.add("residential home", {"archived": False})
        await store.add("residential home purchase on Main St archived", {"archived": True})

        results = await store.similarity_search(
            "residential home purchase", [MetadataFilter("archived", "eq", False)], limit=1
        )
        assert len(results) == 1
        record, score = results[0]
        assert record.content == "residential home purchase on Main St"
        assert 0.0 < score <= 1.0


def make_supabase_client(rows=None, error=None):
    """Create a mock async Supabase client whose query builders chain."""
    builder = MagicMock()
    for method in ("filter", "eq", "in_", "select", "insert", "update", "delete"):
        getattr(builder, method).return_value = builder
    if error is not None:
        builder.execute = AsyncMock(side_effect=error)
    else:
        builder.execute = AsyncMock(return_value=MagicMock(data=rows or []))

    client = MagicMock()
    client.rpc.return_value = builder
    client.table.return_value = builder
    return client, builder


def make_supabase_store(client):
    embedder = MagicMock()
    embedder.embed = AsyncMock(return_value=[0.1, 0.2, 0.3])
    return SupabaseVectorStore(client, embedder, table_name="contract_embeddings", query_name="match_documents")


class TestSupabaseVectorStore:
    """Tests for the Supabase backend against a mocked client."""

    @pytest.mark.asyncio
    async def test_similarity_search_calls_rpc_and_folds_filters(self):
        client, builder = make_supabase_client(
            rows=[{"id": 7, "content": "body", "metadata": {"type": "purchase"}, "similarity": 0.91}]
        )
        store = make_supabase_store(client)

        results = await store.similarity_search(
            "query",
            [MetadataFilter("archived", "eq", False), MetadataFilter("createdAt", "gte", "2025-01-01")],
            limit=3,
        )

        client.rpc.assert_called_once_with(
            "match_documents", {"query_embedding": [0.1, 0.2, 0.3], "match_count": 3, "filter": {}}
        )
        assert builder.filter.call_args_list[0].args == ("metadata->>archived", "eq", "false")
        assert builder.filter.call_args_list[1].args == ("metadata->>createdAt", "gte", "2025-01-01")
        record, score = results[0]
        assert record.id == "7"
        assert record.metadata == {"type": "purchase"}
        assert score == 0.91

    @pytest.mark.asyncio
    async def test_numeric_filters_compare_as_jsonb(self):
        client, builder = make_supabase_client(rows=[])
        store = make_supabase_store(client)

        await store.similarity_search(
            "query",
            [MetadataFilter("price", "gte", 300000.0), MetadataFilter("createdAt", "lt", "2024-02-01T00:00:00+00:00")],
            limit=3,
        )

        assert builder.filter.call_args_list[0].args == ("metadata->price", "gte", "300000.0")
        assert builder.filter.call_args_list[1].args == ("metadata->>createdAt", "lt", "2024-02-01T00:00:00+00:00")

    @pytest.mark.asyncio
    async def test_add_inserts_embedding_and_returns_id(self):
        client, builder = make_supabase_client(rows=[{"id": 42}])
        store = make_supabase_store(client)

        row_id = await store.add("body", {"contractId": "c1"})

        assert row_id == "42"
        client.table.assert_called_with("contract_embeddings")
        builder.insert.assert_called_once_with(
            {"content": "body", "metadata": {"contractId": "c1"}, "embedding": [0.1, 0.2, 0.3]}
        )

    @pytest.mark.asyncio
    async def test_add_without_returned_rows_fails(self):
        client, _ = make_supabase_client(rows=[])
        with pytest.raises(VectorStoreError, match="insert returned no rows"):
            await make_supabase_store(client).add("body", {})

    @pytest.mark.asyncio
    async def test_update_metadata_and_delete(self):
        client, builder = make_supabase_client(rows=[{"id": 1}, {"id": 2}])
        store = make_supabase_store(client)

        await store.update_metadata("1", {"archived": True})
        builder.update.assert_called_once_with({"metadata": {"archived": True}})
        builder.eq.assert_called_with("id", "1")

        assert await store.delete(["1", "2"]) == 2
        builder.in_.assert_called_once_with("id", ["1", "2"])

    @pytest.mark.asyncio
    async def test_delete_nothing_skips_backend(self):
        client, builder = make_supabase_client()
        assert await make_supabase_store(client).delete([]) == 0
        builder.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_backend_errors_are_wrapped(self):
        client, _ = make_supabase_client(error=RuntimeError("connection reset"))
        with pytest.raises(VectorStoreError) as excinfo:
            await make_supabase_store(client).find([MetadataFilter("contractId", "eq", "c1")])

        err = excinfo.value
        assert err.op == "find"
        assert err.table == "contract_embeddings"
        assert "connection reset" in err.message


class TestFactory:
    @pytest.mark.asyncio
    async def test_memory_backend(self):
        store = await build_vector_store(Settings(_env_file=None, VECTOR_STORE_BACKEND="memory"))
        assert isinstance(store, InMemoryVectorStore)

    @pytest.mark.asyncio
    async def test_supabase_requires_credentials(self):
        cfg = Settings(_env_file=None, VECTOR_STORE_BACKEND="supabase", SUPABASE_URL=None, SUPABASE_KEY=None)
        with pytest.raises(ValueError, match="SUPABASE_URL"):
            await build_vector_store(cfg)

    @pytest.mark.asyncio
    async def test_supabase_backend(self, monkeypatch):
        client = MagicMock()
        monkeypatch.setattr(
            "realty_contracts.vectorstore.factory.acreate_client", AsyncMock(return_value=client)
        )
        cfg = Settings(
            _env_file=None,
            VECTOR_STORE_BACKEND="supabase",
            SUPABASE_URL="https://project.supabase.co",
            SUPABASE_KEY="key",
        )
        store = await build_vector_store(cfg)
        assert isinstance(store, SupabaseVectorStore)
        assert store.table_name == "contract_embeddings"

    @pytest.mark.asyncio
    async def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown VECTOR_STORE_BACKEND"):
            await build_vector_store(Settings(_env_file=None, VECTOR_STORE_BACKEND="faiss"))
