"""Factory for building the configured vector store."""

from __future__ import annotations

import logging

from supabase import acreate_client

from realty_contracts.core.config import Settings, settings as default_settings
from realty_contracts.llm.embeddings import OpenAIEmbedder
from realty_contracts.vectorstore.contracts import VectorStore
from realty_contracts.vectorstore.memory_impl import InMemoryVectorStore
from realty_contracts.vectorstore.supabase_impl import SupabaseVectorStore

logger = logging.getLogger(__name__)


async def build_vector_store(cfg: Settings | None = None) -> VectorStore:
    """Build the vector store selected by ``VECTOR_STORE_BACKEND``.

    Backends:
        supabase: pgvector table plus similarity RPC (needs SUPABASE_URL/KEY)
        memory: process-local keyword store
    """
    cfg = cfg or default_settings
    backend = cfg.VECTOR_STORE_BACKEND.lower()

    if backend == "memory":
        logger.info("Using in-memory vector store")
        return InMemoryVectorStore()

    if backend == "supabase":
        if not cfg.SUPABASE_URL or not cfg.SUPABASE_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set when VECTOR_STORE_BACKEND=supabase")
        client = await acreate_client(cfg.SUPABASE_URL, cfg.SUPABASE_KEY)
        logger.info("Using Supabase vector store table=%s", cfg.VECTOR_TABLE_NAME)
        return SupabaseVectorStore(
            client,
            OpenAIEmbedder(model=cfg.EMBEDDING_MODEL),
            table_name=cfg.VECTOR_TABLE_NAME,
            query_name=cfg.VECTOR_QUERY_NAME,
        )

    raise ValueError(f"Unknown VECTOR_STORE_BACKEND: {cfg.VECTOR_STORE_BACKEND}")


__all__ = ["build_vector_store"]
