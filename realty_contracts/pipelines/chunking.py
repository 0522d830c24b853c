"""Splitting contract text into overlapping chunks."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from langchain_text_splitters import RecursiveCharacterTextSplitter

from realty_contracts.schemas.documents import DocumentChunk

# Paragraph, line, then sentence boundaries
CONTRACT_SEPARATORS = ["\n\n", "\n", ". ", "! ", "? "]


def build_splitter(chunk_size: int = 1000, chunk_overlap: int = 200) -> RecursiveCharacterTextSplitter:
    return RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        separators=CONTRACT_SEPARATORS,
    )


def split_text(
    text: str,
    *,
    chunk_size: int = 1000,
    chunk_overlap: int = 200,
    metadata: Optional[Mapping[str, Any]] = None,
) -> list[DocumentChunk]:
    """Split ``text`` into chunks tagged with their position."""
    pieces = build_splitter(chunk_size, chunk_overlap).split_text(text)
    base = dict(metadata or {})
    return [
        DocumentChunk(text=piece, metadata={**base, "chunkIndex": i})
        for i, piece in enumerate(pieces)
    ]


__all__ = ["CONTRACT_SEPARATORS", "build_splitter", "split_text"]
