"""Ingestion of uploaded contracts: load, chunk, extract metadata, persist."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Optional

from realty_contracts.errors import InputValidationError
from realty_contracts.llm import prompts
from realty_contracts.pipelines.analysis import analyze_contract
from realty_contracts.pipelines.chunking import split_text
from realty_contracts.pipelines.context import PipelineContext
from realty_contracts.schemas.documents import DocumentHandle
from realty_contracts.schemas.domain import ContractMetadata
from realty_contracts.schemas.search import as_utc

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_AMOUNT = re.compile(r"\d[\d,]*(?:\.\d+)?")


def slugify(title: str) -> str:
    """Lowercase ``title`` and replace whitespace runs with ``-``."""
    return _WHITESPACE.sub("-", title.lower())


def parse_price(price: Optional[str]) -> Optional[float]:
    """First amount in ``price`` (e.g. ``"$400,000"``), or None if there is none."""
    match = _AMOUNT.search(price or "")
    return float(match.group().replace(",", "")) if match else None


def document_metadata(metadata: ContractMetadata, now: Optional[datetime] = None) -> dict[str, Any]:
    """Identifying metadata stored alongside the document body.

    Timestamps are UTC ISO-8601 so range filters order them correctly.
    """
    timestamp = as_utc(now or datetime.now(timezone.utc)).isoformat()
    result: dict[str, Any] = {
        "contractId": slugify(metadata.title),
        "title": metadata.title,
        "type": metadata.type,
        "propertyType": metadata.property_details.property_type,
        "createdAt": timestamp,
        "updatedAt": timestamp,
    }
    price = parse_price(metadata.property_details.price)
    if price is not None:
        result["price"] = price
    return result


async def process_document(ctx: PipelineContext, handle: DocumentHandle) -> dict[str, Any]:
    """Ingest the document behind ``handle``.

    Returns the results contributed to the workflow state: ``metadata``,
    ``chunks`` and, when ``validate_results`` is set, ``analysis``.

    Raises:
        InputValidationError: The document is empty, unsupported or unreadable.
    """
    services = ctx.services
    segments = await ctx.call("document_loading", services.loader.load(handle))
    text = "\n\n".join(segments)

    chunks = split_text(
        text,
        chunk_size=services.chunk_size,
        chunk_overlap=services.chunk_overlap,
        metadata={"source": handle.filename or handle.key},
    )
    if not chunks:
        raise InputValidationError(f"Document {handle.key} contains no text")
    logger.info("Split document key=%s into %d chunks", handle.key, len(chunks))

    # identifying details sit at the top of the contract
    prompt = prompts.METADATA_EXTRACTION_PROMPT.format(
        text=chunks[0].text,
        format_instructions=prompts.format_instructions(ContractMetadata),
    )
    metadata = await ctx.call(
        "metadata_extraction",
        services.transform.generate(
            ContractMetadata,
            prompt,
            label="Metadata",
            system=prompts.METADATA_EXTRACTION_SYSTEM,
            temperature=0.1,
        ),
    )

    await ctx.call("document_store", services.document_store.store(text, document_metadata(metadata)))

    results: dict[str, Any] = {}
    if ctx.options.validate_results:
        ctx.enter("document_validation")
        results["analysis"] = await analyze_contract(
            ctx,
            chunks[0].text,
            metadata.type or "unknown",
            validate_rules=True,
        )

    results["metadata"] = metadata
    results["chunks"] = chunks
    return results


__all__ = ["document_metadata", "parse_price", "process_document", "slugify"]
