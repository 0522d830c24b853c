"""Collaborators and per-run options shared by the pipelines."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from realty_contracts.db.session import AsyncSessionLocal
from realty_contracts.errors import UpstreamTimeoutError
from realty_contracts.llm.transform import GenerativeTransform
from realty_contracts.retrieval.document_store import DocumentStoreAdapter
from realty_contracts.retrieval.similarity import SimilarityRetriever
from realty_contracts.schemas.workflow import WorkflowOptions
from realty_contracts.services.document_loader import DocumentLoader

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class WorkflowServices:
    """External collaborators a workflow run may call."""

    transform: GenerativeTransform
    retriever: SimilarityRetriever
    document_store: DocumentStoreAdapter
    loader: DocumentLoader
    session_factory: async_sessionmaker[AsyncSession] = field(default=AsyncSessionLocal)
    chunk_size: int = 1000
    chunk_overlap: int = 200


@dataclass
class PipelineContext:
    """One run's view of the services, its resolved options and a step hook."""

    services: WorkflowServices
    options: WorkflowOptions = field(default_factory=WorkflowOptions)
    on_step: Optional[Callable[[str], None]] = None

    def enter(self, step: str) -> None:
        logger.info("Entering step %s", step)
        if self.on_step is not None:
            self.on_step(step)

    async def call(self, step: str, awaitable: Awaitable[T]) -> T:
        """Await an external call, bounded by ``options.call_timeout_seconds``.

        Raises:
            UpstreamTimeoutError: The deadline passed before the call finished.
        """
        timeout = self.options.call_timeout_seconds
        if timeout is None:
            return await awaitable
        try:
            return await asyncio.wait_for(awaitable, timeout)
        except asyncio.TimeoutError as e:
            logger.warning("Step %s timed out after %ss", step, timeout)
            raise UpstreamTimeoutError(step, timeout) from e


__all__ = ["PipelineContext", "WorkflowServices"]
