"""OpenAI embeddings for vector similarity search."""

from __future__ import annotations

from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from realty_contracts.core.config import settings
from realty_contracts.llm.transform import LLMError, _get_client


class OpenAIEmbedder:
    """Embeds query and document text with the configured embedding model."""

    def __init__(self, client: Optional[AsyncOpenAI] = None, model: Optional[str] = None):
        self._client = client
        self.model = model or settings.EMBEDDING_MODEL

    async def embed(self, text: str) -> list[float]:
        client = self._client if self._client is not None else _get_client()
        try:
            response = await client.embeddings.create(model=self.model, input=text)
        except OpenAIError as e:
            raise LLMError(f"Embedding request failed: {e}") from e
        return list(response.data[0].embedding)


__all__ = ["OpenAIEmbedder"]
