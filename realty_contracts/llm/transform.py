"""OpenAI adapter for generative transforms.

Sends a templated instruction to the Chat Completions API and turns the reply
into a validated model. Transient API errors are retried here with
exponential backoff; everything else surfaces as a workflow error so the
orchestrator can decide whether to re-run the workflow.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional, TypeVar

from openai import (
    APIConnectionError,
    APITimeoutError,
    AsyncOpenAI,
    AuthenticationError,
    BadRequestError,
    InternalServerError,
    OpenAIError,
    RateLimitError,
)
from pydantic import BaseModel, TypeAdapter
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from realty_contracts.core.config import settings
from realty_contracts.errors import OutputValidationError, UpstreamServiceError
from realty_contracts.validation import validate_payload, validate_with_adapter

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")

# Errors that are safe to retry (transient)
RETRYABLE_ERRORS = (
    RateLimitError,
    APIConnectionError,
    APITimeoutError,
    InternalServerError,
)

_FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


class LLMError(UpstreamServiceError):
    """Raised when the language-model call fails."""

    pass


# Lazy client initialization
_client: Optional[AsyncOpenAI] = None


def _get_client() -> AsyncOpenAI:
    """Get or create the AsyncOpenAI client (lazy initialization)."""
    global _client
    if _client is None:
        _client = AsyncOpenAI(
            api_key=settings.OPENAI_API_KEY or None,
            timeout=settings.LLM_TIMEOUT_S,
        )
    return _client


def parse_json_text(text: str) -> Any:
    """Parse JSON from a model reply, tolerating markdown code fences."""
    match = _FENCED_JSON.search(text)
    candidate = match.group(1) if match else text
    try:
        return json.loads(candidate.strip())
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse LLM JSON: %s (raw: %.200s)", e, text)
        raise OutputValidationError(f"Invalid JSON response: {e}") from e


class GenerativeTransform:
    """Maps an instruction plus structured context to a structured result."""

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        *,
        model: Optional[str] = None,
        max_retries: Optional[int] = None,
        max_tokens: Optional[int] = None,
        retry_wait: Any = None,
    ):
        self._client = client
        self.model = model or settings.MODEL_NAME
        self.max_retries = max_retries or settings.LLM_MAX_RETRIES
        self.max_tokens = max_tokens or settings.LLM_MAX_TOKENS
        self._retry_wait = retry_wait or wait_exponential(multiplier=1, min=1, max=60)

    @property
    def client(self) -> AsyncOpenAI:
        return self._client if self._client is not None else _get_client()

    def _make_retry_decorator(self):
        """Create tenacity retry decorator with configured settings."""
        return retry(
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            stop=stop_after_attempt(self.max_retries),
            wait=self._retry_wait,
            reraise=True,
        )

    async def _create(
        self,
        messages: list[dict],
        temperature: float,
        max_tokens: int,
        json_mode: bool,
    ) -> str:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "messages": messages,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = await self.client.chat.completions.create(**kwargs)

        content = response.choices[0].message.content
        if not content:
            raise LLMError("Empty response from LLM")
        return content

    async def complete(
        self,
        prompt: str,
        *,
        system: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        """Run one completion and return the raw reply text.

        Raises:
            LLMError: On API failure, after retries for transient errors.
        """
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        retryable_call = self._make_retry_decorator()(self._create)
        try:
            return await retryable_call(
                messages, temperature, max_tokens or self.max_tokens, json_mode
            )
        except RETRYABLE_ERRORS as e:
            # Retries exhausted (reraise=True means original exception is re-raised)
            raise LLMError(f"API error after {self.max_retries} retries: {e}") from e
        except (AuthenticationError, BadRequestError) as e:
            raise LLMError(f"Non-retryable API error: {e}") from e
        except OpenAIError as e:
            raise LLMError(f"Unexpected API error: {e}") from e

    async def generate_json(
        self,
        prompt: str,
        *,
        system: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = True,
    ) -> Any:
        """Run a completion and parse the reply as JSON."""
        text = await self.complete(
            prompt,
            system=system,
            temperature=temperature,
            max_tokens=max_tokens,
            json_mode=json_mode,
        )
        return parse_json_text(text)

    async def generate(
        self,
        model_cls: type[M],
        prompt: str,
        *,
        label: str,
        system: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
    ) -> M:
        """Run a completion and validate the JSON reply against ``model_cls``.

        Raises:
            LLMError: The API call failed.
            OutputValidationError: The reply is not JSON or does not match.
        """
        data = await self.generate_json(
            prompt, system=system, temperature=temperature, max_tokens=max_tokens
        )
        return validate_payload(model_cls, data, label=label)

    async def generate_list(
        self,
        adapter: TypeAdapter[T],
        prompt: str,
        *,
        label: str,
        system: Optional[str] = None,
        temperature: float = 0.7,
    ) -> T:
        """Like generate, for replies whose top level is a JSON array."""
        data = await self.generate_json(
            prompt, system=system, temperature=temperature, json_mode=False
        )
        return validate_with_adapter(adapter, data, label=label)


__all__ = ["GenerativeTransform", "LLMError", "RETRYABLE_ERRORS", "parse_json_text"]
