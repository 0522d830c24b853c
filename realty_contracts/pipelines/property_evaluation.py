"""Appraisal-style evaluation of a property against local market data."""

from __future__ import annotations

import logging
from typing import Any, Optional

from realty_contracts.llm import prompts
from realty_contracts.pipelines.context import PipelineContext
from realty_contracts.schemas.domain import MarketData, PropertyDetails

logger = logging.getLogger(__name__)

NOT_PROVIDED = "Not provided"


def _or_unknown(value: Optional[Any]) -> str:
    return NOT_PROVIDED if value is None else str(value)


def build_evaluation_prompt(details: PropertyDetails, market: MarketData) -> str:
    return prompts.PROPERTY_EVALUATION_PROMPT.format(
        address=details.address,
        property_type=details.property_type,
        square_footage=_or_unknown(details.square_footage),
        year_built=_or_unknown(details.year_built),
        bedrooms=_or_unknown(details.bedrooms),
        bathrooms=_or_unknown(details.bathrooms),
        lot_size=_or_unknown(details.lot_size),
        features=", ".join(details.additional_features or []) or "None",
        comparable_sales=market.comparable_sales,
        neighborhood_trends=market.neighborhood_trends,
    )


async def evaluate_property(ctx: PipelineContext, details: PropertyDetails, market: MarketData) -> str:
    """Return a free-text appraisal of ``details`` in the given market.

    Raises:
        LLMError: The completion failed or came back empty.
    """
    evaluation = await ctx.call(
        "property_evaluation",
        ctx.services.transform.complete(
            build_evaluation_prompt(details, market),
            system=prompts.PROPERTY_EVALUATION_SYSTEM,
            temperature=0.3,
        ),
    )
    logger.info("Evaluated property at %s", details.address)
    return evaluation.strip()


__all__ = ["build_evaluation_prompt", "evaluate_property"]
