"""Feedback on generated contracts: persist, then analyze."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from realty_contracts.db import repository
from realty_contracts.db.session import session_scope
from realty_contracts.errors import InputValidationError
from realty_contracts.llm import prompts
from realty_contracts.pipelines.context import PipelineContext, WorkflowServices
from realty_contracts.schemas.domain import FeedbackAnalysis, FeedbackData, FeedbackResult
from realty_contracts.schemas.workflow import WorkflowOptions
from realty_contracts.validation import validate_payload

logger = logging.getLogger(__name__)


def build_feedback_prompt(feedback: FeedbackData) -> str:
    aspects = feedback.aspects
    return prompts.FEEDBACK_ANALYSIS_PROMPT.format(
        rating=feedback.rating,
        comments=feedback.comments,
        clarity=aspects.clarity,
        completeness=aspects.completeness,
        accuracy=aspects.accuracy,
        legal_compliance=aspects.legal_compliance,
        suggested_improvements=json.dumps(feedback.suggested_improvements, indent=2),
        format_instructions=prompts.format_instructions(FeedbackAnalysis),
    )


async def process_feedback(
    services: WorkflowServices,
    data: Any,
    *,
    options: Optional[WorkflowOptions] = None,
) -> FeedbackResult:
    """Store feedback and analyze it.

    The feedback row is committed before analysis starts and stays in place
    if analysis fails.

    Raises:
        InputValidationError: ``data`` is not valid feedback.
        OutputValidationError, LLMError: Analysis failed.
    """
    feedback = validate_payload(FeedbackData, data, label="Feedback", error_cls=InputValidationError)
    ctx = PipelineContext(services, options or WorkflowOptions())

    async with session_scope(services.session_factory) as db:
        row = await ctx.call("feedback_store", repository.add_feedback(db, feedback))
    logger.info("Stored feedback id=%s contract_id=%s", row.id, feedback.contract_id)

    analysis = await ctx.call(
        "feedback_analysis",
        services.transform.generate(
            FeedbackAnalysis,
            build_feedback_prompt(feedback),
            label="Feedback analysis",
            system=prompts.FEEDBACK_ANALYSIS_SYSTEM,
            temperature=0.3,
        ),
    )
    return FeedbackResult(feedback=feedback, analysis=analysis)


__all__ = ["build_feedback_prompt", "process_feedback"]
