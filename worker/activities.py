"""Temporal Activities for contract workflows.

- run_contract_workflow: generate / process / analyze through the orchestrator
- run_feedback_processing: store and analyze feedback on a contract
"""

from __future__ import annotations

import logging
from typing import Any

from temporalio import activity

from realty_contracts.deps import build_services
from realty_contracts.orchestration import execute_contract_workflow
from realty_contracts.pipelines.feedback import process_feedback

logger = logging.getLogger(__name__)


@activity.defn
async def run_contract_workflow(payload: dict[str, Any]) -> dict[str, Any]:
    """Run one contract workflow request to a terminal state.

    Args:
        payload: WorkflowInput in its camelCase wire form.

    Returns:
        Dict representation of the final WorkflowState. Failures are reported
        in its ``status``/``error`` fields rather than raised.
    """
    logger.info("Running contract workflow action=%s", payload.get("action"))

    state = await execute_contract_workflow(payload, services=await build_services())

    logger.info("Contract workflow finished status=%s step=%s", state.status.value, state.current_step)
    return state.model_dump(mode="json", by_alias=True)


@activity.defn
async def run_feedback_processing(payload: dict[str, Any]) -> dict[str, Any]:
    """Store feedback and return it with its analysis.

    Raises:
        InputValidationError: The payload is not valid feedback.
        OutputValidationError, LLMError: Analysis failed (feedback stays stored).
    """
    logger.info("Processing feedback for contract %s", payload.get("contractId"))

    result = await process_feedback(await build_services(), payload)

    return result.model_dump(mode="json", by_alias=True)


__all__ = ["run_contract_workflow", "run_feedback_processing"]
