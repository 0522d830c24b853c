"""Contract workflow orchestration.

Validates a workflow request, dispatches it to the matching pipeline, tracks
progress in a WorkflowState and applies the retry policy. Retries re-run the
whole workflow from the original input; there is no step-level resume.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from realty_contracts.core.config import settings
from realty_contracts.errors import InputValidationError
from realty_contracts.pipelines.analysis import analyze_contract
from realty_contracts.pipelines.context import PipelineContext, WorkflowServices
from realty_contracts.pipelines.document_processing import process_document
from realty_contracts.pipelines.generation import generate_contract
from realty_contracts.schemas.workflow import (
    AnalyzeWorkflowInput,
    GenerateWorkflowInput,
    ProcessWorkflowInput,
    WorkflowInput,
    WorkflowOptions,
    WorkflowState,
    WorkflowStatus,
)
from realty_contracts.validation import validate_workflow_input

logger = logging.getLogger(__name__)


class ContractWorkflowOrchestrator:
    """Runs one workflow request to a terminal state.

    The retry counter lives on the instance; use a fresh orchestrator per
    request (see ``execute_contract_workflow``).
    """

    def __init__(self, services: WorkflowServices, default_options: Optional[WorkflowOptions] = None):
        self.services = services
        self.default_options = default_options or WorkflowOptions.from_settings(settings)
        self.retry_count = 0
        self.state = WorkflowState()

    def _set_step(self, step: str) -> None:
        self.state.status = WorkflowStatus.processing
        self.state.current_step = step

    def _fail(self, message: str) -> WorkflowState:
        self.state.status = WorkflowStatus.failed
        self.state.error = message
        self.state.end_time = datetime.now(timezone.utc)
        return self.state

    async def execute(self, payload: Any) -> WorkflowState:
        """Run ``payload`` to completion or failure; never raises workflow errors."""
        try:
            request = validate_workflow_input(payload)
        except InputValidationError as e:
            logger.error("Rejected workflow input: %s", e)
            return self._fail(str(e))

        options = self.default_options.merged(request.options)

        while True:
            self.state.results = {}
            self.state.error = None
            self._set_step(request.action)
            try:
                results = await self._dispatch(request, options)
            except InputValidationError as e:
                logger.error("Workflow %s failed on invalid input: %s", request.action, e)
                return self._fail(str(e))
            except Exception as e:
                if self.retry_count < options.max_retries:
                    self.retry_count += 1
                    logger.warning(
                        "Retrying workflow %s (%d/%d) after error: %s",
                        request.action,
                        self.retry_count,
                        options.max_retries,
                        e,
                    )
                    continue
                logger.error("Workflow %s failed after %d retries: %s", request.action, self.retry_count, e)
                return self._fail(f"Workflow failed after {options.max_retries} attempts: {e}")

            self.state.results = results
            self.state.status = WorkflowStatus.completed
            self.state.end_time = datetime.now(timezone.utc)
            logger.info("Workflow %s completed after %d retries", request.action, self.retry_count)
            return self.state

    async def _dispatch(self, request: WorkflowInput, options: WorkflowOptions) -> dict[str, Any]:
        ctx = PipelineContext(self.services, options, on_step=self._set_step)

        if isinstance(request, GenerateWorkflowInput):
            ctx.enter("contract_generation")
            return await generate_contract(ctx, request.data.contract_input)

        if isinstance(request, ProcessWorkflowInput):
            ctx.enter("document_processing")
            return await process_document(ctx, request.data.document_file)

        if isinstance(request, AnalyzeWorkflowInput):
            ctx.enter("contract_analysis")
            params = request.data.analysis_params
            analysis = await analyze_contract(
                ctx,
                params.contract_text,
                params.jurisdiction,
                compare_with_similar=options.include_similar_contracts,
                validate_rules=options.validate_results,
            )
            return {"analysis": analysis}

        raise InputValidationError(f"Unsupported action: {request.action}")


async def execute_contract_workflow(
    payload: Any,
    *,
    services: Optional[WorkflowServices] = None,
    default_options: Optional[WorkflowOptions] = None,
) -> WorkflowState:
    """Run one workflow request with a fresh orchestrator."""
    if services is None:
        from realty_contracts.deps import build_services

        services = await build_services()
    return await ContractWorkflowOrchestrator(services, default_options).execute(payload)


__all__ = ["ContractWorkflowOrchestrator", "execute_contract_workflow"]
