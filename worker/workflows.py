"""Temporal Workflows for contract generation, ingestion, analysis and feedback.

Each workflow runs its activity exactly once: retry with recovery is applied
by the orchestrator inside the activity, not by Temporal.
"""

from temporalio import workflow
from temporalio.common import RetryPolicy

with workflow.unsafe.imports_passed_through():
    from worker.activities import run_contract_workflow, run_feedback_processing
    from worker.config import worker_settings

SINGLE_ATTEMPT = RetryPolicy(maximum_attempts=1)


@workflow.defn
class ContractWorkflow:
    """Runs a generate, process or analyze request through the orchestrator."""

    @workflow.run
    async def run(self, payload: dict) -> dict:
        """Execute the contract workflow.

        Args:
            payload: WorkflowInput dict (``action``, ``data``, ``options``).

        Returns:
            WorkflowState dict with status, currentStep, results and error.
        """
        workflow.logger.info(f"Starting contract workflow action={payload.get('action')}")

        state = await workflow.execute_activity(
            run_contract_workflow,
            payload,
            start_to_close_timeout=worker_settings.activity_timeout,
            retry_policy=SINGLE_ATTEMPT,
        )

        workflow.logger.info(
            f"Contract workflow finished status={state.get('status')} error={state.get('error')}"
        )
        return state


@workflow.defn
class FeedbackWorkflow:
    """Stores feedback on a generated contract and analyzes it."""

    @workflow.run
    async def run(self, payload: dict) -> dict:
        workflow.logger.info(f"Starting feedback workflow for contract {payload.get('contractId')}")

        return await workflow.execute_activity(
            run_feedback_processing,
            payload,
            start_to_close_timeout=worker_settings.activity_timeout,
            retry_policy=SINGLE_ATTEMPT,
        )


__all__ = ["ContractWorkflow", "FeedbackWorkflow"]
