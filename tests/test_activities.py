"""Tests for Temporal activities (run_contract_workflow, run_feedback_processing)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from conftest import make_contract_output, make_feedback, make_feedback_analysis
from realty_contracts.errors import InputValidationError
from realty_contracts.schemas.domain import ContractOutput, FeedbackAnalysis, FeedbackData, FeedbackResult
from realty_contracts.schemas.workflow import WorkflowState, WorkflowStatus
from worker.activities import run_contract_workflow, run_feedback_processing


@pytest.fixture
def services():
    return MagicMock(name="services")


class TestRunContractWorkflow:
    @pytest.mark.asyncio
    async def test_returns_serialized_state(self, services):
        state = WorkflowState(
            status=WorkflowStatus.completed,
            current_step="contract_generation",
            results={"contract": ContractOutput.model_validate(make_contract_output())},
        )
        payload = {"action": "generate", "data": {}}

        with (
            patch("worker.activities.build_services", AsyncMock(return_value=services)),
            patch("worker.activities.execute_contract_workflow", AsyncMock(return_value=state)) as execute,
        ):
            result = await run_contract_workflow(payload)

        execute.assert_awaited_once_with(payload, services=services)
        assert result["status"] == "completed"
        assert result["currentStep"] == "contract_generation"
        assert result["results"]["contract"]["sections"][0]["isRequired"] is True
        assert isinstance(result["startTime"], str)

    @pytest.mark.asyncio
    async def test_failed_state_is_returned(self, services):
        state = WorkflowState(status=WorkflowStatus.failed, error="Workflow input validation failed: action")

        with (
            patch("worker.activities.build_services", AsyncMock(return_value=services)),
            patch("worker.activities.execute_contract_workflow", AsyncMock(return_value=state)),
        ):
            result = await run_contract_workflow({"action": "nope"})

        assert result["status"] == "failed"
        assert result["error"] == "Workflow input validation failed: action"


class TestRunFeedbackProcessing:
    @pytest.mark.asyncio
    async def test_returns_feedback_with_analysis(self, services):
        feedback = make_feedback()
        result_model = FeedbackResult(
            feedback=FeedbackData.model_validate(feedback),
            analysis=FeedbackAnalysis.model_validate(make_feedback_analysis()),
        )

        with (
            patch("worker.activities.build_services", AsyncMock(return_value=services)),
            patch("worker.activities.process_feedback", AsyncMock(return_value=result_model)) as process,
        ):
            result = await run_feedback_processing(feedback)

        process.assert_awaited_once_with(services, feedback)
        assert result["feedback"]["contractId"] == "c1"
        assert result["analysis"]["overallAssessment"] == "Well received."

    @pytest.mark.asyncio
    async def test_errors_propagate(self, services):
        with (
            patch("worker.activities.build_services", AsyncMock(return_value=services)),
            patch(
                "worker.activities.process_feedback",
                AsyncMock(side_effect=InputValidationError("Feedback validation failed: rating")),
            ),
        ):
            with pytest.raises(InputValidationError, match="rating"):
                await run_feedback_processing({"contractId": "c1"})


class TestActivityDecorators:
    """Tests to verify Temporal activity decorators are applied correctly."""

    def test_run_contract_workflow_is_activity(self):
        assert hasattr(run_contract_workflow, "__temporal_activity_definition")

    def test_run_feedback_processing_is_activity(self):
        assert hasattr(run_feedback_processing, "__temporal_activity_definition")
