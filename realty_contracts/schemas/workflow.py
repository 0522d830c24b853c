"""Workflow input, options and state models."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field, TypeAdapter

from realty_contracts.schemas.base import CamelModel
from realty_contracts.schemas.documents import DocumentHandle
from realty_contracts.schemas.domain import ContractInput


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkflowAction(str, enum.Enum):
    generate = "generate"
    process = "process"
    analyze = "analyze"


class WorkflowStatus(str, enum.Enum):
    pending = "pending"
    processing = "processing"
    completed = "completed"
    failed = "failed"


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------
class WorkflowOptionsOverride(CamelModel):
    """Caller-supplied options; unset fields fall back to the defaults."""

    include_similar_contracts: Optional[bool] = None
    validate_results: Optional[bool] = None
    max_retries: Optional[int] = Field(default=None, ge=0)
    call_timeout_seconds: Optional[float] = Field(default=None, gt=0)


class WorkflowOptions(CamelModel):
    """Fully resolved options for one workflow run."""

    include_similar_contracts: bool = True
    validate_results: bool = True
    max_retries: int = Field(default=3, ge=0)
    call_timeout_seconds: Optional[float] = Field(default=None, gt=0)

    @classmethod
    def from_settings(cls, settings: Any) -> "WorkflowOptions":
        return cls(
            include_similar_contracts=settings.WORKFLOW_INCLUDE_SIMILAR_CONTRACTS,
            validate_results=settings.WORKFLOW_VALIDATE_RESULTS,
            max_retries=settings.WORKFLOW_MAX_RETRIES,
            call_timeout_seconds=settings.WORKFLOW_CALL_TIMEOUT_S,
        )

    def merged(self, overrides: Optional[WorkflowOptionsOverride]) -> "WorkflowOptions":
        """Return a copy with the caller's overrides applied on top."""
        if overrides is None:
            return self.model_copy()
        return self.model_copy(update=overrides.model_dump(exclude_none=True))


# ---------------------------------------------------------------------------
# Input (tagged union keyed by ``action``)
# ---------------------------------------------------------------------------
class AnalysisParams(CamelModel):
    contract_text: str = Field(min_length=1)
    jurisdiction: str


class GenerateData(CamelModel):
    contract_input: ContractInput


class ProcessData(CamelModel):
    document_file: DocumentHandle


class AnalyzeData(CamelModel):
    analysis_params: AnalysisParams


class GenerateWorkflowInput(CamelModel):
    action: Literal["generate"]
    data: GenerateData
    options: Optional[WorkflowOptionsOverride] = None


class ProcessWorkflowInput(CamelModel):
    action: Literal["process"]
    data: ProcessData
    options: Optional[WorkflowOptionsOverride] = None


class AnalyzeWorkflowInput(CamelModel):
    action: Literal["analyze"]
    data: AnalyzeData
    options: Optional[WorkflowOptionsOverride] = None


WorkflowInput = Annotated[
    Union[GenerateWorkflowInput, ProcessWorkflowInput, AnalyzeWorkflowInput],
    Field(discriminator="action"),
]

workflow_input_adapter: TypeAdapter[WorkflowInput] = TypeAdapter(WorkflowInput)


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------
class WorkflowState(CamelModel):
    """Progress and outcome of one orchestration run."""

    status: WorkflowStatus = WorkflowStatus.pending
    current_step: str = "initialization"
    results: dict[str, Any] = Field(default_factory=dict)
    error: Optional[str] = None
    start_time: datetime = Field(default_factory=utcnow)
    end_time: Optional[datetime] = None
