"""Schema validation glue.

Turns untyped data (caller payloads, LLM output, store rows) into typed models
and reports pydantic failures as workflow errors with field-level detail.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from realty_contracts.errors import InputValidationError, OutputValidationError, WorkflowError
from realty_contracts.schemas.domain import ContractOutput
from realty_contracts.schemas.workflow import WorkflowInput, workflow_input_adapter

M = TypeVar("M", bound=BaseModel)
T = TypeVar("T")


def format_validation_error(exc: ValidationError) -> str:
    """Render pydantic errors as ``field.path: message`` pairs."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def validate_payload(
    model: type[M],
    data: Any,
    *,
    label: str,
    error_cls: type[WorkflowError] = OutputValidationError,
) -> M:
    """Validate ``data`` against ``model`` or raise ``error_cls``."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise error_cls(f"{label} validation failed: {format_validation_error(e)}") from e


def validate_with_adapter(
    adapter: TypeAdapter[T],
    data: Any,
    *,
    label: str,
    error_cls: type[WorkflowError] = OutputValidationError,
) -> T:
    """Like validate_payload, for non-model shapes (lists, unions)."""
    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        raise error_cls(f"{label} validation failed: {format_validation_error(e)}") from e


def validate_workflow_input(data: Any) -> WorkflowInput:
    """Validate a caller payload against the action-tagged WorkflowInput union."""
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True)
    return validate_with_adapter(
        workflow_input_adapter,
        data,
        label="Workflow input",
        error_cls=InputValidationError,
    )


def stamp_contract(contract: ContractOutput, now: Optional[datetime] = None) -> ContractOutput:
    """Return a copy of ``contract`` with ``metadata.lastUpdated`` set to now."""
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    metadata = contract.metadata.model_copy(update={"last_updated": timestamp})
    return contract.model_copy(update={"metadata": metadata})


def finalize_contract(data: Any, now: Optional[datetime] = None) -> ContractOutput:
    """Validate generated contract data and stamp its generation time.

    Whatever ``lastUpdated`` the generator produced is discarded.
    """
    if isinstance(data, ContractOutput):
        data = data.model_dump(by_alias=True)
    contract = validate_payload(ContractOutput, data, label="Contract output")
    return stamp_contract(contract, now)


__all__ = [
    "finalize_contract",
    "format_validation_error",
    "stamp_contract",
    "validate_payload",
    "validate_with_adapter",
    "validate_workflow_input",
]
