"""Error taxonomy shared by pipelines and the workflow orchestrator.

The orchestrator is the only place that decides what happens after a failure:
- InputValidationError: final, the workflow fails without retrying
- OutputValidationError: the model produced non-conforming data, retried
- UpstreamServiceError: LLM / vector store / document store failure, retried
"""

from __future__ import annotations


class WorkflowError(Exception):
    """Base class for errors raised inside a contract workflow."""

    pass


class InputValidationError(WorkflowError):
    """Caller-supplied data does not match the expected shape - final, no retry."""

    pass


class OutputValidationError(WorkflowError):
    """Generated data does not match the expected shape - may be retried."""

    pass


class UpstreamServiceError(WorkflowError):
    """An external service call failed - may be retried."""

    pass


class UpstreamTimeoutError(UpstreamServiceError):
    """An external service call exceeded its deadline."""

    def __init__(self, step: str, timeout_s: float):
        self.step = step
        self.timeout_s = timeout_s
        super().__init__(f"{step} timed out after {timeout_s:g}s")


__all__ = [
    "WorkflowError",
    "InputValidationError",
    "OutputValidationError",
    "UpstreamServiceError",
    "UpstreamTimeoutError",
]
