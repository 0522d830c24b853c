"""Workflow pipelines."""

from realty_contracts.pipelines.analysis import analyze_contract, review_contract
from realty_contracts.pipelines.context import PipelineContext, WorkflowServices
from realty_contracts.pipelines.document_processing import process_document
from realty_contracts.pipelines.feedback import process_feedback
from realty_contracts.pipelines.generation import generate_contract
from realty_contracts.pipelines.property_evaluation import evaluate_property

__all__ = [
    "PipelineContext",
    "WorkflowServices",
    "analyze_contract",
    "evaluate_property",
    "generate_contract",
    "process_document",
    "process_feedback",
    "review_contract",
]
