"""Schemas for contracts, analysis, feedback, search and workflows."""

from realty_contracts.schemas.documents import DocumentChunk, DocumentHandle, StoreResult
from realty_contracts.schemas.domain import (
    AnalysisResult,
    Clause,
    ComparisonResult,
    ContractInput,
    ContractMetadata,
    ContractOutput,
    ContractReview,
    FeedbackAnalysis,
    FeedbackData,
    FeedbackResult,
    MarketData,
    ValidationResult,
)
from realty_contracts.schemas.search import (
    DateRange,
    PriceRange,
    SearchFilters,
    SearchOptions,
    SearchSuggestion,
    SimilarityMatch,
)
from realty_contracts.schemas.workflow import (
    WorkflowAction,
    WorkflowInput,
    WorkflowOptions,
    WorkflowOptionsOverride,
    WorkflowState,
    WorkflowStatus,
)

__all__ = [
    "AnalysisResult",
    "Clause",
    "ComparisonResult",
    "ContractInput",
    "ContractMetadata",
    "ContractOutput",
    "ContractReview",
    "DateRange",
    "DocumentChunk",
    "DocumentHandle",
    "FeedbackAnalysis",
    "FeedbackData",
    "FeedbackResult",
    "MarketData",
    "PriceRange",
    "SearchFilters",
    "SearchOptions",
    "SearchSuggestion",
    "SimilarityMatch",
    "StoreResult",
    "ValidationResult",
    "WorkflowAction",
    "WorkflowInput",
    "WorkflowOptions",
    "WorkflowOptionsOverride",
    "WorkflowState",
    "WorkflowStatus",
]
