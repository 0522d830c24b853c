"""Clause extraction, comparison with stored contracts, local rule checks and
whole-contract review."""

from __future__ import annotations

import json
import logging
from typing import Callable

from pydantic import TypeAdapter

from realty_contracts.llm import prompts
from realty_contracts.pipelines.context import PipelineContext
from realty_contracts.schemas.domain import AnalysisResult, Clause, ComparisonResult, ContractReview, ValidationResult
from realty_contracts.schemas.search import SearchOptions, SimilarityMatch

logger = logging.getLogger(__name__)

REQUIRED_CLAUSE_TYPES = ("purchase_price", "closing_date", "contingencies")

comparison_results_adapter: TypeAdapter[list[ComparisonResult]] = TypeAdapter(list[ComparisonResult])


def check_required_clauses(clauses: list[Clause]) -> ValidationResult:
    present = {clause.type for clause in clauses}
    missing = [t for t in REQUIRED_CLAUSE_TYPES if t not in present]
    return ValidationResult(
        rule="required_clauses",
        passed=not missing,
        details=f"Missing required clauses: {', '.join(missing)}" if missing else "All required clauses present",
    )


def check_high_risk(clauses: list[Clause]) -> ValidationResult:
    high_risk = sum(1 for clause in clauses if clause.risk_level == "high")
    return ValidationResult(
        rule="high_risk_review",
        passed=high_risk == 0,
        details=(
            f"Found {high_risk} high-risk clauses that need review"
            if high_risk
            else "No high-risk clauses found"
        ),
    )


VALIDATION_RULES: tuple[Callable[[list[Clause]], ValidationResult], ...] = (
    check_required_clauses,
    check_high_risk,
)


def run_validation_rules(clauses: list[Clause]) -> list[ValidationResult]:
    return [rule(clauses) for rule in VALIDATION_RULES]


async def _compare_with_similar(
    ctx: PipelineContext,
    clauses: list[Clause],
    similar: list[SimilarityMatch],
) -> list[ComparisonResult]:
    prompt = prompts.CLAUSE_COMPARISON_PROMPT.format(
        current_clauses=json.dumps([c.to_payload() for c in clauses], indent=2),
        similar_contracts="\n\n".join(match.document.text for match in similar),
        format_instructions=prompts.format_instructions(ComparisonResult),
    )
    return await ctx.call(
        "clause_comparison",
        ctx.services.transform.generate_list(
            comparison_results_adapter,
            prompt,
            label="Clause comparison",
            system=prompts.CLAUSE_EXTRACTION_SYSTEM,
            temperature=0.1,
        ),
    )


async def analyze_contract(
    ctx: PipelineContext,
    text: str,
    jurisdiction: str,
    *,
    compare_with_similar: bool = False,
    validate_rules: bool = False,
) -> AnalysisResult:
    """Extract clauses from ``text`` and optionally enrich the analysis.

    Raises:
        OutputValidationError: Clause extraction or comparison output is malformed.
        LLMError, VectorStoreError, SearchError: An upstream call failed.
    """
    prompt = prompts.CLAUSE_EXTRACTION_PROMPT.format(
        text=text,
        jurisdiction=jurisdiction,
        format_instructions=prompts.format_instructions(AnalysisResult),
    )
    analysis = await ctx.call(
        "clause_extraction",
        ctx.services.transform.generate(
            AnalysisResult,
            prompt,
            label="Analysis",
            system=prompts.CLAUSE_EXTRACTION_SYSTEM,
            temperature=0.1,
        ),
    )

    if compare_with_similar:
        similar = await ctx.call(
            "similarity_search",
            ctx.services.retriever.search(text, options=SearchOptions(limit=3, min_score=0.8)),
        )
        if similar:
            comparison = await _compare_with_similar(ctx, analysis.clauses, similar)
            analysis = analysis.model_copy(update={"comparison_results": comparison})
        else:
            logger.info("No similar contracts above threshold; skipping comparison")

    if validate_rules:
        analysis = analysis.model_copy(update={"validation_results": run_validation_rules(analysis.clauses)})

    return analysis


async def review_contract(ctx: PipelineContext, text: str) -> ContractReview:
    """Summarize a complete contract with its key terms, risks and a completeness score.

    Raises:
        OutputValidationError: The review is not valid JSON or out of range.
        LLMError: The completion failed.
    """
    prompt = prompts.CONTRACT_REVIEW_PROMPT.format(
        contract=text,
        format_instructions=prompts.format_instructions(ContractReview),
    )
    return await ctx.call(
        "contract_review",
        ctx.services.transform.generate(
            ContractReview,
            prompt,
            label="Contract review",
            system=prompts.CONTRACT_REVIEW_SYSTEM,
            temperature=0.2,
        ),
    )


__all__ = [
    "REQUIRED_CLAUSE_TYPES",
    "VALIDATION_RULES",
    "analyze_contract",
    "check_high_risk",
    "check_required_clauses",
    "review_contract",
    "run_validation_rules",
]
