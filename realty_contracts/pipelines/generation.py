"""Contract generation: similar-contract lookup, drafting and self-check."""

from __future__ import annotations

import json
import logging
from typing import Any

from realty_contracts.llm import prompts
from realty_contracts.pipelines.analysis import analyze_contract
from realty_contracts.pipelines.context import PipelineContext
from realty_contracts.schemas.domain import ContractInput, ContractOutput
from realty_contracts.schemas.search import SearchOptions, SimilarityMatch
from realty_contracts.validation import finalize_contract

logger = logging.getLogger(__name__)

SIMILAR_CONTRACT_OPTIONS = SearchOptions(limit=3, min_score=0.7)


def similarity_query(contract_input: ContractInput) -> str:
    details = contract_input.property_details
    return f"{details.property_type} {details.address}"


def format_similar_contracts(matches: list[SimilarityMatch]) -> str:
    if not matches:
        return prompts.NO_SIMILAR_CONTRACTS
    return "\n\n".join(
        f"Reference contract {m.rank} (similarity {m.score:.2f}):\n{m.document.text}"
        for m in matches
    )


def _as_json(model: Any) -> str:
    return json.dumps(model.to_payload(), indent=2)


async def generate_contract(ctx: PipelineContext, contract_input: ContractInput) -> dict[str, Any]:
    """Draft a contract for ``contract_input``.

    Returns the results contributed to the workflow state: ``contract`` and,
    when ``validate_results`` is set, ``analysis``.
    """
    similar: list[SimilarityMatch] = []
    if ctx.options.include_similar_contracts:
        similar = await ctx.call(
            "similarity_search",
            ctx.services.retriever.search(
                similarity_query(contract_input),
                options=SIMILAR_CONTRACT_OPTIONS,
            ),
        )
        logger.info("Found %d similar contracts for generation", len(similar))

    prompt = prompts.CONTRACT_GENERATION_PROMPT.format(
        property_details=_as_json(contract_input.property_details),
        buyer_info=_as_json(contract_input.buyer_info),
        offer_terms=_as_json(contract_input.offer_terms),
        jurisdiction=contract_input.jurisdiction,
        similar_contracts=format_similar_contracts(similar),
        format_instructions=prompts.format_instructions(ContractOutput),
    )
    raw = await ctx.call(
        "contract_generation",
        ctx.services.transform.generate_json(
            prompt,
            system=prompts.CONTRACT_GENERATION_SYSTEM,
            temperature=0.7,
        ),
    )
    contract = finalize_contract(raw)

    results: dict[str, Any] = {}
    if ctx.options.validate_results:
        ctx.enter("contract_validation")
        results["analysis"] = await analyze_contract(
            ctx,
            contract.full_text(),
            contract_input.jurisdiction,
            validate_rules=True,
        )

    results["contract"] = contract
    return results


__all__ = ["format_similar_contracts", "generate_contract", "similarity_query"]
