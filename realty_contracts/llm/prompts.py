"""Prompt templates for the generative transforms.

Templates use ``str.format`` placeholders; JSON schemas are passed in as
values so their braces never need escaping.
"""

import json
from typing import Any

from pydantic import BaseModel, TypeAdapter

NO_SIMILAR_CONTRACTS = "No similar contracts found."


def format_instructions(shape: type[BaseModel] | TypeAdapter) -> str:
    """JSON schema of the expected reply, camelCase keys."""
    if isinstance(shape, TypeAdapter):
        schema: dict[str, Any] = shape.json_schema(by_alias=True)
    else:
        schema = shape.model_json_schema(by_alias=True)
    return json.dumps(schema, indent=2)


CONTRACT_GENERATION_SYSTEM = (
    "You are a professional real estate contract generator. "
    "You draft purchase contracts in formal but clear legal language and "
    "always answer with a single JSON object."
)

CONTRACT_GENERATION_PROMPT = """Generate a real estate purchase contract from the following information.

PROPERTY DETAILS:
{property_details}

BUYER:
{buyer_info}

OFFER TERMS:
{offer_terms}

JURISDICTION:
{jurisdiction}

SIMILAR CONTRACTS FOR REFERENCE:
{similar_contracts}

The contract must include:
1. Property description
2. Purchase price and payment terms
3. Closing date and conditions
4. Contingencies
5. Representations and warranties
6. Default and remedies
7. Governing law

Mark each section that is legally required in {jurisdiction} with isRequired=true.
List anything the buyer should double-check under "warnings".

Respond with JSON matching this schema:
{format_instructions}"""


CLAUSE_EXTRACTION_SYSTEM = (
    "You are a legal contract analyzer. You extract and assess clauses and "
    "always answer with a single JSON object."
)

CLAUSE_EXTRACTION_PROMPT = """Extract and analyze clauses from the following contract text.

CONTRACT TEXT:
{text}

JURISDICTION:
{jurisdiction}

Follow these rules:
1. Identify clause type and content
2. Determine if each clause is legally required
3. Assess risk level for each clause
4. Provide improvement suggestions if needed
5. List required clause types that are missing

Leave comparisonResults and validationResults as empty arrays.

Respond with JSON matching this schema:
{format_instructions}"""


CLAUSE_COMPARISON_PROMPT = """Compare the following contract clauses with similar contracts and identify key differences.

CURRENT CLAUSES:
{current_clauses}

SIMILAR CONTRACTS:
{similar_contracts}

Provide specific differences and recommendations for each clause type.
Focus on material differences that could impact the contract's effectiveness.

Respond with a JSON array whose items match this schema:
{format_instructions}"""


METADATA_EXTRACTION_SYSTEM = (
    "You are a contract analysis expert. You only report information that is "
    "explicitly stated in the text and always answer with a single JSON object."
)

METADATA_EXTRACTION_PROMPT = """Extract key metadata from the following contract text.

CONTRACT TEXT:
{text}

Follow these rules:
1. Identify contract title, type, and parties involved
2. Extract property details including address and type
3. Find all relevant dates (effective, closing, expiration)
4. Identify key terms and conditions

Respond with JSON matching this schema:
{format_instructions}"""


FEEDBACK_ANALYSIS_SYSTEM = (
    "You are a contract feedback analyst. Your suggestions are specific and "
    "actionable, and you always answer with a single JSON object."
)

FEEDBACK_ANALYSIS_PROMPT = """Analyze the following feedback on a generated contract.

FEEDBACK:
Rating: {rating}/5
Comments: {comments}
Aspects:
- Clarity: {clarity}/5
- Completeness: {completeness}/5
- Accuracy: {accuracy}/5
- Legal Compliance: {legal_compliance}/5
Suggested improvements:
{suggested_improvements}

Provide:
1. Key improvement areas
2. Specific suggestions for enhancement
3. Priority level for each suggestion

Respond with JSON matching this schema:
{format_instructions}"""


CONTRACT_REVIEW_SYSTEM = (
    "You are a professional real estate contract reviewer. You assess whole "
    "contracts and always answer with a single JSON object."
)

CONTRACT_REVIEW_PROMPT = """Review the following contract and provide a structured assessment.

CONTRACT:
{contract}

Provide:
1. A brief summary
2. Key terms and conditions
3. Potential risks or concerns
4. Recommendations for improvement
5. A completeness score from 0 to 100

Respond with JSON matching this schema:
{format_instructions}"""


PROPERTY_EVALUATION_SYSTEM = (
    "You are a professional real estate appraiser. You justify every figure "
    "you give with the property details or market context provided."
)

PROPERTY_EVALUATION_PROMPT = """Evaluate the following property and provide a detailed analysis.

PROPERTY DETAILS:
- Address: {address}
- Property Type: {property_type}
- Square Footage: {square_footage}
- Year Built: {year_built}
- Bedrooms: {bedrooms}
- Bathrooms: {bathrooms}
- Lot Size: {lot_size}
- Additional Features: {features}

MARKET CONTEXT:
- Recent Comparable Sales: {comparable_sales}
- Neighborhood Trends: {neighborhood_trends}

Provide:
1. Estimated market value range
2. Key value drivers
3. Property condition impact
4. Market position analysis
5. Investment potential
6. Recommendations for value enhancement

Format the answer as clearly structured sections with a specific justification for each point."""
