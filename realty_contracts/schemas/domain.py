"""Domain models for real-estate contract generation, ingestion and analysis."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field

from realty_contracts.schemas.base import CamelModel

ClauseType = Literal[
    "purchase_price",
    "closing_date",
    "contingencies",
    "representations",
    "warranties",
    "termination",
    "governing_law",
    "other",
]
RiskLevel = Literal["low", "medium", "high"]
Priority = Literal["high", "medium", "low"]


# ---------------------------------------------------------------------------
# Contract generation input
# ---------------------------------------------------------------------------
class PropertyDetails(CamelModel):
    """The property being purchased."""

    property_type: str
    address: str
    price: str
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    square_footage: Optional[int] = None
    year_built: Optional[int] = None
    lot_size: Optional[str] = None
    additional_features: Optional[list[str]] = None


class BuyerInfo(CamelModel):
    """The purchasing party."""

    name: str
    email: EmailStr
    phone: Optional[str] = None
    current_address: Optional[str] = None


class OfferTerms(CamelModel):
    """Price and conditions of the offer."""

    offer_price: str
    earnest_money: str
    closing_date: str
    contingencies: list[str] = Field(min_length=1)
    additional_terms: Optional[str] = None


class ContractInput(CamelModel):
    """Everything needed to draft a purchase contract."""

    property_details: PropertyDetails
    buyer_info: BuyerInfo
    offer_terms: OfferTerms
    jurisdiction: str


# ---------------------------------------------------------------------------
# Generated contract
# ---------------------------------------------------------------------------
class ContractSection(CamelModel):
    title: str
    content: str
    is_required: bool


class ContractOutputMetadata(CamelModel):
    type: str
    jurisdiction: str
    last_updated: str  # ISO-8601, always rewritten after generation
    version: str


class ContractOutput(CamelModel):
    """A generated contract draft."""

    title: str
    sections: list[ContractSection]
    metadata: ContractOutputMetadata
    summary: str
    warnings: Optional[list[str]] = None

    def full_text(self) -> str:
        """Section bodies joined in order, as analysed after generation."""
        return "\n".join(section.content for section in self.sections)


# ---------------------------------------------------------------------------
# Metadata extracted from uploaded contracts
# ---------------------------------------------------------------------------
class ContractParty(CamelModel):
    name: str
    role: str


class MetadataPropertyDetails(CamelModel):
    address: str
    price: Optional[str] = None
    property_type: str


class ContractDates(CamelModel):
    effective_date: Optional[str] = None
    closing_date: Optional[str] = None
    expiration_date: Optional[str] = None


class ContractMetadata(CamelModel):
    """Identifying information extracted from the head of a contract."""

    title: str
    type: str
    parties: list[ContractParty]
    property_details: MetadataPropertyDetails
    dates: ContractDates
    key_terms: list[str]


# ---------------------------------------------------------------------------
# Clause analysis
# ---------------------------------------------------------------------------
class Clause(CamelModel):
    type: ClauseType
    content: str
    is_required: bool
    risk_level: RiskLevel
    suggestions: Optional[list[str]] = None


class RiskAssessment(CamelModel):
    overall_risk: RiskLevel
    risk_factors: list[str]


class ComparisonResult(CamelModel):
    clause_type: str
    differences: list[str]
    recommendations: list[str]


class ValidationResult(CamelModel):
    rule: str
    passed: bool
    details: str


class AnalysisResult(CamelModel):
    """Clause-level analysis of a contract text."""

    clauses: list[Clause]
    missing_required_clauses: list[str]
    risk_assessment: RiskAssessment
    comparison_results: list[ComparisonResult] = Field(default_factory=list)
    validation_results: list[ValidationResult] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Whole-contract review and property evaluation
# ---------------------------------------------------------------------------
class ContractReview(CamelModel):
    """Reviewer-style summary of a complete contract."""

    summary: str
    key_terms: list[str]
    risks: list[str]
    recommendations: list[str]
    completeness: float = Field(ge=0, le=100)


class MarketData(CamelModel):
    comparable_sales: str
    neighborhood_trends: str


# ---------------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------------
class FeedbackAspects(CamelModel):
    clarity: int = Field(ge=1, le=5)
    completeness: int = Field(ge=1, le=5)
    accuracy: int = Field(ge=1, le=5)
    legal_compliance: int = Field(ge=1, le=5)


class FeedbackData(CamelModel):
    """A reviewer's rating of a generated contract."""

    contract_id: str
    rating: int = Field(ge=1, le=5)
    aspects: FeedbackAspects
    comments: str
    suggested_improvements: list[str]
    timestamp: datetime


class ImprovementArea(CamelModel):
    area: str
    priority: Priority
    impact: str


class Suggestion(CamelModel):
    description: str
    implementation: str
    priority: Priority


class FeedbackAnalysis(CamelModel):
    improvement_areas: list[ImprovementArea]
    suggestions: list[Suggestion]
    overall_assessment: str


class FeedbackResult(CamelModel):
    """Stored feedback together with its analysis."""

    feedback: FeedbackData
    analysis: FeedbackAnalysis
