"""Pytest configuration and fixtures."""

import os

# Set test configuration BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["VECTOR_STORE_BACKEND"] = "memory"
os.environ.setdefault("OPENAI_API_KEY", "test-key")

import copy
import json
from typing import Any
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker
from tenacity import wait_none

from realty_contracts.db.session import init_db, make_engine
from realty_contracts.llm.transform import GenerativeTransform
from realty_contracts.pipelines.context import PipelineContext, WorkflowServices
from realty_contracts.retrieval import DocumentStoreAdapter, SimilarityRetriever
from realty_contracts.schemas.workflow import WorkflowOptions
from realty_contracts.services.document_loader import DocumentLoader
from realty_contracts.vectorstore.memory_impl import InMemoryVectorStore

# Prompt markers used to route scripted LLM replies
GENERATION = "Generate a real estate purchase contract"
CLAUSE_EXTRACTION = "Extract and analyze clauses"
CLAUSE_COMPARISON = "Compare the following contract clauses"
METADATA_EXTRACTION = "Extract key metadata"
FEEDBACK_ANALYSIS = "Analyze the following feedback"
CONTRACT_REVIEW = "Review the following contract"
PROPERTY_EVALUATION = "Evaluate the following property"


def make_contract_input() -> dict[str, Any]:
    return {
        "propertyDetails": {
            "propertyType": "residential",
            "address": "1 Main St",
            "price": "$400,000",
        },
        "buyerInfo": {"name": "A Buyer", "email": "a@example.com"},
        "offerTerms": {
            "offerPrice": "$395,000",
            "earnestMoney": "$5,000",
            "closingDate": "2025-01-01",
            "contingencies": ["financing"],
        },
        "jurisdiction": "CA",
    }


def make_contract_output() -> dict[str, Any]:
    return {
        "title": "Residential Purchase Agreement",
        "sections": [
            {
                "title": "Purchase Price",
                "content": "Buyer agrees to pay $395,000 for the property at 1 Main St.",
                "isRequired": True,
            },
            {
                "title": "Closing",
                "content": "Closing shall occur on or before 2025-01-01.",
                "isRequired": True,
            },
        ],
        "metadata": {
            "type": "purchase_agreement",
            "jurisdiction": "CA",
            "lastUpdated": "2000-01-01T00:00:00+00:00",
            "version": "1.0",
        },
        "summary": "Purchase of 1 Main St by A Buyer.",
    }


def make_analysis(clause_types=("purchase_price", "closing_date", "contingencies"), high_risk=0) -> dict[str, Any]:
    clauses = [
        {
            "type": clause_type,
            "content": f"Clause covering {clause_type}.",
            "isRequired": True,
            "riskLevel": "high" if i < high_risk else "low",
        }
        for i, clause_type in enumerate(clause_types)
    ]
    return {
        "clauses": clauses,
        "missingRequiredClauses": [],
        "riskAssessment": {"overallRisk": "low", "riskFactors": []},
        "comparisonResults": [],
        "validationResults": [],
    }


def make_metadata(title: str = "Residential Purchase Agreement") -> dict[str, Any]:
    return {
        "title": title,
        "type": "purchase_agreement",
        "parties": [{"name": "A Buyer", "role": "buyer"}, {"name": "S Seller", "role": "seller"}],
        "propertyDetails": {"address": "1 Main St", "propertyType": "residential"},
        "dates": {"closingDate": "2025-01-01"},
        "keyTerms": ["financing contingency"],
    }


def make_review(completeness: float = 85) -> dict[str, Any]:
    return {
        "summary": "Purchase of 1 Main St by A Buyer.",
        "keyTerms": ["Purchase price $395,000", "Closing on 2025-01-01"],
        "risks": ["No inspection contingency"],
        "recommendations": ["Add an inspection contingency"],
        "completeness": completeness,
    }


def make_feedback(**overrides) -> dict[str, Any]:
    data = {
        "contractId": "c1",
        "rating": 5,
        "aspects": {"clarity": 5, "completeness": 5, "accuracy": 5, "legalCompliance": 5},
        "comments": "great",
        "suggestedImprovements": [],
        "timestamp": "2025-01-01T12:00:00+00:00",
    }
    data.update(overrides)
    return data


def make_feedback_analysis() -> dict[str, Any]:
    return {
        "improvementAreas": [{"area": "clarity", "priority": "low", "impact": "minor"}],
        "suggestions": [
            {
                "description": "Define closing costs",
                "implementation": "Add a closing costs section",
                "priority": "low",
            }
        ],
        "overallAssessment": "Well received.",
    }


def create_mock_response(content: str | None) -> Mock:
    """Create a mock OpenAI chat completion response."""
    mock_message = Mock()
    mock_message.content = content

    mock_choice = Mock()
    mock_choice.message = mock_message

    mock_response = Mock()
    mock_response.choices = [mock_choice]
    return mock_response


class Sequenced:
    """Replies handed out one per call; the last one repeats."""

    def __init__(self, *replies: Any):
        self._replies = list(replies)

    def next(self) -> Any:
        return self._replies.pop(0) if len(self._replies) > 1 else self._replies[0]


class ScriptedLLM:
    """Fake chat completions endpoint answering by prompt marker.

    A reply may be JSON-able data, raw text (``str``), an exception instance,
    or a ``Sequenced`` of those.
    """

    def __init__(self, replies: dict[str, Any] | None = None):
        self.replies: dict[str, Any] = dict(replies or {})
        self.calls: list[str] = []
        self.requests: list[dict[str, Any]] = []
        self.client = MagicMock()
        self.client.chat.completions.create = AsyncMock(side_effect=self._create)

    def count(self, marker: str) -> int:
        return self.calls.count(marker)

    async def _create(self, **kwargs):
        prompt = kwargs["messages"][-1]["content"]
        for marker, reply in self.replies.items():
            if marker not in prompt:
                continue
            self.calls.append(marker)
            self.requests.append(kwargs)
            if isinstance(reply, Sequenced):
                reply = reply.next()
            if isinstance(reply, BaseException):
                raise reply
            content = reply if isinstance(reply, str) else json.dumps(copy.deepcopy(reply))
            return create_mock_response(content)
        raise AssertionError(f"Unexpected prompt: {prompt[:80]}")


@pytest.fixture
def scripted_llm():
    """LLM answering every known prompt with a valid reply."""
    return ScriptedLLM(
        {
            GENERATION: make_contract_output(),
            CLAUSE_EXTRACTION: make_analysis(),
            CLAUSE_COMPARISON: [
                {"clauseType": "purchase_price", "differences": ["Lower deposit"], "recommendations": ["Raise deposit"]}
            ],
            METADATA_EXTRACTION: make_metadata(),
            FEEDBACK_ANALYSIS: make_feedback_analysis(),
        }
    )


@pytest.fixture
def vector_store():
    return InMemoryVectorStore()


@pytest.fixture
def mock_storage():
    """Create a mock storage client."""
    storage = MagicMock()
    storage.get_bytes = MagicMock(return_value=(b"test", {}))
    return storage


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Async SQLite database with schema for testing."""
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def make_services(vector_store, mock_storage):
    """Build WorkflowServices around a scripted LLM and in-memory stores."""

    def _make(llm: ScriptedLLM, **overrides) -> WorkflowServices:
        fields = {
            "transform": GenerativeTransform(llm.client, max_retries=1, retry_wait=wait_none()),
            "retriever": SimilarityRetriever(vector_store),
            "document_store": DocumentStoreAdapter(vector_store),
            "loader": DocumentLoader(mock_storage, "uploads"),
        }
        fields.update(overrides)
        return WorkflowServices(**fields)

    return _make


@pytest.fixture
def make_context(make_services):
    def _make(llm: ScriptedLLM, **options) -> PipelineContext:
        return PipelineContext(make_services(llm), WorkflowOptions(**options))

    return _make
