"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from skillbridge.clients.llm_client import LLMClient, LLMResponse
from skillbridge.models.analysis import AnalysisResult
from skillbridge.models.document import PDF, PLAIN_TEXT, CandidateDocument


@pytest.fixture(autouse=True)
def _no_ambient_api_key(monkeypatch):
    """Tests never see a real credential from the developer's shell."""
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)


@pytest.fixture
def sample_resume_text() -> str:
    return """Jane Doe
jane@example.com | +1 555 0100

Experience:
- Acme Analytics (2021 - present) - Data Analyst
  - Built weekly revenue dashboards in Tableau
  - Automated SQL reporting, saving 6 hours per week

- Beta Retail (2018 - 2021) - Business Analyst
  - Excel forecasting models for inventory planning

Education:
- B.Sc. Economics, State University (2014 - 2018)

Skills:
- SQL, Excel, Tableau, basic Python
"""


@pytest.fixture
def sample_result_json() -> dict:
    return {
        "gap_summary": "Strong analytics background but little production machine learning.",
        "missing_skills": ["scikit-learn", "Statistical modeling", "A/B testing"],
        "certifications": ["Google Professional Data Engineer"],
        "learning_resources": [
            "https://www.coursera.org/learn/machine-learning",
            "Hands-On Machine Learning (book)",
        ],
    }


@pytest.fixture
def sample_result(sample_result_json) -> AnalysisResult:
    return AnalysisResult(**sample_result_json)


@pytest.fixture
def text_document() -> CandidateDocument:
    return CandidateDocument.from_bytes(b"0123456789", PLAIN_TEXT, "resume.txt")


@pytest.fixture
def resume_document(sample_resume_text) -> CandidateDocument:
    return CandidateDocument.from_bytes(sample_resume_text.encode("utf-8"), PLAIN_TEXT, "resume.txt")


@pytest.fixture
def pdf_document() -> CandidateDocument:
    return CandidateDocument.from_bytes(b"%PDF-1.4 fake pdf body", PDF, "resume.pdf")


@pytest.fixture
def mock_llm_client(sample_result_json) -> LLMClient:
    """A mock LLM client answering through the forced tool."""
    client = AsyncMock(spec=LLMClient)
    client.generate_with_document = AsyncMock(
        return_value=LLMResponse(
            text="",
            input_tokens=1200,
            output_tokens=300,
            structured=sample_result_json,
        )
    )
    client.get_token_summary.return_value = {
        "input": 1200,
        "output": 300,
        "calls": [("claude-sonnet-4-5-20250929", 1200, 300)],
    }
    return client
