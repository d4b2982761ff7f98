"""Models for the analysis request and the decoded result."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class AnalysisRequest:
    """Everything the backend needs for one gap analysis."""

    document_payload: str
    media_type: str
    role: str
    instruction_text: str
    output_schema: dict[str, Any]


class AnalysisResult(BaseModel):
    """Structured gap analysis.

    Strict: every field is required and no type coercion happens, so a
    malformed backend response is rejected instead of patched up.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    gap_summary: str
    missing_skills: list[str]
    certifications: list[str]
    learning_resources: list[str]
