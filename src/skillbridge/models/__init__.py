"""Data models for the gap analysis pipeline."""

from skillbridge.models.analysis import AnalysisRequest, AnalysisResult
from skillbridge.models.document import CandidateDocument, EncodedPayload
from skillbridge.models.issues import ValidationIssue
from skillbridge.models.session import Phase, SessionState

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "CandidateDocument",
    "EncodedPayload",
    "Phase",
    "SessionState",
    "ValidationIssue",
]
