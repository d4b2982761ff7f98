"""Session state owned by AnalysisSession."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from skillbridge.models.analysis import AnalysisResult
from skillbridge.models.document import CandidateDocument
from skillbridge.models.issues import ValidationIssue


class Phase(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionState:
    phase: Phase = Phase.IDLE
    document: CandidateDocument | None = None
    role: str = ""
    issue: ValidationIssue | None = None
    error_message: str | None = None
    result: AnalysisResult | None = None

    @property
    def is_loading(self) -> bool:
        return self.phase is Phase.SUBMITTING

