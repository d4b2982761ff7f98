"""Analysis session: owns the UI-facing state and sequences the pipeline.

State transitions are plain functions of (state, event) -> state; the
``AnalysisSession`` class holds the current state and runs the async
encode -> build -> submit stages for a submission.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from skillbridge.config import LimitsConfig
from skillbridge.errors import FileReadError, SkillbridgeError
from skillbridge.models.analysis import AnalysisResult
from skillbridge.models.document import CandidateDocument
from skillbridge.models.issues import ValidationIssue
from skillbridge.models.session import Phase, SessionState
from skillbridge.parsers.document_encoder import encode
from skillbridge.pipeline.gap_analyst import ANALYSIS_FAILED, GapAnalyst
from skillbridge.pipeline.request_builder import build_request
from skillbridge.validation import clamp_role, message_for, validate_document, validate_role

logger = logging.getLogger(__name__)

INITIAL_STATE = SessionState()


def _settle(state: SessionState, issue: ValidationIssue | None) -> SessionState:
    """Apply an edit outcome: an issue clears any result, otherwise keep it."""
    if issue is not None:
        return replace(state, phase=Phase.IDLE, issue=issue, error_message=None, result=None)
    phase = Phase.SUCCESS if state.result is not None else Phase.IDLE
    return replace(state, phase=phase, issue=None, error_message=None)


def select_document(
    state: SessionState, document: CandidateDocument, limits: LimitsConfig | None = None
) -> SessionState:
    limits = limits or LimitsConfig()
    if state.is_loading:
        return state
    issue = validate_document(document, max_size_bytes=limits.max_file_size_bytes)
    if issue is not None:
        return _settle(replace(state, document=None), issue)
    return _settle(replace(state, document=document), None)


def clear_document(state: SessionState) -> SessionState:
    """Forget the selected file, as when the uploader is emptied."""
    if state.is_loading:
        return state
    return _settle(replace(state, document=None), None)


def set_role(state: SessionState, text: str, limits: LimitsConfig | None = None) -> SessionState:
    limits = limits or LimitsConfig()
    if state.is_loading:
        return state
    role = clamp_role(text, max_length=limits.max_role_length)
    issue = validate_role(role, min_length=limits.min_role_length)
    return _settle(replace(state, role=role), issue)


def submission_issue(state: SessionState, limits: LimitsConfig | None = None) -> ValidationIssue | None:
    """Re-validate everything a submission needs, regardless of prior edits."""
    limits = limits or LimitsConfig()
    if state.document is None:
        return ValidationIssue.MISSING_FILE
    if not state.role.strip():
        return ValidationIssue.MISSING_ROLE
    issue = validate_role(state.role, min_length=limits.min_role_length)
    if issue is not None:
        return issue
    return validate_document(state.document, max_size_bytes=limits.max_file_size_bytes)


def begin_submit(state: SessionState, limits: LimitsConfig | None = None) -> SessionState:
    """Move to SUBMITTING, or stay idle with the blocking issue."""
    if state.is_loading:
        return state
    issue = submission_issue(state, limits) or state.issue
    if issue is not None:
        return replace(state, phase=Phase.IDLE, issue=issue, error_message=None, result=None)
    return replace(state, phase=Phase.SUBMITTING, issue=None, error_message=None, result=None)


def succeed(state: SessionState, result: AnalysisResult) -> SessionState:
    return replace(state, phase=Phase.SUCCESS, result=result, issue=None, error_message=None)


def fail(state: SessionState, message: str) -> SessionState:
    return replace(state, phase=Phase.FAILED, result=None, issue=None, error_message=message)


def failure_message(exc: SkillbridgeError) -> str:
    """User-facing text for a pipeline failure.

    Read failures keep their own summary; everything else is reported as
    a failed analysis with the underlying cause appended.
    """
    if isinstance(exc, FileReadError) or exc.message == ANALYSIS_FAILED:
        return str(exc)
    detail = " ".join(part for part in (exc.message, exc.detail) if part)
    return f"{ANALYSIS_FAILED} Details: {detail}"


def describe_error(state: SessionState) -> str | None:
    """The one message to show: a validation issue or a pipeline failure."""
    if state.issue is not None:
        return message_for(state.issue)
    return state.error_message


class AnalysisSession:
    """Stateful wrapper around the transitions with a single-flight guard."""

    def __init__(self, analyst: GapAnalyst | None = None, limits: LimitsConfig | None = None):
        self.analyst = analyst or GapAnalyst()
        self.limits = limits or LimitsConfig()
        self.state = INITIAL_STATE
        self._in_flight = False
        self._generation = 0

    @property
    def is_busy(self) -> bool:
        return self._in_flight

    def select_document(self, document: CandidateDocument) -> SessionState:
        self.state = select_document(self.state, document, self.limits)
        return self.state

    def clear_document(self) -> SessionState:
        self.state = clear_document(self.state)
        return self.state

    def set_role(self, text: str) -> SessionState:
        self.state = set_role(self.state, text, self.limits)
        return self.state

    def reset(self) -> SessionState:
        # An in-flight submission keeps running; its outcome is dropped.
        self._generation += 1
        self.state = INITIAL_STATE
        return self.state

    async def submit(self) -> SessionState:
        """Validate, then encode, build and analyze in sequence.

        A no-op while a previous submission is still in flight.
        """
        if self._in_flight:
            logger.debug("Submission ignored: another one is in flight")
            return self.state

        self.state = begin_submit(self.state, self.limits)
        if self.state.phase is not Phase.SUBMITTING:
            return self.state

        document = self.state.document
        role = self.state.role
        generation = self._generation
        self._in_flight = True
        try:
            payload = await encode(document)
            request = build_request(payload, role)
            result = await self.analyst.submit(request)
        except SkillbridgeError as exc:
            logger.warning("Analysis failed: %s", exc)
            outcome = fail(self.state, failure_message(exc))
        except Exception as exc:
            logger.exception("Unexpected error during analysis")
            outcome = fail(self.state, f"{ANALYSIS_FAILED} Details: {exc}")
        else:
            outcome = succeed(self.state, result)
        finally:
            self._in_flight = False

        if generation == self._generation:
            self.state = outcome
        else:
            logger.debug("Dropping analysis outcome after reset")
        return self.state
