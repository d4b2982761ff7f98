"""Send an analysis request to Claude and decode the gap analysis."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any

import anthropic
from pydantic import ValidationError

from skillbridge.clients.llm_client import LLMClient, LLMResponse
from skillbridge.config import API_KEY_ENV, LLMConfig, get_api_key
from skillbridge.errors import (
    CapabilityError,
    ConfigurationError,
    FileReadError,
    ResponseParseError,
)
from skillbridge.models.analysis import AnalysisRequest, AnalysisResult
from skillbridge.models.document import PDF, PLAIN_TEXT
from skillbridge.parsers.document_encoder import READ_ERROR_MESSAGE
from skillbridge.parsers.resume_parser import extract_text
from skillbridge.pipeline.request_builder import SYSTEM_PROMPT
from skillbridge.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

TOOL_NAME = "record_gap_analysis"
ANALYSIS_FAILED = "Failed to analyze resume. Please try again."
EMPTY_DOCUMENT = "document is empty"


def document_block(request: AnalysisRequest) -> dict[str, Any]:
    """Map the encoded resume onto a Messages API document block.

    PDFs go through as base64; text, DOCX and DOC are sent as plain text.
    """
    if not request.document_payload:
        raise FileReadError(READ_ERROR_MESSAGE, EMPTY_DOCUMENT)
    if request.media_type == PDF:
        return {
            "type": "document",
            "source": {
                "type": "base64",
                "media_type": PDF,
                "data": request.document_payload,
            },
        }

    try:
        data = base64.b64decode(request.document_payload, validate=True)
        text = extract_text(data, request.media_type)
    except (binascii.Error, ValueError) as exc:
        raise FileReadError(READ_ERROR_MESSAGE, str(exc)) from exc
    if not text.strip():
        raise FileReadError(READ_ERROR_MESSAGE, EMPTY_DOCUMENT)
    return {
        "type": "document",
        "source": {"type": "text", "media_type": PLAIN_TEXT, "data": text},
    }


def decode_result(payload: dict | list | str) -> AnalysisResult:
    """Validate backend output against the AnalysisResult shape.

    Accepts already-parsed JSON or raw (optionally fenced) text.

    Raises:
        ResponseParseError: not JSON, not an object, or any field missing
            or of the wrong type.
    """
    if isinstance(payload, str):
        try:
            payload = extract_json(payload)
        except ValueError as exc:
            raise ResponseParseError("The analysis response was not valid JSON.", str(exc)) from exc
    if not isinstance(payload, dict):
        raise ResponseParseError(
            "The analysis response has an unexpected shape.",
            f"expected a JSON object, got {type(payload).__name__}",
        )
    try:
        return AnalysisResult.model_validate(payload)
    except ValidationError as exc:
        raise ResponseParseError(
            "The analysis response has an unexpected shape.", str(exc)
        ) from exc


class GapAnalyst:
    """Single-attempt gap analysis against the Claude Messages API."""

    def __init__(
        self,
        config: LLMConfig | None = None,
        *,
        llm: LLMClient | None = None,
        api_key: str | None = None,
    ):
        self.config = config or LLMConfig()
        self._llm = llm
        self._api_key = api_key

    def _client(self) -> LLMClient:
        api_key = self._api_key or get_api_key()
        if not api_key:
            raise ConfigurationError(
                "The analysis service is not configured.",
                f"{API_KEY_ENV} is not set. Add it to the environment or a .env file.",
            )
        if self._llm is None:
            self._llm = LLMClient(api_key=api_key, timeout=self.config.timeout)
        return self._llm

    def token_summary(self) -> dict:
        """Token usage since the last call; zeros before any request."""
        if self._llm is None:
            return {"input": 0, "output": 0, "calls": []}
        return self._llm.get_token_summary()

    async def submit(self, request: AnalysisRequest) -> AnalysisResult:
        """Run one analysis and return the decoded result.

        Raises:
            ConfigurationError: no API key; raised before any network call.
            FileReadError: the document could not be turned into a block.
            CapabilityError: the API call failed.
            ResponseParseError: the response did not match the schema.
        """
        llm = self._client()
        block = document_block(request)
        tool = {
            "name": TOOL_NAME,
            "description": "Record the structured gap analysis for the resume.",
            "input_schema": request.output_schema,
        }

        try:
            response: LLMResponse = await llm.generate_with_document(
                document=block,
                prompt=request.instruction_text,
                system=SYSTEM_PROMPT,
                model=self.config.model,
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
                top_k=self.config.top_k,
                top_p=self.config.top_p,
                tool=tool,
            )
        except anthropic.APIError as exc:
            raise CapabilityError(ANALYSIS_FAILED, str(exc) or type(exc).__name__) from exc

        if response.structured is not None:
            result = decode_result(response.structured)
        else:
            result = decode_result(response.text)
        logger.info(
            "Gap analysis done: %d missing skills, %d certifications, %d resources",
            len(result.missing_skills),
            len(result.certifications),
            len(result.learning_resources),
        )
        return result
