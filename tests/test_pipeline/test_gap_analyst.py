"""Tests for GapAnalyst: credential check, document mapping and decoding."""

import base64
import json
from unittest.mock import patch

import anthropic
import httpx
import pytest

from skillbridge.clients.llm_client import LLMResponse
from skillbridge.config import LLMConfig
from skillbridge.errors import CapabilityError, ConfigurationError, FileReadError, ResponseParseError
from skillbridge.models.analysis import AnalysisResult
from skillbridge.models.document import DOCX, PDF, EncodedPayload
from skillbridge.pipeline.gap_analyst import GapAnalyst, decode_result, document_block
from skillbridge.pipeline.request_builder import SYSTEM_PROMPT, build_request


def _request(data: bytes = b"Jane Doe, Data Analyst", media_type: str = "text/plain"):
    payload = EncodedPayload(base64.b64encode(data).decode("ascii"), media_type)
    return build_request(payload, "Data Scientist")


def _text_response(text: str) -> LLMResponse:
    return LLMResponse(text=text, input_tokens=10, output_tokens=5)


class TestDocumentBlock:
    def test_pdf_passes_through_as_base64(self):
        request = _request(b"%PDF-1.4", PDF)
        block = document_block(request)
        assert block["source"] == {
            "type": "base64",
            "media_type": PDF,
            "data": request.document_payload,
        }

    def test_text_is_decoded(self):
        block = document_block(_request(b"Jane Doe\nData Analyst"))
        assert block["source"] == {
            "type": "text",
            "media_type": "text/plain",
            "data": "Jane Doe\nData Analyst",
        }

    def test_corrupt_docx_is_read_error(self):
        with pytest.raises(FileReadError):
            document_block(_request(b"not a zip", DOCX))

    def test_bad_base64_is_read_error(self):
        request = build_request(EncodedPayload("***", "text/plain"), "Data Scientist")
        with pytest.raises(FileReadError):
            document_block(request)

    @pytest.mark.parametrize("data", [b"", b"  \n\t\n"])
    def test_empty_text_is_read_error(self, data):
        with pytest.raises(FileReadError, match="document is empty") as exc_info:
            document_block(_request(data))
        assert exc_info.value.message == "Failed to read resume file."

    def test_empty_pdf_is_read_error(self):
        with pytest.raises(FileReadError, match="document is empty"):
            document_block(_request(b"", PDF))


class TestDecodeResult:
    def test_dict(self, sample_result_json, sample_result):
        assert decode_result(sample_result_json) == sample_result

    def test_fenced_equals_unfenced(self, sample_result_json):
        raw = json.dumps(sample_result_json)
        assert decode_result(f"```json\n{raw}\n```") == decode_result(raw)

    def test_missing_certifications_fails(self, sample_result_json):
        del sample_result_json["certifications"]
        with pytest.raises(ResponseParseError, match="certifications"):
            decode_result(sample_result_json)

    def test_missing_field_in_text_fails(self, sample_result_json):
        del sample_result_json["certifications"]
        with pytest.raises(ResponseParseError):
            decode_result(json.dumps(sample_result_json))

    def test_wrong_type_fails(self, sample_result_json):
        sample_result_json["gap_summary"] = ["not", "a", "string"]
        with pytest.raises(ResponseParseError):
            decode_result(sample_result_json)

    def test_not_json_fails(self):
        with pytest.raises(ResponseParseError, match="not valid JSON"):
            decode_result("Sorry, I cannot help with that.")

    def test_array_fails(self):
        with pytest.raises(ResponseParseError, match="expected a JSON object"):
            decode_result("[1, 2]")

    def test_extra_fields_ignored(self, sample_result_json):
        sample_result_json["score"] = 7
        assert isinstance(decode_result(sample_result_json), AnalysisResult)


class TestSubmit:
    async def test_missing_key_fails_before_network(self, mock_llm_client):
        analyst = GapAnalyst(llm=mock_llm_client)
        with pytest.raises(ConfigurationError, match="ANTHROPIC_API_KEY"):
            await analyst.submit(_request())
        mock_llm_client.generate_with_document.assert_not_awaited()

    async def test_missing_key_does_not_build_client(self):
        with patch("skillbridge.pipeline.gap_analyst.LLMClient") as mock_cls:
            with pytest.raises(ConfigurationError):
                await GapAnalyst().submit(_request())
        mock_cls.assert_not_called()

    async def test_key_from_environment(self, monkeypatch, mock_llm_client, sample_result):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
        result = await GapAnalyst(llm=mock_llm_client).submit(_request())
        assert result == sample_result

    async def test_builds_client_with_key_and_timeout(self, mock_llm_client):
        with patch("skillbridge.pipeline.gap_analyst.LLMClient", return_value=mock_llm_client) as mock_cls:
            await GapAnalyst(LLMConfig(timeout=30), api_key="sk-test").submit(_request())
        mock_cls.assert_called_once_with(api_key="sk-test", timeout=30)

    async def test_structured_response(self, mock_llm_client, sample_result):
        analyst = GapAnalyst(llm=mock_llm_client, api_key="sk-test")
        assert await analyst.submit(_request()) == sample_result

    async def test_call_parameters(self, mock_llm_client):
        config = LLMConfig(model="claude-test", temperature=0.7, top_k=40, top_p=0.95, max_tokens=2048)
        request = _request()
        await GapAnalyst(config, llm=mock_llm_client, api_key="sk-test").submit(request)

        kwargs = mock_llm_client.generate_with_document.call_args.kwargs
        assert kwargs["prompt"] == request.instruction_text
        assert kwargs["system"] == SYSTEM_PROMPT
        assert kwargs["model"] == "claude-test"
        assert kwargs["temperature"] == 0.7
        assert kwargs["top_k"] == 40
        assert kwargs["top_p"] == 0.95
        assert kwargs["max_tokens"] == 2048
        assert kwargs["tool"]["input_schema"] == request.output_schema
        assert kwargs["document"]["source"]["type"] == "text"

    async def test_fenced_text_response(self, mock_llm_client, sample_result_json, sample_result):
        fenced = f"```json\n{json.dumps(sample_result_json)}\n```"
        mock_llm_client.generate_with_document.return_value = _text_response(fenced)
        analyst = GapAnalyst(llm=mock_llm_client, api_key="sk-test")
        assert await analyst.submit(_request()) == sample_result

    async def test_incomplete_response(self, mock_llm_client, sample_result_json):
        del sample_result_json["certifications"]
        mock_llm_client.generate_with_document.return_value = _text_response(
            json.dumps(sample_result_json)
        )
        with pytest.raises(ResponseParseError):
            await GapAnalyst(llm=mock_llm_client, api_key="sk-test").submit(_request())

    async def test_api_error_is_capability_error(self, mock_llm_client):
        err = anthropic.APIConnectionError(request=httpx.Request("POST", "https://api.anthropic.com"))
        mock_llm_client.generate_with_document.side_effect = err
        with pytest.raises(CapabilityError, match="Failed to analyze resume") as exc_info:
            await GapAnalyst(llm=mock_llm_client, api_key="sk-test").submit(_request())
        assert exc_info.value.__cause__ is err
        assert exc_info.value.detail
        assert mock_llm_client.generate_with_document.await_count == 1

    async def test_unreadable_document(self, mock_llm_client):
        with pytest.raises(FileReadError):
            await GapAnalyst(llm=mock_llm_client, api_key="sk-test").submit(_request(b"junk", DOCX))
        mock_llm_client.generate_with_document.assert_not_awaited()

    async def test_empty_document_is_not_sent(self, mock_llm_client):
        with pytest.raises(FileReadError, match="document is empty"):
            await GapAnalyst(llm=mock_llm_client, api_key="sk-test").submit(_request(b""))
        mock_llm_client.generate_with_document.assert_not_awaited()


class TestTokenSummary:
    def test_zeros_before_any_request(self):
        assert GapAnalyst().token_summary() == {"input": 0, "output": 0, "calls": []}

    async def test_reports_client_usage(self, mock_llm_client):
        analyst = GapAnalyst(llm=mock_llm_client, api_key="sk-test")
        await analyst.submit(_request())
        summary = analyst.token_summary()
        assert summary["input"] == 1200
        assert summary["output"] == 300
