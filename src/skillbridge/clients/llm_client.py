"""Claude API wrapper with async support."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import anthropic

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata.

    ``structured`` holds the input of a forced tool call when the model
    answered through the tool; ``text`` holds any plain text blocks.
    """

    text: str
    input_tokens: int
    output_tokens: int
    structured: dict[str, Any] | None = None


class LLMClient:
    """Async Claude API client. One attempt per call, no retries."""

    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        kwargs: dict = {}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    async def _call_api(self, **kwargs: Any) -> anthropic.types.Message:
        return await self.client.messages.create(**kwargs)

    async def generate_with_document(
        self,
        document: dict[str, Any],
        prompt: str,
        system: str = "",
        model: str = "claude-sonnet-4-5-20250929",
        temperature: float = 0.0,
        max_tokens: int = 4096,
        top_k: int | None = None,
        top_p: float | None = None,
        tool: dict[str, Any] | None = None,
    ) -> LLMResponse:
        """Send a document content block plus a text prompt.

        Args:
            document: A Messages API ``document`` content block.
            prompt: Instruction text sent after the document.
            system: Optional system prompt.
            tool: Optional tool definition; when given the model is forced
                to answer by calling it.

        Returns:
            The text and/or structured tool input with token usage.
        """
        kwargs: dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{
                "role": "user",
                "content": [document, {"type": "text", "text": prompt}],
            }],
        }
        if system:
            kwargs["system"] = system
        if top_k is not None:
            kwargs["top_k"] = top_k
        if top_p is not None:
            kwargs["top_p"] = top_p
        if tool is not None:
            kwargs["tools"] = [tool]
            kwargs["tool_choice"] = {"type": "tool", "name": tool["name"]}

        logger.debug("LLM call: model=%s, document=%s", model, document.get("source", {}).get("media_type"))
        try:
            message = await self._call_api(**kwargs)
        except Exception:
            logger.error("LLM call failed", exc_info=True)
            raise

        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))

        # First tool call and first text block win
        text: str | None = None
        structured: dict[str, Any] | None = None
        for block in message.content:
            block_type = getattr(block, "type", "text")
            if block_type == "tool_use" and structured is None:
                structured = block.input
            elif block_type == "text" and text is None:
                text = block.text
        return LLMResponse(
            text=text or "",
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            structured=structured,
        )

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
