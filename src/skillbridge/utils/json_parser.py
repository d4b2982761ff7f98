"""Utility to extract JSON from LLM responses."""

from __future__ import annotations

import json
import re

_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\r?\n?")
_FENCE_CLOSE = re.compile(r"\r?\n?[ \t]*```$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence (```json ... ```).

    Only a leading fence paired with a trailing fence is stripped; text
    without both is returned trimmed but otherwise unchanged.
    """
    text = text.strip()
    if not (text.startswith("```") and text.endswith("```") and len(text) >= 6):
        return text
    inner = _FENCE_OPEN.sub("", text, count=1)
    inner = _FENCE_CLOSE.sub("", inner, count=1)
    return inner.strip()


def extract_json(text: str) -> dict | list:
    """Parse JSON from an LLM response, handling ```json blocks.

    Unlike a lenient scraper this never guesses: prose around the JSON
    or a truncated document is an error.

    Raises:
        ValueError: the (unfenced) text is not valid JSON.
    """
    stripped = strip_code_fences(text)
    try:
        return json.loads(stripped)
    except (json.JSONDecodeError, TypeError) as exc:
        raise ValueError(f"Could not extract JSON from text: {stripped[:200]}...") from exc
