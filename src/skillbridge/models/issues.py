"""Input validation outcomes."""

from __future__ import annotations

from enum import Enum


class ValidationIssue(str, Enum):
    """A problem with user input that blocks submission.

    A valid input is represented by ``None`` rather than a member.
    """

    UNSUPPORTED_TYPE = "unsupported_type"
    OVERSIZED_FILE = "oversized_file"
    EMPTY_ROLE = "empty_role"
    ROLE_TOO_SHORT = "role_too_short"
    ROLE_INVALID_CHARS = "role_invalid_chars"
    MISSING_FILE = "missing_file"
    MISSING_ROLE = "missing_role"
