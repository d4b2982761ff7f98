"""Input validation for the resume document and target role.

Pure functions: nothing here touches the file system or the network.
"""

from __future__ import annotations

import re

from skillbridge.models.document import EXTENSION_MEDIA_TYPES, CandidateDocument
from skillbridge.models.issues import ValidationIssue

ALLOWED_MEDIA_TYPES: tuple[str, ...] = tuple(EXTENSION_MEDIA_TYPES.values())
MAX_FILE_SIZE_BYTES = 5 * 1024 * 1024
MIN_ROLE_LENGTH = 3
MAX_ROLE_LENGTH = 50

ROLE_PATTERN = re.compile(r"[A-Za-z0-9 .,\-/()&]*")


def accepted_extensions_display() -> str:
    """Human-readable list of accepted extensions, e.g. ".pdf, .doc"."""
    return ", ".join(EXTENSION_MEDIA_TYPES)


_MESSAGES: dict[ValidationIssue, str] = {
    ValidationIssue.UNSUPPORTED_TYPE: (
        "Unsupported file type. Please upload one of the following: "
        f"{accepted_extensions_display()}."
    ),
    ValidationIssue.OVERSIZED_FILE: (
        f"File size exceeds {MAX_FILE_SIZE_BYTES // (1024 * 1024)}MB. "
        "Please upload a smaller file."
    ),
    ValidationIssue.EMPTY_ROLE: "Target role cannot be empty.",
    ValidationIssue.ROLE_TOO_SHORT: (
        f"Target role must be at least {MIN_ROLE_LENGTH} characters long."
    ),
    ValidationIssue.ROLE_INVALID_CHARS: (
        "Target role contains invalid characters. Only letters, numbers, "
        "spaces, and (., - / () &) are allowed."
    ),
    ValidationIssue.MISSING_FILE: "Please upload your resume.",
    ValidationIssue.MISSING_ROLE: "Please enter a target role.",
}


def message_for(issue: ValidationIssue) -> str:
    return _MESSAGES[issue]


def validate_document(
    document: CandidateDocument, max_size_bytes: int = MAX_FILE_SIZE_BYTES
) -> ValidationIssue | None:
    """Check the media type, then the size. Returns the first failure."""
    if document.media_type not in ALLOWED_MEDIA_TYPES:
        return ValidationIssue.UNSUPPORTED_TYPE
    if document.size_bytes > max_size_bytes:
        return ValidationIssue.OVERSIZED_FILE
    return None


def validate_role(raw: str, min_length: int = MIN_ROLE_LENGTH) -> ValidationIssue | None:
    """Validate a target role: empty, too short, then character set.

    The upper length bound is enforced by the input surface (see
    ``clamp_role``), not here.
    """
    role = raw.strip()
    if not role:
        return ValidationIssue.EMPTY_ROLE
    if len(role) < min_length:
        return ValidationIssue.ROLE_TOO_SHORT
    if not ROLE_PATTERN.fullmatch(role):
        return ValidationIssue.ROLE_INVALID_CHARS
    return None


def clamp_role(raw: str, max_length: int = MAX_ROLE_LENGTH) -> str:
    """Truncate raw input to the input surface's maximum length."""
    return raw[:max_length]
