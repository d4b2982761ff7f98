"""Resume document models."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path

from skillbridge.errors import FileReadError

PDF = "application/pdf"
MSWORD = "application/msword"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PLAIN_TEXT = "text/plain"

# Order matters for display only.
EXTENSION_MEDIA_TYPES: dict[str, str] = {
    ".pdf": PDF,
    ".doc": MSWORD,
    ".docx": DOCX,
    ".txt": PLAIN_TEXT,
}


def guess_media_type(file_name: str) -> str:
    """Best-effort media type for a file name ("" when unknown)."""
    suffix = Path(file_name).suffix.lower()
    if suffix in EXTENSION_MEDIA_TYPES:
        return EXTENSION_MEDIA_TYPES[suffix]
    guessed, _ = mimetypes.guess_type(file_name)
    return guessed or ""


@dataclass(frozen=True)
class CandidateDocument:
    """A user-selected resume file.

    The content lives either in memory (``raw_bytes``, e.g. a browser
    upload) or on disk (``path``); the encoder reads whichever is set.
    """

    display_name: str
    media_type: str
    size_bytes: int
    raw_bytes: bytes | None = None
    path: Path | None = None

    @classmethod
    def from_bytes(
        cls, data: bytes, media_type: str, display_name: str = "resume"
    ) -> CandidateDocument:
        return cls(
            display_name=display_name,
            media_type=media_type,
            size_bytes=len(data),
            raw_bytes=data,
        )

    @classmethod
    def from_path(cls, path: str | Path, media_type: str | None = None) -> CandidateDocument:
        p = Path(path)
        try:
            size = p.stat().st_size
        except OSError as exc:
            raise FileReadError("Failed to read resume file.", str(exc)) from exc
        return cls(
            display_name=p.name,
            media_type=media_type if media_type is not None else guess_media_type(p.name),
            size_bytes=size,
            path=p,
        )


@dataclass(frozen=True)
class EncodedPayload:
    """Base64 document content plus its declared media type."""

    base64_data: str
    media_type: str
