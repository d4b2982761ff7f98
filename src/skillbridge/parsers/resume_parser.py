"""Plain-text extraction for resume formats the backend cannot read natively."""

from __future__ import annotations

import re
import zipfile
from io import BytesIO

from skillbridge.models.document import DOCX, MSWORD, PLAIN_TEXT

# Runs of printable characters in a legacy Word binary: 8-bit (cp1252)
# or UTF-16LE text pieces.
_ASCII_RUN = re.compile(rb"[\x20-\x7e\t\r\n]{4,}")
_UTF16_RUN = re.compile(rb"(?:[\x20-\x7e\t\r\n]\x00){4,}")


def extract_text(data: bytes, media_type: str) -> str:
    """Return clean plain text for a TXT, DOCX or DOC document.

    Raises:
        ValueError: the media type is not a text-extractable format or the
            content cannot be decoded.
    """
    if media_type == PLAIN_TEXT:
        raw = _decode_text(data)
    elif media_type == DOCX:
        raw = _parse_docx(data)
    elif media_type == MSWORD:
        raw = _parse_doc(data)
    else:
        raise ValueError(f"No text extraction for media type: {media_type}")
    return clean_text(raw)


def clean_text(text: str) -> str:
    """Normalize extracted text.

    Removes BOM and zero-width characters, collapses inner runs of
    spaces and squeezes 3+ blank lines down to one.
    """
    text = text.lstrip("\ufeff")
    text = re.sub(r"[\u200b\u200c\u200d\u00ad\u2060\ufeff]", "", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    lines = []
    for line in text.split("\n"):
        stripped = line.lstrip()
        indent = line[: len(line) - len(stripped)].replace("\t", "    ")
        stripped = re.sub(r"[ \t]{2,}", " ", stripped).rstrip()
        lines.append(f"{indent}{stripped}" if stripped else "")
    text = "\n".join(lines)

    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ValueError(f"Text document is not valid UTF-8: {exc}") from exc


def _parse_docx(data: bytes) -> str:
    from docx import Document
    from docx.opc.exceptions import PackageNotFoundError

    try:
        doc = Document(BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as exc:
        raise ValueError(f"Could not open DOCX document: {exc}") from exc
    return "\n".join(p.text for p in doc.paragraphs if p.text.strip())


def _parse_doc(data: bytes) -> str:
    pieces = [m.group().decode("utf-16-le") for m in _UTF16_RUN.finditer(data)]
    if not pieces:
        pieces = [m.group().decode("cp1252") for m in _ASCII_RUN.finditer(data)]
    text = "\n".join(p for p in pieces if p.strip())
    if not text.strip():
        raise ValueError("No readable text found in Word document")
    return text
