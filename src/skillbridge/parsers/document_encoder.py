"""Read a resume document and encode it as base64."""

from __future__ import annotations

import asyncio
import base64
import logging

from skillbridge.errors import FileReadError
from skillbridge.models.document import CandidateDocument, EncodedPayload

logger = logging.getLogger(__name__)

READ_ERROR_MESSAGE = "Failed to read resume file."


async def read_document(document: CandidateDocument) -> bytes:
    """Read the full document content.

    Raises:
        FileReadError: the read failed or returned fewer bytes than declared.
    """
    if document.raw_bytes is not None:
        data = document.raw_bytes
    elif document.path is not None:
        try:
            data = await asyncio.to_thread(document.path.read_bytes)
        except OSError as exc:
            logger.error("Reading %s failed", document.display_name, exc_info=True)
            raise FileReadError(READ_ERROR_MESSAGE, str(exc)) from exc
    else:
        raise FileReadError(READ_ERROR_MESSAGE, f"{document.display_name} has no content")

    if len(data) != document.size_bytes:
        raise FileReadError(
            READ_ERROR_MESSAGE,
            f"expected {document.size_bytes} bytes, read {len(data)}",
        )
    return data


async def encode(document: CandidateDocument) -> EncodedPayload:
    """Read ``document`` to completion and return its base64 payload."""
    data = await read_document(document)
    encoded = base64.b64encode(data).decode("ascii")
    logger.debug(
        "Encoded %s: %d bytes -> %d base64 chars (%s)",
        document.display_name,
        len(data),
        len(encoded),
        document.media_type,
    )
    return EncodedPayload(base64_data=encoded, media_type=document.media_type)
