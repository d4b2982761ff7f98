"""Plain-text export of analysis results."""

from skillbridge.export.transcript import format_transcript, parse_transcript, transcript_filename

__all__ = ["format_transcript", "parse_transcript", "transcript_filename"]
