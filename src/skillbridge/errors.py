"""Exceptions raised by the analysis pipeline."""

from __future__ import annotations


class SkillbridgeError(Exception):
    """Base class for pipeline failures.

    ``detail`` carries the underlying diagnostic text, if any, so the
    presentation layer can show it next to the summary message.
    """

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(f"{message} Details: {detail}" if detail else message)


class FileReadError(SkillbridgeError):
    """The resume document could not be read to completion."""


class ConfigurationError(SkillbridgeError):
    """The analysis backend is not configured (e.g. missing API key)."""


class ResponseParseError(SkillbridgeError):
    """The backend answered, but not with a valid analysis result."""


class CapabilityError(SkillbridgeError):
    """The remote call itself failed (network, quota, server fault)."""
