"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

API_KEY_ENV = "ANTHROPIC_API_KEY"


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-sonnet-4-5-20250929"
    max_tokens: int = 4096
    temperature: float = 0.7
    top_k: int | None = 40
    top_p: float | None = 0.95
    timeout: int = 120

    def __post_init__(self) -> None:
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"temperature must be between 0 and 1, got {self.temperature}")
        if self.top_p is not None and not 0.0 <= self.top_p <= 1.0:
            raise ValueError(f"top_p must be between 0 and 1, got {self.top_p}")
        if self.top_k is not None and self.top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {self.top_k}")
        if self.max_tokens < 1:
            raise ValueError(f"max_tokens must be >= 1, got {self.max_tokens}")
        if self.timeout < 1:
            raise ValueError(f"timeout must be >= 1, got {self.timeout}")


@dataclass(frozen=True)
class LimitsConfig:
    max_file_size_bytes: int = 5 * 1024 * 1024
    min_role_length: int = 3
    max_role_length: int = 50

    def __post_init__(self) -> None:
        if self.max_file_size_bytes < 1:
            raise ValueError(f"max_file_size_bytes must be positive, got {self.max_file_size_bytes}")
        if self.min_role_length < 1:
            raise ValueError(f"min_role_length must be positive, got {self.min_role_length}")
        if self.max_role_length < self.min_role_length:
            raise ValueError(
                f"max_role_length ({self.max_role_length}) must be >= "
                f"min_role_length ({self.min_role_length})"
            )


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    limits: LimitsConfig = field(default_factory=LimitsConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        limits=LimitsConfig(**raw.get("limits", {})),
    )


def get_api_key() -> str | None:
    """Return the configured API key, or None when unset or blank."""
    key = os.environ.get(API_KEY_ENV, "").strip()
    return key or None
