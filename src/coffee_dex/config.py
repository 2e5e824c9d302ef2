"""Environment-driven settings for coffee-dex."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_REFINER_TIMEOUT_SEC = 30.0
DEFAULT_SHORTLIST_LIMIT = 10


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _safe_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _safe_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class CoffeeDexConfig:
    refiner: str = "ollama"  # ollama|gemini|none
    refiner_enabled: bool = True
    refiner_timeout_sec: float = DEFAULT_REFINER_TIMEOUT_SEC
    ollama_url: str = "http://localhost:11434"
    ollama_model: str = "qwen3:4b"
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash"
    shortlist_limit: int = DEFAULT_SHORTLIST_LIMIT
    rules_version: str = "v1"
    database_url: str | None = None

    @classmethod
    def from_env(cls) -> "CoffeeDexConfig":
        return cls(
            refiner=(os.getenv("COFFEE_DEX_REFINER", "ollama").strip().lower() or "ollama"),
            refiner_enabled=_parse_bool(os.getenv("COFFEE_DEX_REFINER_ENABLED"), True),
            refiner_timeout_sec=max(
                1.0,
                _safe_float(os.getenv("COFFEE_DEX_REFINER_TIMEOUT_SEC"), DEFAULT_REFINER_TIMEOUT_SEC),
            ),
            ollama_url=os.getenv("OLLAMA_URL", "http://localhost:11434").rstrip("/"),
            ollama_model=os.getenv("OLLAMA_MODEL", "qwen3:4b"),
            gemini_api_key=os.getenv("GEMINI_API_KEY"),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
            shortlist_limit=max(1, _safe_int(os.getenv("COFFEE_DEX_SHORTLIST_LIMIT"), DEFAULT_SHORTLIST_LIMIT)),
            rules_version=os.getenv("COFFEE_DEX_RULES_VERSION", "v1"),
            database_url=os.getenv("DATABASE_URL") or None,
        )
