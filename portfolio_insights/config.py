"""Runtime configuration sourced from environment variables."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

LOGGER = logging.getLogger(__name__)

DEFAULT_GROQ_MODEL = "llama-3.3-70b-versatile"
DEFAULT_GROQ_API_URL = "https://api.groq.com/openai/v1/chat/completions"
DEFAULT_RECORD_COUNT = 200
DEFAULT_RISK_THRESHOLD_PCT = 4.5


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        LOGGER.warning("Ignoring non-integer %s=%r; using %s", name, raw, default)
        return default


def groq_api_key() -> str:
    """Return the configured API key, or an empty string when absent."""
    return os.environ.get("GROQ_API_KEY", "").strip()


GROQ_MODEL = os.environ.get("GROQ_MODEL", DEFAULT_GROQ_MODEL)
GROQ_API_URL = os.environ.get("GROQ_API_URL", DEFAULT_GROQ_API_URL)
RECORD_COUNT = _env_int("PORTFOLIO_RECORD_COUNT", DEFAULT_RECORD_COUNT) or DEFAULT_RECORD_COUNT
RECORD_SEED = _env_int("PORTFOLIO_SEED", None)
OUTPUT_ROOT = Path(os.environ.get("APP_OUTPUT_ROOT", "output"))

__all__ = [
    "DEFAULT_RISK_THRESHOLD_PCT",
    "GROQ_API_URL",
    "GROQ_MODEL",
    "OUTPUT_ROOT",
    "RECORD_COUNT",
    "RECORD_SEED",
    "groq_api_key",
]
