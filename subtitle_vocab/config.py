"""Configuration constants, data file locations, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. Data file paths, display limits, and server
defaults are plain module-level values, not buried in logic, so the
CLI, the API, and tests all agree on them.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level strings, ints, and sets, each overridable through an
environment variable.

RULES:
- WORD_BANK_PATH points at the generated difficultWords.json
- EXCLUSIONS_PATH points at the persisted "too easy" word list
- MAX_WORDS_DISPLAY is the presenter's top-N (truncation is never done
  by the core pipeline)
- Only .srt subtitles are accepted
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Data files
# ---------------------------------------------------------------------------

WORD_BANK_PATH = os.getenv("SUBTITLE_VOCAB_WORD_BANK", "data/difficultWords.json")
EXCLUSIONS_PATH = os.getenv("SUBTITLE_VOCAB_EXCLUSIONS", "data/excludedWords.json")

# ---------------------------------------------------------------------------
# Presentation limits
# ---------------------------------------------------------------------------


def _int_env(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to default."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


MAX_WORDS_DISPLAY = _int_env("SUBTITLE_VOCAB_TOP_N", 50)
"""Number of ranked words shown by the presenters."""

MAX_CONTEXTS_PREVIEW = _int_env("SUBTITLE_VOCAB_CONTEXTS", 3)
"""Number of example cue lines shown per word."""

# ---------------------------------------------------------------------------
# Accepted input
# ---------------------------------------------------------------------------

SUPPORTED_SUBTITLE_FORMATS: set[str] = {".srt"}
"""Subtitle file extensions accepted by the CLI and API (lowercase, with dot)."""

MAX_UPLOAD_BYTES = _int_env("SUBTITLE_VOCAB_MAX_UPLOAD_BYTES", 5 * 1024 * 1024)

# ---------------------------------------------------------------------------
# HTTP API defaults
# ---------------------------------------------------------------------------

API_HOST = os.getenv("SUBTITLE_VOCAB_HOST", "127.0.0.1")
API_PORT = _int_env("SUBTITLE_VOCAB_PORT", 8000)
