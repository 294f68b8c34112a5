"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. Pydantic
models enforce field types at runtime and generate JSON Schema that
appears in the /docs UI.

HOW: Each endpoint pair (request + response) has its own model. The
difficulty tier reuses the core Difficulty enum so the API and the
pipeline can never disagree on tier names.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Response models never expose internal implementation details
- Context previews are already truncated when they reach these models
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from subtitle_vocab.core.ir import Difficulty


# ---------------------------------------------------------------------------
# Analysis responses
# ---------------------------------------------------------------------------


class ContextResponse(BaseModel):
    """One subtitle cue in which a word appears."""

    subtitle_id: int = Field(description="Cue sequence number as declared in the file.")
    start_ms: int = Field(description="Cue start time in milliseconds.")
    end_ms: int = Field(description="Cue end time in milliseconds.")
    text: str = Field(description="Full cue text.")


class WordResponse(BaseModel):
    """One ranked vocabulary word.

    RULES:
    - occurrences counts subtitle LINES containing the word, not tokens
    - contexts holds at most the requested preview count
    """

    word: str = Field(description="Canonical lowercase word.")
    occurrences: int = Field(description="Number of subtitle lines containing the word.")
    difficulty: Difficulty = Field(description="Word bank difficulty tier.")
    translation: Optional[str] = Field(default=None, description="Translation from the word bank.")
    phonetic: Optional[str] = Field(default=None, description="Phonetic transcription.")
    contexts: List[ContextResponse] = Field(description="Example cues, in file order.")


class AnalysisResponse(BaseModel):
    """Ranked vocabulary for an uploaded subtitle file."""

    source: str = Field(description="Uploaded filename.")
    line_count: int = Field(description="Number of subtitle lines parsed.")
    total_tokens: int = Field(description="Number of word tokens in the file.")
    total_words: int = Field(description="Number of distinct word bank words matched (before truncation).")
    total_occurrences: int = Field(description="Sum of line occurrences over all matched words (before truncation).")
    words: List[WordResponse] = Field(description="Top-ranked words, most frequent first.")

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "source": "episode01.srt",
                "line_count": 412,
                "total_tokens": 2931,
                "total_words": 57,
                "total_occurrences": 148,
                "words": [
                    {
                        "word": "reluctant",
                        "occurrences": 3,
                        "difficulty": "intermediate",
                        "translation": "不情愿的",
                        "phonetic": "rɪˈlʌktənt",
                        "contexts": [
                            {
                                "subtitle_id": 12,
                                "start_ms": 62345,
                                "end_ms": 65000,
                                "text": "I was reluctant to go.",
                            }
                        ],
                    }
                ],
            }
        ]
    }}


# ---------------------------------------------------------------------------
# Too-easy list
# ---------------------------------------------------------------------------


class TooEasyRequest(BaseModel):
    """Words to merge into the persisted too-easy exclusion list."""

    words: List[str] = Field(
        default_factory=list,
        description="Words to mark as too easy. They are normalized before merging.",
    )


class TooEasyResponse(BaseModel):
    """Outcome of a too-easy merge.

    RULES:
    - added counts only genuinely new words (re-adding is a no-op)
    - total is the list size after the merge
    """

    ok: bool = Field(default=True, description="True when the merge was persisted.")
    added: int = Field(description="Number of new words added.")
    total: int = Field(description="Total number of words in the list after merging.")


class TooEasyListResponse(BaseModel):
    """The current too-easy exclusion list."""

    words: List[str] = Field(description="Excluded words, sorted.")
    total: int = Field(description="Number of excluded words.")


# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Standard error response body."""

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
