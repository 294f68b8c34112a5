"""Vocabulary report JSON formatter.

WHY: Flashcard builders and other tools want the ranked vocabulary as
data, not prose: each word with its tier, translation, phonetic, and
every cue it appears in, with timings.

HOW: Serializes the top ``limit`` ranked words (all of their contexts)
plus file-level totals into a camelCase JSON document, validates it
against vocabulary_report_schema.json, and returns it.

RULES:
- Words are truncated to top-N; contexts are not
- Keys are camelCase (subtitleId, startMs, endMs, lineCount, ...)
- totalWords is the number of ranked words BEFORE truncation
- totalOccurrences sums line occurrences over all ranked words
- Validate output against the schema before returning; raise on failure
- Output suffix: "-vocabulary.json"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from subtitle_vocab.core.ir import ExtractedWord, VocabularyReport
from subtitle_vocab.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent / "vocabulary_report_schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def _get_schema() -> Dict[str, Any]:
    """Load the report schema from disk, once."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _word_to_dict(word: ExtractedWord) -> Dict[str, Any]:
    return {
        "word": word.word,
        "occurrences": word.occurrences,
        "difficulty": word.difficulty.value,
        "translation": word.translation,
        "phonetic": word.phonetic,
        "contexts": [
            {
                "subtitleId": ctx.subtitle_id,
                "startMs": ctx.start_ms,
                "endMs": ctx.end_ms,
                "text": ctx.text,
            }
            for ctx in word.contexts
        ],
    }


class VocabularyJSONFormatter(BaseFormatter):
    """Formatter that produces the schema-validated JSON vocabulary report."""

    @property
    def name(self) -> str:
        return "Vocabulary JSON"

    def format(self, report: VocabularyReport) -> List[FormatterOutput]:
        """Convert the report into a JSON document.

        Raises:
            jsonschema.ValidationError: If the generated JSON does not
                conform to the vocabulary report schema.
        """
        output: Dict[str, Any] = {
            "source": report.source_filename,
            "lineCount": len(report.lines),
            "totalTokens": report.total_tokens,
            "totalWords": len(report.words),
            "totalOccurrences": report.total_occurrences,
            "words": [_word_to_dict(w) for w in report.words[:self.limit]],
        }

        jsonschema.validate(instance=output, schema=_get_schema())

        return [
            FormatterOutput(
                suffix="-vocabulary.json",
                content=json.dumps(output, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]
