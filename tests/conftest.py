"""Shared test fixtures for the subtitle_vocab test suite.

WHY: Parser, extractor, formatter, CLI, and API tests all need the same
small subtitle file and word bank. Centralizing them here keeps every
expected count in one place.

HOW: SAMPLE_SRT is a four-cue file with known token counts. SAMPLE_BANK
is a word bank document in the on-disk JSON shape. Fixtures provide the
parsed forms and on-disk copies under tmp_path.

RULES:
- SAMPLE_SRT has 4 cues and 19 tokens (14 distinct)
- Bank matches, ranked: reluctant x2, cautious x1, ubiquitous x1, obvious x1
- "obvious" carries an unknown tier (defaults to foundation)
- File fixtures always write under tmp_path; nothing touches data/
"""

from __future__ import annotations

import json
from typing import Any, Dict

import pytest

from subtitle_vocab.core.srt_parser import parse_srt
from subtitle_vocab.core.word_bank import word_bank_from_dict


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

SAMPLE_SRT = """1
00:00:01,000 --> 00:00:03,500
The reluctant hero hesitated.

2
00:00:04,000 --> 00:00:06,000
Reluctant? No, just cautious,
cautious.

3
00:01:02,345 --> 00:01:05,000
[laughs] The hero was ubiquitous.

4
00:01:06,000 --> 00:01:08,000
Everyone knew the obvious answer.
"""

SAMPLE_BANK: Dict[str, Any] = {
    "difficultWords": [
        {
            "word": "Reluctant",
            "difficulty": "intermediate",
            "translation": "不情愿的",
            "definition": "unwilling",
            "phonetic": "rɪˈlʌktənt",
        },
        {"word": "cautious", "difficulty": "foundation", "translation": "谨慎的"},
        {
            "word": "ubiquitous",
            "difficulty": "advanced",
            "translation": "无处不在的",
            "phonetic": "juːˈbɪkwɪtəs",
        },
        {"word": "obvious", "difficulty": "not-a-tier"},
    ],
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_srt() -> str:
    return SAMPLE_SRT


@pytest.fixture
def sample_lines():
    """SAMPLE_SRT parsed into SubtitleLine objects."""
    return parse_srt(SAMPLE_SRT)


@pytest.fixture
def sample_bank():
    """SAMPLE_BANK as an immutable WordBank snapshot."""
    return word_bank_from_dict(SAMPLE_BANK)


@pytest.fixture
def srt_file(tmp_path):
    """SAMPLE_SRT written to tmp_path/episode01.srt."""
    path = tmp_path / "episode01.srt"
    path.write_text(SAMPLE_SRT, encoding="utf-8")
    return path


@pytest.fixture
def bank_file(tmp_path):
    """SAMPLE_BANK written to tmp_path/difficultWords.json."""
    path = tmp_path / "difficultWords.json"
    path.write_text(json.dumps(SAMPLE_BANK, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def exclusions_file(tmp_path):
    """Path for an exclusion list under tmp_path (not created)."""
    return tmp_path / "excludedWords.json"
