"""Tests for all output formatters.

WHY: Each formatter is a user-facing contract: the study sheet layout,
the JSON document shape, and the CSV columns. Changes in any of them
break downstream tools or habits.

HOW: Every formatter runs against the sample report built from the
shared fixtures. The JSON output is validated against the bundled
schema; the CSV is read back with csv.reader.
"""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path

import jsonschema
import pytest

from subtitle_vocab.core.ir import TokenCount, WordBankEntry
from subtitle_vocab.core.report import analyze_text
from subtitle_vocab.formatters import FORMATTERS
from subtitle_vocab.formatters.base import BaseFormatter
from subtitle_vocab.formatters.ranked_list import RankedListFormatter, format_timestamp
from subtitle_vocab.formatters.vocabulary_json import VocabularyJSONFormatter
from subtitle_vocab.formatters.word_csv import (
    CSV_COLUMNS,
    WordCSVFormatter,
    token_counts_to_csv,
)

SCHEMA_PATH = (
    Path(__file__).resolve().parent.parent
    / "subtitle_vocab" / "formatters" / "vocabulary_report_schema.json"
)


@pytest.fixture
def sample_report(sample_srt, sample_bank):
    return analyze_text(sample_srt, sample_bank, frozenset(), "sample.srt")


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:

    def test_keys(self):
        assert set(FORMATTERS) == {"ranked_list", "vocabulary_json", "word_csv"}

    def test_values_are_formatter_classes(self):
        for cls in FORMATTERS.values():
            assert issubclass(cls, BaseFormatter)

    def test_every_formatter_produces_output(self, sample_report):
        for cls in FORMATTERS.values():
            outputs = cls().format(sample_report)
            assert len(outputs) == 1
            assert outputs[0].suffix.startswith("-")
            assert outputs[0].content


# ---------------------------------------------------------------------------
# Ranked list
# ---------------------------------------------------------------------------


class TestRankedListFormatter:

    def test_layout(self, sample_report):
        output = RankedListFormatter(limit=2, contexts_preview=1).format(sample_report)[0]
        assert output.content == (
            "sample.srt: 2 of 4 words shown, 4 subtitle lines\n"
            "\n"
            "1. reluctant [intermediate] x2 /rɪˈlʌktənt/\n"
            "   不情愿的\n"
            "   [00:01] The reluctant hero hesitated.\n"
            "\n"
            "2. cautious [foundation] x1\n"
            "   谨慎的\n"
            "   [00:04] Reluctant? No, just cautious, cautious.\n"
        )

    def test_context_preview_limit(self, sample_report):
        content = RankedListFormatter(contexts_preview=3).format(sample_report)[0].content
        assert content.count("   [") == 5

    def test_missing_translation_line_omitted(self, sample_report):
        content = RankedListFormatter().format(sample_report)[0].content
        obvious_block = content.split("\n\n")[-1]
        assert obvious_block.splitlines() == [
            "4. obvious [foundation] x1",
            "   [01:06] Everyone knew the obvious answer.",
        ]

    def test_no_trailing_whitespace(self, sample_report):
        content = RankedListFormatter().format(sample_report)[0].content
        for line in content.splitlines():
            assert line == line.rstrip()

    def test_empty_report(self, sample_bank):
        report = analyze_text("", sample_bank, frozenset(), "empty.srt")
        content = RankedListFormatter().format(report)[0].content
        assert content == "empty.srt: 0 of 0 words shown, 0 subtitle lines\n"

    def test_suffix_and_media_type(self, sample_report):
        output = RankedListFormatter().format(sample_report)[0]
        assert output.suffix == "-vocabulary.txt"
        assert output.media_type == "text/plain"


class TestFormatTimestamp:

    @pytest.mark.parametrize(
        "ms, expected",
        [
            (0, "00:00"),
            (62345, "01:02"),
            (3599999, "59:59"),
            (3600000, "01:00:00"),
            (-1, "--:--"),
            (float("nan"), "--:--"),
            (float("inf"), "--:--"),
        ],
    )
    def test_values(self, ms, expected):
        assert format_timestamp(ms) == expected


# ---------------------------------------------------------------------------
# Vocabulary JSON
# ---------------------------------------------------------------------------


class TestVocabularyJSONFormatter:

    def test_schema_validation(self, sample_report):
        output = VocabularyJSONFormatter().format(sample_report)[0]
        data = json.loads(output.content)
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            schema = json.load(f)
        jsonschema.validate(instance=data, schema=schema)

    def test_totals(self, sample_report):
        data = json.loads(VocabularyJSONFormatter(limit=1).format(sample_report)[0].content)
        assert data["source"] == "sample.srt"
        assert data["lineCount"] == 4
        assert data["totalTokens"] == 19
        assert data["totalWords"] == 4
        assert data["totalOccurrences"] == 5
        assert len(data["words"]) == 1

    def test_word_fields(self, sample_report):
        data = json.loads(VocabularyJSONFormatter().format(sample_report)[0].content)
        first = data["words"][0]
        assert first["word"] == "reluctant"
        assert first["occurrences"] == 2
        assert first["difficulty"] == "intermediate"
        assert first["contexts"][1] == {
            "subtitleId": 2,
            "startMs": 4000,
            "endMs": 6000,
            "text": "Reluctant? No, just cautious, cautious.",
        }

    def test_all_contexts_kept(self, sample_report):
        data = json.loads(
            VocabularyJSONFormatter(contexts_preview=1).format(sample_report)[0].content
        )
        assert len(data["words"][0]["contexts"]) == 2

    def test_non_ascii_is_not_escaped(self, sample_report):
        content = VocabularyJSONFormatter().format(sample_report)[0].content
        assert "不情愿的" in content

    def test_suffix_and_media_type(self, sample_report):
        output = VocabularyJSONFormatter().format(sample_report)[0]
        assert output.suffix == "-vocabulary.json"
        assert output.media_type == "application/json"


# ---------------------------------------------------------------------------
# Word CSV
# ---------------------------------------------------------------------------


class TestWordCSVFormatter:

    def _rows(self, report):
        content = WordCSVFormatter().format(report)[0].content
        return list(csv.reader(io.StringIO(content)))

    def test_header(self, sample_report):
        assert self._rows(sample_report)[0] == CSV_COLUMNS
        assert ",".join(CSV_COLUMNS) == (
            "word,count,isDifficult,difficulty,translation,definition,phonetic"
        )

    def test_every_word_exported(self, sample_report):
        rows = self._rows(sample_report)
        assert len(rows) == 1 + 14

    def test_raw_counts_include_repeats(self, sample_report):
        counts = {row[0]: int(row[1]) for row in self._rows(sample_report)[1:]}
        assert counts["cautious"] == 2
        assert counts["the"] == 3

    def test_bank_word_row(self, sample_report):
        rows = {row[0]: row for row in self._rows(sample_report)[1:]}
        assert rows["reluctant"] == [
            "reluctant", "2", "yes", "intermediate", "不情愿的", "unwilling", "rɪˈlʌktənt",
        ]
        assert rows["obvious"] == ["obvious", "1", "yes", "", "", "", ""]

    def test_non_bank_word_row(self, sample_report):
        rows = {row[0]: row for row in self._rows(sample_report)[1:]}
        assert rows["hero"] == ["hero", "2", "no", "", "", "", ""]

    def test_exclusions_not_applied(self, sample_srt, sample_bank):
        report = analyze_text(sample_srt, sample_bank, frozenset({"reluctant"}))
        words = {row[0] for row in self._rows(report)[1:]}
        assert "reluctant" in words

    def test_limit_ignored(self, sample_report):
        content = WordCSVFormatter(limit=1).format(sample_report)[0].content
        assert len(content.splitlines()) == 15

    def test_plain_rows_are_unquoted(self, sample_report):
        content = WordCSVFormatter().format(sample_report)[0].content
        assert "\nthe,3,no,,,,\n" in content

    def test_comma_fields_are_quoted(self):
        entry = WordBankEntry(word="cat", translation="gato, gata")
        content = token_counts_to_csv([TokenCount(word="cat", count=1, entry=entry)])
        assert content.splitlines()[1] == 'cat,1,yes,,"gato, gata",,'

    def test_suffix_and_media_type(self, sample_report):
        output = WordCSVFormatter().format(sample_report)[0]
        assert output.suffix == "-words.csv"
        assert output.media_type == "text/csv"
