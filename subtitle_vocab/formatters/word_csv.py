"""Raw word-count CSV export formatter.

WHY: Building and tuning the word bank needs the full picture of a
subtitle file: every word it contains, how many times, and whether the
bank already knows it. A spreadsheet-friendly CSV is the easiest way to
review that.

HOW: Writes one row per distinct normalized token from the report's
token_counts view, with the bank metadata when the word is a member.

RULES:
- Header: word,count,isDifficult,difficulty,translation,definition,phonetic
- count is the RAW token count (repeats within a line included); this
  differs from the per-line occurrence count of the ranked list
- Every word is exported: no top-N truncation, no exclusion filter
- isDifficult is "yes"/"no"; missing metadata is an empty cell
- Fields are quoted only when they contain a comma, quote, or newline
- Output suffix: "-words.csv"
- Media type: "text/csv"
"""

from __future__ import annotations

import csv
import io
from typing import List

from subtitle_vocab.core.ir import TokenCount, VocabularyReport
from subtitle_vocab.formatters.base import BaseFormatter, FormatterOutput

CSV_COLUMNS = [
    "word",
    "count",
    "isDifficult",
    "difficulty",
    "translation",
    "definition",
    "phonetic",
]


def _row(token: TokenCount) -> List[str]:
    entry = token.entry
    if entry is None:
        return [token.word, str(token.count), "no", "", "", "", ""]
    return [
        token.word,
        str(token.count),
        "yes",
        entry.difficulty.value if entry.difficulty else "",
        entry.translation or "",
        entry.definition or "",
        entry.phonetic or "",
    ]


def token_counts_to_csv(rows: List[TokenCount]) -> str:
    """Render token counts as CSV text with a header row."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for token in rows:
        writer.writerow(_row(token))
    return buf.getvalue()


class WordCSVFormatter(BaseFormatter):
    """Formatter that exports every word of the file with its raw count."""

    @property
    def name(self) -> str:
        return "Word CSV"

    def format(self, report: VocabularyReport) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix="-words.csv",
                content=token_counts_to_csv(report.token_counts),
                media_type="text/csv",
            )
        ]
