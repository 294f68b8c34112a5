"""Ranked vocabulary list formatter (plain text study sheet).

WHY: The learner's main view of a subtitle file is a short ranked list:
the top words, how often they are heard, their tier and translation, and
a few of the lines where they occur. Plain text keeps it readable in a
terminal, a notes app, or a printout.

HOW: Takes the first ``limit`` ranked words from the report. Each word
gets a header line (rank, word, tier, line count, phonetic), an optional
translation line, and up to ``contexts_preview`` example cues with their
start timestamps.

RULES:
- Truncation to top-N happens here, never in the core
- Header line: "{rank}. {word} [{tier}] x{occurrences}" + " /{phonetic}/"
- Translation line is indented by 3 spaces; omitted when missing
- Context lines: "   [MM:SS] text" (HH:MM:SS once past the hour)
- Blank line between words; no trailing whitespace on any line
- Output suffix: "-vocabulary.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

import math
from typing import List

from subtitle_vocab.core.ir import ExtractedWord, VocabularyReport
from subtitle_vocab.formatters.base import BaseFormatter, FormatterOutput


def format_timestamp(ms: float) -> str:
    """Format milliseconds as MM:SS, or HH:MM:SS past the first hour.

    Negative or non-finite values render as "--:--".
    """
    if not math.isfinite(ms) or ms < 0:
        return "--:--"
    total_seconds = int(ms // 1000)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    if hours > 0:
        return "{:02d}:{:02d}:{:02d}".format(hours, minutes, seconds)
    return "{:02d}:{:02d}".format(minutes, seconds)


def _word_block(rank: int, word: ExtractedWord, contexts_preview: int) -> str:
    header = "{}. {} [{}] x{}".format(
        rank, word.word, word.difficulty.value, word.occurrences,
    )
    if word.phonetic:
        header += " /{}/".format(word.phonetic)

    lines = [header]
    if word.translation:
        lines.append("   {}".format(word.translation))
    for ctx in word.contexts[:contexts_preview]:
        lines.append("   [{}] {}".format(format_timestamp(ctx.start_ms), ctx.text))
    return "\n".join(lines)


class RankedListFormatter(BaseFormatter):
    """Formatter that produces the top-N ranked study list as plain text."""

    @property
    def name(self) -> str:
        return "Ranked Word List"

    def format(self, report: VocabularyReport) -> List[FormatterOutput]:
        shown = report.words[:self.limit]

        summary = "{}: {} of {} words shown, {} subtitle lines".format(
            report.source_filename or "subtitles",
            len(shown),
            len(report.words),
            len(report.lines),
        )
        blocks = [summary]
        for rank, word in enumerate(shown, start=1):
            blocks.append(_word_block(rank, word, self.contexts_preview))

        content = "\n\n".join(blocks) + "\n"

        return [
            FormatterOutput(
                suffix="-vocabulary.txt",
                content=content,
                media_type="text/plain",
            )
        ]
