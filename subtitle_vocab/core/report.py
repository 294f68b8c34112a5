"""VocabularyReport construction: one pass over one subtitle file.

WHY: Formatters need both ranked views of a file (per-line vocabulary
and raw token counts) plus the parsed lines and the source name. Building
them in one place keeps "one call = one bank snapshot = one pass" true
for the CLI and the API alike.

HOW: build_report() runs the extractor (chunked across threads for very
large files) and the token counter over the same line list.
analyze_text() and analyze_file() add the parse step in front for
callers that start from raw text or a path.

RULES:
- The bank and exclusion set are passed in; nothing is loaded here
- The report is untruncated; top-N is a presenter concern
- analyze_file() raises SubtitleDecodeError for non-UTF-8 input and
  FileNotFoundError for missing files; nothing else raises
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import AbstractSet, List, Union

from subtitle_vocab.core.extractor import count_tokens, extract_words_chunked
from subtitle_vocab.core.ir import SubtitleLine, VocabularyReport, WordBank
from subtitle_vocab.core.srt_parser import parse_srt, read_subtitle_file

logger = logging.getLogger(__name__)


def build_report(
    lines: List[SubtitleLine],
    bank: WordBank,
    excluded: AbstractSet[str],
    source_filename: str,
) -> VocabularyReport:
    """Run the extraction pass and bundle every view formatters need."""
    words = extract_words_chunked(lines, bank, excluded)
    token_counts, total_tokens = count_tokens(lines, bank)

    logger.debug(
        "%s: %d lines, %d tokens, %d distinct, %d bank matches",
        source_filename, len(lines), total_tokens, len(token_counts), len(words),
    )

    return VocabularyReport(
        source_filename=source_filename,
        lines=lines,
        words=words,
        token_counts=token_counts,
        total_tokens=total_tokens,
    )


def analyze_text(
    content: str,
    bank: WordBank,
    excluded: AbstractSet[str],
    source_filename: str = "subtitles.srt",
) -> VocabularyReport:
    """Parse SRT text and build its report."""
    return build_report(parse_srt(content), bank, excluded, source_filename)


def analyze_file(
    path: Union[str, Path],
    bank: WordBank,
    excluded: AbstractSet[str],
) -> VocabularyReport:
    """Read an SRT file from disk and build its report."""
    path = Path(path)
    return build_report(read_subtitle_file(path), bank, excluded, path.name)
