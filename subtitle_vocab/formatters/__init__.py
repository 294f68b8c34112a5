"""Output formatter registry, the pluggable presenter hub.

WHY: The CLI and API layers need a single lookup to find the right
formatter by name. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["word_csv"](limit=20)``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API fields)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from subtitle_vocab.formatters.ranked_list import RankedListFormatter
from subtitle_vocab.formatters.vocabulary_json import VocabularyJSONFormatter
from subtitle_vocab.formatters.word_csv import WordCSVFormatter

if TYPE_CHECKING:
    from subtitle_vocab.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "ranked_list": RankedListFormatter,
    "vocabulary_json": VocabularyJSONFormatter,
    "word_csv": WordCSVFormatter,
}
