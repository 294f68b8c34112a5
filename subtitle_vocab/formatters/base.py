"""Abstract base formatter and output container.

WHY: Every output format consumes the same VocabularyReport but produces
different file content. This base class enforces a consistent interface
so the CLI and API layers can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements: a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list of outputs (most formatters return one)
- ``suffix`` starts with a hyphen, e.g. ``"-vocabulary.txt"``
- The caller is responsible for prepending the source filename stem
- ``limit`` is the top-N for ranked presenters; formatters that export
  everything ignore it
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from subtitle_vocab.config import MAX_CONTEXTS_PREVIEW, MAX_WORDS_DISPLAY
from subtitle_vocab.core.ir import VocabularyReport


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-words.csv"`` → ``"episode01-words.csv"``.
        content: The file content.
        media_type: MIME type for the content, e.g. ``"text/csv"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    def __init__(
        self,
        limit: Optional[int] = None,
        contexts_preview: Optional[int] = None,
    ) -> None:
        self.limit = limit if limit is not None else MAX_WORDS_DISPLAY
        self.contexts_preview = (
            contexts_preview if contexts_preview is not None else MAX_CONTEXTS_PREVIEW
        )

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Word CSV'."""

    @abstractmethod
    def format(self, report: VocabularyReport) -> list[FormatterOutput]:
        """Convert the report into one or more output files.

        Args:
            report: The complete result of one extraction pass.

        Returns:
            List of FormatterOutput objects, each containing a file suffix,
            content string, and MIME type.
        """
