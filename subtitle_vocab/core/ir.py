"""Intermediate representation dataclasses for the vocabulary pipeline.

WHY: The parser, the extractor, and every presenter need to agree on the
shape of a cue, a word bank entry, and an extracted word. The IR gives
them one well-typed vocabulary, decoupling extraction from formatting.

HOW: Small dataclasses, leaf-first:
  SubtitleLine: one parsed cue (immutable)
  Difficulty: ordered tier enum
  WordBankEntry: one curated vocabulary item (immutable)
  WordBank: immutable snapshot of the whole bank
  WordOccurrence: one cue in which an extracted word appears
  ExtractedWord: aggregation unit, one per distinct matched word
  TokenCount: one row of the raw token-count export
  VocabularyReport: everything a formatter needs, built once per pass

RULES:
- Times are integer milliseconds, exactly as parsed from the SRT file
- Context is the whole cue text, never just the token
- ExtractedWord.occurrences counts matching LINES, TokenCount.count counts
  every TOKEN; the two are never conflated
- Bank metadata is copied into ExtractedWord when it is created (snapshot)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Optional


@dataclass(frozen=True)
class SubtitleLine:
    """A single caption cue.

    RULES:
    - id: declared sequence number, or emission order + 1 when missing
    - start_ms / end_ms: non-negative integers
    - text: cue lines joined with single spaces, trimmed
    """

    id: int
    start_ms: int
    end_ms: int
    text: str


class Difficulty(str, enum.Enum):
    """Ordered difficulty tiers of the word bank.

    WHY: The word bank groups vocabulary into three tiers. Presenters
    label and colour words by tier, so the set is closed.

    HOW: Inherits from str so values serialize cleanly to JSON and CSV.
    ``lowest()`` is the default tier for words without a valid one.
    """

    FOUNDATION = "foundation"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @classmethod
    def parse(cls, value: object) -> Optional["Difficulty"]:
        """Return the tier named by value, or None if missing/unknown."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @classmethod
    def lowest(cls) -> "Difficulty":
        return _DIFFICULTY_ORDER[0]


_DIFFICULTY_ORDER = [Difficulty.FOUNDATION, Difficulty.INTERMEDIATE, Difficulty.ADVANCED]


@dataclass(frozen=True)
class WordBankEntry:
    """One canonical vocabulary item from the curated word bank.

    RULES:
    - word: canonical lowercase form, unique key in the bank
    - difficulty: None when the source tier is missing or invalid
    - translation / definition / phonetic: optional display strings
    """

    word: str
    difficulty: Optional[Difficulty] = None
    translation: Optional[str] = None
    definition: Optional[str] = None
    phonetic: Optional[str] = None


@dataclass(frozen=True)
class WordBank:
    """Immutable snapshot of the word bank.

    WHY: Extraction must see one consistent bank for the whole pass. An
    explicit frozen snapshot threaded through the calls replaces any
    process-wide cache.

    HOW: ``words`` is the flat membership list (fast ``in`` test);
    ``entries`` maps a word to its metadata. A word may be a member
    without an entry, in which case lookup() returns None. The entries
    mapping is copied into a read-only proxy on construction.
    """

    entries: Mapping[str, WordBankEntry] = field(default_factory=dict)
    words: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))
        object.__setattr__(self, "words", frozenset(self.words))

    def __contains__(self, word: object) -> bool:
        return word in self.words

    def __len__(self) -> int:
        return len(self.words)

    def lookup(self, word: str) -> Optional[WordBankEntry]:
        """Return the entry for word, or None when the bank has no metadata."""
        return self.entries.get(word)

    @classmethod
    def from_entries(cls, entries: List[WordBankEntry]) -> "WordBank":
        """Build a bank whose membership list is exactly the entry words."""
        mapping = {e.word: e for e in entries}
        return cls(entries=mapping, words=frozenset(mapping))


@dataclass(frozen=True)
class WordOccurrence:
    """One cue in which an extracted word appears."""

    subtitle_id: int
    start_ms: int
    end_ms: int
    text: str

    @classmethod
    def from_line(cls, line: SubtitleLine) -> "WordOccurrence":
        return cls(
            subtitle_id=line.id,
            start_ms=line.start_ms,
            end_ms=line.end_ms,
            text=line.text.strip(),
        )


@dataclass
class ExtractedWord:
    """Aggregated result for one distinct bank word found in the subtitles.

    WHY: Learners want each word once, ranked by how often it is heard,
    with the lines that contain it as examples.

    HOW: Created on the word's first match during an extraction pass,
    then updated (count + context) as later lines match. Frozen in
    practice once the pass returns.

    RULES:
    - occurrences == len(contexts): one per matching line
    - difficulty / translation / phonetic are a copy of the bank entry
    - contexts are in line scan order
    """

    word: str
    difficulty: Difficulty
    translation: Optional[str] = None
    phonetic: Optional[str] = None
    occurrences: int = 0
    contexts: List[WordOccurrence] = field(default_factory=list)


@dataclass
class TokenCount:
    """One row of the raw token-count export.

    RULES:
    - count: every normalized token occurrence, repeats within a line included
    - entry: bank metadata when the word is in the bank, else None
    """

    word: str
    count: int = 0
    entry: Optional[WordBankEntry] = None

    @property
    def is_difficult(self) -> bool:
        return self.entry is not None


@dataclass
class VocabularyReport:
    """The complete result of one extraction pass.

    WHY: This is the top-level container that formatters receive. It
    holds the parsed lines, both ranked views, and the source identity.

    RULES:
    - words: ranked ExtractedWord list (per-line counting), untruncated
    - token_counts: ranked TokenCount list (raw counting), untruncated
    - total_tokens: number of normalized tokens in the file
    - source_filename: original subtitle filename (for output naming)
    """

    source_filename: str
    lines: List[SubtitleLine]
    words: List[ExtractedWord]
    token_counts: List[TokenCount]
    total_tokens: int

    @property
    def total_occurrences(self) -> int:
        """Sum of per-line occurrences across all ranked words."""
        return sum(w.occurrences for w in self.words)
