"""Persisted "too easy" exclusion list with single-writer merges.

WHY: Learners mark words they already know as too easy, and those words
should stop showing up in future analyses. The marks are persisted in a
small JSON file that both the CLI and the HTTP API update, so
concurrent updates must never lose a word.

HOW: ExclusionStore wraps one JSON file. Every mutation performs a full
read → normalize → union → sorted write while holding a threading.Lock,
so at most one merge is in flight at a time. snapshot() returns the
current set as a frozenset for the extractor.

RULES:
- The file holds a JSON array of canonical words, sorted, indent=2
- Incoming words are normalized with normalize_word; "" is dropped
- Merging is idempotent: re-adding an existing word changes nothing
- merge() returns MergeResult(added=genuinely new words, total=size after)
- An unreadable existing file is treated as empty (logged), then rewritten
- All public methods that write acquire self._lock
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Iterable, List, Union

from subtitle_vocab.core.normalizer import normalize_word
from subtitle_vocab.core.word_bank import load_exclusions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeResult:
    """Outcome of a merge: new words added and total list size afterwards."""

    added: int
    total: int


class ExclusionStore:
    """Thread-safe read-merge-write access to the exclusion JSON file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def snapshot(self) -> FrozenSet[str]:
        """Return the current exclusion set (empty if the file is unusable)."""
        return load_exclusions(self.path)

    def list_words(self) -> List[str]:
        return sorted(self.snapshot())

    def merge(self, words: Iterable[object]) -> MergeResult:
        """Union words into the persisted list.

        Args:
            words: Raw words; non-strings and words without letters are skipped.

        Returns:
            MergeResult with the number of genuinely new words and the new total.
        """
        with self._lock:
            merged = set(load_exclusions(self.path))
            added = 0
            for word in words:
                if not isinstance(word, str):
                    continue
                normalized = normalize_word(word)
                if not normalized or normalized in merged:
                    continue
                merged.add(normalized)
                added += 1

            self._write(sorted(merged))

        logger.info("Merged too-easy words into %s: %d added, %d total", self.path, added, len(merged))
        return MergeResult(added=added, total=len(merged))

    def mark_too_easy(self, word: str) -> MergeResult:
        """Add a single word to the exclusion list."""
        return self.merge([word])

    def _write(self, words: List[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(words, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)


def load_words_file(path: Union[str, Path]) -> List[object]:
    """Read a JSON array of words to merge (e.g. an exported too-easy list).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a JSON array.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("Expected a JSON array of words in {}".format(path))
    return data
