"""Word frequency extraction, ranking, and context collection.

WHY: This is the heart of the tool. A subtitle file has thousands of
tokens; the learner wants the handful of word bank words it contains,
ranked by how many lines use them, each with the lines as examples.
The CSV export needs a different view of the same text: every token,
counted every time it appears.

HOW: extract_words() scans lines top to bottom, normalizes each
whitespace-separated token, deduplicates within the line, filters
through the exclusion set and the bank, and aggregates one ExtractedWord
per word. count_tokens() is the raw export counter. extract_words_chunked()
splits the scan across a thread pool and merges the partial results back
into exactly the sequential answer.

RULES:
- Occurrence = one LINE containing the word (repeats within a line count once)
- Only bank members that are not excluded are tracked
- Exclusion wins over bank membership
- Bank metadata is copied on first match; missing tier → lowest tier
- Ranking: occurrences descending, ties in first-discovery order
- count_tokens(): every token counts, no bank or exclusion filter,
  ties in first-appearance order
- Empty input → empty result, never an exception
"""

from __future__ import annotations

import re
from concurrent.futures import ThreadPoolExecutor
from typing import AbstractSet, Dict, Iterable, List, Optional, Sequence, Tuple

from subtitle_vocab.core.ir import (
    Difficulty,
    ExtractedWord,
    SubtitleLine,
    TokenCount,
    WordBank,
    WordOccurrence,
)
from subtitle_vocab.core.normalizer import normalize_word

DEFAULT_CHUNK_SIZE = 2000

_TOKEN_SPLIT_RE = re.compile(r"[\s\ufeff]+")


def _line_words(line: SubtitleLine) -> List[str]:
    """Normalized, non-empty words of a line, in order, with repeats."""
    words = []
    for raw in _TOKEN_SPLIT_RE.split(line.text):
        word = normalize_word(raw)
        if word:
            words.append(word)
    return words


def _new_extracted_word(word: str, bank: WordBank) -> ExtractedWord:
    """Create the aggregation record for word with a snapshot of its bank metadata."""
    entry = bank.lookup(word)
    if entry is None:
        return ExtractedWord(word=word, difficulty=Difficulty.lowest())
    return ExtractedWord(
        word=word,
        difficulty=entry.difficulty or Difficulty.lowest(),
        translation=entry.translation,
        phonetic=entry.phonetic,
    )


def rank_words(words: Iterable[ExtractedWord]) -> List[ExtractedWord]:
    """Sort by occurrences descending; sorted() is stable so discovery order breaks ties."""
    return sorted(words, key=lambda w: w.occurrences, reverse=True)


def _scan(
    lines: Iterable[SubtitleLine],
    bank: WordBank,
    excluded: AbstractSet[str],
) -> Dict[str, ExtractedWord]:
    """Aggregate matches in scan order; dict insertion order is discovery order."""
    stats: Dict[str, ExtractedWord] = {}

    for line in lines:
        seen_in_line = set()
        for word in _line_words(line):
            if word in seen_in_line:
                continue
            seen_in_line.add(word)
            if word in excluded or word not in bank:
                continue

            entry = stats.get(word)
            if entry is None:
                entry = _new_extracted_word(word, bank)
                stats[word] = entry

            entry.occurrences += 1
            entry.contexts.append(WordOccurrence.from_line(line))

    return stats


def extract_words(
    lines: Sequence[SubtitleLine],
    bank: WordBank,
    excluded: AbstractSet[str] = frozenset(),
) -> List[ExtractedWord]:
    """Extract ranked bank words from parsed subtitle lines.

    Args:
        lines: Cues in source order.
        bank: Immutable word bank snapshot.
        excluded: Canonical words to suppress regardless of bank membership.

    Returns:
        One ExtractedWord per matched word, ranked by line occurrences.
    """
    return rank_words(_scan(lines, bank, excluded).values())


def merge_partials(partials: Iterable[Dict[str, ExtractedWord]]) -> List[ExtractedWord]:
    """Merge per-chunk aggregates (given in chunk order) into one ranked list.

    WHY: Chunked extraction loses the single scan order. Folding the
    chunks back in their original order restores it.

    HOW: Words keep the position of their first chunk; later chunks add
    their counts and append their contexts.

    RULES:
    - Partials must be passed in original line order
    - occurrences are summed, contexts concatenated in chunk order
    - Result is re-ranked, identical to a sequential extract_words()
    """
    merged: Dict[str, ExtractedWord] = {}
    for partial in partials:
        for word, part in partial.items():
            current = merged.get(word)
            if current is None:
                merged[word] = ExtractedWord(
                    word=part.word,
                    difficulty=part.difficulty,
                    translation=part.translation,
                    phonetic=part.phonetic,
                    occurrences=part.occurrences,
                    contexts=list(part.contexts),
                )
                continue
            current.occurrences += part.occurrences
            current.contexts.extend(part.contexts)
    return rank_words(merged.values())


def extract_words_chunked(
    lines: Sequence[SubtitleLine],
    bank: WordBank,
    excluded: AbstractSet[str] = frozenset(),
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    max_workers: Optional[int] = None,
) -> List[ExtractedWord]:
    """Extract ranked bank words by scanning contiguous chunks in a thread pool.

    Produces exactly the same result as extract_words(); useful for very
    large subtitle files when called off the main thread.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be at least 1, got {}".format(chunk_size))

    chunks = [lines[i:i + chunk_size] for i in range(0, len(lines), chunk_size)]
    if len(chunks) <= 1:
        return extract_words(lines, bank, excluded)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        # map() yields results in submission order
        partials = list(pool.map(lambda chunk: _scan(chunk, bank, excluded), chunks))

    return merge_partials(partials)


def count_tokens(
    lines: Sequence[SubtitleLine],
    bank: WordBank,
) -> Tuple[List[TokenCount], int]:
    """Count every normalized token for the tabular export.

    Returns:
        (rows ranked by count descending, total number of counted tokens).
    """
    counts: Dict[str, TokenCount] = {}
    total = 0

    for line in lines:
        for word in _line_words(line):
            total += 1
            row = counts.get(word)
            if row is None:
                row = TokenCount(word=word, entry=bank.lookup(word))
                counts[word] = row
            row.count += 1

    ranked = sorted(counts.values(), key=lambda r: r.count, reverse=True)
    return ranked, total
