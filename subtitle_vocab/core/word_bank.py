"""Word bank and exclusion list loading.

WHY: The extractor needs two read-only inputs besides the subtitles: the
curated word bank (word → tier + display metadata) and the set of words
the learner marked as too easy. Both live in JSON files produced by
other tooling, and a broken or missing file must not take the whole
analysis down with it.

HOW: load_word_bank() reads difficultWords.json, validates its shape with
jsonschema, and builds an immutable WordBank snapshot. load_exclusions()
reads a flat JSON array into a frozenset of canonical words. Any load
failure is logged and degrades to an empty bank/set.

RULES:
- Bank file shape: {"difficultWords": [{word, difficulty, translation?,
  definition?, phonetic?}], "difficultWordList": [word, ...]}
- difficultWordList is the membership list; when absent, the entry words
  are used instead
- Bank words are lowercased; the first entry for a word wins
- An unknown difficulty tier is kept as None (the extractor defaults it)
- Exclusion entries are normalized with normalize_word; non-strings and
  words that normalize to "" are ignored
- Load failures never raise: missing file, bad JSON, or schema mismatch
  → empty result + WARNING log
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, Optional, Union

import jsonschema

from subtitle_vocab.core.ir import Difficulty, WordBank, WordBankEntry
from subtitle_vocab.core.normalizer import normalize_word

logger = logging.getLogger(__name__)

WORD_BANK_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["difficultWords"],
    "properties": {
        "difficultWords": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["word"],
                "properties": {
                    "word": {"type": "string"},
                    "difficulty": {"type": ["string", "null"]},
                    "translation": {"type": ["string", "null"]},
                    "definition": {"type": ["string", "null"]},
                    "phonetic": {"type": ["string", "null"]},
                },
            },
        },
        "difficultWordList": {
            "type": "array",
            "items": {"type": "string"},
        },
    },
}

EXCLUSIONS_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
}


def _read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _optional_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def word_bank_from_dict(data: Dict[str, Any]) -> WordBank:
    """Build a WordBank snapshot from an already-parsed bank document.

    Raises:
        jsonschema.ValidationError: If data does not match WORD_BANK_SCHEMA.
    """
    jsonschema.validate(instance=data, schema=WORD_BANK_SCHEMA)

    entries: Dict[str, WordBankEntry] = {}
    for raw in data["difficultWords"]:
        word = raw["word"].lower()
        if not word or word in entries:
            continue
        entries[word] = WordBankEntry(
            word=word,
            difficulty=Difficulty.parse(raw.get("difficulty")),
            translation=_optional_str(raw.get("translation")),
            definition=_optional_str(raw.get("definition")),
            phonetic=_optional_str(raw.get("phonetic")),
        )

    word_list = data.get("difficultWordList")
    if word_list is None:
        members = frozenset(entries)
    else:
        members = frozenset(w.lower() for w in word_list if w)

    return WordBank(entries=entries, words=members)


def load_word_bank(path: Union[str, Path]) -> WordBank:
    """Load the word bank JSON file, or an empty bank if it cannot be used.

    Args:
        path: Path to difficultWords.json.

    Returns:
        An immutable WordBank. Empty (no matches) on any load failure.
    """
    path = Path(path)
    try:
        bank = word_bank_from_dict(_read_json(path))
    except FileNotFoundError:
        logger.warning("Word bank not found: %s (continuing with an empty bank)", path)
        return WordBank()
    except (OSError, ValueError) as exc:
        logger.warning("Word bank unreadable: %s (%s)", path, exc)
        return WordBank()
    except jsonschema.ValidationError as exc:
        logger.warning("Word bank has an invalid shape: %s (%s)", path, exc.message)
        return WordBank()

    logger.info("Loaded word bank %s: %d words, %d entries", path, len(bank), len(bank.entries))
    return bank


def exclusions_from_list(words: Iterable[Any]) -> FrozenSet[str]:
    """Normalize a raw word list into a frozen exclusion set."""
    result = set()
    for word in words:
        if not isinstance(word, str):
            continue
        normalized = normalize_word(word)
        if normalized:
            result.add(normalized)
    return frozenset(result)


def load_exclusions(path: Union[str, Path]) -> FrozenSet[str]:
    """Load the persisted "too easy" list, or an empty set if unusable."""
    path = Path(path)
    try:
        data = _read_json(path)
        jsonschema.validate(instance=data, schema=EXCLUSIONS_SCHEMA)
    except FileNotFoundError:
        logger.info("No exclusion list at %s", path)
        return frozenset()
    except (OSError, ValueError) as exc:
        logger.warning("Exclusion list unreadable: %s (%s)", path, exc)
        return frozenset()
    except jsonschema.ValidationError as exc:
        logger.warning("Exclusion list is not a JSON array: %s (%s)", path, exc.message)
        return frozenset()

    return exclusions_from_list(data)
