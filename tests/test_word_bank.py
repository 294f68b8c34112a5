"""Tests for word bank and exclusion list loading.

WHY: Both files are produced by other tools and may be missing, stale,
or malformed. Loading must build the right snapshot from a good file
and degrade to "no matches" (never an exception) on a bad one.
"""

from __future__ import annotations

import json
import logging

import jsonschema
import pytest

from subtitle_vocab.core.ir import Difficulty, WordBank, WordBankEntry
from subtitle_vocab.core.word_bank import (
    exclusions_from_list,
    load_exclusions,
    load_word_bank,
    word_bank_from_dict,
)


# ---------------------------------------------------------------------------
# word_bank_from_dict
# ---------------------------------------------------------------------------


class TestWordBankFromDict:

    def test_entries_are_lowercased(self, sample_bank):
        assert "reluctant" in sample_bank
        assert "Reluctant" not in sample_bank
        assert sample_bank.lookup("reluctant").definition == "unwilling"

    def test_tiers_parsed(self, sample_bank):
        assert sample_bank.lookup("ubiquitous").difficulty == Difficulty.ADVANCED
        assert sample_bank.lookup("obvious").difficulty is None

    def test_lookup_miss_returns_none(self, sample_bank):
        assert sample_bank.lookup("zebra") is None

    def test_first_entry_wins(self):
        bank = word_bank_from_dict({
            "difficultWords": [
                {"word": "cat", "difficulty": "advanced", "translation": "first"},
                {"word": "CAT", "difficulty": "foundation", "translation": "second"},
            ],
        })
        assert len(bank) == 1
        assert bank.lookup("cat").translation == "first"

    def test_word_list_is_the_membership_list(self):
        bank = word_bank_from_dict({
            "difficultWords": [{"word": "cat", "difficulty": "foundation"}],
            "difficultWordList": ["cat", "Dog"],
        })
        assert "dog" in bank
        assert bank.lookup("dog") is None
        assert len(bank) == 2

    def test_empty_strings_become_none(self):
        bank = word_bank_from_dict({
            "difficultWords": [{"word": "cat", "translation": "", "phonetic": None}],
        })
        entry = bank.lookup("cat")
        assert entry.translation is None
        assert entry.phonetic is None

    def test_invalid_shape_raises(self):
        with pytest.raises(jsonschema.ValidationError):
            word_bank_from_dict({"difficultWords": [{"difficulty": "foundation"}]})


class TestWordBankSnapshot:

    def test_entries_are_read_only(self, sample_bank):
        with pytest.raises(TypeError):
            sample_bank.entries["zebra"] = WordBankEntry(word="zebra")
        assert sample_bank.lookup("zebra") is None

    def test_source_mapping_is_copied(self):
        source = {"cat": WordBankEntry(word="cat")}
        bank = WordBank(entries=source, words=frozenset({"cat"}))
        source["dog"] = WordBankEntry(word="dog")
        del source["cat"]
        assert bank.lookup("cat") == WordBankEntry(word="cat")
        assert bank.lookup("dog") is None

    def test_equal_snapshots_compare_equal(self):
        first = WordBank.from_entries([WordBankEntry(word="cat")])
        second = WordBank.from_entries([WordBankEntry(word="cat")])
        assert first == second


class TestDifficulty:

    @pytest.mark.parametrize("value,expected", [
        ("advanced", Difficulty.ADVANCED),
        (" Intermediate ", Difficulty.INTERMEDIATE),
        (Difficulty.FOUNDATION, Difficulty.FOUNDATION),
        ("expert", None),
        (3, None),
        (None, None),
    ])
    def test_parse(self, value, expected):
        assert Difficulty.parse(value) is expected

    def test_lowest_is_foundation(self):
        assert Difficulty.lowest() is Difficulty.FOUNDATION

    def test_has_no_rank_attribute(self):
        assert not hasattr(Difficulty.ADVANCED, "rank")


# ---------------------------------------------------------------------------
# load_word_bank
# ---------------------------------------------------------------------------


class TestLoadWordBank:

    def test_loads_file(self, bank_file):
        bank = load_word_bank(bank_file)
        assert len(bank) == 4
        assert bank.lookup("cautious").translation == "谨慎的"

    def test_missing_file_gives_empty_bank(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            bank = load_word_bank(tmp_path / "nope.json")
        assert bank == WordBank()
        assert "not found" in caplog.text

    def test_invalid_json_gives_empty_bank(self, tmp_path, caplog):
        path = tmp_path / "bank.json"
        path.write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            bank = load_word_bank(path)
        assert len(bank) == 0
        assert "unreadable" in caplog.text

    def test_schema_mismatch_gives_empty_bank(self, tmp_path, caplog):
        path = tmp_path / "bank.json"
        path.write_text(json.dumps({"words": ["cat"]}), encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            bank = load_word_bank(path)
        assert len(bank) == 0
        assert "invalid shape" in caplog.text


# ---------------------------------------------------------------------------
# Exclusions
# ---------------------------------------------------------------------------


class TestExclusions:

    def test_entries_are_normalized(self):
        assert exclusions_from_list(["Hello,", "[World]", 42, "123", None]) == frozenset(
            {"hello", "world"}
        )

    def test_load_file(self, exclusions_file):
        exclusions_file.write_text(json.dumps(["the", "And"]), encoding="utf-8")
        assert load_exclusions(exclusions_file) == frozenset({"the", "and"})

    def test_missing_file_is_empty(self, exclusions_file):
        assert load_exclusions(exclusions_file) == frozenset()

    def test_non_array_is_empty(self, exclusions_file, caplog):
        exclusions_file.write_text(json.dumps({"the": True}), encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            assert load_exclusions(exclusions_file) == frozenset()
        assert "not a JSON array" in caplog.text

    def test_invalid_json_is_empty(self, exclusions_file):
        exclusions_file.write_text("[", encoding="utf-8")
        assert load_exclusions(exclusions_file) == frozenset()
