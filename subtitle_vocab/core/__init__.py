"""Core parsing, normalization, and extraction modules.

WHY: The core package is the stable heart of the tool: the IR
dataclasses and the subtitle → ranked vocabulary pipeline. Everything
else (formatters, CLI, API) is thin glue around it.

HOW: ir.py defines the data structures, srt_parser.py turns text into
cues, normalizer.py canonicalizes tokens, word_bank.py loads the bank
and exclusion list, extractor.py aggregates and ranks, report.py runs
one complete pass.

RULES:
- IR dataclasses are the contract; change with care
- The core never truncates, prints, or persists anything
- No module-level mutable state: bank and exclusions are always passed in
"""
