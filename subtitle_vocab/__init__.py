"""Subtitle Vocabulary Extractor: ranked study words from SRT subtitles.

WHY: A subtitle file is the densest record of the vocabulary a learner will
actually hear in a show or film. Cross-referencing it against a curated,
difficulty-tiered word bank turns it into a short list of words worth
studying, each with the cue lines where it is spoken.

HOW: Three-stage pipeline: parse (SRT text into timed lines), extract
(normalize tokens, filter through the word bank, count per line, rank),
format (pluggable presenters: ranked list, JSON report, CSV export).
Each stage is independently testable.

RULES:
- All formatters consume the same VocabularyReport
- The word bank and exclusion set are explicit snapshots passed into the
  pipeline, never module-level state
- Adding a new output format = one new formatter module, no core changes
"""

__version__ = "0.1.0"
