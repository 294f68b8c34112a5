"""Token normalization for word matching.

WHY: Subtitle text is noisy. Punctuation, SFX brackets, digits, quotes,
and the other script of a bilingual file all cling to words. Matching
against the word bank needs one canonical key per word.

HOW: Lowercase the token, then strip every leading and trailing character
that is not an ASCII letter a-z. Characters inside the word are kept.

RULES:
- "Hello," → "hello", "[laughs]" → "laughs", "don't" → "don't"
- A token with no ASCII letters normalizes to "" (rejected by callers)
- No lemmatization; inflected forms are the word bank generator's job
- normalize_word(normalize_word(x)) == normalize_word(x)
- The rule must stay exactly as written: any change alters match results
"""

from __future__ import annotations

import re

# Leading or trailing run of anything that is not a-z.
_EDGE_RE = re.compile(r"^[^a-z]+|[^a-z]+\Z")


def normalize_word(token: str) -> str:
    """Return the canonical matching form of token, or "" if it has none."""
    if not token or not isinstance(token, str):
        return ""
    return _EDGE_RE.sub("", token.lower())
