"""SRT subtitle parsing into timed cue lines.

WHY: Everything downstream works on cues: a sequence number, a time
range, and one line of dialogue. Real-world SRT files are frequently
imperfect (missing indices, stray blocks, odd line endings), so the
parser has to be lenient and keep whatever cues it can.

HOW: Normalize line endings, split the text into blocks on blank lines,
and read each block as [index] / timecode / text lines. Blocks that do
not fit the shape are dropped without comment.

RULES:
- CRLF → LF before anything else
- Trimming removes Unicode whitespace and stray U+FEFF marks
- Blocks are separated by two or more consecutive newlines
- A block needs at least 2 lines, else it is skipped
- First line is the declared index if it is an integer; otherwise the id
  is the number of cues already emitted + 1
- The next line must contain "HH:MM:SS,mmm --> HH:MM:SS,mmm", else skip
- Remaining lines are joined with single spaces and trimmed; empty → skip
- Declared ids are kept as-is, even when duplicated or out of order
- Only byte decoding can fail (SubtitleDecodeError); parsing never raises
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Union

from subtitle_vocab.core.ir import SubtitleLine

_BLOCK_SPLIT_RE = re.compile(r"\n{2,}")
_INDEX_RE = re.compile(r"^[+-]?\d+$", re.ASCII)
# Unicode \s: non-breaking spaces around the arrow are common
_TIMECODE_RE = re.compile(
    r"([0-9]{2}:[0-9]{2}:[0-9]{2},[0-9]{3})\s+-->\s+([0-9]{2}:[0-9]{2}:[0-9]{2},[0-9]{3})"
)
# Whitespace plus stray BOMs left behind by concatenated files
_EDGE_SPACE_RE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+\Z")


class SubtitleDecodeError(ValueError):
    """Raised when subtitle bytes cannot be decoded as UTF-8 text.

    WHY: A file that is not text is the one hard failure of the pipeline.
    Callers (CLI, API) surface the message to the user as-is and keep
    their previous results untouched.
    """


def decode_subtitle(data: bytes) -> str:
    """Decode raw subtitle bytes as UTF-8, dropping a leading BOM.

    Raises:
        SubtitleDecodeError: If the bytes are not valid UTF-8.
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise SubtitleDecodeError(
            "Could not read subtitles: the file is not valid UTF-8 text "
            "(byte {} is invalid). Please provide a UTF-8 .srt file.".format(exc.start)
        ) from exc


def _trim(text: str) -> str:
    return _EDGE_SPACE_RE.sub("", text)


def timecode_to_ms(timecode: str) -> int:
    """Convert an SRT timestamp "HH:MM:SS,mmm" to milliseconds."""
    hours, minutes, rest = timecode.split(":")
    seconds, millis = rest.split(",")
    return ((int(hours) * 60 + int(minutes)) * 60 + int(seconds)) * 1000 + int(millis)


def parse_srt(content: str) -> List[SubtitleLine]:
    """Parse SRT text into an ordered list of SubtitleLine objects.

    Args:
        content: The full subtitle file as text.

    Returns:
        Cues in source order. Empty when nothing usable was found.
    """
    blocks = [_trim(b) for b in _BLOCK_SPLIT_RE.split(content.replace("\r\n", "\n"))]

    lines: List[SubtitleLine] = []

    for block in blocks:
        if not block:
            continue
        parts = block.split("\n")
        if len(parts) < 2:
            continue

        idx = 0
        # First line may be the cue number
        index_line = _trim(parts[0])
        if _INDEX_RE.match(index_line):
            cue_id = int(index_line)
            idx += 1
        else:
            cue_id = len(lines) + 1

        time_line = parts[idx] if idx < len(parts) else ""
        match = _TIMECODE_RE.search(time_line)
        if not match:
            continue
        idx += 1

        text = _trim(" ".join(parts[idx:]))
        if not text:
            continue

        lines.append(SubtitleLine(
            id=cue_id,
            start_ms=timecode_to_ms(match.group(1)),
            end_ms=timecode_to_ms(match.group(2)),
            text=text,
        ))

    return lines


def read_subtitle_file(path: Union[str, Path]) -> List[SubtitleLine]:
    """Read, decode, and parse a subtitle file from disk.

    Raises:
        FileNotFoundError: If the file does not exist.
        SubtitleDecodeError: If the file is not UTF-8 text.
    """
    return parse_srt(decode_subtitle(Path(path).read_bytes()))
