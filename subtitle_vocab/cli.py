"""Command-line interface for the Subtitle Vocabulary Extractor.

WHY: Users need a simple way to turn a subtitle file into a study list
from the terminal, export raw word counts for word bank work, feed a
"too easy" list back into the exclusion file, and start the HTTP API.

HOW: argparse with four subcommands:
  analyze:  run the pipeline and save formatter outputs next to the input
  export:   print (or save) the raw word-count CSV
  too-easy: merge a JSON array of words into the exclusion list
  serve:    run the FastAPI app with uvicorn
Status messages go to stderr; only the CSV export writes to stdout.

RULES:
- Validates the subtitle extension against SUPPORTED_SUBTITLE_FORMATS
- --word-bank / --exclusions override the .env / config defaults
- A missing or broken word bank degrades to "no matches", not an error
- A decode failure prints one "Error: ..." line and exits 1
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-words-2.csv)
- main() returns the process exit code
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from subtitle_vocab.config import (
    API_HOST,
    API_PORT,
    EXCLUSIONS_PATH,
    MAX_WORDS_DISPLAY,
    SUPPORTED_SUBTITLE_FORMATS,
    WORD_BANK_PATH,
)
from subtitle_vocab.core.ir import VocabularyReport
from subtitle_vocab.core.report import analyze_file
from subtitle_vocab.core.srt_parser import SubtitleDecodeError
from subtitle_vocab.core.word_bank import load_exclusions, load_word_bank
from subtitle_vocab.exclusions import ExclusionStore, load_words_file
from subtitle_vocab.formatters import FORMATTERS
from subtitle_vocab.formatters.base import FormatterOutput
from subtitle_vocab.formatters.word_csv import token_counts_to_csv


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CSV export can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _error(msg: str) -> int:
    print("Error: {}".format(msg), file=sys.stderr)
    return 1


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Resolve the output file path, adding a numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. episode01-words.csv)
    - Conflict: insert a counter before the extension (episode01-words-2.csv)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _check_subtitle_path(path: Path) -> Optional[str]:
    """Return an error message if path is not a usable subtitle file."""
    if not path.is_file():
        return "File not found: {}".format(path)
    ext = path.suffix.lower()
    if ext not in SUPPORTED_SUBTITLE_FORMATS:
        return "Unsupported file type '{}'. Supported formats: {}".format(
            ext, ", ".join(sorted(SUPPORTED_SUBTITLE_FORMATS))
        )
    return None


def _run_analysis(args: argparse.Namespace, input_path: Path) -> VocabularyReport:
    """Load the bank/exclusion snapshots and run one extraction pass."""
    bank = load_word_bank(args.word_bank)
    excluded = load_exclusions(args.exclusions)
    _status("Word bank: {} words ({}), {} excluded".format(
        len(bank), args.word_bank, len(excluded),
    ))
    report = analyze_file(input_path, bank, excluded)
    _status("Parsed {} subtitle lines, {} tokens, {} bank words matched".format(
        len(report.lines), report.total_tokens, len(report.words),
    ))
    return report


def cmd_analyze(args: argparse.Namespace) -> int:
    input_path = Path(args.input_file).resolve()
    problem = _check_subtitle_path(input_path)
    if problem:
        return _error(problem)

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not output_dir.is_dir():
        return _error("Output directory does not exist: {}".format(output_dir))

    if args.formats:
        format_keys = [f.strip() for f in args.formats.split(",") if f.strip()]
        for key in format_keys:
            if key not in FORMATTERS:
                return _error("Unknown format '{}'. Available formats: {}".format(
                    key, ", ".join(sorted(FORMATTERS.keys())),
                ))
    else:
        format_keys = list(FORMATTERS.keys())

    try:
        report = _run_analysis(args, input_path)
    except SubtitleDecodeError as e:
        return _error(str(e))

    saved_files: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key](limit=args.top)
        _status("  Running {} formatter...".format(formatter.name))
        for output in formatter.format(report):
            saved_files.append(_save_output(output, input_path.stem, output_dir))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))
    for f in saved_files:
        _status("  {}".format(f.name))
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    input_path = Path(args.input_file).resolve()
    problem = _check_subtitle_path(input_path)
    if problem:
        return _error(problem)

    try:
        report = _run_analysis(args, input_path)
    except SubtitleDecodeError as e:
        return _error(str(e))

    content = token_counts_to_csv(report.token_counts)
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(content, encoding="utf-8")
        _status("Wrote {} words, {} tokens to {}".format(
            len(report.token_counts), report.total_tokens, out_path,
        ))
    else:
        sys.stdout.write(content)
    return 0


def cmd_too_easy(args: argparse.Namespace) -> int:
    try:
        words = load_words_file(args.words_file)
    except FileNotFoundError:
        return _error("File not found: {}".format(args.words_file))
    except ValueError as e:
        return _error(str(e))

    if not words:
        _status("No words to merge.")
        return 0

    result = ExclusionStore(args.exclusions).merge(words)
    _status("Merged {} entries into {} ({} new, total {}).".format(
        len(words), args.exclusions, result.added, result.total,
    ))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from subtitle_vocab.server.app import app

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


def _add_data_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--word-bank",
        default=WORD_BANK_PATH,
        help="Path to the word bank JSON (default: %(default)s).",
    )
    parser.add_argument(
        "--exclusions",
        default=EXCLUSIONS_PATH,
        help="Path to the too-easy exclusion list JSON (default: %(default)s).",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without running the pipeline.
    """
    parser = argparse.ArgumentParser(
        prog="subtitle-vocab",
        description="Extract ranked study vocabulary from SRT subtitle files.",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    analyze = sub.add_parser("analyze", help="Rank word bank vocabulary in a subtitle file")
    analyze.add_argument("input_file", help="Path to the .srt subtitle file.")
    analyze.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )
    analyze.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )
    analyze.add_argument(
        "--top",
        type=int,
        default=MAX_WORDS_DISPLAY,
        help="Number of ranked words to show (default: %(default)s).",
    )
    _add_data_arguments(analyze)
    analyze.set_defaults(func=cmd_analyze)

    export = sub.add_parser("export", help="Export raw word counts as CSV")
    export.add_argument("input_file", help="Path to the .srt subtitle file.")
    export.add_argument(
        "--out", "-o",
        default=None,
        help="Write the CSV to this path instead of stdout.",
    )
    _add_data_arguments(export)
    export.set_defaults(func=cmd_export)

    too_easy = sub.add_parser("too-easy", help="Merge a JSON word list into the exclusion list")
    too_easy.add_argument("words_file", help="Path to a JSON array of words.")
    too_easy.add_argument(
        "--exclusions",
        default=EXCLUSIONS_PATH,
        help="Path to the too-easy exclusion list JSON (default: %(default)s).",
    )
    too_easy.set_defaults(func=cmd_too_easy)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=API_HOST, help="Bind address (default: %(default)s).")
    serve.add_argument("--port", type=int, default=API_PORT, help="Port (default: %(default)s).")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
