"""FastAPI application with vocabulary analysis routes and OpenAPI docs.

WHY: A web or mobile study client needs an HTTP API to upload a subtitle
file and get its ranked vocabulary back, download the raw word-count CSV,
and feed "too easy" words back into the exclusion list. FastAPI provides
automatic OpenAPI documentation and request validation.

HOW: A single FastAPI app exposes the endpoints grouped by tags. Upload
endpoints read the multipart file, decode it, and run the extraction
pass in a worker thread (asyncio.to_thread) so the event loop stays
responsive. Each request loads a fresh word bank snapshot in that same
worker thread; the exclusion list goes through the module-level
ExclusionStore, which serializes merges.

RULES:
- All endpoints have OpenAPI descriptions on every parameter and response
- Error responses use a consistent ErrorResponse schema
- File validation checks extension against SUPPORTED_SUBTITLE_FORMATS
- Undecodable uploads are a 400, oversized uploads a 413
- File reads and extraction never run on the event loop
- The exclusion store is a singleton created at import time
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Tuple

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from subtitle_vocab import __version__
from subtitle_vocab.config import (
    API_HOST,
    API_PORT,
    EXCLUSIONS_PATH,
    MAX_CONTEXTS_PREVIEW,
    MAX_UPLOAD_BYTES,
    MAX_WORDS_DISPLAY,
    SUPPORTED_SUBTITLE_FORMATS,
    WORD_BANK_PATH,
)
from subtitle_vocab.core.ir import ExtractedWord, VocabularyReport
from subtitle_vocab.core.normalizer import normalize_word
from subtitle_vocab.core.report import analyze_text
from subtitle_vocab.core.srt_parser import SubtitleDecodeError, decode_subtitle
from subtitle_vocab.core.word_bank import load_word_bank
from subtitle_vocab.exclusions import ExclusionStore
from subtitle_vocab.formatters.word_csv import token_counts_to_csv
from subtitle_vocab.server.models import (
    AnalysisResponse,
    ContextResponse,
    ErrorResponse,
    HealthResponse,
    TooEasyListResponse,
    TooEasyRequest,
    TooEasyResponse,
    WordResponse,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App and store setup
# ---------------------------------------------------------------------------

exclusion_store = ExclusionStore(EXCLUSIONS_PATH)

app = FastAPI(
    title="Subtitle Vocabulary API",
    description=(
        "REST API for extracting study vocabulary from SRT subtitle files. "
        "Upload a file to get its difficult words ranked by frequency with "
        "example cues, export raw word counts as CSV, and maintain the "
        "list of words marked as too easy."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _validate_file_extension(filename: str) -> None:
    """Raise HTTPException if the file extension is not supported."""
    ext = Path(filename).suffix.lower()
    if ext not in SUPPORTED_SUBTITLE_FORMATS:
        sorted_formats = sorted(SUPPORTED_SUBTITLE_FORMATS)
        raise HTTPException(
            status_code=400,
            detail="Unsupported file type '{}'. Supported formats: {}".format(
                ext, ", ".join(sorted_formats)
            ),
        )


async def _read_upload(file: UploadFile) -> Tuple[str, str]:
    """Validate and decode an uploaded subtitle file.

    Returns:
        (sanitized filename, decoded text)
    """
    # Sanitize filename to prevent path traversal
    filename = Path(file.filename or "upload.srt").name
    _validate_file_extension(filename)

    # One byte past the limit is enough to tell an oversized upload
    data = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail="File too large (max {} bytes).".format(MAX_UPLOAD_BYTES),
        )

    try:
        content = decode_subtitle(data)
    except SubtitleDecodeError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return filename, content


def _analyze(content: str, filename: str) -> VocabularyReport:
    """Load fresh bank and exclusion snapshots and run one extraction pass.

    Blocking (file I/O, schema validation, extraction); call via asyncio.to_thread.
    """
    bank = load_word_bank(WORD_BANK_PATH)
    excluded = exclusion_store.snapshot()
    return analyze_text(content, bank, excluded, filename)


async def _analyze_upload(file: UploadFile) -> VocabularyReport:
    filename, content = await _read_upload(file)
    report = await asyncio.to_thread(_analyze, content, filename)
    logger.info(
        "Analyzed %s: %d lines, %d bank words matched",
        filename, len(report.lines), len(report.words),
    )
    return report


def _word_to_response(word: ExtractedWord, contexts_preview: int) -> WordResponse:
    return WordResponse(
        word=word.word,
        occurrences=word.occurrences,
        difficulty=word.difficulty,
        translation=word.translation,
        phonetic=word.phonetic,
        contexts=[
            ContextResponse(
                subtitle_id=ctx.subtitle_id,
                start_ms=ctx.start_ms,
                end_ms=ctx.end_ms,
                text=ctx.text,
            )
            for ctx in word.contexts[:contexts_preview]
        ],
    )


# ---------------------------------------------------------------------------
# Endpoints: Analyses
# ---------------------------------------------------------------------------


@app.post(
    "/analyses",
    response_model=AnalysisResponse,
    tags=["analyses"],
    summary="Rank the difficult vocabulary of a subtitle file",
    description=(
        "Upload an SRT file. Returns the word bank words it contains, ranked "
        "by the number of subtitle lines they appear in, with example cues. "
        "Words marked as too easy are left out."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unsupported file type or undecodable file"},
        413: {"model": ErrorResponse, "description": "File too large"},
    },
)
async def create_analysis(
    file: Annotated[
        UploadFile,
        File(description="SRT subtitle file (UTF-8)."),
    ],
    limit: Annotated[
        int,
        Form(ge=1, description="Maximum number of ranked words to return."),
    ] = MAX_WORDS_DISPLAY,
    contexts: Annotated[
        int,
        Form(ge=0, description="Maximum number of example cues per word."),
    ] = MAX_CONTEXTS_PREVIEW,
) -> AnalysisResponse:
    report = await _analyze_upload(file)
    return AnalysisResponse(
        source=report.source_filename,
        line_count=len(report.lines),
        total_tokens=report.total_tokens,
        total_words=len(report.words),
        total_occurrences=report.total_occurrences,
        words=[_word_to_response(w, contexts) for w in report.words[:limit]],
    )


@app.post(
    "/analyses/export",
    tags=["analyses"],
    summary="Export raw word counts as CSV",
    description=(
        "Upload an SRT file. Returns a CSV attachment with every distinct word "
        "in the file, its raw token count, and its word bank metadata if any. "
        "The too-easy list is not applied."
    ),
    responses={
        200: {"content": {"text/csv": {}}, "description": "CSV attachment"},
        400: {"model": ErrorResponse, "description": "Unsupported file type or undecodable file"},
        413: {"model": ErrorResponse, "description": "File too large"},
    },
)
async def export_analysis(
    file: Annotated[
        UploadFile,
        File(description="SRT subtitle file (UTF-8)."),
    ],
) -> Response:
    report = await _analyze_upload(file)
    filename = "{}-words.csv".format(Path(report.source_filename).stem)
    return Response(
        content=token_counts_to_csv(report.token_counts),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(filename)},
    )


# ---------------------------------------------------------------------------
# Endpoints: Too-easy list
# ---------------------------------------------------------------------------


@app.get(
    "/too-easy",
    response_model=TooEasyListResponse,
    tags=["too-easy"],
    summary="List words marked as too easy",
    description="Returns the persisted exclusion list, sorted.",
)
async def list_too_easy() -> TooEasyListResponse:
    words = await asyncio.to_thread(exclusion_store.list_words)
    return TooEasyListResponse(words=words, total=len(words))


@app.post(
    "/too-easy",
    response_model=TooEasyResponse,
    tags=["too-easy"],
    summary="Merge words into the too-easy list",
    description=(
        "Normalizes each word and adds it to the persisted exclusion list. "
        "Words already on the list are ignored, so repeating a request is safe."
    ),
)
async def merge_too_easy(request: TooEasyRequest) -> TooEasyResponse:
    result = await asyncio.to_thread(exclusion_store.merge, request.words)
    return TooEasyResponse(ok=True, added=result.added, total=result.total)


@app.put(
    "/too-easy/{word}",
    response_model=TooEasyResponse,
    tags=["too-easy"],
    summary="Mark a single word as too easy",
    description="Normalizes the word and adds it to the persisted exclusion list.",
    responses={
        422: {"model": ErrorResponse, "description": "Word contains no letters"},
    },
)
async def mark_too_easy(word: str) -> TooEasyResponse:
    if not normalize_word(word):
        raise HTTPException(
            status_code=422,
            detail="'{}' does not contain a word.".format(word),
        )
    result = await asyncio.to_thread(exclusion_store.mark_too_easy, word)
    return TooEasyResponse(ok=True, added=result.added, total=result.total)


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the subtitle-vocab-api console script."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    uvicorn.run(app, host=API_HOST, port=API_PORT)
