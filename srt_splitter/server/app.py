"""FastAPI application with split planning routes and OpenAPI docs.

WHY: Host-editor bridges need an HTTP API to submit a subtitle file
with the current item selection and get a split plan back. FastAPI
provides automatic OpenAPI documentation and request validation.

HOW: POST /splits accepts a multipart upload (subtitle file + segments
JSON + optional config fields), runs the pipeline synchronously (a
split is pure in-memory work) and returns the plan, optionally with
rendered formatter outputs inline. GET /formats and GET /health round
out the API.

RULES:
- Config precedence: defaults < env < config.ini (CWD) < form fields
- ConfigurationError and SubtitleReadError → 400
- MatchError → 422 with the failing cue index and placed count
- Unknown output format → 400
- Only .srt uploads are accepted
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, List, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile

from srt_splitter import __version__
from srt_splitter.config import SUBTITLE_EXTENSIONS, load_config
from srt_splitter.core.errors import MatchError, SplitError
from srt_splitter.core.ir import SplitPlan
from srt_splitter.formatters import FORMATTERS
from srt_splitter.formatters.plan_json import plan_to_dict
from srt_splitter.pipeline import load_segments, split_subtitles
from srt_splitter.server.models import (
    ErrorResponse,
    FormatInfo,
    HealthResponse,
    MatchErrorDetail,
    RenderedFile,
    SplitResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="SRT Splitter API",
    description=(
        "REST API for splitting timeline audio items by subtitle cues. "
        "Upload an SRT file with the selected source items and receive a "
        "plan of trimmed clips, one lane per speaker."
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
    if ext not in SUBTITLE_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail="Unsupported file type '{}'. Supported formats: {}".format(
                ext, ", ".join(sorted(SUBTITLE_EXTENSIONS))
            ),
        )


def _parse_format_keys(output_formats: Optional[str]) -> List[str]:
    if not output_formats:
        return []
    keys = [f.strip() for f in output_formats.split(",") if f.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            raise HTTPException(
                status_code=400,
                detail="Unknown output format '{}'. Available: {}".format(key, available),
            )
    return keys


def _json_text(text: str) -> str:
    """Replace undecodable subtitle bytes (lone surrogates) with U+FFFD."""
    return text.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")


def _render(plan: SplitPlan, keys: List[str]) -> List[RenderedFile]:
    files = []
    for key in keys:
        for output in FORMATTERS[key]().format(plan):
            content = output.content
            if isinstance(content, bytes):
                content = content.decode("utf-8", errors="replace")
            else:
                content = _json_text(content)
            files.append(RenderedFile(
                format=key,
                suffix=output.suffix,
                media_type=output.media_type,
                content=content,
            ))
    return files


# ---------------------------------------------------------------------------
# Endpoints: Splits
# ---------------------------------------------------------------------------


@app.post(
    "/splits",
    response_model=SplitResponse,
    tags=["splits"],
    summary="Plan a subtitle split",
    description=(
        "Upload an SRT file and the selected source items. Returns the lanes "
        "(default lane first, then one per speaker in order of first "
        "appearance) and one trimmed placement per cue."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid file, segments or format"},
        422: {"model": ErrorResponse, "description": "A cue fits no selected source item"},
    },
)
async def create_split(
    file: Annotated[
        UploadFile,
        File(description="SRT subtitle file"),
    ],
    segments: Annotated[
        str,
        Form(
            description=(
                "JSON list of selected source items, in timeline order: "
                "[{\"start\": 0, \"end\": 10, \"ref\": \"item-1\", \"group\": \"track-1\"}]."
            )
        ),
    ],
    newline_replace: Annotated[
        Optional[str],
        Form(description="String substituted for line breaks inside a cue."),
    ] = None,
    padding_start: Annotated[
        Optional[float],
        Form(description="Seconds subtracted from every cue start."),
    ] = None,
    padding_end: Annotated[
        Optional[float],
        Form(description="Seconds added to every cue end."),
    ] = None,
    output_formats: Annotated[
        Optional[str],
        Form(
            description=(
                "Comma-separated output formats to render inline. Available: "
                "plan_json, plain_text, lane_srt. Defaults to none."
            )
        ),
    ] = None,
) -> SplitResponse:
    filename = Path(file.filename or "upload.srt").name
    _validate_file_extension(filename)
    format_keys = _parse_format_keys(output_formats)

    config = load_config(overrides={
        "newline_replace": newline_replace,
        "padding_start": padding_start,
        "padding_end": padding_end,
    })

    content = await file.read()
    try:
        candidate_segments = load_segments(segments.encode("utf-8"))
        plan = split_subtitles(content, candidate_segments, config, source_filename=filename)
    except MatchError as exc:
        raise HTTPException(
            status_code=422,
            detail=MatchErrorDetail(
                message=str(exc),
                cue_index=exc.cue_index,
                placed=len(exc.placements),
            ).model_dump(),
        )
    except SplitError as exc:
        logger.info("Rejected split for %s: %s", filename, exc)
        raise HTTPException(status_code=400, detail=str(exc))

    body = plan_to_dict(plan)
    for lane in body["lanes"]:
        lane["name"] = _json_text(lane["name"])
        if lane["speaker"] is not None:
            lane["speaker"] = _json_text(lane["speaker"])
    for placement in body["placements"]:
        placement["text"] = _json_text(placement["text"])
    return SplitResponse(
        source=body["source"],
        lanes=body["lanes"],
        placements=body["placements"],
        files=_render(plan, format_keys) if format_keys else None,
    )


# ---------------------------------------------------------------------------
# Endpoints: Formats
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
)
async def list_formats() -> List[FormatInfo]:
    return [
        FormatInfo(key=key, name=formatter_cls().name)
        for key, formatter_cls in sorted(FORMATTERS.items())
    ]


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
    """Entry point for the srt-splitter-api console script."""
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
