"""Pydantic response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for response
serialization and automatic OpenAPI documentation. Pydantic models
enforce field types at runtime and generate JSON Schema that appears in
the /docs UI.

HOW: One model per response shape. Lane and placement models mirror the
plan JSON written by the plan_json formatter, so API clients and file
consumers read the same structure.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- OutputFormat values match keys in srt_splitter.formatters.FORMATTERS
- Response models never expose opaque host objects; non-JSON refs are stringified
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Available output format identifiers.

    RULES:
    - Values match keys in srt_splitter.formatters.FORMATTERS exactly
    """

    plan_json = "plan_json"
    plain_text = "plain_text"
    lane_srt = "lane_srt"


class LaneModel(BaseModel):
    """One output lane of a split plan."""

    position: int = Field(description="Creation order of the lane, 0-based.")
    speaker: Optional[str] = Field(
        default=None,
        description="Speaker label, or null for the default (unlabeled) lane.",
    )
    name: str = Field(description="Track name for the host editor.")
    default: bool = Field(description="True for the default (unlabeled) lane.")


class SourceModel(BaseModel):
    """The source item a placement is trimmed from."""

    start: float = Field(description="Source item start on the timeline, in seconds.")
    end: float = Field(description="Source item end on the timeline, in seconds.")
    ref: Any = Field(default=None, description="Opaque host reference for the source item.")
    group: Any = Field(default=None, description="Parent track identity of the source item.")


class PlacementModel(BaseModel):
    """One trimmed clip of a split plan."""

    cue: int = Field(description="Declared index of the subtitle cue.")
    lane: int = Field(description="Position of the lane receiving the clip.")
    start: float = Field(description="Clip start on the timeline, in seconds (padded).")
    end: float = Field(description="Clip end on the timeline, in seconds (padded).")
    length: float = Field(description="Clip length in seconds.")
    offset: float = Field(description="Trim offset into the source item, in seconds.")
    source: SourceModel = Field(description="The source item the clip is cut from.")
    text: str = Field(description="Clip name: cue text without the speaker label.")


class RenderedFile(BaseModel):
    """One formatter output returned inline."""

    format: OutputFormat = Field(description="Formatter that produced this file.")
    suffix: str = Field(description="File suffix to append to the subtitle stem.")
    media_type: str = Field(description="MIME type of the content.")
    content: str = Field(description="File content.")


class SplitResponse(BaseModel):
    """The split plan for an uploaded subtitle file."""

    source: str = Field(description="Uploaded subtitle filename.")
    lanes: List[LaneModel] = Field(description="Lanes in creation order; default lane first.")
    placements: List[PlacementModel] = Field(description="Placements in cue order.")
    files: Optional[List[RenderedFile]] = Field(
        default=None,
        description="Rendered outputs, only present when output_formats was given.",
    )


class MatchErrorDetail(BaseModel):
    """Detail body for a cue that fits no source item."""

    message: str = Field(description="Human-readable error message.")
    cue_index: int = Field(description="Declared index of the failing subtitle cue.")
    placed: int = Field(description="Number of cues placed before the failure.")


class ErrorResponse(BaseModel):
    """Consistent error response body."""

    detail: Any = Field(description="Error message or structured error detail.")


class FormatInfo(BaseModel):
    """Metadata for one output format."""

    key: OutputFormat = Field(description="Format identifier for output_formats.")
    name: str = Field(description="Human-readable format name.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status ('ok').")
    version: str = Field(description="Service version string.")
