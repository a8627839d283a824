"""End-to-end split pipeline: segments in, subtitle in, plan out.

WHY: The CLI, the HTTP API and timeline hosts all run the same sequence:
check the selection, parse the subtitle file, clean and attribute every
cue, match. Keeping that sequence in one place means the three callers
cannot drift apart, and it is the one layer that logs what happened.

HOW: load_segments() turns a JSON document into CandidateSegments after
validating it with jsonschema. validate_segments() enforces the
single-parent rule. prepare_cues() normalizes each cue, replaces line
breaks and extracts the speaker. split_subtitles() ties it together and
hands the attributed cues to the matcher.

RULES:
- Segment validation runs before any parsing or matching
- Cue text is normalized first, then "\\n" is replaced, then the speaker
  is extracted (the order matters: invisible characters can hide a bracket)
- Errors propagate as SplitError subclasses; this module only logs them
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

import jsonschema

from srt_splitter.config import SplitConfig
from srt_splitter.core.errors import ConfigurationError, MatchError
from srt_splitter.core.ir import CandidateSegment, Cue, SplitPlan
from srt_splitter.core.matcher import build_plan
from srt_splitter.core.normalizer import normalize
from srt_splitter.core.parser import parse_srt, read_srt
from srt_splitter.core.speaker import extract_speaker

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"
SEGMENTS_SCHEMA_PATH = SCHEMA_DIR / "segments.schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def _get_segments_schema() -> dict:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(SEGMENTS_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def segments_from_data(data: Any) -> List[CandidateSegment]:
    """Build CandidateSegments from a decoded segments document.

    Accepts either a list of segment objects or ``{"segments": [...]}``.
    Each object has ``start`` and either ``end`` or ``length``.

    Raises:
        ConfigurationError: If the document does not match the schema.
    """
    try:
        jsonschema.validate(instance=data, schema=_get_segments_schema())
    except jsonschema.ValidationError as exc:
        raise ConfigurationError("Invalid segments document: {}".format(exc.message)) from exc

    items = data["segments"] if isinstance(data, dict) else data
    segments = []
    for item in items:
        start = float(item["start"])
        end = float(item["end"]) if "end" in item else start + float(item["length"])
        segments.append(CandidateSegment(
            start=start,
            end=end,
            ref=item.get("ref"),
            group=item.get("group"),
        ))
    return segments


def load_segments(source: Union[str, Path, bytes]) -> List[CandidateSegment]:
    """Load candidate segments from a JSON file path or raw JSON bytes.

    Raises:
        ConfigurationError: If the file is unreadable, not JSON, or
            does not match the segments schema.
    """
    try:
        if isinstance(source, bytes):
            data = json.loads(source.decode("utf-8"))
        else:
            data = json.loads(Path(source).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError("Failed to read segments file {}: {}".format(source, exc)) from exc
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError("Segments document is not valid JSON: {}".format(exc)) from exc
    return segments_from_data(data)


def validate_segments(segments: Sequence[CandidateSegment]) -> None:
    """Enforce that a non-empty selection sits on one parent group.

    Raises:
        ConfigurationError: If ``segments`` is empty or spans more than
            one group.
    """
    if not segments:
        raise ConfigurationError("No source items selected")
    group = segments[0].group
    for segment in segments[1:]:
        if segment.group != group:
            raise ConfigurationError("Selected items span more than one track")


def prepare_cues(
    cues: Iterable[Cue],
    newline_replace: str = " ",
) -> List[Tuple[Cue, Optional[str], str]]:
    """Normalize, flatten and attribute every cue.

    Returns ``(cue, speaker, content)`` triples in cue order.
    """
    attributed = []
    for cue in cues:
        text = normalize(cue.text).replace("\n", newline_replace)
        speaker, content = extract_speaker(text)
        attributed.append((cue, speaker, content))
    return attributed


def split_cues(
    cues: Sequence[Cue],
    segments: Sequence[CandidateSegment],
    config: Optional[SplitConfig] = None,
    source_filename: str = "",
) -> SplitPlan:
    """Split already-parsed cues across ``segments``.

    Raises:
        ConfigurationError: If the segment selection is unusable.
        MatchError: For the first cue no segment contains.
    """
    validate_segments(segments)
    return _plan_cues(cues, segments, config or SplitConfig(), source_filename)


def _plan_cues(
    cues: Sequence[Cue],
    segments: Sequence[CandidateSegment],
    config: SplitConfig,
    source_filename: str,
) -> SplitPlan:
    attributed = prepare_cues(cues, config.newline_replace)
    try:
        plan = build_plan(
            attributed,
            segments,
            padding_start=config.padding_start,
            padding_end=config.padding_end,
            source_filename=source_filename,
        )
    except MatchError as exc:
        logger.info(
            "Subtitle %s fits no selected item; stopped after %d placement(s)",
            exc.cue_index, len(exc.placements),
        )
        raise
    logger.info(
        "Planned %d placement(s) on %d lane(s) from %s",
        len(plan.placements), len(plan.lanes), source_filename or "<memory>",
    )
    return plan


def split_subtitles(
    subtitle: Union[str, Path, bytes],
    segments: Sequence[CandidateSegment],
    config: Optional[SplitConfig] = None,
    source_filename: Optional[str] = None,
) -> SplitPlan:
    """Run the full pipeline on a subtitle file path or raw SRT bytes.

    Args:
        subtitle: Path to an .srt file, or its raw bytes.
        segments: Candidate segments in host order.
        config: Split options; defaults to SplitConfig().
        source_filename: Name recorded on the plan. Defaults to the
            file name when ``subtitle`` is a path.

    Raises:
        ConfigurationError: If the segment selection is unusable.
        SubtitleReadError: If the subtitle file cannot be read.
        MatchError: For the first cue no segment contains.
    """
    validate_segments(segments)

    if isinstance(subtitle, bytes):
        cues = parse_srt(subtitle)
        name = source_filename or ""
    else:
        cues = read_srt(subtitle)
        name = source_filename or Path(subtitle).name
    logger.debug("Parsed %d cue(s) from %s", len(cues), name or "<memory>")

    return _plan_cues(cues, segments, config or SplitConfig(), name)
