"""Split plan JSON formatter.

WHY: Host editors (and their scripting bridges) need the plan in a
machine-readable form they can apply without re-running the matcher:
which lanes to create, in which order, and which trimmed range of which
source item goes where.

HOW: Lanes and placements are flattened into plain dicts. Placements
refer to lanes by position, so the host can create tracks first and
then fill them. The document is validated against
schemas/split_plan.schema.json before returning.

RULES:
- Schema version is "1.0.0"
- Lanes are listed in creation order; the default lane has speaker null
- Placements are listed in cue order; "lane" is the lane position
- "offset" is the trim offset into the source item, in seconds
- Segment refs pass through when they are JSON values (dicts and lists
  included); anything else is written with str()
- Output suffix: "-split.json"
- Validate output against the schema before returning; raise on failure
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from srt_splitter.core.ir import Lane, Placement, SplitPlan
from srt_splitter.formatters.base import BaseFormatter, FormatterOutput

PLAN_VERSION = "1.0.0"

_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "split_plan.schema.json"

_CACHED_SCHEMA: dict[str, Any] | None = None


def _get_schema() -> dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _json_safe(value: Any) -> Any:
    """Keep JSON values (including nested dicts and lists); str() the rest."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return str(value)


def _group_value(group: Any) -> Any:
    if group is None or isinstance(group, (str, int)):
        return group
    return str(group)


def _lane_to_dict(lane: Lane) -> dict[str, Any]:
    return {
        "position": lane.position,
        "speaker": lane.key,
        "name": lane.name,
        "default": lane.is_default,
    }


def _placement_to_dict(placement: Placement) -> dict[str, Any]:
    segment = placement.segment
    return {
        "cue": placement.cue_index,
        "lane": placement.lane.position,
        "start": placement.start,
        "end": placement.end,
        "length": placement.length,
        "offset": placement.offset,
        "source": {
            "start": segment.start,
            "end": segment.end,
            "ref": _json_safe(segment.ref),
            "group": _group_value(segment.group),
        },
        "text": placement.text,
    }


def plan_to_dict(plan: SplitPlan) -> dict[str, Any]:
    """Convert a SplitPlan into the schema-shaped dict."""
    return {
        "version": PLAN_VERSION,
        "source": plan.source_filename,
        "lanes": [_lane_to_dict(lane) for lane in plan.lanes],
        "placements": [_placement_to_dict(p) for p in plan.placements],
    }


class PlanJSONFormatter(BaseFormatter):
    """Formatter that produces the split plan as validated JSON."""

    @property
    def name(self) -> str:
        return "Split Plan JSON"

    def format(self, plan: SplitPlan) -> list[FormatterOutput]:
        """Render the plan as JSON.

        Raises:
            jsonschema.ValidationError: If the generated document does
                not conform to the split plan schema.
        """
        output = plan_to_dict(plan)
        jsonschema.validate(instance=output, schema=_get_schema())

        content = json.dumps(output, indent=2, ensure_ascii=False)

        return [
            FormatterOutput(
                suffix="-split.json",
                content=content,
                media_type="application/json",
            )
        ]
