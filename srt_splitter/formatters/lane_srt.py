"""Per-lane SRT formatter.

WHY: Voice actors and ADR sessions work one character at a time. Once
the subtitle file has been split by speaker, each lane's cues are also
useful as a standalone subtitle file: the speaker's lines only, with the
label stripped and the padded timing the editor will actually cut.

HOW: For every lane that received at least one placement, the
placements are renumbered from 1 and written as SRT blocks. The file
suffix carries the lane position and a filesystem-safe lane name.

RULES:
- One file per non-empty lane, in lane order
- Suffix: "-{position:02d}-{slug}.srt"; the default lane's slug is "unlabeled"
- Cue numbers restart at 1 in every file
- Timestamps use HH:MM:SS,mmm, rounded to the millisecond
- Text is the placement text (speaker label removed, line breaks replaced)
- Media type: "application/x-subrip"
"""

from __future__ import annotations

import re
from typing import List

from srt_splitter.core.ir import Lane, Placement, SplitPlan
from srt_splitter.formatters.base import BaseFormatter, FormatterOutput

_UNSAFE_RE = re.compile(r"[^\w\-]+")


def format_timestamp(seconds: float) -> str:
    """Format seconds as an SRT timestamp (HH:MM:SS,mmm)."""
    total_ms = int(round(max(0.0, seconds) * 1000))
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs, millis = divmod(rest, 1000)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, secs, millis)


def lane_slug(lane: Lane) -> str:
    if lane.is_default:
        return "unlabeled"
    slug = _UNSAFE_RE.sub("_", lane.name).strip("_")
    return slug or "speaker"


def render_srt(placements: List[Placement]) -> str:
    blocks = []
    for number, p in enumerate(placements, start=1):
        blocks.append("{}\n{} --> {}\n{}\n".format(
            number,
            format_timestamp(p.start),
            format_timestamp(p.end),
            p.text,
        ))
    return "\n".join(blocks)


class LaneSRTFormatter(BaseFormatter):
    """Formatter that writes one SRT file per populated lane."""

    @property
    def name(self) -> str:
        return "Per-Lane SRT"

    def format(self, plan: SplitPlan) -> List[FormatterOutput]:
        outputs = []
        for lane in plan.lanes:
            placements = plan.placements_for(lane)
            if not placements:
                continue
            outputs.append(FormatterOutput(
                suffix="-{:02d}-{}.srt".format(lane.position, lane_slug(lane)),
                content=render_srt(placements),
                media_type="application/x-subrip",
            ))
        return outputs
