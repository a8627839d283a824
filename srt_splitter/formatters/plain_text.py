"""Plain text split report grouped by lane.

WHY: Before applying a plan to a project, editors want to eyeball it:
which speakers were found, how many cuts each lane gets, and what text
each cut carries. A timecoded text report is the quickest way to check.

HOW: One section per lane in creation order, headed by the lane name
("(unlabeled)" for the default lane) and its cut count. Each placement
is listed as "#cue  start --> end  text" with SRT-style timestamps.

RULES:
- Sections follow lane order; lanes without placements still appear
- Timestamps use HH:MM:SS,mmm
- Blank line between sections, single trailing newline
- Output suffix: "-split.txt"
"""

from __future__ import annotations

from typing import List

from srt_splitter.core.ir import SplitPlan
from srt_splitter.formatters.base import BaseFormatter, FormatterOutput
from srt_splitter.formatters.lane_srt import format_timestamp

DEFAULT_LANE_TITLE = "(unlabeled)"


class PlainTextFormatter(BaseFormatter):
    """Formatter that produces a human-readable lane-by-lane report."""

    @property
    def name(self) -> str:
        return "Plain Text Report"

    def format(self, plan: SplitPlan) -> List[FormatterOutput]:
        sections: List[str] = []
        for lane in plan.lanes:
            placements = plan.placements_for(lane)
            title = lane.name if not lane.is_default else DEFAULT_LANE_TITLE
            lines = ["{} ({} cut{})".format(
                title, len(placements), "" if len(placements) == 1 else "s",
            )]
            for p in placements:
                lines.append("  #{}  {} --> {}  {}".format(
                    p.cue_index,
                    format_timestamp(p.start),
                    format_timestamp(p.end),
                    p.text,
                ))
            sections.append("\n".join(lines))

        content = "\n\n".join(sections)
        if content:
            content += "\n"

        return [
            FormatterOutput(
                suffix="-split.txt",
                content=content,
                media_type="text/plain",
            )
        ]
