"""Intermediate representation dataclasses for subtitle split plans.

WHY: The parser, the matcher, the formatters and the timeline hosts all
need to talk about the same things: subtitle cues, candidate source
segments, output lanes and the placements that tie them together. The IR
gives them one well-typed vocabulary, decoupling matching from rendering.

HOW: Five dataclasses form the model:
  Cue               one subtitle entry as parsed from the file
  CandidateSegment  one selected source item on the host timeline
  Lane              one output destination (per speaker, or the default)
  Placement         one trimmed clip: which segment, which lane, which range
  SplitPlan         every lane and placement produced for one subtitle file

RULES:
- All times are float seconds
- Cue timing is None when the file carried no valid timing line for it
- Cue.text keeps the original lines joined with "\\n" (pre-normalization)
- Lane.key is None for the single default (unlabeled) lane
- Placements are stored in cue order; lanes in creation order
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, List, Optional


@dataclass(frozen=True)
class Cue:
    """One subtitle entry.

    RULES:
    - index: the declared sequence number; an opaque label used in errors
    - start_time / end_time: seconds, or None when no timing line matched
    - text: raw text lines joined with "\\n"
    """

    index: int
    start_time: Optional[float]
    end_time: Optional[float]
    text: str = ""

    @property
    def has_timing(self) -> bool:
        return self.start_time is not None and self.end_time is not None


@dataclass(frozen=True)
class CandidateSegment:
    """A selected source item on the host timeline.

    WHY: The matcher only needs bounds; the host needs to know which item
    to copy the audio source from. ``ref`` carries that opaque handle.

    RULES:
    - start / end: seconds, containment is inclusive on both bounds
    - ref: opaque host handle (item id, object, anything)
    - group: identity of the parent track; all segments of one run share it
    """

    start: float
    end: float
    ref: Any = None
    group: Optional[Hashable] = None

    @property
    def length(self) -> float:
        return self.end - self.start

    def contains(self, start: float, end: float) -> bool:
        return start >= self.start and end <= self.end


@dataclass(frozen=True)
class Lane:
    """An output destination for placements.

    RULES:
    - key: speaker label, or None for the default lane
    - name: display name for the host track ("" for the default lane)
    - position: creation order, 0-based
    """

    key: Optional[str]
    name: str
    position: int

    @property
    def is_default(self) -> bool:
        return self.key is None


@dataclass(frozen=True)
class Placement:
    """One trimmed clip to create on the host timeline."""

    lane: Lane
    start: float
    end: float
    segment: CandidateSegment
    text: str
    cue_index: int

    @property
    def length(self) -> float:
        return self.end - self.start

    @property
    def offset(self) -> float:
        """Trim offset into the source segment, in seconds."""
        return self.start - self.segment.start


@dataclass
class SplitPlan:
    """The complete result of splitting one subtitle file.

    RULES:
    - lanes: every lane in creation order, default lane first
    - placements: one per matched cue, in cue order
    - source_filename: subtitle filename (for output naming), may be ""
    """

    lanes: List[Lane] = field(default_factory=list)
    placements: List[Placement] = field(default_factory=list)
    source_filename: str = ""

    @property
    def speakers(self) -> List[str]:
        """Speaker labels in order of first appearance."""
        return [lane.key for lane in self.lanes if lane.key is not None]

    def placements_for(self, lane: Lane) -> List[Placement]:
        return [p for p in self.placements if p.lane == lane]
