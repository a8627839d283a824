"""Cue-to-segment containment matching and lane assignment.

WHY: Each subtitle cue becomes a trimmed copy of the source item it sits
in, placed on its speaker's lane. The matcher decides which source item
that is and which lane receives the copy, and it must stop at the first
cue that fits nowhere so the editor can fix the selection.

HOW: Every cue's interval is widened by the configured padding (start
clamped at zero) and tested against the candidate segments in the order
the host supplied them; the first segment that fully contains it wins.
Lanes come from a LaneRegistry: the default lane is created with the
registry, speaker lanes are appended the first time each speaker shows
up. iter_placements() yields placements lazily; build_plan() collects
them and turns a failure into a MatchError carrying the partial plan.

RULES:
- adjusted_start = max(0, start - padding_start)
- adjusted_end = end + padding_end
- Containment is inclusive: seg.start <= adjusted_start, adjusted_end <= seg.end
- First match wins, never best fit
- One lane per speaker, in order of first appearance; one default lane
- The lane is resolved before the match, so a speaker whose first cue
  fails still owns a lane in the partial plan
- Cues without timing never match
- The first unmatched cue raises MatchError; later cues are not processed
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from srt_splitter.core.errors import MatchError
from srt_splitter.core.ir import CandidateSegment, Cue, Lane, Placement, SplitPlan
from srt_splitter.core.normalizer import normalize


class LaneRegistry:
    """Ordered, deduplicated registry of output lanes.

    The default lane always exists and always comes first. Speaker lanes
    follow in the order get_or_create() first sees each speaker.
    """

    def __init__(self) -> None:
        self._lanes: List[Lane] = []
        self._by_speaker: Dict[str, Lane] = {}
        self.default = self._append(None, "")

    def _append(self, key: Optional[str], name: str) -> Lane:
        lane = Lane(key=key, name=name, position=len(self._lanes))
        self._lanes.append(lane)
        return lane

    def get_or_create(self, speaker: Optional[str]) -> Lane:
        """Return the lane for ``speaker``, creating it on first use.

        A None or empty speaker maps to the default lane.
        """
        if not speaker:
            return self.default
        lane = self._by_speaker.get(speaker)
        if lane is None:
            lane = self._append(speaker, normalize(speaker))
            self._by_speaker[speaker] = lane
        return lane

    @property
    def lanes(self) -> List[Lane]:
        return list(self._lanes)

    @property
    def speakers(self) -> List[str]:
        return list(self._by_speaker)

    def __len__(self) -> int:
        return len(self._lanes)

    def __contains__(self, speaker: object) -> bool:
        return speaker in self._by_speaker


def adjust_interval(
    start: float,
    end: float,
    padding_start: float = 0.0,
    padding_end: float = 0.0,
) -> Tuple[float, float]:
    """Apply padding to a cue interval, clamping the start at zero."""
    return max(0.0, start - padding_start), end + padding_end


def find_segment(
    start: float,
    end: float,
    segments: Iterable[CandidateSegment],
) -> Optional[CandidateSegment]:
    """Return the first segment containing [start, end], or None."""
    for segment in segments:
        if segment.contains(start, end):
            return segment
    return None


def match_cue(
    cue: Cue,
    segments: Sequence[CandidateSegment],
    padding_start: float = 0.0,
    padding_end: float = 0.0,
) -> Optional[Tuple[float, float, CandidateSegment]]:
    """Find the segment for one cue.

    Returns ``(adjusted_start, adjusted_end, segment)``, or None when
    the cue has no timing or no segment contains it.
    """
    if not cue.has_timing:
        return None
    start, end = adjust_interval(cue.start_time, cue.end_time, padding_start, padding_end)
    segment = find_segment(start, end, segments)
    if segment is None:
        return None
    return start, end, segment


def iter_placements(
    attributed: Iterable[Tuple[Cue, Optional[str], str]],
    segments: Sequence[CandidateSegment],
    registry: LaneRegistry,
    padding_start: float = 0.0,
    padding_end: float = 0.0,
) -> Iterator[Placement]:
    """Yield one placement per cue, in cue order.

    Args:
        attributed: ``(cue, speaker, content)`` triples; speaker and
            content come from the speaker extractor.
        segments: Candidate segments in host order.
        registry: Lane registry, mutated as new speakers appear.
        padding_start: Seconds subtracted from each cue start.
        padding_end: Seconds added to each cue end.

    Raises:
        MatchError: For the first cue no segment contains. Nothing after
            it is processed.
    """
    for cue, speaker, content in attributed:
        lane = registry.get_or_create(speaker)
        found = match_cue(cue, segments, padding_start, padding_end)
        if found is None:
            raise MatchError(cue.index)
        start, end, segment = found
        yield Placement(
            lane=lane,
            start=start,
            end=end,
            segment=segment,
            text=content,
            cue_index=cue.index,
        )


def build_plan(
    attributed: Iterable[Tuple[Cue, Optional[str], str]],
    segments: Sequence[CandidateSegment],
    padding_start: float = 0.0,
    padding_end: float = 0.0,
    source_filename: str = "",
) -> SplitPlan:
    """Match every cue and return the complete plan.

    Raises:
        MatchError: With ``placements`` and ``plan`` set to everything
            produced before the failing cue.
    """
    registry = LaneRegistry()
    placements: List[Placement] = []
    try:
        for placement in iter_placements(
            attributed, segments, registry, padding_start, padding_end
        ):
            placements.append(placement)
    except MatchError as exc:
        exc.placements = list(placements)
        exc.plan = SplitPlan(
            lanes=registry.lanes,
            placements=list(placements),
            source_filename=source_filename,
        )
        raise
    return SplitPlan(
        lanes=registry.lanes,
        placements=placements,
        source_filename=source_filename,
    )
