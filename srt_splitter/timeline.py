"""Host timeline contract and plan application.

WHY: The splitter only plans; a host editor materializes the plan by
creating one track per lane and a trimmed clip per placement. Hosts
differ (a DAW scripting API, an NLE bridge, a test double) but they all
need the same three things from the plan, so that contract lives here
and apply_plan() drives any host through it.

HOW: Timeline is an ABC with create_lane(), add_clip() and alert().
apply_plan() creates every lane in plan order first (so track order
equals first speaker appearance), then realizes the placements in cue
order. MemoryTimeline records everything in lists; it is the reference
host used by tests and dry runs.

RULES:
- Lanes are created once each, in plan order, default lane first
- The default lane is created unnamed; speaker lanes carry their name
- Every lane receives the same volume (the base track's)
- Placements are applied in cue order
- Hosts own undo/transactions; apply_plan() does not roll back
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from srt_splitter.config import SplitConfig
from srt_splitter.core.errors import MatchError, SplitError
from srt_splitter.core.ir import CandidateSegment, Lane, Placement, SplitPlan
from srt_splitter.pipeline import split_subtitles


class Timeline(ABC):
    """Abstract host timeline."""

    @abstractmethod
    def create_lane(self, name: str, volume: float) -> Any:
        """Create an output track and return the host's handle for it."""

    @abstractmethod
    def add_clip(self, lane_handle: Any, placement: Placement) -> Any:
        """Create a trimmed copy of ``placement.segment`` on a lane.

        The clip starts at ``placement.start``, lasts ``placement.length``
        and reads the source from ``placement.offset``. Its name is
        ``placement.text``.
        """

    @abstractmethod
    def alert(self, message: str) -> None:
        """Show a fatal message to the user."""


def apply_plan(plan: SplitPlan, host: Timeline, volume: float = 1.0) -> Dict[Lane, Any]:
    """Materialize ``plan`` on ``host``.

    Returns:
        Mapping from each plan lane to the host handle created for it.
    """
    handles: Dict[Lane, Any] = {}
    for lane in plan.lanes:
        handles[lane] = host.create_lane(lane.name, volume)
    for placement in plan.placements:
        host.add_clip(handles[placement.lane], placement)
    return handles


@dataclass
class MemoryClip:
    lane: int
    start: float
    length: float
    offset: float
    source: Any
    name: str


@dataclass
class MemoryTimeline(Timeline):
    """In-memory host that records lanes, clips and alerts."""

    lanes: List[Dict[str, Any]] = field(default_factory=list)
    clips: List[MemoryClip] = field(default_factory=list)
    alerts: List[str] = field(default_factory=list)

    def create_lane(self, name: str, volume: float) -> int:
        self.lanes.append({"name": name, "volume": volume})
        return len(self.lanes) - 1

    def add_clip(self, lane_handle: int, placement: Placement) -> MemoryClip:
        clip = MemoryClip(
            lane=lane_handle,
            start=placement.start,
            length=placement.length,
            offset=placement.offset,
            source=placement.segment.ref,
            name=placement.text,
        )
        self.clips.append(clip)
        return clip

    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def clips_on(self, lane_handle: int) -> List[MemoryClip]:
        return [c for c in self.clips if c.lane == lane_handle]


def split_onto(
    host: Timeline,
    subtitle: Union[str, Path, bytes],
    segments: Sequence[CandidateSegment],
    config: Optional[SplitConfig] = None,
    volume: float = 1.0,
) -> SplitPlan:
    """Plan a split and apply it to ``host`` in one call.

    On a match failure the placements planned before the failing cue are
    still applied, then the host is alerted; any other failure alerts
    before anything is created. The error is re-raised in both cases.
    """
    try:
        plan = split_subtitles(subtitle, segments, config)
    except MatchError as exc:
        if exc.plan is not None:
            apply_plan(exc.plan, host, volume)
        host.alert(str(exc))
        raise
    except SplitError as exc:
        host.alert(str(exc))
        raise
    apply_plan(plan, host, volume)
    return plan
