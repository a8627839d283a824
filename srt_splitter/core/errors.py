"""Exception hierarchy for the splitter.

WHY: The CLI, the HTTP API and timeline hosts all need to tell the three
ways a run can fail apart (an unreadable subtitle file, a bad segment
selection, and a cue that fits no segment) without parsing messages.

HOW: One base class, SplitError, with a subclass per failure kind. Every
error is terminal for the run that raised it; nothing here is retried.

RULES:
- SubtitleReadError wraps the underlying OSError (raise ... from exc)
- ConfigurationError is raised before any parsing or matching happens
- MatchError carries the offending cue index and the placements that were
  produced before the failure
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from srt_splitter.core.ir import Placement, SplitPlan


class SplitError(Exception):
    """Base class for every splitter failure."""


class SubtitleReadError(SplitError):
    """The subtitle file could not be opened or read."""


class ConfigurationError(SplitError):
    """The segment selection or configuration is unusable.

    Raised when no candidate segments are supplied, when they span more
    than one parent group, or when the segments document is malformed.
    """


class MatchError(SplitError):
    """No candidate segment contains a cue's padded interval."""

    def __init__(
        self,
        cue_index: int,
        placements: Optional[List[Placement]] = None,
        plan: Optional[SplitPlan] = None,
    ) -> None:
        super().__init__("No source item found at the position of subtitle {}".format(cue_index))
        self.cue_index = cue_index
        self.placements = list(placements or [])
        self.plan = plan
