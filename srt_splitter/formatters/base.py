"""Formatter contract for rendering split plans to files.

WHY: A plan is consumed three ways (by a host bridge as JSON, by an
editor reading a report, by a voice session wanting one speaker's lines)
and the CLI and API should not care which. Each rendering is a
formatter; both front ends only see this interface.

HOW: A formatter takes a SplitPlan and returns FormatterOutputs, each a
file suffix plus content and MIME type. The caller owns naming: it
prepends the subtitle stem and resolves conflicts.

RULES:
- Formatters never mutate the plan
- One plan may yield several files (per-lane SRT returns one per lane)
- Suffixes start with a hyphen and end with the file extension
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from srt_splitter.core.ir import SplitPlan


@dataclass
class FormatterOutput:
    """One rendered file.

    Attributes:
        suffix: Appended to the subtitle stem, e.g. ``"-01-Alice.srt"``
                turns ``scene.srt`` into ``scene-01-Alice.srt``.
        content: Text, or bytes for binary renderings.
        media_type: MIME type, used by the API when returning files inline.
    """

    suffix: str
    content: str | bytes
    media_type: str


class BaseFormatter(ABC):
    """Renders a SplitPlan; registered by key in ``FORMATTERS``."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name shown by ``GET /formats`` and CLI status lines."""

    @abstractmethod
    def format(self, plan: SplitPlan) -> list[FormatterOutput]:
        """Render ``plan``; an empty list means nothing to write."""
