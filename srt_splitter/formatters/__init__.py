"""Output formatter registry, the pluggable format hub.

WHY: The CLI and API layers need a single lookup to find the right
formatter by name. A central dict makes it trivial to add new formats:
create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["plan_json"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API fields)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from srt_splitter.formatters.lane_srt import LaneSRTFormatter
from srt_splitter.formatters.plain_text import PlainTextFormatter
from srt_splitter.formatters.plan_json import PlanJSONFormatter

if TYPE_CHECKING:
    from srt_splitter.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "plan_json": PlanJSONFormatter,
    "plain_text": PlainTextFormatter,
    "lane_srt": LaneSRTFormatter,
}
