"""SRT Splitter: split timeline audio items by subtitle cues.

WHY: Dialogue editors receive a subtitle file for a recording that already
sits on the timeline as one or more audio items. Cutting those items by hand
at every cue, and sorting the cuts onto one track per speaker, is tedious and
error-prone. This package turns the subtitle file into a split plan that a
host editor can apply in one step.

HOW: Four-stage pipeline: parse (SRT cues), clean (invisible characters,
newline replacement), attribute (bracketed speaker labels), match (cue
intervals against the selected items, one lane per speaker). Each stage is
independently testable. Formatters and timeline hosts consume the plan.

RULES:
- All formatters and hosts consume the same SplitPlan IR
- The core never logs and never talks to the host editor
- Adding a new output format = one new formatter module, no core changes
"""

__version__ = "0.1.0"
