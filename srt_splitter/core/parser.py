"""SubRip (.srt) parsing into Cue records.

WHY: Every split starts from the subtitle file. Real-world SRT files are
sloppy (BOMs, CRLF line endings, missing trailing blank lines, stray
whitespace) and the parser must accept all of them while keeping the
cues in file order.

HOW: Lines are classified one at a time and fed through an explicit
finite-state accumulator. ParserState holds the cue being built;
step() is a pure transition that returns the next state and, when an
index line closes the previous cue, the finished Cue. finish() flushes
the last cue at end of input. parse_srt_text() drives the machine over
a string, parse_srt() decodes bytes, read_srt() reads a file.

RULES:
- A leading UTF-8 BOM is dropped; content is decoded as UTF-8 with
  surrogateescape, so undecodable bytes never abort a parse
- Lines split on "\\n", one trailing "\\r" dropped, ASCII whitespace trimmed
- Index line: ASCII digits only; closes the cue in progress
- Timing line: "H:MM:SS,mmm --> H:MM:SS,mmm" (hours may be any width)
- Blank lines are ignored; cues are delimited by index lines alone
- Any other line is text, joined to earlier text with "\\n"
- Lines before the first index line belong to no cue and are dropped
- A cue without a valid timing line keeps start/end = None
- Cue numbering is not validated; output follows file order
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from srt_splitter.core.errors import SubtitleReadError
from srt_splitter.core.ir import Cue

UTF8_BOM = b"\xef\xbb\xbf"

_ASCII_WHITESPACE = " \t\n\r\f\v"

_INDEX_RE = re.compile(r"^[0-9]+$")

_TIMING_RE = re.compile(
    r"([0-9]+):([0-9]{2}):([0-9]{2}),([0-9]{3})[ \t]+-->[ \t]+"
    r"([0-9]+):([0-9]{2}):([0-9]{2}),([0-9]{3})"
)

# Line classes
INDEX = "index"
TIMING = "timing"
BLANK = "blank"
TEXT = "text"


def timestamp_to_seconds(hours: str, minutes: str, seconds: str, millis: str) -> float:
    return int(hours) * 3600 + int(minutes) * 60 + int(seconds) + int(millis) / 1000.0


def parse_timing(line: str) -> Optional[Tuple[float, float]]:
    """Return (start, end) in seconds for a timing line, or None."""
    match = _TIMING_RE.search(line)
    if match is None:
        return None
    groups = match.groups()
    return timestamp_to_seconds(*groups[:4]), timestamp_to_seconds(*groups[4:])


def classify_line(line: str) -> str:
    """Classify an already-trimmed line as INDEX, TIMING, BLANK or TEXT."""
    if _INDEX_RE.match(line):
        return INDEX
    if _TIMING_RE.search(line):
        return TIMING
    if line == "":
        return BLANK
    return TEXT


@dataclass(frozen=True)
class ParserState:
    """The cue currently being accumulated.

    ``index`` is None until the first index line has been seen; before
    that, timing and text lines have no cue to attach to.
    """

    index: Optional[int] = None
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    text: str = ""

    @property
    def in_cue(self) -> bool:
        return self.index is not None

    def to_cue(self) -> Cue:
        return Cue(
            index=self.index,
            start_time=self.start_time,
            end_time=self.end_time,
            text=self.text,
        )


def step(state: ParserState, line: str) -> Tuple[ParserState, Optional[Cue]]:
    """Feed one raw line to the state machine.

    Returns the next state and the cue completed by this line, if any.
    Only an index line can complete a cue.
    """
    line = line.strip(_ASCII_WHITESPACE)
    kind = classify_line(line)

    if kind == INDEX:
        emitted = state.to_cue() if state.in_cue else None
        return ParserState(index=int(line)), emitted

    if not state.in_cue:
        return state, None

    if kind == TIMING:
        start, end = parse_timing(line)
        return replace(state, start_time=start, end_time=end), None

    if kind == TEXT:
        text = state.text + "\n" + line if state.text else line
        return replace(state, text=text), None

    return state, None


def finish(state: ParserState) -> Optional[Cue]:
    """Flush the cue in progress at end of input."""
    return state.to_cue() if state.in_cue else None


def split_lines(content: str) -> List[str]:
    """Split on "\\n", dropping one trailing "\\r" from each line."""
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_lines(lines: Iterable[str]) -> List[Cue]:
    cues: List[Cue] = []
    state = ParserState()
    for line in lines:
        state, cue = step(state, line)
        if cue is not None:
            cues.append(cue)
    last = finish(state)
    if last is not None:
        cues.append(last)
    return cues


def parse_srt_text(content: str) -> List[Cue]:
    """Parse decoded SRT content into cues, in file order."""
    if content.startswith("\ufeff"):
        content = content[1:]
    return parse_lines(split_lines(content))


def parse_srt(data: bytes) -> List[Cue]:
    """Parse raw SRT bytes into cues, in file order."""
    if data.startswith(UTF8_BOM):
        data = data[len(UTF8_BOM):]
    return parse_srt_text(data.decode("utf-8", errors="surrogateescape"))


def read_srt(path: Union[str, Path]) -> List[Cue]:
    """Read and parse an SRT file.

    Raises:
        SubtitleReadError: If the file cannot be opened or read.
    """
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise SubtitleReadError("Failed to read subtitle file {}: {}".format(path, exc)) from exc
    return parse_srt(data)
