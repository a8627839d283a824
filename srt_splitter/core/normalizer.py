"""Removal of invisible characters from subtitle text.

WHY: Subtitle files exported from translation tools are littered with
zero-width and bidi control characters (and the HTML-escaped "&lrm;").
They are invisible in an editor but end up in clip and track names,
and they break the speaker-bracket check in speaker.py.

HOW: A fixed denylist is removed with one compiled alternation. The
substitution repeats until nothing changes, because removing one entry
can splice the pieces of "&lrm;" back together.

RULES:
- Only the denylisted sequences are removed; no trimming, no case folding
- Other scripts and symbols pass through untouched
- normalize() is idempotent
"""

import re

INVISIBLE_SEQUENCES = (
    "\u200b",  # zero-width space
    "\u200c",  # zero-width non-joiner
    "\u200d",  # zero-width joiner
    "\u200e",  # left-to-right mark
    "\u202a",  # left-to-right embedding
    "\u202c",  # pop directional formatting
    "\ufeff",  # byte order mark
    "&lrm;",
)

_INVISIBLE_RE = re.compile("|".join(re.escape(seq) for seq in INVISIBLE_SEQUENCES))


def normalize(text: str) -> str:
    """Strip every denylisted invisible sequence from ``text``."""
    while True:
        cleaned = _INVISIBLE_RE.sub("", text)
        if cleaned == text:
            return cleaned
        text = cleaned
