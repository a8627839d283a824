"""Speaker label extraction from cue text.

WHY: Dubbing and dialogue subtitle files mark who is talking with a
leading bracketed name: "（Alice）Hello" in Japanese workflows,
"[Alice] Hello" elsewhere. The splitter routes each speaker's cues to
their own lane, so the label has to be separated from the spoken text.

HOW: The text is scanned as a sequence of Unicode codepoints (Python
str indexing), never as bytes, so a multi-byte bracket such as "（" is
always one unit. Leading whitespace is skipped, the next codepoint must
open a recognised bracket pair, and the scan looks for the matching
close. Everything between is the label; everything after, with leading
whitespace trimmed, is the content. Whitespace here means ASCII
whitespace only; an ideographic space is ordinary text.

RULES:
- Recognised pairs: "（" → "）" (fullwidth) and "[" → "]" (ASCII)
- No opening bracket, or no closing bracket → (None, text)
- Empty content after the bracket → (None, text), original untouched
- Empty label ("[] hi") → (None, content); the bracket is consumed
- Text carrying undecodable bytes (lone surrogates) → (None, text)
- Never raises
"""

from __future__ import annotations

from typing import Optional, Tuple

_ASCII_WHITESPACE = " \t\n\r\f\v"

BRACKET_PAIRS = {
    "（": "）",
    "[": "]",
}


def _is_well_formed(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def extract_speaker(text: str) -> Tuple[Optional[str], str]:
    """Split a leading bracketed speaker label from ``text``.

    Args:
        text: Normalized cue text with line breaks already replaced.

    Returns:
        ``(speaker, content)``; speaker is None when no usable label
        was found, in which case content is the text to keep.
    """
    if not isinstance(text, str):
        return None, ""
    if not _is_well_formed(text):
        return None, text

    i = 0
    while i < len(text) and text[i] in _ASCII_WHITESPACE:
        i += 1

    close = BRACKET_PAIRS.get(text[i:i + 1])
    if close is None:
        return None, text

    j = text.find(close, i + 1)
    if j == -1:
        return None, text

    speaker = text[i + 1:j]
    content = text[j + 1:].lstrip(_ASCII_WHITESPACE)

    if content == "":
        return None, text
    if speaker == "":
        return None, content
    return speaker, content
