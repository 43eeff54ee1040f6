"""Typed text segments and HTML escaping.

Rendered HTML is assembled from two kinds of segments: `RawText`, which is
user content and is escaped when joined, and `Markup`, which the renderer
produced itself and is emitted verbatim. Keeping the two apart means escaping
never has to guess whether a ``<`` or ``&`` already belongs to a tag or an
entity.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)

# Markup segments are stood in for by \x00<index>\x00 while a pass rewrites
# the surrounding raw text.
_PLACEHOLDER_PATTERN = re.compile("\x00(\\d+)\x00")


@dataclass(frozen=True)
class RawText:
    """User-supplied text, escaped when rendered."""

    text: str


@dataclass(frozen=True)
class Markup:
    """Renderer-produced HTML, emitted verbatim."""

    html: str


Segment = RawText | Markup


def escape_html(text: str) -> str:
    """Escape the five HTML-reserved characters.

    Args:
        text: Raw text.

    Returns:
        str: Text safe to place in element content or a quoted attribute.

    Examples:
        escape_html("<a href='x'>")  # "&lt;a href=&#39;x&#39;&gt;"
    """
    return text.translate(_ESCAPE_TABLE)


def sanitize(text: str) -> str:
    """Replace NUL characters so they cannot collide with placeholders."""
    return text.replace("\x00", "�")


def split_lines(text: str) -> list[str]:
    """Sanitize `text` and split it into lines.

    Only `\\n`, `\\r\\n` and `\\r` end a line. Other characters that
    `str.splitlines` treats as breaks (form feed, U+2028, ...) stay inside
    the line. A trailing newline does not produce an extra empty line.
    """
    lines = sanitize(text).replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def render_segments(segments: Iterable[Segment]) -> str:
    """Join segments into HTML, escaping raw text only."""
    parts = []
    for segment in segments:
        if isinstance(segment, Markup):
            parts.append(segment.html)
        else:
            parts.append(escape_html(segment.text))
    return "".join(parts)


def merge_segments(segments: Iterable[Segment]) -> list[Segment]:
    """Coalesce adjacent segments of the same kind and drop empty ones."""
    merged: list[Segment] = []
    for segment in segments:
        if isinstance(segment, RawText):
            if not segment.text:
                continue
            if merged and isinstance(merged[-1], RawText):
                merged[-1] = RawText(merged[-1].text + segment.text)
                continue
        else:
            if not segment.html:
                continue
            if merged and isinstance(merged[-1], Markup):
                merged[-1] = Markup(merged[-1].html + segment.html)
                continue
        merged.append(segment)
    return merged


def _encode(segments: Iterable[Segment]) -> tuple[str, list[Markup]]:
    markups: list[Markup] = []
    parts = []
    for segment in segments:
        if isinstance(segment, Markup):
            parts.append(f"\x00{len(markups)}\x00")
            markups.append(segment)
        else:
            parts.append(segment.text)
    return "".join(parts), markups


def _decode(text: str, markups: list[Markup]) -> list[Segment]:
    segments: list[Segment] = []
    offset = 0
    for match in _PLACEHOLDER_PATTERN.finditer(text):
        segments.append(RawText(text[offset : match.start()]))
        segments.append(markups[int(match.group(1))])
        offset = match.end()
    segments.append(RawText(text[offset:]))
    return segments


def rewrite_raw(
    segments: Iterable[Segment],
    pattern: re.Pattern[str],
    build: Callable[[re.Match[str], Callable[[str], list[Segment]]], list[Segment]],
) -> list[Segment]:
    """Apply one substitution pass to the raw text of a segment sequence.

    Markup segments are replaced by placeholders while `pattern` runs, so a
    match may enclose earlier markup but can never match inside it. `build`
    receives each match plus an `expand` callback that turns a captured group
    back into segments.

    Args:
        segments: Segments to rewrite.
        pattern: Compiled pattern matched against the placeholder text.
        build: Callback producing the replacement segments for a match.

    Returns:
        list[Segment]: Rewritten, merged segments.
    """
    text, markups = _encode(segments)

    def expand(fragment: str) -> list[Segment]:
        return _decode(fragment, markups)

    result: list[Segment] = []
    offset = 0
    for match in pattern.finditer(text):
        result.extend(expand(text[offset : match.start()]))
        result.extend(build(match, expand))
        offset = match.end()
    result.extend(expand(text[offset:]))
    return merge_segments(result)


def plain_text(segments: Iterable[Segment]) -> str:
    """Return only the raw text of a segment sequence."""
    return "".join(segment.text for segment in segments if isinstance(segment, RawText))
