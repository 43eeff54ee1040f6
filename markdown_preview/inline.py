"""Inline formatting for non-structural text."""

from __future__ import annotations

import re
from collections.abc import Callable

from .escaping import Markup, RawText, Segment, escape_html, render_segments, rewrite_raw, sanitize

LINK_PATTERN = re.compile(
    r"(?P<bang>!?)\[(?P<text>[^\]\x00]*)\]"
    r"\((?P<url>[^()\s\x00]+)(?:\s+\"(?P<title>[^\"\x00]*)\")?\)"
)
# Delimiters must hug their content: `2 * 3 * 4` is not emphasis.
BOLD_PATTERN = re.compile(r"\*\*(?=\S)(?P<content>.+?)(?<=\S)\*\*")
# Single-asterisk content excludes `*` so it never splits a `**...**` pair.
ITALIC_PATTERN = re.compile(r"\*(?=[^\s*])(?P<content>[^*]+?)(?<=[^\s*])\*")
CODE_PATTERN = re.compile(r"`(?P<content>[^`]+)`")
STRIKETHROUGH_PATTERN = re.compile(r"~~(?P<content>.+?)~~")

_UNSAFE_SCHEMES = ("javascript:", "vbscript:", "data:")

Builder = Callable[[re.Match[str], Callable[[str], list[Segment]]], list[Segment]]


def safe_url(url: str) -> str:
    """Neutralize URLs with script-capable schemes.

    Args:
        url: URL taken from Markdown link syntax.

    Returns:
        str: The URL unchanged, or ``"#"`` when it uses a blocked scheme.

    Examples:
        safe_url("https://example.com")  # "https://example.com"
        safe_url("javascript:alert(1)")  # "#"
    """
    collapsed = "".join(url.split()).lower()
    if collapsed.startswith(_UNSAFE_SCHEMES):
        return "#"
    return url


def _wrap(tag: str) -> Builder:
    def build(match: re.Match[str], expand: Callable[[str], list[Segment]]) -> list[Segment]:
        return [Markup(f"<{tag}>"), *expand(match.group("content")), Markup(f"</{tag}>")]

    return build


def _build_link(match: re.Match[str], expand: Callable[[str], list[Segment]]) -> list[Segment]:
    url = escape_html(safe_url(match.group("url")))
    title = match.group("title")
    title_attr = f' title="{escape_html(title)}"' if title is not None else ""

    if match.group("bang"):
        alt = escape_html(match.group("text"))
        return [Markup(f'<img src="{url}" alt="{alt}"{title_attr} />')]

    if not match.group("text"):
        # `[](url)` is not a link; keep it literal.
        return [RawText(match.group(0))]
    return [
        Markup(f'<a href="{url}"{title_attr}>'),
        *expand(match.group("text")),
        Markup("</a>"),
    ]


# Order is part of the contract: links, bold, italic, inline code, strikethrough.
INLINE_PASSES: tuple[tuple[str, re.Pattern[str], Builder], ...] = (
    ("link", LINK_PATTERN, _build_link),
    ("bold", BOLD_PATTERN, _wrap("strong")),
    ("italic", ITALIC_PATTERN, _wrap("em")),
    ("code", CODE_PATTERN, _wrap("code")),
    ("strikethrough", STRIKETHROUGH_PATTERN, _wrap("del")),
)


def format_inline_segments(text: str) -> list[Segment]:
    """Apply inline Markdown substitutions to a text fragment.

    Each pass only rewrites raw text, so markup inserted by an earlier pass
    (tags, URLs) is never matched again and escaping happens exactly once.

    Args:
        text: Raw fragment, not a structural line.

    Returns:
        list[Segment]: Formatted segments.
    """
    segments: list[Segment] = [RawText(sanitize(text))]
    for _name, pattern, build in INLINE_PASSES:
        segments = rewrite_raw(segments, pattern, build)
    return segments


def format_inline(text: str) -> str:
    """Escape a fragment and render its inline Markdown as HTML.

    Examples:
        format_inline("Some *italic* and **bold**")
        # "Some <em>italic</em> and <strong>bold</strong>"
        format_inline("<script>")  # "&lt;script&gt;"
    """
    return render_segments(format_inline_segments(text))
