"""Fenced code block rendering."""

from __future__ import annotations

from .constants import CODE_FENCE_PATTERN, DEFAULT_LANGUAGE_TAG, FOLD_LINK_SCHEME, NBSP, TAB_WIDTH
from .escaping import Markup, RawText, Segment, escape_html, render_segments
from .highlight import Language
from .models import CodeBlock


def parse_fence(line: str) -> str | None:
    """Return the info string of a fence line, or None for other lines.

    Examples:
        parse_fence("```java")  # "java"
        parse_fence("```")  # ""
        parse_fence("text")  # None
    """
    match = CODE_FENCE_PATTERN.match(line)
    if match is None:
        return None
    return match.group("info")


def language_tag(info: str) -> str:
    """Normalize a fence info string to its language tag.

    Examples:
        language_tag(" Java ")  # "java"
        language_tag("")  # "text"
    """
    words = info.strip().split()
    if not words:
        return DEFAULT_LANGUAGE_TAG
    return words[0].lower()


def split_indentation(line: str) -> tuple[str, str]:
    """Split a code line into its leading spaces/tabs and the remainder."""
    body = line.lstrip(" \t")
    return line[: len(line) - len(body)], body


def indentation_markup(indent: str) -> Markup:
    """Render leading whitespace as non-breaking spaces (a tab is four)."""
    return Markup("".join(NBSP * TAB_WIDTH if char == "\t" else NBSP for char in indent))


def code_line_segments(line: str, language: Language | None) -> list[Segment]:
    """Build the segments of one code line.

    Args:
        line: Raw code line without its line ending.
        language: Highlighter to apply, or None to only escape.

    Returns:
        list[Segment]: Indentation markup followed by the highlighted body.
    """
    indent, body = split_indentation(line)
    highlighted = language.highlight(body) if language is not None else [RawText(body)]
    return [indentation_markup(indent), *highlighted]


def render_code_line(line: str, language: Language | None) -> str:
    if not line:
        return '<div class="code-line"><br></div>'
    return f'<div class="code-line">{render_segments(code_line_segments(line, language))}</div>'


def _fold_control(block: CodeBlock) -> str:
    block_id = escape_html(block.block_id)
    title, symbol = ("Expand", "&#9654;") if block.folded else ("Collapse", "&#9660;")
    return (
        f'<a class="fold-toggle" href="{FOLD_LINK_SCHEME}{block_id}" '
        f'data-block-id="{block_id}" title="{title}">{symbol}</a>'
    )


def open_block(block: CodeBlock, folding_enabled: bool = True) -> str:
    """Render the wrapper, header and (when expanded) content opening tag."""
    block_id = escape_html(block.block_id)
    tag = escape_html(block.language_tag)
    control = _fold_control(block) if folding_enabled else ""
    state = "folded" if block.folded else "expanded"
    parts = [
        f'<div class="code-block {state}" id="{block_id}" data-language="{tag}">',
        f'<div class="code-block-header">{control}'
        f'<span class="code-language">{escape_html(block.language_tag.upper())}</span></div>',
    ]
    if not block.folded:
        parts.append('<div class="code-block-content">')
    return "\n".join(parts)


def close_block(block: CodeBlock) -> str:
    """Render the closing tags, with a hidden-lines note for folded blocks."""
    if block.folded:
        noun = "line" if block.line_count == 1 else "lines"
        return f'<div class="code-block-folded">{block.line_count} {noun} hidden</div>\n</div>'
    return "</div>\n</div>"
