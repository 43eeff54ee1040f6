"""Markdown to HTML rendering."""

from __future__ import annotations

import logging

from .codeblocks import close_block, language_tag, open_block, parse_fence, render_code_line
from .config import RendererConfig, normalize_config, validate_config
from .constants import (
    BLOCKQUOTE_PATTERN,
    HARD_BREAK_SUFFIX,
    HEADING_PATTERN,
    HORIZONTAL_RULE_PATTERN,
    LIST_ITEM_PATTERN,
    PLACEHOLDER_MESSAGE,
    TRUNCATION_NOTICE,
)
from .escaping import escape_html, plain_text, render_segments, split_lines
from .folding import FoldStateStore, content_block_id, positional_block_id
from .highlight import Language
from .inline import format_inline, format_inline_segments
from .lists import close_all, enter_list_item, indent_level
from .models import CodeBlock, ListType, RenderContext, RenderState
from .slugify import unique_slug
from .tables import close_table, is_row, is_table_start, open_table, parse_separator, render_row
from .themes import Theme, wrap_document

logger = logging.getLogger(__name__)


def _flush_paragraph(ctx: RenderContext) -> None:
    if not ctx.paragraph:
        return
    lines = list(ctx.paragraph)
    if lines[-1].endswith("<br>"):
        lines[-1] = lines[-1][: -len("<br>")]
    ctx.emit(f"<p>{' '.join(lines)}</p>")
    ctx.paragraph.clear()


def _close_lists(ctx: RenderContext) -> None:
    for tag in close_all(ctx.list_stack):
        ctx.emit(tag)


def _close_table(ctx: RenderContext) -> None:
    if ctx.state is RenderState.IN_TABLE:
        ctx.emit(close_table())
        ctx.state = RenderState.NORMAL
        ctx.table_alignments = []


def _close_blocks(ctx: RenderContext) -> None:
    """Close every open paragraph, list and table before a new block."""
    _flush_paragraph(ctx)
    _close_lists(ctx)
    _close_table(ctx)


def _assign_block_id(
    ctx: RenderContext, tag: str, first_line: str, config: RendererConfig
) -> str:
    ctx.block_ordinal += 1
    if config.fold_keys == "position":
        return positional_block_id(ctx.block_ordinal)

    key = f"{tag}\n{first_line}"
    occurrence = ctx.block_keys_seen.get(key, 0) + 1
    ctx.block_keys_seen[key] = occurrence
    return content_block_id(tag, first_line, occurrence)


def _try_open_fence(
    ctx: RenderContext,
    line: str,
    next_line: str | None,
    config: RendererConfig,
    fold_state: FoldStateStore,
) -> bool:
    """Open a fenced code block when `line` is a fence.

    Args:
        ctx: Render context to update.
        line: Current line.
        next_line: Following line, used as the block's first content line
            when ids are derived from content.
        config: Active configuration.
        fold_state: Store consulted for the block's collapsed flag.

    Returns:
        bool: True when a block was opened.
    """
    if ctx.state is RenderState.IN_FENCED_CODE:
        return False

    info = parse_fence(line)
    if info is None:
        return False

    _close_blocks(ctx)

    tag = language_tag(info)
    first_line = next_line if next_line is not None and parse_fence(next_line) is None else ""
    block_id = _assign_block_id(ctx, tag, first_line, config)
    ctx.block_ids.append(block_id)
    folded = fold_state.lookup(block_id) if config.enable_code_folding else False

    ctx.code_block = CodeBlock(block_id=block_id, language_tag=tag, folded=folded)
    ctx.state = RenderState.IN_FENCED_CODE
    ctx.emit(open_block(ctx.code_block, folding_enabled=config.enable_code_folding))
    logger.debug("Opened %s (%s, folded=%s)", block_id, tag, folded)
    return True


def _close_fence(ctx: RenderContext) -> None:
    block = ctx.code_block
    if block is None:
        return
    ctx.emit(close_block(block))
    logger.debug("Closed %s after %d lines", block.block_id, block.line_count)
    ctx.code_block = None
    ctx.state = RenderState.NORMAL


def _render_code_content(ctx: RenderContext, line: str, config: RendererConfig) -> None:
    block = ctx.code_block
    block.line_count += 1
    if block.folded:
        return
    language = Language.parse(block.language_tag) if config.enable_syntax_highlight else None
    ctx.emit(render_code_line(line, language))


def _try_heading(ctx: RenderContext, line: str, config: RendererConfig) -> bool:
    match = HEADING_PATTERN.match(line)
    if match is None:
        return False

    _close_blocks(ctx)
    level = len(match.group("marks"))
    segments = format_inline_segments(match.group("content") or "")
    id_attr = ""
    if config.heading_anchors:
        slug = unique_slug(plain_text(segments), ctx.heading_slug_counters, ctx.heading_slugs)
        id_attr = f' id="{escape_html(slug)}"'
    ctx.emit(f"<h{level}{id_attr}>{render_segments(segments)}</h{level}>")
    return True


def _try_horizontal_rule(ctx: RenderContext, line: str) -> bool:
    if not HORIZONTAL_RULE_PATTERN.match(line):
        return False
    _close_blocks(ctx)
    ctx.emit("<hr>")
    return True


def _try_list_item(ctx: RenderContext, line: str) -> bool:
    match = LIST_ITEM_PATTERN.match(line)
    if match is None:
        return False

    _flush_paragraph(ctx)
    _close_table(ctx)
    level = indent_level(match.group("indent"))
    list_type = ListType.from_marker(match.group("marker"))
    for tag in enter_list_item(ctx.list_stack, level, list_type):
        ctx.emit(tag)
    ctx.emit(f"<li>{format_inline(match.group('content').strip())}</li>")
    return True


def _try_blockquote(ctx: RenderContext, line: str) -> bool:
    match = BLOCKQUOTE_PATTERN.match(line)
    if match is None:
        return False
    _close_blocks(ctx)
    ctx.emit(f"<blockquote>{format_inline(match.group('content').strip())}</blockquote>")
    return True


def _try_open_table(ctx: RenderContext, line: str, next_line: str | None) -> bool:
    if not is_table_start(line, next_line):
        return False
    _close_blocks(ctx)
    ctx.table_alignments = parse_separator(next_line)
    ctx.emit(open_table(line, ctx.table_alignments))
    ctx.state = RenderState.IN_TABLE
    return True


def _add_paragraph_line(ctx: RenderContext, line: str) -> None:
    _close_lists(ctx)
    formatted = format_inline(line.strip())
    if line.endswith(HARD_BREAK_SUFFIX):
        formatted += "<br>"
    ctx.paragraph.append(formatted)


def _render_line(
    ctx: RenderContext,
    line: str,
    next_line: str | None,
    config: RendererConfig,
    fold_state: FoldStateStore,
) -> int:
    """Render one line and return how many input lines were consumed."""
    if ctx.state is RenderState.IN_FENCED_CODE:
        if parse_fence(line) is not None:
            _close_fence(ctx)
        else:
            _render_code_content(ctx, line, config)
        return 1

    if _try_open_fence(ctx, line, next_line, config, fold_state):
        return 1

    if ctx.state is RenderState.IN_TABLE:
        if is_row(line):
            ctx.emit(render_row(line, ctx.table_alignments))
            return 1
        _close_table(ctx)

    if not line.strip():
        _flush_paragraph(ctx)
        _close_lists(ctx)
        return 1

    if _try_heading(ctx, line, config):
        return 1

    # Rules win over list items so that `* * *` and `- - -` are rules.
    if _try_horizontal_rule(ctx, line):
        return 1

    if _try_list_item(ctx, line):
        return 1

    if _try_blockquote(ctx, line):
        return 1

    if _try_open_table(ctx, line, next_line):
        # The separator line is consumed with the header.
        return 2

    if is_row(line):
        # A pipe line without a separator stays a paragraph of its own.
        _close_blocks(ctx)
        ctx.emit(f"<p>{format_inline(line.strip())}</p>")
        return 1

    _add_paragraph_line(ctx, line)
    return 1


def _finish(ctx: RenderContext) -> None:
    if ctx.state is RenderState.IN_FENCED_CODE:
        logger.debug("Closing unterminated fence at end of input")
        _close_fence(ctx)
    _close_blocks(ctx)


def render_body(
    text: str, config: RendererConfig | None = None, fold_state: FoldStateStore | None = None
) -> str:
    """Convert Markdown text to an HTML fragment.

    Lines are classified in order: fenced code content, fences, table rows of
    an open table, blank lines, headings, horizontal rules, list items,
    blockquotes, table headers, and finally paragraph text. Structures left
    open at the end of input are closed.

    Args:
        text: Markdown source.
        config: Rendering options. Defaults to `RendererConfig()`.
        fold_state: Store for code block fold flags. A throwaway store is used
            when omitted.

    Returns:
        str: HTML fragment, one block element per line.

    Examples:
        render_body("# Title\\n\\nSome *italic* text.")
    """
    config = config or RendererConfig()
    fold_state = fold_state if fold_state is not None else FoldStateStore()

    lines = split_lines(text)
    ctx = RenderContext()

    index = 0
    while index < len(lines):
        next_line = lines[index + 1] if index + 1 < len(lines) else None
        index += _render_line(ctx, lines[index], next_line, config, fold_state)

    _finish(ctx)
    if config.enable_code_folding:
        fold_state.prune_expanded(ctx.block_ids)
    return "\n".join(ctx.output)


def placeholder_fragment() -> str:
    return f'<p class="placeholder">{escape_html(PLACEHOLDER_MESSAGE)}</p>'


def truncation_fragment(limit: int) -> str:
    return f'<p class="truncation-notice">{escape_html(TRUNCATION_NOTICE.format(limit=limit))}</p>'


def error_fragment(error: BaseException) -> str:
    message = str(error) or type(error).__name__
    return (
        '<div class="render-error">'
        "<h3>Render error</h3>"
        f"<p>{escape_html(message)}</p>"
        "</div>"
    )


class MarkdownRenderer:
    """Render Markdown previews with persistent code block fold state.

    Args:
        config: Rendering options; validated on construction.
        fold_state: Caller-owned fold store. A private one is created when
            omitted.

    Raises:
        ConfigError: If `config` is invalid.

    Examples:
        renderer = MarkdownRenderer()
        html = renderer.render("```java\\npublic class X {}\\n```")
        renderer.toggle_fold(renderer.block_ids("```java\\npublic class X {}\\n```")[0])
    """

    def __init__(
        self, config: RendererConfig | None = None, fold_state: FoldStateStore | None = None
    ):
        config = normalize_config(config or RendererConfig())
        validate_config(config)
        self.config = config
        self.fold_state = fold_state if fold_state is not None else FoldStateStore()
        self._theme = Theme.from_name(config.theme)

    @property
    def theme(self) -> Theme:
        return self._theme

    def set_theme(self, name: str) -> None:
        """Select the stylesheet preset used by `render`.

        Raises:
            UnknownThemeError: If `name` is not a preset.
        """
        self._theme = Theme.from_name(name)

    def toggle_fold(self, block_id: str) -> bool:
        """Flip a code block's fold flag; callers re-render to see it."""
        return self.fold_state.toggle(block_id)

    def dispose(self) -> None:
        """Forget all fold state."""
        self.fold_state.clear()

    def render(self, text: str | None) -> str:
        """Render Markdown into a complete, themed HTML document. Never raises."""
        return wrap_document(self.render_fragment(text), self._theme)

    def render_fragment(self, text: str | None) -> str:
        """Render Markdown into an HTML fragment.

        Empty input yields a placeholder; input over `max_input_chars` is
        truncated and followed by a notice; any failure yields an error block
        instead of an exception.
        """
        try:
            if text is None or not text.strip():
                return placeholder_fragment()

            limit = self.config.max_input_chars
            truncated = len(text) > limit
            if truncated:
                logger.warning("Input of %d characters truncated to %d", len(text), limit)
                text = text[:limit]

            body = render_body(text, self.config, self.fold_state)
            if truncated:
                body = f"{body}\n{truncation_fragment(limit)}"
            return body
        except Exception as error:
            logger.exception("Markdown rendering failed")
            return error_fragment(error)

    def block_ids(self, text: str) -> list[str]:
        """Return the code block ids a render of `text` would assign, in order."""
        ids = []
        ctx = RenderContext()
        lines = split_lines(text)
        in_code = False
        for index, line in enumerate(lines):
            info = parse_fence(line)
            if info is None:
                continue
            if in_code:
                in_code = False
                continue
            next_line = lines[index + 1] if index + 1 < len(lines) else None
            first_line = next_line if next_line is not None and parse_fence(next_line) is None else ""
            ids.append(_assign_block_id(ctx, language_tag(info), first_line, self.config))
            in_code = True
        return ids


def render_markdown(
    text: str,
    config: RendererConfig | None = None,
    fold_state: FoldStateStore | None = None,
) -> str:
    """Render Markdown into a complete HTML document with a one-off renderer.

    Examples:
        html = render_markdown("# Title", RendererConfig(theme="dark"))
    """
    return MarkdownRenderer(config, fold_state).render(text)
