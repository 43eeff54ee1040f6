"""Data models for markdown-preview."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class RenderState(Enum):
    """Block-level states used while walking Markdown lines.

    Attributes:
        NORMAL: Default state for regular text.
        IN_FENCED_CODE: Inside a fenced code block.
        IN_TABLE: Inside a table whose header has been accepted.
    """

    NORMAL = auto()
    IN_FENCED_CODE = auto()
    IN_TABLE = auto()


class ListType(Enum):
    """Kind of list wrapper, valued by its HTML tag."""

    ORDERED = "ol"
    UNORDERED = "ul"

    @classmethod
    def from_marker(cls, marker: str) -> ListType:
        return cls.ORDERED if marker[0].isdigit() else cls.UNORDERED


@dataclass(frozen=True)
class ListFrame:
    """One open list wrapper on the nesting stack.

    Attributes:
        indent_level: Nesting depth derived from leading whitespace.
        list_type: Whether the wrapper is ``<ol>`` or ``<ul>``.
    """

    indent_level: int
    list_type: ListType


@dataclass
class CodeBlock:
    """The fenced code block currently being rendered.

    Attributes:
        block_id: Identifier shared with the fold state store.
        language_tag: Lower-cased fence info tag (``"text"`` when absent).
        folded: Whether content lines are suppressed.
        line_count: Number of content lines consumed so far.
    """

    block_id: str
    language_tag: str
    folded: bool = False
    line_count: int = 0


@dataclass
class RenderContext:
    """Encapsulate renderer state while walking Markdown text.

    Attributes:
        state: Current block-level state.
        output: HTML fragments emitted so far.
        paragraph: Inline HTML for lines waiting to be joined into a paragraph.
        list_stack: Open list wrappers, shallowest first.
        code_block: Active fenced code block, if any.
        block_ordinal: Number of fences opened so far in this render.
        block_keys_seen: Occurrence counts of content-derived block keys.
        block_ids: Ids of the code blocks opened so far, in order.
        heading_slugs: Slugs already assigned to headings in this render.
        heading_slug_counters: Next numeric suffix for each base slug.
        table_alignments: Column alignments of the open table.
    """

    state: RenderState = RenderState.NORMAL
    output: list[str] = field(default_factory=list)
    paragraph: list[str] = field(default_factory=list)
    list_stack: list[ListFrame] = field(default_factory=list)
    code_block: CodeBlock | None = None
    block_ordinal: int = 0
    block_keys_seen: dict[str, int] = field(default_factory=dict)
    block_ids: list[str] = field(default_factory=list)
    heading_slugs: set[str] = field(default_factory=set)
    heading_slug_counters: dict[str, int] = field(default_factory=dict)
    table_alignments: list[str | None] = field(default_factory=list)

    def emit(self, fragment: str) -> None:
        self.output.append(fragment)
