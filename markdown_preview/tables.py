"""Pipe table detection and rendering."""

from __future__ import annotations

import re

from .inline import format_inline

SEPARATOR_PATTERN = re.compile(r"^[\s|:-]+$")


def is_row(line: str) -> bool:
    """Return True when a line is row-shaped (contains a pipe)."""
    return "|" in line


def split_cells(line: str) -> list[str]:
    """Split a row into trimmed cells.

    One leading and one trailing pipe are stripped; empty cells in between
    are preserved.

    Examples:
        split_cells("|A|B|")  # ["A", "B"]
        split_cells("a || c")  # ["a", "", "c"]
    """
    row = line.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|"):
        row = row[:-1]
    return [cell.strip() for cell in row.split("|")]


def parse_separator(line: str) -> list[str | None] | None:
    """Validate a separator line and read its column alignments.

    Args:
        line: Candidate separator, such as ``"|:---|--:|"``.

    Returns:
        list[str | None] | None: One alignment per column (``"left"``,
            ``"right"``, ``"center"`` or None), or None when the line is not
            a valid separator.

    Examples:
        parse_separator("|---|:-:|")  # [None, "center"]
        parse_separator("| a | b |")  # None
    """
    if not SEPARATOR_PATTERN.match(line):
        return None

    alignments: list[str | None] = []
    for cell in split_cells(line):
        if "-" not in cell:
            return None
        starts, ends = cell.startswith(":"), cell.endswith(":")
        if starts and ends:
            alignments.append("center")
        elif ends:
            alignments.append("right")
        elif starts:
            alignments.append("left")
        else:
            alignments.append(None)
    return alignments


def is_table_start(line: str, next_line: str | None) -> bool:
    """Return True when `line` is a header confirmed by a separator below it."""
    return is_row(line) and next_line is not None and parse_separator(next_line) is not None


def _cell(tag: str, content: str, alignment: str | None) -> str:
    style = f' style="text-align: {alignment}"' if alignment else ""
    return f"<{tag}{style}>{format_inline(content)}</{tag}>"


def render_row(line: str, alignments: list[str | None], header: bool = False) -> str:
    """Render one table row, formatting each cell's inline Markdown."""
    tag = "th" if header else "td"
    cells = [
        _cell(tag, content, alignments[index] if index < len(alignments) else None)
        for index, content in enumerate(split_cells(line))
    ]
    return f"<tr>{''.join(cells)}</tr>"


def open_table(header_line: str, alignments: list[str | None]) -> str:
    return f"<table>\n<thead>\n{render_row(header_line, alignments, header=True)}\n</thead>\n<tbody>"


def close_table() -> str:
    return "</tbody>\n</table>"
