"""Nesting of ordered and unordered lists."""

from __future__ import annotations

from .constants import LIST_INDENT_WIDTH, TAB_WIDTH
from .models import ListFrame, ListType


def leading_columns(line: str) -> int:
    """Compute the column width of leading whitespace.

    Spaces count one column and tabs count `TAB_WIDTH` columns.

    Examples:
        leading_columns("    text")  # 4
        leading_columns("\\t- item")  # 4
    """
    columns = 0
    for character in line:
        if character == " ":
            columns += 1
        elif character == "\t":
            columns += TAB_WIDTH
        else:
            break
    return columns


def indent_level(indent: str) -> int:
    """Translate an item's leading whitespace into a nesting depth."""
    return leading_columns(indent) // LIST_INDENT_WIDTH


def _open(stack: list[ListFrame], level: int, list_type: ListType) -> str:
    stack.append(ListFrame(level, list_type))
    return f"<{list_type.value}>"


def _close(stack: list[ListFrame]) -> str:
    frame = stack.pop()
    return f"</{frame.list_type.value}>"


def enter_list_item(stack: list[ListFrame], level: int, list_type: ListType) -> list[str]:
    """Reconcile the open wrappers with the next list item.

    Depth is adjusted first (opening one wrapper per level gained, closing
    wrappers deeper than the item), then the type at the resulting depth is
    reconciled by closing and reopening.

    Args:
        stack: Open frames, shallowest first; updated in place.
        level: Nesting depth of the item.
        list_type: Type implied by the item's marker.

    Returns:
        list[str]: Wrapper tags to emit before the item, in order.

    Examples:
        stack = []
        enter_list_item(stack, 0, ListType.UNORDERED)  # ["<ul>"]
        enter_list_item(stack, 2, ListType.UNORDERED)  # ["<ul>", "<ul>"]
        enter_list_item(stack, 0, ListType.ORDERED)  # ["</ul>", "</ul>", "</ul>", "<ol>"]
    """
    if not stack:
        return [_open(stack, level, list_type)]

    top_level = stack[-1].indent_level
    if level > top_level:
        return [_open(stack, depth, list_type) for depth in range(top_level + 1, level + 1)]

    tags = []
    while stack and stack[-1].indent_level > level:
        tags.append(_close(stack))

    if not stack or stack[-1].indent_level < level:
        tags.append(_open(stack, level, list_type))
    elif stack[-1].list_type is not list_type:
        tags.append(_close(stack))
        tags.append(_open(stack, level, list_type))
    return tags


def close_all(stack: list[ListFrame]) -> list[str]:
    """Close every open wrapper, deepest first."""
    tags = []
    while stack:
        tags.append(_close(stack))
    return tags
