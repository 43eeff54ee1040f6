"""Constants used across the markdown-preview package."""

from __future__ import annotations

import re

# Line patterns
HEADING_PATTERN = re.compile(r"^(?P<marks>#{1,6})(?:[ \t]+(?P<content>.*?))?[ \t]*$")
LIST_ITEM_PATTERN = re.compile(
    r"^(?P<indent>[ \t]*)(?P<marker>[-+*]|\d+\.)[ \t]+(?P<content>.*)$"
)
HORIZONTAL_RULE_PATTERN = re.compile(r"^ {0,3}(?:(?:-[ \t]*){3,}|(?:\*[ \t]*){3,}|(?:_[ \t]*){3,})$")
BLOCKQUOTE_PATTERN = re.compile(r"^ {0,3}>[ \t]?(?P<content>.*)$")
CODE_FENCE_PATTERN = re.compile(r"^(?P<indent> {0,3})```(?P<info>.*)$")

# Rendering
CODE_BLOCK_ID_PREFIX = "codeblock-"
DEFAULT_LANGUAGE_TAG = "text"
FOLD_LINK_SCHEME = "fold:"
NBSP = "&nbsp;"
TAB_WIDTH = 4
LIST_INDENT_WIDTH = 2
HARD_BREAK_SUFFIX = "  "

MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd")

PLACEHOLDER_MESSAGE = "Start writing Markdown..."
TRUNCATION_NOTICE = "Content truncated after {limit} characters."
