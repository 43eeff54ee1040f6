import pytest

from markdown_preview.codeblocks import (
    close_block,
    indentation_markup,
    language_tag,
    open_block,
    parse_fence,
    render_code_line,
    split_indentation,
)
from markdown_preview.highlight import Language
from markdown_preview.models import CodeBlock


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("```java", "java"),
        ("```", ""),
        ("   ```py", "py"),
        ("```java title", "java title"),
        ("    ```java", None),
        ("``java", None),
        ("text", None),
    ],
)
def test_parse_fence(line: str, expected: str | None):
    assert parse_fence(line) == expected


@pytest.mark.parametrize(
    ("info", "expected"),
    [("java", "java"), (" Java ", "java"), ("", "text"), ("python extra", "python")],
)
def test_language_tag(info: str, expected: str):
    assert language_tag(info) == expected


def test_split_indentation():
    assert split_indentation("\t  x = 1") == ("\t  ", "x = 1")
    assert split_indentation("x") == ("", "x")


def test_indentation_markup_expands_tabs():
    assert indentation_markup("\t ").html == "&nbsp;" * 5


def test_empty_code_line_keeps_height():
    assert render_code_line("", Language.JAVA) == '<div class="code-line"><br></div>'


def test_code_line_preserves_indentation_and_escapes():
    assert render_code_line("  a < b", None) == (
        '<div class="code-line">&nbsp;&nbsp;a &lt; b</div>'
    )


def test_code_line_is_highlighted():
    assert render_code_line("    return x;", Language.JAVA) == (
        '<div class="code-line">&nbsp;&nbsp;&nbsp;&nbsp;'
        '<span class="hl-keyword">return</span> x;</div>'
    )


def test_open_expanded_block():
    html = open_block(CodeBlock(block_id="codeblock-1", language_tag="java"))

    assert html.startswith('<div class="code-block expanded" id="codeblock-1" data-language="java">')
    assert 'href="fold:codeblock-1"' in html
    assert 'title="Collapse"' in html
    assert '<span class="code-language">JAVA</span>' in html
    assert html.endswith('<div class="code-block-content">')


def test_open_folded_block_has_no_content_wrapper():
    html = open_block(CodeBlock(block_id="codeblock-1", language_tag="java", folded=True))

    assert 'class="code-block folded"' in html
    assert 'title="Expand"' in html
    assert "code-block-content" not in html


def test_open_block_without_folding_has_no_control():
    html = open_block(CodeBlock(block_id="codeblock-1", language_tag="text"), folding_enabled=False)

    assert "fold-toggle" not in html
    assert '<span class="code-language">TEXT</span>' in html


def test_close_expanded_block():
    assert close_block(CodeBlock(block_id="b", language_tag="text")) == "</div>\n</div>"


@pytest.mark.parametrize(("count", "note"), [(1, "1 line hidden"), (3, "3 lines hidden")])
def test_close_folded_block_reports_hidden_lines(count: int, note: str):
    block = CodeBlock(block_id="b", language_tag="text", folded=True, line_count=count)

    assert close_block(block) == f'<div class="code-block-folded">{note}</div>\n</div>'
