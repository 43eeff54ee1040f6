from __future__ import annotations

import re
import string

from hypothesis import given
from hypothesis import strategies as st

from markdown_preview.escaping import escape_html
from markdown_preview.folding import FoldStateStore
from markdown_preview.inline import format_inline
from markdown_preview.renderer import MarkdownRenderer, render_body
from markdown_preview.slugify import generate_slug

markdownish_text = st.text(alphabet="-*+1.#>|`~_[]()! \t\nabcXYZ<&\"'", max_size=300)


@given(st.text())
def test_generate_slug_is_ascii_lowercase_and_non_empty(title: str):
    slug = generate_slug(title)
    assert slug  # never empty
    assert slug == slug.casefold()
    slug.encode("ascii")
    assert " " not in slug


@given(st.text(alphabet=" \t\n", min_size=0))
def test_blank_titles_always_return_untitled(title: str):
    assert generate_slug(title) == "untitled"


@given(st.text())
def test_generate_slug_is_idempotent(title: str):
    slug = generate_slug(title)
    assert generate_slug(slug) == slug


@given(st.text(alphabet=string.ascii_letters + string.digits + " ", max_size=50))
def test_plain_words_pass_through_inline_formatting(text: str):
    assert format_inline(text) == text


@given(st.text())
def test_escaped_text_contains_no_reserved_characters(text: str):
    escaped = escape_html(text)
    assert "<" not in escaped
    assert ">" not in escaped
    assert '"' not in escaped


@given(markdownish_text)
def test_render_is_deterministic(text: str):
    assert render_body(text) == render_body(text)


@given(st.text())
def test_user_text_never_opens_tags(text: str):
    html = render_body(text)
    assert "<script" not in html
    assert "\x00" not in html


@given(markdownish_text)
def test_block_structures_are_balanced(text: str):
    """Property: every wrapper the renderer opens is closed by the end of input."""
    html = render_body(text)

    assert html.count("<ul>") == html.count("</ul>")
    assert html.count("<ol>") == html.count("</ol>")
    assert html.count("<table>") == html.count("</table>")
    assert html.count("<div") == html.count("</div>")
    assert html.count("<p") == html.count("</p>")


list_item = st.tuples(
    st.integers(min_value=0, max_value=8),
    st.sampled_from(["-", "*", "+", "1."]),
    st.text(alphabet=string.ascii_letters, min_size=1, max_size=8),
)


@given(st.lists(list_item, min_size=1, max_size=20))
def test_list_nesting_never_skips_closing(items):
    text = "\n".join(f"{' ' * indent}{marker} {word}" for indent, marker, word in items)
    html = render_body(text)

    depth = 0
    for tag in re.findall(r"</?[uo]l>", html):
        depth += -1 if tag.startswith("</") else 1
        assert depth >= 0
    assert depth == 0
    assert html.count("<li>") == len(items)


code_block = st.tuples(
    st.sampled_from(["java", "python", "js", "", "sql"]),
    st.text(alphabet=string.ascii_letters + " ;{}=", max_size=12),
)


@given(st.lists(code_block, min_size=1, max_size=6), st.sampled_from(["content", "position"]))
def test_toggling_every_block_folds_every_block(blocks, strategy: str):
    from markdown_preview.config import RendererConfig

    text = "\n".join(f"```{tag}\n{line}\n```" for tag, line in blocks)
    renderer = MarkdownRenderer(RendererConfig(fold_keys=strategy), FoldStateStore())

    block_ids = renderer.block_ids(text)
    assert len(block_ids) == len(set(block_ids)) == len(blocks)

    for block_id in block_ids:
        renderer.toggle_fold(block_id)
    html = renderer.render_fragment(text)

    assert html.count('class="code-block folded"') == len(blocks)
    assert "code-block-content" not in html
