from __future__ import annotations

import pytest

from markdown_preview.escaping import render_segments
from markdown_preview.exceptions import UnsupportedLanguageError
from markdown_preview.highlight import Language


def _html(language: Language, line: str) -> str:
    return render_segments(language.highlight(line))


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("java", Language.JAVA),
        ("JS", Language.JAVASCRIPT),
        ("javascript", Language.JAVASCRIPT),
        ("py", Language.PYTHON),
        ("Python", Language.PYTHON),
        ("html", Language.MARKUP),
        ("xml", Language.MARKUP),
        ("css", Language.CSS),
        ("json", Language.JSON),
        ("SQL", Language.SQL),
        ("rust", Language.TEXT),
        ("", Language.TEXT),
    ],
)
def test_parse_aliases(tag: str, expected: Language):
    assert Language.parse(tag) is expected


def test_parse_strict_rejects_unknown_tags():
    with pytest.raises(UnsupportedLanguageError) as excinfo:
        Language.parse("cobol", strict=True)

    assert excinfo.value.tag == "cobol"


def test_java_keywords():
    html = _html(Language.JAVA, "public class X {}")

    assert html.startswith('<span class="hl-keyword">public</span> <span class="hl-keyword">class</span>')
    assert html.endswith("X {}")


def test_java_string_is_escaped_inside_span():
    html = _html(Language.JAVA, 'String s = "a<b";')

    assert '<span class="hl-string">&quot;a&lt;b&quot;</span>' in html
    assert html.endswith(";")


def test_java_line_comment():
    html = _html(Language.JAVA, "x = 1; // done")

    assert '<span class="hl-number">1</span>' in html
    assert html.endswith('<span class="hl-comment">// done</span>')


def test_java_block_comment_and_hex_literal():
    html = _html(Language.JAVA, 'String s = "a\\"b"; int x = 0x1F; /* block */')

    assert '<span class="hl-string">&quot;a\\&quot;b&quot;</span>' in html
    assert '<span class="hl-number">0x1F</span>' in html
    assert '<span class="hl-comment">/* block */</span>' in html


def test_comment_marker_inside_string_is_not_a_comment():
    html = _html(Language.JAVASCRIPT, 'let u = "http://x";')

    assert '<span class="hl-string">&quot;http://x&quot;</span>' in html
    assert "hl-comment" not in html


def test_python_keywords_numbers_and_comment():
    html = _html(Language.PYTHON, "def f(x): return 42  # done")

    assert html.startswith('<span class="hl-keyword">def</span> f(x): ')
    assert '<span class="hl-keyword">return</span>' in html
    assert '<span class="hl-number">42</span>' in html
    assert html.endswith('<span class="hl-comment"># done</span>')


def test_sql_keywords_are_case_insensitive():
    html = _html(Language.SQL, "SELECT id FROM users -- all")

    assert '<span class="hl-keyword">SELECT</span>' in html
    assert '<span class="hl-keyword">FROM</span>' in html
    assert '<span class="hl-comment">-- all</span>' in html


def test_sql_doubled_quote_stays_one_string():
    html = _html(Language.SQL, "SELECT 'it''s'")

    assert html.count("hl-string") == 1
    assert '<span class="hl-string">&#39;it&#39;&#39;s&#39;</span>' in html


def test_markup_tags_and_comments():
    html = _html(Language.MARKUP, '<div class="x"><!-- note -->')

    assert html.startswith('&lt;<span class="hl-keyword">div</span>')
    assert '<span class="hl-string">&quot;x&quot;</span>' in html
    assert '<span class="hl-comment">&lt;!-- note --&gt;</span>' in html


def test_css_properties_and_comments():
    html = _html(Language.CSS, "p { color: red; } /* c */")

    assert '<span class="hl-keyword">color</span>' in html
    assert '<span class="hl-comment">/* c */</span>' in html


def test_json_keys_literals_and_numbers():
    html = _html(Language.JSON, '{"a": true, "b": 2}')

    assert '<span class="hl-string">&quot;a&quot;</span>' in html
    assert '<span class="hl-keyword">true</span>' in html
    assert '<span class="hl-number">2</span>' in html


def test_generic_marks_only_strings_and_numbers():
    assert _html(Language.TEXT, "if x = 'y' then 3") == (
        "if x = <span class=\"hl-string\">&#39;y&#39;</span> then <span class=\"hl-number\">3</span>"
    )


def test_generic_unterminated_string_runs_to_end_of_line():
    assert _html(Language.TEXT, 'say "open') == 'say <span class="hl-string">&quot;open</span>'


def test_digits_inside_identifiers_are_not_numbers():
    assert "hl-number" not in _html(Language.JAVA, "int value2 = x1;")
    assert "hl-number" not in _html(Language.TEXT, "value2 x1")


def test_blank_body_yields_no_segments():
    assert Language.PYTHON.highlight("") == []


def test_highlighted_line_has_no_trailing_newline():
    assert "\n" not in _html(Language.PYTHON, "x = 1  # c")
