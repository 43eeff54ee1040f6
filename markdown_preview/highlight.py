"""Per-language syntax highlighting for fenced code lines."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from itertools import groupby

from pygments import lex
from pygments.lexer import Lexer, RegexLexer
from pygments.lexers import get_lexer_by_name
from pygments.token import Comment, Keyword, Name, Number, String, Text, Whitespace, _TokenType

from .escaping import Markup, RawText, Segment, merge_segments
from .exceptions import UnsupportedLanguageError

# First match wins; comments go first so preprocessor-style comment tokens
# are not mistaken for anything else.
TOKEN_CLASSES: tuple[tuple[_TokenType, str], ...] = (
    (Comment, "comment"),
    (String, "string"),
    (Number, "number"),
    (Keyword, "keyword"),
)


class LiteralLexer(RegexLexer):
    """Lexer for untagged or unknown code: only string and numeric literals."""

    name = "Literals"
    aliases = []
    filenames = []

    tokens = {
        "root": [
            (r'"(?:\\.|[^"\\\n])*"?', String.Double),
            (r"'(?:\\.|[^'\\\n])*'?", String.Single),
            (r"0[xX][0-9a-fA-F]+|\d+(?:\.\d+)?", Number),
            (r"[^\W\d]\w*", Text),
            (r"\s+", Whitespace),
            (r".", Text),
        ]
    }


class Language(Enum):
    """Languages with dedicated highlighting, plus a generic fallback.

    Each member is highlighted by a Pygments lexer; `TEXT` uses
    `LiteralLexer` and only marks string and numeric literals.
    """

    JAVA = "java"
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    MARKUP = "html"
    CSS = "css"
    JSON = "json"
    SQL = "sql"
    TEXT = "text"

    @classmethod
    def parse(cls, tag: str, strict: bool = False) -> Language:
        """Resolve a fence info tag to a language.

        Args:
            tag: Fence info tag, matched case-insensitively against aliases.
            strict: Raise instead of falling back to `TEXT` for unknown tags.

        Returns:
            Language: The matching member, or `TEXT`.

        Raises:
            UnsupportedLanguageError: If `strict` is set and the tag is unknown.

        Examples:
            Language.parse("JS")  # Language.JAVASCRIPT
            Language.parse("rust")  # Language.TEXT
        """
        language = _ALIASES.get(tag.strip().lower())
        if language is not None:
            return language
        if strict:
            raise UnsupportedLanguageError(tag)
        return cls.TEXT

    @property
    def lexer(self) -> Lexer:
        return _get_lexer(self)

    def highlight(self, line: str) -> list[Segment]:
        """Split a code line into raw text and highlighted spans.

        Adjacent tokens of the same class share one span, so a string the
        lexer emits in pieces (escapes, doubled quotes) stays a single span.

        Args:
            line: Code text with leading indentation already removed.

        Returns:
            list[Segment]: Segments where recognized tokens are wrapped in
                ``hl-keyword``, ``hl-string``, ``hl-number`` or ``hl-comment``
                spans.

        Examples:
            Language.JAVA.highlight("public int x = 1;")
        """
        token_classes = _EXTRA_TOKEN_CLASSES.get(self, ()) + TOKEN_CLASSES
        segments: list[Segment] = []
        tokens = lex(line, self.lexer)
        for css_class, group in groupby(tokens, key=lambda token: _classify(token[0], token_classes)):
            # Lexers append a final newline; a code line never contains one.
            text = "".join(value for _token_type, value in group).replace("\n", "")
            if not text:
                continue
            if css_class is None:
                segments.append(RawText(text))
            else:
                segments.extend(_span(css_class, text))
        return merge_segments(segments)


def _classify(
    token_type: _TokenType, token_classes: tuple[tuple[_TokenType, str], ...]
) -> str | None:
    for parent, css_class in token_classes:
        if token_type in parent:
            return css_class
    return None


def _span(css_class: str, text: str) -> list[Segment]:
    return [Markup(f'<span class="hl-{css_class}">'), RawText(text), Markup("</span>")]


@lru_cache(maxsize=None)
def _get_lexer(language: Language) -> Lexer:
    if language is Language.TEXT:
        return LiteralLexer()
    return get_lexer_by_name(language.value)


# Tag names in markup and object keys in JSON are `Name.Tag` tokens.
_EXTRA_TOKEN_CLASSES: dict[Language, tuple[tuple[_TokenType, str], ...]] = {
    Language.MARKUP: ((Name.Tag, "keyword"),),
    Language.JSON: ((Name.Tag, "string"),),
}

_ALIASES = {
    "java": Language.JAVA,
    "javascript": Language.JAVASCRIPT,
    "js": Language.JAVASCRIPT,
    "python": Language.PYTHON,
    "py": Language.PYTHON,
    "html": Language.MARKUP,
    "xml": Language.MARKUP,
    "css": Language.CSS,
    "json": Language.JSON,
    "sql": Language.SQL,
    "text": Language.TEXT,
}
