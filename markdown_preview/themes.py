"""Stylesheet presets and the HTML document wrapper."""

from __future__ import annotations

from enum import Enum

from .exceptions import UnknownThemeError

_SHARED_CSS = """
.markdown-body { padding: 20px; margin: 0 auto; }
.markdown-body ul, .markdown-body ol { padding-left: 2em; }
.markdown-body table { border-collapse: collapse; width: 100%; }
.code-block { margin: 16px 0; border-radius: 6px; overflow-x: auto; }
.code-block-header { display: flex; gap: 8px; align-items: center; padding: 4px 12px; }
.fold-toggle { text-decoration: none; cursor: pointer; }
.code-language { font-size: 11px; font-weight: 600; letter-spacing: 0.05em; }
.code-block-content { padding: 8px 16px 16px; }
.code-line { white-space: pre; font-family: Consolas, Monaco, 'Courier New', monospace; font-size: 14px; line-height: 1.4; }
.code-block-folded { padding: 4px 16px 8px; font-style: italic; }
.render-error { padding: 20px; border-radius: 6px; margin: 20px 0; }
.placeholder { text-align: center; margin-top: 50px; }
.truncation-notice { font-style: italic; }
"""

_GITHUB_CSS = """
.markdown-body { font-family: -apple-system, 'Segoe UI', Helvetica, Arial, sans-serif; font-size: 16px; line-height: 1.6; color: #24292f; background-color: #ffffff; max-width: 1000px; }
.markdown-body h1, .markdown-body h2 { border-bottom: 1px solid #d0d7de; padding-bottom: 0.3em; }
.markdown-body code { background-color: rgba(175, 184, 193, 0.2); padding: 0.2em 0.4em; border-radius: 3px; font-size: 85%; }
.markdown-body blockquote { border-left: 0.25em solid #d0d7de; padding-left: 1em; color: #656d76; }
.markdown-body th, .markdown-body td { border: 1px solid #d0d7de; padding: 8px 12px; }
.markdown-body th { background-color: #f6f8fa; font-weight: 600; }
.code-block { background-color: #f6f8fa; border: 1px solid #e1e4e8; }
.code-line { color: #24292f; }
.fold-toggle, .code-language, .code-block-folded { color: #57606a; }
.hl-keyword { color: #cf222e; font-weight: 600; }
.hl-string { color: #0a3069; }
.hl-number { color: #0550ae; }
.hl-comment { color: #6e7781; font-style: italic; }
.render-error { color: #d73a49; background: #ffeef0; }
.placeholder { color: #888888; }
"""

_DARK_CSS = """
.markdown-body { font-family: -apple-system, 'Segoe UI', Helvetica, Arial, sans-serif; font-size: 16px; line-height: 1.6; color: #c9d1d9; background-color: #0d1117; max-width: 1000px; }
.markdown-body h1, .markdown-body h2 { border-bottom: 1px solid #30363d; padding-bottom: 0.3em; color: #f0f6fc; }
.markdown-body code { background-color: rgba(110, 118, 129, 0.4); color: #e6edf3; padding: 0.2em 0.4em; border-radius: 3px; font-size: 85%; }
.markdown-body blockquote { border-left: 0.25em solid #30363d; padding-left: 1em; color: #8b949e; }
.markdown-body th, .markdown-body td { border: 1px solid #30363d; padding: 8px 12px; }
.markdown-body th { background-color: #161b22; font-weight: 600; color: #f0f6fc; }
.code-block { background-color: #161b22; border: 1px solid #30363d; }
.code-line { color: #e6edf3; }
.fold-toggle, .code-language, .code-block-folded { color: #8b949e; }
.hl-keyword { color: #ff7b72; font-weight: 600; }
.hl-string { color: #a5d6ff; }
.hl-number { color: #79c0ff; }
.hl-comment { color: #8b949e; font-style: italic; }
.render-error { color: #ffa198; background: #490202; }
.placeholder { color: #8b949e; }
"""

_MINIMAL_CSS = """
.markdown-body { font-family: Georgia, 'Times New Roman', serif; font-size: 18px; line-height: 1.7; color: #333333; background-color: #ffffff; padding: 40px; max-width: 800px; }
.markdown-body h1, .markdown-body h2, .markdown-body h3 { font-family: 'Helvetica Neue', Arial, sans-serif; }
.markdown-body code { background-color: #f5f5f5; padding: 0.2em 0.4em; border-radius: 3px; font-size: 85%; }
.markdown-body del { text-decoration: line-through; color: #666666; }
.markdown-body hr { border: none; border-top: 1px solid #e0e0e0; margin: 24px 0; height: 0; }
.code-block { background-color: #f8f8f8; border: 1px solid #e0e0e0; }
.code-line { color: #333333; }
.fold-toggle, .code-language, .code-block-folded { color: #777777; }
.hl-keyword { font-weight: 700; }
.hl-string { color: #555555; }
.hl-number { color: #555555; }
.hl-comment { color: #999999; font-style: italic; }
.render-error { color: #b00020; background: #fdecea; }
.placeholder { color: #999999; }
"""


class Theme(Enum):
    """Built-in stylesheet presets, valued by their configuration name."""

    GITHUB = "github"
    DARK = "dark"
    MINIMAL = "minimal"

    @classmethod
    def from_name(cls, name: str) -> Theme:
        """Look up a theme by case-insensitive name.

        Raises:
            UnknownThemeError: If `name` is not a preset.

        Examples:
            Theme.from_name("Dark")  # Theme.DARK
        """
        try:
            return cls(name.strip().lower())
        except ValueError as error:
            raise UnknownThemeError(name, tuple(theme.value for theme in cls)) from error

    @property
    def css(self) -> str:
        return _SHARED_CSS + _THEME_CSS[self]


_THEME_CSS = {
    Theme.GITHUB: _GITHUB_CSS,
    Theme.DARK: _DARK_CSS,
    Theme.MINIMAL: _MINIMAL_CSS,
}


def wrap_document(body: str, theme: Theme, title: str = "Markdown Preview") -> str:
    """Embed a rendered fragment in a complete HTML document.

    Args:
        body: Rendered HTML fragment.
        theme: Stylesheet preset to embed.
        title: Document title; already-escaped text.

    Returns:
        str: A self-contained HTML document.
    """
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '<meta charset="UTF-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"<title>{title}</title>\n"
        f"<style>{theme.css}</style>\n"
        "</head>\n"
        "<body>\n"
        f'<div class="markdown-body">\n{body}\n</div>\n'
        "</body>\n"
        "</html>\n"
    )
