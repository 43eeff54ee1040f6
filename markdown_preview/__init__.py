"""
markdown-preview: Markdown to HTML preview rendering with foldable code blocks.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    markdown-preview README.md -o README.html

Library Usage:
    from markdown_preview import FoldStateStore, MarkdownRenderer

    store = FoldStateStore()
    renderer = MarkdownRenderer(fold_state=store)
    html = renderer.render(text)
    renderer.toggle_fold(renderer.block_ids(text)[0])
    html = renderer.render(text)
"""

from .config import ConfigError, RendererConfig, build_config, load_config
from .escaping import Markup, RawText, escape_html
from .exceptions import RenderError, UnknownThemeError, UnsupportedLanguageError
from .folding import FoldStateStore
from .highlight import Language
from .inline import format_inline
from .renderer import MarkdownRenderer, render_body, render_markdown
from .themes import Theme

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "MarkdownRenderer",
    "render_markdown",
    "render_body",
    "format_inline",
    "escape_html",
    # Data models
    "FoldStateStore",
    "Language",
    "Markup",
    "RawText",
    "Theme",
    # Configuration
    "RendererConfig",
    "build_config",
    "load_config",
    # Exceptions
    "ConfigError",
    "RenderError",
    "UnknownThemeError",
    "UnsupportedLanguageError",
    # Version
    "__version__",
]
