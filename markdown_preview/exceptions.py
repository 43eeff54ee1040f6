"""Package-specific exception types."""

from __future__ import annotations


class RenderError(ValueError):
    """Base class for rendering-related errors.

    Represents errors raised by the renderer's public API. `render` itself
    never lets these escape; they surface from configuration-style calls such
    as `set_theme`.
    """


class UnknownThemeError(RenderError):
    """Raised when a theme name is not one of the built-in presets.

    Args:
        name: The rejected theme name.
        available: Names that would have been accepted.
    """

    def __init__(self, name: str, available: tuple[str, ...]):
        self.name = name
        self.available = available
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Unknown theme {self.name!r} (expected one of: {', '.join(self.available)})"


class UnsupportedLanguageError(RenderError):
    """Raised when strict language lookup does not recognize a fence tag.

    Args:
        tag: The fence info tag that failed to resolve.
    """

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"No highlighter registered for language {tag!r}")
