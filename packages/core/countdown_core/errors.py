"""Error taxonomy shared by the template parser and the render engine."""

from __future__ import annotations


class CountdownError(Exception):
    """Base class for all countdown engine failures."""


class ConfigurationError(CountdownError, ValueError):
    """A required field is missing or has the wrong type/shape."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class DurationError(ConfigurationError):
    """Start duration is malformed or outside the renderable range."""


class CountdownModeError(CountdownError, RuntimeError):
    """Countdown rendering was requested on a canvas not built from a template."""


class GlyphIndexError(CountdownError, IndexError):
    """Glyph lookup outside the 00..99 table."""
