"""Core countdown services: template models, parsing, clock, colours, settings."""

from .clock import advance, countdown_sequence
from .color import decode_argb, decode_rgb
from .config import (
    load_template,
    parse_creation_options,
    parse_digit_style,
    parse_digits,
    parse_duration,
    parse_label,
    parse_position,
    parse_template,
    parse_text_options,
)
from .errors import ConfigurationError, CountdownError, CountdownModeError, DurationError, GlyphIndexError
from .models import (
    Alignment,
    CountdownTemplate,
    CreationOptions,
    DigitLayout,
    DigitPosition,
    DigitStyle,
    Duration,
    LabelSpec,
    Position2D,
    TextOptions,
    TextRenderOptions,
    TimeUnit,
)
from .settings import AppSettings, load_settings, save_settings

__all__ = [
    "Alignment",
    "AppSettings",
    "ConfigurationError",
    "CountdownError",
    "CountdownModeError",
    "CountdownTemplate",
    "CreationOptions",
    "DigitLayout",
    "DigitPosition",
    "DigitStyle",
    "Duration",
    "DurationError",
    "GlyphIndexError",
    "LabelSpec",
    "Position2D",
    "TextOptions",
    "TextRenderOptions",
    "TimeUnit",
    "advance",
    "countdown_sequence",
    "decode_argb",
    "decode_rgb",
    "load_settings",
    "load_template",
    "parse_creation_options",
    "parse_digit_style",
    "parse_digits",
    "parse_duration",
    "parse_label",
    "parse_position",
    "parse_template",
    "parse_text_options",
    "save_settings",
]
