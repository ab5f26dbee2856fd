"""Pre-rendered two-digit glyph table for countdown frames."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

from countdown_core.errors import GlyphIndexError
from countdown_core.logging_setup import get_logger
from countdown_core.models import GLYPH_COUNT, DigitStyle

from .imaging import colored_text

_log = get_logger("glyphs")


def glyph_text(value: int, text_template: str | None = None) -> str:
    text = f"{value:02d}"
    if text_template:
        return text_template % text
    return text


@dataclass(frozen=True)
class GlyphTable:
    """Immutable glyph images indexed by the two-digit value 0..99."""

    images: tuple[Image.Image, ...]
    texts: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.images)

    def __getitem__(self, value: int) -> Image.Image:
        if not 0 <= value < len(self.images):
            raise GlyphIndexError(f"Glyph value {value} outside 0..{len(self.images) - 1}")
        return self.images[value]


def build_glyph_table(style: DigitStyle, text_template: str | None = None) -> GlyphTable:
    options = style.render_options()
    texts = tuple(glyph_text(value, text_template) for value in range(GLYPH_COUNT))
    images = tuple(colored_text(text, options) for text in texts)
    _log.info("glyph table built with %d entries", len(images), extra={"event": "glyph_table_built"})
    return GlyphTable(images=images, texts=texts)
