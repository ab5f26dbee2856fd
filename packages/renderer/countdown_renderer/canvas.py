"""Canvas engine: plain images with text overlays, or countdown animation templates."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from PIL import Image

from countdown_core.color import decode_rgb
from countdown_core.config import parse_creation_options, parse_duration, parse_template, parse_text_options
from countdown_core.errors import ConfigurationError, CountdownModeError
from countdown_core.logging_setup import get_logger
from countdown_core.models import TIME_UNITS, CountdownTemplate, CreationOptions, Duration, Position2D

from .assembler import AnimationAsset, assemble
from .compositor import bake_background, render_frames
from .glyphs import GlyphTable, build_glyph_table
from .imaging import colored_text, composite_over, encode_to_file, load_file, solid_canvas

_log = get_logger("canvas")


class CanvasMode(str, Enum):
    IMAGE = "image"
    COUNTDOWN = "countdown"


class CountdownCanvas:
    """Owns one working image and, in countdown mode, its template resources.

    The baked background and glyph table are built once at construction and
    shared read-only by every frame of every ``render_countdown`` call.
    """

    def __init__(
        self,
        image: Image.Image,
        template: CountdownTemplate | None = None,
        glyphs: GlyphTable | None = None,
        workers: int = 1,
        output_format: str = "gif",
    ) -> None:
        if (template is None) != (glyphs is None):
            raise ValueError("template and glyphs must be provided together")
        self.image = image
        self.template = template
        self.glyphs = glyphs
        self.workers = max(1, int(workers))
        self.output_format = output_format.upper()
        self.mode = CanvasMode.IMAGE if template is None else CanvasMode.COUNTDOWN

    @classmethod
    def from_file(cls, path: str | Path, **kwargs: Any) -> "CountdownCanvas":
        return cls(load_file(path), **kwargs)

    @classmethod
    def create(cls, options: CreationOptions | Mapping[str, Any], **kwargs: Any) -> "CountdownCanvas":
        if not isinstance(options, CreationOptions):
            options = parse_creation_options(options)
        return cls(solid_canvas(options.width, options.height, decode_rgb(options.bg_color)), **kwargs)

    @classmethod
    def create_countdown(cls, template: CountdownTemplate | Mapping[str, Any], **kwargs: Any) -> "CountdownCanvas":
        if not isinstance(template, CountdownTemplate):
            template = parse_template(template)
        background = bake_background(template)
        glyphs = build_glyph_table(template.digits.style, template.digits.text_template)
        return cls(background, template=template, glyphs=glyphs, **kwargs)

    @property
    def positions(self) -> list[Position2D]:
        if self.template is None:
            return []
        return [self.template.digits.position_for(unit) for unit in TIME_UNITS]

    def draw_text(self, text: str, x: int, y: int, options: Mapping[str, Any] | None = None) -> None:
        if not isinstance(text, str) or not text:
            raise ConfigurationError("text must be a non-empty string", "text")
        for name, value in (("x", x), ("y", y)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number", name)
        text_options = parse_text_options(options)

        overlay = colored_text(text, text_options.render_options())
        self.image = composite_over([(self.image, 0, 0), (overlay, int(x), int(y))])

    def save(self, path: str | Path) -> Path:
        return encode_to_file(self.image, path)

    def _require_countdown(self) -> None:
        if self.mode is not CanvasMode.COUNTDOWN:
            raise CountdownModeError("The canvas is not initialized in countdown mode")

    @staticmethod
    def _frame_count(frames: Any) -> int:
        if isinstance(frames, bool) or not isinstance(frames, int):
            raise ConfigurationError("frames must be an integer", "frames")
        if frames < 1:
            _log.debug("frame count %d raised to 1", frames, extra={"event": "frames_clamped"})
            return 1
        return frames

    def render_animation(self, start: Duration | Mapping[str, int], frames: int = 1) -> AnimationAsset:
        self._require_countdown()
        duration = parse_duration(start)
        count = self._frame_count(frames)
        pages = render_frames(self.image, self.glyphs, self.positions, duration, count, workers=self.workers)
        return assemble(pages, self.image.height)

    def render_countdown(
        self,
        start: Duration | Mapping[str, int],
        frames: int = 1,
        out_path: str | Path | None = None,
    ) -> bytes | Path:
        """Render the countdown; returns encoded bytes, or the path written.

        The animation always holds one page per frame, but Pillow's GIF
        writer merges identical consecutive pages and sums their delays. A
        countdown held at 00 therefore decodes to fewer GIF frames, with the
        same total display time.
        """
        asset = self.render_animation(start, frames)
        _log.info(
            "rendered countdown with %d frames, %dx%d",
            asset.page_count,
            asset.strip.width,
            asset.page_height,
            extra={"event": "countdown_rendered"},
        )
        if out_path is None:
            return asset.encode(self.output_format)
        return asset.save(out_path)


def open_canvas(
    source: str | Path | Mapping[str, Any],
    mode: CanvasMode | str = CanvasMode.IMAGE,
    **kwargs: Any,
) -> CountdownCanvas:
    """Build a canvas from an image path, creation options, or a countdown template."""
    try:
        mode = CanvasMode(mode)
    except ValueError as exc:
        raise ConfigurationError("Invalid mode", "mode") from exc

    if isinstance(source, (str, Path)):
        if mode is not CanvasMode.IMAGE:
            raise ConfigurationError("Invalid mode", "mode")
        return CountdownCanvas.from_file(source, **kwargs)
    if isinstance(source, Mapping):
        if mode is CanvasMode.COUNTDOWN:
            return CountdownCanvas.create_countdown(source, **kwargs)
        return CountdownCanvas.create(source, **kwargs)
    raise ConfigurationError("source must be a file path or an options object", "source")
