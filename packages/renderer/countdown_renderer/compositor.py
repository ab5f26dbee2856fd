"""Background baking and per-frame countdown composition."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from PIL import Image

from countdown_core.clock import countdown_sequence
from countdown_core.color import decode_rgb
from countdown_core.logging_setup import get_logger
from countdown_core.models import TIME_UNITS, CountdownTemplate, Position2D

from .glyphs import GlyphTable
from .imaging import colored_text, composite_over, solid_canvas

_log = get_logger("compositor")


def bake_background(template: CountdownTemplate) -> Image.Image:
    """Solid canvas with every static label composited once."""
    base = solid_canvas(template.width, template.height, decode_rgb(template.bg_color))
    layers = [(base, 0, 0)]
    for _name, label in template.ordered_labels():
        layers.append((colored_text(label.text, label.render_options()), label.position.x, label.position.y))
    background = composite_over(layers)
    _log.info("background baked with %d labels", len(layers) - 1, extra={"event": "background_baked"})
    return background


def render_frame(
    background: Image.Image,
    glyphs: GlyphTable,
    positions: Sequence[Position2D],
    duration: Sequence[int],
) -> Image.Image:
    layers = [(background, 0, 0)]
    for unit in TIME_UNITS:
        position = positions[int(unit)]
        layers.append((glyphs[duration[int(unit)]], position.x, position.y))
    return composite_over(layers)


def render_frames(
    background: Image.Image,
    glyphs: GlyphTable,
    positions: Sequence[Position2D],
    start: Sequence[int],
    frames: int,
    workers: int = 1,
) -> list[Image.Image]:
    """Render ``frames`` pages counting down from ``start``, in countdown order."""
    durations = list(countdown_sequence(start, frames))

    def _render(duration):
        return render_frame(background, glyphs, positions, duration)

    if workers <= 1 or len(durations) <= 1:
        return [_render(d) for d in durations]

    # executor.map yields results in submission order.
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="countdown-frame") as pool:
        return list(pool.map(_render, durations))
