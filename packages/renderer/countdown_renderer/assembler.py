"""Multi-page animation assembly with uniform frame timing."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from PIL import Image

from .imaging import encode_to_buffer, encode_to_file, join_vertical, set_frame_delays, split_pages

# Per-frame delay in the container's delay units (ms for Pillow's GIF/WebP writers).
FRAME_DELAY = 1000


@dataclass(frozen=True)
class AnimationAsset:
    strip: Image.Image
    page_height: int

    @property
    def page_count(self) -> int:
        return self.strip.height // self.page_height

    @property
    def delays(self) -> list[int]:
        return list(self.strip.info.get("duration", []))

    def pages(self) -> list[Image.Image]:
        return split_pages(self.strip)

    def encode(self, format: str = "GIF") -> bytes:
        return encode_to_buffer(self.strip, format)

    def save(self, path: str | Path, format: str | None = None) -> Path:
        return encode_to_file(self.strip, path, format)


def assemble(frames: Sequence[Image.Image], canvas_height: int) -> AnimationAsset:
    if not frames:
        raise ValueError("At least one frame is required")
    for idx, frame in enumerate(frames):
        if frame.height != canvas_height:
            raise ValueError(f"Frame {idx} height {frame.height} does not match canvas height {canvas_height}")

    strip = join_vertical(frames)
    set_frame_delays(strip, [FRAME_DELAY] * len(frames))
    return AnimationAsset(strip=strip, page_height=canvas_height)
