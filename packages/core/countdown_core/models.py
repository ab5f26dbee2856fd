"""Typed countdown template models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Mapping, NamedTuple


DEFAULT_BG_COLOR = "#FFFFFF"
DEFAULT_TEXT_COLOR = "#000000"
GLYPH_COUNT = 100


class TimeUnit(IntEnum):
    DAYS = 0
    HOURS = 1
    MINUTES = 2
    SECONDS = 3

    @property
    def key(self) -> str:
        return self.name.lower()


TIME_UNITS: tuple[TimeUnit, ...] = tuple(TimeUnit)


class Alignment(str, Enum):
    """Compass anchor used to place text inside a bounding box."""

    CENTRE = "centre"
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"
    NORTH_EAST = "north-east"
    SOUTH_EAST = "south-east"
    SOUTH_WEST = "south-west"
    NORTH_WEST = "north-west"

    @classmethod
    def lookup(cls, name: str) -> "Alignment | None":
        key = name.strip().lower().replace("_", "-")
        if key == "center":
            key = "centre"
        if key in ("northeast", "southeast", "southwest", "northwest"):
            key = f"{key[:5]}-{key[5:]}"
        for member in cls:
            if member.value == key:
                return member
        return None


class Duration(NamedTuple):
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0

    def total_seconds(self) -> int:
        return self.days * 86400 + self.hours * 3600 + self.minutes * 60 + self.seconds


@dataclass(frozen=True)
class Position2D:
    x: int
    y: int
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class TextRenderOptions:
    """Everything needed to turn a string into a colourised text layer."""

    color: str = DEFAULT_TEXT_COLOR
    font: str | None = None
    font_file: str | None = None
    width: int = 0
    height: int = 0
    alignment: Alignment = Alignment.CENTRE
    padding_top: int = 0
    padding_bottom: int = 0


@dataclass(frozen=True)
class CreationOptions:
    width: int
    height: int
    bg_color: str = DEFAULT_BG_COLOR


@dataclass(frozen=True)
class LabelSpec:
    text: str
    position: Position2D
    color: str | None = None
    text_alignment: Alignment = Alignment.CENTRE
    font: str | None = None
    font_file: str | None = None
    padding_top: int = 0
    padding_bottom: int = 0

    def render_options(self) -> TextRenderOptions:
        return TextRenderOptions(
            color=self.color or DEFAULT_TEXT_COLOR,
            font=self.font,
            font_file=self.font_file,
            width=self.position.width,
            height=self.position.height,
            alignment=self.text_alignment,
            padding_top=self.padding_top,
            padding_bottom=self.padding_bottom,
        )


@dataclass(frozen=True)
class DigitPosition:
    position: Position2D


@dataclass(frozen=True)
class DigitStyle:
    color: str = DEFAULT_TEXT_COLOR
    width: int = 0
    height: int = 0
    text_alignment: Alignment = Alignment.CENTRE
    font: str | None = None
    font_file: str | None = None
    padding_top: int = 0
    padding_bottom: int = 0

    def render_options(self) -> TextRenderOptions:
        return TextRenderOptions(
            color=self.color,
            font=self.font,
            font_file=self.font_file,
            width=self.width,
            height=self.height,
            alignment=self.text_alignment,
            padding_top=self.padding_top,
            padding_bottom=self.padding_bottom,
        )


@dataclass(frozen=True)
class DigitLayout:
    # One entry per TimeUnit, indexed by TimeUnit value.
    positions: tuple[DigitPosition, DigitPosition, DigitPosition, DigitPosition]
    style: DigitStyle = field(default_factory=DigitStyle)
    text_template: str | None = None

    def position_for(self, unit: TimeUnit) -> Position2D:
        return self.positions[int(unit)].position


@dataclass(frozen=True)
class CountdownTemplate:
    width: int
    height: int
    digits: DigitLayout
    bg_color: str = DEFAULT_BG_COLOR
    labels: Mapping[str, LabelSpec] = field(default_factory=dict)

    @property
    def creation_options(self) -> CreationOptions:
        return CreationOptions(width=self.width, height=self.height, bg_color=self.bg_color)

    def ordered_labels(self) -> list[tuple[str, LabelSpec]]:
        """Labels in a stable order (by name) so composition is repeatable."""
        return sorted(self.labels.items(), key=lambda item: item[0])


@dataclass(frozen=True)
class TextOptions:
    """Options accepted by ``draw_text`` on an arbitrary canvas."""

    color: str = DEFAULT_TEXT_COLOR
    font: str | None = None
    font_file: str | None = None

    def render_options(self) -> TextRenderOptions:
        return TextRenderOptions(color=self.color, font=self.font, font_file=self.font_file)
