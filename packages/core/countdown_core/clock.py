"""Countdown arithmetic: step a duration back by one second."""

from __future__ import annotations

from typing import Iterator, Sequence

from .models import Duration


def advance(duration: Sequence[int]) -> Duration:
    """Subtract one second with 60/60/24 carry; sticks at zero once exhausted."""
    days, hours, minutes, seconds = duration

    seconds -= 1
    if seconds < 0:
        seconds += 60
        minutes -= 1
    if minutes < 0:
        minutes += 60
        hours -= 1
    if hours < 0:
        hours += 24
        days -= 1
    if days < 0:
        days = hours = minutes = seconds = 0

    return Duration(days, hours, minutes, seconds)


def countdown_sequence(start: Sequence[int], frames: int) -> Iterator[Duration]:
    """Yield ``start, advance(start), ...`` for ``frames`` steps."""
    current = Duration(*start)
    for _ in range(frames):
        yield current
        current = advance(current)
