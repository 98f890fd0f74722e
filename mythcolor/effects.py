"""Effect synthesizers — gradient and rainbow coloring, one code per character."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from mythcolor.color import MARKER, Color, from_hsb, interpolate, to_escape


def apply_gradient(
    text: str, stops: Sequence[Color], loop: bool, marker: str = MARKER,
) -> str:
    """Color each character by interpolating across the stops.

    Non-looping gradients end exactly on the last stop; looping gradients
    spread over length L so the last character stops short of it.
    """
    if not text or not stops:
        return text
    if len(stops) == 1:
        code = to_escape(stops[0], marker)
        return "".join(code + ch for ch in text)

    length = len(text)
    segments = len(stops) - 1
    effective = length if loop else length - 1
    parts: list[str] = []

    for i, ch in enumerate(text):
        relative = i / effective if effective > 0 else 0.0
        if not loop:
            relative = min(relative, 1.0)
        segment_pos = relative * segments
        index = min(max(math.floor(segment_pos), 0), segments - 1)
        fraction = max(0.0, min(1.0, segment_pos - index))
        color = interpolate(stops[index], stops[index + 1], fraction)
        parts.append(to_escape(color, marker))
        parts.append(ch)
    return "".join(parts)


def rainbow_hue(index: int, length: int, speed: int, loop: bool) -> float:
    """Hue for character ``index``: cyclic when looping, a single sweep otherwise."""
    length = max(length, 1)
    if loop:
        cycles = max(speed, 1)
        return ((index / length) * cycles) % 1.0
    return max(0.0, min(1.0, index / max(length - 1, 1)))


def apply_rainbow(
    text: str,
    speed: int = 0,
    saturation: float = 1.0,
    brightness: float = 1.0,
    loop: bool = False,
    marker: str = MARKER,
) -> str:
    """Color each character with a hue sweep at fixed saturation/brightness."""
    if not text:
        return text
    parts: list[str] = []
    for i, ch in enumerate(text):
        hue = rainbow_hue(i, len(text), speed, loop)
        parts.append(to_escape(from_hsb(hue, saturation, brightness), marker))
        parts.append(ch)
    return "".join(parts)


# ── Parsed tag parameters ────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class GradientSpec:
    stops: tuple[Color, ...]
    speed: int = 0  # parsed, not used for static output
    loop: bool = False

    def apply(self, text: str, marker: str = MARKER) -> str:
        return apply_gradient(text, self.stops, self.loop, marker)

    def describe(self) -> str:
        return "gradient " + ":".join(c.hex for c in self.stops) + (" loop" if self.loop else "")


@dataclass(frozen=True, slots=True)
class RainbowSpec:
    speed: int = 0
    saturation: float = 1.0
    brightness: float = 1.0
    loop: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "saturation", max(0.0, min(1.0, self.saturation)))
        object.__setattr__(self, "brightness", max(0.0, min(1.0, self.brightness)))

    def apply(self, text: str, marker: str = MARKER) -> str:
        return apply_rainbow(
            text, self.speed, self.saturation, self.brightness, self.loop, marker,
        )

    def describe(self) -> str:
        return (
            f"rainbow speed={self.speed} sat={self.saturation:g} "
            f"bri={self.brightness:g}" + (" loop" if self.loop else "")
        )


@dataclass(frozen=True, slots=True)
class TaggedSpan:
    """One gradient/rainbow tag occurrence and the text it encloses."""

    spec: GradientSpec | RainbowSpec
    text: str

    def render(self, marker: str = MARKER) -> str:
        return self.spec.apply(self.text, marker)
