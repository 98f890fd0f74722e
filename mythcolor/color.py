"""Color model — RGB value, interpolation, HSB conversion, native escape rendering."""

from __future__ import annotations

import colorsys
import math
import re
from dataclasses import dataclass

MARKER = "§"

_HEX_RE = re.compile(r"#?([0-9A-Fa-f]{6}|[0-9A-Fa-f]{3})")


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round_channel(value: float) -> int:
    """Round half up and clamp into 0..255."""
    return int(_clamp(math.floor(value + 0.5), 0, 255))


@dataclass(frozen=True, slots=True)
class Color:
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise ValueError(f"channel out of range: {channel}")

    @classmethod
    def clamped(cls, red: float, green: float, blue: float) -> Color:
        """Build a color from arbitrary arithmetic results."""
        return cls(_round_channel(red), _round_channel(green), _round_channel(blue))

    @property
    def hex(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"


def from_hex(code: str) -> Color:
    """Parse ``#RGB`` or ``#RRGGBB`` (leading ``#`` optional)."""
    m = _HEX_RE.fullmatch(code)
    if m is None:
        raise ValueError(f"invalid hex color: {code!r}")
    digits = m.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return Color(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def interpolate(start: Color, end: Color, fraction: float) -> Color:
    """Linear interpolation per channel, rounded and clamped."""
    return Color.clamped(
        start.red + (end.red - start.red) * fraction,
        start.green + (end.green - start.green) * fraction,
        start.blue + (end.blue - start.blue) * fraction,
    )


def from_hsb(hue: float, saturation: float, brightness: float) -> Color:
    """HSB → RGB. Hue is cyclic (taken modulo 1); saturation/brightness are clamped."""
    hue = hue % 1.0
    saturation = _clamp(saturation, 0.0, 1.0)
    brightness = _clamp(brightness, 0.0, 1.0)
    r, g, b = colorsys.hsv_to_rgb(hue, saturation, brightness)
    # Truncate after +0.5, same as java.awt.Color.HSBtoRGB
    return Color.clamped(int(r * 255 + 0.5), int(g * 255 + 0.5), int(b * 255 + 0.5))


def to_escape(color: Color, marker: str = MARKER) -> str:
    """Render a color as the extended native code: §x§R§R§G§G§B§B."""
    return marker + "x" + "".join(marker + digit for digit in color.hex[1:])
