"""Color parsing, formatting and gradient interpolation."""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple

import numpy as np
from matplotlib.colors import CSS4_COLORS

from .errors import InvalidColorFormat
from .states import Color, ValueDomain

SHORT_HEX_RE = re.compile(r"^#?([\da-f])([\da-f])([\da-f])$", re.IGNORECASE)
HEX_RE = re.compile(r"^#?([\da-f]{2})([\da-f]{2})([\da-f]{2})$", re.IGNORECASE)
RGB_RE = re.compile(r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$", re.IGNORECASE)
RGBA_RE = re.compile(
    r"^rgba\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d*\.?\d+)\s*\)$",
    re.IGNORECASE,
)


def round_half_away(x: float) -> int:
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def _channel(value: Any, original: Any) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidColorFormat(original) from None
    if not number.is_integer() or not 0 <= number <= 255:
        raise InvalidColorFormat(original)
    return int(number)


def _parse_string(value: str) -> Color:
    text = value.strip()
    text = SHORT_HEX_RE.sub(lambda m: "#" + "".join(c * 2 for c in m.groups()), text)
    match = HEX_RE.match(text)
    if match:
        return Color(*(int(part, 16) for part in match.groups()))
    match = RGB_RE.match(text)
    if match:
        return Color(*(_channel(part, value) for part in match.groups()))
    match = RGBA_RE.match(text)
    if match:
        red, green, blue = (_channel(part, value) for part in match.groups()[:3])
        alpha = float(match.group(4))
        if alpha > 1.0:
            raise InvalidColorFormat(value)
        return Color(red, green, blue, round_half_away(alpha * 255))
    named = CSS4_COLORS.get(text.lower())
    if named is not None:
        return _parse_string(named)
    raise InvalidColorFormat(value)


def parse_color(value: Any) -> Color:
    """Normalise any supported color form to a canonical :class:`Color`.

    Supported forms are short and long hex strings (``#`` optional), CSS
    named colors, ``rgb()``/``rgba()`` strings and 3- or 4-item channel
    sequences. Anything else raises :class:`InvalidColorFormat`.
    """
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        return _parse_string(value)
    if isinstance(value, (list, tuple, np.ndarray)):
        channels = list(value)
        if len(channels) not in (3, 4):
            raise InvalidColorFormat(value)
        return Color(*(_channel(c, value) for c in channels))
    raise InvalidColorFormat(value)


def to_hex(color: Color) -> str:
    return "#{:02x}{:02x}{:02x}".format(color.red, color.green, color.blue)


def to_rgb_string(color: Color) -> str:
    return f"rgb({color.red}, {color.green}, {color.blue})"


def to_rgba_string(color: Color) -> str:
    return f"rgba({color.red}, {color.green}, {color.blue}, {color.alpha / 255:.3g})"


def to_rgba_list(color: Color) -> List[int]:
    return list(color.as_tuple())


def interpolate_color(low: Color, high: Color, t: float) -> Color:
    if math.isnan(t):
        t = 0.0
    t = min(max(t, 0.0), 1.0)
    channels = (
        round_half_away(lo + (hi - lo) * t)
        for lo, hi in zip(low.as_tuple(), high.as_tuple())
    )
    return Color(*channels)


@dataclass(frozen=True)
class RelativeColors:
    fill: Color
    stroke: Color


@dataclass(frozen=True)
class ColorAxis:
    """Precomputed fill and stroke gradients over a value domain."""

    fill: Tuple[Color, Color]
    stroke: Tuple[Color, Color]
    domain: ValueDomain
    degenerate: bool


def build_axis(
    colors: Sequence[Any],
    stroke_colors: Sequence[Any],
    domain: ValueDomain,
) -> ColorAxis:
    if len(colors) != 2 or len(stroke_colors) != 2:
        raise ValueError("Gradients need exactly two endpoint colors")
    fill = (parse_color(colors[0]), parse_color(colors[1]))
    stroke = (parse_color(stroke_colors[0]), parse_color(stroke_colors[1]))
    return ColorAxis(fill=fill, stroke=stroke, domain=domain, degenerate=domain.is_degenerate)


def relative_colors(axis: ColorAxis, t: float) -> RelativeColors:
    # A single-value domain always maps to the high end, for regions and legend alike.
    if axis.degenerate:
        return RelativeColors(fill=axis.fill[1], stroke=axis.stroke[1])
    return RelativeColors(
        fill=interpolate_color(axis.fill[0], axis.fill[1], t),
        stroke=interpolate_color(axis.stroke[0], axis.stroke[1], t),
    )


def gradient_stops(axis: ColorAxis, count: int = 5) -> List[Color]:
    if count < 2:
        raise ValueError("count must be at least 2")
    return [relative_colors(axis, float(t)).fill for t in np.linspace(0.0, 1.0, count)]


__all__ = [
    "parse_color",
    "to_hex",
    "to_rgb_string",
    "to_rgba_string",
    "to_rgba_list",
    "interpolate_color",
    "round_half_away",
    "RelativeColors",
    "ColorAxis",
    "build_axis",
    "relative_colors",
    "gradient_stops",
]
