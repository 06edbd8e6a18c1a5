# colorspace.py – hex <-> HSL primitives used by the palette builder

from __future__ import annotations

import math
import re
import string

from coloraide import Color

Hex = str
HSL = tuple[int, int, int]

_HEX_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")

# output color mode -> (coloraide space, to_string options)
OUTPUT_MODES: dict[str, tuple[str, dict]] = {
    "hex": ("srgb", {"hex": True}),
    "oklch": ("oklch", {"precision": 4}),
    "hsl": ("hsl", {"precision": 4}),
    "p3": ("display-p3", {"precision": 4}),
}


class InvalidColorFormat(ValueError):
    """Color string is not '#' followed by exactly six hex digits."""


def _round(x: float) -> int:
    # half-up, like Math.round
    return int(math.floor(x + 0.5))


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def canon_hex(s: str) -> Hex:
    """Normalize to '#rrggbb'; accept 3- or 6-digit hex with or without '#'."""
    raw = (s or "").strip().lstrip("#")
    if len(raw) == 3 and all(c in string.hexdigits for c in raw):
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) != 6 or not all(c in string.hexdigits for c in raw):
        raise InvalidColorFormat(f"invalid hex: {s!r}")
    return "#" + raw.lower()


def hex_to_rgb(color: Hex) -> tuple[int, int, int]:
    if not isinstance(color, str) or not _HEX_RE.match(color):
        raise InvalidColorFormat(f"invalid hex: {color!r}")
    return tuple(int(color[i : i + 2], 16) for i in (1, 3, 5))  # type: ignore[return-value]


def hex_to_hsl(color: Hex) -> HSL:
    """'#rrggbb' -> (h, s, l) as rounded ints; h in [0, 360), s and l in percent."""
    r, g, b = (v / 255 for v in hex_to_rgb(color))

    hi = max(r, g, b)
    lo = min(r, g, b)
    l = (hi + lo) / 2

    if hi == lo:
        h = s = 0.0  # achromatic
    else:
        d = hi - lo
        s = d / (2 - hi - lo) if l > 0.5 else d / (hi + lo)
        if hi == r:
            h = (g - b) / d + (6 if g < b else 0)
        elif hi == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4
        h /= 6

    return _round(h * 360) % 360, _round(s * 100), _round(l * 100)


def hsl_to_hex(h: float, s: float, l: float) -> Hex:
    """Inverse of hex_to_hsl. Hue is taken mod 360; s and l are clamped to [0, 100]."""
    h = h % 360
    s = _clamp(s, 0, 100) / 100
    l = _clamp(l, 0, 100) / 100

    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l - c / 2

    if h < 60:
        r, g, b = c, x, 0.0
    elif h < 120:
        r, g, b = x, c, 0.0
    elif h < 180:
        r, g, b = 0.0, c, x
    elif h < 240:
        r, g, b = 0.0, x, c
    elif h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return "#" + "".join(f"{_round((v + m) * 255):02x}" for v in (r, g, b))


def format_color(color: Hex, mode: str = "hex") -> str:
    """Render a palette color in one of OUTPUT_MODES."""
    try:
        space, opts = OUTPUT_MODES[mode]
    except KeyError:
        raise ValueError(f"unknown output mode '{mode}'") from None
    if mode == "hex":
        return color
    hex_to_rgb(color)
    return Color(color).convert(space).to_string(**opts)


def perceived_lightness(color: Hex) -> float:
    """CIE L* of the color, 0..100."""
    hex_to_rgb(color)
    return float(Color(color).convert("lab").coords()[0])


__all__ = [
    "InvalidColorFormat",
    "OUTPUT_MODES",
    "canon_hex",
    "format_color",
    "hex_to_hsl",
    "hex_to_rgb",
    "hsl_to_hex",
    "perceived_lightness",
]
