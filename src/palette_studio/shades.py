# shades.py – which shade keys a palette contains

from __future__ import annotations

import logging
import re
from typing import List, Optional

log = logging.getLogger(__name__)

Shade = int

BASE_SHADE: Shade = 500
SHADE_STEP = 50
SHADE_LIMITS = (0, 2100)
DEFAULT_SHADES: List[Shade] = [50, 100, 200, 300, 400, 500, 600, 700, 800, 900, 950]

_INT_PREFIX = re.compile(r"^[+-]?[0-9]+")


def _parse_int(s: str) -> Optional[int]:
    # parseInt semantics: leading integer, trailing junk ignored
    m = _INT_PREFIX.match(s.strip())
    return int(m.group(0)) if m else None


def parse_custom_ranges(raw: str) -> List[Shade]:
    """'50, 200,abc,9999' -> [50, 200]; unparseable and out-of-range entries are dropped."""
    lo, hi = SHADE_LIMITS
    out: List[Shade] = []
    for part in raw.split(","):
        n = _parse_int(part)
        if n is not None and lo <= n <= hi:
            out.append(n)
    return sorted(out)


def auto_ranges(min_range: int, max_range: int) -> List[Shade]:
    out = list(range(int(min_range), int(max_range) + 1, SHADE_STEP))
    if not out or out[-1] != max_range:
        out.append(int(max_range))
    return out


def shade_schedule(
    use_custom_ranges: bool,
    custom_ranges: Optional[str],
    min_range: int,
    max_range: int,
) -> List[Shade]:
    """
    Sorted, duplicate-free shade keys for a palette.

    Custom ranges win when enabled and non-blank; otherwise shades step by 50
    from min_range up to max_range. A custom list with no usable entry falls
    back to DEFAULT_SHADES. The base shade is added whenever it lies within
    [min_range, max_range] (the configured bounds, also for custom lists).
    """
    if use_custom_ranges and custom_ranges and custom_ranges.strip():
        shades = parse_custom_ranges(custom_ranges)
        if not shades:
            log.debug("no usable shades in %r; using defaults", custom_ranges)
            return list(DEFAULT_SHADES)
    else:
        shades = auto_ranges(min_range, max_range)

    if BASE_SHADE not in shades and min_range <= BASE_SHADE <= max_range:
        shades.append(BASE_SHADE)
    return sorted(set(shades))


__all__ = [
    "BASE_SHADE",
    "DEFAULT_SHADES",
    "SHADE_LIMITS",
    "SHADE_STEP",
    "auto_ranges",
    "parse_custom_ranges",
    "shade_schedule",
]
