# lightness.py – lightness per shade: linear range mapping or an editable curve

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass
from math import pi, sin
from typing import Iterable, List, Protocol, Sequence, Tuple

import numpy as np

from .shades import BASE_SHADE, SHADE_LIMITS

log = logging.getLogger(__name__)

Shade = float
Lightness = float

LIGHTNESS_LIMITS = (0.0, 100.0)
MIN_GRAPH_POINTS = 2
INFLUENCE_RADIUS = 1000.0  # shades beyond this are not pulled along by a drag
SHADE_PULL = 0.3
LIGHTNESS_PULL = 0.5
# candidate shades for a newly added point, tried in order
ADD_POINT_SHADES: Tuple[int, ...] = tuple(range(300, 700, 50)) + tuple(range(325, 700, 50))


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


@dataclass(frozen=True)
class GraphPoint:
    shade: Shade
    lightness: Lightness

    def clamped(self) -> "GraphPoint":
        return GraphPoint(
            _clamp(float(self.shade), *SHADE_LIMITS),
            _clamp(float(self.lightness), *LIGHTNESS_LIMITS),
        )


class LightnessModel(Protocol):
    def lightness(self, shade: float) -> Lightness: ...


@dataclass(frozen=True)
class LinearLightness:
    """
    Map shades linearly onto [lightness_min, lightness_max] around the base.

    Shades below 500 rise from base_lightness to lightness_max at the
    lightest scheduled shade; shades above fall to lightness_min at the
    darkest one.
    """

    base_lightness: float
    lightness_max: float
    lightness_min: float
    shades: Tuple[int, ...]

    def lightness(self, shade: float) -> Lightness:
        base = float(self.base_lightness)
        if shade < BASE_SHADE:
            lighter = [s for s in self.shades if s < BASE_SHADE]
            m = min(lighter) if lighter else BASE_SHADE
            ratio = (BASE_SHADE - shade) / (BASE_SHADE - m) if m != BASE_SHADE else 0.0
            return base + (self.lightness_max - base) * ratio
        if shade > BASE_SHADE:
            darker = [s for s in self.shades if s > BASE_SHADE]
            M = max(darker) if darker else BASE_SHADE
            ratio = (shade - BASE_SHADE) / (M - BASE_SHADE) if M != BASE_SHADE else 0.0
            return base - (base - self.lightness_min) * ratio
        return base


def ease(t: float, intensity: float) -> float:
    """Remap t in [0, 1]: ease-in-out for intensity > 0, inverse S-curve for < 0."""
    if intensity == 0:
        return t
    i = intensity / 100
    if intensity > 0:
        if t < 0.5:
            return 2 * t ** (1 + i)
        return 1 - 2 * (1 - t) ** (1 + i)
    return 0.5 + sin((t - 0.5) * pi) * (0.5 + abs(i))


def sort_points(points: Iterable[GraphPoint]) -> List[GraphPoint]:
    return sorted(points, key=lambda p: p.shade)


@dataclass(frozen=True)
class CurveLightness:
    """Piecewise curve through control points, eased between neighbours."""

    points: Tuple[GraphPoint, ...]
    curve_intensity: float = 0

    def __post_init__(self) -> None:
        if len(self.points) < MIN_GRAPH_POINTS:
            raise ValueError(f"curve needs at least {MIN_GRAPH_POINTS} points")
        object.__setattr__(self, "points", tuple(sort_points(self.points)))

    def lightness(self, shade: float) -> Lightness:
        pts = self.points
        if shade <= pts[0].shade:
            return float(pts[0].lightness)
        if shade >= pts[-1].shade:
            return float(pts[-1].lightness)

        # first point strictly right of shade; its predecessor brackets from the left
        k = bisect_right([p.shade for p in pts], shade)
        left, right = pts[k - 1], pts[k]
        if left.shade == shade:
            return float(left.lightness)
        span = right.shade - left.shade
        if span == 0:
            return float(left.lightness)
        t = ease((shade - left.shade) / span, self.curve_intensity)
        return left.lightness + (right.lightness - left.lightness) * t


def default_graph_points(
    base_lightness: float,
    lightness_max: float,
    lightness_min: float,
    min_range: int = 50,
    max_range: int = 950,
) -> List[GraphPoint]:
    # the base point wins when a range bound sits on 500
    ends = [GraphPoint(min_range, lightness_max), GraphPoint(max_range, lightness_min)]
    return sort_points(
        [GraphPoint(BASE_SHADE, base_lightness)] + [p for p in ends if p.shade != BASE_SHADE]
    )


# ---- point editing ----


def apply_point_drag(
    points: Sequence[GraphPoint],
    index: int,
    new_shade: float,
    new_lightness: float,
    connection_strength: float,
) -> List[GraphPoint]:
    """
    Move points[index] to (new_shade, new_lightness) and return the new set.

    With a positive connection_strength, every other point follows the move
    by a weight that falls off linearly with its distance (in shades) from
    the dragged point's old position: 0.3x of the shade delta, 0.5x of the
    lightness delta. All coordinates are clamped to their domains.
    """
    old = points[index]
    moved = GraphPoint(new_shade, new_lightness).clamped()
    d_shade = moved.shade - old.shade
    d_light = moved.lightness - old.lightness
    strength = _clamp(connection_strength, 0, 100) / 100

    out: List[GraphPoint] = []
    for i, p in enumerate(points):
        if i == index:
            out.append(moved)
            continue
        if strength <= 0:
            out.append(p)
            continue
        w = max(0.0, 1 - abs(p.shade - old.shade) / INFLUENCE_RADIUS) * strength
        out.append(
            GraphPoint(
                p.shade + d_shade * w * SHADE_PULL,
                p.lightness + d_light * w * LIGHTNESS_PULL,
            ).clamped()
        )
    return sort_points(out)


def add_point(points: Sequence[GraphPoint], curve_intensity: float = 0) -> List[GraphPoint]:
    """Insert a point in the 300..700 band, sitting on the current curve."""
    taken = {p.shade for p in points}
    model = CurveLightness(tuple(points), curve_intensity)
    for shade in ADD_POINT_SHADES:
        if shade not in taken:
            return sort_points([*points, GraphPoint(shade, model.lightness(shade))])
    raise ValueError("no free shade left between 300 and 700")


def remove_point(points: Sequence[GraphPoint], index: int) -> List[GraphPoint]:
    if len(points) <= MIN_GRAPH_POINTS:
        log.debug("refusing to drop below %d graph points", MIN_GRAPH_POINTS)
        return list(points)
    return [p for i, p in enumerate(points) if i != index]


def sample_curve(
    model: LightnessModel, start: float = 0, stop: float = 1000, num: int = 101
) -> Tuple[np.ndarray, np.ndarray]:
    """Evenly spaced (shades, lightness) arrays for drawing a model's curve."""
    shades = np.linspace(float(start), float(stop), max(2, min(int(num), 2048)))
    light = np.fromiter((model.lightness(float(s)) for s in shades), dtype=np.float64, count=shades.size)
    return shades, light


__all__ = [
    "CurveLightness",
    "GraphPoint",
    "LightnessModel",
    "LinearLightness",
    "add_point",
    "apply_point_drag",
    "default_graph_points",
    "ease",
    "remove_point",
    "sample_curve",
    "sort_points",
]
