# palette.py – assemble a shade palette from a base color and its settings

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from .colorspace import Hex, format_color, hex_to_hsl, hsl_to_hex, perceived_lightness
from .lightness import (
    MIN_GRAPH_POINTS,
    CurveLightness,
    GraphPoint,
    LightnessModel,
    LinearLightness,
    sort_points,
)
from .shades import BASE_SHADE, shade_schedule

DEFAULT_GRAPH_POINTS: Tuple[GraphPoint, ...] = (
    GraphPoint(50, 95),
    GraphPoint(BASE_SHADE, 50),
    GraphPoint(950, 5),
)


@dataclass(frozen=True)
class PaletteConfig:
    name: str = "navy"
    base_color: Hex = "#1E4BCD"
    min_range: int = 50
    max_range: int = 950
    custom_ranges: str = ""
    use_custom_ranges: bool = False
    hue: int = 0  # -180..180
    saturation: int = 0  # -100..100
    lightness_max: int = 95  # 50..100
    lightness_min: int = 5  # 0..50
    is_perceived: bool = True
    graph_points: Tuple[GraphPoint, ...] = DEFAULT_GRAPH_POINTS
    curve_intensity: int = 0  # -50..50
    connection_strength: int = 50  # 0..100

    def __post_init__(self) -> None:
        if not self.min_range < self.max_range:
            raise ValueError("min_range must be below max_range")
        if self.lightness_min > self.lightness_max:
            raise ValueError("lightness_min must not exceed lightness_max")
        if len(self.graph_points) < MIN_GRAPH_POINTS:
            raise ValueError(f"at least {MIN_GRAPH_POINTS} graph points are required")
        if len({p.shade for p in self.graph_points}) != len(self.graph_points):
            raise ValueError("graph points must have distinct shades")
        object.__setattr__(self, "graph_points", tuple(sort_points(self.graph_points)))

    def shades(self) -> List[int]:
        return shade_schedule(
            self.use_custom_ranges, self.custom_ranges, self.min_range, self.max_range
        )


DEFAULT_CONFIG = PaletteConfig()


@dataclass(frozen=True)
class PaletteEntry:
    shade: int
    color: Hex
    lightness: float


def curve_model(config: PaletteConfig) -> CurveLightness:
    return CurveLightness(config.graph_points, config.curve_intensity)


def build_palette(
    config: PaletteConfig, model: Optional[LightnessModel] = None
) -> List[PaletteEntry]:
    """
    One entry per scheduled shade, ascending.

    Shade 500 is the base color itself; every other shade takes its
    lightness from `model` (linear range mapping when omitted), clamped to
    the configured bounds, with the hue and saturation shifts applied.
    """
    shades = config.shades()
    base_h, base_s, base_l = hex_to_hsl(config.base_color)
    if model is None:
        model = LinearLightness(
            base_l, config.lightness_max, config.lightness_min, tuple(shades)
        )

    hue = (base_h + config.hue + 360) % 360
    sat = max(0, min(100, base_s + config.saturation))

    out: List[PaletteEntry] = []
    for shade in shades:
        if shade == BASE_SHADE:
            out.append(PaletteEntry(shade, config.base_color, float(base_l)))
            continue
        light = max(
            config.lightness_min, min(config.lightness_max, model.lightness(shade))
        )
        out.append(PaletteEntry(shade, hsl_to_hex(hue, sat, light), float(light)))
    return out


def palette_css(palette: List[PaletteEntry], name: str, mode: str = "hex") -> str:
    """CSS custom properties, one `--color-<name>-<shade>` per entry."""
    return "\n".join(
        f"  --color-{name}-{e.shade}: {format_color(e.color, mode)};" for e in palette
    )


def lightness_readout(palette: List[PaletteEntry], perceived: bool = True) -> Dict[str, float]:
    """Per-shade lightness for the distribution view: CIE L* when perceived, HSL lightness otherwise."""
    return {
        str(e.shade): round(perceived_lightness(e.color), 2) if perceived else e.lightness
        for e in palette
    }


def reset_controls(config: PaletteConfig) -> PaletteConfig:
    """Restore range, shift and lightness controls; name, color and curve stay."""
    d = DEFAULT_CONFIG
    return replace(
        config,
        hue=d.hue,
        saturation=d.saturation,
        lightness_max=d.lightness_max,
        lightness_min=d.lightness_min,
        min_range=d.min_range,
        max_range=d.max_range,
        custom_ranges=d.custom_ranges,
        use_custom_ranges=d.use_custom_ranges,
    )


__all__ = [
    "DEFAULT_CONFIG",
    "PaletteConfig",
    "PaletteEntry",
    "build_palette",
    "curve_model",
    "lightness_readout",
    "palette_css",
    "reset_controls",
]
