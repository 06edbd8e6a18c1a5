from dataclasses import replace

import pytest

from palette_studio.colorspace import InvalidColorFormat, hsl_to_hex
from palette_studio.lightness import GraphPoint
from palette_studio.palette import (
    DEFAULT_CONFIG,
    PaletteConfig,
    PaletteEntry,
    build_palette,
    curve_model,
    lightness_readout,
    palette_css,
    reset_controls,
)


def by_shade(palette):
    return {e.shade: e for e in palette}


def test_default_palette_end_to_end():
    palette = build_palette(PaletteConfig(base_color="#1E4BCD"))
    assert PaletteEntry(500, "#1E4BCD", 46.0) in palette
    assert [e.shade for e in palette] == list(range(50, 951, 50))
    light = [e.lightness for e in palette]
    assert all(light[i] > light[i + 1] for i in range(len(light) - 1))
    assert light[0] == pytest.approx(95)
    assert light[-1] == pytest.approx(5)


def test_base_shade_ignores_adjustments():
    cfg = replace(DEFAULT_CONFIG, hue=90, saturation=-60, lightness_max=60, lightness_min=40)
    assert by_shade(build_palette(cfg))[500].color == "#1E4BCD"


def test_hue_shift_wraps():
    cfg = replace(DEFAULT_CONFIG, base_color="#ff0000", hue=-90)
    assert by_shade(build_palette(cfg))[50].color == hsl_to_hex(270, 100, 95)


def test_saturation_shift_is_clamped():
    cfg = replace(DEFAULT_CONFIG, saturation=50)
    assert by_shade(build_palette(cfg))[50].color == hsl_to_hex(225, 100, 95)


def test_lightness_bounds_clamp():
    cfg = replace(DEFAULT_CONFIG, lightness_max=80, lightness_min=20)
    palette = build_palette(cfg)
    assert all(20 <= e.lightness <= 80 for e in palette)
    assert palette[0].lightness == pytest.approx(80)


def test_custom_ranges_palette():
    cfg = replace(DEFAULT_CONFIG, use_custom_ranges=True, custom_ranges="50,9999,abc,200")
    assert [e.shade for e in build_palette(cfg)] == [50, 200, 500]


def test_curve_model_palette():
    palette = by_shade(build_palette(DEFAULT_CONFIG, curve_model(DEFAULT_CONFIG)))
    assert palette[300].lightness == pytest.approx(70)
    assert palette[500].color == "#1E4BCD"
    assert palette[500].lightness == 46


def test_bad_base_color_propagates():
    with pytest.raises(InvalidColorFormat):
        build_palette(replace(DEFAULT_CONFIG, base_color="#1E4BC"))


def test_config_invariants():
    with pytest.raises(ValueError):
        PaletteConfig(min_range=950, max_range=50)
    with pytest.raises(ValueError):
        PaletteConfig(lightness_min=60, lightness_max=50)
    with pytest.raises(ValueError):
        PaletteConfig(graph_points=(GraphPoint(500, 50),))


def test_graph_points_sorted():
    cfg = PaletteConfig(graph_points=(GraphPoint(900, 10), GraphPoint(100, 90)))
    assert [p.shade for p in cfg.graph_points] == [100, 900]


def test_palette_css():
    palette = build_palette(DEFAULT_CONFIG)
    lines = palette_css(palette, "navy").splitlines()
    assert len(lines) == len(palette)
    assert lines[0] == f"  --color-navy-50: {palette[0].color};"
    assert "  --color-navy-500: #1E4BCD;" in lines
    assert "oklch(" in palette_css(palette, "navy", "oklch")


def test_reset_controls():
    cfg = replace(DEFAULT_CONFIG, name="teal", hue=40, min_range=100, use_custom_ranges=True, curve_intensity=20)
    out = reset_controls(cfg)
    assert out.hue == 0 and out.min_range == 50 and not out.use_custom_ranges
    assert out.name == "teal" and out.curve_intensity == 20


def test_palette_is_pure():
    assert build_palette(DEFAULT_CONFIG) == build_palette(DEFAULT_CONFIG)


def test_graph_points_need_distinct_shades():
    with pytest.raises(ValueError):
        PaletteConfig(graph_points=(GraphPoint(500, 10), GraphPoint(500, 90)))


def test_lightness_readout():
    palette = build_palette(DEFAULT_CONFIG)
    hsl = lightness_readout(palette, perceived=False)
    assert hsl["500"] == 46
    assert hsl["50"] == pytest.approx(95)
    perceived = lightness_readout(palette)
    assert list(perceived) == list(hsl)
    assert perceived["50"] > perceived["500"] > perceived["950"]
    assert perceived["500"] != hsl["500"]
