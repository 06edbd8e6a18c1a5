from __future__ import annotations

import logging
from dataclasses import replace

from flask import Flask, Response, jsonify, request

from .colorspace import OUTPUT_MODES, InvalidColorFormat, canon_hex, format_color, hex_to_hsl
from .config_io import InvalidConfigFormat, decode, encode, has_curve, load_document
from .lightness import LightnessModel, default_graph_points, sample_curve
from .palette import (
    DEFAULT_CONFIG,
    PaletteConfig,
    build_palette,
    curve_model,
    lightness_readout,
    palette_css,
)

log = logging.getLogger(__name__)

MODELS = {"linear", "curve"}
MAX_SAMPLES = 512


def parse_mode(val: str | None) -> str:
    m = (val or "hex").strip().lower()
    if m not in OUTPUT_MODES:
        raise ValueError(f"unknown output mode '{m}'")
    return m


def parse_model(val: str | None) -> str:
    m = (val or "linear").strip().lower()
    return m if m in MODELS else "linear"


def parse_samples(val: str | None, default: int = 101) -> int:
    try:
        n = int(val) if val else default
    except ValueError:
        n = default
    return max(2, min(n, MAX_SAMPLES))


def config_from_args() -> PaletteConfig:
    """Default settings around the ?color= and ?name= query parameters."""
    color = canon_hex(request.args.get("color", DEFAULT_CONFIG.base_color))
    name = (request.args.get("name") or DEFAULT_CONFIG.name).strip()
    return replace(DEFAULT_CONFIG, base_color=color, name=name)


def model_for(config: PaletteConfig, kind: str) -> LightnessModel | None:
    return curve_model(config) if kind == "curve" else None


# ----------------------------- Flask app ----------------------------------


def create_app() -> Flask:
    app = Flask(__name__)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    @app.errorhandler(InvalidColorFormat)
    @app.errorhandler(InvalidConfigFormat)
    def bad_input(exc: ValueError):
        return jsonify({"error": str(exc)}), 400

    @app.route("/palette", methods=["GET"])
    def palette_get():
        try:
            config = config_from_args()
            mode = parse_mode(request.args.get("mode"))
        except ValueError as e:
            return jsonify({"error": f"invalid request: {e}", "modes": sorted(OUTPUT_MODES)}), 400

        try:
            palette = build_palette(config)
        except Exception as exc:
            log.exception("Palette generation failed")
            return jsonify({"error": str(exc)}), 500

        colors = {str(e.shade): format_color(e.color, mode) for e in palette}
        lightness = lightness_readout(palette, config.is_perceived)
        return jsonify({"palette": {"name": config.name, "colors": colors, "lightness": lightness}})

    @app.route("/palette", methods=["POST"])
    def palette_post():
        config = decode(request.get_data(), DEFAULT_CONFIG)
        model = model_for(config, parse_model(request.args.get("model")))
        try:
            palette = build_palette(config, model)
        except Exception as exc:
            log.exception("Palette generation failed")
            return jsonify({"error": str(exc)}), 500
        doc = encode(config, include_config=True, palette=palette)
        doc["lightness"] = lightness_readout(palette, config.is_perceived)
        return jsonify(doc)

    @app.route("/palette.css")
    def palette_stylesheet():
        try:
            config = config_from_args()
            mode = parse_mode(request.args.get("mode"))
        except ValueError as e:
            return jsonify({"error": f"invalid request: {e}"}), 400
        css = palette_css(build_palette(config), config.name, mode)
        return Response(f":root {{\n{css}\n}}\n", mimetype="text/css")

    @app.route("/curve", methods=["POST"])
    def curve():
        doc = load_document(request.get_data())
        config = decode(doc, DEFAULT_CONFIG)
        if not has_curve(doc):
            # fresh editor: start from the base color's own lightness
            points = default_graph_points(
                hex_to_hsl(config.base_color)[2],
                config.lightness_max,
                config.lightness_min,
                config.min_range,
                config.max_range,
            )
            config = replace(config, graph_points=tuple(points))
        n = parse_samples(request.args.get("num"))
        shades, light = sample_curve(curve_model(config), 0, 1000, n)
        return jsonify({"shades": shades.tolist(), "lightness": light.tolist()})

    return app


if __name__ == "__main__":
    create_app().run(debug=False)
