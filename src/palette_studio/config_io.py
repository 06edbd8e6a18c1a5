# config_io.py – save/load palette settings as JSON documents

from __future__ import annotations

import json
import math
from dataclasses import replace
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .colorspace import InvalidColorFormat, hex_to_rgb
from .lightness import GraphPoint
from .palette import PaletteConfig, PaletteEntry, build_palette


class InvalidConfigFormat(ValueError):
    """A palette document could not be read; nothing was applied."""


# absent booleans fall back to these rather than to the current value
BOOL_DEFAULTS = {"useCustomRanges": False, "isPerceived": True}


def _is_number(v: Any) -> bool:
    return not isinstance(v, bool) and isinstance(v, (int, float)) and math.isfinite(v)


def _reject_constant(name: str) -> Any:
    # json.loads otherwise accepts NaN / Infinity / -Infinity
    raise InvalidConfigFormat(f"'{name}' is not a JSON number")


def _as_int(key: str, v: Any) -> int:
    if not _is_number(v):
        raise InvalidConfigFormat(f"'{key}' must be a finite number")
    return int(v)


def _as_str(key: str, v: Any) -> str:
    if not isinstance(v, str):
        raise InvalidConfigFormat(f"'{key}' must be a string")
    return v


def _as_bool(key: str, v: Any) -> bool:
    if not isinstance(v, bool):
        raise InvalidConfigFormat(f"'{key}' must be true or false")
    return v


def _as_color(key: str, v: Any) -> str:
    try:
        hex_to_rgb(_as_str(key, v))
    except InvalidColorFormat as exc:
        raise InvalidConfigFormat(str(exc)) from exc
    return v


def _as_points(key: str, v: Any) -> tuple[GraphPoint, ...]:
    if not isinstance(v, list):
        raise InvalidConfigFormat(f"'{key}' must be a list")
    out: List[GraphPoint] = []
    for p in v:
        if not isinstance(p, dict):
            raise InvalidConfigFormat(f"'{key}' entries must be objects")
        shade, light = p.get("shade"), p.get("lightness")
        for name, n in (("shade", shade), ("lightness", light)):
            if not _is_number(n):
                raise InvalidConfigFormat(f"graph point {name} must be a finite number")
        out.append(GraphPoint(shade, light).clamped())
    return tuple(out)


# document key -> (PaletteConfig attribute, reader)
CONFIG_FIELDS: Dict[str, tuple[str, Callable[[str, Any], Any]]] = {
    "baseColor": ("base_color", _as_color),
    "minRange": ("min_range", _as_int),
    "maxRange": ("max_range", _as_int),
    "customRanges": ("custom_ranges", _as_str),
    "useCustomRanges": ("use_custom_ranges", _as_bool),
    "hue": ("hue", _as_int),
    "saturation": ("saturation", _as_int),
    "lightnessMax": ("lightness_max", _as_int),
    "lightnessMin": ("lightness_min", _as_int),
    "isPerceived": ("is_perceived", _as_bool),
}
CURVE_FIELDS: Dict[str, tuple[str, Callable[[str, Any], Any]]] = {
    "graphPoints": ("graph_points", _as_points),
    "curveIntensity": ("curve_intensity", _as_int),
    "connectionStrength": ("connection_strength", _as_int),
}


def encode(
    config: PaletteConfig,
    include_config: bool = False,
    palette: Optional[List[PaletteEntry]] = None,
) -> Dict[str, Any]:
    if palette is None:
        palette = build_palette(config)
    doc: Dict[str, Any] = {
        "name": config.name,
        "colors": {str(e.shade): e.color for e in palette},
    }
    if include_config:
        doc["config"] = {key: getattr(config, attr) for key, (attr, _) in CONFIG_FIELDS.items()}
        doc["graphPoints"] = [
            {"shade": p.shade, "lightness": p.lightness} for p in config.graph_points
        ]
        doc["curveIntensity"] = config.curve_intensity
        doc["connectionStrength"] = config.connection_strength
    return doc


def dumps(config: PaletteConfig, include_config: bool = True, **kw: Any) -> str:
    return json.dumps(encode(config, include_config, **kw), indent=2)


def load_document(document: Union[str, bytes, Mapping[str, Any]]) -> Dict[str, Any]:
    """Parse a saved document into a dict, or raise InvalidConfigFormat."""
    if isinstance(document, Mapping):
        doc: Any = document
    else:
        try:
            doc = json.loads(document, parse_constant=_reject_constant)
        except (ValueError, UnicodeDecodeError) as exc:
            if isinstance(exc, InvalidConfigFormat):
                raise
            raise InvalidConfigFormat(f"not valid JSON: {exc}") from exc
    if not isinstance(doc, dict):
        raise InvalidConfigFormat("palette document must be a JSON object")
    return doc


def has_curve(doc: Mapping[str, Any]) -> bool:
    """True when decode() takes graph points from this document."""
    return isinstance(doc.get("config"), dict) and "graphPoints" in doc


def decode(document: Union[str, bytes, Mapping[str, Any]], current: PaletteConfig) -> PaletteConfig:
    """
    Apply a saved document on top of `current` and return the result.

    Fields missing from the document keep their current values, except the
    booleans, which reset to BOOL_DEFAULTS. A document without a "config"
    object only renames the palette. Raises InvalidConfigFormat without
    applying anything when the document is unreadable.
    """
    doc = load_document(document)
    name = _as_str("name", doc["name"]) if "name" in doc else current.name
    cfg = doc.get("config")
    if cfg is None:
        return replace(current, name=name)
    if not isinstance(cfg, dict):
        raise InvalidConfigFormat("'config' must be an object")

    changes: Dict[str, Any] = {"name": name}
    for key, (attr, read) in CONFIG_FIELDS.items():
        if key in cfg:
            changes[attr] = read(key, cfg[key])
        elif key in BOOL_DEFAULTS:
            changes[attr] = BOOL_DEFAULTS[key]
    for key, (attr, read) in CURVE_FIELDS.items():
        if key in doc:
            changes[attr] = read(key, doc[key])

    try:
        return replace(current, **changes)
    except ValueError as exc:
        raise InvalidConfigFormat(str(exc)) from exc


__all__ = ["InvalidConfigFormat", "decode", "dumps", "encode", "has_curve", "load_document"]
