from __future__ import annotations

from dataclasses import asdict, dataclass, fields
import re
from typing import Any, Mapping

from dataviz.errors import StyleConfigError

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")


def is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and _HEX_COLOR.match(value) is not None


@dataclass(frozen=True)
class AxisStyle:
    """Presentation record for axis lines, tick labels, grid and title."""

    stroke_color: str = "#000000"
    stroke_width: float = 1.0
    text_color: str = "#000000"
    font_size: float = 11.0
    font_family: str = "sans-serif"
    grid_stroke_color: str = "#e0e0e0"
    grid_stroke_width: float = 1.0
    grid_dash_array: str = ""
    title_font_size: float = 12.0
    title_font_weight: str = "bold"


@dataclass(frozen=True)
class LegendStyle:
    """Legend box styling. `background=None` leaves the box unfilled."""

    background: str | None = None
    border_color: str = "#e5e7eb"
    border_width: float = 1.0
    padding: float = 10.0
    item_spacing: float = 8.0
    symbol_spacing: float = 6.0
    font_size: float = 12.0
    font_family: str = "Arial, sans-serif"
    text_color: str = "#374151"


DEFAULT_AXIS_STYLE = AxisStyle()
DEFAULT_LEGEND_STYLE = LegendStyle()

_AXIS_COLORS = ("stroke_color", "text_color", "grid_stroke_color")
_AXIS_POSITIVE = ("font_size", "title_font_size")
_AXIS_NON_NEGATIVE = ("stroke_width", "grid_stroke_width")

_LEGEND_COLORS = ("border_color", "text_color")
_LEGEND_POSITIVE = ("font_size",)
_LEGEND_NON_NEGATIVE = ("border_width", "padding", "item_spacing", "symbol_spacing")


def validate_axis_style(overrides: Mapping[str, Any] | None = None, *, base: AxisStyle = DEFAULT_AXIS_STYLE) -> AxisStyle:
    """Validate and merge axis style overrides onto `base`."""

    raw = _merge(base, overrides, "axis")
    _check_colors(raw, _AXIS_COLORS)
    _check_numbers(raw, _AXIS_POSITIVE, strict=True)
    _check_numbers(raw, _AXIS_NON_NEGATIVE, strict=False)
    _check_family(raw)
    if not isinstance(raw["grid_dash_array"], str):
        raise StyleConfigError("Axis style `grid_dash_array` must be a string")
    if not isinstance(raw["title_font_weight"], str) or not raw["title_font_weight"].strip():
        raise StyleConfigError("Axis style `title_font_weight` must be a non-empty string")
    return AxisStyle(**_coerce(AxisStyle, raw))


def validate_legend_style(
    overrides: Mapping[str, Any] | None = None,
    *,
    base: LegendStyle = DEFAULT_LEGEND_STYLE,
) -> LegendStyle:
    """Validate and merge legend style overrides onto `base`."""

    raw = _merge(base, overrides, "legend")
    if raw["background"] is not None:
        _check_colors(raw, ("background",))
    _check_colors(raw, _LEGEND_COLORS)
    _check_numbers(raw, _LEGEND_POSITIVE, strict=True)
    _check_numbers(raw, _LEGEND_NON_NEGATIVE, strict=False)
    _check_family(raw)
    return LegendStyle(**_coerce(LegendStyle, raw))


def _merge(base: Any, overrides: Mapping[str, Any] | None, kind: str) -> dict[str, Any]:
    raw: dict[str, Any] = asdict(base)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise StyleConfigError(f"Unknown {kind} style key: {key}")
            raw[key] = value
    return raw


def _check_colors(raw: Mapping[str, Any], keys: tuple[str, ...]) -> None:
    for key in keys:
        if not is_hex_color(raw[key]):
            raise StyleConfigError(f"Style `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")


def _check_numbers(raw: Mapping[str, Any], keys: tuple[str, ...], *, strict: bool) -> None:
    for key in keys:
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise StyleConfigError(f"Style `{key}` must be a number")
        if strict and float(value) <= 0:
            raise StyleConfigError(f"Style `{key}` must be a positive number")
        if not strict and float(value) < 0:
            raise StyleConfigError(f"Style `{key}` must be >= 0")


def _check_family(raw: Mapping[str, Any]) -> None:
    if not isinstance(raw["font_family"], str) or not raw["font_family"].strip():
        raise StyleConfigError("Style `font_family` must be a non-empty string")


def _coerce(cls: type, raw: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in fields(cls):
        value = raw[f.name]
        if isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        out[f.name] = value
    return out
