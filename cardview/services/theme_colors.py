"""Theme colours: hex <-> HSL triple conversion, preset resolution and application.

Themes persist as CSS custom properties holding ``"<h> <s>% <l>%"`` triples (the form the
stylesheet wraps in ``hsl(...)``); colour pickers speak ``#rrggbb``. Triples keep one
decimal place so a picked colour survives the trip back to hex within one unit per
channel; whole numbers print without a fractional part (``"0 100% 50%"``).
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from typing import Protocol

from cardview.models.settings import ThemeMode, ThemeSelection
from cardview.utils.constants import LIGHT_THEME_COLORS, PRESET_THEMES
from cardview.utils.logging import get_logger, log_event

LOGGER = get_logger(__name__)

ThemeColorMap = dict[str, str]

FALLBACK_HEX = "#000000"
# Whole-number triples miss the one-unit-per-channel hex round trip (#ff0600 -> #ff0400).
TRIPLE_PRECISION = 1

_HEX_RE = re.compile(r"[0-9a-fA-F]{3}|[0-9a-fA-F]{6}")


def _round_half_up(value: float, precision: int) -> float:
    factor = 10**precision
    return math.floor(value * factor + 0.5) / factor


def _format_component(value: float, precision: int) -> str:
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def parse_hex(hex_color: str) -> tuple[int, int, int] | None:
    """Split ``#rgb``/``#rrggbb`` (leading ``#`` optional) into channel bytes."""
    if not isinstance(hex_color, str):
        return None
    normalized = hex_color.strip().replace("#", "", 1)
    if not _HEX_RE.fullmatch(normalized):
        return None
    if len(normalized) == 3:
        normalized = "".join(digit * 2 for digit in normalized)
    return (
        int(normalized[0:2], 16),
        int(normalized[2:4], 16),
        int(normalized[4:6], 16),
    )


def rgb_to_hsl(red: int, green: int, blue: int) -> tuple[float, float, float]:
    """Return hue in degrees and saturation/lightness in percent."""
    r, g, b = red / 255, green / 255, blue / 255
    high, low = max(r, g, b), min(r, g, b)
    lightness = (high + low) / 2
    hue = saturation = 0.0
    if high != low:
        delta = high - low
        saturation = delta / (2 - high - low) if lightness > 0.5 else delta / (high + low)
        if high == r:
            hue = (g - b) / delta + (6 if g < b else 0)
        elif high == g:
            hue = (b - r) / delta + 2
        else:
            hue = (r - g) / delta + 4
        hue /= 6
    return hue * 360, saturation * 100, lightness * 100


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> tuple[int, int, int]:
    h = (hue % 360) / 360
    s = min(max(saturation, 0.0), 100.0) / 100
    lum = min(max(lightness, 0.0), 100.0) / 100
    if s == 0:
        r = g = b = lum
    else:
        q = lum * (1 + s) if lum < 0.5 else lum + s - lum * s
        p = 2 * lum - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)
    return tuple(math.floor(channel * 255 + 0.5) for channel in (r, g, b))  # type: ignore[return-value]


def hex_to_hsl_triple(hex_color: str, *, precision: int = TRIPLE_PRECISION) -> str:
    """Convert ``#rrggbb`` to ``"<h> <s>% <l>%"``; malformed input reads as black."""
    channels = parse_hex(hex_color)
    if channels is None:
        return "0 0% 0%"
    hue, saturation, lightness = rgb_to_hsl(*channels)
    hue = _round_half_up(hue, precision)
    if hue >= 360:
        hue -= 360
    saturation = _round_half_up(saturation, precision)
    lightness = _round_half_up(lightness, precision)
    return (
        f"{_format_component(hue, precision)} "
        f"{_format_component(saturation, precision)}% "
        f"{_format_component(lightness, precision)}%"
    )


def parse_hsl_triple(triple: str | None) -> tuple[float, float, float] | None:
    if not triple or not isinstance(triple, str):
        return None
    parts = triple.split()
    components: list[float] = []
    for index in range(3):
        raw = parts[index].rstrip("%") if index < len(parts) else "0"
        try:
            value = float(raw or "0")
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        components.append(value)
    return components[0], components[1], components[2]


def hsl_triple_to_hex(triple: str | None) -> str:
    """Convert ``"<h> <s>% <l>%"`` to lowercase ``#rrggbb``; empty or malformed gives black."""
    components = parse_hsl_triple(triple)
    if components is None:
        return FALLBACK_HEX
    red, green, blue = hsl_to_rgb(*components)
    return f"#{red:02x}{green:02x}{blue:02x}"


def preset_colors(mode: ThemeMode | str) -> ThemeColorMap:
    key = mode.value if isinstance(mode, ThemeMode) else str(mode)
    preset = PRESET_THEMES.get(key) or PRESET_THEMES[ThemeMode.light.value]
    return dict(preset.colors)


def resolve_theme_colors(selection: ThemeSelection | Mapping[str, object] | None) -> ThemeColorMap:
    """Resolve the colour map a selection stands for; pure, never raises."""
    if selection is None:
        return dict(LIGHT_THEME_COLORS)
    if isinstance(selection, ThemeSelection):
        mode: object = selection.mode
        custom = selection.custom_colors
    else:
        mode = selection.get("mode", selection.get("theme"))
        custom = selection.get("customColors", selection.get("custom_colors"))
    mode_value = mode.value if isinstance(mode, ThemeMode) else mode
    if mode_value == ThemeMode.custom.value:
        if isinstance(custom, Mapping) and custom:
            return {str(key): str(value) for key, value in custom.items()}
        return dict(LIGHT_THEME_COLORS)
    return preset_colors(str(mode_value))


class StyleSink(Protocol):
    """Document-level custom-property scope a theme is written into."""

    def set_property(self, name: str, value: str) -> None: ...

    def commit(self) -> None: ...


class InMemoryStyleSink:
    """Keeps root properties in a dict; used by the API and by tests."""

    def __init__(self) -> None:
        self.properties: dict[str, str] = {}

    def set_property(self, name: str, value: str) -> None:
        self.properties[name] = value

    def commit(self) -> None:
        return None

    def to_css(self) -> str:
        return render_root_css(self.properties)


def render_root_css(color_map: Mapping[str, str]) -> str:
    declarations = "".join(f"  {name}: {value};\n" for name, value in color_map.items())
    return f":root {{\n{declarations}}}"


class ThemeApplier:
    """Writes resolved colour maps into a style sink; last apply wins."""

    def __init__(self, sink: StyleSink, *, logger: logging.Logger | None = None) -> None:
        self.sink = sink
        self._logger = logger or LOGGER

    def apply(self, color_map: Mapping[str, str]) -> None:
        for name, value in color_map.items():
            self.sink.set_property(name, value)
        self.sink.commit()
        log_event(self._logger, "theme.apply", properties=len(color_map))

    def apply_selection(self, selection: ThemeSelection) -> ThemeColorMap:
        colors = resolve_theme_colors(selection)
        self.apply(colors)
        return colors


def apply_theme(color_map: Mapping[str, str], sink: StyleSink) -> None:
    ThemeApplier(sink).apply(color_map)
