from __future__ import annotations

import random

import pytest

from cardview.models.settings import ThemeMode, ThemeSelection
from cardview.services.theme_colors import (
    InMemoryStyleSink,
    ThemeApplier,
    apply_theme,
    hex_to_hsl_triple,
    hsl_triple_to_hex,
    parse_hex,
    parse_hsl_triple,
    render_root_css,
    resolve_theme_colors,
)
from cardview.utils.constants import DARK_THEME_COLORS, LIGHT_THEME_COLORS


@pytest.mark.parametrize(
    ("hex_color", "triple"),
    [
        ("#ff0000", "0 100% 50%"),
        ("#00ff00", "120 100% 50%"),
        ("#0000ff", "240 100% 50%"),
        ("#ffffff", "0 0% 100%"),
        ("#000000", "0 0% 0%"),
    ],
)
def test_primary_colors_round_trip_exactly(hex_color: str, triple: str) -> None:
    assert hex_to_hsl_triple(hex_color) == triple
    assert hsl_triple_to_hex(triple) == hex_color


def test_random_colors_round_trip_within_one_per_channel() -> None:
    generator = random.Random(20240115)
    for _ in range(200):
        hex_color = f"#{generator.randrange(0x1000000):06x}"
        returned = hsl_triple_to_hex(hex_to_hsl_triple(hex_color))
        original, restored = parse_hex(hex_color), parse_hex(returned)
        assert original is not None and restored is not None
        assert all(abs(a - b) <= 1 for a, b in zip(original, restored)), (hex_color, returned)


def test_triples_keep_one_decimal_place() -> None:
    assert hex_to_hsl_triple("#336699") == "210 50% 40%"
    assert hex_to_hsl_triple("#09090b") == "240 10% 3.9%"


def test_integer_precision_wraps_hue_to_zero() -> None:
    assert hex_to_hsl_triple("#ff0001", precision=0) == "0 100% 50%"


def test_short_and_unprefixed_hex_are_accepted() -> None:
    assert hex_to_hsl_triple("f00") == "0 100% 50%"
    assert hex_to_hsl_triple("#F00") == "0 100% 50%"


@pytest.mark.parametrize("value", ["", "#12345", "not a colour", "#gggggg"])
def test_malformed_hex_reads_as_black(value: str) -> None:
    assert hex_to_hsl_triple(value) == "0 0% 0%"


@pytest.mark.parametrize("value", [None, "", "abc 10% 5%", "nan 0% 0%"])
def test_malformed_triples_convert_to_black(value: str | None) -> None:
    assert hsl_triple_to_hex(value) == "#000000"


def test_partial_triples_default_missing_components_to_zero() -> None:
    assert parse_hsl_triple("120") == (120.0, 0.0, 0.0)
    assert hsl_triple_to_hex("0 0% 100%") == "#ffffff"


def test_resolve_dark_returns_dark_preset() -> None:
    assert resolve_theme_colors({"mode": "dark"}) == DARK_THEME_COLORS
    assert resolve_theme_colors(ThemeSelection(mode=ThemeMode.dark)) == DARK_THEME_COLORS


def test_resolve_empty_custom_falls_back_to_light() -> None:
    assert resolve_theme_colors({"mode": "custom", "customColors": {}}) == LIGHT_THEME_COLORS
    assert resolve_theme_colors(ThemeSelection(mode=ThemeMode.custom, custom_colors=None)) == LIGHT_THEME_COLORS


def test_resolve_custom_returns_custom_map() -> None:
    custom = {"--primary": "10 20% 30%"}

    assert resolve_theme_colors({"theme": "custom", "customColors": custom}) == custom


def test_resolve_unknown_or_missing_selection_uses_light() -> None:
    assert resolve_theme_colors(None) == LIGHT_THEME_COLORS
    assert resolve_theme_colors({"mode": "sepia"}) == LIGHT_THEME_COLORS


def test_resolved_maps_are_copies() -> None:
    colors = resolve_theme_colors({"mode": "light"})
    colors["--primary"] = "0 0% 0%"

    assert LIGHT_THEME_COLORS["--primary"] != "0 0% 0%"


def test_apply_theme_writes_every_property_into_the_sink() -> None:
    sink = InMemoryStyleSink()

    apply_theme({"--primary": "0 100% 50%", "--ring": "1 2% 3%"}, sink)

    assert sink.properties == {"--primary": "0 100% 50%", "--ring": "1 2% 3%"}
    assert sink.to_css() == ":root {\n  --primary: 0 100% 50%;\n  --ring: 1 2% 3%;\n}"


def test_later_apply_overwrites_earlier_values() -> None:
    sink = InMemoryStyleSink()
    applier = ThemeApplier(sink)

    applier.apply_selection(ThemeSelection(mode=ThemeMode.light))
    applier.apply_selection(ThemeSelection(mode=ThemeMode.dark))

    assert sink.properties == DARK_THEME_COLORS


def test_applier_commits_once_per_apply() -> None:
    class RecordingSink(InMemoryStyleSink):
        def __init__(self) -> None:
            super().__init__()
            self.commits = 0

        def commit(self) -> None:
            self.commits += 1

    sink = RecordingSink()
    ThemeApplier(sink).apply(LIGHT_THEME_COLORS)

    assert sink.commits == 1
    assert len(sink.properties) == len(LIGHT_THEME_COLORS)


def test_render_root_css_handles_empty_map() -> None:
    assert render_root_css({}) == ":root {\n}"


def test_applying_the_same_map_twice_leaves_the_sink_unchanged() -> None:
    sink = InMemoryStyleSink()
    applier = ThemeApplier(sink)

    applier.apply(DARK_THEME_COLORS)
    once = dict(sink.properties)
    css_once = sink.to_css()
    applier.apply(DARK_THEME_COLORS)

    assert sink.properties == once
    assert sink.to_css() == css_once


def test_default_precision_keeps_round_trip_that_whole_numbers_lose() -> None:
    assert hex_to_hsl_triple("#ff0600", precision=0) == "1 100% 50%"
    assert hsl_triple_to_hex("1 100% 50%") == "#ff0400"
    assert hsl_triple_to_hex(hex_to_hsl_triple("#ff0600")) == "#ff0600"
