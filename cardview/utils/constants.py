"""Option lists for the card editor panel, colour picker groups and the preset themes."""

from __future__ import annotations

from dataclasses import dataclass

CARD_HEIGHT_OPTIONS: tuple[str, ...] = ("400px", "500px", "600px", "700px", "800px")
DEFAULT_CARD_HEIGHT = "400px"

MIN_CARD_WIDTH_OPTIONS: tuple[str, ...] = ("300px", "400px", "500px", "600px", "700px", "800px")
DEFAULT_MIN_CARD_WIDTH = "300px"

CONTAINER_PADDING_OPTIONS: dict[str, str] = {
    "0rem": "None (0rem)",
    "1rem": "Small (1rem)",
    "2rem": "Medium (2rem)",
    "3rem": "Large (3rem)",
}
DEFAULT_CONTAINER_PADDING = "1rem"

DEFAULT_CARD_TITLE = "Untitled"
DEFAULT_PLUGIN_TITLE = "Card Display"

EMPTY_STATE_MESSAGE = "No data available."

MAX_LISTED_COLUMNS = 5
"""Selected columns listed by name in the card tab before collapsing into a count."""


@dataclass(frozen=True)
class ColorGroup:
    label: str
    variables: tuple[str, ...]


COLOR_GROUPS: tuple[ColorGroup, ...] = (
    ColorGroup("Primary Colors", ("--primary", "--primary-foreground", "--secondary", "--secondary-foreground")),
    ColorGroup("Background Colors", ("--background", "--foreground", "--card", "--card-foreground")),
    ColorGroup("Accent Colors", ("--accent", "--accent-foreground", "--muted", "--muted-foreground")),
    ColorGroup("Border & Input Colors", ("--border", "--input", "--ring", "--destructive")),
)


@dataclass(frozen=True)
class ThemePreset:
    name: str
    colors: dict[str, str]


LIGHT_THEME_COLORS: dict[str, str] = {
    "--background": "0 0% 100%",
    "--foreground": "240 10% 3.9%",
    "--card": "0 0% 100%",
    "--card-foreground": "240 10% 3.9%",
    "--popover": "0 0% 100%",
    "--popover-foreground": "240 10% 3.9%",
    "--primary": "240 9% 10%",
    "--primary-foreground": "0 0% 98%",
    "--secondary": "240 4.8% 95.9%",
    "--secondary-foreground": "240 5.9% 10%",
    "--muted": "240 4.8% 95.9%",
    "--muted-foreground": "240 3.8% 46.1%",
    "--accent": "240 4.8% 95.9%",
    "--accent-foreground": "240 5.9% 10%",
    "--destructive": "0 84.2% 60.2%",
    "--destructive-foreground": "0 0% 98%",
    "--border": "240 5.9% 90%",
    "--input": "240 5.9% 90%",
    "--ring": "240 5.9% 10%",
}

DARK_THEME_COLORS: dict[str, str] = {
    "--background": "240 10% 3.9%",
    "--foreground": "0 0% 98%",
    "--card": "240 10% 3.9%",
    "--card-foreground": "0 0% 98%",
    "--popover": "240 10% 3.9%",
    "--popover-foreground": "0 0% 98%",
    "--primary": "0 0% 98%",
    "--primary-foreground": "240 5.9% 10%",
    "--secondary": "240 3.7% 15.9%",
    "--secondary-foreground": "0 0% 98%",
    "--muted": "240 3.7% 15.9%",
    "--muted-foreground": "240 5% 64.9%",
    "--accent": "240 3.7% 15.9%",
    "--accent-foreground": "0 0% 98%",
    "--destructive": "0 62.8% 30.6%",
    "--destructive-foreground": "0 0% 98%",
    "--border": "240 3.7% 15.9%",
    "--input": "240 3.7% 15.9%",
    "--ring": "240 4.9% 83.9%",
}

PRESET_THEMES: dict[str, ThemePreset] = {
    "light": ThemePreset("Light", LIGHT_THEME_COLORS),
    "dark": ThemePreset("Dark", DARK_THEME_COLORS),
}
