from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from cardview.utils.constants import (
    DEFAULT_CARD_HEIGHT,
    DEFAULT_CARD_TITLE,
    DEFAULT_CONTAINER_PADDING,
    DEFAULT_MIN_CARD_WIDTH,
    DEFAULT_PLUGIN_TITLE,
    LIGHT_THEME_COLORS,
)


class ThemeMode(str, Enum):
    light = "light"
    dark = "dark"
    custom = "custom"


def _light_colors() -> dict[str, str]:
    return dict(LIGHT_THEME_COLORS)


class ThemeSelection(BaseModel):
    """Persisted styling choice; serialized with the widget's persisted JSON keys."""

    mode: Annotated[ThemeMode, Field(alias="theme")] = ThemeMode.light
    custom_colors: Annotated[
        dict[str, str] | None,
        Field(alias="customColors", default_factory=_light_colors),
    ]
    dynamic_preview_enabled: Annotated[bool, Field(alias="enableDynamicTheming")] = True

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class PluginSettings(BaseModel):
    title: str = DEFAULT_PLUGIN_TITLE
    background_color: Annotated[str, Field(alias="backgroundColor")] = "#ffffff"
    text_color: Annotated[str, Field(alias="textColor")] = "#000000"
    styling: ThemeSelection = Field(default_factory=ThemeSelection)

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class CardSettings(BaseModel):
    """Layout values configured from the editor panel and the card tab."""

    title: str = DEFAULT_CARD_TITLE
    card_height: Annotated[str, Field(alias="cardHeight")] = DEFAULT_CARD_HEIGHT
    show_header: Annotated[bool, Field(alias="showHeader")] = True
    min_card_width: Annotated[str, Field(alias="minCardWidth")] = DEFAULT_MIN_CARD_WIDTH
    container_padding: Annotated[str, Field(alias="containerPadding")] = DEFAULT_CONTAINER_PADDING

    model_config = ConfigDict(populate_by_name=True, frozen=True)
