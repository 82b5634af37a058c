from __future__ import annotations

from cardview.models.settings import ThemeMode, ThemeSelection
from cardview.services.theme_colors import (
    ThemeApplier,
    hex_to_hsl_triple,
    hsl_triple_to_hex,
    preset_colors,
    resolve_theme_colors,
)
from cardview.utils.constants import COLOR_GROUPS


def default_theme() -> ThemeSelection:
    return ThemeSelection()


def change_theme_mode(selection: ThemeSelection, mode: ThemeMode | str) -> ThemeSelection:
    """Switch modes; picking a preset also copies its colours into the custom map."""
    try:
        target = ThemeMode(mode)
    except ValueError:
        target = ThemeMode.light
    updates: dict[str, object] = {"mode": target}
    if target is not ThemeMode.custom:
        updates["custom_colors"] = preset_colors(target)
    return selection.model_copy(update=updates)


def set_custom_color(selection: ThemeSelection, variable: str, hex_color: str) -> ThemeSelection:
    colors = dict(selection.custom_colors or {})
    colors[variable] = hex_to_hsl_triple(hex_color)
    return selection.model_copy(update={"custom_colors": colors})


def set_dynamic_preview(selection: ThemeSelection, enabled: bool) -> ThemeSelection:
    return selection.model_copy(update={"dynamic_preview_enabled": bool(enabled)})


def reset_theme() -> ThemeSelection:
    return default_theme()


def picker_values(selection: ThemeSelection) -> dict[str, str]:
    """Hex value for every picker in the styling tab, black where a variable is unset."""
    colors = selection.custom_colors or {}
    return {
        variable: hsl_triple_to_hex(colors.get(variable))
        for group in COLOR_GROUPS
        for variable in group.variables
    }


def preview_theme(selection: ThemeSelection, applier: ThemeApplier, *, editing: bool) -> bool:
    """Apply the draft theme live while the settings panel is open and preview is on."""
    if not editing or not selection.dynamic_preview_enabled:
        return False
    applier.apply(resolve_theme_colors(selection))
    return True
