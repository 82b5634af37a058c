from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from cardview.models.settings import CardSettings, PluginSettings, ThemeMode, ThemeSelection
from cardview.services.theme_colors import parse_hex
from cardview.utils.config import load_storage_config
from cardview.utils.constants import (
    CARD_HEIGHT_OPTIONS,
    CONTAINER_PADDING_OPTIONS,
    MIN_CARD_WIDTH_OPTIONS,
)
from cardview.utils.logging import get_logger, log_event, log_warning
from cardview.utils.session_state import SessionStore, ensure_session_defaults

LOGGER = get_logger(__name__)


def _text(value: object, default: str) -> str:
    return value if isinstance(value, str) else default


def _hex(value: object, default: str) -> str:
    return value if isinstance(value, str) and parse_hex(value) is not None else default


def _flag(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _choice(value: object, options: object, default: str) -> str:
    return value if isinstance(value, str) and value in options else default  # type: ignore[operator]


def merge_theme_selection(payload: object, defaults: ThemeSelection | None = None) -> ThemeSelection:
    """Merge a persisted ``styling`` object field by field against the defaults."""
    base = defaults or ThemeSelection()
    if not isinstance(payload, Mapping):
        return base

    mode = base.mode
    raw_mode = payload.get("theme", payload.get("mode"))
    if isinstance(raw_mode, str):
        try:
            mode = ThemeMode(raw_mode)
        except ValueError:
            mode = base.mode

    custom_colors = base.custom_colors
    raw_colors = payload.get("customColors", payload.get("custom_colors"))
    if isinstance(raw_colors, Mapping):
        custom_colors = {
            key: value
            for key, value in raw_colors.items()
            if isinstance(key, str) and isinstance(value, str)
        }

    dynamic = _flag(
        payload.get("enableDynamicTheming", payload.get("dynamic_preview_enabled")),
        base.dynamic_preview_enabled,
    )
    return ThemeSelection(mode=mode, custom_colors=custom_colors, dynamic_preview_enabled=dynamic)


def merge_plugin_settings(payload: object) -> PluginSettings:
    base = PluginSettings()
    if not isinstance(payload, Mapping):
        return base
    return PluginSettings(
        title=_text(payload.get("title"), base.title),
        background_color=_hex(payload.get("backgroundColor"), base.background_color),
        text_color=_hex(payload.get("textColor"), base.text_color),
        styling=merge_theme_selection(payload.get("styling"), base.styling),
    )


def load_plugin_settings(raw: str | bytes | None) -> PluginSettings:
    """Read persisted settings text; unreadable JSON falls back to full defaults."""
    if raw is None or (isinstance(raw, (str, bytes)) and not raw.strip()):
        return PluginSettings()
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as error:
        log_warning(LOGGER, "settings.load.fallback", reason="invalid_json", error=str(error))
        return PluginSettings()
    if not isinstance(payload, Mapping):
        log_warning(LOGGER, "settings.load.fallback", reason="not_an_object")
        return PluginSettings()
    return merge_plugin_settings(payload)


def dump_plugin_settings(settings: PluginSettings) -> str:
    return json.dumps(settings.model_dump(mode="json", by_alias=True), indent=2)


def load_card_settings(payload: Mapping[str, Any] | None, *, default_card_height: str | None = None) -> CardSettings:
    """Validate editor-panel values against their option lists, falling back per field."""
    base = CardSettings()
    height_default = _choice(default_card_height, CARD_HEIGHT_OPTIONS, base.card_height)
    if not isinstance(payload, Mapping):
        return base.model_copy(update={"card_height": height_default})
    return CardSettings(
        title=_text(payload.get("Title", payload.get("title")), base.title),
        card_height=_choice(
            payload.get("Card Height", payload.get("cardHeight")), CARD_HEIGHT_OPTIONS, height_default
        ),
        show_header=_flag(payload.get("Show Header", payload.get("showHeader")), base.show_header),
        min_card_width=_choice(payload.get("minCardWidth"), MIN_CARD_WIDTH_OPTIONS, base.min_card_width),
        container_padding=_choice(
            payload.get("containerPadding"), CONTAINER_PADDING_OPTIONS, base.container_padding
        ),
    )


def card_settings_to_host(settings: CardSettings) -> dict[str, Any]:
    """Editor-panel keys written back to the host alongside the settings JSON."""
    return {
        "Title": settings.title,
        "Card Height": settings.card_height,
        "Show Header": settings.show_header,
        "minCardWidth": settings.min_card_width,
        "containerPadding": settings.container_padding,
    }


class SettingsStore:
    """File-backed stand-in for host persistence: settings and card layout JSON per widget."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root or load_storage_config().settings_directory
        self._logger = LOGGER

    def _path(self, widget_id: str, kind: str = "settings") -> Path:
        safe = "".join(char for char in widget_id if char.isalnum() or char in "-_") or "default"
        return self.root / f"{safe}.{kind}.json"

    def load_card_settings(self, widget_id: str, *, default_card_height: str | None = None) -> CardSettings:
        path = self._path(widget_id, "card")
        payload: object = None
        if path.exists():
            try:
                payload = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as error:
                log_warning(self._logger, "settings.card.read_failed", widget_id=widget_id, error=str(error))
        return load_card_settings(
            payload if isinstance(payload, Mapping) else None,
            default_card_height=default_card_height,
        )

    def save_card_settings(self, widget_id: str, settings: CardSettings) -> CardSettings:
        path = self._path(widget_id, "card")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(card_settings_to_host(settings), indent=2), encoding="utf-8")
        return settings

    def load(self, widget_id: str) -> PluginSettings:
        path = self._path(widget_id)
        if not path.exists():
            return PluginSettings()
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as error:
            log_warning(self._logger, "settings.read.failed", widget_id=widget_id, error=str(error))
            return PluginSettings()
        return load_plugin_settings(raw)

    def save(self, widget_id: str, settings: PluginSettings) -> PluginSettings:
        path = self._path(widget_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_plugin_settings(settings), encoding="utf-8")
        log_event(
            self._logger,
            "settings.save",
            widget_id=widget_id,
            theme=settings.styling.mode.value,
        )
        return settings


def hydrate_session_settings(
    session: SessionStore | None,
    store: SettingsStore,
    *,
    widget_id: str,
    default_card_height: str | None = None,
) -> SessionStore:
    """Load persisted settings into session state once per widget, keeping unsaved drafts."""
    state = ensure_session_defaults(session)
    if state["plugin_settings"] is not None and state["widget_id"] == widget_id:
        return state
    state["widget_id"] = widget_id
    state["plugin_settings"] = store.load(widget_id)
    state["card_settings"] = store.load_card_settings(widget_id, default_card_height=default_card_height)
    state["draft_settings"] = None
    state["draft_card_settings"] = None
    state["settings_status"] = "ready"
    log_event(
        LOGGER,
        "settings.hydrate",
        widget_id=widget_id,
        theme=state["plugin_settings"].styling.mode.value,
    )
    return state
