from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

import streamlit as st

from cardview.models.settings import CardSettings, PluginSettings, ThemeMode, ThemeSelection
from cardview.services.card_view import summarize_selection
from cardview.services.plugin_settings import SettingsStore
from cardview.services.theme_colors import ThemeApplier
from cardview.services.theme_editing import (
    change_theme_mode,
    picker_values,
    preview_theme,
    reset_theme,
    set_custom_color,
    set_dynamic_preview,
)
from cardview.utils.constants import (
    CARD_HEIGHT_OPTIONS,
    COLOR_GROUPS,
    CONTAINER_PADDING_OPTIONS,
    MAX_LISTED_COLUMNS,
    MIN_CARD_WIDTH_OPTIONS,
)
from cardview.utils.logging import get_logger, log_event
from cardview.utils.session_state import SessionStore, ensure_session_defaults

LOGGER = get_logger(__name__)

_THEME_LABELS = {ThemeMode.light: "Light", ThemeMode.dark: "Dark", ThemeMode.custom: "Custom"}


def _picker_label(variable: str) -> str:
    return variable.removeprefix("--").replace("-", " ", 1)


def _render_card_tab(card: CardSettings, column_names: Sequence[str]) -> CardSettings:
    title = st.text_input("Card Title", value=card.title, placeholder="Enter card title")
    st.caption("The title displayed at the top of the card view.")
    show_header = st.checkbox("Show Header", value=card.show_header)
    st.caption("Header visible" if show_header else "Header hidden")
    card_height = st.selectbox(
        "Card Height",
        options=list(CARD_HEIGHT_OPTIONS),
        index=list(CARD_HEIGHT_OPTIONS).index(card.card_height),
        help="Height of the scrollable card list.",
    )
    min_width = st.selectbox(
        "Minimum Card Width",
        options=list(MIN_CARD_WIDTH_OPTIONS),
        index=list(MIN_CARD_WIDTH_OPTIONS).index(card.min_card_width),
        help="Set the minimum width for each card in the view.",
    )
    padding_options = list(CONTAINER_PADDING_OPTIONS)
    padding = st.selectbox(
        "Container Padding",
        options=padding_options,
        index=padding_options.index(card.container_padding),
        format_func=lambda value: CONTAINER_PADDING_OPTIONS[value],
        help="Padding around the card container.",
    )
    if column_names:
        caption, listed, remaining = summarize_selection(column_names, limit=MAX_LISTED_COLUMNS)
        st.markdown("**Selected Columns**")
        lines = [caption, *[f"- {name}" for name in listed]]
        if remaining:
            lines.append(f"- _... and {remaining} more_")
        st.markdown("\n".join(lines))
        st.caption("Note: Column selection is managed in the editor panel.")
    return card.model_copy(
        update={
            "title": title,
            "show_header": show_header,
            "card_height": card_height,
            "min_card_width": min_width,
            "container_padding": padding,
        }
    )


def _render_styling_tab(styling: ThemeSelection) -> ThemeSelection:
    modes = list(ThemeMode)
    picked = st.selectbox(
        "Theme",
        options=modes,
        index=modes.index(styling.mode),
        format_func=lambda mode: _THEME_LABELS[mode],
        help="Choose a pre-defined theme or customize colors",
    )
    if picked is not styling.mode:
        styling = change_theme_mode(styling, picked)

    enabled = st.checkbox(
        "Enable Dynamic Theming",
        value=styling.dynamic_preview_enabled,
        help="Apply theme changes in real-time while editing",
    )
    if enabled != styling.dynamic_preview_enabled:
        styling = set_dynamic_preview(styling, enabled)

    if styling.mode is ThemeMode.custom:
        if st.button("Reset", help="Restore the light theme"):
            return reset_theme()
        current = picker_values(styling)
        for group in COLOR_GROUPS:
            st.markdown(f"**{group.label}**")
            columns = st.columns(2)
            for index, variable in enumerate(group.variables):
                with columns[index % 2]:
                    chosen = st.color_picker(_picker_label(variable), value=current[variable])
                if chosen.lower() != current[variable]:
                    styling = set_custom_color(styling, variable, chosen)
        st.caption("Click a color square to customize. Changes apply instantly when dynamic theming is enabled.")
    return styling


def render_settings_panel(
    store: SettingsStore,
    applier: ThemeApplier,
    *,
    column_names: Sequence[str],
    session: SessionStore | None = None,
) -> None:
    """Draft-edit plugin and card settings; nothing persists until Save."""
    state = ensure_session_defaults(session)
    saved: PluginSettings = state["plugin_settings"]
    saved_card: CardSettings = state["card_settings"]
    draft: PluginSettings = state["draft_settings"] or saved
    draft_card: CardSettings = state.get("draft_card_settings") or saved_card

    st.subheader("Plugin Settings")
    card_tab, general_tab, styling_tab = st.tabs(["Card Settings", "General", "Styling"])
    with card_tab:
        draft_card = _render_card_tab(draft_card, column_names)
    with general_tab:
        plugin_title = st.text_input("Plugin Title", value=draft.title, placeholder="Enter a display title")
        st.caption("Internal plugin title for reference.")
        draft = draft.model_copy(update={"title": plugin_title})
    with styling_tab:
        draft = draft.model_copy(update={"styling": _render_styling_tab(draft.styling)})

    state["draft_settings"] = draft
    state["draft_card_settings"] = draft_card
    preview_theme(draft.styling, applier, editing=True)

    save_column, cancel_column = st.columns(2)
    with cancel_column:
        if st.button("Cancel"):
            state["draft_settings"] = None
            state["draft_card_settings"] = None
            state["settings_open"] = False
            st.rerun()
    with save_column:
        if st.button("Save Settings", type="primary"):
            widget_id = state["widget_id"]
            state["plugin_settings"] = store.save(widget_id, draft)
            state["card_settings"] = store.save_card_settings(widget_id, draft_card)
            state["draft_settings"] = None
            state["draft_card_settings"] = None
            state["settings_open"] = False
            state["last_saved_at"] = datetime.now(UTC)
            state["settings_status"] = "saved"
            log_event(LOGGER, "settings.panel.save", widget_id=widget_id, theme=draft.styling.mode.value)
            st.rerun()
