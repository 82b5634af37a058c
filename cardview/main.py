from __future__ import annotations

import os
import sys
from pathlib import Path

import pandas as pd
import streamlit as st

# Ensure package imports work when launched as a file via `streamlit run cardview/main.py`.
ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from cardview.components.cards import render_card_list  # noqa: E402
from cardview.components.settings_panel import render_settings_panel  # noqa: E402
from cardview.components.theme_styles import StreamlitStyleSink, apply_card_styles  # noqa: E402
from cardview.services.card_view import build_card_view  # noqa: E402
from cardview.services.host_adapter import (  # noqa: E402
    SUPPORTED_SUFFIXES,
    HostPayload,
    frame_to_host_payload,
    read_table,
)
from cardview.services.plugin_settings import SettingsStore, hydrate_session_settings  # noqa: E402
from cardview.services.row_projection import project_rows  # noqa: E402
from cardview.services.theme_colors import ThemeApplier  # noqa: E402
from cardview.utils.caching import cache_data, cache_resource  # noqa: E402
from cardview.utils.config import get_data_root, get_settings_dir, load_display_config  # noqa: E402
from cardview.utils.constants import DEFAULT_PLUGIN_TITLE  # noqa: E402
from cardview.utils.logging import get_logger, log_event  # noqa: E402
from cardview.utils.session_state import (  # noqa: E402
    SessionStore,
    confirm_reset,
    ensure_session_defaults,
    request_reset,
    update_session_state,
)

LOGGER = get_logger(__name__)

SAMPLE_ROWS = {
    "Name": ["Bob", "Joe", "Alice", "Emma"],
    "Age": [40, 30, 35, 28],
    "State": ["PA", "CA", "NY", "TX"],
    "Score": [10, 20, 15, 25],
}

SELECTION_RESET_KEYS = ("selected_columns", "column_picker")


def _ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def prepare_data_directories() -> Path:
    data_root = get_data_root()
    logs_dir = Path(os.getenv("CARDS_LOG_DIR", data_root / "logs")).expanduser()

    _ensure_directory(data_root)
    _ensure_directory(get_settings_dir(data_root))
    _ensure_directory(logs_dir)
    return data_root


@cache_resource
def get_settings_store() -> SettingsStore:
    return SettingsStore()


@cache_data
def load_uploaded_table(filename: str, data: bytes) -> pd.DataFrame:
    return read_table(filename, data)


def sample_frame() -> pd.DataFrame:
    return pd.DataFrame(SAMPLE_ROWS)


def finish_selection_reset(session: SessionStore | None = None, *, confirmed: bool) -> bool:
    """Second step of the column reset: apply it on confirm, otherwise drop the request."""
    if confirmed:
        return confirm_reset(session, keys=SELECTION_RESET_KEYS)
    update_session_state(session, reset_requested=False, reset_reason=None)
    return False


def _render_editor_panel() -> tuple[HostPayload, list[str]]:
    """Sidebar stand-in for the host editor: data source, columns and number formats."""
    st.header("Editor")
    upload = st.file_uploader(
        "Data source",
        type=[suffix.lstrip(".") for suffix in SUPPORTED_SUFFIXES],
        help="Upload a CSV or Excel workbook. The sample table is shown otherwise.",
    )
    frame = sample_frame()
    if upload is not None:
        try:
            frame = load_uploaded_table(upload.name, upload.getvalue())
        except ValueError as error:
            st.error(f"Could not read {upload.name}: {error}")

    numeric_columns = [
        str(header) for header in frame.columns if pd.api.types.is_numeric_dtype(frame[header])
    ]
    number_formats: dict[str, str] = {}
    if numeric_columns:
        with st.expander("Number formats"):
            st.caption("d3-format specifiers such as `,.2f`, `.0%` or `$.2s`. Leave blank for raw values.")
            for name in numeric_columns:
                spec = st.text_input(name, key=f"number_format_{name}").strip()
                if spec:
                    number_formats[name] = spec

    payload = frame_to_host_payload(frame, number_formats=number_formats)
    names = payload.display_names()

    state = ensure_session_defaults()
    selected = [column_id for column_id in state["selected_columns"] if column_id in names]
    if not selected:
        selected = payload.column_ids
    chosen = st.multiselect(
        "Columns",
        options=payload.column_ids,
        default=selected,
        format_func=lambda column_id: names[column_id],
        key="column_picker",
    )
    update_session_state(selected_columns=list(chosen))

    if st.button("Reset selection"):
        request_reset(reason="editor")
    if state["reset_requested"]:
        st.warning("Reset the column selection to show every column?")
        confirm_column, keep_column = st.columns(2)
        if confirm_column.button("Confirm reset"):
            finish_selection_reset(confirmed=True)
            st.rerun()
        if keep_column.button("Keep selection"):
            finish_selection_reset(confirmed=False)
            st.rerun()

    st.divider()
    open_settings = st.toggle("Settings", value=bool(state["settings_open"]))
    if open_settings != state["settings_open"]:
        update_session_state(settings_open=open_settings)
        log_event(LOGGER, "settings.panel.toggle", open=open_settings)
    return payload, list(chosen)


def run() -> None:
    st.set_page_config(page_title=DEFAULT_PLUGIN_TITLE, page_icon="🗂️", layout="wide")
    prepare_data_directories()

    display = load_display_config()
    store = get_settings_store()
    state = hydrate_session_settings(
        None,
        store,
        widget_id=ensure_session_defaults()["widget_id"],
        default_card_height=display.default_card_height,
    )
    applier = ThemeApplier(StreamlitStyleSink())

    with st.sidebar:
        payload, selected = _render_editor_panel()

    editing = bool(state["settings_open"])
    if editing:
        with st.sidebar:
            names = payload.display_names()
            render_settings_panel(
                store,
                applier,
                column_names=[names[column_id] for column_id in selected],
            )
    draft = state["draft_settings"] if editing else None
    if draft is None or not draft.styling.dynamic_preview_enabled:
        applier.apply_selection(state["plugin_settings"].styling)
    apply_card_styles()

    card_settings = state["draft_card_settings"] if editing and state["draft_card_settings"] else state["card_settings"]
    rows = project_rows(payload.source_data, payload.column_info, selected, tz=display.timezone)
    view = build_card_view(rows, title=card_settings.title, show_header=card_settings.show_header)
    render_card_list(view, card_settings)


if __name__ == "__main__":
    run()
