from datetime import datetime, timezone

from cardview.utils.session_state import (
    confirm_reset,
    ensure_session_defaults,
    request_reset,
    update_session_state,
)


def test_defaults_preserve_existing_values() -> None:
    store: dict[str, object] = {"widget_id": "w-9"}
    ensure_session_defaults(store)

    assert store["widget_id"] == "w-9"
    assert "selected_columns" in store and store["selected_columns"] == []
    assert store["settings_open"] is False


def test_reset_requires_request_and_resets_when_confirmed() -> None:
    store: dict[str, object] = {}
    ensure_session_defaults(store)
    store["selected_columns"] = ["col-0"]
    store["settings_open"] = True

    assert not confirm_reset(store)

    request_reset(store, reason="clear selections")
    assert store["reset_requested"] is True
    assert store["reset_reason"] == "clear selections"

    updated = confirm_reset(store)
    assert updated is True
    assert store["reset_requested"] is False
    assert store["selected_columns"] == []
    assert store["settings_open"] is False
    assert isinstance(store["last_reset_at"], datetime)
    assert store["last_reset_at"].tzinfo == timezone.utc


def test_reset_removes_keys_without_defaults() -> None:
    store: dict[str, object] = {"column_picker": ["col-1"]}
    request_reset(store)

    confirm_reset(store, keys=("selected_columns", "column_picker"))

    assert "column_picker" not in store


def test_update_session_state_sets_values() -> None:
    store: dict[str, object] = {}
    update_session_state(store, settings_open=True, selected_columns=["a"])

    assert store["settings_open"] is True
    assert store["selected_columns"] == ["a"]
