from __future__ import annotations

from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from cardview.utils.config import (
    get_data_root,
    get_display_timezone,
    get_settings_dir,
    load_display_config,
    load_storage_config,
)
from cardview.utils.constants import DEFAULT_CARD_HEIGHT


def test_display_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARDS_TIMEZONE", "Europe/Paris")
    monkeypatch.setenv("CARDS_DEFAULT_CARD_HEIGHT", "700px")

    config = load_display_config()

    assert config.timezone == ZoneInfo("Europe/Paris")
    assert config.default_card_height == "700px"


def test_display_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CARDS_TIMEZONE", raising=False)
    monkeypatch.setenv("CARDS_DEFAULT_CARD_HEIGHT", "tall")

    config = load_display_config()

    assert config.timezone is None
    assert config.default_card_height == DEFAULT_CARD_HEIGHT


def test_unknown_timezone_uses_local_zone(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARDS_TIMEZONE", "Mars/Olympus_Mons")

    assert get_display_timezone() is None


def test_settings_dir_defaults_under_data_root(temp_data_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CARDS_SETTINGS_DIR", raising=False)

    assert get_data_root() == temp_data_root
    assert get_settings_dir() == temp_data_root / "settings"
    assert load_storage_config().settings_directory == temp_data_root / "settings"


def test_explicit_settings_dir_wins(settings_dir: Path, temp_data_root: Path) -> None:
    assert get_settings_dir(temp_data_root) == settings_dir
