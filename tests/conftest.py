from __future__ import annotations

from collections.abc import Iterable, Sequence
from copy import deepcopy
from pathlib import Path
from typing import Any

import pytest

from cardview.services.plugin_settings import SettingsStore
from tests.fixtures.host_payloads import COLUMN_INFO, SELECTED_COLUMNS, SOURCE_DATA
from tests.fixtures.tables.factory import build_csv, build_workbook


@pytest.fixture
def temp_data_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    data_root = tmp_path / "data"
    data_root.mkdir()
    monkeypatch.setenv("CARDS_DATA_ROOT", str(data_root))
    return data_root


@pytest.fixture
def settings_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    directory = tmp_path / "settings"
    monkeypatch.setenv("CARDS_SETTINGS_DIR", str(directory))
    return directory


@pytest.fixture
def settings_store(settings_dir: Path) -> SettingsStore:
    return SettingsStore(settings_dir)


@pytest.fixture
def source_data() -> dict[str, list[Any]]:
    return deepcopy(SOURCE_DATA)


@pytest.fixture
def column_info() -> dict[str, dict[str, Any]]:
    return deepcopy(COLUMN_INFO)


@pytest.fixture
def selected_columns() -> list[str]:
    return list(SELECTED_COLUMNS)


@pytest.fixture
def table_fixture_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "tables"
    directory.mkdir(parents=True, exist_ok=True)
    return directory


@pytest.fixture
def csv_builder(table_fixture_dir: Path):
    def _builder(
        *,
        headers: Sequence[str] | None = None,
        rows: Iterable[Sequence[object]] | None = None,
        filename: str = "people.csv",
    ) -> Path:
        return build_csv(table_fixture_dir / filename, headers=headers, rows=rows)

    return _builder


@pytest.fixture
def workbook_builder(table_fixture_dir: Path):
    def _builder(
        *,
        headers: Sequence[str] | None = None,
        rows: Iterable[Sequence[object]] | None = None,
        filename: str = "revenue.xlsx",
    ) -> Path:
        return build_workbook(table_fixture_dir / filename, headers=headers, rows=rows)

    return _builder
