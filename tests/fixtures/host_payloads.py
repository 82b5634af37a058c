"""Host-shaped ``sourceData``/``columnInfo`` samples shared across test layers."""

from __future__ import annotations

from typing import Any

SOURCE_DATA: dict[str, list[Any]] = {
    "col-name": ["Bob", "Joe", "Alice", "Emma"],
    "col-age": [40, 30, 35, 28],
    "col-revenue": [1234.5, 98000, 0.5, -42],
    "col-joined": [1700000000, 1700000000000, None, "2024-01-01"],
}

COLUMN_INFO: dict[str, dict[str, Any]] = {
    "col-name": {"name": "Name", "columnType": "text"},
    "col-age": {"name": "Age", "columnType": "number"},
    "col-revenue": {"name": "Revenue", "columnType": "number", "format": {"format": ",.2f"}},
    "col-joined": {"name": "Joined", "columnType": "datetime"},
}

SELECTED_COLUMNS: list[str] = ["col-name", "col-age", "col-revenue", "col-joined"]
