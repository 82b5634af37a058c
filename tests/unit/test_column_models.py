from __future__ import annotations

import pytest

from cardview.models.columns import ColumnMeta, ColumnType


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("number", ColumnType.number),
        ("DateTime", ColumnType.datetime),
        (" date ", ColumnType.date),
        ("currency", ColumnType.other),
        (None, ColumnType.other),
        (ColumnType.text, ColumnType.text),
    ],
)
def test_column_type_parse(raw, expected: ColumnType) -> None:
    assert ColumnType.parse(raw) is expected


def test_temporal_types() -> None:
    assert ColumnType.date.is_temporal
    assert ColumnType.datetime.is_temporal
    assert not ColumnType.number.is_temporal


def test_from_host_reads_aliases_and_nested_format() -> None:
    meta = ColumnMeta.from_host(
        {"name": "Revenue", "columnType": "number", "format": {"format": ",.2f"}, "width": 120}
    )

    assert meta is not None
    assert meta.column_type is ColumnType.number
    assert meta.format_spec == ",.2f"


def test_from_host_accepts_bare_format_string() -> None:
    meta = ColumnMeta.from_host({"name": "Share", "columnType": "number", "format": ".0%"})

    assert meta is not None and meta.format_spec == ".0%"


@pytest.mark.parametrize("format_value", [None, "", {"format": None}, {}, 12])
def test_missing_formats_read_as_none(format_value) -> None:
    meta = ColumnMeta.from_host({"name": "N", "columnType": "number", "format": format_value})

    assert meta is not None and meta.format_spec is None


@pytest.mark.parametrize("entry", [None, "Revenue", {"columnType": "number"}, {"name": 5}])
def test_malformed_entries_read_as_missing(entry) -> None:
    assert ColumnMeta.from_host(entry) is None


def test_missing_type_defaults_to_other() -> None:
    meta = ColumnMeta.from_host({"name": "Notes"})

    assert meta is not None and meta.column_type is ColumnType.other


@pytest.mark.parametrize("format_value", [{"format": 5}, {"format": ["x"]}, {"format": ""}])
def test_non_string_inner_format_keeps_the_column(format_value) -> None:
    meta = ColumnMeta.from_host({"name": "Count", "columnType": "number", "format": format_value})

    assert meta is not None
    assert meta.column_type is ColumnType.number
    assert meta.format_spec is None
