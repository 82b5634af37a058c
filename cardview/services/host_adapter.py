from __future__ import annotations

import io
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd
from pandas.api import types as ptypes

from cardview.models.columns import ColumnType
from cardview.utils.logging import get_logger, log_event

LOGGER = get_logger(__name__)

SUPPORTED_SUFFIXES = (".csv", ".xlsx")


@dataclass(frozen=True)
class HostPayload:
    """Column-oriented data and metadata in the shape the host plugin supplies."""

    source_data: dict[str, list[Any]] = field(default_factory=dict)
    column_info: dict[str, dict[str, Any]] = field(default_factory=dict)

    @property
    def column_ids(self) -> list[str]:
        return list(self.column_info)

    def display_names(self) -> dict[str, str]:
        return {column_id: str(meta["name"]) for column_id, meta in self.column_info.items()}


def infer_column_type(series: pd.Series) -> ColumnType:
    if ptypes.is_bool_dtype(series):
        return ColumnType.boolean
    if ptypes.is_datetime64_any_dtype(series):
        return ColumnType.datetime
    if ptypes.is_numeric_dtype(series):
        return ColumnType.number
    return ColumnType.text


def _cell(value: Any) -> Any:
    if value is None or value is pd.NaT or value is pd.NA:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if hasattr(value, "item") and not isinstance(value, (str, bytes)):
        return value.item()
    return value


def frame_to_host_payload(
    frame: pd.DataFrame,
    *,
    number_formats: dict[str, str] | None = None,
) -> HostPayload:
    """Convert a DataFrame into host-shaped ``sourceData``/``columnInfo`` keyed by positional ids."""
    formats = number_formats or {}
    source_data: dict[str, list[Any]] = {}
    column_info: dict[str, dict[str, Any]] = {}
    for position, header in enumerate(frame.columns):
        column_id = f"col-{position}"
        series = frame.iloc[:, position]
        column_type = infer_column_type(series)
        name = str(header)
        meta: dict[str, Any] = {"name": name, "columnType": column_type.value}
        if column_type is ColumnType.number and formats.get(name):
            meta["format"] = {"format": formats[name]}
        column_info[column_id] = meta
        source_data[column_id] = [_cell(value) for value in series.tolist()]
    return HostPayload(source_data=source_data, column_info=column_info)


def read_table(filename: str, data: bytes) -> pd.DataFrame:
    """Load an uploaded CSV or Excel workbook into a DataFrame with parsed date columns."""
    suffix = Path(filename).suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported file type: {suffix or filename}")
    buffer = io.BytesIO(data)
    if suffix == ".csv":
        frame = pd.read_csv(buffer)
    else:
        frame = pd.read_excel(buffer, engine="openpyxl")
    frame = _parse_date_columns(frame)
    log_event(LOGGER, "host.table.loaded", filename=filename, rows=len(frame), columns=len(frame.columns))
    return frame


def _parse_date_columns(frame: pd.DataFrame) -> pd.DataFrame:
    for position, header in enumerate(frame.columns):
        series = frame.iloc[:, position]
        if not ptypes.is_string_dtype(series):
            continue
        lowered = str(header).lower()
        if "date" not in lowered and "time" not in lowered and "created" not in lowered:
            continue
        parsed = pd.to_datetime(series, errors="coerce")
        if parsed.notna().sum() >= series.notna().sum() and series.notna().any():
            frame.isetitem(position, parsed)
    return frame
