"""Column-oriented host data to row-oriented card records.

The host hands over ``sourceData`` (column id -> cell list), ``columnInfo`` (column id ->
metadata) and the ordered column selection. Each projected row is keyed by the column's
display name, so two selected columns sharing a name collapse into one key and the later
column wins. Formatting dispatches on the declared column type only; values are never
sniffed for timestamp shapes.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import tzinfo
from numbers import Real
from typing import Any

from cardview.models.columns import ColumnMeta, ColumnType
from cardview.services.date_format import format_date_value
from cardview.services.number_format import EN_US, FormatSpecError, NumberLocale, format_number
from cardview.utils.logging import get_logger, log_timing, log_warning

LOGGER = get_logger(__name__)

CellValue = str | int | float | None
DisplayRow = dict[str, Any]


def _is_row_sequence(values: object) -> bool:
    return isinstance(values, Sequence) and not isinstance(values, (str, bytes, bytearray))


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


class RowProjector:
    """Builds display rows with type-aware formatting for one display timezone and locale."""

    def __init__(
        self,
        *,
        tz: tzinfo | None = None,
        locale: NumberLocale = EN_US,
        logger: logging.Logger | None = None,
    ) -> None:
        self.tz = tz
        self.locale = locale
        self._logger = logger or LOGGER

    def project(
        self,
        source_data: Mapping[str, Sequence[CellValue]] | None,
        column_info: Mapping[str, Any] | None,
        selected_columns: Sequence[str] | None,
    ) -> list[DisplayRow]:
        if not source_data or not column_info or not selected_columns:
            return []
        if not isinstance(source_data, Mapping) or not isinstance(column_info, Mapping):
            return []
        if not _is_row_sequence(selected_columns) or not isinstance(selected_columns[0], str):
            return []

        first_column = source_data.get(selected_columns[0])
        if not _is_row_sequence(first_column):
            return []

        columns: list[tuple[ColumnMeta, Sequence[CellValue]]] = []
        for column_id in selected_columns:
            if not isinstance(column_id, str):
                continue
            meta = ColumnMeta.from_host(column_info.get(column_id))
            values = source_data.get(column_id)
            if meta is None or not _is_row_sequence(values):
                continue
            columns.append((meta, values))

        row_count = len(first_column)
        with log_timing(self._logger, "cards.project", rows=row_count, columns=len(columns)):
            rows: list[DisplayRow] = []
            for row_index in range(row_count):
                row: DisplayRow = {}
                for meta, values in columns:
                    if row_index >= len(values):
                        continue
                    row[meta.name] = self.format_value(meta, values[row_index])
                rows.append(row)
        return rows

    def format_value(self, meta: ColumnMeta, raw_value: CellValue) -> Any:
        column_type = meta.column_type
        if column_type.is_temporal:
            return format_date_value(raw_value, tz=self.tz, logger=self._logger)
        if column_type is ColumnType.number:
            spec = meta.format_spec
            if spec is None or not _is_number(raw_value):
                return raw_value
            try:
                return format_number(raw_value, spec, locale=self.locale)  # type: ignore[arg-type]
            except FormatSpecError as error:
                log_warning(
                    self._logger,
                    "cards.format.invalid_spec",
                    column=meta.name,
                    spec=spec,
                    error=str(error),
                )
                return raw_value
            except (ValueError, OverflowError) as error:
                log_warning(self._logger, "cards.format.number_error", column=meta.name, error=str(error))
                return raw_value
        return raw_value


def project_rows(
    source_data: Mapping[str, Sequence[CellValue]] | None,
    column_info: Mapping[str, Any] | None,
    selected_columns: Sequence[str] | None,
    *,
    tz: tzinfo | None = None,
    locale: NumberLocale = EN_US,
) -> list[DisplayRow]:
    """Project host columns into display rows; malformed input degrades, never raises."""
    return RowProjector(tz=tz, locale=locale).project(source_data, column_info, selected_columns)
