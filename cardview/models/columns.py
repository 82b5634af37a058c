from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ColumnType(str, Enum):
    number = "number"
    date = "date"
    datetime = "datetime"
    text = "text"
    boolean = "boolean"
    other = "other"

    @classmethod
    def parse(cls, value: object) -> "ColumnType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.other

    @property
    def is_temporal(self) -> bool:
        return self in (ColumnType.date, ColumnType.datetime)


class ColumnFormat(BaseModel):
    format: str | None = None

    model_config = ConfigDict(extra="ignore")


class ColumnMeta(BaseModel):
    """Host-supplied descriptor: display name, declared type and optional number format."""

    name: str
    column_type: ColumnType = Field(default=ColumnType.other, alias="columnType")
    format: ColumnFormat | None = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @field_validator("column_type", mode="before")
    @classmethod
    def _coerce_type(cls, value: object) -> ColumnType:
        return ColumnType.parse(value)

    @field_validator("format", mode="before")
    @classmethod
    def _coerce_format(cls, value: object) -> object:
        if isinstance(value, str):
            return {"format": value}
        if isinstance(value, ColumnFormat):
            return value
        if not isinstance(value, Mapping):
            return None
        spec = value.get("format")
        return {"format": spec} if isinstance(spec, str) and spec else None

    @property
    def format_spec(self) -> str | None:
        if self.format is None or not self.format.format:
            return None
        return self.format.format

    @classmethod
    def from_host(cls, entry: object) -> "ColumnMeta | None":
        """Parse one host metadata entry; malformed entries read as missing."""
        if isinstance(entry, ColumnMeta):
            return entry
        if not isinstance(entry, Mapping):
            return None
        payload: dict[str, Any] = dict(entry)
        if not isinstance(payload.get("name"), str):
            return None
        try:
            return cls.model_validate(payload)
        except ValidationError:
            return None
