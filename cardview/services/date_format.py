from __future__ import annotations

import logging
import math
from datetime import UTC, date, datetime, time, tzinfo
from numbers import Real

from cardview.services.number_format import number_to_string
from cardview.utils.logging import get_logger, log_warning

LOGGER = get_logger(__name__)

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

SECONDS_DIGITS = 10
MILLISECONDS_DIGITS = 13


def stringify(value: object) -> str:
    if isinstance(value, Real):
        return number_to_string(value)  # type: ignore[arg-type]
    return str(value)


def timestamp_to_milliseconds(value: float) -> float | None:
    """Scale a Unix timestamp by its digit count: 10 digits are seconds, 13 are milliseconds."""
    if not math.isfinite(value):
        return None
    digits = len(str(int(abs(value))))
    if digits == SECONDS_DIGITS:
        return value * 1000
    if digits == MILLISECONDS_DIGITS:
        return float(value)
    return None


def render_wall_clock(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{MONTH_ABBREVIATIONS[moment.month - 1]} {moment.day}, {hour}:{moment.minute:02d} {meridiem}"


def _to_local(moment: datetime, tz: tzinfo | None) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz) if tz is not None else moment.astimezone()


def format_date_value(
    value: object,
    *,
    tz: tzinfo | None = None,
    logger: logging.Logger | None = None,
) -> str:
    """Render a date/datetime cell as ``"Jan 15, 3:30 PM"`` in the display timezone.

    Strings pass through (hosts may pre-format), ``None`` renders empty, and anything
    that cannot be read as an instant falls back to its string form.
    """
    logger = logger or LOGGER
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    try:
        if isinstance(value, datetime):
            if _is_missing_timestamp(value):
                return ""
            return render_wall_clock(_to_local(value, tz))
        if isinstance(value, date):
            return render_wall_clock(datetime.combine(value, time()))
        if isinstance(value, Real) and not isinstance(value, bool):
            milliseconds = timestamp_to_milliseconds(float(value))
            if milliseconds is None:
                log_warning(logger, "cards.format.invalid_timestamp", value=stringify(value))
                return stringify(value)
            instant = datetime.fromtimestamp(milliseconds / 1000, tz=UTC)
            return render_wall_clock(_to_local(instant, tz))
    except (OverflowError, OSError, ValueError) as error:
        log_warning(logger, "cards.format.invalid_date", value=stringify(value), error=str(error))
        return stringify(value)
    return stringify(value)


def _is_missing_timestamp(value: datetime) -> bool:
    # pandas.NaT subclasses datetime and compares unequal to itself
    return value != value
