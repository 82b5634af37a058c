"""Number formatting with the d3-format specifier mini-language.

Specifiers follow ``[[fill]align][sign][symbol][0][width][,][.precision][~][type]``.
Rounding matches JavaScript's ``toFixed``/``toExponential``/``toPrecision`` (half-up on
the exact binary value), so output agrees with what the host renders for the same spec.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from functools import lru_cache
from numbers import Real

_SPEC_RE = re.compile(
    r"(?:(.)?([<>=^]))?([+\-( ])?([$#])?(0)?(\d+)?(,)?(\.\d+)?(~)?([a-z%])?",
    re.IGNORECASE,
)
_SI_PREFIXES = ("y", "z", "a", "f", "p", "n", "µ", "m", "", "k", "M", "G", "T", "P", "E", "Z", "Y")
_KNOWN_TYPES = frozenset("%bcdefgoprsXx")


class FormatSpecError(ValueError):
    """Raised when a specifier does not parse as d3-format."""


@dataclass(frozen=True)
class NumberLocale:
    decimal: str = "."
    thousands: str = ","
    grouping: tuple[int, ...] = (3,)
    currency: tuple[str, str] = ("$", "")
    minus: str = "−"
    nan: str = "NaN"
    percent: str = "%"


EN_US = NumberLocale()


@dataclass(frozen=True)
class FormatSpecifier:
    fill: str = " "
    align: str = ">"
    sign: str = "-"
    symbol: str = ""
    zero: bool = False
    width: int | None = None
    comma: bool = False
    precision: int | None = None
    trim: bool = False
    type: str = ""


def parse_specifier(spec: str) -> FormatSpecifier:
    match = _SPEC_RE.fullmatch(spec) if isinstance(spec, str) else None
    if match is None:
        raise FormatSpecError(f"invalid format: {spec!r}")
    fill, align, sign, symbol, zero, width, comma, precision, trim, kind = match.groups()
    return FormatSpecifier(
        fill=" " if fill is None else fill,
        align=">" if align is None else align,
        sign="-" if sign is None else sign,
        symbol=symbol or "",
        zero=bool(zero),
        width=int(width) if width is not None else None,
        comma=bool(comma),
        precision=int(precision[1:]) if precision is not None else None,
        trim=bool(trim),
        type=kind or "",
    )


def number_to_string(value: float) -> str:
    """Render a number the way JavaScript's ``String(number)`` does."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        if abs(value) < 2**53:
            return str(value)
        try:
            value = float(value)
        except OverflowError:
            return "Infinity" if value > 0 else "-Infinity"
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    digits, exponent = _shortest_digits(abs(value))
    k = len(digits)
    n = exponent + 1
    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        body = "0." + "0" * (-n) + digits
    else:
        mantissa = digits[0] + ("." + digits[1:] if k > 1 else "")
        body = f"{mantissa}e{'+' if n - 1 >= 0 else '-'}{abs(n - 1)}"
    return sign + body


def _shortest_digits(x: float) -> tuple[str, int]:
    """Shortest round-tripping significant digits of a positive float and its exponent."""
    parsed = Decimal(repr(float(x))).normalize()
    digits = "".join(str(d) for d in parsed.as_tuple().digits)
    return digits, parsed.adjusted()


def _to_fixed(x: float, precision: int) -> str:
    if x >= 1e21:
        return number_to_string(x)
    with localcontext() as ctx:
        ctx.prec = 100
        quantized = Decimal(x).quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
        return format(quantized, "f")


def _to_exponential(x: float, fraction_digits: int | None) -> str:
    if fraction_digits is None:
        if x == 0:
            return "0e+0"
        digits, exponent = _shortest_digits(x)
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"
    if x == 0:
        mantissa = "0" + ("." + "0" * fraction_digits if fraction_digits else "")
        return mantissa + "e+0"
    with localcontext() as ctx:
        ctx.prec = 100
        exact = Decimal(x)
        exponent = exact.adjusted()
        step = Decimal(1).scaleb(-fraction_digits)
        mantissa = exact.scaleb(-exponent).quantize(step, rounding=ROUND_HALF_UP)
        if mantissa >= 10:
            exponent += 1
            mantissa = exact.scaleb(-exponent).quantize(step, rounding=ROUND_HALF_UP)
        return f"{format(mantissa, 'f')}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"


def _to_precision(x: float, precision: int) -> str:
    if x == 0:
        return "0" + ("." + "0" * (precision - 1) if precision > 1 else "")
    with localcontext() as ctx:
        ctx.prec = 100
        exact = Decimal(x)
        exponent = exact.adjusted()
        scaled = exact.scaleb(precision - 1 - exponent).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        if scaled >= Decimal(10) ** precision:
            exponent += 1
            scaled = exact.scaleb(precision - 1 - exponent).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        digits = str(int(scaled))
    if exponent < -6 or exponent >= precision:
        mantissa = digits[0] + ("." + digits[1:] if precision > 1 else "")
        return f"{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"
    if exponent >= 0:
        head, tail = digits[: exponent + 1], digits[exponent + 1 :]
        return head + ("." + tail if tail else "")
    return "0." + "0" * (-exponent - 1) + digits


def _decimal_parts(x: float, precision: int) -> tuple[str, int]:
    text = _to_exponential(x, precision - 1 if precision else None)
    index = text.index("e")
    coefficient = text[:index]
    if len(coefficient) > 1:
        coefficient = coefficient[0] + coefficient[2:]
    return coefficient, int(text[index + 1 :])


def _format_rounded(x: float, precision: int) -> str:
    coefficient, exponent = _decimal_parts(x, precision)
    if exponent < 0:
        return "0." + "0" * (-exponent - 1) + coefficient
    if len(coefficient) > exponent + 1:
        return coefficient[: exponent + 1] + "." + coefficient[exponent + 1 :]
    return coefficient + "0" * (exponent - len(coefficient) + 1)


def _format_prefix_auto(x: float, precision: int) -> tuple[str, int]:
    coefficient, exponent = _decimal_parts(x, precision)
    prefix_exponent = max(-8, min(8, exponent // 3)) * 3
    i = exponent - prefix_exponent + 1
    n = len(coefficient)
    if i == n:
        text = coefficient
    elif i > n:
        text = coefficient + "0" * (i - n)
    elif i > 0:
        text = coefficient[:i] + "." + coefficient[i:]
    else:
        text = "0." + "0" * (-i) + _decimal_parts(x, max(0, precision + i - 1))[0]
    return text, prefix_exponent


def _js_round(x: float) -> int:
    return math.floor(x + 0.5)


def _format_integer(x: float, kind: str) -> str:
    rounded = _js_round(x)
    if kind == "d":
        return str(rounded)
    return format(rounded, {"b": "b", "o": "o", "x": "x", "X": "X"}[kind])


def _trim_insignificant(text: str) -> str:
    start, end = -1, -1
    for index in range(1, len(text)):
        char = text[index]
        if char == ".":
            start = end = index
        elif char == "0":
            if start == 0:
                start = index
            end = index
        else:
            if char not in "123456789":
                break
            if start > 0:
                start = 0
    return text[:start] + text[end + 1 :] if start > 0 else text


def _is_zero(text: str) -> bool:
    try:
        return float(text) == 0
    except ValueError:
        return False


class NumberFormatter:
    """Callable formatter compiled from one d3-format specifier."""

    def __init__(self, spec: str, locale: NumberLocale = EN_US) -> None:
        specifier = parse_specifier(spec)
        self.spec = spec
        self.locale = locale

        fill, align = specifier.fill, specifier.align
        zero, comma = specifier.zero, specifier.comma
        precision, trim, kind = specifier.precision, specifier.trim, specifier.type

        if kind == "n":
            comma, kind = True, "g"
        elif kind not in _KNOWN_TYPES:
            if precision is None:
                precision = 12
            trim, kind = True, "g"

        if zero or (fill == "0" and align == "="):
            zero, fill, align = True, "0", "="

        if specifier.symbol == "$":
            self._prefix, self._suffix = locale.currency
        else:
            self._prefix = "0" + kind.lower() if specifier.symbol == "#" and kind in "boxX" else ""
            self._suffix = locale.percent if kind in "%p" else ""

        if precision is None:
            precision = 6
        elif kind in "gprs":
            precision = max(1, min(21, precision))
        else:
            precision = max(0, min(20, precision))

        self._fill, self._align, self._sign = fill, align, specifier.sign
        self._zero, self._comma, self._width = zero, comma, specifier.width
        self._precision, self._trim, self._type = precision, trim, kind
        self._maybe_suffix = kind in "defgprs%"

    def _format_type(self, x: float) -> tuple[str, int]:
        kind, precision = self._type, self._precision
        if math.isinf(x):
            return "Infinity", 0
        if kind == "%":
            return _to_fixed(x * 100, precision), 0
        if kind == "f":
            return _to_fixed(x, precision), 0
        if kind == "e":
            return _to_exponential(x, precision), 0
        if kind == "g":
            return _to_precision(x, precision), 0
        if kind == "r":
            return _format_rounded(x, precision), 0
        if kind == "p":
            return _format_rounded(x * 100, precision), 0
        if kind == "s":
            return _format_prefix_auto(x, precision)
        return _format_integer(x, kind), 0

    def _group(self, value: str, width: float) -> str:
        grouping = self.locale.grouping
        index, parts, position, length = len(value), [], 0, 0
        size = grouping[0]
        while index > 0 and size > 0:
            if length + size + 1 > width:
                size = max(1, int(width - length))
            index -= size
            parts.append(value[max(index, 0) : max(index + size, 0)])
            length += size + 1
            if length > width:
                break
            position = (position + 1) % len(grouping)
            size = grouping[position]
        return self.locale.thousands.join(reversed(parts))

    def __call__(self, value: object) -> str:
        value_prefix, value_suffix = self._prefix, self._suffix

        if self._type == "c":
            rendered = number_to_string(value) if isinstance(value, Real) else str(value)
            value_suffix = rendered + value_suffix
            text = ""
        else:
            number = float(value)  # type: ignore[arg-type]
            negative = number < 0 or math.copysign(1.0, number) < 0
            prefix_exponent = 0
            if math.isnan(number):
                text = self.locale.nan
            else:
                text, prefix_exponent = self._format_type(abs(number))
            if self._trim:
                text = _trim_insignificant(text)
            if negative and _is_zero(text) and self._sign != "+":
                negative = False

            if negative:
                sign_text = "(" if self._sign == "(" else self.locale.minus
            else:
                sign_text = "" if self._sign in "-(" else self._sign
            value_prefix = sign_text + value_prefix
            si_prefix = _SI_PREFIXES[8 + prefix_exponent // 3] if self._type == "s" else ""
            closing = ")" if negative and self._sign == "(" else ""
            value_suffix = si_prefix + value_suffix + closing

            if self._maybe_suffix:
                for index, char in enumerate(text):
                    if not "0" <= char <= "9":
                        rest = self.locale.decimal + text[index + 1 :] if char == "." else text[index:]
                        value_suffix = rest + value_suffix
                        text = text[:index]
                        break

        if self._comma and not self._zero:
            text = self._group(text, math.inf)

        width = self._width
        length = len(value_prefix) + len(text) + len(value_suffix)
        padding = self._fill * (width - length) if width is not None and length < width else ""

        if self._comma and self._zero:
            text = self._group(padding + text, width - len(value_suffix) if padding else math.inf)
            padding = ""

        if self._align == "<":
            return value_prefix + text + value_suffix + padding
        if self._align == "=":
            return value_prefix + padding + text + value_suffix
        if self._align == "^":
            half = len(padding) >> 1
            return padding[:half] + value_prefix + text + value_suffix + padding[half:]
        return padding + value_prefix + text + value_suffix


@lru_cache(maxsize=256)
def compile_format(spec: str, locale: NumberLocale = EN_US) -> NumberFormatter:
    return NumberFormatter(spec, locale)


def format_number(value: float, spec: str, *, locale: NumberLocale = EN_US) -> str:
    """Format ``value`` with a d3-format specifier; raises FormatSpecError on a bad spec."""
    return compile_format(spec, locale)(value)
