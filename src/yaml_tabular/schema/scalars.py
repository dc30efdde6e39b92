"""Scalar classifier and the lexical parsers it shares with the value converter.

``classify_scalar`` maps the raw text of a scalar to the narrowest
InferredType.  Checks run on the trimmed text, first match wins:

1. ``""``, ``null``, ``~``                          -> NULL
2. boolean synonyms (true/false/yes/no/on/off/y/n/t/f) -> BOOLEAN
3. text with ``:``, ``T`` or a non-leading ``-``: date, then timestamp,
   then time of day                                  -> DATE / TIMESTAMP / TIME
4. inf, infinity, -inf, -infinity, nan              -> DOUBLE
5. full-string integer                              -> INTEGER of minimal width
6. full-string float; whole finite values that fit
   in 64 bits                                       -> INTEGER64, else DOUBLE
7. anything else                                    -> STRING

Step 3 runs before the numeric checks because literals such as ``2024-01-02``
would otherwise be read as arithmetic.  When no temporal parse succeeds the
numeric checks still run, so ``1e-5`` is a DOUBLE.

Every ``parse_*`` function returns None instead of raising when the text does
not fit, which is how the converter turns bad values into typed nulls.
"""

from __future__ import annotations

import datetime as dt
import math
import re

import numpy as np

from yaml_tabular.schema.types import (
    BOOLEAN,
    DATE,
    DOUBLE,
    INTEGER64,
    INTEGER_WIDTHS,
    NULL,
    STRING,
    TIME,
    TIMESTAMP,
    InferredType,
)

__all__ = [
    "classify_scalar",
    "integer_width",
    "parse_boolean",
    "parse_date",
    "parse_double",
    "parse_integer",
    "parse_time",
    "parse_timestamp",
]

_TRUE_LITERALS = frozenset({"true", "yes", "on", "y", "t"})
_FALSE_LITERALS = frozenset({"false", "no", "off", "n", "f"})

_SPECIAL_FLOATS: dict[str, float] = {
    "inf": math.inf,
    "infinity": math.inf,
    "-inf": -math.inf,
    "-infinity": -math.inf,
    "nan": math.nan,
}

# Signed bounds per width, taken from numpy so they match fixed-width storage.
_INTEGER_BOUNDS: dict[int, tuple[int, int]] = {
    width: (int(np.iinfo(f"int{width}").min), int(np.iinfo(f"int{width}").max))
    for width in INTEGER_WIDTHS
}
_INT64_MIN, _INT64_MAX = _INTEGER_BOUNDS[64]

_INTEGER = re.compile(r"[+-]?\d+")
# Sign plus the 19 digits of 2**63; longer literals never fit 64 bits and would
# trip the int() digit limit.
_MAX_INTEGER_CHARS = 20
_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_DATE = r"(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})"
_TIME = (
    r"(?P<hour>\d{1,2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.(?P<fraction>\d{1,9}))?)?"
)
_DATE_RE = re.compile(_DATE)
_TIME_RE = re.compile(_TIME)
_TIMESTAMP_RE = re.compile(
    _DATE + r"(?:[Tt]|\s+)" + _TIME + r"\s*(?P<offset>Z|[+-]\d{2}(?::?\d{2})?)?"
)


# ----------------------------------------------------------------------
# Lexical parsers
# ----------------------------------------------------------------------


def parse_boolean(text: str) -> bool | None:
    lowered = text.strip().lower()
    if lowered in _TRUE_LITERALS:
        return True
    if lowered in _FALSE_LITERALS:
        return False
    return None


def parse_integer(text: str) -> int | None:
    """Parse a full-string integer; whole-valued float literals such as ``3.0`` count."""
    value = text.strip()
    if _is_integer_literal(value):
        return int(value)
    if _FLOAT.fullmatch(value):
        number = float(value)
        if math.isfinite(number) and number.is_integer():
            return int(number)
    return None


def parse_double(text: str) -> float | None:
    value = text.strip()
    special = _SPECIAL_FLOATS.get(value.lower())
    if special is not None:
        return special
    if _FLOAT.fullmatch(value):
        return float(value)
    return None


def parse_date(text: str) -> dt.date | None:
    match = _DATE_RE.fullmatch(text.strip())
    if match is None:
        return None
    try:
        return dt.date(int(match["year"]), int(match["month"]), int(match["day"]))
    except ValueError:
        return None


def parse_time(text: str) -> dt.time | None:
    match = _TIME_RE.fullmatch(text.strip())
    if match is None:
        return None
    try:
        return _build_time(match)
    except ValueError:
        return None


def parse_timestamp(text: str) -> dt.datetime | None:
    """Parse ``date[T| ]time[offset]``; offsets are applied and dropped (UTC, naive)."""
    match = _TIMESTAMP_RE.fullmatch(text.strip())
    if match is None:
        return None
    offset = match["offset"]
    try:
        date = dt.date(int(match["year"]), int(match["month"]), int(match["day"]))
        stamp = dt.datetime.combine(date, _build_time(match))
        if offset and offset != "Z":
            digits = offset[1:].replace(":", "")
            delta = dt.timedelta(hours=int(digits[:2]), minutes=int(digits[2:] or 0))
            stamp = stamp - delta if offset[0] == "+" else stamp + delta
    except (ValueError, OverflowError):
        # Out-of-range fields, or an offset that moves past datetime.min/max.
        return None
    return stamp


def _is_integer_literal(value: str) -> bool:
    return len(value) <= _MAX_INTEGER_CHARS and _INTEGER.fullmatch(value) is not None


def _build_time(match: re.Match[str]) -> dt.time:
    fraction = (match["fraction"] or "")[:6].ljust(6, "0")
    return dt.time(
        int(match["hour"]),
        int(match["minute"]),
        int(match["second"] or 0),
        int(fraction),
    )


def integer_width(value: int) -> int | None:
    """Return the smallest signed width holding ``value``, or None beyond 64 bits."""
    for width in INTEGER_WIDTHS:
        low, high = _INTEGER_BOUNDS[width]
        if low <= value <= high:
            return width
    return None


# ----------------------------------------------------------------------
# Classifier
# ----------------------------------------------------------------------


def _might_be_temporal(value: str) -> bool:
    return ":" in value or "T" in value or "-" in value[1:]


def classify_scalar(text: str) -> InferredType:
    """Return the narrowest InferredType for a scalar's raw text.

    Total and deterministic: every string maps to exactly one type.
    """
    value = text.strip()
    lowered = value.lower()

    if value in ("", "~") or lowered == "null":
        return NULL

    if lowered in _TRUE_LITERALS or lowered in _FALSE_LITERALS:
        return BOOLEAN

    if _might_be_temporal(value):
        if parse_date(value) is not None:
            return DATE
        if parse_timestamp(value) is not None:
            return TIMESTAMP
        if parse_time(value) is not None:
            return TIME

    if lowered in _SPECIAL_FLOATS:
        return DOUBLE

    if _is_integer_literal(value):
        width = integer_width(int(value))
        if width is not None:
            return InferredType.integer(width)

    if _FLOAT.fullmatch(value):
        number = float(value)
        if (
            math.isfinite(number)
            and number.is_integer()
            and _INT64_MIN <= number <= _INT64_MAX
        ):
            return INTEGER64
        return DOUBLE

    return STRING
