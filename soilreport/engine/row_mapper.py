"""Mapping of BigQuery rows to `UserRecord` objects.

Every conversion here is total: a value that cannot be represented in the
output type becomes null (or an empty string for the required text fields)
instead of failing the request.
"""

import re
from datetime import date, datetime, time, timezone
from typing import Any, Mapping, Optional
from dateutil import parser as dateutil_parser

from soilreport.engine.values import ValueKind, classify_value
from soilreport.models.user import UserRecord

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Optional sign, then ASCII digits (matched after stripping whitespace)
_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")

# Significant digits in a 32-bit integer; longer text is never converted with int()
INT32_DIGITS = len(str(INT32_MAX))

# Two fill-in values that differ in year, month and day (same time of day)
_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def to_nullable_string(value: Any) -> Optional[str]:
    """Convert a column value to text, keeping null as None."""
    column = classify_value(value)
    if column.kind == ValueKind.NULL:
        return None
    if column.kind == ValueKind.TEXT:
        return column.value
    return str(column.value)


def _in_int32_range(number) -> bool:
    return INT32_MIN <= number <= INT32_MAX


def to_nullable_int(value: Any) -> Optional[int]:
    """Convert a column value to a 32-bit integer, or None if it is not one.

    INT64 values and NUMERIC values in range are accepted (NUMERIC is
    truncated toward zero); text is parsed as a signed decimal integer.
    Anything else, including out-of-range numbers, maps to None.
    """
    column = classify_value(value)
    if column.kind == ValueKind.INTEGER:
        return column.value if _in_int32_range(column.value) else None
    if column.kind == ValueKind.DECIMAL:
        number = column.value
        if number.is_finite() and _in_int32_range(number):
            return int(number)
        return None
    if column.kind == ValueKind.TEXT:
        text = column.value.strip()
        if _INTEGER_TEXT.fullmatch(text):
            sign = "-" if text.startswith("-") else ""
            digits = text.lstrip("+-").lstrip("0") or "0"
            if len(digits) > INT32_DIGITS:
                return None
            number = int(sign + digits)
            return number if _in_int32_range(number) else None
        return None
    return None


def _as_utc(moment) -> Optional[datetime]:
    """Convert a date or datetime to an aware UTC datetime (naive means UTC).

    Returns None when the instant falls outside the datetime range in UTC.
    """
    if not isinstance(moment, datetime):
        return datetime.combine(moment, time(), tzinfo=timezone.utc)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    try:
        return moment.astimezone(timezone.utc)
    except OverflowError:
        return None


def format_utc_iso8601(moment) -> Optional[str]:
    """Render a date or datetime as UTC ISO-8601 with 7 fractional digits.

    Example: 2024-01-02T03:04:05.1234560Z

    Returns None if the instant cannot be represented in UTC.
    """
    utc = _as_utc(moment)
    if utc is None:
        return None
    # Python keeps microseconds; the seventh digit is always zero
    return utc.replace(tzinfo=None).isoformat(timespec="microseconds") + "0Z"


def _parse_full_date(text: str) -> Optional[datetime]:
    """Parse free-form timestamp text with dateutil, requiring year, month and day.

    dateutil fills missing fields from its `default`; parsing against two
    defaults that differ in every date field exposes any field taken from them.
    """
    try:
        first = dateutil_parser.parse(text, default=_FILL_DEFAULTS[0])
        second = dateutil_parser.parse(text, default=_FILL_DEFAULTS[1])
    except (ValueError, OverflowError):
        return None
    if first != second:
        return None
    return first


def parse_timestamp_text(text: str) -> Optional[datetime]:
    """Parse a textual timestamp, assuming UTC when no offset is given.

    Returns:
        Aware UTC datetime, or None if the text is not a timestamp
    """
    candidate = text.strip()
    if not candidate:
        return None
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        parsed = _parse_full_date(candidate)
        if parsed is None:
            return None
    return _as_utc(parsed)


def to_iso8601_nullable(value: Any) -> Optional[str]:
    """Convert a column value to a UTC ISO-8601 string, or None."""
    column = classify_value(value)
    if column.kind == ValueKind.NULL:
        return None
    if column.kind == ValueKind.TIMESTAMP:
        return format_utc_iso8601(column.value)
    if column.kind == ValueKind.TEXT:
        parsed = parse_timestamp_text(column.value)
        return format_utc_iso8601(parsed) if parsed is not None else None
    return str(column.value)


def map_row(row: Mapping[str, Any]) -> UserRecord:
    """Map one users-table row to a `UserRecord`.

    Args:
        row: Column name -> raw value; missing columns are treated as null

    Returns:
        Normalized UserRecord
    """
    return UserRecord(
        user_id=to_nullable_string(row.get("user_id")) or "",
        email=to_nullable_string(row.get("email")) or "",
        phone_number=to_nullable_string(row.get("phone_number")),
        full_name=to_nullable_string(row.get("full_name")),
        role=to_nullable_int(row.get("role")),
        created_at=to_iso8601_nullable(row.get("created_at")),
        updated_at=to_iso8601_nullable(row.get("updated_at")),
    )
