"""Classification of BigQuery column values.

The BigQuery client hands back plain Python objects whose type depends on the
column's SQL type (STRING -> str, INT64 -> int, NUMERIC -> Decimal,
TIMESTAMP -> aware datetime, ...). Mapping code switches on a `ValueKind`
instead of probing types ad hoc.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, NamedTuple


class ValueKind(str, Enum):
    """Kinds of column value the row mapper distinguishes."""
    NULL = "null"
    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"
    TIMESTAMP = "timestamp"
    OTHER = "other"  # BOOL, FLOAT64, BYTES, arrays, records...


class ColumnValue(NamedTuple):
    """A raw column value tagged with its kind."""
    kind: ValueKind
    value: Any


def classify_value(value: Any) -> ColumnValue:
    """Tag a raw column value with its `ValueKind`."""
    if value is None:
        return ColumnValue(ValueKind.NULL, None)
    if isinstance(value, str):
        return ColumnValue(ValueKind.TEXT, value)
    # bool must be checked before int (bool is an int subclass)
    if isinstance(value, bool):
        return ColumnValue(ValueKind.OTHER, value)
    if isinstance(value, int):
        return ColumnValue(ValueKind.INTEGER, value)
    if isinstance(value, Decimal):
        return ColumnValue(ValueKind.DECIMAL, value)
    # datetime is a date subclass; both count as timestamps
    if isinstance(value, (datetime, date)):
        return ColumnValue(ValueKind.TIMESTAMP, value)
    return ColumnValue(ValueKind.OTHER, value)
