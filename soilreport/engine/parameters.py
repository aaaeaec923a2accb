"""Validation of paging query parameters.

Paging values arrive as raw query-string text. They are either accepted as
unsigned decimal integers within a closed range or rejected with a message
that is safe to return to the caller. Out-of-range values are never clamped.
"""

import re
from typing import NamedTuple, Optional

from soilreport.errors import ParameterValidationError
from soilreport.models.constants import (
    DEFAULT_LIMIT,
    MIN_LIMIT,
    MAX_LIMIT,
    DEFAULT_OFFSET,
    MIN_OFFSET,
    MAX_OFFSET,
)

# Largest value a signed 32-bit integer can hold; longer digit runs are not integers here
INT32_MAX = 2**31 - 1
INT32_MAX_DIGITS = len(str(INT32_MAX))

_UNSIGNED_DIGITS = re.compile(r"[0-9]+")


class BoundedIntPolicy(NamedTuple):
    """Default and inclusive range for an integer query parameter."""
    default: int
    minimum: int
    maximum: int


LIMIT_POLICY = BoundedIntPolicy(DEFAULT_LIMIT, MIN_LIMIT, MAX_LIMIT)
OFFSET_POLICY = BoundedIntPolicy(DEFAULT_OFFSET, MIN_OFFSET, MAX_OFFSET)


def parse_bounded_int(raw: Optional[str], default: int, minimum: int, maximum: int) -> int:
    """Parse a raw query parameter into a bounded integer.

    Args:
        raw: Raw parameter text, or None if the parameter was not sent
        default: Value returned when the parameter is absent or blank
        minimum: Smallest accepted value (inclusive)
        maximum: Largest accepted value (inclusive)

    Returns:
        The parsed integer, or `default` for absent/blank input

    Raises:
        ParameterValidationError: If the text is not an unsigned decimal integer,
            or the value lies outside [minimum, maximum]
    """
    if raw is None or not raw.strip():
        return default

    # Only bare ASCII digits: no sign, no whitespace, no separators
    if not _UNSIGNED_DIGITS.fullmatch(raw):
        raise ParameterValidationError(f"Invalid integer value: '{raw}'.")

    # Length is checked before int() so huge digit runs are never converted
    significant = raw.lstrip("0") or "0"
    if len(significant) > INT32_MAX_DIGITS or int(significant) > INT32_MAX:
        raise ParameterValidationError(f"Invalid integer value: '{raw}'.")

    value = int(significant)
    if value < minimum or value > maximum:
        raise ParameterValidationError(f"Value '{raw}' must be between {minimum} and {maximum}.")

    return value


def parse_with_policy(raw: Optional[str], policy: BoundedIntPolicy) -> int:
    """Parse a raw query parameter using a named policy."""
    return parse_bounded_int(raw, policy.default, policy.minimum, policy.maximum)
