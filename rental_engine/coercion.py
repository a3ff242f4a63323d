"""
Lenient Coercion Helpers

Proposal records arrive with stringly-typed numbers, boolean-like strings and
double-encoded JSON. This module is the only place where malformed values are
silently coerced to defaults; everything downstream works with Decimal, bool
and plain lists.
"""

import json
import logging
import math
import re
from decimal import Decimal, InvalidOperation

logger = logging.getLogger(__name__)

ZERO = Decimal('0')

# Largest decimal exponent, either way, that still reads as an amount
MAX_MAGNITUDE = 15

# Longest leading number, the way upstream parses "12.5 days" as 12.5
_NUMBER_PREFIX = re.compile(r'^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def _bounded(number: Decimal) -> Decimal:
    if not number.is_finite() or abs(number.adjusted()) > MAX_MAGNITUDE:
        return ZERO
    return number


def parse_lenient_number(value) -> Decimal:
    """
    Coerce a numeric-like value to Decimal.

    Strings use their leading numeric portion ("12abc" -> 12). Anything that
    yields no finite number (None, booleans, "abc", NaN) becomes 0, and so
    does any magnitude beyond 10^15 or below 10^-15 ("1e999999").
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        return _bounded(value)

    if isinstance(value, int):
        return _bounded(Decimal(value))

    if isinstance(value, float):
        if not math.isfinite(value):
            return ZERO
        return _bounded(Decimal(str(value)))

    if isinstance(value, str):
        match = _NUMBER_PREFIX.match(value)
        if not match:
            return ZERO
        try:
            number = Decimal(match.group(0).strip())
        except InvalidOperation:
            return ZERO
        return _bounded(number)

    return ZERO


def parse_flag(value) -> bool:
    """Only True or the string "true" count as set."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == 'true'
    return False


def decode_json_list(value, field_name: str) -> list:
    """
    Decode a list that may arrive double-encoded as a JSON string.

    Blank values are an empty list. A decode failure (including nesting too
    deep to decode) or a non-list payload is logged and treated as an empty
    list.
    """
    if value is None:
        return []

    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            value = json.loads(value)
        except (ValueError, RecursionError) as e:
            logger.warning(f"Could not decode {field_name}: {str(e)}")
            return []

    if not isinstance(value, list):
        logger.warning(f"Ignoring {field_name}: expected a list, got {type(value).__name__}")
        return []

    return value
