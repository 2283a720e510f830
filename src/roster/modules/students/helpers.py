"""
Student Shared Helpers

Input coercion used by the request schemas. Form submissions deliver every
value as a string, so amounts, flags and years are parsed here.
"""

import math
from typing import Any

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def is_blank(value: Any) -> bool:
    """Return True for None and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


def parse_amount(value: Any) -> float | None:
    """
    Parse a monetary amount.

    Returns:
        The parsed non-negative finite number, or None when the value is
        absent, not numeric, not finite or negative.
    """
    if is_blank(value) or isinstance(value, bool):
        return None
    try:
        amount = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount < 0:
        return None
    return amount


def parse_amount_or_zero(value: Any) -> float:
    """Parse a monetary amount, falling back to 0 for anything unusable."""
    amount = parse_amount(value)
    return 0.0 if amount is None else amount


def parse_flag(value: Any) -> bool | None:
    """
    Parse a boolean flag from JSON or form input.

    Raises:
        ValueError: If the value is not a recognised boolean spelling
    """
    if is_blank(value):
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"'{value}' is not a valid boolean")


def parse_year(value: Any) -> int | None:
    """
    Parse an academic year.

    Raises:
        ValueError: If the value is present but not an integer
    """
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValueError("year must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("year must be an integer")
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError as e:
        raise ValueError("year must be an integer") from e


def clean_text(value: Any) -> str | None:
    """Strip surrounding whitespace; blank input becomes None."""
    if is_blank(value):
        return None
    return str(value).strip()
