"""
Text utilities for matching and printing mercuriale values.

JSON scalars are printed the way a browser prints them, so that a code
loaded as 12 or 12.0 and a code typed as "12" compare equal, and a price of
1e-7 exports as "1e-7".
"""

import math
from typing import Any, Optional


def format_number(value: float) -> str:
    """
    Format a float with the browser's number-to-string rules.

    - 12.0 → "12"
    - 0.000001 → "0.000001"
    - 1e-07 → "1e-7"
    - 1e+21 → "1e+21"
    - nan / inf → "NaN" / "Infinity"
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    mantissa, _, exponent = repr(abs(value)).partition("e")
    whole, _, fraction = mantissa.partition(".")

    # value == 0.digits * 10 ** point
    digits = whole + fraction
    point = len(whole) + int(exponent or 0)
    stripped = digits.lstrip("0")
    point -= len(digits) - len(stripped)
    digits = stripped.rstrip("0")
    k = len(digits)

    if k <= point <= 21:
        text = digits + "0" * (point - k)
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        e = point - 1
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + text


def stringify_value(value: Any) -> str:
    """
    Convert a record value to its display string.

    - None → ""
    - True/False → "true"/"false"
    - 12.0 → "12"
    - 1.5 → "1.5"
    - "Pain" → "Pain"

    Args:
        value: Scalar loaded from a mercuriale

    Returns:
        Display string, never None
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def normalize_query(query: Optional[str]) -> str:
    """Trim and lower-case a search query."""
    if not query:
        return ""
    return query.strip().lower()
