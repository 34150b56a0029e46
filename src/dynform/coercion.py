"""
Type coercion rules shared by the engine.

Raw form values arrive untyped: a number field may hold 42, 42.5 or "42",
a checkbox may hold True or "on". These helpers decide what counts as
empty and what counts as a number, following the loose numeric conversion
browsers apply to form input.
"""

import math
import re
from typing import Any, Optional, Union


_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)
_INFINITY_RE = re.compile(r"^[+-]?Infinity$")
_PREFIXED_RE = re.compile(r"^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")


def is_empty(value: Any) -> bool:
    """
    True for None and the empty string only.

    False and 0 are answers, not missing values.
    """
    if isinstance(value, str):
        return value == ""
    return value is None


def to_number(value: Any) -> Optional[float]:
    """
    Coerce a raw value to a number.

    Accepts:
        - bool (True -> 1.0, False -> 0.0)
        - int / float (NaN is rejected, ints beyond float range become
          +/-Infinity)
        - str of ASCII digits in decimal or exponent notation, "Infinity" with optional
          sign, unsigned 0x / 0o / 0b integer literals; surrounding
          whitespace is ignored and a whitespace-only string is 0

    Returns:
        The number as float, or None if the value is not numeric
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0

    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
        return None if math.isnan(number) else number

    if not isinstance(value, str):
        return None

    text = value.strip()
    if text == "":
        return 0.0
    if _DECIMAL_RE.match(text):
        return float(text)
    if _INFINITY_RE.match(text):
        return -math.inf if text.startswith("-") else math.inf
    if _PREFIXED_RE.match(text):
        try:
            return float(int(text, 0))
        except OverflowError:
            # Prefixed literals are unsigned.
            return math.inf
    return None


def format_number(number: Union[int, float]) -> str:
    """Render a bound for messages: 18.0 -> "18", 2.5 -> "2.5"."""
    if isinstance(number, float):
        if math.isinf(number):
            return "-Infinity" if number < 0 else "Infinity"
        if number.is_integer():
            return str(int(number))
    return str(number)
