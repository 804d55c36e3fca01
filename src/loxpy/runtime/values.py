"""
Runtime literal values.

Lox values at this stage are the literals the scanner can produce plus the
results of evaluating them: strings, numbers (Python floats), booleans and
nil (None).
"""

import math
from typing import Union

LiteralValue = Union[str, float, bool, None]


def is_number(value: object) -> bool:
    """Check for a Lox number. bool is an int subclass and is excluded."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_string(value: object) -> bool:
    return isinstance(value, str)


def is_truthy(value: LiteralValue) -> bool:
    """
    Coerce a value to a boolean.

    nil is false, booleans are taken as-is and the number 0 is false.
    Every other value is true, including the empty string and NaN.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if is_number(value) and value == 0:
        return False
    return True


def is_equal(a: LiteralValue, b: LiteralValue) -> bool:
    """Structural equality; values of different types are never equal."""
    if a is None and b is None:
        return True
    if is_number(a) and is_number(b):
        return a == b
    return type(a) is type(b) and a == b


def divide(left: float, right: float) -> float:
    """IEEE-754 division: a zero divisor gives an infinity or NaN."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        sign = math.copysign(1.0, left) * math.copysign(1.0, right)
        return math.copysign(math.inf, sign)
    return left / right


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if float(value).is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(float(value))


def stringify(value: LiteralValue) -> str:
    """
    Render a value for display.

    Examples:
        None -> "nil", True -> "true", 6.0 -> "6", 2.5 -> "2.5", "ab" -> "ab"
    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return _format_number(value)
    return str(value)
