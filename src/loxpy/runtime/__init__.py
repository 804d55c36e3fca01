"""
Lox runtime support: literal values and the coercion rules that apply to them.
"""

from loxpy.runtime.values import (
    LiteralValue,
    divide,
    is_equal,
    is_number,
    is_string,
    is_truthy,
    stringify,
)

__all__ = [
    "LiteralValue",
    "divide",
    "is_equal",
    "is_number",
    "is_string",
    "is_truthy",
    "stringify",
]
