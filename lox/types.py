"""Runtime values and value helpers for Lox.

A Lox value is one of four things:

* a number, always a Python `float` (double precision);
* a string, a Python `str`;
* a boolean, a Python `bool`;
* nil, the `NIL` singleton defined here.

Python's `None` is never used as a Lox value. Keeping nil as its own type
gives it a defined equality (nil equals only nil) and a defined printed
form (`nil`).

Because `bool` is a subclass of `int` in Python and `True == 1.0` holds,
all comparisons between values go through `is_equal`, which refuses to
coerce between types.
"""

from __future__ import annotations

import math
from typing import Any, Union


class NilType:
    """Type of the Lox `nil` value. Only one instance ever exists."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'nil'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, NilType)

    def __hash__(self) -> int:
        return hash(NilType)

    def __reduce__(self):
        return (NilType, ())


NIL = NilType()

Value = Union[float, str, bool, NilType]


def is_number(value: Any) -> bool:
    return isinstance(value, float)


def is_truthy(value: Any) -> bool:
    """Only `false` is falsy. Zero, the empty string and nil are all truthy."""
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: Any, b: Any) -> bool:
    """Structural equality without coercion between types."""
    if type(a) is not type(b):
        return False
    if isinstance(a, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b


def divide(a: float, b: float) -> float:
    """IEEE 754 division. Python raises on a zero divisor; Lox does not."""
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def format_number(value: float) -> str:
    """Render a number the way Lox prints it.

    Integral values drop the trailing `.0`, other values use Python's
    shortest round-trip representation.
    """
    if math.isnan(value):
        return 'nan'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    text = repr(value)
    if text.endswith('.0'):
        return text[:-2]
    return text


def stringify(value: Any) -> str:
    """Convert a Lox value to its canonical text representation."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, NilType):
        return 'nil'
    return str(value)


def type_name(value: Any) -> str:
    """Return the Lox type name of a runtime value."""
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, NilType):
        return 'nil'
    return type(value).__name__
