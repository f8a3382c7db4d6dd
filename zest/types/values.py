"""Runtime value model for Zest.

Values are plain Python objects of three kinds: boolean (`bool`), number
(`float`) and string (`str`). Operators never coerce between kinds; instead
they are built from `unary` and `binary`, which pick an implementation by the
runtime kinds of their operands and raise ZestTypeError when nothing matches.
"""

from __future__ import annotations

import decimal
import math
from typing import Callable

from zest import ZestValue
from zest.errors import ZestTypeError

BOOLEAN = "boolean"
NUMBER = "number"
STRING = "string"

MAX_STRING_LENGTH = 1 << 28


def kind_of(value) -> str:
    """Return the kind name of a runtime value."""
    # bool first: it is an int subclass
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, (int, float)):
        return NUMBER
    if isinstance(value, str):
        return STRING
    raise ZestTypeError(f"{value!r} is not a Zest value ({type(value).__name__})")


def to_value(value) -> ZestValue:
    """Check a host value and normalize it to a runtime value (ints widen to floats)."""
    kind = kind_of(value)
    if kind == NUMBER:
        return float(value)
    return value


def to_text(value: ZestValue) -> str:
    """Canonical text form of a value, as produced by the quote operator."""
    kind = kind_of(value)
    if kind == BOOLEAN:
        return "true" if value else "false"
    if kind == STRING:
        return value
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return _number_text(float(value))


def _number_text(value: float) -> str:
    """Shortest round-trip digits: plain decimal for 1e-6 <= |value| < 1e21, otherwise d.ddde+N."""
    if value == 0:
        return "0"
    sign, digits, exponent = decimal.Decimal(repr(value)).as_tuple()
    point = exponent + len(digits)  # decimal point position relative to the first digit
    text = "".join(map(str, digits)).rstrip("0")
    prefix = "-" if sign else ""
    if len(text) <= point <= 21:
        return prefix + text + "0" * (point - len(text))
    if 0 < point <= 21:
        return prefix + text[:point] + "." + text[point:]
    if -6 < point <= 0:
        return prefix + "0." + "0" * -point + text
    mantissa = text[0] + ("." + text[1:] if len(text) > 1 else "")
    return f"{prefix}{mantissa}e{point - 1:+d}"


def describe(value: ZestValue) -> str:
    """Short `kind value` rendering used in error messages."""
    kind = kind_of(value)
    if kind == STRING:
        return f"{kind} {value!r}"
    return f"{kind} {to_text(value)}"


def unary(name: str, *cases: tuple[str, Callable]) -> Callable[[ZestValue], ZestValue]:
    """Build a one-operand operator from (kind, fn) pairs."""
    def apply(x: ZestValue) -> ZestValue:
        kind = kind_of(x)
        for kx, fn in cases:
            if kind == kx:
                return fn(x)
        expected = " or ".join(kx for kx, _ in cases)
        raise ZestTypeError(f"wrong operand for {name} (expected {expected}, got {describe(x)})")

    apply.__name__ = name
    return apply


def binary(*cases: tuple[str, str, str, Callable]) -> Callable[[ZestValue, ZestValue], ZestValue]:
    """Build a two-operand operator from (description, kind_x, kind_y, fn) rows."""
    def apply(x: ZestValue, y: ZestValue) -> ZestValue:
        kx, ky = kind_of(x), kind_of(y)
        for _, tx, ty, fn in cases:
            if kx == tx and ky == ty:
                return fn(x, y)
        expected = " or ".join(f"{op} ({tx}/{ty})" for op, tx, ty, _ in cases)
        raise ZestTypeError(
            f"wrong operands for {expected}: got {describe(x)} and {describe(y)}"
        )

    apply.__name__ = cases[0][0] if cases else "binary"
    return apply


def strict_equal(x: ZestValue, y: ZestValue) -> bool:
    """Same kind and same value; values of different kinds are never equal."""
    return kind_of(x) == kind_of(y) and x == y


def repeat(text: str, n: float) -> str:
    """Repeat `text` round(max(0, n)) times, rounding halves up."""
    if not text or math.isnan(n) or n < 0.5:
        return ""
    if math.isinf(n) or len(text) * n > MAX_STRING_LENGTH:
        raise ZestTypeError(f"repeating {text!r} {to_text(n)} times exceeds the maximum string length")
    return text * int(math.floor(n + 0.5))


def divide(x: float, y: float) -> float:
    if y == 0:
        if x == 0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


def _is_odd_integer(y: float) -> bool:
    return math.isfinite(y) and y.is_integer() and int(y) % 2 == 1


def power(x: float, y: float) -> float:
    if math.isinf(y) and abs(x) == 1:
        return math.nan
    if x == 0 and y < 0:
        sign = math.copysign(1.0, x) if _is_odd_integer(y) else 1.0
        return sign * math.inf
    try:
        return math.pow(x, y)
    except OverflowError:
        sign = -1.0 if x < 0 and _is_odd_integer(y) else 1.0
        return sign * math.inf
    except ValueError:
        # negative base with a fractional exponent
        return math.nan
