"""Typed operator implementations for the Zest evaluator.

Each entry is a dispatcher built with `unary` / `binary`: it accepts only the
operand kinds listed for it and raises ZestTypeError for anything else.
"""
from __future__ import annotations

import operator

from zest.types.values import (
    BOOLEAN, NUMBER, STRING,
    unary, binary, strict_equal, to_text, repeat, divide, power,
)


negate = unary("negation", (NUMBER, operator.neg))

logical_not = unary("logical not", (BOOLEAN, operator.not_))

# Quoting accepts every kind.
quote = to_text


def _length(x: str) -> float:
    return float(len(x))


bars = unary(
    "absolute value or length",
    (NUMBER, abs),
    (STRING, _length),
)


BINARY_OPERATORS = {
    "plus": binary(
        ("addition", NUMBER, NUMBER, operator.add),
    ),
    "minus": binary(
        ("subtraction", NUMBER, NUMBER, operator.sub),
    ),
    "star": binary(
        ("multiplication", NUMBER, NUMBER, operator.mul),
        ("concatenation", STRING, STRING, operator.add),
    ),
    "slash": binary(
        ("division", NUMBER, NUMBER, divide),
    ),
    "starstar": binary(
        ("exponentiation", NUMBER, NUMBER, power),
        ("repetition", STRING, NUMBER, repeat),
    ),
    "lt": binary(
        ("comparison (less than)", NUMBER, NUMBER, operator.lt),
    ),
    "le": binary(
        ("comparison (less or equal)", NUMBER, NUMBER, operator.le),
    ),
    "gt": binary(
        ("comparison (greater than)", NUMBER, NUMBER, operator.gt),
    ),
    "ge": binary(
        ("comparison (greater or equal)", NUMBER, NUMBER, operator.ge),
    ),
    "equal": strict_equal,
    "ne": lambda x, y: not strict_equal(x, y),
}
