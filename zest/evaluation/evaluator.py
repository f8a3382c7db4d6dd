"""Pratt (top-down operator precedence) parser and evaluator for Zest.

Parsing and evaluation are fused: every null denotation (nud) and left
denotation (led) computes its value as soon as it has consumed its tokens, so
no syntax tree is ever built. Both tables are keyed by token kind; PRECEDENCE
decides how far a led may pull in the expression to its right.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from zest import ZestValue
from zest.errors import ZestRecursionError, ZestSyntaxError, ZestTypeError
from zest.reader.lexer import Token
from zest.types.environment import Environment
from zest.evaluation.operators import BINARY_OPERATORS, negate, logical_not, bars, quote

logger = logging.getLogger(__name__)

# Higher binds tighter. `unary` is a pseudo-level that is never a token kind, so
# the led loop cannot pick it up.
PRECEDENCE: dict[str, int] = {
    "equal": 2, "ne": 2,
    "lt": 3, "le": 3, "gt": 3, "ge": 3,
    "plus": 4, "minus": 4,
    "star": 5, "slash": 5,
    "starstar": 6,
    "unary": 7,
}

# Operand level of unary minus: only ** binds tighter, so -2 ** 2 is -(2 ** 2).
NEGATION = PRECEDENCE["star"]

RIGHT_ASSOCIATIVE = frozenset({"starstar"})

Nud = Callable[["Parser", Token, Environment], ZestValue]
Led = Callable[["Parser", ZestValue, Token, Environment], ZestValue]


class Parser:
    """Single forward pass over a token stream with one token of lookahead."""

    def __init__(self, tokens: Iterable[Token], max_depth: int = 300):
        self.tokens = iter(tokens)
        self.previous: Optional[Token] = None
        self.current: Optional[Token] = None
        self.max_depth = max_depth
        self._depth = 0

    def advance(self, expected: Optional[str] = None) -> Token:
        """Shift current -> previous and pull the next token.

        With `expected`, the token being consumed must be of that kind,
        otherwise ZestSyntaxError names both kinds.
        """
        if expected is not None and (self.current is None or self.current.kind != expected):
            got = self.current.kind if self.current is not None else "nothing"
            raise ZestSyntaxError(f"expected {expected}, got {got}", self._line())
        self.previous = self.current
        # `end` is the last token; stay on it rather than exhausting the lexer
        if self.current is None or self.current.kind != "end":
            self.current = next(self.tokens)
        return self.previous

    def expression(self, env: Environment, precedence: int = 0) -> ZestValue:
        """Parse and evaluate the longest expression whose operators bind tighter than `precedence`."""
        if self._depth >= self.max_depth:
            raise ZestRecursionError("expression nested too deeply", self._line())
        self._depth += 1
        try:
            nud = NUDS.get(self.current.kind)
            if nud is None:
                raise ZestSyntaxError(self._unexpected("an expression"), self._line())
            self.advance()
            value = nud(self, self.previous, env)

            while PRECEDENCE.get(self.current.kind, -1) > precedence:
                self.advance()
                led = LEDS.get(self.previous.kind)
                if led is None:
                    raise ZestSyntaxError(
                        f"{self.previous.kind} cannot follow an expression", self.previous.line
                    )
                value = led(self, value, self.previous, env)
            return value
        finally:
            self._depth -= 1

    def parse(self, env: Environment) -> ZestValue:
        """Evaluate the whole stream as one expression; trailing tokens are an error."""
        self.advance()
        try:
            value = self.expression(env)
        except ZestRecursionError:
            raise
        except RecursionError:
            # the interpreter stack ran out before max_depth was reached
            raise ZestRecursionError("expression nested too deeply", self._line()) from None
        if self.current.kind != "end":
            raise ZestSyntaxError(self._unexpected("end of input"), self._line())
        self.advance("end")
        logger.debug("result %r", value)
        return value

    def _line(self) -> Optional[int]:
        return self.current.line if self.current is not None else None

    def _unexpected(self, wanted: str) -> str:
        if self.current.kind == "end":
            return f"expected {wanted}, got end of input"
        return f"expected {wanted}, got {self.current}"


def _at(token: Token, fn: Callable, *args) -> ZestValue:
    """Apply an operator, tagging type errors with the operator's line."""
    try:
        return fn(*args)
    except ZestTypeError as e:
        if e.line is not None:
            raise
        raise ZestTypeError(e.message, token.line) from None


# -------------------------
# Null denotations
# -------------------------

def nud_literal(parser: Parser, token: Token, env: Environment) -> ZestValue:
    return token.value


def nud_identifier(parser: Parser, token: Token, env: Environment) -> ZestValue:
    return env.lookup(token.value, token.line)


def nud_minus(parser: Parser, token: Token, env: Environment) -> ZestValue:
    return _at(token, negate, parser.expression(env, NEGATION))


def nud_bang(parser: Parser, token: Token, env: Environment) -> ZestValue:
    return _at(token, logical_not, parser.expression(env, PRECEDENCE["unary"]))


def nud_quote(parser: Parser, token: Token, env: Environment) -> ZestValue:
    return quote(parser.expression(env, PRECEDENCE["unary"]))


def nud_bar(parser: Parser, token: Token, env: Environment) -> ZestValue:
    """|x| is the absolute value of a number or the length of a string."""
    value = parser.expression(env)
    parser.advance("bar")
    return _at(token, bars, value)


def nud_group(parser: Parser, token: Token, env: Environment) -> ZestValue:
    value = parser.expression(env)
    parser.advance("rparen")
    return value


def nud_let(parser: Parser, token: Token, env: Environment) -> ZestValue:
    """let name = value in body

    The bound value is evaluated in the enclosing scope, so a name cannot refer
    to itself; the new binding is visible in the body only.
    """
    name = parser.advance("identifier").value
    parser.advance("equal")
    value = parser.expression(env)
    parser.advance("in")
    return parser.expression(env.extend(name, value))


NUDS: dict[str, Nud] = {
    "number": nud_literal,
    "string": nud_literal,
    "boolean": nud_literal,
    "identifier": nud_identifier,
    "minus": nud_minus,
    "bang": nud_bang,
    "quote": nud_quote,
    "bar": nud_bar,
    "lparen": nud_group,
    "let": nud_let,
}


# -------------------------
# Left denotations
# -------------------------

def led_binary(parser: Parser, left: ZestValue, token: Token, env: Environment) -> ZestValue:
    precedence = PRECEDENCE[token.kind]
    if token.kind in RIGHT_ASSOCIATIVE:
        precedence -= 1
    right = parser.expression(env, precedence)
    return _at(token, BINARY_OPERATORS[token.kind], left, right)


LEDS: dict[str, Led] = {kind: led_binary for kind in BINARY_OPERATORS}
