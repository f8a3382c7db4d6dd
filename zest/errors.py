from __future__ import annotations

from typing import Optional


class ZestError(Exception):
    """ Base class for all Zest errors"""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message if line is None else f"line {line}: {message}")
        self.message = message
        self.line = line


class ZestSyntaxError(ZestError, SyntaxError):
    """ Raised when the token stream does not form a valid expression"""


class ZestLexError(ZestSyntaxError):
    """ Raised when the source cannot be split into tokens"""


class ZestTypeError(ZestError, TypeError):
    """ Raised when an operator is applied to operands of the wrong kind"""


class ZestNameError(ZestError, NameError):
    """ Raised when an identifier is not bound in any enclosing scope"""


class ZestRecursionError(ZestError, RecursionError):
    """ Raised when expressions nest deeper than the configured limit"""
