"""
  Zest Lexer

- Streaming, lazy tokenizer: `lex` is a generator, tokens are pulled one at a time
- Emits `Token(kind, value, line)` named tuples:

    - punctuation    -> ("plus", None), ("starstar", None), ...
    - numbers        -> ("number", float)
    - ∞              -> ("number", inf)
    - true / false   -> ("boolean", bool)
    - let / in       -> ("let", None), ("in", None)
    - identifiers    -> ("identifier", name)
    - strings        -> ("string", str)
    - end of input   -> ("end", None), always the last token

String interpolation is desugared here rather than in the parser:

    "a${x}b"  ->  "a" * 'x * "b"

The lexer emits the implicit `star` (string concatenation) and `quote` (convert
to text) tokens itself, and counts open `${` segments so that a `}` can be told
apart from an ordinary closing brace.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterator, NamedTuple, Optional

from zest.errors import ZestLexError

logger = logging.getLogger(__name__)


class Token(NamedTuple):
    kind: str
    value: Any = None
    line: int = 1

    def __str__(self):
        if self.value is None:
            return self.kind
        return f"{self.kind} {self.value!r}"


PUNCTUATION: dict[str, str] = {
    "(": "lparen",
    ")": "rparen",
    "{": "lbrace",
    "+": "plus",
    "-": "minus",
    "*": "star",
    "/": "slash",
    "<": "lt",
    ">": "gt",
    "=": "equal",
    "!": "bang",
    "|": "bar",
    "'": "quote",
}

# Two-character operators, keyed by their first character.
DOUBLED: dict[str, tuple[str, str]] = {
    "*": ("*", "starstar"),
    "<": ("=", "le"),
    ">": ("=", "ge"),
    "!": ("=", "ne"),
}

KEYWORDS: dict[str, Token] = {
    "true": Token("boolean", True),
    "false": Token("boolean", False),
    "let": Token("let"),
    "in": Token("in"),
}

INFINITY = "∞"

SKIP_RE = re.compile(r"(?:\s+|//[^\n]*)*")
NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?")
WORD_RE = re.compile(r"\w+")


def lex(source: str, barewords: bool = False) -> Iterator[Token]:
    """Token generator: yields Token tuples, ending with an `end` token."""
    pos = 0
    n = len(source)
    line = 1
    nesting = 0  # open ${ segments

    def token(kind: str, value: Any = None, at: Optional[int] = None) -> Token:
        tok = Token(kind, value, line if at is None else at)
        logger.debug("token %s", tok)
        return tok

    def skip_whitespace_and_comments():
        nonlocal pos, line
        m = SKIP_RE.match(source, pos)
        line += source.count("\n", pos, m.end())
        pos = m.end()

    def scan_segment() -> tuple[str, bool]:
        """Read string text up to `"` or `${`; return (text, opens_interpolation)."""
        nonlocal pos, line
        start_line = line
        chars: list[str] = []
        while pos < n:
            c = source[pos]
            if c == "\\":
                if pos + 1 >= n:
                    break
                chars.append(source[pos + 1])
                pos += 2
                continue
            if c == '"':
                pos += 1
                return "".join(chars), False
            if c == "$" and source.startswith("{", pos + 1):
                pos += 2
                return "".join(chars), True
            if c == "\n":
                line += 1
            chars.append(c)
            pos += 1
        raise ZestLexError("unfinished string", start_line)

    while True:
        skip_whitespace_and_comments()
        if pos >= n:
            break

        c = source[pos]

        # ----------------------
        # Interpolation: continue the enclosing string after }
        # ----------------------
        if c == "}" and nesting > 0:
            pos += 1
            yield token("star")
            start = line
            text, opens = scan_segment()
            yield token("string", text, start)
            if opens:
                yield token("star")
                yield token("quote")
            else:
                nesting -= 1
            continue

        if c == "}":
            pos += 1
            yield token("rbrace")
            continue

        # ----------------------
        # Punctuation, one or two characters
        # ----------------------
        if c in PUNCTUATION:
            pos += 1
            if c in DOUBLED and source.startswith(DOUBLED[c][0], pos):
                pos += 1
                yield token(DOUBLED[c][1])
            else:
                yield token(PUNCTUATION[c])
            continue

        if c == INFINITY:
            pos += 1
            yield token("number", float("inf"))
            continue

        # ----------------------
        # Strings, possibly opening an interpolation
        # ----------------------
        if c == '"':
            pos += 1
            start = line
            text, opens = scan_segment()
            yield token("string", text, start)
            if opens:
                nesting += 1
                yield token("star")
                yield token("quote")
            continue

        m = NUMBER_RE.match(source, pos)
        if m:
            pos = m.end()
            yield token("number", float(m.group()))
            continue

        m = WORD_RE.match(source, pos)
        if m:
            pos = m.end()
            word = m.group()
            if word in KEYWORDS:
                keyword = KEYWORDS[word]
                yield token(keyword.kind, keyword.value)
            elif barewords:
                # bare words quote themselves
                yield token("quote")
                yield token("string", word)
            else:
                yield token("identifier", word)
            continue

        raise ZestLexError(f"unexpected character {c!r}", line)

    yield token("end")
