import math

import pytest
from hypothesis import given, strategies as st

from zest.errors import ZestLexError
from zest.reader.lexer import lex, Token


def _pairs(source, **kwargs):
    return [(t.kind, t.value) for t in lex(source, **kwargs)]


def _kinds(source):
    return [t.kind for t in lex(source)]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("", [("end", None)]),
        ("   \n\t ", [("end", None)]),
        ("// only a comment", [("end", None)]),
        ("1 // trailing\n// another\n+ 2", [("number", 1.0), ("plus", None), ("number", 2.0), ("end", None)]),
        ("3.25", [("number", 3.25), ("end", None)]),
        ("007", [("number", 7.0), ("end", None)]),
        ("123abc", [("number", 123.0), ("identifier", "abc"), ("end", None)]),
        ("∞", [("number", math.inf), ("end", None)]),
        ("true false", [("boolean", True), ("boolean", False), ("end", None)]),
        ("let x = 1 in x", [
            ("let", None), ("identifier", "x"), ("equal", None), ("number", 1.0),
            ("in", None), ("identifier", "x"), ("end", None),
        ]),
        ("letter inside", [("identifier", "letter"), ("identifier", "inside"), ("end", None)]),
        ('"plain"', [("string", "plain"), ("end", None)]),
        ('""', [("string", ""), ("end", None)]),
    ]
)
def test_lexer_basic(source, expected):
    assert _pairs(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("( ) { } + -", ["lparen", "rparen", "lbrace", "rbrace", "plus", "minus"]),
        ("* ** * *", ["star", "starstar", "star", "star"]),
        ("/ < <= > >=", ["slash", "lt", "le", "gt", "ge"]),
        ("= ! != | '", ["equal", "bang", "ne", "bar", "quote"]),
        ("***", ["starstar", "star"]),
        ("1<=2", ["number", "le", "number"]),
    ]
)
def test_lexer_punctuation(source, expected):
    assert _kinds(source) == expected + ["end"]


@pytest.mark.parametrize(
    "source,expected",
    [
        (r'"\"foo\""', '"foo"'),
        (r'"a\nb"', "anb"),
        (r'"back\\slash"', "back\\slash"),
        (r'"not \${interpolated}"', "not ${interpolated}"),
        ('"$ alone"', "$ alone"),
    ]
)
def test_string_escapes(source, expected):
    assert _pairs(source) == [("string", expected), ("end", None)]


def test_interpolation_is_desugared_to_star_and_quote():
    assert _pairs('"a${x}b"') == [
        ("string", "a"), ("star", None), ("quote", None),
        ("identifier", "x"),
        ("star", None), ("string", "b"),
        ("end", None),
    ]


def test_interpolation_with_several_segments():
    assert _kinds('"${1}, ${2}"') == [
        "string", "star", "quote", "number",
        "star", "string", "star", "quote", "number",
        "star", "string",
        "end",
    ]


def test_nested_interpolation():
    assert _pairs('"a${"b${1}c"}d"') == [
        ("string", "a"), ("star", None), ("quote", None),
        ("string", "b"), ("star", None), ("quote", None),
        ("number", 1.0),
        ("star", None), ("string", "c"),
        ("star", None), ("string", "d"),
        ("end", None),
    ]


def test_close_brace_outside_interpolation_is_a_plain_token():
    assert _kinds('"${1}" }') == ["string", "star", "quote", "number", "star", "string", "rbrace", "end"]


def test_barewords_quote_themselves():
    assert _pairs("hello + true", barewords=True) == [
        ("quote", None), ("string", "hello"), ("plus", None), ("boolean", True), ("end", None),
    ]


def test_tokens_carry_line_numbers():
    tokens = list(lex('1\n+\n// note\n"two\nlines"'))
    assert [t.line for t in tokens] == [1, 2, 4, 5]


def test_lexing_is_lazy():
    tokens = lex("1 + #")
    assert next(tokens) == Token("number", 1.0, 1)
    assert next(tokens).kind == "plus"
    with pytest.raises(ZestLexError):
        next(tokens)


@pytest.mark.parametrize(
    "source,message",
    [
        ('"foo', "unfinished string"),
        ('"foo\\', "unfinished string"),
        ('"a${1}b', "unfinished string"),
        ("1 # 2", "unexpected character '#'"),
        ("1.", "unexpected character '.'"),
        ("@", "unexpected character '@'"),
    ]
)
def test_lexer_errors(source, message):
    with pytest.raises(ZestLexError) as excinfo:
        list(lex(source))
    assert message in str(excinfo.value)


def test_lex_error_reports_line():
    with pytest.raises(ZestLexError) as excinfo:
        list(lex("1 +\n2 +\n  ?"))
    assert excinfo.value.line == 3
    assert str(excinfo.value).startswith("line 3:")


# -------------------------------
# Hypothesis tests
# -------------------------------
@given(st.text(max_size=40))
def test_lexer_only_raises_lex_errors(source):
    try:
        tokens = list(lex(source))
    except ZestLexError:
        return
    assert tokens[-1].kind == "end"
    assert all(t.kind != "end" for t in tokens[:-1])


@given(st.integers(min_value=0, max_value=10**9))
def test_integers_lex_as_floats(n):
    assert _pairs(str(n)) == [("number", float(n)), ("end", None)]
