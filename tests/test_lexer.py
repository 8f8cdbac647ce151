"""
Tests for splitting formula text into lexemes.
"""
import pytest

from core import TokenType, lex, register_function, tokenize


@pytest.mark.parametrize("formula,expected", [
    ("2+3*4", ['2', '+', '3', '*', '4']),
    ("  2 +   3 ", ['2', '+', '3']),
    ("a*x^3 - 2", ['a', '*', 'x', '^', '3', '-', '2']),
    ("sin(x)", ['sin', '(', 'x', ')']),
    ("pow(2, 3)", ['pow', '(', '2', ',', '3', ')']),
    ("-(2+2)", ['-', '(', '2', '+', '2', ')']),
    ("((x))", ['(', '(', 'x', ')', ')']),
    ("3i*x", ['3i', '*', 'x']),
    ("x1+y_2", ['x1', '+', 'y_2']),
])
def test_tokenize(formula, expected):
    assert tokenize(formula) == expected


def test_whitespace_only():
    assert tokenize("") == []
    assert tokenize(" \t\n ") == []


def test_whitespace_separates_identifiers():
    # no implicit multiplication: two variables stay two lexemes
    assert tokenize("a b") == ['a', 'b']


def test_signed_exponent_stays_in_literal():
    assert tokenize("2.5e-3*x") == ['2.5e-3', '*', 'x']
    assert tokenize("1E+2") == ['1E+2']


def test_minus_after_identifier_splits():
    assert tokenize("x-2") == ['x', '-', '2']
    assert tokenize("xe-2") == ['xe', '-', '2']


def test_trailing_run_is_flushed():
    assert tokenize("x+long_name") == ['x', '+', 'long_name']


def test_registered_separator_splits(symbols):
    symbols.register(';', TokenType.COMMA)
    assert tokenize("pow(2;3)", symbols) == ['pow', '(', '2', ';', '3', ')']


def test_lex_classifies(symbols):
    register_function('twice', 1, lambda v: 2 * v, symbols)
    tokens = lex("twice(x) + pi", symbols)
    assert [t.type for t in tokens] == [
        TokenType.FUNC1, TokenType.LPAREN, TokenType.VARIABLE, TokenType.RPAREN,
        TokenType.OPERATOR, TokenType.CONSTANT,
    ]
