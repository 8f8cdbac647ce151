"""core/lexer.py"""
import logging
import re

from core.token_system import GLOBAL_SYMBOLS, classify

logger = logging.getLogger(__name__)

# "2.5e" waiting for the sign of its exponent
_PENDING_EXPONENT = re.compile(r'^\d+(\.\d+)?[eE]$')


def tokenize(formula, symbols=None):
    """
    Split formula text into raw lexemes.

    Whitespace always separates and is dropped.  Inside a run of other
    characters the current lexeme grows while it still spells a known
    operator/paren/comma symbol (maximal munch); it is flushed when the
    next character starts such a symbol or the lexeme itself is one.
    """
    table = GLOBAL_SYMBOLS if symbols is None else symbols
    lexemes = []
    current = ''

    for c in formula:
        if c.isspace():
            if current:
                lexemes.append(current)
                current = ''
            continue

        if not current:
            current = c
            continue

        if table.is_punctuation(current + c):
            current += c
            continue

        if c in '+-' and _PENDING_EXPONENT.match(current):
            current += c
            continue

        if table.is_punctuation(current) or table.is_punctuation(c):
            lexemes.append(current)
            current = c
            continue

        current += c

    if current:
        lexemes.append(current)

    logger.debug(f"Lexemes for {formula[:50]!r}: {lexemes}")
    return lexemes


def lex(formula, symbols=None):
    """Split and classify formula text"""
    return [classify(lexeme, symbols) for lexeme in tokenize(formula, symbols)]
