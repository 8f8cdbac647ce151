"""core/shunting_yard.py - infix Token stream to postfix (RPN)"""
import logging
from typing import List, NamedTuple, Optional

from core.errors import FormulaSyntaxError
from core.lexer import lex
from core.token_system import (
    GLOBAL_SYMBOLS, LEFT_ASSOCIATIVE, PRECEDENCE, Token, TokenType, classify
)

logger = logging.getLogger(__name__)


class PostfixResult(NamedTuple):
    """Either a postfix sequence (possibly empty) or the reason conversion failed"""
    postfix: List[Token]
    error: Optional[FormulaSyntaxError] = None

    @property
    def ok(self):
        return self.error is None

    def unwrap(self):
        if self.error is not None:
            raise self.error
        return self.postfix


def _has_lparen(stack):
    return any(token.type is TokenType.LPAREN for token in stack)


def _close_paren(output, stack):
    """Pop back to the matching '('; a function right below it is closed too"""
    if not _has_lparen(stack):
        return False

    while True:
        popped = stack.pop()
        if popped.type is TokenType.LPAREN:
            break
        output.append(popped)

    if stack and stack[-1].is_function:
        output.append(stack.pop())
    return True


def _close_argument(output, stack):
    """Flush the current argument of a function call"""
    if not _has_lparen(stack):
        return False

    while stack[-1].type is not TokenType.LPAREN:
        output.append(stack.pop())
    return True


def _push_operator(output, stack, token, starts_operand, table):
    """Unary rewrite, then ordinary precedence handling"""
    if starts_operand:
        if token.name == '+':
            # "+x" --> "x"
            return
        if token.name == '-':
            # "-x" --> "-1 * x"; x may be a whole function call
            output.append(classify('-1', table))
            token = table.get('*')

    precedence = PRECEDENCE[token.name]
    left_assoc = LEFT_ASSOCIATIVE[token.name]
    while stack and stack[-1].type is TokenType.OPERATOR:
        top_precedence = PRECEDENCE[stack[-1].name]
        if top_precedence > precedence or (top_precedence == precedence and left_assoc):
            output.append(stack.pop())
        else:
            break

    stack.append(token)


def to_postfix(tokens, symbols=None) -> PostfixResult:
    """
    Shunting-yard conversion.

    Args:
        tokens: classified infix tokens
        symbols: SymbolTable the tokens were classified with
    Returns:
        PostfixResult; ``ok`` is False for unbalanced parentheses or a
        comma outside any parenthesis
    """
    table = GLOBAL_SYMBOLS if symbols is None else symbols
    output = []
    stack = []
    # formula start behaves like "after an operator"
    starts_operand = True

    for token in tokens:
        if token.is_operand:
            starts_operand = False
            output.append(token)

        elif token.is_function:
            starts_operand = False
            stack.append(token)

        elif token.type is TokenType.LPAREN:
            starts_operand = True
            stack.append(token)

        elif token.type is TokenType.RPAREN:
            starts_operand = False
            if not _close_paren(output, stack):
                logger.debug("Unbalanced ')'")
                return PostfixResult([], FormulaSyntaxError("Invalid formula: unbalanced parentheses"))

        elif token.type is TokenType.COMMA:
            starts_operand = True
            if not _close_argument(output, stack):
                logger.debug("Comma outside of parentheses")
                return PostfixResult([], FormulaSyntaxError("Invalid formula: stray comma"))

        elif token.type is TokenType.OPERATOR:
            _push_operator(output, stack, token, starts_operand, table)
            starts_operand = True

    if _has_lparen(stack):
        logger.debug("Unclosed '('")
        return PostfixResult([], FormulaSyntaxError("Invalid formula: unbalanced parentheses"))

    while stack:
        output.append(stack.pop())

    return PostfixResult(output)


def infix_to_postfix(formula, symbols=None) -> PostfixResult:
    """Lex and convert formula text"""
    return to_postfix(lex(formula, symbols), symbols)
