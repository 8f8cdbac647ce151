"""Core engine - symbol table, lexer, shunting-yard converter, compiler and RPN evaluator"""
from .errors import FormulaError, FormulaSyntaxError, ArityError, UnresolvedVariableError
from .token_system import (
    TokenType, Token, SymbolTable, DEFAULT_SYMBOLS, GLOBAL_SYMBOLS,
    classify, register_function, register_special_functions
)
from .lexer import tokenize, lex
from .shunting_yard import PostfixResult, to_postfix, infix_to_postfix
from .compiler import OpCode, Operation, Program, compile_postfix, compile_formula
from .rpn_evaluator import RPNEvaluator
from .operators import Operators

__all__ = [
    'FormulaError', 'FormulaSyntaxError', 'ArityError', 'UnresolvedVariableError',
    'TokenType', 'Token', 'SymbolTable', 'DEFAULT_SYMBOLS', 'GLOBAL_SYMBOLS',
    'classify', 'register_function', 'register_special_functions',
    'tokenize', 'lex',
    'PostfixResult', 'to_postfix', 'infix_to_postfix',
    'OpCode', 'Operation', 'Program', 'compile_postfix', 'compile_formula',
    'RPNEvaluator', 'Operators'
]
