"""Token系统 - 保留符号表与词法分类"""
import logging
import math
import re
from enum import Enum
from types import MappingProxyType

import numpy as np

from core.operators import Operators

logger = logging.getLogger(__name__)


class TokenType(Enum):
    VARIABLE = "variable"    # x, z, a ...
    CONSTANT = "constant"    # pi, e, sqrt2 ...
    REAL = "real"            # 0, 5, 3.14 ...
    IMAGINARY = "imaginary"  # i, 3i, 2.5i ...
    OPERATOR = "operator"    # + - * / ^
    FUNC1 = "func1"          # sin, cos, exp ...
    FUNC2 = "func2"          # pow, jv ...
    FUNC3 = "func3"          # laguerre ...
    LPAREN = "lparen"
    RPAREN = "rparen"
    COMMA = "comma"


OPERAND_TYPES = frozenset({TokenType.VARIABLE, TokenType.CONSTANT, TokenType.REAL, TokenType.IMAGINARY})
FUNCTION_TYPES = frozenset({TokenType.FUNC1, TokenType.FUNC2, TokenType.FUNC3})
PUNCTUATION_TYPES = frozenset({TokenType.OPERATOR, TokenType.LPAREN, TokenType.RPAREN, TokenType.COMMA})
FUNCTION_TYPE_BY_ARITY = {1: TokenType.FUNC1, 2: TokenType.FUNC2, 3: TokenType.FUNC3}


class Token:
    __slots__ = ('type', 'name', 'arity', 'value', 'rule')

    def __init__(self, token_type, name, arity=0, value=0.0, rule=None):
        object.__setattr__(self, 'type', token_type)
        object.__setattr__(self, 'name', name)
        object.__setattr__(self, 'arity', arity)
        object.__setattr__(self, 'value', value)
        object.__setattr__(self, 'rule', rule)

    def __setattr__(self, key, value):
        raise AttributeError("Token is immutable")

    @property
    def is_operand(self):
        return self.type in OPERAND_TYPES

    @property
    def is_function(self):
        return self.type in FUNCTION_TYPES

    # the rule is not part of the identity
    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.name, self.arity, self.value) == (other.type, other.name, other.arity, other.value)

    def __hash__(self):
        return hash((self.type, self.name, self.arity, self.value))

    def __repr__(self):
        if self.type in (TokenType.REAL, TokenType.IMAGINARY, TokenType.CONSTANT):
            return f"Token({self.type.name}, {self.name!r}, value={self.value!r})"
        if self.arity:
            return f"Token({self.type.name}, {self.name!r}, arity={self.arity})"
        return f"Token({self.type.name}, {self.name!r})"


# 内置符号定义
_BUILTIN_TOKENS = [
    # operators
    Token(TokenType.OPERATOR, '+', 2, rule=Operators.add),
    Token(TokenType.OPERATOR, '-', 2, rule=Operators.sub),
    Token(TokenType.OPERATOR, '*', 2, rule=Operators.mul),
    Token(TokenType.OPERATOR, '/', 2, rule=Operators.div),
    Token(TokenType.OPERATOR, '^', 2, rule=Operators.pow),

    Token(TokenType.LPAREN, '('),
    Token(TokenType.RPAREN, ')'),
    Token(TokenType.COMMA, ','),

    # constants
    Token(TokenType.CONSTANT, 'pi', value=math.pi),
    Token(TokenType.CONSTANT, 'inv_pi', value=1.0 / math.pi),
    Token(TokenType.CONSTANT, 'inv_sqrtpi', value=1.0 / math.sqrt(math.pi)),
    Token(TokenType.CONSTANT, 'e', value=math.e),
    Token(TokenType.CONSTANT, 'sqrt2', value=math.sqrt(2.0)),
    Token(TokenType.CONSTANT, 'sqrt3', value=math.sqrt(3.0)),
    Token(TokenType.CONSTANT, 'ln2', value=math.log(2.0)),
    Token(TokenType.CONSTANT, 'ln10', value=math.log(10.0)),
    Token(TokenType.CONSTANT, 'log2e', value=math.log2(math.e)),
    Token(TokenType.CONSTANT, 'log10e', value=math.log10(math.e)),
    Token(TokenType.CONSTANT, 'egamma', value=float(np.euler_gamma)),
    Token(TokenType.CONSTANT, 'phi', value=(1.0 + math.sqrt(5.0)) / 2.0),

    # one-argument functions
    Token(TokenType.FUNC1, 'sin', 1, rule=Operators.sin),
    Token(TokenType.FUNC1, 'cos', 1, rule=Operators.cos),
    Token(TokenType.FUNC1, 'tan', 1, rule=Operators.tan),
    Token(TokenType.FUNC1, 'asin', 1, rule=Operators.asin),
    Token(TokenType.FUNC1, 'acos', 1, rule=Operators.acos),
    Token(TokenType.FUNC1, 'atan', 1, rule=Operators.atan),
    Token(TokenType.FUNC1, 'sinh', 1, rule=Operators.sinh),
    Token(TokenType.FUNC1, 'cosh', 1, rule=Operators.cosh),
    Token(TokenType.FUNC1, 'tanh', 1, rule=Operators.tanh),
    Token(TokenType.FUNC1, 'asinh', 1, rule=Operators.asinh),
    Token(TokenType.FUNC1, 'acosh', 1, rule=Operators.acosh),
    Token(TokenType.FUNC1, 'atanh', 1, rule=Operators.atanh),
    Token(TokenType.FUNC1, 'exp', 1, rule=Operators.exp),
    Token(TokenType.FUNC1, 'log', 1, rule=Operators.log),
    Token(TokenType.FUNC1, 'ln', 1, rule=Operators.log),
    Token(TokenType.FUNC1, 'log10', 1, rule=Operators.log10),
    Token(TokenType.FUNC1, 'sqrt', 1, rule=Operators.sqrt),

    # two-argument functions
    Token(TokenType.FUNC2, 'pow', 2, rule=Operators.pow),
]

DEFAULT_SYMBOLS = MappingProxyType({token.name: token for token in _BUILTIN_TOKENS})

# scipy special functions, registered on demand
SPECIAL_FUNCTIONS = {
    'gamma': (1, Operators.gamma),
    'erf': (1, Operators.erf),
    'beta': (2, Operators.beta),
    'jv': (2, Operators.jv),
    'laguerre': (3, Operators.laguerre),
}

# 运算符优先级与结合性
PRECEDENCE = {'+': 0, '-': 0, '*': 1, '/': 1, '^': 2}
LEFT_ASSOCIATIVE = {'+': True, '-': True, '*': True, '/': True, '^': False}

REAL_PATTERN = re.compile(r'^[+-]?\d+(\.\d+)?([eE][+-]?\d+)?$')
IMAGINARY_PATTERN = re.compile(r'^([+-]?)(\d+(\.\d+)?([eE][+-]?\d+)?)?i$')


class SymbolTable:
    """Reserved symbols known to one parsing context.

    Seeded from ``DEFAULT_SYMBOLS``; entries can be added or overwritten
    with ``register`` but never removed.  Registration is not synchronized
    and must be finished before the table is shared between threads.
    """

    def __init__(self, base=None):
        self._symbols = dict(DEFAULT_SYMBOLS if base is None else base)

    def __contains__(self, name):
        return name in self._symbols

    def __len__(self):
        return len(self._symbols)

    def __iter__(self):
        return iter(self._symbols)

    def get(self, name, default=None):
        return self._symbols.get(name, default)

    def register(self, name, category, arity=0, rule=None, value=0.0):
        """Insert or overwrite a symbol"""
        if category in FUNCTION_TYPES and FUNCTION_TYPE_BY_ARITY.get(arity) is not category:
            raise ValueError(f"Arity {arity} does not match category {category.name} for '{name}'")
        if category is TokenType.OPERATOR and name not in PRECEDENCE:
            raise ValueError(f"Cannot register new operator '{name}': only named functions can be added")
        if (category in FUNCTION_TYPES or category is TokenType.OPERATOR) and not callable(rule):
            raise ValueError(f"Symbol '{name}' needs a callable rule")
        if name in self._symbols:
            logger.debug(f"Overwriting symbol '{name}'")
        self._symbols[name] = Token(category, name, arity, value, rule)

    def is_punctuation(self, text):
        """True for operators, parentheses and commas (the lexer split points)"""
        token = self._symbols.get(text)
        return token is not None and token.type in PUNCTUATION_TYPES

    def copy(self):
        return SymbolTable(self._symbols)


# 未注入符号表时使用的全局共享表
GLOBAL_SYMBOLS = SymbolTable()


def register_function(name, arity, rule, symbols=None):
    """Register a named function of arity 1, 2 or 3"""
    if arity not in FUNCTION_TYPE_BY_ARITY:
        raise ValueError(f"Function arity must be 1, 2 or 3, got {arity}")
    table = GLOBAL_SYMBOLS if symbols is None else symbols
    table.register(name, FUNCTION_TYPE_BY_ARITY[arity], arity, rule)


def register_special_functions(symbols=None):
    """Register the scipy special functions (gamma, erf, beta, jv, laguerre)"""
    for name, (arity, rule) in SPECIAL_FUNCTIONS.items():
        register_function(name, arity, rule, symbols)


def classify(text, symbols=None):
    """Turn one lexeme into a Token; never rejects input"""
    table = GLOBAL_SYMBOLS if symbols is None else symbols
    reserved = table.get(text)
    if reserved is not None:
        return reserved

    if REAL_PATTERN.match(text):
        return Token(TokenType.REAL, text, value=float(text))

    match = IMAGINARY_PATTERN.match(text)
    if match:
        sign, magnitude = match.group(1), match.group(2)
        value = float(magnitude) if magnitude else 1.0
        if sign == '-':
            value = -value
        return Token(TokenType.IMAGINARY, text, value=complex(0.0, value))

    return Token(TokenType.VARIABLE, text)
