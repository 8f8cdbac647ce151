"""core/compiler.py - postfix Token sequence to an executable Program"""
import logging
from enum import Enum
from typing import Any, Callable, NamedTuple, Optional

from core.errors import ArityError
from core.shunting_yard import infix_to_postfix
from core.token_system import TokenType

logger = logging.getLogger(__name__)


class OpCode(Enum):
    PUSH_VARIABLE = "push_variable"
    PUSH_CONSTANT = "push_constant"
    APPLY = "apply"


class Operation(NamedTuple):
    opcode: OpCode
    name: str
    value: Any = None
    arity: int = 0
    rule: Optional[Callable] = None


class Program:
    """Compiled formula: operations plus the names it reads.

    Holds no variable bindings, so one Program can be evaluated any number
    of times, from any number of threads, against different tables.
    """

    __slots__ = ('operations', 'free_variables', 'source')

    def __init__(self, operations, free_variables, source=''):
        object.__setattr__(self, 'operations', tuple(operations))
        object.__setattr__(self, 'free_variables', frozenset(free_variables))
        object.__setattr__(self, 'source', source)

    def __setattr__(self, key, value):
        raise AttributeError("Program is immutable")

    def __len__(self):
        return len(self.operations)

    def __iter__(self):
        return iter(self.operations)

    def __repr__(self):
        return f"Program({self.source!r}, ops={len(self.operations)}, free={sorted(self.free_variables)})"

    def to_rpn(self):
        """Space separated postfix form, for logging"""
        return ' '.join(op.name for op in self.operations)


def compile_postfix(postfix, source=''):
    """
    Compile a postfix sequence while simulating the stack depth.

    Raises:
        ArityError: an operator/function lacks arguments, or the formula
            leaves other than exactly one value
    """
    operations = []
    free_variables = set()
    depth = 0

    for token in postfix:
        if token.type is TokenType.VARIABLE:
            free_variables.add(token.name)
            operations.append(Operation(OpCode.PUSH_VARIABLE, token.name))
            depth += 1

        elif token.type in (TokenType.CONSTANT, TokenType.REAL, TokenType.IMAGINARY):
            operations.append(Operation(OpCode.PUSH_CONSTANT, token.name, token.value))
            depth += 1

        elif token.type is TokenType.OPERATOR or token.is_function:
            if depth < token.arity:
                raise ArityError(f"Invalid formula: missing argument for {token.name}", token.name)
            operations.append(Operation(OpCode.APPLY, token.name, arity=token.arity, rule=token.rule))
            depth += 1 - token.arity

        else:
            # parentheses and commas never survive conversion
            raise ArityError(f"Invalid formula: unexpected {token.name} in postfix", token.name)

    if depth != 1:
        hint = postfix[-1].name if postfix else None
        raise ArityError("Invalid formula: some functions have too many arguments"
                         if depth > 1 else "Invalid formula: empty expression", hint)

    logger.debug(f"Compiled {len(operations)} operations, free variables {sorted(free_variables)}")
    return Program(operations, free_variables, source)


def compile_formula(formula, symbols=None):
    """
    Full pipeline: lex, convert, compile.

    Raises:
        FormulaSyntaxError: unbalanced parentheses or stray comma
        ArityError: wrong number of arguments somewhere in the formula
    """
    postfix = infix_to_postfix(formula, symbols).unwrap()
    return compile_postfix(postfix, source=formula)
