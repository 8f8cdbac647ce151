"""RPN程序求值器 - 按顺序执行编译后的操作"""
import logging

from core.compiler import OpCode
from core.errors import UnresolvedVariableError

logger = logging.getLogger(__name__)


class RPNEvaluator:
    """Executes a compiled Program against a variable table"""

    @staticmethod
    def evaluate(program, variables):
        """
        Run the program.
        Args:
            program: compiled Program
            variables: any mapping name -> value (VariableTable, dict, ChainMap)
        Returns:
            the single value left on the stack (scalar or numpy array)
        Raises:
            UnresolvedVariableError: a PUSH_VARIABLE name is not bound
        """
        stack = []

        for op in program.operations:
            if op.opcode is OpCode.PUSH_CONSTANT:
                stack.append(op.value)

            elif op.opcode is OpCode.PUSH_VARIABLE:
                try:
                    stack.append(variables[op.name])
                except KeyError:
                    raise UnresolvedVariableError(op.name) from None

            else:
                # 最后弹出的是最后一个参数，保持原参数顺序
                args = stack[-op.arity:] if op.arity else []
                del stack[len(stack) - op.arity:]
                stack.append(op.rule(*args))

        if len(stack) != 1:
            # compile_postfix guarantees depth 1; only a hand-built Program gets here
            logger.error(f"Stack has {len(stack)} elements after evaluation, expected 1")
            logger.error(f"RPN expression: {program.to_rpn()}")
            raise RuntimeError(f"Malformed program left {len(stack)} values on the stack")

        return stack[0]
