"""core/errors.py"""


class FormulaError(Exception):
    """Base class for formula failures."""


class FormulaSyntaxError(FormulaError):
    """Unbalanced parentheses, stray comma or any state the converter cannot resolve."""

    def __init__(self, message="Invalid formula: syntax error"):
        super().__init__(message)


class ArityError(FormulaError):
    """Stack depth went negative, or did not end at exactly one value."""

    def __init__(self, message, symbol=None):
        super().__init__(message)
        self.symbol = symbol


class UnresolvedVariableError(FormulaError, KeyError):
    """A free variable has no binding."""

    def __init__(self, names):
        if isinstance(names, str):
            names = [names]
        self.names = tuple(sorted(names))
        super().__init__(f"Invalid function: unresolved variables {', '.join(self.names)}")

    def __str__(self):
        # KeyError.__str__ would quote the message
        return self.args[0]
