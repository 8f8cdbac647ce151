"""core/operators.py"""
import numpy as np
from scipy import special


class Operators:
    """Evaluation rules for the built-in symbols.

    Every rule takes exactly ``arity`` positional arguments and returns one
    value.  numpy ufuncs are used throughout so the same rule works for
    Python scalars, numpy scalars, complex values and whole arrays.
    """

    # Binary operators ========================================
    @staticmethod
    def add(operand1, operand2):
        return np.add(operand1, operand2)

    @staticmethod
    def sub(operand1, operand2):
        return np.subtract(operand1, operand2)

    @staticmethod
    def mul(operand1, operand2):
        return np.multiply(operand1, operand2)

    @staticmethod
    def div(operand1, operand2):
        """Division; x/0 gives inf or nan as the value type does"""
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.true_divide(operand1, operand2)

    @staticmethod
    def pow(base, exponent):
        """Power operator, shared by ``^`` and ``pow``"""
        with np.errstate(invalid='ignore', over='ignore'):
            # integer bases would reject negative integer exponents
            return np.power(np.asarray(base, dtype=np.result_type(base, float)), exponent)

    # Unary functions =========================================
    @staticmethod
    def sin(operand):
        return np.sin(operand)

    @staticmethod
    def cos(operand):
        return np.cos(operand)

    @staticmethod
    def tan(operand):
        return np.tan(operand)

    @staticmethod
    def asin(operand):
        """定义域外返回 nan，不报警告"""
        with np.errstate(invalid='ignore'):
            return np.arcsin(operand)

    @staticmethod
    def acos(operand):
        with np.errstate(invalid='ignore'):
            return np.arccos(operand)

    @staticmethod
    def atan(operand):
        return np.arctan(operand)

    @staticmethod
    def sinh(operand):
        return np.sinh(operand)

    @staticmethod
    def cosh(operand):
        return np.cosh(operand)

    @staticmethod
    def tanh(operand):
        return np.tanh(operand)

    @staticmethod
    def asinh(operand):
        return np.arcsinh(operand)

    @staticmethod
    def acosh(operand):
        with np.errstate(invalid='ignore'):
            return np.arccosh(operand)

    @staticmethod
    def atanh(operand):
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.arctanh(operand)

    @staticmethod
    def exp(operand):
        return np.exp(operand)

    @staticmethod
    def log(operand):
        """Natural logarithm (``log`` and ``ln``)"""
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.log(operand)

    @staticmethod
    def log10(operand):
        with np.errstate(divide='ignore', invalid='ignore'):
            return np.log10(operand)

    @staticmethod
    def sqrt(operand):
        with np.errstate(invalid='ignore'):
            return np.sqrt(operand)

    # Special functions (scipy) ===============================
    @staticmethod
    def gamma(operand):
        return special.gamma(operand)

    @staticmethod
    def erf(operand):
        return special.erf(operand)

    @staticmethod
    def beta(a, b):
        return special.beta(a, b)

    @staticmethod
    def jv(order, x):
        """Bessel function of the first kind J_order(x)"""
        return special.jv(order, x)

    @staticmethod
    def laguerre(n, alpha, x):
        """Generalized Laguerre polynomial L_n^(alpha)(x)"""
        return special.eval_genlaguerre(n, alpha, x)
