"""Formula module - variable tables, callable construction and the parse facade"""
from .variables import VariableTable
from .evaluator import FormulaEvaluator, FormulaFunction, make_function

__all__ = ['VariableTable', 'FormulaEvaluator', 'FormulaFunction', 'make_function']
