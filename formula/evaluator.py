import logging
from collections import OrderedDict
from typing import Dict, Optional, Union

import numpy as np
import pandas as pd

from config.config import PARSER_CONFIG
from core import (
    FormulaError, GLOBAL_SYMBOLS, Program, RPNEvaluator, UnresolvedVariableError,
    compile_formula, register_special_functions
)
from formula.variables import VariableTable

logger = logging.getLogger(__name__)


class FormulaFunction:
    """Single-argument callable built from a Program and a base variable table"""

    def __init__(self, program: Program, variables, free_variable: str):
        self.program = program
        self.free_variable = free_variable
        # snapshot, later edits to the caller's table do not leak in
        self.variables = VariableTable(variables)

    def __call__(self, value):
        return RPNEvaluator.evaluate(self.program, self.variables.with_binding(self.free_variable, value))

    def __repr__(self):
        return f"FormulaFunction({self.program.source!r}, free_variable={self.free_variable!r})"


def make_function(program: Program, variables=None, free_variable: Optional[str] = None) -> FormulaFunction:
    """
    Build f(free_variable) from a compiled program.

    Raises:
        UnresolvedVariableError: a variable of the program is neither bound
            in ``variables`` nor the free variable itself
    """
    if free_variable is None:
        free_variable = PARSER_CONFIG['default_free_variable']
    table = VariableTable(variables)

    missing = [name for name in program.free_variables
               if name not in table and name != free_variable]
    if missing:
        raise UnresolvedVariableError(missing)

    return FormulaFunction(program, table, free_variable)


class FormulaEvaluator:

    def __init__(self, symbols=None, variables=None, cache_size=None):
        """
        Args:
            symbols: SymbolTable to classify with (shared GLOBAL_SYMBOLS when None)
            variables: base bindings, see VariableTable
            cache_size: compiled programs kept in the LRU cache
        """
        if symbols is None:
            symbols = GLOBAL_SYMBOLS
            if PARSER_CONFIG['enable_special_functions']:
                symbols = symbols.copy()
                register_special_functions(symbols)
        self.symbols = symbols
        self.variables = VariableTable(variables)
        self.program: Optional[Program] = None
        self.last_error: Optional[FormulaError] = None

        self.cache_size = PARSER_CONFIG['cache_size'] if cache_size is None else cache_size
        self._program_cache = OrderedDict()
        self._cache_hits = 0
        self._cache_misses = 0

    @property
    def formula(self):
        return self.program.source if self.program is not None else None

    def _manage_cache(self):
        while len(self._program_cache) > self.cache_size:
            # 删除最久未使用的条目（LRU）
            self._program_cache.popitem(last=False)

    def clear_cache(self):
        self._program_cache.clear()
        logger.info(f"Cache cleared. Hits: {self._cache_hits}, Misses: {self._cache_misses}")
        self._cache_hits = 0
        self._cache_misses = 0

    def compile(self, formula: str) -> Program:
        """
        Compile through the cache; raises FormulaError subclasses.

        The cache key is the formula text only.  Symbols registered into
        ``self.symbols`` after a formula was cached do not reclassify it;
        call clear_cache() after late registrations.
        """
        if formula in self._program_cache:
            self._program_cache.move_to_end(formula)
            self._cache_hits += 1
            logger.debug(f"Cache hit for formula: {formula[:50]}...")
            return self._program_cache[formula]

        self._cache_misses += 1
        program = compile_formula(formula, self.symbols)
        if self.cache_size > 0:
            self._program_cache[formula] = program
            self._manage_cache()
        return program

    def parse(self, formula: str, variables=None) -> bool:
        """
        Compile a formula and make it current.
        Args:
            formula: infix formula text
            variables: optional bindings replacing the current table
        Returns:
            True on success; on failure the previous program is kept and the
            error is available in ``last_error``
        """
        if variables is not None:
            self.register_variables(variables)

        try:
            program = self.compile(formula)
        except FormulaError as e:
            logger.warning(f"Failed to parse formula '{formula[:50]}': {e}")
            self.last_error = e
            return False

        self.program = program
        self.last_error = None
        return True

    def register_variables(self, variables):
        self.variables = VariableTable(variables)

    def function(self, free_variable: Optional[str] = None) -> FormulaFunction:
        if self.program is None:
            raise FormulaError("No formula has been parsed")
        return make_function(self.program, self.variables, free_variable)

    def evaluate(self, data: Union[pd.DataFrame, Dict, None] = None) -> pd.Series:
        """
        Evaluate the current program over tabular data.

        Columns (or dict entries) are variables; the base table fills in any
        name the data does not provide.
        Returns:
            Series aligned with the data index
        """
        if self.program is None:
            raise FormulaError("No formula has been parsed")

        data_dict, index = self._prepare_data(data)
        missing = [name for name in self.program.free_variables
                   if name not in data_dict and name not in self.variables]
        if missing:
            raise UnresolvedVariableError(missing)

        table = VariableTable(self.variables).update(data_dict)
        result = RPNEvaluator.evaluate(self.program, table)
        return self._convert_to_series(result, index)

    @staticmethod
    def _prepare_data(data):
        """列数组 + 结果要还原的索引；Series 按第一个 Series 的索引对齐"""
        if data is None:
            return {}, None

        if isinstance(data, pd.DataFrame):
            return {col: data[col].to_numpy() for col in data.columns}, data.index

        if isinstance(data, dict):
            index = None
            prepared = {}
            for key, value in data.items():
                if isinstance(value, pd.Series):
                    if index is None:
                        index = value.index
                    # align by label, not by position
                    prepared[key] = value.reindex(index).to_numpy()
                else:
                    prepared[key] = value
            if index is None:
                lengths = {len(v) for v in prepared.values() if isinstance(v, np.ndarray) and v.ndim == 1}
                if len(lengths) == 1:
                    index = pd.RangeIndex(lengths.pop())
            return prepared, index

        raise TypeError(f"Unsupported data type: {type(data)}")

    @staticmethod
    def _convert_to_series(result, index):
        if np.ndim(result) == 0:
            if index is not None:
                return pd.Series(result, index=index)
            return pd.Series([result])
        return pd.Series(np.asarray(result), index=index)
