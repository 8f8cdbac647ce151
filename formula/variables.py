"""formula/variables.py"""
from collections import ChainMap
from collections.abc import Mapping


class VariableTable(Mapping):
    """Name -> value bindings for formula variables.

    Values are stored as given (Python/numpy scalars, complex numbers or
    numpy arrays).  Adding an existing name overwrites it.
    """

    def __init__(self, bindings=None):
        """
        Args:
            bindings: a mapping, or an ordered sequence of (name, value)
                pairs; later pairs overwrite earlier ones
        """
        self._variables = {}
        if bindings is not None:
            self.update(bindings)

    def __getitem__(self, name):
        return self._variables[name]

    def __setitem__(self, name, value):
        self._variables[name] = value

    def __iter__(self):
        return iter(self._variables)

    def __len__(self):
        return len(self._variables)

    def __repr__(self):
        return f"VariableTable({self._variables!r})"

    def add(self, name, value):
        self._variables[name] = value
        return self

    def update(self, bindings):
        """Merge another table, mapping or sequence of pairs"""
        items = bindings.items() if isinstance(bindings, Mapping) else bindings
        for name, value in items:
            self._variables[name] = value
        return self

    def __iadd__(self, pair):
        name, value = pair
        return self.add(name, value)

    def clear(self):
        self._variables.clear()

    def copy(self):
        return VariableTable(self._variables)

    def with_binding(self, name, value):
        """This table plus one extra binding; self is left untouched"""
        return ChainMap({name: value}, self._variables)
