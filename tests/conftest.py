"""Shared fixtures"""
import pytest

from core import SymbolTable


@pytest.fixture
def symbols():
    """Fresh symbol table seeded with the built-ins; tests may register into it freely"""
    return SymbolTable()
