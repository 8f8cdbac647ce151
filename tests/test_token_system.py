"""
Tests for the symbol table and the token classifier.
"""
import math

import pytest

from core import (
    DEFAULT_SYMBOLS, GLOBAL_SYMBOLS, SymbolTable, Token, TokenType,
    classify, register_function, register_special_functions
)


class TestClassify:
    def test_reserved_constant(self):
        token = classify('pi')
        assert token.type is TokenType.CONSTANT
        assert token.value == math.pi

    def test_e_is_always_the_constant(self):
        token = classify('e')
        assert token.type is TokenType.CONSTANT
        assert token.value == pytest.approx(math.e)

    @pytest.mark.parametrize("text,value", [
        ('0', 0.0),
        ('42', 42.0),
        ('3.14', 3.14),
        ('1e3', 1000.0),
        ('2.5E-2', 0.025),
        ('-1', -1.0),
    ])
    def test_real_literals(self, text, value):
        token = classify(text)
        assert token.type is TokenType.REAL
        assert token.value == pytest.approx(value)

    @pytest.mark.parametrize("text,value", [
        ('i', 1j),
        ('3i', 3j),
        ('2.5i', 2.5j),
        ('-2i', -2j),
        ('1e2i', 100j),
    ])
    def test_imaginary_literals(self, text, value):
        token = classify(text)
        assert token.type is TokenType.IMAGINARY
        assert token.value == value

    @pytest.mark.parametrize("text", ['x', 'alpha', 'x1', '.5', '2x', 'ei'])
    def test_everything_else_is_a_variable(self, text):
        token = classify(text)
        assert token.type is TokenType.VARIABLE
        assert token.name == text

    def test_functions_carry_arity_and_rule(self):
        sin = classify('sin')
        assert sin.type is TokenType.FUNC1
        assert sin.arity == 1
        assert sin.rule(0.0) == 0.0

        pow_token = classify('pow')
        assert pow_token.type is TokenType.FUNC2
        assert pow_token.rule(2.0, 3.0) == 8.0

    def test_punctuation(self):
        assert classify('(').type is TokenType.LPAREN
        assert classify(')').type is TokenType.RPAREN
        assert classify(',').type is TokenType.COMMA
        assert classify('^').type is TokenType.OPERATOR


class TestToken:
    def test_structural_equality(self):
        assert classify('2') == Token(TokenType.REAL, '2', value=2.0)
        assert classify('x') == classify('x')
        assert classify('x') != classify('y')
        assert classify('2') != classify('2.0')

    def test_rule_is_not_part_of_identity(self):
        a = Token(TokenType.FUNC1, 'f', 1, rule=abs)
        b = Token(TokenType.FUNC1, 'f', 1, rule=round)
        assert a == b
        assert hash(a) == hash(b)

    def test_immutable(self):
        token = classify('x')
        with pytest.raises(AttributeError):
            token.name = 'y'


class TestSymbolTable:
    def test_builtin_constants_present(self):
        for name in ('pi', 'e', 'sqrt2', 'sqrt3', 'ln2', 'ln10', 'log2e', 'log10e',
                     'inv_pi', 'inv_sqrtpi', 'egamma', 'phi'):
            assert DEFAULT_SYMBOLS[name].type is TokenType.CONSTANT

    def test_constant_values(self):
        assert DEFAULT_SYMBOLS['phi'].value == pytest.approx(1.6180339887)
        assert DEFAULT_SYMBOLS['egamma'].value == pytest.approx(0.5772156649)
        assert DEFAULT_SYMBOLS['inv_sqrtpi'].value == pytest.approx(0.5641895835)

    def test_defaults_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_SYMBOLS['tau'] = Token(TokenType.CONSTANT, 'tau', value=2 * math.pi)

    def test_register_is_local_to_the_table(self, symbols):
        register_function('double', 1, lambda v: 2 * v, symbols)
        assert classify('double', symbols).type is TokenType.FUNC1
        assert 'double' not in GLOBAL_SYMBOLS
        assert classify('double').type is TokenType.VARIABLE

    def test_register_overwrites(self, symbols):
        symbols.register('answer', TokenType.CONSTANT, value=42.0)
        symbols.register('answer', TokenType.CONSTANT, value=43.0)
        assert classify('answer', symbols).value == 43.0

    def test_register_picks_category_from_arity(self, symbols):
        register_function('f3', 3, lambda a, b, c: a + b + c, symbols)
        assert symbols.get('f3').type is TokenType.FUNC3

    @pytest.mark.parametrize("arity", [0, 4])
    def test_register_rejects_bad_arity(self, symbols, arity):
        with pytest.raises(ValueError):
            register_function('bad', arity, lambda *a: 0, symbols)

    def test_register_rejects_mismatched_category(self, symbols):
        with pytest.raises(ValueError):
            symbols.register('f', TokenType.FUNC2, 1, abs)

    def test_register_rejects_new_operators(self, symbols):
        with pytest.raises(ValueError):
            symbols.register('%', TokenType.OPERATOR, 2, lambda a, b: a % b)

    def test_register_requires_callable(self, symbols):
        with pytest.raises(ValueError):
            symbols.register('f', TokenType.FUNC1, 1, None)

    def test_is_punctuation(self, symbols):
        assert symbols.is_punctuation('+')
        assert symbols.is_punctuation('(')
        assert symbols.is_punctuation(',')
        assert not symbols.is_punctuation('sin')
        assert not symbols.is_punctuation('x')

    def test_copy_is_independent(self, symbols):
        clone = symbols.copy()
        register_function('only_in_clone', 1, abs, clone)
        assert 'only_in_clone' in clone
        assert 'only_in_clone' not in symbols
        assert len(clone) == len(symbols) + 1

    def test_special_functions(self, symbols):
        register_special_functions(symbols)
        assert symbols.get('gamma').type is TokenType.FUNC1
        assert symbols.get('jv').type is TokenType.FUNC2
        assert symbols.get('laguerre').type is TokenType.FUNC3
        assert 'gamma' not in GLOBAL_SYMBOLS
