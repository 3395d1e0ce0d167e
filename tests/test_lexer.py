"""
Tests for the lexer.

These tests validate:
- numbers, operators, functions and constants
- implicit multiplication
- the previous answer placeholder
- lexer and syntax errors
"""

import math

import pytest

from Calculator import error as E
from Calculator.Lexer import (
    lexer, Number, PrevAnswer, Constant, Function, LParen, RParen, Comma, OPERATORS,
)

TIMES = OPERATORS["*"]
PLUS = OPERATORS["+"]
POWER = OPERATORS["^"]


class TestNumbers:

    def test_integer_and_decimal_literals(self):
        assert lexer("12+1.5") == [Number(12), PLUS, Number(1.5)]

    def test_leading_and_trailing_dot(self):
        assert lexer(".5") == [Number(0.5)]
        assert lexer("5.") == [Number(5)]

    def test_two_dots_is_malformed(self):
        with pytest.raises(E.LexerError):
            lexer("1.2.3")

    def test_lone_dot_is_malformed(self):
        with pytest.raises(E.LexerError):
            lexer("1+.")


class TestOperatorsAndPunctuation:

    def test_double_star_is_power(self):
        assert lexer("2**3") == [Number(2), POWER, Number(3)]

    def test_minus_is_emitted_as_binary_operator(self):
        # the parser decides whether it is unary
        assert lexer("-2") == [OPERATORS["-"], Number(2)]

    def test_comma_and_parens(self):
        assert lexer("max(1,2)") == [
            Function("max", 2), LParen(), Number(1), Comma(), Number(2), RParen()]

    def test_unexpected_character(self):
        with pytest.raises(E.SyntaxError) as excinfo:
            lexer("2$3")
        assert "$" in excinfo.value.message


class TestNames:

    def test_function_with_digits_in_name(self):
        assert lexer("log10(1000)") == [Function("log10", 1), LParen(), Number(1000), RParen()]
        assert lexer("exp2(8)")[0] == Function("exp2", 1)

    def test_constants(self):
        tokens = lexer("pi")
        assert tokens == [Constant("pi", math.pi)]
        assert tokens[0].value == pytest.approx(math.pi)

    def test_pi_symbol_and_root_symbol(self):
        assert lexer("π") == [Constant("pi", math.pi)]
        assert lexer("√(4)")[0] == Function("sqrt", 1)

    def test_unknown_name(self):
        with pytest.raises(E.LexerError) as excinfo:
            lexer("foo(1)")
        assert "foo" in excinfo.value.message

    def test_unknown_rest_after_a_known_name(self):
        with pytest.raises(E.LexerError) as excinfo:
            lexer("pixyz")
        assert excinfo.value.message == "Unknown function or constant 'xyz'"

    def test_function_without_parentheses(self):
        with pytest.raises(E.SyntaxError) as excinfo:
            lexer("sin30")
        assert excinfo.value.message == "Function 'sin' expected parentheses"


class TestImplicitMultiplication:

    def test_constant_followed_by_number(self):
        assert lexer("e2") == [Constant("e", math.e), TIMES, Number(2)]

    def test_number_followed_by_paren(self):
        assert lexer("2(3+4)") == [Number(2), TIMES, LParen(), Number(3), PLUS, Number(4), RParen()]

    def test_paren_followed_by_paren(self):
        assert lexer("(1)(2)") == [LParen(), Number(1), RParen(), TIMES, LParen(), Number(2), RParen()]

    def test_number_followed_by_function(self):
        assert lexer("3sin(30)")[:3] == [Number(3), TIMES, Function("sin", 1)]

    def test_number_followed_by_constant(self):
        assert lexer("2pi") == [Number(2), TIMES, Constant("pi", math.pi)]

    def test_no_multiplication_after_operator(self):
        assert TIMES not in lexer("2+(3)")

    def test_adjacent_constants(self):
        assert lexer("epi") == [Constant("e", math.e), TIMES, Constant("pi", math.pi)]
        assert lexer("pie") == [Constant("pi", math.pi), TIMES, Constant("e", math.e)]

    def test_constant_followed_by_function(self):
        assert lexer("pisin(90)")[:3] == [Constant("pi", math.pi), TIMES, Function("sin", 1)]
        assert lexer("2esin(30)")[:5] == [
            Number(2), TIMES, Constant("e", math.e), TIMES, Function("sin", 1)]

    def test_constant_before_function_with_digits(self):
        assert lexer("elog10(100)")[:3] == [Constant("e", math.e), TIMES, Function("log10", 1)]


class TestPreviousAnswer:

    def test_substituted_when_available(self):
        assert lexer("_+9", prev_ans=9) == [PrevAnswer(9), PLUS, Number(9)]

    def test_zero_is_a_valid_previous_answer(self):
        assert lexer("_", prev_ans=0) == [PrevAnswer(0)]

    def test_implicit_multiplication_with_previous_answer(self):
        assert lexer("2_", prev_ans=3) == [Number(2), TIMES, PrevAnswer(3)]

    def test_missing_previous_answer(self):
        with pytest.raises(E.LexerError) as excinfo:
            lexer("_+1")
        assert excinfo.value.message == "No previous answer available!"


class TestTokens:

    def test_tokens_are_immutable(self):
        token = Number(1)
        with pytest.raises(AttributeError):
            token.value = 2

    def test_prev_answer_is_a_number(self):
        assert isinstance(PrevAnswer(1), Number)
