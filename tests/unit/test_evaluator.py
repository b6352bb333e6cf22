"""Tests for the step-by-step evaluator.

Covers:
- Arithmetic, precedence, grouping
- Functions, logarithms, constants and display rounding
- Domain errors
- The step log
"""

from __future__ import annotations

import math

import pytest

from stepcalc.core.errors import ExpressionEvalError
from stepcalc.core.expression_lang.evaluator import MAX_FACTORIAL, Evaluator, evaluate
from stepcalc.core.expression_lang.parser import parse_expr
from stepcalc.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    FunctionName,
    Number,
    UnaryOp,
)


def ev(source: str, **kwargs: int) -> float:
    return evaluate(parse_expr(source), **kwargs)


def steps_of(source: str) -> list[str]:
    evaluator = Evaluator()
    evaluator.evaluate(parse_expr(source))
    return evaluator.get_evaluation_steps()


class TestArithmetic:
    @pytest.mark.parametrize(
        "source,expected",
        [
            ("2 + 3", 5),
            ("10 - 4 - 3", 3),
            ("2 + 3 * 4", 14),
            ("(2 + 3) * 4", 20),
            ("8 / 4 / 2", 1),
            ("7 / 2", 3.5),
            ("2 ^ 10", 1024),
            ("2 ^ 3 ^ 2", 512),
            ("-2 ^ 2", 4),
            ("5 - -3", 8),
            ("--3", 3),
            ("((((7))))", 7),
        ],
    )
    def test_values(self, source: str, expected: float) -> None:
        assert ev(source) == expected

    def test_arithmetic_keeps_full_precision(self) -> None:
        assert ev("1 / 3") == 1 / 3
        assert ev("0.1 + 0.2") == 0.1 + 0.2

    def test_divide_by_zero(self) -> None:
        with pytest.raises(ExpressionEvalError) as exc_info:
            ev("1 / 0")
        assert exc_info.value.message == "Can't divide number by 0"

    def test_divide_by_computed_zero(self) -> None:
        with pytest.raises(ExpressionEvalError, match="Can't divide number by 0"):
            ev("1 / (2 - 2)")

    def test_power_overflow(self) -> None:
        with pytest.raises(ExpressionEvalError, match="Result is out of range"):
            ev("10 ^ 400")

    def test_power_without_real_result(self, evaluator: Evaluator) -> None:
        with pytest.raises(ExpressionEvalError) as exc_info:
            evaluator.apply_binary(BinaryOp.POW, -8.0, 0.5)
        assert exc_info.value.message == "Power -8 ^ 0.5 has no real result"


class TestFactorial:
    @pytest.mark.parametrize("source,expected", [("0!", 1), ("1!", 1), ("5!", 120), ("4! + 1", 25)])
    def test_values(self, source: str, expected: float) -> None:
        assert ev(source) == expected

    def test_factorial_of_group(self) -> None:
        assert ev("(1 + 2)!") == 6

    def test_negative_literal_is_negated_factorial(self) -> None:
        assert ev("-3!") == -6

    def test_negative_operand(self) -> None:
        with pytest.raises(ExpressionEvalError) as exc_info:
            ev("(-1)!")
        assert exc_info.value.message == (
            "Factorial is only defined for non-negative integers, got -1"
        )

    def test_fractional_operand(self) -> None:
        with pytest.raises(ExpressionEvalError, match="got 2.5"):
            ev("2.5!")

    def test_largest_factorial(self, evaluator: Evaluator) -> None:
        assert evaluator.apply_unary(UnaryOp.FACT, float(MAX_FACTORIAL)) == float(
            math.factorial(MAX_FACTORIAL)
        )

    def test_too_large(self) -> None:
        with pytest.raises(ExpressionEvalError, match="Result is out of range"):
            ev("171!")


class TestFunctions:
    @pytest.mark.parametrize(
        "source,expected",
        [
            ("abs(-3)", 3),
            ("sqrt(16)", 4),
            ("sqrt(2)", 1.41),
            ("ln(1)", 0),
            ("sin(30)", 0.5),
            ("cos(60)", 0.5),
            ("cos(0)", 1),
            ("tg(45)", 1),
            ("cotg(45)", 1),
            ("sec(60)", 2),
            ("csc(30)", 2),
            ("asin(0.5)", 30),
            ("acos(0)", 90),
            ("atg(1)", 45),
            ("actg(1)", 45),
            ("sin(2 * 15)", 0.5),
        ],
    )
    def test_values(self, source: str, expected: float) -> None:
        assert ev(source) == expected

    def test_results_are_rounded(self) -> None:
        assert ev("sin(10)") == 0.17

    def test_precision_is_configurable(self) -> None:
        assert ev("sin(10)", precision=4) == 0.1736

    @pytest.mark.parametrize(
        "source,message",
        [
            ("sqrt(-4)", "Square root of a negative number: -4"),
            ("ln(0)", "Natural logarithm is only defined for positive numbers, got 0"),
            ("tg(90)", "Tangent is undefined at 90 degrees"),
            ("tg(-270)", "Tangent is undefined at -270 degrees"),
            ("cotg(0)", "Cotangent is undefined at 0 degrees"),
            ("cotg(180)", "Cotangent is undefined at 180 degrees"),
            ("sec(270)", "Secant is undefined at 270 degrees"),
            ("csc(360)", "Cosecant is undefined at 360 degrees"),
            ("asin(2)", "Inverse sine is only defined on [-1, 1], got 2"),
            ("acos(-1.5)", "Inverse cosine is only defined on [-1, 1], got -1.5"),
            ("actg(0)", "Inverse cotangent is undefined at 0"),
            ("tg(90 + 180 * 10 ^ 6)", "Tangent is undefined at 180000090 degrees"),
            ("csc(360 * 10 ^ 7)", "Cosecant is undefined at 3600000000 degrees"),
        ],
    )
    def test_domain_errors(self, source: str, message: str) -> None:
        with pytest.raises(ExpressionEvalError) as exc_info:
            ev(source)
        assert exc_info.value.message == message

    def test_huge_result_is_not_rounded(self) -> None:
        assert ev("abs(10 ^ 307)") == 1e307

    def test_full_turns_are_ignored(self) -> None:
        assert ev("sin(30 + 360 * 10 ^ 8)") == 0.5

    def test_precision_out_of_range(self) -> None:
        with pytest.raises(ValueError, match="precision must be between 0 and 15"):
            Evaluator(precision=400)

    def test_every_function_is_implemented(self, evaluator: Evaluator) -> None:
        for func in FunctionName:
            assert isinstance(evaluator.apply_function(func, 0.5), float)


class TestLogarithm:
    def test_default_base_two(self) -> None:
        assert ev("log(8)") == 3
        assert ev("log(10)") == 3.32

    def test_explicit_base(self) -> None:
        assert ev("log(2,10)") == round(math.log(10) / math.log(2), 2)
        assert ev("log(10, 1000)") == 3

    def test_expression_arguments(self) -> None:
        assert ev("log(1 + 1, 2 * 4)") == 3

    @pytest.mark.parametrize(
        "source,message",
        [
            ("log(1, 5)", "Logarithm base must be positive and not equal to 1, got 1"),
            ("log(-2, 8)", "Logarithm base must be positive and not equal to 1, got -2"),
            ("log(2, 0)", "Logarithm is only defined for positive numbers, got 0"),
            ("log(-4)", "Logarithm is only defined for positive numbers, got -4"),
        ],
    )
    def test_domain_errors(self, source: str, message: str) -> None:
        with pytest.raises(ExpressionEvalError) as exc_info:
            ev(source)
        assert exc_info.value.message == message


class TestConstants:
    def test_pi_is_rounded(self) -> None:
        assert ev("pi") == 3.14

    def test_e_is_rounded(self) -> None:
        assert ev("e") == 2.72

    def test_constants_in_arithmetic(self) -> None:
        assert ev("2 * pi") == 6.28

    def test_precision_applies_to_constants(self) -> None:
        assert ev("pi", precision=4) == 3.1416

    def test_constant_factorial_is_rejected(self) -> None:
        with pytest.raises(ExpressionEvalError, match="got 3.14"):
            ev("pi!")


class TestEvaluationSteps:
    """The step log records each intermediate expression once."""

    def test_grouping(self) -> None:
        assert steps_of("(2 + 3) * 4") == ["(2 + 3) * 4", "5 * 4", "20"]

    def test_precedence(self) -> None:
        assert steps_of("3 + 4 * 2") == ["3 + 4 * 2", "3 + 8", "11"]

    def test_leftmost_first(self) -> None:
        assert steps_of("2 * (3 + 4) - 1") == ["2 * (3 + 4) - 1", "2 * 7 - 1", "14 - 1", "13"]

    def test_function_and_factorial(self) -> None:
        assert steps_of("sin(30) + 4!") == ["sin(30) + 4!", "0.5 + 4!", "0.5 + 24", "24.5"]

    def test_constant_substitution(self) -> None:
        assert steps_of("2 * pi") == ["2 * pi", "2 * 3.14", "6.28"]

    def test_log_arguments_reduce_together(self) -> None:
        assert steps_of("log(1 + 1, 2 * 4)") == ["log(1 + 1,2 * 4)", "log(2,8)", "3"]

    def test_default_log_base_is_shown(self) -> None:
        assert steps_of("log(8)") == ["log(2,8)", "3"]

    def test_nested_groups_collapse(self) -> None:
        assert steps_of("((2))") == ["((2))", "2"]

    def test_unchanged_rendering_is_not_repeated(self) -> None:
        assert steps_of("abs(-3)") == ["abs(-3)", "3"]
        assert steps_of("5 - -3") == ["5 - -3", "8"]

    def test_single_number(self) -> None:
        assert steps_of("42") == ["42"]

    def test_steps_kept_on_error(self) -> None:
        evaluator = Evaluator()
        with pytest.raises(ExpressionEvalError):
            evaluator.evaluate(parse_expr("1 / (2 - 2)"))
        assert evaluator.get_evaluation_steps() == ["1 / (2 - 2)", "1 / 0"]

    def test_get_evaluation_steps_returns_copy(self, evaluator: Evaluator) -> None:
        evaluator.evaluate(parse_expr("1 + 1"))
        evaluator.get_evaluation_steps().append("junk")
        assert evaluator.get_evaluation_steps() == ["1 + 1", "2"]

    def test_session_log_is_append_only(self, evaluator: Evaluator) -> None:
        evaluator.evaluate(parse_expr("1 + 1"))
        evaluator.evaluate(parse_expr("3 * 3"))
        assert evaluator.get_evaluation_steps() == ["1 + 1", "2", "3 * 3", "9"]


class TestReduce:
    def test_number_is_fixed_point(self, evaluator: Evaluator) -> None:
        assert evaluator.reduce(Number(value=5)) == Number(value=5)

    def test_one_operation_per_step(self, evaluator: Evaluator) -> None:
        expr = parse_expr("1 + 2 + 3")
        assert evaluator.reduce(expr) == BinaryExpr(
            op=BinaryOp.ADD, left=Number(value=3), right=Number(value=3)
        )

    def test_deep_nesting_is_an_eval_error(self) -> None:
        expr: BinaryExpr | Number = Number(value=1)
        for _ in range(3000):
            expr = BinaryExpr(op=BinaryOp.ADD, left=Number(value=1), right=expr)
        with pytest.raises(ExpressionEvalError, match="nested too deeply"):
            Evaluator().evaluate(expr)
