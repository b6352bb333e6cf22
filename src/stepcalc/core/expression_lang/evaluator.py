"""
Step-by-step evaluator for the stepcalc expression language.

Rewrites the AST one operation at a time (innermost-left-first) until a
single Number remains, recording the rendered expression before each step.
Pure apart from the session's step log. Does NOT use Python's eval().

Trigonometric arguments are in degrees; inverse trigonometric results are
returned in degrees.
"""

from __future__ import annotations

import logging
import math

from stepcalc.core.errors import ExpressionEvalError
from stepcalc.core.expression_lang.render import ast_to_string, format_number
from stepcalc.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Euler,
    Expr,
    FunctionCall,
    FunctionName,
    Grouping,
    LogBase,
    Number,
    Pi,
    UnaryExpr,
    UnaryOp,
    is_terminal,
)
from stepcalc.core.numeric import DISPLAY_PRECISION, MAX_PRECISION, round_half_away

logger = logging.getLogger(__name__)

# Distance (radians) from an asymptote treated as hitting it
ASYMPTOTE_TOLERANCE = 1e-10

# Largest n whose factorial fits in a double
MAX_FACTORIAL = 170


class Evaluator:
    """One evaluation session.

    The step log is append-only and belongs to this session; start a new
    ``Evaluator`` for a new expression.

    Args:
        precision: Decimal places kept for function, logarithm and constant
            results. Arithmetic keeps full precision.
    """

    def __init__(self, precision: int = DISPLAY_PRECISION) -> None:
        if not 0 <= precision <= MAX_PRECISION:
            raise ValueError(f"precision must be between 0 and {MAX_PRECISION}, got {precision}")
        self.precision = precision
        self.evaluation_steps: list[str] = []

    def evaluate(self, expr: Expr) -> float:
        """Reduce ``expr`` to a number, logging each intermediate expression.

        Raises:
            ExpressionEvalError: On a domain violation. Steps recorded before
                the failing operation stay in the log.
        """
        try:
            while not is_terminal(expr):
                self._record(ast_to_string(expr))
                expr = self.reduce(expr)
        except RecursionError:
            raise ExpressionEvalError("Expression is nested too deeply") from None

        assert isinstance(expr, Number)
        self._record(ast_to_string(expr))
        return expr.value

    def get_evaluation_steps(self) -> list[str]:
        return list(self.evaluation_steps)

    def _record(self, rendered: str) -> None:
        if self.evaluation_steps and self.evaluation_steps[-1] == rendered:
            return
        logger.debug("step %d: %s", len(self.evaluation_steps), rendered)
        self.evaluation_steps.append(rendered)

    # -- Reduction --

    def reduce(self, expr: Expr) -> Expr:
        """Apply one rewriting step to the leftmost innermost reducible node."""
        if isinstance(expr, BinaryExpr):
            left, right = expr.left, expr.right
            if isinstance(left, Number) and isinstance(right, Number):
                return Number(value=self.apply_binary(expr.op, left.value, right.value))
            if not isinstance(left, Number):
                return BinaryExpr(op=expr.op, left=self.reduce(left), right=right)
            return BinaryExpr(op=expr.op, left=left, right=self.reduce(right))

        if isinstance(expr, UnaryExpr):
            if isinstance(expr.operand, Number):
                return Number(value=self.apply_unary(expr.op, expr.operand.value))
            return UnaryExpr(op=expr.op, operand=self.reduce(expr.operand))

        if isinstance(expr, FunctionCall):
            if isinstance(expr.argument, Number):
                return Number(value=self.apply_function(expr.func, expr.argument.value))
            return FunctionCall(func=expr.func, argument=self.reduce(expr.argument))

        if isinstance(expr, LogBase):
            base, number = expr.base, expr.number
            if isinstance(base, Number) and isinstance(number, Number):
                return Number(value=self.apply_log(base.value, number.value))
            if not isinstance(base, Number):
                base = self.reduce(base)
            if not isinstance(number, Number):
                number = self.reduce(number)
            return LogBase(base=base, number=number)

        if isinstance(expr, Grouping):
            if isinstance(expr.inner, Number):
                return expr.inner
            inner = self.reduce(expr.inner)
            if isinstance(inner, Number):
                return inner
            return Grouping(inner=inner)

        if isinstance(expr, Pi):
            return Number(value=self._round(math.pi))

        if isinstance(expr, Euler):
            return Number(value=self._round(math.e))

        return expr

    # -- Operations --

    def apply_binary(self, op: BinaryOp, left: float, right: float) -> float:
        if op == BinaryOp.ADD:
            return _finite(left + right)
        if op == BinaryOp.SUB:
            return _finite(left - right)
        if op == BinaryOp.MUL:
            return _finite(left * right)
        if op == BinaryOp.DIV:
            if right == 0:
                raise ExpressionEvalError("Can't divide number by 0")
            return _finite(left / right)
        if op == BinaryOp.POW:
            return _power(left, right)
        raise ExpressionEvalError(f"Unknown binary operator: {op}")

    def apply_unary(self, op: UnaryOp, operand: float) -> float:
        if op == UnaryOp.NEG:
            return -operand
        if op == UnaryOp.FACT:
            return _factorial(operand)
        raise ExpressionEvalError(f"Unknown unary operator: {op}")

    def apply_function(self, func: FunctionName, arg: float) -> float:
        return self._round(_finite(_FUNCTIONS[func](arg)))

    def apply_log(self, base: float, number: float) -> float:
        if base <= 0 or base == 1:
            raise ExpressionEvalError(
                f"Logarithm base must be positive and not equal to 1, got {format_number(base)}"
            )
        if number <= 0:
            raise ExpressionEvalError(
                f"Logarithm is only defined for positive numbers, got {format_number(number)}"
            )
        return self._round(_finite(math.log(number) / math.log(base)))

    def _round(self, value: float) -> float:
        return round_half_away(value, self.precision)


def evaluate(expr: Expr, *, precision: int = DISPLAY_PRECISION) -> float:
    """Evaluate ``expr`` in a fresh session and return the final number."""
    return Evaluator(precision=precision).evaluate(expr)


# ---------------------------------------------------------------------------
# Numeric helpers
# ---------------------------------------------------------------------------


def _finite(value: float) -> float:
    if not math.isfinite(value):
        raise ExpressionEvalError("Result is out of range")
    return value


def _power(base: float, exponent: float) -> float:
    try:
        return _finite(math.pow(base, exponent))
    except OverflowError:
        raise ExpressionEvalError("Result is out of range") from None
    except ValueError:
        raise ExpressionEvalError(
            f"Power {format_number(base)} ^ {format_number(exponent)} has no real result"
        ) from None


def _factorial(n: float) -> float:
    if n < 0 or math.floor(n) != n:
        raise ExpressionEvalError(
            f"Factorial is only defined for non-negative integers, got {format_number(n)}"
        )
    if n > MAX_FACTORIAL:
        raise ExpressionEvalError("Result is out of range")
    result = 1.0
    for i in range(2, int(n) + 1):
        result *= i
    return result


def _near(value: float, target: float) -> bool:
    return abs(value - target) < ASYMPTOTE_TOLERANCE


def _near_odd_right_angle(rad: float) -> bool:
    """Within tolerance of 90 + k*180 degrees (tangent/secant poles)."""
    k = round((rad - math.pi / 2) / math.pi)
    return _near(rad, math.pi / 2 + k * math.pi)


def _near_straight_angle(rad: float) -> bool:
    """Within tolerance of k*180 degrees (cotangent/cosecant poles)."""
    k = round(rad / math.pi)
    return _near(rad, k * math.pi)


def _sqrt(x: float) -> float:
    if x < 0:
        raise ExpressionEvalError(f"Square root of a negative number: {format_number(x)}")
    return math.sqrt(x)


def _ln(x: float) -> float:
    if x <= 0:
        raise ExpressionEvalError(
            f"Natural logarithm is only defined for positive numbers, got {format_number(x)}"
        )
    return math.log(x)


def _radians(degrees: float) -> float:
    """Degrees to radians, reduced to one turn first so poles stay detectable."""
    return math.radians(math.fmod(degrees, 360.0))


def _sin(x: float) -> float:
    return math.sin(_radians(x))


def _cos(x: float) -> float:
    return math.cos(_radians(x))


def _tg(x: float) -> float:
    rad = _radians(x)
    if _near_odd_right_angle(rad):
        raise ExpressionEvalError(f"Tangent is undefined at {format_number(x)} degrees")
    return math.tan(rad)


def _cotg(x: float) -> float:
    rad = _radians(x)
    if _near_straight_angle(rad):
        raise ExpressionEvalError(f"Cotangent is undefined at {format_number(x)} degrees")
    return 1.0 / math.tan(rad)


def _sec(x: float) -> float:
    rad = _radians(x)
    if _near_odd_right_angle(rad):
        raise ExpressionEvalError(f"Secant is undefined at {format_number(x)} degrees")
    return 1.0 / math.cos(rad)


def _csc(x: float) -> float:
    rad = _radians(x)
    if _near_straight_angle(rad):
        raise ExpressionEvalError(f"Cosecant is undefined at {format_number(x)} degrees")
    return 1.0 / math.sin(rad)


def _asin(x: float) -> float:
    if not -1 <= x <= 1:
        raise ExpressionEvalError(f"Inverse sine is only defined on [-1, 1], got {format_number(x)}")
    return math.degrees(math.asin(x))


def _acos(x: float) -> float:
    if not -1 <= x <= 1:
        raise ExpressionEvalError(
            f"Inverse cosine is only defined on [-1, 1], got {format_number(x)}"
        )
    return math.degrees(math.acos(x))


def _atg(x: float) -> float:
    return math.degrees(math.atan(x))


def _actg(x: float) -> float:
    if x == 0:
        raise ExpressionEvalError("Inverse cotangent is undefined at 0")
    return math.degrees(math.atan(1.0 / x))


_FUNCTIONS = {
    FunctionName.ABS: abs,
    FunctionName.SQRT: _sqrt,
    FunctionName.LN: _ln,
    FunctionName.SIN: _sin,
    FunctionName.COS: _cos,
    FunctionName.TG: _tg,
    FunctionName.COTG: _cotg,
    FunctionName.SEC: _sec,
    FunctionName.CSC: _csc,
    FunctionName.ASIN: _asin,
    FunctionName.ACOS: _acos,
    FunctionName.ATG: _atg,
    FunctionName.ACTG: _actg,
}
