"""
Pretty-printer for expression ASTs.

Produces the intermediate-expression strings shown at each reduction step.
Pure: never evaluates anything.
"""

from __future__ import annotations

import math
from decimal import Decimal

from stepcalc.core.ir.expressions import (
    LOG_KEYWORD,
    BinaryExpr,
    ConstantName,
    Euler,
    Expr,
    FunctionCall,
    Grouping,
    LogBase,
    Number,
    Pi,
    UnaryExpr,
    UnaryOp,
)


def format_number(value: float) -> str:
    """Shortest plain-decimal form: 20.0 -> "20", 1e-07 -> "0.0000001"."""
    if not math.isfinite(value):
        return str(value)
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text:
        text = format(Decimal(text), "f")
    return text


def ast_to_string(expr: Expr) -> str:
    """Render an AST back to expression syntax."""
    if isinstance(expr, Number):
        return format_number(expr.value)

    if isinstance(expr, Pi):
        return ConstantName.PI.value

    if isinstance(expr, Euler):
        return ConstantName.E.value

    if isinstance(expr, BinaryExpr):
        return f"{ast_to_string(expr.left)} {expr.op.value} {ast_to_string(expr.right)}"

    if isinstance(expr, UnaryExpr):
        operand = ast_to_string(expr.operand)
        if expr.op == UnaryOp.FACT:
            return f"{operand}{UnaryOp.FACT.value}"
        return f"{UnaryOp.NEG.value}{operand}"

    if isinstance(expr, FunctionCall):
        return f"{expr.func.value}({ast_to_string(expr.argument)})"

    if isinstance(expr, LogBase):
        return f"{LOG_KEYWORD}({ast_to_string(expr.base)},{ast_to_string(expr.number)})"

    if isinstance(expr, Grouping):
        return f"({ast_to_string(expr.inner)})"

    raise TypeError(f"Unknown expression type: {type(expr).__name__}")
