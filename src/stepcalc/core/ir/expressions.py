"""
Expression AST types for the step-by-step calculator.

Supports:
- Arithmetic: +, -, *, /, ^
- Negation and postfix factorial: -x, x!
- Functions: abs, sqrt, ln, sin, cos, tg, cotg, sec, csc, asin, acos, atg, actg
- Logarithm with optional base: log(x) (base 2), log(b, x)
- Constants: pi, e
- Explicit grouping: (x), kept for display

The operator and keyword enums below are the only symbol tables; the
tokenizer and the renderer both read them.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators for expressions."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


class UnaryOp(StrEnum):
    """Unary operators for expressions."""

    NEG = "-"
    FACT = "!"


class FunctionName(StrEnum):
    """Single-argument functions, valued by their keyword."""

    ABS = "abs"
    SQRT = "sqrt"
    LN = "ln"
    SIN = "sin"
    COS = "cos"
    TG = "tg"
    COTG = "cotg"
    SEC = "sec"
    CSC = "csc"
    ASIN = "asin"
    ACOS = "acos"
    ATG = "atg"
    ACTG = "actg"


class ConstantName(StrEnum):
    """Named constants, valued by their keyword."""

    PI = "pi"
    E = "e"


LOG_KEYWORD = "log"
DEFAULT_LOG_BASE = 2.0

# Binding strength of binary operators; higher binds tighter.
PRECEDENCE: dict[BinaryOp, int] = {
    BinaryOp.ADD: 1,
    BinaryOp.SUB: 1,
    BinaryOp.MUL: 2,
    BinaryOp.DIV: 2,
    BinaryOp.POW: 3,
}

RIGHT_ASSOCIATIVE: frozenset[BinaryOp] = frozenset({BinaryOp.POW})


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Number(BaseModel):
    """A numeric value. The only terminal node."""

    value: float = Field(description="The numeric value")

    model_config = ConfigDict(frozen=True)


class Pi(BaseModel):
    """The circle ratio constant."""

    model_config = ConfigDict(frozen=True)


class Euler(BaseModel):
    """Euler's number."""

    model_config = ConfigDict(frozen=True)


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)


class UnaryExpr(BaseModel):
    """Negation (-x) or factorial (x!)."""

    op: UnaryOp
    operand: Expr

    model_config = ConfigDict(frozen=True)


class FunctionCall(BaseModel):
    """Single-argument function call: name(argument)."""

    func: FunctionName
    argument: Expr

    model_config = ConfigDict(frozen=True)


class LogBase(BaseModel):
    """
    Logarithm of ``number`` in ``base``.

    ``log(x)`` parses to LogBase(base=Number(2), number=x).
    """

    base: Expr
    number: Expr

    model_config = ConfigDict(frozen=True)


class Grouping(BaseModel):
    """Explicit parentheses. Inert at evaluation time."""

    inner: Expr

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Number | Pi | Euler | BinaryExpr | UnaryExpr | FunctionCall | LogBase | Grouping

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()
UnaryExpr.model_rebuild()
FunctionCall.model_rebuild()
LogBase.model_rebuild()
Grouping.model_rebuild()


def is_terminal(expr: Expr) -> bool:
    """A tree is fully reduced exactly when it is a bare number."""
    return isinstance(expr, Number)
