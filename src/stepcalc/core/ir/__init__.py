"""
stepcalc intermediate representation: the expression AST.
"""

from .expressions import (
    DEFAULT_LOG_BASE,
    LOG_KEYWORD,
    PRECEDENCE,
    RIGHT_ASSOCIATIVE,
    BinaryExpr,
    BinaryOp,
    ConstantName,
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

__all__ = [
    "DEFAULT_LOG_BASE",
    "LOG_KEYWORD",
    "PRECEDENCE",
    "RIGHT_ASSOCIATIVE",
    "BinaryExpr",
    "BinaryOp",
    "ConstantName",
    "Euler",
    "Expr",
    "FunctionCall",
    "FunctionName",
    "Grouping",
    "LogBase",
    "Number",
    "Pi",
    "UnaryExpr",
    "UnaryOp",
    "is_terminal",
]
