"""
stepcalc - a step-by-step calculator.

Evaluates mathematical expressions one operation at a time and shows every
intermediate expression:

    = (2 + 3) * 4
    = 5 * 4
    = 20
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.calculator import Calculation, calculate
from .core.errors import ExpressionEvalError, ExpressionParseError, StepcalcError

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "Calculation",
    "calculate",
    "StepcalcError",
    "ExpressionParseError",
    "ExpressionEvalError",
]
