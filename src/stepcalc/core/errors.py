"""
Error types for stepcalc parsing, evaluation, and persistence.
"""

from dataclasses import dataclass
from typing import Optional


class StepcalcError(Exception):
    """Base exception for all stepcalc errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ExpressionParseError(StepcalcError):
    """
    Raised when a token stream cannot be parsed into an expression.

    Examples:
    - Missing closing parenthesis
    - Function name not followed by '('
    - Trailing tokens after a complete expression
    - Unexpected end of input
    """

    def __init__(
        self,
        message: str,
        pos: int = 0,
        context: Optional["ErrorContext"] = None,
    ) -> None:
        self.pos = pos
        super().__init__(message, context)


class ExpressionEvalError(StepcalcError):
    """
    Raised when an operation's mathematical domain is violated.

    Examples:
    - Division by zero
    - Square root of a negative number
    - Tangent at an asymptote
    - Factorial of a negative or non-integer operand
    """

    pass


class TranscriptError(StepcalcError):
    """
    Raised when an evaluation transcript cannot be saved or loaded.

    Examples:
    - Empty or path-like transcript name
    - Transcript file does not exist
    """

    pass


class ConfigError(StepcalcError):
    """Raised when stepcalc.toml or an environment override is invalid."""

    pass


@dataclass
class ErrorContext:
    """
    Source location of an error inside a single-line expression.

    Attributes:
        source: The expression text
        column: Column number (1-indexed)
    """

    source: str
    column: int

    def format(self) -> str:
        """
        Format the expression with a caret under the error column.

        Returns:
            Two lines: the expression and a marker line
        """
        marker = " " * max(self.column - 1, 0) + "^"
        return f"  {self.source}\n  {marker}"


def make_parse_error(message: str, source: str, pos: int) -> ExpressionParseError:
    """
    Helper to create an ExpressionParseError with source context.

    Args:
        message: Error description
        source: Expression text the tokens came from
        pos: 0-indexed character offset of the offending token

    Returns:
        ExpressionParseError with context attached
    """
    context = ErrorContext(source=source, column=pos + 1)
    return ExpressionParseError(message, pos, context)
