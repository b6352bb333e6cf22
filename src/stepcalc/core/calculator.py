"""
One-call evaluation pipeline: text -> tokens -> AST -> steps -> number.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .config import CalculatorSettings
from .errors import ExpressionParseError, make_parse_error
from .expression_lang import Evaluator, parse_expression, tokenize


class Calculation(BaseModel):
    """Outcome of evaluating one expression."""

    expression: str = Field(description="Input text")
    diagnostics: list[str] = Field(
        default_factory=list, description="Lexical warnings (dropped characters/words)"
    )
    steps: list[str] = Field(default_factory=list, description="Rendered reduction steps")
    result: float = Field(description="Final value")

    model_config = ConfigDict(frozen=True)


def calculate(source: str, settings: CalculatorSettings | None = None) -> Calculation:
    """Tokenize, parse and evaluate ``source`` step by step.

    Args:
        source: Expression text.
        settings: Length ceiling and precision (defaults if omitted).

    Raises:
        ExpressionParseError: If the expression is syntactically invalid,
            including input rejected by the tokenizer.
        ExpressionEvalError: On a domain violation.
    """
    settings = settings or CalculatorSettings()

    stream = tokenize(source, max_length=settings.max_input_length)
    try:
        ast = parse_expression(stream)
    except ExpressionParseError as e:
        raise make_parse_error(e.message, source, e.pos) from e

    evaluator = Evaluator(precision=settings.precision)
    result = evaluator.evaluate(ast)

    return Calculation(
        expression=source,
        diagnostics=[d.message for d in stream.diagnostics],
        steps=evaluator.get_evaluation_steps(),
        result=result,
    )
