"""Core stepcalc functionality: expression IR, tokenizer, parser, step evaluator, transcripts."""

from . import ir
from .calculator import Calculation, calculate
from .config import CalculatorSettings, load_settings
from .errors import (
    ConfigError,
    ErrorContext,
    ExpressionEvalError,
    ExpressionParseError,
    StepcalcError,
    TranscriptError,
)
from .transcripts import (
    delete_transcripts,
    list_transcripts,
    load_transcript,
    save_transcript,
)

__all__ = [
    "ir",
    "Calculation",
    "calculate",
    "CalculatorSettings",
    "load_settings",
    "StepcalcError",
    "ExpressionParseError",
    "ExpressionEvalError",
    "TranscriptError",
    "ConfigError",
    "ErrorContext",
    "save_transcript",
    "load_transcript",
    "list_transcripts",
    "delete_transcripts",
]
