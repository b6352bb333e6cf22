"""
stepcalc expression language.

Tokenizer, parser, step-by-step evaluator, and renderer.

Usage:
    from stepcalc.core.expression_lang import Evaluator, parse_expression, tokenize

    ast = parse_expression(tokenize("(2 + 3) * 4"))
    evaluator = Evaluator()
    result = evaluator.evaluate(ast)
    # result == 20.0
    # evaluator.get_evaluation_steps() == ["(2 + 3) * 4", "5 * 4", "20"]
"""

from stepcalc.core.expression_lang.evaluator import Evaluator, evaluate
from stepcalc.core.expression_lang.parser import parse_expr, parse_expression
from stepcalc.core.expression_lang.render import ast_to_string, format_number
from stepcalc.core.expression_lang.tokenizer import (
    LexDiagnostic,
    Token,
    TokenKind,
    TokenStream,
    tokenize,
)

__all__ = [
    "Evaluator",
    "LexDiagnostic",
    "Token",
    "TokenKind",
    "TokenStream",
    "ast_to_string",
    "evaluate",
    "format_number",
    "parse_expr",
    "parse_expression",
    "tokenize",
]
