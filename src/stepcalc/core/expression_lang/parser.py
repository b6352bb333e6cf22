"""
Precedence-climbing parser for the stepcalc expression language.

Grammar:
    expr     → primary (binop expr)*          precedence climbing, see PRECEDENCE
    binop    → "+" | "-" | "*" | "/" | "^"
    primary  → NUMBER "!"?
             | ("pi" | "e") "!"?
             | "-" primary
             | "(" expr ")" "!"?
             | "log" "(" expr ("," expr)? ")" "!"?
             | FUNC "(" expr ")" "!"?

"+ - * /" are left-associative, "^" is right-associative: "2 ^ 3 ^ 2" is
"2 ^ (3 ^ 2)" = 512, not "(2 ^ 3) ^ 2" = 64. A single postfix
"!" binds to the primary it follows, never to a binary sub-expression.
"""

from __future__ import annotations

from collections.abc import Sequence

from stepcalc.core.errors import ExpressionParseError, make_parse_error
from stepcalc.core.expression_lang.tokenizer import (
    FUNCTION_KINDS,
    Token,
    TokenKind,
    TokenStream,
    tokenize,
)
from stepcalc.core.ir.expressions import (
    DEFAULT_LOG_BASE,
    PRECEDENCE,
    RIGHT_ASSOCIATIVE,
    BinaryExpr,
    BinaryOp,
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

_BINARY_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
    TokenKind.CARET: BinaryOp.POW,
}

# Tokens that may legally follow a complete sub-expression
_TERMINATORS = frozenset({TokenKind.EOF, TokenKind.RPAREN, TokenKind.COMMA})


class _Parser:
    """Precedence-climbing parser over a token list."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens = list(tokens)
        self.pos = 0

    @property
    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token | None:
        tok = self.current
        self.pos += 1
        return tok

    def check(self, kind: TokenKind) -> bool:
        tok = self.current
        return tok is not None and tok.kind == kind

    def match(self, kind: TokenKind) -> Token | None:
        if self.check(kind):
            return self.advance()
        return None

    def expect(self, kind: TokenKind, message: str) -> Token:
        tok = self.match(kind)
        if tok is None:
            raise ExpressionParseError(message, self._error_pos())
        return tok

    def _error_pos(self) -> int:
        tok = self.current
        if tok is not None:
            return tok.pos
        return self.tokens[-1].pos if self.tokens else 0

    # -- Grammar rules --

    def parse_expression(self) -> Expr:
        """A complete expression; every token up to EOF must be consumed."""
        expr = self.parse_binary_op(0)
        if not self.check(TokenKind.EOF):
            raise ExpressionParseError(
                "Unexpected input after end of expression", self._error_pos()
            )
        return expr

    def parse_binary_op(self, min_precedence: int) -> Expr:
        left = self.parse_primary()
        while True:
            tok = self.current
            if tok is None or tok.kind in _TERMINATORS:
                break
            op = _BINARY_OPS.get(tok.kind)
            if op is None:
                break

            precedence = PRECEDENCE[op]
            if precedence < min_precedence:
                break
            self.advance()

            next_min = precedence if op in RIGHT_ASSOCIATIVE else precedence + 1
            right = self.parse_binary_op(next_min)
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_primary(self) -> Expr:
        tok = self.current
        if tok is None or tok.kind == TokenKind.EOF:
            raise ExpressionParseError("Unexpected end of input", self._error_pos())

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            assert tok.value is not None
            return self._postfix(Number(value=tok.value))

        if tok.kind == TokenKind.PI:
            self.advance()
            return self._postfix(Pi())

        if tok.kind == TokenKind.EULER:
            self.advance()
            return self._postfix(Euler())

        if tok.kind == TokenKind.MINUS:
            self.advance()
            operand = self.parse_primary()
            return UnaryExpr(op=UnaryOp.NEG, operand=operand)

        if tok.kind == TokenKind.LPAREN:
            self.advance()
            inner = self.parse_binary_op(0)
            self.expect(TokenKind.RPAREN, "Expected right parenthesis")
            return self._postfix(Grouping(inner=inner))

        if tok.kind == TokenKind.LOG:
            return self._postfix(self._parse_log())

        if tok.kind in FUNCTION_KINDS:
            return self._postfix(self._parse_function())

        raise ExpressionParseError(f"Unexpected token: {tok.kind}", tok.pos)

    def _parse_log(self) -> LogBase:
        """'log' '(' expr (',' expr)? ')'"""
        self.advance()
        self.expect(TokenKind.LPAREN, "Expected '(' after log function")
        first = self.parse_binary_op(0)

        if self.match(TokenKind.COMMA):
            base = first
            number = self.parse_binary_op(0)
        else:
            base = Number(value=DEFAULT_LOG_BASE)
            number = first

        self.expect(
            TokenKind.RPAREN, "After the log function arguments there should be ')'"
        )
        return LogBase(base=base, number=number)

    def _parse_function(self) -> FunctionCall:
        """FUNC '(' expr ')'"""
        name_tok = self.advance()
        assert name_tok is not None
        func = FUNCTION_KINDS[name_tok.kind]
        self.expect(TokenKind.LPAREN, f"Expected '(' after function name {func.value}")
        argument = self.parse_binary_op(0)
        self.expect(
            TokenKind.RPAREN, "Expected right parenthesis after function argument"
        )
        return FunctionCall(func=func, argument=argument)

    def _postfix(self, node: Expr) -> Expr:
        """Wrap in a factorial when a single '!' follows."""
        if self.match(TokenKind.BANG):
            return UnaryExpr(op=UnaryOp.FACT, operand=node)
        return node


def parse_expression(tokens: TokenStream | Sequence[Token]) -> Expr:
    """Parse a token stream into an AST.

    Args:
        tokens: Output of ``tokenize`` (or any token list ending in EOF).

    Returns:
        Parsed expression AST.

    Raises:
        ExpressionParseError: If the tokens do not form one complete expression.
    """
    parser = _Parser(tokens)
    try:
        return parser.parse_expression()
    except RecursionError:
        raise ExpressionParseError(
            "Expression is nested too deeply", parser._error_pos()
        ) from None


def parse_expr(source: str, *, max_length: int | None = None) -> Expr:
    """Tokenize and parse an expression string.

    Lexical diagnostics are not fatal here; callers that need them should
    call ``tokenize`` and ``parse_expression`` separately.

    Args:
        source: Expression string (e.g., "(2 + 3) * 4")
        max_length: Optional input length ceiling for the tokenizer.

    Raises:
        ExpressionParseError: If the expression is invalid. The error carries
            a caret snippet pointing at the offending position.
    """
    stream = tokenize(source) if max_length is None else tokenize(source, max_length=max_length)
    try:
        return parse_expression(stream)
    except ExpressionParseError as e:
        raise make_parse_error(e.message, source, e.pos) from e
