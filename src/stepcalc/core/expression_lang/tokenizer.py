"""
Tokenizer for the stepcalc expression language.

Converts an expression string into a sequence of typed tokens. Lexical
problems never raise: the offending character or word is dropped and a
diagnostic is recorded on the returned stream.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum, auto

from stepcalc.core.ir.expressions import (
    LOG_KEYWORD,
    BinaryOp,
    ConstantName,
    FunctionName,
    UnaryOp,
)

logger = logging.getLogger(__name__)

MAX_INPUT_LENGTH = 10_000


class TokenKind(StrEnum):
    """Token types for the expression language."""

    # Literals
    NUMBER = auto()
    PI = auto()
    EULER = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    CARET = auto()
    BANG = auto()

    # Functions (values match the keywords)
    ABS = auto()
    SQRT = auto()
    LN = auto()
    LOG = auto()
    SIN = auto()
    COS = auto()
    TG = auto()
    COTG = auto()
    SEC = auto()
    CSC = auto()
    ASIN = auto()
    ACOS = auto()
    ATG = auto()
    ACTG = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()

    # End of input
    EOF = auto()


class Token:
    """A single token from the expression tokenizer.

    Two tokens are equal when kind and value match; ``pos`` is only used for
    error reporting.
    """

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: float | None = None, pos: int = 0) -> None:
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "pos", pos)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Token is immutable (cannot set {name!r})")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.kind == other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))

    def __repr__(self) -> str:
        if self.kind == TokenKind.NUMBER:
            return f"Token({self.kind}, {self.value!r}, pos={self.pos})"
        return f"Token({self.kind}, pos={self.pos})"


@dataclass(frozen=True)
class LexDiagnostic:
    """A skipped character, keyword, or number run."""

    message: str
    pos: int

    def __str__(self) -> str:
        return self.message


@dataclass
class TokenStream:
    """Tokens of one expression plus the lexical diagnostics raised on the way."""

    source: str
    tokens: list[Token] = field(default_factory=list)
    diagnostics: list[LexDiagnostic] = field(default_factory=list)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, index: int) -> Token:
        return self.tokens[index]

    @property
    def kinds(self) -> list[TokenKind]:
        return [t.kind for t in self.tokens]

    @property
    def ok(self) -> bool:
        """True when nothing was dropped."""
        return not self.diagnostics


_SINGLE_CHAR: dict[str, TokenKind] = {
    BinaryOp.ADD.value: TokenKind.PLUS,
    BinaryOp.SUB.value: TokenKind.MINUS,
    BinaryOp.MUL.value: TokenKind.STAR,
    BinaryOp.DIV.value: TokenKind.SLASH,
    BinaryOp.POW.value: TokenKind.CARET,
    UnaryOp.FACT.value: TokenKind.BANG,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}

_KEYWORDS: dict[str, TokenKind] = {
    **{name.value: TokenKind(name.value) for name in FunctionName},
    LOG_KEYWORD: TokenKind.LOG,
    ConstantName.PI.value: TokenKind.PI,
    ConstantName.E.value: TokenKind.EULER,
}

# Token kind -> function it names (log is parsed separately)
FUNCTION_KINDS: dict[TokenKind, FunctionName] = {TokenKind(name.value): name for name in FunctionName}

# Number run: digits and decimal points, validated afterwards
_NUMBER_RE = re.compile(r"[0-9.]+")
# Identifier: lowercase ASCII letter followed by letters
_IDENT_RE = re.compile(r"[a-z][^\W\d_]*")


def tokenize(source: str, *, max_length: int = MAX_INPUT_LENGTH) -> TokenStream:
    """Tokenize an expression string.

    Args:
        source: Expression text, e.g. ``"3 + sin(30) * 2!"``.
        max_length: Inputs longer than this are rejected with a diagnostic
            and an empty token list.

    Returns:
        The token stream, terminated by an EOF token, with any diagnostics.
    """
    stream = TokenStream(source=source)
    n = len(source)

    if n > max_length:
        _report(
            stream,
            "The mathematical expression is too large! Please enter a reasonable expression!",
            0,
        )
        return stream

    tokens = stream.tokens
    i = 0
    while i < n:
        c = source[i]

        if c.isspace():
            i += 1
            continue

        if c in _SINGLE_CHAR:
            tokens.append(Token(_SINGLE_CHAR[c], pos=i))
            i += 1
            continue

        if c.isdigit() or c == ".":
            m = _NUMBER_RE.match(source, i)
            if m is None:
                # Non-ASCII digit
                _report(stream, f"Unrecognized character: {c}", i)
                i += 1
                continue
            run = m.group(0)
            try:
                tokens.append(Token(TokenKind.NUMBER, float(run), i))
            except ValueError:
                _report(stream, f"Invalid number: {run}", i)
            i = m.end()
            continue

        m = _IDENT_RE.match(source, i)
        if m is not None:
            word = m.group(0)
            kind = _KEYWORDS.get(word)
            if kind is None:
                _report(stream, f"Invalid keyword: {word}", i)
            else:
                tokens.append(Token(kind, pos=i))
            i = m.end()
            continue

        _report(stream, f"Unrecognized character: {c}", i)
        i += 1

    tokens.append(Token(TokenKind.EOF, pos=n))
    return stream


def _report(stream: TokenStream, message: str, pos: int) -> None:
    logger.warning("%s (at %d)", message, pos)
    stream.diagnostics.append(LexDiagnostic(message, pos))
