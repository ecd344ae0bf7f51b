"""
Tokenizer for C-like function prototype declarations.

Splits raw source text into a flat list of tokens:
- Identifiers (letters, digits and underscores, not starting with a digit)
- Braces, argument separators and pointer stars
- Any other non-whitespace character as an opaque single-character token

Newlines are not emitted; they only advance the line counter used for
error positions.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    """Kinds of tokens produced by the tokenizer."""

    CHAR = "char"
    IDENT = "ident"
    BRACE_BEGIN = "brace_begin"
    BRACE_END = "brace_end"
    ARG_SEPARATOR = "arg_separator"
    POINTER = "pointer"


# Characters that map directly to a symbol token
SYMBOL_KINDS = {
    "(": TokenKind.BRACE_BEGIN,
    ")": TokenKind.BRACE_END,
    ",": TokenKind.ARG_SEPARATOR,
    "*": TokenKind.POINTER,
}


@dataclass(frozen=True)
class Token:
    """A single token with its 1-based source position."""

    kind: TokenKind
    line: int
    column: int
    char_value: Optional[str] = None
    ident_value: Optional[str] = None

    @property
    def value(self) -> str:
        """Text of the token: the identifier, or the single character."""
        if self.kind is TokenKind.IDENT:
            return self.ident_value or ""
        return self.char_value or ""

    @property
    def is_ident(self) -> bool:
        return self.kind is TokenKind.IDENT

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "value": self.value,
            "line": self.line,
            "column": self.column,
        }

    def __str__(self) -> str:
        return f"{self.value} [Line {self.line}, Column {self.column}]"


def _is_ident_start(c: str) -> bool:
    return c.isalpha() or c == "_"


def _is_ident_char(c: str) -> bool:
    return c.isalnum() or c == "_"


def tokenize(source: str) -> list[Token]:
    """
    Tokenize prototype source text.

    Never fails: characters without a dedicated token kind become
    ``TokenKind.CHAR`` tokens.

    Args:
        source: Raw text containing zero or more prototype declarations.

    Returns:
        List of tokens in source order.
    """
    tokens: list[Token] = []
    pos = 0
    length = len(source)
    line = 1
    line_start = 0

    while pos < length:
        c = source[pos]

        if c == "\n":
            pos += 1
            line += 1
            line_start = pos
            continue

        if c.isspace():
            pos += 1
            continue

        column = pos - line_start + 1

        kind = SYMBOL_KINDS.get(c)
        if kind is not None:
            tokens.append(Token(kind, line, column, char_value=c))
            pos += 1
        elif _is_ident_start(c):
            start = pos
            while pos < length and _is_ident_char(source[pos]):
                pos += 1
            tokens.append(
                Token(TokenKind.IDENT, line, column, ident_value=source[start:pos])
            )
        else:
            tokens.append(Token(TokenKind.CHAR, line, column, char_value=c))
            pos += 1

    logger.debug("Tokenized %d characters into %d tokens", length, len(tokens))
    return tokens
