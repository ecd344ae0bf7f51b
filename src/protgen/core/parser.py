"""
Parser for function prototype token streams.

Groups the flat token list from the tokenizer into FunctionPrototype
records using a two-state machine:

    FUNCTION_START  collect return type and name tokens until '('
    FUNCTION_ARGS   collect argument groups until ')'

Prototypes may follow each other directly; no terminator is needed.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

from protgen.core.tokenizer import Token, TokenKind, tokenize
from protgen.errors import PrototypeSyntaxError

logger = logging.getLogger(__name__)

# Names of one parameter slot, e.g. ["const", "char", "*", "s"]
ArgumentGroup = list[str]


@dataclass
class FunctionPrototype:
    """A parsed function declaration."""

    # Function name (last identifier before '(')
    name: str

    # Tokens preceding the name: return type and pointer stars
    returns: list[str] = field(default_factory=list)

    # One entry per parameter slot, in declaration order
    args: list[ArgumentGroup] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "returns": list(self.returns),
            "args": [list(arg) for arg in self.args],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "FunctionPrototype":
        return cls(
            name=d["name"],
            returns=list(d.get("returns", [])),
            args=[list(arg) for arg in d.get("args", [])],
        )


class ParseState(Enum):
    FUNCTION_START = "function_start"
    FUNCTION_ARGS = "function_args"


class PrototypeParser:
    """State machine turning tokens into FunctionPrototype records."""

    def __init__(self, tokens: Iterable[Token]):
        self.tokens = list(tokens)

    def parse(self) -> list[FunctionPrototype]:
        """
        Parse all prototypes in the token stream.

        Returns:
            Prototypes in source order. A prototype whose argument list is
            never closed is dropped.

        Raises:
            PrototypeSyntaxError: On a missing function name or a malformed
                argument list.
        """
        prototypes: list[FunctionPrototype] = []
        left: list[Token] = []
        arg_names: list[str] = []
        current = None
        state = ParseState.FUNCTION_START

        index = 0
        count = len(self.tokens)
        while index < count:
            token = self.tokens[index]
            index += 1

            if state is ParseState.FUNCTION_START:
                if token.kind is not TokenKind.BRACE_BEGIN:
                    left.append(token)
                    continue
                current = self._start_function(token, left)
                left = []
                arg_names = []
                state = ParseState.FUNCTION_ARGS
                continue

            if token.kind is TokenKind.BRACE_END:
                current.args.append(list(arg_names))
                prototypes.append(current)
                logger.debug("Parsed prototype %r", current.name)
                current = None
                state = ParseState.FUNCTION_START
            elif token.kind is TokenKind.ARG_SEPARATOR:
                current.args.append(list(arg_names))
                arg_names = []
                if index == count:
                    raise PrototypeSyntaxError(
                        f"Missing token after argument separator '{token}'",
                        token,
                    )
                following = self.tokens[index]
                if not following.is_ident:
                    raise PrototypeSyntaxError(
                        f"Expected identifier after argument separator "
                        f"but got token '{following}'",
                        following,
                    )
            else:
                arg_names.append(token.value)

        if current is not None:
            logger.debug("Dropping unterminated prototype %r", current.name)

        return prototypes

    def _start_function(self, brace: Token, left: list[Token]) -> FunctionPrototype:
        """Build a prototype from the tokens buffered before '('."""
        if not left:
            raise PrototypeSyntaxError(f"No tokens before '{brace}'", brace)

        name_token = left[-1]
        if not name_token.is_ident:
            raise PrototypeSyntaxError(
                f"Expected function name before '{brace}' "
                f"but got token '{name_token}'",
                name_token,
            )

        return FunctionPrototype(
            name=name_token.value,
            returns=[tok.value for tok in left[:-1]],
        )


def parse_prototypes(tokens: Iterable[Token]) -> list[FunctionPrototype]:
    """Parse a token stream into function prototypes."""
    return PrototypeParser(tokens).parse()


def parse_source(source: str) -> list[FunctionPrototype]:
    """Tokenize and parse prototype source text."""
    return parse_prototypes(tokenize(source))
