"""Token kinds and the token record produced by the tokenizer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    """Lexical categories used for display styling."""

    NUMBER = "number"
    STRING = "string"
    KEYWORD = "keyword"
    OPERATOR = "operator"
    IDENTIFIER = "identifier"
    NEWLINE = "newline"
    SPACE = "space"
    TAB = "tab"
    UNRECOGNIZED = "unrecognized"


KEYWORDS: frozenset[str] = frozenset(
    {
        "LET",
        "PRINT",
        "END",
        "FOR",
        "NEXT",
        "GOTO",
        "GOSUB",
        "RETURN",
        "IF",
        "THEN",
        "DEF",
        "READ",
        "DATA",
        "DIM",
        "REM",
    }
)

OPERATORS: frozenset[str] = frozenset("+-*/^")


@dataclass(frozen=True, slots=True)
class Token:
    """A classified span of source text starting at ``offset``."""

    kind: TokenKind
    text: str
    offset: int = 0

    @property
    def end(self) -> int:
        return self.offset + len(self.text)


__all__ = ["TokenKind", "Token", "KEYWORDS", "OPERATORS"]
