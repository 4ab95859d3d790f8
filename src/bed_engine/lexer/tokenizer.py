"""Rule-table tokenizer for BASIC listings.

At each cursor position every rule is tried; the longest match wins and the
earlier rule wins a tie, so ``LET`` is a keyword while ``LETTER`` is a single
identifier. A character no rule accepts becomes a one-character
``UNRECOGNIZED`` token, which keeps the output gap-free for any input.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional, Sequence, Tuple

from .tokens import KEYWORDS, OPERATORS, Token, TokenKind

Rule = Tuple[TokenKind, "re.Pattern[str]"]


def _keyword_pattern() -> str:
    # Longest first so a keyword never shadows a longer one.
    words = sorted(KEYWORDS, key=lambda word: (-len(word), word))
    return "|".join(re.escape(word) for word in words)


RULES: Sequence[Rule] = (
    (TokenKind.NUMBER, re.compile(r"[0-9]+")),
    (TokenKind.STRING, re.compile(r'"[^"]*"')),
    (TokenKind.KEYWORD, re.compile(_keyword_pattern())),
    (TokenKind.OPERATOR, re.compile("[" + re.escape("".join(sorted(OPERATORS))) + "]")),
    (TokenKind.IDENTIFIER, re.compile(r"[A-Za-z]+")),
    (TokenKind.NEWLINE, re.compile(r"\n")),
    (TokenKind.SPACE, re.compile(r" ")),
    (TokenKind.TAB, re.compile(r"\t")),
)


def _match_at(text: str, position: int, rules: Sequence[Rule]) -> Optional[Token]:
    best: Optional[Token] = None
    for kind, pattern in rules:
        found = pattern.match(text, position)
        if found is None or found.end() == position:
            continue
        if best is None or len(found.group()) > len(best.text):
            best = Token(kind, found.group(), position)
    return best


def scan(text: str, rules: Sequence[Rule] = RULES) -> Iterator[Token]:
    """Yield tokens covering ``text`` from start to end."""

    position = 0
    length = len(text)
    while position < length:
        token = _match_at(text, position, rules)
        if token is None:
            token = Token(TokenKind.UNRECOGNIZED, text[position], position)
        yield token
        position = token.end


class TokenStream:
    """Lazy, restartable token sequence over a fixed text snapshot."""

    __slots__ = ("text", "_rules")

    def __init__(self, text: str, *, rules: Sequence[Rule] = RULES) -> None:
        self.text = text
        self._rules = rules

    def __iter__(self) -> Iterator[Token]:
        return scan(self.text, self._rules)

    def __repr__(self) -> str:
        return f"TokenStream({self.text!r})"

    def kinds(self) -> list[TokenKind]:
        return [token.kind for token in self]

    def to_text(self) -> str:
        return "".join(token.text for token in self)


def tokenize(text: str) -> TokenStream:
    return TokenStream(text)


__all__ = ["RULES", "Rule", "TokenStream", "scan", "tokenize"]
