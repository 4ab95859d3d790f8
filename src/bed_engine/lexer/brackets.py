"""Bracket balance checks for input lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

BracketStatus = Literal["valid", "invalid", "incomplete"]

_PAIRS = {")": "(", "]": "[", "}": "{"}
_OPENERS = frozenset(_PAIRS.values())


@dataclass(frozen=True, slots=True)
class BracketCheck:
    status: BracketStatus
    message: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.status == "valid"


def check_brackets(text: str) -> BracketCheck:
    """Classify ``text`` as balanced, mismatched, or still missing closers."""

    stack: list[str] = []
    for char in text:
        if char in _OPENERS:
            stack.append(char)
        elif char in _PAIRS:
            if not stack:
                return BracketCheck(
                    "invalid", f"Mismatched brackets: {char!r} is unpaired"
                )
            wanted = stack.pop()
            if wanted != _PAIRS[char]:
                return BracketCheck(
                    "invalid", f"Mismatched brackets: {wanted!r} is not properly closed"
                )
    if stack:
        return BracketCheck("incomplete")
    return BracketCheck("valid")


__all__ = ["BracketCheck", "BracketStatus", "check_brackets"]
