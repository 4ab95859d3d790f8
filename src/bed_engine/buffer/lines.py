"""Parsing helpers for the leading line number of a listing line."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_LEADING_NUMBER = re.compile(r"([0-9]+)(?=\s|\Z)")
_WHITESPACE = re.compile(r"\s")


@dataclass(frozen=True, slots=True)
class LineNumberMatch:
    """Result of a successful leading-number parse.

    ``rest`` is everything after the digits, separator included.
    """

    number: int
    digits: str
    rest: str


def parse_line_number(text: str) -> Optional[LineNumberMatch]:
    """Parse the unsigned integer at the very start of ``text``.

    The digits must be followed by whitespace or the end of the text, so
    ``"10 PRINT"`` and ``"10"`` match while ``"10abc"`` and ``" 10"`` do not.
    """

    found = _LEADING_NUMBER.match(text)
    if found is None:
        return None
    digits = found.group(1)
    try:
        number = int(digits)
    except ValueError:
        # longer than the interpreter's int conversion limit
        return None
    return LineNumberMatch(number=number, digits=digits, rest=text[found.end():])


def replace_line_number(text: str, number: int) -> str:
    """Swap the token before the first whitespace of ``text`` for ``number``.

    A line without whitespace is a bare number with empty trailing content.
    """

    separator = _WHITESPACE.search(text)
    remainder = text[separator.start():] if separator else ""
    return f"{number}{remainder}"


__all__ = ["LineNumberMatch", "parse_line_number", "replace_line_number"]
