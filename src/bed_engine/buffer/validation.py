"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .lines import LineNumberMatch, parse_line_number


class MalformedLineError(RuntimeError):
    """Raised when a buffer line does not start with its own line number."""

    def __init__(
        self, message: str, *, number: int | None = None, text: str | None = None
    ) -> None:
        super().__init__(message)
        self.number = number
        self.text = text


def ensure_numbered_line(number: int, text: str) -> LineNumberMatch:
    if number < 0:
        raise MalformedLineError("Line number must be non-negative", number=number)
    parsed = parse_line_number(text)
    if parsed is None:
        raise MalformedLineError(
            "Line must begin with a line number followed by whitespace",
            number=number,
            text=text,
        )
    if parsed.number != number:
        raise MalformedLineError(
            f"Line text is numbered {parsed.number}, expected {number}",
            number=number,
            text=text,
        )
    return parsed
