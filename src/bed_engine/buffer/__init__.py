"""Ordered line buffer and line-number parsing."""

from .buffer import LineBuffer, BufferView, Transaction
from .lines import LineNumberMatch, parse_line_number, replace_line_number
from .sync import BufferMirror
from .validation import MalformedLineError, ensure_numbered_line

__all__ = [
    "LineBuffer",
    "BufferView",
    "BufferMirror",
    "Transaction",
    "LineNumberMatch",
    "parse_line_number",
    "replace_line_number",
    "MalformedLineError",
    "ensure_numbered_line",
]
