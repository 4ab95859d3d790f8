"""Lexical classification of BASIC listings for display."""

from .tokens import KEYWORDS, OPERATORS, Token, TokenKind
from .tokenizer import RULES, TokenStream, scan, tokenize
from .highlight import TOKEN_STYLES, BasicHighlighter, highlight, style_for
from .brackets import BracketCheck, check_brackets

__all__ = [
    "KEYWORDS",
    "OPERATORS",
    "Token",
    "TokenKind",
    "RULES",
    "TokenStream",
    "scan",
    "tokenize",
    "TOKEN_STYLES",
    "BasicHighlighter",
    "highlight",
    "style_for",
    "BracketCheck",
    "check_brackets",
]
