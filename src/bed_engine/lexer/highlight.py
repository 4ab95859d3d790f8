"""Token-driven styling of BASIC text with rich."""

from __future__ import annotations

from typing import Mapping, Optional

from rich.highlighter import Highlighter
from rich.style import Style
from rich.text import Text

from .tokenizer import tokenize
from .tokens import TokenKind

TOKEN_STYLES: Mapping[TokenKind, Style] = {
    TokenKind.NUMBER: Style(color="red"),
    TokenKind.STRING: Style(color="magenta"),
    TokenKind.KEYWORD: Style(color="yellow"),
    TokenKind.OPERATOR: Style(color="blue"),
    TokenKind.IDENTIFIER: Style(color="cyan"),
}


def style_for(kind: TokenKind) -> Optional[Style]:
    """Return the display style for ``kind``; whitespace and junk stay plain."""

    return TOKEN_STYLES.get(kind)


def stylize_tokens(text: Text, styles: Mapping[TokenKind, Style] = TOKEN_STYLES) -> None:
    for token in tokenize(text.plain):
        style = styles.get(token.kind)
        if style is not None:
            text.stylize(style, token.offset, token.end)


def highlight(source: str) -> Text:
    """Return ``source`` as a rich ``Text`` styled per token category."""

    rendered = Text(source)
    stylize_tokens(rendered)
    return rendered


class BasicHighlighter(Highlighter):
    """rich highlighter for live input lines (e.g. a Textual ``Input``)."""

    def __init__(self, styles: Optional[Mapping[TokenKind, Style]] = None) -> None:
        self.styles = dict(styles or TOKEN_STYLES)

    def highlight(self, text: Text) -> None:
        stylize_tokens(text, self.styles)


__all__ = ["TOKEN_STYLES", "BasicHighlighter", "highlight", "style_for", "stylize_tokens"]
