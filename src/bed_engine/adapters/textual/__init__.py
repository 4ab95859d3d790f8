"""Textual front end: UI-agnostic adapter plus the runnable app."""

from .controller import TextualBedAdapter, TextualUIHooks

__all__ = ["TextualBedAdapter", "TextualUIHooks"]
