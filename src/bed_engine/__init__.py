"""Line-buffer editor engine for numbered BASIC listings."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "lexer",
    "runtime",
]

__version__ = "0.1.0"
