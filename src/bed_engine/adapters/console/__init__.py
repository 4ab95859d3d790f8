"""Line-reading console front end."""

from .shell import ConsoleShell, NO_HISTORY_MESSAGE

__all__ = ["ConsoleShell", "NO_HISTORY_MESSAGE"]
