"""Terminal front end: keystroke host and the `unfold` console script."""

from .host import TerminalHost

__all__ = ["TerminalHost"]
