"""Help and manual text."""

from .manual import Manual

__all__ = ["Manual"]
