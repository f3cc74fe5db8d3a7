"""
unfold - Homebrew-style command interpreter for a four-level record store.

    program -> project -> task -> subtask
"""

__version__ = "0.1.0"
