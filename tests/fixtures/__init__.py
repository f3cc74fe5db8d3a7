"""Test fixtures for unfold tests."""

from .records import make_program, make_project, make_task, setup_hierarchy

__all__ = [
    "make_program",
    "make_project",
    "make_task",
    "setup_hierarchy",
]
