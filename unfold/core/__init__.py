"""
Interpreter core: session context, prompt engine, entity schema.

The router lives in unfold.core.interpreter and is imported from there
directly, since it depends on the handlers which depend on this package.
"""

from .prompt import PromptEngine, PromptState, Question, PendingQuestion
from .session import CliSession
from .schema import EntitySchema, FieldSpec, get_schema

__all__ = [
    "PromptEngine",
    "PromptState",
    "Question",
    "PendingQuestion",
    "CliSession",
    "EntitySchema",
    "FieldSpec",
    "get_schema",
]
