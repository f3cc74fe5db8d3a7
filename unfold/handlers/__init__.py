"""Verb handlers."""

from .base import Handler, HandlerContext
from .create import CreateHandler
from .list import ListHandler, SearchHandler
from .records import InfoHandler, RemoveHandler, UpdateHandler, UseHandler

HANDLER_CLASSES = (
    ListHandler,
    CreateHandler,
    InfoHandler,
    UpdateHandler,
    RemoveHandler,
    SearchHandler,
    UseHandler,
)

__all__ = [
    "Handler",
    "HandlerContext",
    "CreateHandler",
    "ListHandler",
    "SearchHandler",
    "InfoHandler",
    "UpdateHandler",
    "RemoveHandler",
    "UseHandler",
    "HANDLER_CLASSES",
]
