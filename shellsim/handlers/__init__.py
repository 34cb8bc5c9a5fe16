"""
Emulated Linux utilities.

Importing this package registers every handler family in
``BUILTIN_HANDLERS``; ``default_handlers()`` hands out a private copy so a
session can add or replace handlers without touching the shared table.
"""

from .base import (
    BUILTIN_HANDLERS,
    ExecutionContext,
    ExecutionResult,
    HandlerFunc,
    HandlerTable,
    handler,
)
from . import archive, files, network, system, text  # noqa: F401  (registration)


def default_handlers() -> HandlerTable:
    """A fresh copy of the built-in handler table."""
    return BUILTIN_HANDLERS.copy()


__all__ = [
    "BUILTIN_HANDLERS",
    "ExecutionContext",
    "ExecutionResult",
    "HandlerFunc",
    "HandlerTable",
    "handler",
    "default_handlers",
]
