"""
Handler contract and dispatch table.

Every emulated utility is a plain function ``(ExecutionContext) ->
ExecutionResult`` registered under one or more command names.
"""

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from ..command_parser import Command
from ..registry import CommandRegistry
from ..vfs import HOME_DIR, VirtualFileSystem


@dataclass(frozen=True)
class ExecutionResult:
    """What a handler produced. ``directory`` is None when the cwd is unchanged."""
    output: str = ''
    exit_code: int = 0
    directory: Optional[str] = None


@dataclass
class ExecutionContext:
    """Everything a handler may read. Handlers never mutate it."""
    command: Command
    current_directory: str
    vfs: VirtualFileSystem
    registry: CommandRegistry
    history: Tuple = ()
    now: datetime = field(default_factory=datetime.now)
    rng: random.Random = field(default_factory=random.Random)
    user: str = 'user'
    hostname: str = 'ai-terminal'
    home_dir: str = HOME_DIR

    @property
    def name(self) -> str:
        return self.command.name

    @property
    def args(self) -> List[str]:
        return self.command.args


HandlerFunc = Callable[[ExecutionContext], ExecutionResult]


class HandlerTable:
    """Mapping from command name to handler function."""

    def __init__(self, handlers: Optional[Dict[str, HandlerFunc]] = None):
        self._handlers: Dict[str, HandlerFunc] = dict(handlers or {})

    def register(self, name: str, func: HandlerFunc) -> None:
        self._handlers[name] = func

    def get(self, name: str) -> Optional[HandlerFunc]:
        return self._handlers.get(name)

    def names(self) -> List[str]:
        return sorted(self._handlers)

    def copy(self) -> 'HandlerTable':
        return HandlerTable(self._handlers)

    def __contains__(self, name: str) -> bool:
        return name in self._handlers

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)


# Populated at import time by the handler modules.
BUILTIN_HANDLERS = HandlerTable()


def handler(*names: str) -> Callable[[HandlerFunc], HandlerFunc]:
    """Register the decorated function under each of ``names``."""
    def decorator(func: HandlerFunc) -> HandlerFunc:
        for name in names:
            BUILTIN_HANDLERS.register(name, func)
        return func
    return decorator


# Result helpers

def ok(output: str = '', directory: Optional[str] = None) -> ExecutionResult:
    return ExecutionResult(output=output, exit_code=0, directory=directory)


def fail(output: str, exit_code: int = 1) -> ExecutionResult:
    return ExecutionResult(output=output, exit_code=exit_code)


def missing(name: str, what: str = 'operand') -> ExecutionResult:
    """``<name>: missing <what>`` with exit code 1."""
    return fail(f"{name}: missing {what}")


def no_such_file(name: str, target: str) -> ExecutionResult:
    return fail(f"{name}: {target}: No such file or directory")
