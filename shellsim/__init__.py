"""
shellsim - A simulated Linux shell session

This package provides a command interpreter over a static virtual file
system, a catalogue of emulated Linux utilities, and a workflow predictor
that suggests the next command from partial input and history.
"""

__version__ = "0.1.0"

from .vfs import (
    VirtualFileSystem,
    VFSEntry,
    EntryKind,
    default_vfs,
)

from .registry import (
    CommandRegistry,
    CommandInfo,
    Category,
    LINUX_COMMANDS,
)

from .command_parser import (
    Command,
    CommandParser,
)

from .handlers import (
    ExecutionContext,
    ExecutionResult,
    HandlerTable,
    handler,
    default_handlers,
)

from .predictor import (
    WorkflowPredictor,
    WORKFLOW_PATTERNS,
)

from .terminal import (
    TerminalSession,
    TerminalConfig,
    CommandExecutor,
    CommandRecord,
    SessionState,
)

from .assistant import build_prompt

__all__ = [
    # Virtual file system
    "VirtualFileSystem",
    "VFSEntry",
    "EntryKind",
    "default_vfs",

    # Command registry
    "CommandRegistry",
    "CommandInfo",
    "Category",
    "LINUX_COMMANDS",

    # Command parser
    "Command",
    "CommandParser",

    # Handlers
    "ExecutionContext",
    "ExecutionResult",
    "HandlerTable",
    "handler",
    "default_handlers",

    # Prediction
    "WorkflowPredictor",
    "WORKFLOW_PATTERNS",

    # Terminal
    "TerminalSession",
    "TerminalConfig",
    "CommandExecutor",
    "CommandRecord",
    "SessionState",
    "build_prompt",

    # Version info
    "__version__",
]
