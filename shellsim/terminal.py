#!/usr/bin/env python3
"""
Terminal session for the shellsim interpreter.

This module ties the pieces together: it parses a submitted line, dispatches
it to a handler, records the result in the session history and keeps the
current directory consistent with the virtual file system.

Design Principles:
- One command at a time: a submission while another runs is rejected
- Nothing escapes: handler faults become output text with exit code 1
- Injectable clock, sleep and random source so runs are reproducible
- The ``clear`` input is handled by the session and never reaches a handler
"""

import itertools
import logging
import random
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from .command_parser import Command, CommandParser
from .handlers import ExecutionContext, ExecutionResult, HandlerTable, default_handlers
from .predictor import MIN_INPUT_LENGTH, WorkflowPredictor
from .registry import CommandRegistry
from .vfs import HOME_DIR, VirtualFileSystem, default_vfs

logger = logging.getLogger(__name__)

NOT_FOUND_EXIT_CODE = 127
CLEAR_COMMAND = 'clear'
EXIT_COMMANDS = ('exit', 'quit', 'logout')


@dataclass
class TerminalConfig:
    """Configuration for terminal session."""
    user: str = 'user'
    hostname: str = 'ai-terminal'
    home_dir: str = HOME_DIR
    initial_dir: str = HOME_DIR
    simulate_latency: bool = True
    min_delay: float = 0.2
    max_delay: float = 0.7
    prompt_format: str = '{user}@{hostname}:{cwd}$ '


@dataclass(frozen=True)
class CommandRecord:
    """One executed command and its result. Never modified after creation."""
    id: str
    command: str
    output: str
    timestamp: datetime
    exit_code: int
    directory: str


@dataclass
class SessionState:
    """
    Mutable state of one session.

    ``history`` only grows through ``commit`` and only shrinks through
    ``clear``.
    """
    current_directory: str = HOME_DIR
    history: List[CommandRecord] = field(default_factory=list)
    executing: bool = False

    def commit(self, record: CommandRecord, directory: Optional[str] = None) -> None:
        """Append ``record`` and move to ``directory`` if one is given."""
        self.history.append(record)
        if directory is not None:
            self.current_directory = directory

    def clear(self) -> None:
        """Drop every history entry. The current directory is kept."""
        self.history.clear()

    @property
    def last_command(self) -> Optional[str]:
        return self.history[-1].command if self.history else None


class CommandExecutor:
    """
    Runs one command line against a session state.

    The handler table, registry, clock, sleep function and random source
    are all injectable; the defaults give the interactive behaviour.
    """

    def __init__(self, vfs: Optional[VirtualFileSystem] = None,
                 handlers: Optional[HandlerTable] = None,
                 registry: Optional[CommandRegistry] = None,
                 config: Optional[TerminalConfig] = None,
                 clock: Callable[[], datetime] = datetime.now,
                 sleep: Callable[[float], None] = time.sleep,
                 rng: Optional[random.Random] = None,
                 id_factory: Optional[Callable[[datetime], str]] = None):
        """Initialize the executor."""
        self.vfs = vfs if vfs is not None else default_vfs()
        self.handlers = handlers if handlers is not None else default_handlers()
        self.registry = registry if registry is not None else CommandRegistry()
        self.config = config or TerminalConfig()
        self.parser = CommandParser()
        self.clock = clock
        self.sleep = sleep
        self.rng = rng or random.Random()
        self._counter = itertools.count(1)
        self.id_factory = id_factory or self._default_id

    @property
    def delay_range(self) -> Tuple[float, float]:
        """Bounds of the simulated processing delay, in seconds."""
        if not self.config.simulate_latency:
            return (0.0, 0.0)
        return (self.config.min_delay, self.config.max_delay)

    def execute(self, raw_line: str, state: SessionState) -> CommandRecord:
        """
        Execute ``raw_line`` and commit the resulting record to ``state``.

        ``state.executing`` is true for the duration of the call and is
        reset even if something unexpected escapes.
        """
        state.executing = True
        try:
            timestamp = self.clock()
            record_id = self.id_factory(timestamp)
            self._simulate_latency()

            command = self.parser.parse(raw_line)
            result = self._dispatch(command, state, timestamp)

            new_directory = None
            if result.directory is not None:
                if self.vfs.exists(result.directory):
                    new_directory = result.directory
                else:
                    logger.warning("Handler %r returned unknown directory %r",
                                   command.name, result.directory)

            record = CommandRecord(
                id=record_id,
                command=command.raw,
                output=result.output,
                timestamp=timestamp,
                exit_code=result.exit_code,
                directory=state.current_directory,
            )
            state.commit(record, new_directory)
            return record
        finally:
            state.executing = False

    def _dispatch(self, command: Command, state: SessionState,
                  timestamp: datetime) -> ExecutionResult:
        """Look up and run the handler for ``command``."""
        func = self.handlers.get(command.name)
        if func is None:
            logger.debug("Unknown command: %r", command.name)
            return ExecutionResult(
                output=(f"{command.name}: command not found\n\n"
                        "Try 'help' to see available commands or ask the AI "
                        "assistant for guidance!"),
                exit_code=NOT_FOUND_EXIT_CODE,
            )

        context = ExecutionContext(
            command=command,
            current_directory=state.current_directory,
            vfs=self.vfs,
            registry=self.registry,
            history=tuple(state.history),
            now=timestamp,
            rng=self.rng,
            user=self.config.user,
            hostname=self.config.hostname,
            home_dir=self.config.home_dir,
        )
        logger.debug("Dispatching %r in %s", command.raw, state.current_directory)
        try:
            return func(context)
        except Exception as e:
            logger.exception("Handler for %r failed", command.name)
            return ExecutionResult(output=f"Error executing command: {e}", exit_code=1)

    def _simulate_latency(self) -> None:
        low, high = self.delay_range
        if high <= 0:
            return
        self.sleep(self.rng.uniform(low, high))

    def _default_id(self, timestamp: datetime) -> str:
        return f"{int(timestamp.timestamp() * 1000)}-{next(self._counter)}"


class TerminalSession:
    """
    Main terminal session manager.

    This class owns the session state and applies the input rules around
    the executor: blank lines are ignored, ``clear`` resets the history and
    nothing new is accepted while a command is running.
    """

    def __init__(self, config: Optional[TerminalConfig] = None,
                 vfs: Optional[VirtualFileSystem] = None,
                 executor: Optional[CommandExecutor] = None,
                 predictor: Optional[WorkflowPredictor] = None):
        """Initialize terminal session."""
        self.config = config or TerminalConfig()
        self.vfs = vfs if vfs is not None else default_vfs()
        self.executor = executor or CommandExecutor(self.vfs, config=self.config)
        self.predictor = predictor or WorkflowPredictor()
        self.running = False

        initial_dir = self.config.initial_dir
        if not self.vfs.exists(initial_dir):
            logger.warning("Initial directory %r does not exist, using %r",
                           initial_dir, self.config.home_dir)
            initial_dir = self.config.home_dir
        self.state = SessionState(current_directory=initial_dir)

    @property
    def current_directory(self) -> str:
        return self.state.current_directory

    @property
    def history(self) -> List[CommandRecord]:
        return self.state.history

    @property
    def executing(self) -> bool:
        return self.state.executing

    def submit(self, command_line: str) -> Optional[CommandRecord]:
        """
        Submit a line for execution.

        Returns the new record, or None when nothing was executed (blank
        input, ``clear``, or a command already running).
        """
        line = (command_line or '').strip()
        if not line:
            return None
        if self.state.executing:
            logger.debug("Rejected %r: a command is already executing", line)
            return None
        if line == CLEAR_COMMAND:
            self.clear()
            return None
        return self.executor.execute(line, self.state)

    def clear(self) -> None:
        """Empty the history. Allowed at any time."""
        self.state.clear()

    def suggest(self, partial: str) -> Optional[str]:
        """Prediction for the text being typed, if the input is long enough."""
        if len((partial or '').strip()) < MIN_INPUT_LENGTH or self.state.executing:
            return None
        return self.predictor.predict(partial, self.state.history)

    def accept_suggestion(self, partial: str) -> str:
        """What the input becomes when the user accepts the suggestion (Tab)."""
        suggestion = self.suggest(partial)
        return suggestion if suggestion is not None else partial

    def assistant_context(self) -> Tuple[str, Optional[str]]:
        """The current directory and last command, as handed to the assistant."""
        return self.state.current_directory, self.state.last_command

    def get_prompt(self) -> str:
        """Generate the command prompt."""
        cwd = self.state.current_directory
        home = self.config.home_dir
        if cwd == home or cwd.startswith(home + '/'):
            display_cwd = '~' + cwd[len(home):]
        else:
            display_cwd = cwd

        return self.config.prompt_format.format(
            user=self.config.user,
            hostname=self.config.hostname,
            cwd=display_cwd,
        )

    def run_command(self, command_line: str) -> str:
        """
        Run a single command and return output.

        This method is useful for non-interactive use.
        """
        record = self.submit(command_line)
        return record.output if record is not None else ''

    def run_interactive(self):
        """Run the interactive REPL loop."""
        self.running = True
        self._install_completer()

        print("Welcome to AI Terminal")
        print("Type 'help' for available commands, Tab to accept a suggestion, 'exit' to quit")
        print()

        while self.running:
            try:
                command_line = input(self.get_prompt())
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                print()
                break

            if command_line.strip() in EXIT_COMMANDS:
                break

            record = self.submit(command_line)
            if record is not None and record.output:
                print(record.output)

        self.running = False
        print("Goodbye!")

    def _install_completer(self) -> None:
        """Bind Tab to the workflow prediction when readline is available."""
        try:
            import readline
        except ImportError:
            return

        def complete(text, state):
            if state > 0:
                return None
            return self.suggest(readline.get_line_buffer())

        readline.set_completer_delims('')
        readline.set_completer(complete)
        readline.parse_and_bind('tab: complete')


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the terminal emulator."""
    import argparse

    from .logging_config import setup_logging

    parser = argparse.ArgumentParser(description='AI Terminal - simulated Linux shell')
    parser.add_argument('-c', '--command', help='Execute command and exit')
    parser.add_argument('-u', '--user', help='Set username', default='user')
    parser.add_argument('-d', '--directory', help='Set initial directory', default=HOME_DIR)
    parser.add_argument('--no-delay', action='store_true', help='Disable simulated command latency')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    config = TerminalConfig(
        user=args.user,
        initial_dir=args.directory,
        simulate_latency=not args.no_delay,
    )
    session = TerminalSession(config=config)

    if args.command is None:
        session.run_interactive()
        return 0

    record = session.submit(args.command)
    if record is None:
        return 0
    if record.output:
        print(record.output)
    return record.exit_code


if __name__ == '__main__':
    sys.exit(main())
