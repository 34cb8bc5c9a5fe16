#!/usr/bin/env python3
"""
Command parser for the shellsim interpreter.

This module turns a raw command line into a ``Command``: the first token is
the command name, everything after it is kept as positional tokens in the
order typed.

Design Principles:
- Single responsibility: tokenize, don't execute
- Literal: the line is split on single spaces only. Quotes, escapes, globs,
  variables, pipes and redirections are passed through as ordinary tokens,
  and consecutive spaces yield empty tokens
- Permissive: numeric flag values fall back to a default instead of failing
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional


_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


def parse_int(text: Optional[str], default: int) -> int:
    """Parse a leading integer from ``text``; return ``default`` if there is none."""
    if not text:
        return default
    match = _LEADING_INT.match(text)
    if not match:
        return default
    try:
        return int(match.group(1))
    except ValueError:
        # more digits than int() accepts
        return default


@dataclass
class Command:
    """
    A tokenized command line.

    ``args`` holds every token after the name, flags included, exactly as
    typed. Helper methods answer the questions handlers ask of them.
    """
    name: str
    args: List[str] = field(default_factory=list)
    raw: str = ''

    def __str__(self) -> str:
        return ' '.join([self.name] + self.args)

    def arg(self, index: int, default: Optional[str] = None) -> Optional[str]:
        """Positional token at ``index`` (0 = first after the name); empty counts as missing."""
        if 0 <= index < len(self.args) and self.args[index]:
            return self.args[index]
        return default

    def has_flag(self, *flags: str) -> bool:
        """True if any of ``flags`` appears as a whole token."""
        return any(flag in self.args for flag in flags)

    def flag_value(self, flag: str, default: Optional[str] = None) -> Optional[str]:
        """The token following ``flag``, or ``default`` if the flag or value is absent."""
        if flag not in self.args:
            return default
        position = self.args.index(flag) + 1
        return self.arg(position, default)

    def int_flag(self, flag: str, default: int) -> int:
        """Numeric value following ``flag``; falls back to ``default`` on any parse failure."""
        if flag not in self.args:
            return default
        return parse_int(self.flag_value(flag), default)

    @property
    def argc(self) -> int:
        """Token count including the command name."""
        return len(self.args) + 1


class CommandParser:
    """Splits raw input lines into ``Command`` objects."""

    separator = ' '

    def parse(self, command_line: str) -> Command:
        """
        Parse a command line.

        The line is trimmed, then split on single spaces. An empty line
        yields a command with an empty name.
        """
        line = command_line.strip()
        if not line:
            return Command(name='', args=[], raw=command_line)

        tokens = line.split(self.separator)
        return Command(name=tokens[0], args=tokens[1:], raw=line)
