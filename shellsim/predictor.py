#!/usr/bin/env python3
"""
Workflow prediction for the shellsim interpreter.

Given what the user has typed so far and the session history, suggest the
whole command line they are most likely heading for.

Two passes are made:
1. Static table: the first pattern that the typed text is a prefix of
   (and that is not the typed text itself) wins.
2. History rules: when the table has nothing, the most recent command
   steers a handful of follow-up suggestions (git, network, search).

Prediction is a pure function of its inputs. It never returns the input
itself as a suggestion.
"""

import logging
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

MIN_INPUT_LENGTH = 3


# Insertion order is significant: the first matching key wins.
WORKFLOW_PATTERNS = MappingProxyType({
    # File operations
    'find': 'find . -name "*.txt" -type f',
    'find .': 'find . -name "*.txt" -type f',
    'grep': 'grep -r "pattern" .',
    'grep -': 'grep -r "pattern" .',
    'ls': 'ls -la',
    'cat': 'cat filename.txt',
    'tail': 'tail -f /var/log/syslog',
    'head': 'head -n 20 filename.txt',

    # Network diagnostics
    'ping': 'ping -c 4 google.com',
    'curl': 'curl -I https://google.com',
    'wget': 'wget https://example.com/file.txt',
    'netstat': 'netstat -tuln',
    'ss': 'ss -tuln',
    'traceroute': 'traceroute google.com',
    'nslookup': 'nslookup google.com',
    'dig': 'dig google.com',
    'lsof': 'lsof -i :80',

    # System monitoring
    'ps': 'ps aux | grep process',
    'top': 'top',
    'htop': 'htop',
    'df': 'df -h',
    'du': 'du -sh *',
    'free': 'free -h',

    # Permissions
    'chmod': 'chmod 755 filename',
    'chown': 'chown user:group filename',

    # Archives
    'tar': 'tar -czf archive.tar.gz directory/',
    'unzip': 'unzip file.zip',
    'zip': 'zip -r archive.zip directory/',

    # System info
    'uname': 'uname -a',
    'lscpu': 'lscpu',
    'lsblk': 'lsblk',
    'mount': 'mount | grep "^/"',
    'who': 'whoami',
    'date': 'date +"%Y-%m-%d %H:%M:%S"',
})


# (substring of the previous command, test on the typed text, suggestion)
HistoryRule = Tuple[str, Callable[[str], bool], str]

HISTORY_RULES: Tuple[HistoryRule, ...] = (
    ('git status', lambda typed: typed == 'git', 'git add .'),
    ('git add', lambda typed: typed == 'git', 'git commit -m "Update"'),
    ('git commit', lambda typed: typed == 'git', 'git push origin main'),
    ('ping', lambda typed: typed.startswith('tr'), 'traceroute google.com'),
    ('ping', lambda typed: typed.startswith('ns'), 'nslookup google.com'),
    ('find', lambda typed: typed.startswith('gr'), 'grep -r "pattern" .'),
)


def _command_text(record) -> str:
    """History entries may be records with a ``command`` field or plain strings."""
    return getattr(record, 'command', record)


class WorkflowPredictor:
    """
    Suggests a complete command line from partial input.

    The pattern table and rules are injected so tests can substitute
    their own; by default the built-in tables are used.
    """

    def __init__(self, patterns: Optional[Mapping[str, str]] = None,
                 rules: Optional[Sequence[HistoryRule]] = None):
        self.patterns = WORKFLOW_PATTERNS if patterns is None else patterns
        self.rules = HISTORY_RULES if rules is None else tuple(rules)

    def predict(self, partial: str, history: Sequence = ()) -> Optional[str]:
        """
        Return a suggestion for ``partial`` or None.

        Matching is case-insensitive on the trimmed input. Input shorter
        than ``MIN_INPUT_LENGTH`` never produces a suggestion.
        """
        typed = (partial or '').lower().strip()
        if len(typed) < MIN_INPUT_LENGTH:
            return None

        suggestion = self._match_pattern(typed)
        if suggestion is None and history:
            suggestion = self._match_history(typed, _command_text(history[-1]).lower())

        if suggestion is not None:
            logger.debug("Prediction for %r: %r", typed, suggestion)
        return suggestion

    def _match_pattern(self, typed: str) -> Optional[str]:
        for pattern, suggestion in self.patterns.items():
            key = pattern.lower()
            if key.startswith(typed) and key != typed and suggestion.lower() != typed:
                return suggestion
        return None

    def _match_history(self, typed: str, last_command: str) -> Optional[str]:
        for needle, accepts, suggestion in self.rules:
            if needle in last_command and accepts(typed) and suggestion.lower() != typed:
                return suggestion
        return None
