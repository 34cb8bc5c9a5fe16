#!/usr/bin/env python3
"""
Virtual file system for the shellsim interpreter.

The file system is a static, read-only mapping from absolute directory paths
to ordered listings of entries. There are no parent/child links between
listings: a directory is reachable only if its full path is a key.

Design Principles:
- Immutable: listings are tuples of frozen entries behind a read-only mapping
- Injectable: the seed tree is data, so tests can substitute their own
- Tolerant lookups for handlers, strict lookups (``vfs[path]``) for callers
  that want a KeyError
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Optional, Tuple


HOME_DIR = '/home/user'
DEFAULT_DIR_SIZE = 4096


class EntryKind(Enum):
    """Kinds of file system entries."""
    FILE = 'file'
    DIRECTORY = 'directory'


@dataclass(frozen=True)
class VFSEntry:
    """A single named entry inside a directory listing."""
    name: str
    kind: EntryKind
    size: Optional[int] = None
    permissions: Optional[str] = None
    modified: Optional[datetime] = None

    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE


def directory(name: str, permissions: str = 'drwxr-xr-x') -> VFSEntry:
    """Shorthand for a directory entry."""
    return VFSEntry(name, EntryKind.DIRECTORY, permissions=permissions)


def regular_file(name: str, size: int, permissions: str = '-rw-r--r--') -> VFSEntry:
    """Shorthand for a regular file entry."""
    return VFSEntry(name, EntryKind.FILE, size=size, permissions=permissions)


class VirtualFileSystem(Mapping):
    """
    Read-only mapping of absolute directory path -> tuple of VFSEntry.

    File contents are kept separately, keyed by the literal name a user types
    (``readme.txt``, ``/var/log/syslog``), since content commands in this
    shell match file operands by name rather than by resolved path.
    """

    def __init__(self, tree: Mapping, files: Optional[Mapping] = None):
        """Build the file system from a seed tree and optional file contents."""
        self._tree = MappingProxyType({
            path: tuple(entries) for path, entries in tree.items()
        })
        self._files = MappingProxyType(dict(files or {}))

    # Mapping protocol

    def __getitem__(self, path: str) -> Tuple[VFSEntry, ...]:
        return self._tree[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._tree)

    def __len__(self) -> int:
        return len(self._tree)

    # Queries

    def exists(self, path: str) -> bool:
        """Return True if ``path`` is a directory key."""
        return path in self._tree

    def listing(self, path: str) -> Tuple[VFSEntry, ...]:
        """Entries for ``path``, or an empty tuple if the path is unknown."""
        return self._tree.get(path, ())

    def find_entry(self, directory_path: str, name: str) -> Optional[VFSEntry]:
        """Look up a named entry within a single listing."""
        for entry in self.listing(directory_path):
            if entry.name == name:
                return entry
        return None

    def read(self, name: str) -> Optional[str]:
        """Return the content registered under ``name`` or None."""
        return self._files.get(name)

    def has_file(self, name: str) -> bool:
        return name in self._files

    @property
    def files(self) -> Mapping:
        """Read-only view of the registered file contents."""
        return self._files

    # Path arithmetic

    @staticmethod
    def parent(path: str) -> str:
        """Drop the last path segment; the parent of root is root."""
        parts = [part for part in path.split('/') if part]
        if parts:
            parts.pop()
        return '/' + '/'.join(parts)

    def resolve(self, current: str, target: Optional[str], home: str = HOME_DIR) -> str:
        """
        Resolve a ``cd``-style target against ``current``.

        ``~`` or no target is the home directory, ``..`` is the parent, a
        leading ``/`` is taken verbatim and anything else is appended to the
        current directory. No further normalization is performed.
        """
        if not target or target == '~':
            return home
        if target == '..':
            return self.parent(current)
        if target.startswith('/'):
            return target
        if current == '/':
            return f'/{target}'
        return f'{current}/{target}'


README_TEXT = """Welcome to AI Terminal v2.0!

This Linux terminal emulator features:

AI-POWERED WORKFLOW PREDICTION
- Start typing any command and watch the predictor suggest your next step
- Press TAB to accept predictions
- Context-aware suggestions based on your recent commands

ADVANCED NETWORKING TOOLS
- ping, curl, wget, traceroute, nslookup, dig
- netstat, ss for connection monitoring
- Simulated network diagnostics

COMPREHENSIVE LINUX COMMANDS
- File operations: ls, cd, pwd, cat, find, grep
- System monitoring: ps, top, df, du, free
- Permissions: chmod, chown
- Archives: tar, unzip

FEATURES
- Predictive command completion
- Context-aware AI assistance
- Intelligent workflow suggestions

Try typing "find" or "git" and see what happens!"""

BASHRC_TEXT = """# ~/.bashrc: executed by bash(1) for non-login shells.

export PATH=$HOME/bin:/usr/local/bin:$PATH
export EDITOR=nano

# AI Terminal aliases
alias ll='ls -la'
alias la='ls -A'
alias l='ls -CF'
alias ..='cd ..'
alias ...='cd ../..'

# Network shortcuts
alias ports='netstat -tuln'
alias connections='ss -tuln'
alias myip='curl -s ifconfig.me'

# Prediction shortcuts
alias predict='echo "Workflow prediction active - just start typing!"'

# Welcome message
echo "AI Terminal v2.0 - Linux with predictive superpowers!\""""

SCRIPT_TEXT = """#!/bin/bash
# Build and serve the web app
set -e
cd "$(dirname "$0")/web-app"
npm install
npm run build"""

SYSLOG_TEXT = """Jan 20 10:30:15 ai-terminal systemd[1]: Started AI Terminal Service
Jan 20 10:30:16 ai-terminal kernel: [12345.678] AI Terminal: Prediction engine initialized
Jan 20 10:30:17 ai-terminal ai-terminal[1234]: Command prediction engine ready
Jan 20 10:30:18 ai-terminal ai-terminal[1234]: Network diagnostics module loaded
Jan 20 10:30:19 ai-terminal ai-terminal[1234]: File system monitor active"""


DEFAULT_TREE: Dict[str, Tuple[VFSEntry, ...]] = {
    '/': (
        directory('home'),
        directory('etc'),
        directory('var'),
        directory('usr'),
        directory('bin'),
        directory('tmp', 'drwxrwxrwt'),
    ),
    '/home': (
        directory('user'),
        directory('guest'),
    ),
    '/home/guest': (),
    '/home/user': (
        directory('documents'),
        directory('downloads'),
        directory('projects'),
        regular_file('.bashrc', 3423),
        regular_file('readme.txt', 1024),
    ),
    '/home/user/documents': (
        regular_file('report.txt', 2048),
        regular_file('notes.md', 512),
    ),
    '/home/user/downloads': (
        regular_file('image.jpg', 245760),
    ),
    '/home/user/projects': (
        directory('ai-terminal'),
        directory('web-app'),
        regular_file('script.sh', 512, '-rwxr-xr-x'),
    ),
    '/home/user/projects/ai-terminal': (
        regular_file('README.md', 1536),
    ),
    '/home/user/projects/web-app': (
        regular_file('index.html', 768),
    ),
    '/etc': (
        regular_file('hostname', 12),
        regular_file('hosts', 221),
        regular_file('passwd', 1843),
    ),
    '/var': (
        directory('log'),
    ),
    '/var/log': (
        regular_file('syslog', 58213, '-rw-r-----'),
    ),
    '/usr': (
        directory('bin'),
        directory('lib'),
        directory('share'),
    ),
    '/bin': (),
    '/tmp': (),
}

DEFAULT_FILES: Dict[str, str] = {
    'readme.txt': README_TEXT,
    '.bashrc': BASHRC_TEXT,
    'script.sh': SCRIPT_TEXT,
    '/var/log/syslog': SYSLOG_TEXT,
}


def default_vfs() -> VirtualFileSystem:
    """Build the seed file system used by interactive sessions."""
    return VirtualFileSystem(DEFAULT_TREE, DEFAULT_FILES)


def iter_tree(vfs: VirtualFileSystem) -> Iterable[Tuple[str, VFSEntry]]:
    """Yield ``(directory, entry)`` pairs across the whole tree in key order."""
    for path in vfs:
        for entry in vfs.listing(path):
            yield path, entry
