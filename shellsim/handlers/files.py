"""
Navigation, listing, file content, file operation and search handlers.

File content commands only know the files registered with the virtual file
system (``readme.txt``, ``.bashrc`` and friends), matched by the literal
operand typed. File operations acknowledge the request but never mutate the
file system.
"""

import fnmatch
import logging
import re
from typing import Iterable, List, Optional, Tuple

from .base import (
    ExecutionContext, ExecutionResult, fail, handler, missing, no_such_file, ok,
)
from ..vfs import DEFAULT_DIR_SIZE, VFSEntry, iter_tree

logger = logging.getLogger(__name__)

FILE_OWNER = 'user'


def strip_quotes(token: str) -> str:
    """Remove one layer of matching surrounding quotes."""
    if len(token) >= 2 and token[0] == token[-1] and token[0] in ('"', "'"):
        return token[1:-1]
    return token


def file_operands(args: Iterable[str], value_flags: Iterable[str] = ()) -> List[str]:
    """Operands that are neither flags nor the values following ``value_flags``."""
    operands = []
    skip_next = False
    for token in args:
        if skip_next:
            skip_next = False
            continue
        if token in value_flags:
            skip_next = True
            continue
        if token and not token.startswith('-'):
            operands.append(token)
    return operands


def first_file(ctx: ExecutionContext, value_flags: Iterable[str] = ()) -> Optional[str]:
    operands = file_operands(ctx.args, value_flags)
    return operands[0] if operands else None


def lookup_entry(ctx: ExecutionContext, name: str) -> Optional[VFSEntry]:
    """Find the listing entry for ``name`` in the cwd, then the home directory."""
    if name.startswith('/'):
        parent, _, base = name.rpartition('/')
        return ctx.vfs.find_entry(parent or '/', base)
    return (ctx.vfs.find_entry(ctx.current_directory, name)
            or ctx.vfs.find_entry(ctx.home_dir, name))


def mode_bits(permissions: str) -> str:
    """Convert ``-rw-r--r--`` into ``0644``."""
    value = 0
    for char in permissions[1:10]:
        value = (value << 1) | (char not in '-')
    return f"0{value:o}" if value < 0o1000 else f"{value:o}"


def format_date(ctx: ExecutionContext, entry: VFSEntry) -> str:
    when = entry.modified or ctx.now
    return f"{when.month}/{when.day}/{when.year}"


# Navigation

@handler('pwd')
def pwd(ctx: ExecutionContext) -> ExecutionResult:
    return ok(ctx.current_directory)


@handler('cd')
def cd(ctx: ExecutionContext) -> ExecutionResult:
    """Change directory; an unknown target leaves the directory unchanged."""
    target = ctx.command.arg(0)
    new_directory = ctx.vfs.resolve(ctx.current_directory, target, ctx.home_dir)

    if not ctx.vfs.exists(new_directory):
        return fail(f"cd: {target}: No such file or directory")
    return ok('', directory=new_directory)


@handler('ls')
def ls(ctx: ExecutionContext) -> ExecutionResult:
    """List a directory; unknown paths list as empty."""
    operands = [token for token in ctx.args if token and not token.startswith('-')]
    if operands:
        path = ctx.vfs.resolve(ctx.current_directory, operands[0], ctx.home_dir)
    else:
        path = ctx.current_directory
    items = ctx.vfs.listing(path)

    if ctx.command.has_flag('-l', '-la', '-al', '-lh', '-lah'):
        lines = []
        for item in items:
            lines.append(
                f"{item.permissions or 'drwxr-xr-x'} 1 {FILE_OWNER} {FILE_OWNER} "
                f"{item.size or DEFAULT_DIR_SIZE} {format_date(ctx, item)} {item.name}"
            )
        return ok('\n'.join(lines))

    return ok('  '.join(item.name for item in items))


# File content

def _read_operand(ctx: ExecutionContext, value_flags: Iterable[str] = ()
                  ) -> Tuple[Optional[str], Optional[str], Optional[ExecutionResult]]:
    """Return ``(name, content, error)`` for the first file operand."""
    name = first_file(ctx, value_flags)
    if name is None:
        return None, None, missing(ctx.name, 'file operand')
    content = ctx.vfs.read(name)
    if content is None:
        return name, None, no_such_file(ctx.name, name)
    return name, content, None


@handler('cat')
def cat(ctx: ExecutionContext) -> ExecutionResult:
    name, content, error = _read_operand(ctx)
    if error:
        return error
    if ctx.command.has_flag('-n'):
        numbered = [f"{i:>6}\t{line}" for i, line in enumerate(content.splitlines(), 1)]
        return ok('\n'.join(numbered))
    return ok(content)


@handler('less', 'more')
def pager(ctx: ExecutionContext) -> ExecutionResult:
    name, content, error = _read_operand(ctx)
    if error:
        return error
    return ok(
        f"Viewing {name} (press 'q' to quit)\n\n{content}\n\n"
        f"[Press 'q' to quit, 'space' for next page]"
    )


@handler('head')
def head(ctx: ExecutionContext) -> ExecutionResult:
    count = ctx.command.int_flag('-n', 10)
    name, content, error = _read_operand(ctx, ('-n',))
    if error:
        return error
    return ok('\n'.join(content.splitlines()[:max(count, 0)]))


@handler('tail')
def tail(ctx: ExecutionContext) -> ExecutionResult:
    """Last lines of a file; ``-f`` alone follows the system log."""
    count = ctx.command.int_flag('-n', 10)
    follow = ctx.command.has_flag('-f')
    name = first_file(ctx, ('-n',))

    if name is None and follow:
        name = '/var/log/syslog'
    if name is None:
        return missing('tail', 'file operand')

    content = ctx.vfs.read(name)
    if content is None:
        return no_such_file('tail', name)

    lines = content.splitlines()
    output = '\n'.join(lines[-count:] if count > 0 else [])
    if follow:
        output += '\n\n[Following log file - press Ctrl+C to stop]'
    return ok(output)


@handler('wc')
def wc(ctx: ExecutionContext) -> ExecutionResult:
    name, content, error = _read_operand(ctx)
    if error:
        return error

    lines = len(content.splitlines())
    words = len(content.split())
    chars = len(content.encode('utf-8'))

    if ctx.command.has_flag('-l'):
        return ok(f"{lines} {name}")
    if ctx.command.has_flag('-w'):
        return ok(f"{words} {name}")
    if ctx.command.has_flag('-c'):
        return ok(f"{chars} {name}")
    return ok(f"{lines:>4} {words:>4} {chars:>4} {name}")


@handler('stat')
def stat(ctx: ExecutionContext) -> ExecutionResult:
    name = first_file(ctx)
    if name is None:
        return missing('stat', 'file operand')
    content = ctx.vfs.read(name)
    if content is None:
        return fail(f"stat: cannot stat '{name}': No such file or directory")

    entry = lookup_entry(ctx, name)
    size = entry.size if entry and entry.size is not None else len(content.encode('utf-8'))
    permissions = (entry.permissions if entry and entry.permissions else '-rw-r--r--')
    blocks = (size + 4095) // 4096 * 8
    stamp = (entry.modified if entry and entry.modified else ctx.now)
    stamp = stamp.strftime('%Y-%m-%d %H:%M:%S.000000000 +0000')

    return ok('\n'.join([
        f"  File: {name}",
        f"  Size: {size:<10}\tBlocks: {blocks:<10} IO Block: 4096   regular file",
        "Device: 801h/2049d\tInode: 123456      Links: 1",
        f"Access: ({mode_bits(permissions)}/{permissions})  "
        f"Uid: ( 1000/{FILE_OWNER:>8})   Gid: ( 1000/{FILE_OWNER:>8})",
        f"Access: {stamp}",
        f"Modify: {stamp}",
        f"Change: {stamp}",
    ]))


@handler('file')
def file_type(ctx: ExecutionContext) -> ExecutionResult:
    name = first_file(ctx)
    if name is None:
        return missing('file', 'file operand')
    content = ctx.vfs.read(name)
    if content is None:
        return fail(f"{name}: cannot open (No such file or directory)")
    if content.startswith('#!/bin/bash'):
        return ok(f"{name}: Bourne-Again shell script, ASCII text executable")
    return ok(f"{name}: ASCII text")


# File operations (acknowledged, not applied)

@handler('mkdir')
def mkdir(ctx: ExecutionContext) -> ExecutionResult:
    target = first_file(ctx)
    if target is None:
        return missing('mkdir')
    return ok(f"Directory '{target}' created")


@handler('rmdir')
def rmdir(ctx: ExecutionContext) -> ExecutionResult:
    target = first_file(ctx)
    if target is None:
        return missing('rmdir')
    return ok(f"Directory '{target}' removed")


@handler('rm')
def rm(ctx: ExecutionContext) -> ExecutionResult:
    target = first_file(ctx)
    if target is None:
        return missing('rm')
    if ctx.command.has_flag('-rf', '-fr', '-r', '-R'):
        return ok(f"Removed '{target}' and its contents")
    return ok(f"Removed '{target}'")


@handler('cp', 'mv')
def copy_or_move(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args)
    if len(operands) < 2:
        return missing(ctx.name, 'file operand')
    verb = 'copied' if ctx.name == 'cp' else 'moved'
    return ok(f"'{operands[0]}' {verb} to '{operands[1]}'")


@handler('touch')
def touch(ctx: ExecutionContext) -> ExecutionResult:
    target = first_file(ctx)
    if target is None:
        return missing('touch', 'file operand')
    return ok(f"File '{target}' created/updated")


@handler('ln')
def ln(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args)
    if len(operands) < 2:
        return missing('ln')
    target, link = operands[:2]
    if ctx.command.has_flag('-s', '-sf'):
        return ok(f"Symbolic link '{link}' created pointing to '{target}'")
    return ok(f"Hard link '{link}' created for '{target}'")


# Search

@handler('find')
def find(ctx: ExecutionContext) -> ExecutionResult:
    """
    Walk the virtual tree below a start path.

    Supports ``-name PATTERN`` (glob, quotes stripped) and ``-type f|d``.
    Paths are printed relative to the start path as typed.
    """
    start = ctx.command.arg(0, '.')
    if start.startswith('-'):
        start = '.'

    if start == '.':
        root = ctx.current_directory
    else:
        root = ctx.vfs.resolve(ctx.current_directory, start, ctx.home_dir)
    if not ctx.vfs.exists(root):
        return fail(f"find: '{start}': No such file or directory")

    pattern = strip_quotes(ctx.command.flag_value('-name', '*'))
    kind = ctx.command.flag_value('-type')
    prefix = '' if root == '/' else root

    matches = []
    for path, entry in iter_tree(ctx.vfs):
        if path != root and not path.startswith(prefix + '/'):
            continue
        if kind == 'f' and not entry.is_file():
            continue
        if kind == 'd' and not entry.is_dir():
            continue
        if fnmatch.fnmatch(entry.name, pattern):
            relative = start.rstrip('/') + ('' if path == root else path[len(prefix):])
            matches.append(f"{relative}/{entry.name}")

    return ok('\n'.join(matches))


def _line_matcher(ctx: ExecutionContext, pattern: str):
    flags = re.IGNORECASE if ctx.command.has_flag('-i') else 0
    if ctx.name != 'fgrep':
        try:
            compiled = re.compile(pattern, flags)
            return lambda line: compiled.search(line) is not None
        except re.error:
            logger.debug("grep pattern %r is not a valid regex, matching literally", pattern)
    if flags:
        needle = pattern.lower()
        return lambda line: needle in line.lower()
    return lambda line: pattern in line


@handler('grep', 'egrep', 'fgrep')
def grep(ctx: ExecutionContext) -> ExecutionResult:
    """
    Search a registered file for lines matching a pattern.

    ``-r`` produces a simulated recursive report for the pattern.
    """
    operands = [strip_quotes(token) for token in ctx.args if token and not token.startswith('-')]

    if ctx.command.has_flag('-r', '-R', '-ri', '-ir'):
        pattern = operands[0] if operands else 'pattern'
        return ok('\n'.join([
            f"./documents/report.txt:Found {pattern} in line 15",
            f"./projects/ai-terminal/README.md:{pattern} appears in documentation",
            f"./projects/web-app/index.html:HTML contains {pattern} reference",
        ]))

    if not operands:
        return missing(ctx.name, 'pattern')
    if len(operands) < 2:
        return missing(ctx.name, 'file operand')

    pattern, name = operands[0], operands[1]
    content = ctx.vfs.read(name)
    if content is None:
        return no_such_file(ctx.name, name)

    matches = _line_matcher(ctx, pattern)
    found = [line for line in content.splitlines() if matches(line)]
    if ctx.command.has_flag('-c'):
        return ExecutionResult(output=str(len(found)), exit_code=0 if found else 1)
    return ExecutionResult(output='\n'.join(found), exit_code=0 if found else 1)


@handler('locate')
def locate(ctx: ExecutionContext) -> ExecutionResult:
    pattern = ctx.command.arg(0)
    if not pattern:
        return missing('locate', 'pattern')
    pattern = strip_quotes(pattern)
    return ok(f"/home/user/documents/{pattern}\n/usr/share/doc/{pattern}\n/var/log/{pattern}.log")


@handler('which')
def which(ctx: ExecutionContext) -> ExecutionResult:
    name = ctx.command.arg(0)
    if not name:
        return missing('which', 'argument')
    return ok(f"/usr/bin/{name}")


@handler('whereis')
def whereis(ctx: ExecutionContext) -> ExecutionResult:
    name = ctx.command.arg(0)
    if not name:
        return missing('whereis', 'argument')
    return ok(f"{name}: /usr/bin/{name} /usr/share/man/man1/{name}.1.gz")
