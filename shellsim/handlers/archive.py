"""Permission and archive handlers."""

import re
from typing import Optional

from .base import ExecutionContext, ExecutionResult, fail, handler, missing, ok
from .files import file_operands


OCTAL_MODE = re.compile(r'^[0-7]{3,4}$')
SYMBOLIC_MODE = re.compile(r'^[ugoa]*[-+=][rwxXst]*(,[ugoa]*[-+=][rwxXst]*)*$')

ARCHIVE_MEMBERS = ('documents/', 'documents/report.txt', 'projects/', 'projects/script.sh')


def symbolic_permissions(mode: str) -> str:
    """Render an octal mode such as ``755`` as ``rwxr-xr-x``."""
    text = ''
    for digit in mode[-3:]:
        value = int(digit)
        text += ('r' if value & 4 else '-') + ('w' if value & 2 else '-') + ('x' if value & 1 else '-')
    return text


# Permissions

@handler('chmod')
def chmod(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args)
    if len(operands) < 2:
        return missing('chmod')
    mode, target = operands[0], operands[1]

    if OCTAL_MODE.match(mode):
        return ok(f"mode of '{target}' changed to {mode.zfill(4)} ({symbolic_permissions(mode)})")
    if SYMBOLIC_MODE.match(mode):
        return ok(f"mode of '{target}' changed ({mode})")
    return fail(f"chmod: invalid mode: '{mode}'")


@handler('chown')
def chown(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args)
    if len(operands) < 2:
        return missing('chown')
    owner, target = operands[0], operands[1]
    user, _, group = owner.partition(':')
    if group:
        return ok(f"ownership of '{target}' changed to {user}:{group}")
    return ok(f"ownership of '{target}' changed to {user}")


@handler('chgrp')
def chgrp(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args)
    if len(operands) < 2:
        return missing('chgrp')
    return ok(f"group of '{operands[1]}' changed to {operands[0]}")


@handler('umask')
def umask(ctx: ExecutionContext) -> ExecutionResult:
    value = ctx.command.arg(0)
    if not value:
        return ok('0022')
    if not OCTAL_MODE.match(value.zfill(3)):
        return fail(f"umask: {value}: octal number out of range")
    return ok(f"umask set to {value}")


# Archives

def _tar_mode(ctx: ExecutionContext) -> Optional[str]:
    """The operation letter from ``-czf`` style or bare ``czf`` option bundles."""
    bundle = ctx.command.arg(0, '').lstrip('-')
    for letter in ('c', 'x', 't'):
        if letter in bundle:
            return letter
    return None


@handler('tar')
def tar(ctx: ExecutionContext) -> ExecutionResult:
    mode = _tar_mode(ctx)
    if mode is None:
        return fail("tar: You must specify one of the '-Acdtrux', '--delete' or "
                    "'--test-label' options\nTry 'tar --help' for more information.")

    operands = [token for token in ctx.args[1:] if token and not token.startswith('-')]
    if not operands:
        return missing('tar', 'archive name')
    archive, members = operands[0], operands[1:]
    verbose = 'v' in ctx.command.arg(0, '')

    if mode == 'c':
        if not members:
            return fail('tar: Cowardly refusing to create an empty archive')
        if verbose:
            return ok('\n'.join(members))
        return ok(f"Archive '{archive}' created with {len(members)} item(s)")
    if mode == 't':
        return ok('\n'.join(ARCHIVE_MEMBERS))
    if verbose:
        return ok('\n'.join(ARCHIVE_MEMBERS))
    return ok(f"Extracted '{archive}'")


@handler('gzip')
def gzip(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args)
    if not operands:
        return missing('gzip', 'file operand')
    if ctx.command.has_flag('-d'):
        return ok(f"{operands[0]} decompressed")
    return ok(f"{operands[0]} compressed to {operands[0]}.gz")


@handler('gunzip')
def gunzip(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args)
    if not operands:
        return missing('gunzip', 'file operand')
    name = operands[0]
    if not name.endswith('.gz'):
        return fail(f"gunzip: {name}: unknown suffix -- ignored")
    return ok(f"{name} decompressed to {name[:-3]}")


@handler('zip')
def zip_(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args)
    if not operands:
        return missing('zip', 'archive name')
    archive, members = operands[0], operands[1:]
    if not members:
        return missing('zip', 'files to add')
    lines = [f"  adding: {member} (deflated 45%)" for member in members]
    lines.append(f"Archive '{archive}' created")
    return ok('\n'.join(lines))


@handler('unzip')
def unzip(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args, ('-d',))
    if not operands:
        return missing('unzip', 'archive name')
    archive = operands[0]

    if ctx.command.has_flag('-l'):
        lines = [
            f"Archive:  {archive}",
            "  Length      Date    Time    Name",
            "---------  ---------- -----   ----",
        ]
        lines += [f"     1024  01-20-2024 10:30   {member}" for member in ARCHIVE_MEMBERS]
        lines += ["---------                     -------",
                  f"     {1024 * len(ARCHIVE_MEMBERS)}                     {len(ARCHIVE_MEMBERS)} files"]
        return ok('\n'.join(lines))

    destination = ctx.command.flag_value('-d')
    lines = [f"Archive:  {archive}"]
    for member in ARCHIVE_MEMBERS:
        path = f"{destination}/{member}" if destination else member
        verb = '   creating:' if member.endswith('/') else '  inflating:'
        lines.append(f"{verb} {path}")
    return ok('\n'.join(lines))
