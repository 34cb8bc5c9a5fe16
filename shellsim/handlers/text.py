"""Text processing handlers."""

from .base import ExecutionContext, ExecutionResult, fail, handler, missing, ok
from .files import file_operands, strip_quotes


SAMPLE_LINES = ('apple', 'banana', 'cherry', 'date', 'fig', 'grape')


@handler('echo')
def echo(ctx: ExecutionContext) -> ExecutionResult:
    """Join the arguments back with single spaces; ``-n`` is accepted and dropped."""
    args = ctx.args
    if args and args[0] in ('-n', '-e'):
        args = args[1:]
    return ok(' '.join(args))


@handler('sort')
def sort(ctx: ExecutionContext) -> ExecutionResult:
    if not file_operands(ctx.args):
        return missing('sort', 'file operand')
    lines = sorted(SAMPLE_LINES, reverse=ctx.command.has_flag('-r'))
    return ok('\n'.join(lines))


@handler('uniq')
def uniq(ctx: ExecutionContext) -> ExecutionResult:
    if not file_operands(ctx.args):
        return missing('uniq', 'file operand')
    lines = SAMPLE_LINES[:3]
    if ctx.command.has_flag('-c'):
        return ok('\n'.join(f"      1 {line}" for line in lines))
    return ok('\n'.join(lines))


@handler('cut')
def cut(ctx: ExecutionContext) -> ExecutionResult:
    """Field (``-d``/``-f``) or character (``-c``) extraction over sample data."""
    tokens = ctx.args
    has_delimiter = any(token.startswith('-d') for token in tokens)
    has_fields = any(token.startswith('-f') for token in tokens)

    if has_delimiter and has_fields:
        return ok('user\nroot\ndaemon\nbin')
    if any(token.startswith('-c') for token in tokens):
        return ok('abcdefghij\nklmnopqrst\nuvwxyz1234')
    return fail('cut: you must specify a list of bytes, characters, or fields')


@handler('tr')
def tr(ctx: ExecutionContext) -> ExecutionResult:
    if ctx.command.argc < 3:
        return missing('tr')
    return ok('Character translation completed')


@handler('sed')
def sed(ctx: ExecutionContext) -> ExecutionResult:
    target = ctx.command.arg(len(ctx.args) - 1)
    if ctx.command.argc < 2 or not target:
        return missing('sed', 'script or file')
    return ok(f"Text substitution completed on {target}")


@handler('awk')
def awk(ctx: ExecutionContext) -> ExecutionResult:
    target = ctx.command.arg(len(ctx.args) - 1)
    if ctx.command.argc < 2 or not target:
        return missing('awk', 'script or file')
    return ok('field1\nfield2\nfield3')


@handler('basename')
def basename(ctx: ExecutionContext) -> ExecutionResult:
    path = ctx.command.arg(0)
    if not path:
        return missing('basename')
    name = path.split('/')[-1]
    suffix = ctx.command.arg(1)
    if suffix and name.endswith(suffix) and name != suffix:
        name = name[:-len(suffix)]
    return ok(name)


@handler('dirname')
def dirname(ctx: ExecutionContext) -> ExecutionResult:
    path = ctx.command.arg(0)
    if not path:
        return missing('dirname')
    parts = path.split('/')
    parts.pop()
    return ok('/'.join(parts) or '/')


@handler('xargs')
def xargs(ctx: ExecutionContext) -> ExecutionResult:
    if ctx.command.argc < 2:
        return missing('xargs', 'command')
    return ok('xargs: executing command with piped input')


@handler('tee')
def tee(ctx: ExecutionContext) -> ExecutionResult:
    target = ctx.command.arg(0)
    if target == '-a':
        target = ctx.command.arg(1)
    if not target:
        return missing('tee', 'file operand')
    return ok(f"Output written to both stdout and '{strip_quotes(target)}'")
