"""
Process, system information and session handlers.

``help`` and ``history`` are the only handlers that look past the command
line: ``help`` reads the registry, ``history`` reads the session history
handed in through the context.
"""

import calendar

from .base import ExecutionContext, ExecutionResult, fail, handler, missing, ok
from .files import file_operands, strip_quotes
from ..command_parser import parse_int
from ..registry import render_help


KERNEL_RELEASE = '5.15.0-ai'
MACHINE = 'x86_64'
UPTIME = ' 10:30:15 up 2 days,  3:45,  2 users,  load average: 0.15, 0.25, 0.30'
MAX_WATCH_INTERVAL = 86400

SHELL_BUILTINS = frozenset({
    'alias', 'bg', 'cd', 'echo', 'fg', 'help', 'history', 'jobs', 'kill',
    'pwd', 'type', 'umask', 'unalias',
})

BUILTIN_TOPICS = {
    'help': """help - Show the command reference

Usage:
    help [COMMAND]
    help -k TERM

Examples:
    help                   # Show all commands
    help ls                # Show help for ls
    help -k dns            # Search command descriptions""",
    'clear': """clear - Clear the terminal history

Usage:
    clear

Clears every entry in the session history. The current directory is kept.""",
}


# Processes

@handler('ps')
def ps(ctx: ExecutionContext) -> ExecutionResult:
    if ctx.command.has_flag('aux', '-ef', '-aux'):
        return ok('\n'.join([
            "USER       PID %CPU %MEM    VSZ   RSS TTY      STAT START   TIME COMMAND",
            "root         1  0.0  0.1  225316  9876 ?        Ss   09:00   0:01 /sbin/init",
            "root         2  0.0  0.0      0     0 ?        S    09:00   0:00 [kthreadd]",
            f"{ctx.user:<8}  1234  0.5  2.1 1234567 87654 pts/0    Sl   09:30   0:05 ai-terminal",
            f"{ctx.user:<8}  1235  0.1  0.5  123456  5432 pts/0    S    09:31   0:01 node server.js",
            f"{ctx.user:<8}  1236  0.0  0.1   12345  1234 pts/0    R+   09:32   0:00 ps aux",
        ]))
    return ok('\n'.join([
        "  PID TTY          TIME CMD",
        " 1234 pts/0    00:00:05 ai-terminal",
        " 1235 pts/0    00:00:01 node",
        " 1236 pts/0    00:00:00 ps",
    ]))


@handler('top', 'htop')
def top(ctx: ExecutionContext) -> ExecutionResult:
    """A single snapshot; the interactive refresh is not emulated."""
    return ok('\n'.join([
        f"top - {UPTIME.strip()}",
        "Tasks: 142 total,   1 running, 141 sleeping,   0 stopped,   0 zombie",
        "%Cpu(s):  2.3 us,  0.7 sy,  0.0 ni, 96.8 id,  0.1 wa,  0.0 hi,  0.1 si,  0.0 st",
        "MiB Mem :   7974.1 total,   3210.6 free,   2106.2 used,   2657.3 buff/cache",
        "MiB Swap:   2048.0 total,   2048.0 free,      0.0 used.   5436.6 avail Mem",
        "",
        "  PID USER      PR  NI    VIRT    RES    SHR S  %CPU  %MEM     TIME+ COMMAND",
        f" 1234 {ctx.user:<8}  20   0 1234567  87654  23456 S   0.5   2.1   0:05.12 ai-terminal",
        f" 1235 {ctx.user:<8}  20   0  123456   5432   3210 S   0.1   0.5   0:01.03 node",
        "    1 root      20   0  225316   9876   6543 S   0.0   0.1   0:01.45 systemd",
        "",
        f"[{ctx.name} snapshot - interactive mode is not available]",
    ]))


@handler('kill')
def kill(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args)
    if not operands:
        return missing('kill', 'process ID')
    return ok(f"Process {operands[0]} terminated")


@handler('killall')
def killall(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args)
    if not operands:
        return missing('killall', 'process name')
    return ok(f"Killed all {operands[0]} processes")


@handler('pgrep')
def pgrep(ctx: ExecutionContext) -> ExecutionResult:
    if not file_operands(ctx.args, ('-u',)):
        return missing('pgrep', 'pattern')
    return ok('1234\n1235\n1236')


@handler('pkill')
def pkill(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args, ('-u',))
    if not operands:
        return missing('pkill', 'pattern')
    return ok(f"Killed processes matching '{operands[0]}'")


@handler('jobs')
def jobs(ctx: ExecutionContext) -> ExecutionResult:
    return ok("[1]+  Running                 long-running-script &\n"
              "[2]-  Stopped                 vim document.txt")


@handler('bg')
def bg(ctx: ExecutionContext) -> ExecutionResult:
    return ok('[1]+ long-running-script &')


@handler('fg')
def fg(ctx: ExecutionContext) -> ExecutionResult:
    return ok('vim document.txt')


@handler('nohup')
def nohup(ctx: ExecutionContext) -> ExecutionResult:
    if not ' '.join(ctx.args).strip():
        return missing('nohup', 'command')
    return ok("nohup: ignoring input and appending output to 'nohup.out'\n[1] 12345")


# System information

@handler('df')
def df(ctx: ExecutionContext) -> ExecutionResult:
    if ctx.command.has_flag('-h'):
        return ok('\n'.join([
            "Filesystem      Size  Used Avail Use% Mounted on",
            "/dev/sda1        20G  8.5G   11G  45% /",
            "tmpfs           2.0G     0  2.0G   0% /dev/shm",
            "/dev/sda2       100G   45G   50G  48% /home",
        ]))
    return ok('\n'.join([
        "Filesystem     1K-blocks    Used Available Use% Mounted on",
        "/dev/sda1       20971520 8912896  11534336  45% /",
        "tmpfs            2097152       0   2097152   0% /dev/shm",
        "/dev/sda2      104857600 47185920  52428800  48% /home",
    ]))


@handler('du')
def du(ctx: ExecutionContext) -> ExecutionResult:
    if ctx.command.has_flag('-sh'):
        return ok("1.2G\tdocuments\n856M\tdownloads\n2.3G\tprojects\n45M\t.cache\n12K\t.bashrc")
    return ok("1234567\t./documents\n876543\t./downloads\n2345678\t./projects\n"
              "45678\t./.cache\n12\t./.bashrc")


@handler('free')
def free(ctx: ExecutionContext) -> ExecutionResult:
    header = "              total        used        free      shared  buff/cache   available"
    if ctx.command.has_flag('-h'):
        return ok('\n'.join([
            header,
            "Mem:           7.8G        2.1G        3.2G        156M        2.5G        5.4G",
            "Swap:          2.0G          0B        2.0G",
        ]))
    if ctx.command.has_flag('-m'):
        return ok('\n'.join([
            header,
            "Mem:           7974        2106        3210         156        2657        5436",
            "Swap:          2048           0        2048",
        ]))
    return ok('\n'.join([
        header,
        "Mem:        8165432     2156789     3287654      159876     2720989     5567123",
        "Swap:       2097152           0     2097152",
    ]))


@handler('uptime')
def uptime(ctx: ExecutionContext) -> ExecutionResult:
    return ok(UPTIME)


@handler('uname')
def uname(ctx: ExecutionContext) -> ExecutionResult:
    if ctx.command.has_flag('-a'):
        return ok(f"Linux {ctx.hostname} {KERNEL_RELEASE} #1 SMP {MACHINE} GNU/Linux")
    if ctx.command.has_flag('-r'):
        return ok(KERNEL_RELEASE)
    if ctx.command.has_flag('-m'):
        return ok(MACHINE)
    if ctx.command.has_flag('-n'):
        return ok(ctx.hostname)
    return ok('Linux')


@handler('lscpu')
def lscpu(ctx: ExecutionContext) -> ExecutionResult:
    rows = (
        ('Architecture', MACHINE),
        ('CPU op-mode(s)', '32-bit, 64-bit'),
        ('Byte Order', 'Little Endian'),
        ('CPU(s)', '4'),
        ('Model name', 'AI Terminal Processor'),
        ('CPU MHz', '2400.000'),
        ('Cache L1d', '128 KiB'),
        ('Cache L1i', '128 KiB'),
        ('Cache L2', '1 MiB'),
        ('Cache L3', '8 MiB'),
    )
    return ok('\n'.join(f"{label + ':':<33}{value}" for label, value in rows))


@handler('lsblk')
def lsblk(ctx: ExecutionContext) -> ExecutionResult:
    if ctx.command.has_flag('-f'):
        return ok('\n'.join([
            "NAME   FSTYPE LABEL UUID                                 MOUNTPOINT",
            "sda",
            "├─sda1 ext4         3f1c2a7e-5b2d-4c1e-9f4a-1b2c3d4e5f60 /",
            "└─sda2 ext4         8a9b0c1d-2e3f-4a5b-6c7d-8e9f0a1b2c3d /home",
        ]))
    return ok('\n'.join([
        "NAME   MAJ:MIN RM   SIZE RO TYPE MOUNTPOINT",
        "sda      8:0    0   120G  0 disk ",
        "├─sda1   8:1    0    20G  0 part /",
        "└─sda2   8:2    0   100G  0 part /home",
    ]))


@handler('lsusb')
def lsusb(ctx: ExecutionContext) -> ExecutionResult:
    if ctx.command.has_flag('-v'):
        return ok('\n'.join([
            "Bus 001 Device 001: ID 1d6b:0002 Linux Foundation 2.0 root hub",
            "Device Descriptor:",
            "  bLength                18",
            "  bDescriptorType         1",
            "  bcdUSB               2.00",
        ]))
    return ok('\n'.join([
        "Bus 001 Device 001: ID 1d6b:0002 Linux Foundation 2.0 root hub",
        "Bus 001 Device 002: ID 8087:0024 Intel Corp. Integrated Rate Matching Hub",
        "Bus 001 Device 003: ID 046d:c52b Logitech, Inc. Unifying Receiver",
    ]))


@handler('lspci')
def lspci(ctx: ExecutionContext) -> ExecutionResult:
    if ctx.command.has_flag('-v'):
        return ok('\n'.join([
            "00:00.0 Host bridge: Intel Corporation Device 1234",
            "\tSubsystem: Intel Corporation Device 5678",
            "\tFlags: bus master, fast devsel, latency 0",
        ]))
    return ok('\n'.join([
        "00:00.0 Host bridge: Intel Corporation Device 1234",
        "00:02.0 VGA compatible controller: Intel Corporation Device 5678",
        "00:1f.0 ISA bridge: Intel Corporation Device 9abc",
    ]))


@handler('mount')
def mount(ctx: ExecutionContext) -> ExecutionResult:
    # Pipes are not evaluated; `mount | grep ...` lists like a bare mount.
    args = ctx.args[:ctx.args.index('|')] if '|' in ctx.args else ctx.args
    operands = file_operands(args, ('-t',))
    if len(operands) < 2:
        return ok('\n'.join([
            "/dev/sda1 on / type ext4 (rw,relatime)",
            "/dev/sda2 on /home type ext4 (rw,relatime)",
            "tmpfs on /tmp type tmpfs (rw,nosuid,nodev)",
            "proc on /proc type proc (rw,nosuid,nodev,noexec,relatime)",
        ]))
    return ok(f"Mounted {operands[0]} on {operands[1]}")


@handler('umount')
def umount(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args)
    if not operands:
        return missing('umount', 'mountpoint')
    return ok(f"Unmounted {operands[0]}")


@handler('date')
def date(ctx: ExecutionContext) -> ExecutionResult:
    """Current time from the context clock; ``+FORMAT`` is handed to strftime."""
    for position, token in enumerate(ctx.args):
        if token.startswith('+'):
            fmt = strip_quotes(' '.join(ctx.args[position:])[1:])
            return ok(ctx.now.strftime(fmt))
    return ok(ctx.now.strftime('%a %b %d %H:%M:%S UTC %Y'))


@handler('cal')
def cal(ctx: ExecutionContext) -> ExecutionResult:
    """Month calendar, or a whole year for ``-y`` or a lone year operand. Weeks start on Sunday."""
    text_calendar = calendar.TextCalendar(firstweekday=calendar.SUNDAY)
    operands = file_operands(ctx.args)
    whole_year = ctx.command.has_flag('-y') or len(operands) == 1

    if whole_year:
        year_text = operands[0] if operands else None
    else:
        year_text = operands[1] if len(operands) > 1 else None
        month = parse_int(operands[0] if operands else None, ctx.now.month)
        if not 1 <= month <= 12:
            return fail(f"cal: {operands[0]} is neither a month number (1..12) nor a name")

    year = parse_int(year_text, ctx.now.year)
    if not 1 <= year <= 9999:
        return fail(f"cal: year '{year_text}' not in range 1..9999")

    if whole_year:
        text = text_calendar.formatyear(year)
    else:
        text = text_calendar.formatmonth(year, month)
    return ok('\n'.join(line.rstrip() for line in text.rstrip('\n').split('\n')))


# Users

@handler('whoami')
def whoami(ctx: ExecutionContext) -> ExecutionResult:
    return ok(ctx.user)


@handler('id')
def id_(ctx: ExecutionContext) -> ExecutionResult:
    user = ctx.command.arg(0, ctx.user)
    return ok(f"uid=1000({user}) gid=1000({user}) groups=1000({user}),4(adm),24(cdrom),"
              f"27(sudo),30(dip),46(plugdev),120(lpadmin),131(lxd),132(sambashare)")


@handler('who')
def who(ctx: ExecutionContext) -> ExecutionResult:
    return ok(f"{ctx.user:<8} pts/0        2024-01-20 09:00 (192.168.1.100)\n"
              "root     tty1         2024-01-20 08:30")


@handler('w')
def w(ctx: ExecutionContext) -> ExecutionResult:
    return ok('\n'.join([
        UPTIME,
        "USER     TTY      FROM             LOGIN@   IDLE   JCPU   PCPU WHAT",
        f"{ctx.user:<8} pts/0    192.168.1.100    09:00    0.00s  0.05s  0.01s w",
        "root     tty1     -                08:30    1:30m  0.02s  0.02s -bash",
    ]))


@handler('last')
def last(ctx: ExecutionContext) -> ExecutionResult:
    return ok('\n'.join([
        f"{ctx.user:<8} pts/0        192.168.1.100    Sat Jan 20 09:00   still logged in",
        f"{ctx.user:<8} pts/0        192.168.1.100    Fri Jan 19 14:30 - 18:45  (04:15)",
        "root     tty1                          Sat Jan 20 08:30   still logged in",
    ]))


# Session

@handler('history')
def history(ctx: ExecutionContext) -> ExecutionResult:
    """Numbered session history, ending with the command being run."""
    if ctx.command.has_flag('-c'):
        return fail("history: use 'clear' to reset the session history")

    commands = [record.command for record in ctx.history] + [ctx.command.raw]
    numbered = [f"{index:>5}  {command}" for index, command in enumerate(commands, 1)]

    limit = ctx.command.arg(0)
    if limit:
        count = parse_int(limit, len(numbered))
        numbered = numbered[-count:] if count > 0 else []
    return ok('\n'.join(numbered))


@handler('alias')
def alias(ctx: ExecutionContext) -> ExecutionResult:
    if ctx.command.argc == 1:
        return ok('\n'.join([
            "alias ll='ls -la'",
            "alias la='ls -A'",
            "alias l='ls -CF'",
            "alias ..='cd ..'",
            "alias grep='grep --color=auto'",
        ]))
    return ok(f"Alias '{ctx.args[0].split('=', 1)[0]}' created")


@handler('unalias')
def unalias(ctx: ExecutionContext) -> ExecutionResult:
    name = ctx.command.arg(0)
    if not name:
        return missing('unalias', 'alias name')
    return ok(f"Alias '{name}' removed")


@handler('type')
def type_(ctx: ExecutionContext) -> ExecutionResult:
    name = ctx.command.arg(0)
    if not name:
        return missing('type', 'argument')
    if name in SHELL_BUILTINS:
        return ok(f"{name} is a shell builtin")
    if name not in ctx.registry:
        return fail(f"bash: type: {name}: not found")
    return ok(f"{name} is /usr/bin/{name}")


@handler('help')
def help_(ctx: ExecutionContext) -> ExecutionResult:
    """The full reference, one command's page, or ``-k TERM`` matches from the registry."""
    topic = ctx.command.arg(0)
    if not topic:
        return ok(render_help())

    if topic == '-k':
        term = ctx.command.arg(1)
        if not term:
            return ok("help: -k needs a search term")
        matches = ctx.registry.search(term)
        if not matches:
            return ok(f"help: nothing appropriate for '{term}'")
        return ok('\n'.join(f"{info.name:<12} - {info.description}" for info in matches))

    detail = BUILTIN_TOPICS.get(topic) or ctx.registry.format_detail(topic)
    if detail is None:
        return ok(f"help: no help available for '{topic}'")
    return ok(detail)


@handler('clear')
def clear(ctx: ExecutionContext) -> ExecutionResult:
    """Reached only when ``clear`` carries arguments; the bare word is handled by the session."""
    return ok('')


@handler('watch')
def watch(ctx: ExecutionContext) -> ExecutionResult:
    interval = min(max(ctx.command.int_flag('-n', 2), 1), MAX_WATCH_INTERVAL)
    tokens = list(ctx.args)
    if tokens[:1] == ['-n']:
        tokens = tokens[2:]
    watched = strip_quotes(' '.join(tokens).strip())
    if not watched:
        return missing('watch', 'command')
    return ok(f"Every {float(interval):.1f}s: {watched}\n\n"
              f"[Command output would refresh here every {interval} seconds]")


@handler('screen')
def screen(ctx: ExecutionContext) -> ExecutionResult:
    return ok('\n'.join([
        "Screen version 4.08.00 (GNU) 05-Feb-20",
        "",
        "Copyright (c) 2018-2020 Alexander Naumov, Amadeusz Slawinski",
        "Copyright (c) 2015-2017 Juergen Weigert, Alexander Naumov, Amadeusz Slawinski",
        "Copyright (c) 2010-2014 Juergen Weigert, Sadrul Habib Chowdhury",
        "",
        "Use 'screen -S session_name' to create a new session",
    ]))


@handler('tmux')
def tmux(ctx: ExecutionContext) -> ExecutionResult:
    return ok('\n'.join([
        "tmux 3.1c",
        "",
        "Usage: tmux [-2CluvV] [-c shell-command] [-f file] [-L socket-name]",
        "            [-S socket-path] [command [flags]]",
        "",
        "Use 'tmux new -s session' to create a new session",
    ]))
