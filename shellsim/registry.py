#!/usr/bin/env python3
"""
Command registry for the shellsim interpreter.

The registry is a read-only catalog of the utilities the interpreter knows
about: what each one does, how it is invoked and a few example invocations.
It drives ``help``, ``help COMMAND`` and ``help -k`` search, and is deliberately
decoupled from execution: a command can be catalogued here and dispatched by
the handler table independently.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Tuple


class Category(Enum):
    """Functional grouping of catalogued commands."""
    FILE = 'file'
    NETWORK = 'network'
    SYSTEM = 'system'
    PROCESS = 'process'
    TEXT = 'text'
    ARCHIVE = 'archive'
    PERMISSION = 'permission'
    SEARCH = 'search'


@dataclass(frozen=True)
class CommandInfo:
    """Metadata for one catalogued command."""
    name: str
    description: str
    category: Category
    usage: str
    examples: Tuple[str, ...] = ()


def _info(name: str, description: str, category: Category, usage: str,
          *examples: str) -> CommandInfo:
    return CommandInfo(name, description, category, usage, tuple(examples))


F, N, S, P = Category.FILE, Category.NETWORK, Category.SYSTEM, Category.PROCESS
T, A, M, Q = Category.TEXT, Category.ARCHIVE, Category.PERMISSION, Category.SEARCH

_COMMANDS = (
    # File system operations
    _info('ls', 'List directory contents', F, 'ls [options] [directory]',
          'ls -la', 'ls -lh', 'ls -R'),
    _info('cd', 'Change directory', F, 'cd [directory]',
          'cd /home', 'cd ..', 'cd ~'),
    _info('pwd', 'Print working directory', F, 'pwd', 'pwd'),
    _info('mkdir', 'Create directories', F, 'mkdir [options] directory',
          'mkdir newdir', 'mkdir -p path/to/dir'),
    _info('rmdir', 'Remove empty directories', F, 'rmdir directory', 'rmdir emptydir'),
    _info('rm', 'Remove files and directories', F, 'rm [options] file',
          'rm file.txt', 'rm -rf directory', 'rm -i file.txt'),
    _info('cp', 'Copy files and directories', F, 'cp [options] source destination',
          'cp file.txt backup.txt', 'cp -r dir1 dir2'),
    _info('mv', 'Move/rename files and directories', F, 'mv source destination',
          'mv old.txt new.txt', 'mv file.txt /home/user/'),
    _info('ln', 'Create links between files', F, 'ln [options] target linkname',
          'ln -s /path/to/file symlink', 'ln file hardlink'),
    _info('find', 'Search for files and directories', Q, 'find [path] [expression]',
          'find . -name "*.txt"', 'find /home -type f -size +1M', 'find . -mtime -7'),
    _info('locate', 'Find files by name (database)', Q, 'locate pattern',
          'locate filename', 'locate "*.conf"'),
    _info('which', 'Locate command', Q, 'which command', 'which python', 'which ls'),
    _info('whereis', 'Locate binary, source, manual', Q, 'whereis command',
          'whereis ls', 'whereis python'),

    # Text processing and search
    _info('cat', 'Display file contents', T, 'cat [options] file',
          'cat file.txt', 'cat -n file.txt'),
    _info('less', 'View file contents page by page', T, 'less file',
          'less file.txt', 'less +G file.txt'),
    _info('more', 'View file contents page by page', T, 'more file', 'more file.txt'),
    _info('head', 'Display first lines of file', T, 'head [options] file',
          'head file.txt', 'head -n 20 file.txt'),
    _info('tail', 'Display last lines of file', T, 'tail [options] file',
          'tail file.txt', 'tail -f /var/log/syslog', 'tail -n 50 file.txt'),
    _info('grep', 'Search text patterns in files', Q, 'grep [options] pattern [file]',
          'grep "pattern" file.txt', 'grep -r "text" .', 'grep -i "case" file.txt'),
    _info('egrep', 'Extended grep with regex', Q, 'egrep pattern file',
          'egrep "pattern1|pattern2" file.txt'),
    _info('fgrep', 'Fixed string grep', Q, 'fgrep string file',
          'fgrep "exact string" file.txt'),
    _info('sed', 'Stream editor for filtering and transforming text', T,
          'sed [options] script [file]',
          'sed "s/old/new/g" file.txt', 'sed -n "1,5p" file.txt'),
    _info('awk', 'Text processing tool', T, 'awk pattern { action } file',
          'awk "{print $1}" file.txt', 'awk "/pattern/ {print}" file.txt'),
    _info('cut', 'Extract columns from text', T, 'cut [options] file',
          'cut -d":" -f1 /etc/passwd', 'cut -c1-10 file.txt'),
    _info('sort', 'Sort lines in text files', T, 'sort [options] file',
          'sort file.txt', 'sort -n numbers.txt', 'sort -r file.txt'),
    _info('uniq', 'Report or omit repeated lines', T, 'uniq [options] file',
          'uniq file.txt', 'sort file.txt | uniq -c'),
    _info('wc', 'Word, line, character, and byte count', T, 'wc [options] file',
          'wc file.txt', 'wc -l file.txt', 'wc -w file.txt'),
    _info('tr', 'Translate or delete characters', T, 'tr [options] set1 [set2]',
          'tr "a-z" "A-Z"', 'tr -d "0-9"'),

    # Networking
    _info('ping', 'Send ICMP echo requests', N, 'ping [options] host',
          'ping google.com', 'ping -c 4 8.8.8.8', 'ping6 ipv6.google.com'),
    _info('curl', 'Transfer data from/to servers', N, 'curl [options] URL',
          'curl https://api.github.com', 'curl -I https://google.com',
          'curl -X POST -d "data" url'),
    _info('wget', 'Download files from web', N, 'wget [options] URL',
          'wget https://example.com/file.zip', 'wget -r https://site.com'),
    _info('netstat', 'Display network connections', N, 'netstat [options]',
          'netstat -tuln', 'netstat -an', 'netstat -r'),
    _info('ss', 'Modern netstat replacement', N, 'ss [options]',
          'ss -tuln', 'ss -an', 'ss -s'),
    _info('traceroute', 'Trace network path to destination', N, 'traceroute host',
          'traceroute google.com', 'traceroute -n 8.8.8.8'),
    _info('tracepath', 'Trace network path (no root required)', N, 'tracepath host',
          'tracepath google.com'),
    _info('nslookup', 'DNS lookup utility', N, 'nslookup [host] [server]',
          'nslookup google.com', 'nslookup google.com 8.8.8.8'),
    _info('dig', 'Advanced DNS lookup tool', N, 'dig [options] host [type]',
          'dig google.com', 'dig @8.8.8.8 google.com MX', 'dig +short google.com'),
    _info('host', 'DNS lookup utility', N, 'host [options] host [server]',
          'host google.com', 'host -t MX google.com'),
    _info('arp', 'Display/modify ARP table', N, 'arp [options]', 'arp -a', 'arp -n'),
    _info('route', 'Display/modify routing table', N, 'route [options]',
          'route -n', 'route add default gw 192.168.1.1'),
    _info('ip', 'Show/manipulate routing, devices', N, 'ip [options] object command',
          'ip addr show', 'ip route show', 'ip link show'),
    _info('ifconfig', 'Configure network interface', N, 'ifconfig [interface] [options]',
          'ifconfig', 'ifconfig eth0', 'ifconfig eth0 up'),
    _info('iwconfig', 'Configure wireless interface', N, 'iwconfig [interface] [options]',
          'iwconfig', 'iwconfig wlan0'),
    _info('lsof', 'List open files and network connections', N, 'lsof [options]',
          'lsof -i :80', 'lsof -u user', 'lsof /path/to/file'),
    _info('nc', 'Netcat - network utility', N, 'nc [options] host port',
          'nc -l 8080', 'nc google.com 80', 'nc -z host 20-30'),
    _info('telnet', 'Connect to remote host', N, 'telnet host [port]',
          'telnet google.com 80', 'telnet 192.168.1.1'),
    _info('ssh', 'Secure shell remote login', N, 'ssh [options] user@host',
          'ssh user@server.com', 'ssh -p 2222 user@host'),
    _info('scp', 'Secure copy over SSH', N, 'scp [options] source destination',
          'scp file.txt user@host:/path/', 'scp -r dir/ user@host:/path/'),
    _info('rsync', 'Synchronize files/directories', N, 'rsync [options] source destination',
          'rsync -av dir/ user@host:/backup/', 'rsync -az --delete src/ dst/'),

    # Processes
    _info('ps', 'Display running processes', P, 'ps [options]',
          'ps aux', 'ps -ef', 'ps -u user'),
    _info('top', 'Display running processes (real-time)', P, 'top [options]',
          'top', 'top -u user', 'top -p PID'),
    _info('htop', 'Interactive process viewer', P, 'htop [options]', 'htop', 'htop -u user'),
    _info('kill', 'Terminate processes', P, 'kill [signal] PID',
          'kill 1234', 'kill -9 1234', 'kill -TERM 1234'),
    _info('killall', 'Kill processes by name', P, 'killall [options] name',
          'killall firefox', 'killall -9 chrome'),
    _info('pgrep', 'Find process IDs by name', P, 'pgrep [options] pattern',
          'pgrep firefox', 'pgrep -u user python'),
    _info('pkill', 'Kill processes by name', P, 'pkill [options] pattern',
          'pkill firefox', 'pkill -u user python'),
    _info('jobs', 'Display active jobs', P, 'jobs [options]', 'jobs', 'jobs -l'),
    _info('bg', 'Put job in background', P, 'bg [job]', 'bg', 'bg %1'),
    _info('fg', 'Bring job to foreground', P, 'fg [job]', 'fg', 'fg %1'),
    _info('nohup', 'Run command immune to hangups', P, 'nohup command [args]',
          'nohup long-running-script &'),

    # System information
    _info('df', 'Display filesystem disk space', S, 'df [options] [filesystem]',
          'df -h', 'df -i', 'df /home'),
    _info('du', 'Display directory space usage', S, 'du [options] [directory]',
          'du -sh *', 'du -h --max-depth=1', 'du -sk * | sort -n'),
    _info('free', 'Display memory usage', S, 'free [options]',
          'free -h', 'free -m', 'free -s 5'),
    _info('uptime', 'Show system uptime and load', S, 'uptime', 'uptime'),
    _info('uname', 'System information', S, 'uname [options]',
          'uname -a', 'uname -r', 'uname -m'),
    _info('lscpu', 'Display CPU information', S, 'lscpu', 'lscpu'),
    _info('lsblk', 'List block devices', S, 'lsblk [options]', 'lsblk', 'lsblk -f'),
    _info('lsusb', 'List USB devices', S, 'lsusb [options]', 'lsusb', 'lsusb -v'),
    _info('lspci', 'List PCI devices', S, 'lspci [options]', 'lspci', 'lspci -v'),
    _info('mount', 'Mount filesystems', S, 'mount [options] device mountpoint',
          'mount', 'mount /dev/sdb1 /mnt', 'mount -t ext4 /dev/sdb1 /mnt'),
    _info('umount', 'Unmount filesystems', S, 'umount [options] mountpoint',
          'umount /mnt', 'umount -f /mnt'),

    # Permissions and ownership
    _info('chmod', 'Change file permissions', M, 'chmod [options] mode file',
          'chmod 755 file.txt', 'chmod +x script.sh', 'chmod -R 644 dir/'),
    _info('chown', 'Change file ownership', M, 'chown [options] owner[:group] file',
          'chown user file.txt', 'chown user:group file.txt', 'chown -R user dir/'),
    _info('chgrp', 'Change group ownership', M, 'chgrp [options] group file',
          'chgrp group file.txt', 'chgrp -R group dir/'),
    _info('umask', 'Set default file permissions', M, 'umask [mode]',
          'umask', 'umask 022', 'umask 077'),

    # Archives and compression
    _info('tar', 'Archive files', A, 'tar [options] archive files',
          'tar -czf archive.tar.gz dir/', 'tar -xzf archive.tar.gz',
          'tar -tzf archive.tar.gz'),
    _info('gzip', 'Compress files', A, 'gzip [options] file',
          'gzip file.txt', 'gzip -d file.txt.gz'),
    _info('gunzip', 'Decompress gzip files', A, 'gunzip file.gz', 'gunzip file.txt.gz'),
    _info('zip', 'Create zip archives', A, 'zip [options] archive files',
          'zip archive.zip file1 file2', 'zip -r archive.zip dir/'),
    _info('unzip', 'Extract zip archives', A, 'unzip [options] archive',
          'unzip archive.zip', 'unzip -l archive.zip'),

    # Utilities
    _info('echo', 'Display text', T, 'echo [options] text',
          'echo "Hello World"', 'echo -n "No newline"', 'echo $PATH'),
    _info('date', 'Display or set date', S, 'date [options] [format]',
          'date', 'date +"%Y-%m-%d"', 'date -d "tomorrow"'),
    _info('cal', 'Display calendar', S, 'cal [month] [year]', 'cal', 'cal 12 2024', 'cal -y'),
    _info('whoami', 'Display current username', S, 'whoami', 'whoami'),
    _info('id', 'Display user and group IDs', S, 'id [user]', 'id', 'id user'),
    _info('who', 'Show logged in users', S, 'who [options]', 'who', 'who -a'),
    _info('w', 'Show logged in users and activity', S, 'w [user]', 'w', 'w user'),
    _info('last', 'Show last logged in users', S, 'last [options] [user]',
          'last', 'last user', 'last -n 10'),
    _info('history', 'Command history', S, 'history [options]',
          'history', 'history 10', 'history -c'),
    _info('alias', 'Create command aliases', S, 'alias [name=value]',
          'alias', 'alias ll="ls -la"', 'alias grep="grep --color"'),
    _info('unalias', 'Remove aliases', S, 'unalias name', 'unalias ll', 'unalias -a'),
    _info('type', 'Display command type', S, 'type command', 'type ls', 'type cd'),
    _info('file', 'Determine file type', F, 'file [options] file',
          'file document.pdf', 'file *'),
    _info('stat', 'Display file statistics', F, 'stat [options] file',
          'stat file.txt', 'stat -c "%n %s" *'),
    _info('touch', 'Create empty files or update timestamps', F, 'touch [options] file',
          'touch newfile.txt', 'touch -t 202401011200 file.txt'),
    _info('basename', 'Extract filename from path', T, 'basename path [suffix]',
          'basename /path/to/file.txt', 'basename /path/to/file.txt .txt'),
    _info('dirname', 'Extract directory from path', T, 'dirname path',
          'dirname /path/to/file.txt'),
    _info('xargs', 'Build and execute commands from input', T, 'xargs [options] command',
          'find . -name "*.txt" | xargs grep "pattern"', 'echo "file1 file2" | xargs rm'),
    _info('tee', 'Write output to both file and stdout', T, 'tee [options] file',
          'command | tee output.txt', 'command | tee -a log.txt'),
    _info('watch', 'Execute command repeatedly', S, 'watch [options] command',
          'watch "ps aux"', 'watch -n 5 "df -h"'),
    _info('screen', 'Terminal multiplexer', S, 'screen [options] [command]',
          'screen', 'screen -S session_name', 'screen -r session_name'),
    _info('tmux', 'Terminal multiplexer', S, 'tmux [command]',
          'tmux', 'tmux new -s session', 'tmux attach -t session'),
)

del F, N, S, P, T, A, M, Q

LINUX_COMMANDS = MappingProxyType({info.name: info for info in _COMMANDS})

# Shell operators are documented, never evaluated.
PIPE_OPERATORS = MappingProxyType({
    '|': 'Pipe output to next command',
    '||': 'Execute next command if previous fails',
    '&&': 'Execute next command if previous succeeds',
    '>': 'Redirect output to file (overwrite)',
    '>>': 'Redirect output to file (append)',
    '<': 'Redirect input from file',
    '2>': 'Redirect stderr to file',
    '2>&1': 'Redirect stderr to stdout',
    '&>': 'Redirect both stdout and stderr',
    '|&': 'Pipe both stdout and stderr',
})

COMMAND_COMBINATIONS = (
    'ps aux | grep process_name',
    'find . -name "*.log" | xargs grep "error"',
    'ls -la | grep "^d"',
    'netstat -tuln | grep :80',
    'df -h | grep -v tmpfs',
    'du -sh * | sort -hr',
    'cat file.txt | grep pattern | wc -l',
    'tail -f /var/log/syslog | grep error',
    'lsof -i | grep LISTEN',
    'ps aux | sort -k3 -nr | head -10',
)


class CommandRegistry:
    """
    Read-only lookup over catalogued commands.

    Wraps a ``{name: CommandInfo}`` mapping so that tests can inject a
    smaller catalog.
    """

    def __init__(self, commands: Optional[Dict[str, CommandInfo]] = None):
        self._commands = MappingProxyType(dict(commands if commands is not None else LINUX_COMMANDS))

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self):
        return iter(self._commands.values())

    def get(self, name: str) -> Optional[CommandInfo]:
        """Metadata for ``name`` or None."""
        return self._commands.get(name)

    def names(self) -> List[str]:
        return list(self._commands)

    def search(self, query: str) -> List[CommandInfo]:
        """Commands whose name or description contains ``query`` (case-insensitive)."""
        needle = query.lower()
        return [
            info for info in self._commands.values()
            if needle in info.name or needle in info.description.lower()
        ]

    def format_detail(self, name: str) -> Optional[str]:
        """Render a ``help COMMAND`` page, or None for unknown names."""
        info = self.get(name)
        if info is None:
            return None

        help_lines = [f"{info.name} - {info.description}", ""]
        help_lines.append(f"Category: {info.category.value}")
        help_lines.append("")
        help_lines.append("Usage:")
        help_lines.append(f"    {info.usage}")
        if info.examples:
            help_lines.append("")
            help_lines.append("Examples:")
            for example in info.examples:
                help_lines.append(f"    {example}")
        return '\n'.join(help_lines)


# Layout of the static ``help`` reference: (section, ((synopsis, summary), ...))
HELP_SECTIONS: Tuple[Tuple[str, Tuple[Tuple[str, str], ...]], ...] = (
    ('FILE SYSTEM', (
        ('ls [-la]', 'List directory contents'),
        ('cd [dir]', 'Change directory'),
        ('pwd', 'Print working directory'),
        ('mkdir [dir]', 'Create directories'),
        ('rmdir [dir]', 'Remove empty directories'),
        ('rm [-rf] [file]', 'Remove files and directories'),
        ('cp [-r] [src] [dst]', 'Copy files and directories'),
        ('mv [src] [dst]', 'Move/rename files'),
        ('find [path] [expr]', 'Search for files and directories'),
        ('locate [pattern]', 'Find files by name'),
        ('which [cmd]', 'Locate command'),
        ('touch [file]', 'Create empty files or update timestamps'),
        ('ln [-s] [target] [link]', 'Create links'),
    )),
    ('TEXT PROCESSING', (
        ('cat [file]', 'Display file contents'),
        ('less [file]', 'View file contents page by page'),
        ('head [-n] [file]', 'Display first lines of file'),
        ('tail [-f] [file]', 'Display last lines of file'),
        ('grep [-r] [pattern] [file]', 'Search text patterns'),
        ('sed [script] [file]', 'Stream editor for text'),
        ('awk [pattern] [file]', 'Text processing tool'),
        ('cut [-d] [-f] [file]', 'Extract columns from text'),
        ('sort [-n] [file]', 'Sort lines in text files'),
        ('uniq [file]', 'Report or omit repeated lines'),
        ('wc [-l] [file]', 'Word, line, character count'),
        ('tr [set1] [set2]', 'Translate or delete characters'),
    )),
    ('NETWORKING', (
        ('ping [-c] [host]', 'Test connectivity'),
        ('curl [-I] [url]', 'HTTP client'),
        ('wget [url]', 'Download files from web'),
        ('netstat [-tuln]', 'Display network connections'),
        ('ss [-tuln]', 'Modern netstat replacement'),
        ('traceroute [host]', 'Trace network path'),
        ('nslookup [host]', 'DNS lookup utility'),
        ('dig [host]', 'Advanced DNS lookup'),
        ('host [host]', 'DNS lookup utility'),
        ('lsof [-i] [port]', 'List open files and connections'),
        ('nc [host] [port]', 'Netcat network utility'),
        ('ssh [user@host]', 'Secure shell remote login'),
        ('scp [src] [dst]', 'Secure copy over SSH'),
    )),
    ('PROCESS MANAGEMENT', (
        ('ps [aux]', 'Display running processes'),
        ('top', 'Display processes (real-time)'),
        ('htop', 'Interactive process viewer'),
        ('kill [PID]', 'Terminate processes'),
        ('killall [name]', 'Kill processes by name'),
        ('pgrep [pattern]', 'Find process IDs by name'),
        ('jobs', 'Display active jobs'),
        ('bg [job]', 'Put job in background'),
        ('fg [job]', 'Bring job to foreground'),
    )),
    ('SYSTEM INFO', (
        ('df [-h]', 'Display filesystem disk space'),
        ('du [-sh] [dir]', 'Display directory space usage'),
        ('free [-h]', 'Display memory usage'),
        ('uptime', 'Show system uptime and load'),
        ('uname [-a]', 'System information'),
        ('lscpu', 'Display CPU information'),
        ('lsblk', 'List block devices'),
        ('mount', 'Display mounted filesystems'),
        ('whoami', 'Display current username'),
        ('who', 'Show logged in users'),
        ('date', 'Display or set date'),
    )),
    ('PERMISSIONS', (
        ('chmod [mode] [file]', 'Change file permissions'),
        ('chown [owner] [file]', 'Change file ownership'),
        ('chgrp [group] [file]', 'Change group ownership'),
    )),
    ('ARCHIVES', (
        ('tar [-czf] [archive] [files]', 'Archive files'),
        ('gzip [file]', 'Compress files'),
        ('gunzip [file]', 'Decompress gzip files'),
        ('zip [-r] [archive] [files]', 'Create zip archives'),
        ('unzip [archive]', 'Extract zip archives'),
    )),
)

_HELP_OPERATORS = ('|', '>', '>>', '<', '&&', '||')


def _section(title: str, rows: Iterable[Tuple[str, str]]) -> List[str]:
    lines = [f"{title}:"]
    for synopsis, summary in rows:
        lines.append(f"  {synopsis:<17}{summary}" if len(synopsis) < 17
                     else f"  {synopsis}  {summary}")
    lines.append("")
    return lines


def render_help() -> str:
    """Render the static multi-section command reference."""
    help_lines = ["AI Terminal - Linux Command Reference", ""]
    for title, rows in HELP_SECTIONS:
        help_lines.extend(_section(title, rows))

    help_lines.append("PIPES & REDIRECTION:")
    for operator in _HELP_OPERATORS:
        help_lines.append(f"  {operator:<4} {PIPE_OPERATORS[operator]}")
    help_lines.append("")

    help_lines.append("COMMON COMBINATIONS:")
    for combination in COMMAND_COMBINATIONS[:5]:
        help_lines.append(f"  {combination}")
    help_lines.append("")

    help_lines.append("Type 'help [command]' for detailed info about a specific command.")
    help_lines.append("AI assistance available - just ask for help with any task!")
    return '\n'.join(help_lines)
