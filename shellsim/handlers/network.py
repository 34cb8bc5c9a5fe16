"""
Network utility handlers.

No traffic leaves the process: each handler fills a realistic template with
the host, port, count or file name it was given. Timestamps come from the
context clock and jitter from the context random source.
"""

from urllib.parse import urlsplit

from .base import ExecutionContext, ExecutionResult, fail, handler, missing, ok
from .files import file_operands


DEFAULT_HOST = 'google.com'
RESOLVED_IPV4 = '142.250.191.14'
RESOLVED_IPV6 = '2607:f8b0:4004:c1b::65'
MAX_PING_COUNT = 100


def _host(ctx: ExecutionContext, value_flags=()) -> str:
    operands = [token for token in file_operands(ctx.args, value_flags)
                if not token.startswith(('@', '+'))]
    return operands[0] if operands else DEFAULT_HOST


def _iso(ctx: ExecutionContext) -> str:
    now = ctx.now
    return f"{now:%Y-%m-%dT%H:%M:%S}.{now.microsecond // 1000:03d}Z"


@handler('ping')
def ping(ctx: ExecutionContext) -> ExecutionResult:
    """Echo replies for ``-c`` packets (default 4, also on a bad count; at most 100)."""
    host = _host(ctx, ('-c',))
    count = ctx.command.int_flag('-c', 4)
    if count <= 0:
        count = 4
    count = min(count, MAX_PING_COUNT)

    replies = [
        f"64 bytes from {RESOLVED_IPV4}: icmp_seq={seq} ttl=55 "
        f"time={ctx.rng.uniform(10, 15):.3f} ms"
        for seq in range(count)
    ]
    average = ctx.rng.uniform(12, 14)
    return ok('\n'.join([
        f"PING {host} ({RESOLVED_IPV4}): 56 data bytes",
        *replies,
        "",
        f"--- {host} ping statistics ---",
        f"{count} packets transmitted, {count} packets received, 0.0% packet loss",
        f"round-trip min/avg/max/stddev = 10.234/{average:.3f}/15.456/1.234 ms",
    ]))


@handler('curl')
def curl(ctx: ExecutionContext) -> ExecutionResult:
    if ctx.command.has_flag('-I', '--head'):
        return ok('\n'.join([
            "HTTP/2 200 ",
            "server: GitHub.com",
            f"date: {ctx.now:%a, %d %b %Y %H:%M:%S} GMT",
            "content-type: application/json; charset=utf-8",
            "content-length: 2048",
            "cache-control: public, max-age=60, s-maxage=60",
            'etag: "abc123def456"',
            "x-ratelimit-limit: 60",
            "x-ratelimit-remaining: 59",
        ]))
    return ok("""{
  "current_user_url": "https://api.github.com/user",
  "authorizations_url": "https://api.github.com/authorizations",
  "repository_url": "https://api.github.com/repos/{owner}/{repo}",
  "status": "success",
  "message": "GitHub API v3"
}""")


@handler('wget')
def wget(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args)
    url = operands[0] if operands else 'https://example.com/file.txt'
    parts = urlsplit(url if '://' in url else f"https://{url}")
    domain = parts.hostname or 'example.com'
    filename = parts.path.rsplit('/', 1)[-1] or 'index.html'
    stamp = _iso(ctx)

    return ok('\n'.join([
        f"--{stamp}--  {url}",
        f"Resolving {domain} ({domain})... 93.184.216.34",
        f"Connecting to {domain} ({domain})|93.184.216.34|:443... connected.",
        "HTTP request sent, awaiting response... 200 OK",
        "Length: 1024 (1.0K) [text/plain]",
        f"Saving to: '{filename}'",
        "",
        f"{filename:<20}100%[===================>]   1.00K  --.-KB/s    in 0s      ",
        "",
        f"{stamp} (5.23 MB/s) - '{filename}' saved [1024/1024]",
    ]))


@handler('netstat')
def netstat(ctx: ExecutionContext) -> ExecutionResult:
    header = "Proto Recv-Q Send-Q Local Address           Foreign Address         State      "
    if ctx.command.has_flag('-tuln', '-an'):
        return ok('\n'.join([
            "Active Internet connections (only servers)",
            header,
            "tcp        0      0 0.0.0.0:22              0.0.0.0:*               LISTEN     ",
            "tcp        0      0 127.0.0.1:3000          0.0.0.0:*               LISTEN     ",
            "tcp        0      0 0.0.0.0:80              0.0.0.0:*               LISTEN     ",
            "tcp        0      0 0.0.0.0:443             0.0.0.0:*               LISTEN     ",
            "tcp6       0      0 :::22                   :::*                    LISTEN     ",
            "tcp6       0      0 ::1:3000                :::*                    LISTEN     ",
            "udp        0      0 0.0.0.0:53              0.0.0.0:*                          ",
            "udp        0      0 0.0.0.0:68              0.0.0.0:*                          ",
        ]))
    return ok('\n'.join([
        "Active Internet connections (w/o servers)",
        header,
        "tcp        0      0 192.168.1.100:45678     142.250.191.14:443      ESTABLISHED",
        "tcp        0      0 192.168.1.100:45679     140.82.112.4:443        ESTABLISHED",
    ]))


@handler('ss')
def ss(ctx: ExecutionContext) -> ExecutionResult:
    return ok('\n'.join([
        "Netid  State      Recv-Q Send-Q Local Address:Port               Peer Address:Port              ",
        "tcp    LISTEN     0      128          *:22                       *:*                  ",
        "tcp    LISTEN     0      128    127.0.0.1:3000                   *:*                  ",
        "tcp    LISTEN     0      128          *:80                       *:*                  ",
        "tcp    LISTEN     0      128          *:443                      *:*                  ",
        "tcp    ESTAB      0      0      192.168.1.100:45678        142.250.191.14:443         ",
        "tcp    ESTAB      0      0      192.168.1.100:45679        140.82.112.4:443           ",
    ]))


@handler('traceroute')
def traceroute(ctx: ExecutionContext) -> ExecutionResult:
    host = _host(ctx)
    return ok('\n'.join([
        f"traceroute to {host} ({RESOLVED_IPV4}), 30 hops max, 60 byte packets",
        " 1  192.168.1.1 (192.168.1.1)  1.234 ms  1.123 ms  1.456 ms",
        " 2  10.0.0.1 (10.0.0.1)  5.678 ms  5.432 ms  5.789 ms",
        " 3  203.0.113.1 (203.0.113.1)  12.345 ms  12.123 ms  12.456 ms",
        " 4  * * *",
        f" 5  {RESOLVED_IPV4} ({RESOLVED_IPV4})  15.678 ms  15.432 ms  15.789 ms",
    ]))


@handler('tracepath')
def tracepath(ctx: ExecutionContext) -> ExecutionResult:
    host = _host(ctx)
    return ok('\n'.join([
        f"tracepath to {host} ({RESOLVED_IPV4}), 30 hops max",
        " 1:  192.168.1.1                                           1.234ms",
        " 2:  10.0.0.1                                             5.678ms",
        " 3:  203.0.113.1                                         12.345ms",
        " 4:  no reply",
        f" 5:  {RESOLVED_IPV4}                                      15.678ms reached",
    ]))


@handler('nslookup')
def nslookup(ctx: ExecutionContext) -> ExecutionResult:
    host = _host(ctx)
    return ok('\n'.join([
        "Server:\t\t8.8.8.8",
        "Address:\t8.8.8.8#53",
        "",
        "Non-authoritative answer:",
        f"Name:\t{host}",
        f"Address: {RESOLVED_IPV4}",
        f"Name:\t{host}",
        f"Address: {RESOLVED_IPV6}",
    ]))


@handler('dig')
def dig(ctx: ExecutionContext) -> ExecutionResult:
    host = _host(ctx)
    if ctx.command.has_flag('+short'):
        return ok(RESOLVED_IPV4)
    return ok('\n'.join([
        f"; <<>> DiG 9.16.1-Ubuntu <<>> {host}",
        ";; global options: +cmd",
        ";; Got answer:",
        ";; ->>HEADER<<- opcode: QUERY, status: NOERROR, id: 12345",
        ";; flags: qr rd ra; QUERY: 1, ANSWER: 1, AUTHORITY: 0, ADDITIONAL: 1",
        "",
        ";; OPT PSEUDOSECTION:",
        "; EDNS: version: 0, flags:; udp: 512",
        ";; QUESTION SECTION:",
        f";{host}.\t\t\tIN\tA",
        "",
        ";; ANSWER SECTION:",
        f"{host}.\t\t300\tIN\tA\t{RESOLVED_IPV4}",
        "",
        ";; Query time: 23 msec",
        ";; SERVER: 8.8.8.8#53(8.8.8.8)",
        f";; WHEN: {ctx.now:%a %b %d %H:%M:%S %Y}",
        ";; MSG SIZE  rcvd: 55",
    ]))


@handler('host')
def host(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args, ('-t',))
    if not operands:
        return missing('host', 'hostname')
    name = operands[0]
    return ok('\n'.join([
        f"{name} has address {RESOLVED_IPV4}",
        f"{name} has IPv6 address {RESOLVED_IPV6}",
        f"{name} mail is handled by 10 smtp.{name}.",
    ]))


@handler('arp')
def arp(ctx: ExecutionContext) -> ExecutionResult:
    if ctx.command.has_flag('-a'):
        return ok('\n'.join([
            "? (192.168.1.1) at aa:bb:cc:dd:ee:ff [ether] on eth0",
            "? (192.168.1.100) at 11:22:33:44:55:66 [ether] on eth0",
            "? (192.168.1.254) at ff:ee:dd:cc:bb:aa [ether] on eth0",
        ]))
    return ok('\n'.join([
        "Address                  HWtype  HWaddress           Flags Mask            Iface",
        "192.168.1.1              ether   aa:bb:cc:dd:ee:ff   C                     eth0",
        "192.168.1.254            ether   ff:ee:dd:cc:bb:aa   C                     eth0",
    ]))


@handler('route')
def route(ctx: ExecutionContext) -> ExecutionResult:
    default = ("0.0.0.0         192.168.1.1     " if ctx.command.has_flag('-n')
               else "default         gateway         ")
    return ok('\n'.join([
        "Kernel IP routing table",
        "Destination     Gateway         Genmask         Flags Metric Ref    Use Iface",
        f"{default}0.0.0.0         UG    100    0        0 eth0",
        "192.168.1.0     0.0.0.0         255.255.255.0   U     100    0        0 eth0",
    ]))


_LOOPBACK = "1: lo: <LOOPBACK,UP,LOWER_UP> mtu 65536 qdisc noqueue state UNKNOWN {mode}group default qlen 1000"
_ETH0 = ("2: eth0: <BROADCAST,MULTICAST,UP,LOWER_UP> mtu 1500 qdisc pfifo_fast "
         "state UP {mode}group default qlen 1000")


@handler('ip')
def ip(ctx: ExecutionContext) -> ExecutionResult:
    if ctx.command.has_flag('addr', 'a', 'address'):
        return ok('\n'.join([
            _LOOPBACK.format(mode=''),
            "    link/loopback 00:00:00:00:00:00 brd 00:00:00:00:00:00",
            "    inet 127.0.0.1/8 scope host lo",
            _ETH0.format(mode=''),
            "    link/ether 11:22:33:44:55:66 brd ff:ff:ff:ff:ff:ff",
            "    inet 192.168.1.100/24 brd 192.168.1.255 scope global dynamic eth0",
        ]))
    if ctx.command.has_flag('route', 'r'):
        return ok('\n'.join([
            "default via 192.168.1.1 dev eth0 proto dhcp metric 100",
            "192.168.1.0/24 dev eth0 proto kernel scope link src 192.168.1.100 metric 100",
        ]))
    if ctx.command.has_flag('link', 'l'):
        return ok('\n'.join([
            _LOOPBACK.format(mode='mode DEFAULT '),
            "    link/loopback 00:00:00:00:00:00 brd 00:00:00:00:00:00",
            _ETH0.format(mode='mode DEFAULT '),
            "    link/ether 11:22:33:44:55:66 brd ff:ff:ff:ff:ff:ff",
        ]))
    return fail('ip: missing command. Try "ip addr", "ip route", or "ip link"')


@handler('ifconfig')
def ifconfig(ctx: ExecutionContext) -> ExecutionResult:
    interface = ctx.command.arg(0)
    if interface:
        return ok('\n'.join([
            f"{interface}: flags=4163<UP,BROADCAST,RUNNING,MULTICAST>  mtu 1500",
            "        inet 192.168.1.100  netmask 255.255.255.0  broadcast 192.168.1.255",
            "        ether 11:22:33:44:55:66  txqueuelen 1000  (Ethernet)",
            "        RX packets 12345  bytes 1234567 (1.2 MB)",
            "        TX packets 6789  bytes 987654 (987.6 KB)",
        ]))
    return ok('\n'.join([
        "eth0: flags=4163<UP,BROADCAST,RUNNING,MULTICAST>  mtu 1500",
        "        inet 192.168.1.100  netmask 255.255.255.0  broadcast 192.168.1.255",
        "        ether 11:22:33:44:55:66  txqueuelen 1000  (Ethernet)",
        "",
        "lo: flags=73<UP,LOOPBACK,RUNNING>  mtu 65536",
        "        inet 127.0.0.1  netmask 255.0.0.0",
        "        loop  txqueuelen 1000  (Local Loopback)",
    ]))


@handler('iwconfig')
def iwconfig(ctx: ExecutionContext) -> ExecutionResult:
    interface = ctx.command.arg(0, 'wlan0')
    return ok('\n'.join([
        f'{interface:<10}IEEE 802.11  ESSID:"MyNetwork"',
        "          Mode:Managed  Frequency:2.437 GHz  Access Point: AA:BB:CC:DD:EE:FF",
        "          Bit Rate=54 Mb/s   Tx-Power=20 dBm",
        "          Retry short limit:7   RTS thr:off   Fragment thr:off",
        "          Power Management:on",
        "          Link Quality=70/70  Signal level=-40 dBm",
        "          Rx invalid nwid:0  Rx invalid crypt:0  Rx invalid frag:0",
    ]))


@handler('lsof')
def lsof(ctx: ExecutionContext) -> ExecutionResult:
    port = ctx.command.flag_value('-i', ':80')
    return ok('\n'.join([
        "COMMAND  PID USER   FD   TYPE DEVICE SIZE/OFF NODE NAME",
        f"nginx   1234 root    6u  IPv4  12345      0t0  TCP *{port} (LISTEN)",
        f"nginx   1235 www     6u  IPv4  12345      0t0  TCP *{port} (LISTEN)",
    ]))


@handler('nc')
def nc(ctx: ExecutionContext) -> ExecutionResult:
    if ctx.command.has_flag('-l'):
        return ok(f"Listening on port {ctx.command.flag_value('-l', '8080')}")
    operands = file_operands(ctx.args)
    if len(operands) < 2:
        return missing('nc', 'host or port')
    target, port = operands[:2]
    return ok(f"Connected to {target} port {port}")


@handler('telnet')
def telnet(ctx: ExecutionContext) -> ExecutionResult:
    target = ctx.command.arg(0)
    if not target:
        return missing('telnet', 'host')
    port = ctx.command.arg(1, '23')
    return ok(f"Trying {target}...\nConnected to {target} port {port}.\nEscape character is '^]'.")


@handler('ssh')
def ssh(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args, ('-p', '-i', '-l'))
    if not operands:
        return missing('ssh', 'destination')
    return ok(f"Connecting to {operands[0]}...\nConnection established.")


@handler('scp')
def scp(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args, ('-P', '-i'))
    if len(operands) < 2:
        return missing('scp', 'source or destination')
    return ok(f"{operands[0]} -> {operands[1]}\nFile transfer completed.")


@handler('rsync')
def rsync(ctx: ExecutionContext) -> ExecutionResult:
    operands = file_operands(ctx.args)
    if len(operands) < 2:
        return missing('rsync', 'source or destination')
    return ok('\n'.join([
        "sending incremental file list",
        operands[0],
        "",
        "sent 1,024 bytes  received 35 bytes  2,118.00 bytes/sec",
        "total size is 1,024  speedup is 0.97",
    ]))
