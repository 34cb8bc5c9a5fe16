#!/usr/bin/env python3
"""
Tests for the network utility handlers.
"""

import random
from datetime import datetime

from shellsim.terminal import CommandExecutor, SessionState, TerminalConfig


FIXED_NOW = datetime(2024, 1, 20, 10, 30, 15)


def make_executor(seed=42):
    return CommandExecutor(
        config=TerminalConfig(simulate_latency=False),
        clock=lambda: FIXED_NOW,
        rng=random.Random(seed),
    )


class TestNetworkHandlers:
    """Test the templated network tools."""

    def setup_method(self):
        """Set up test fixtures."""
        self.executor = make_executor()
        self.state = SessionState()

    def run(self, line):
        return self.executor.execute(line, self.state)

    def test_ping_count(self):
        lines = self.run('ping -c 2 example.org').output.split('\n')
        assert lines[0] == 'PING example.org (142.250.191.14): 56 data bytes'
        assert sum('icmp_seq=' in line for line in lines) == 2
        assert '2 packets transmitted, 2 packets received, 0.0% packet loss' in lines

    def test_ping_defaults(self):
        output = self.run('ping').output
        assert output.startswith('PING google.com')
        assert output.count('icmp_seq=') == 4

    def test_ping_bad_count_falls_back(self):
        assert self.run('ping -c abc host').output.count('icmp_seq=') == 4
        assert self.run('ping -c 0 host').output.count('icmp_seq=') == 4

    def test_ping_count_is_capped(self):
        output = self.run('ping -c 3000000 host').output
        assert output.count('icmp_seq=') == 100
        assert '100 packets transmitted, 100 packets received' in output

    def test_ping_is_deterministic_for_a_seed(self):
        first = make_executor(seed=3).execute('ping -c 3 host', SessionState()).output
        second = make_executor(seed=3).execute('ping -c 3 host', SessionState()).output
        assert first == second

    def test_curl(self):
        assert '"status": "success"' in self.run('curl https://api.github.com').output
        headers = self.run('curl -I https://google.com').output
        assert headers.startswith('HTTP/2 200')
        assert 'date: Sat, 20 Jan 2024 10:30:15 GMT' in headers

    def test_wget(self):
        output = self.run('wget https://example.com/data/report.csv').output
        assert output.startswith('--2024-01-20T10:30:15.000Z--  https://example.com/data/report.csv')
        assert "Saving to: 'report.csv'" in output
        assert 'Resolving example.com (example.com)' in output

    def test_netstat_and_ss(self):
        assert 'LISTEN' in self.run('netstat -tuln').output
        assert 'ESTABLISHED' in self.run('netstat').output
        assert self.run('ss -tuln').output.startswith('Netid')

    def test_dns_tools(self):
        assert 'Name:\texample.org' in self.run('nslookup example.org').output
        assert self.run('dig +short example.org').output == '142.250.191.14'
        dig = self.run('dig example.org').output
        assert 'example.org.\t\t300\tIN\tA\t142.250.191.14' in dig
        assert ';; WHEN: Sat Jan 20 10:30:15 2024' in dig

    def test_host(self):
        assert self.run('host example.org').output.startswith('example.org has address')
        record = self.run('host')
        assert record.output == 'host: missing hostname'
        assert record.exit_code == 1

    def test_traceroute(self):
        assert self.run('traceroute example.org').output.startswith('traceroute to example.org')
        assert self.run('tracepath').output.startswith('tracepath to google.com')

    def test_ip(self):
        assert 'inet 192.168.1.100/24' in self.run('ip addr').output
        assert self.run('ip route').output.startswith('default via 192.168.1.1')
        assert self.run('ip').exit_code == 1

    def test_interfaces(self):
        assert self.run('ifconfig').output.startswith('eth0:')
        assert self.run('ifconfig wlan1').output.startswith('wlan1:')
        assert self.run('iwconfig').output.startswith('wlan0')
        assert 'eth0' in self.run('arp -a').output
        assert self.run('route -n').output.split('\n')[2].startswith('0.0.0.0')

    def test_lsof_port(self):
        assert 'TCP *:443 (LISTEN)' in self.run('lsof -i :443').output
        assert 'TCP *:80 (LISTEN)' in self.run('lsof').output

    def test_remote_tools(self):
        assert self.run('nc example.org 80').output == 'Connected to example.org port 80'
        assert self.run('nc -l 9000').output == 'Listening on port 9000'
        assert self.run('nc').exit_code == 1
        assert self.run('ssh -p 2222 admin@server').output.startswith('Connecting to admin@server')
        assert self.run('ssh').output == 'ssh: missing destination'
        assert self.run('scp a.txt host:/tmp').output.endswith('File transfer completed.')
        assert self.run('rsync -av src/ dst/').output.split('\n')[1] == 'src/'
        assert "Escape character is '^]'." in self.run('telnet host 25').output
