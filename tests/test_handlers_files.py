#!/usr/bin/env python3
"""
Tests for navigation, file content, file operation and search handlers.
"""

import random
from datetime import datetime

from shellsim.terminal import CommandExecutor, SessionState, TerminalConfig
from shellsim.vfs import README_TEXT, SYSLOG_TEXT


FIXED_NOW = datetime(2024, 1, 20, 10, 30, 15)


class HandlerTestCase:
    """Runs lines through a zero-latency executor with a fixed clock."""

    def setup_method(self):
        """Set up test fixtures."""
        self.executor = CommandExecutor(
            config=TerminalConfig(simulate_latency=False),
            clock=lambda: FIXED_NOW,
            sleep=lambda seconds: None,
            rng=random.Random(7),
        )
        self.state = SessionState()

    def run(self, line):
        return self.executor.execute(line, self.state)


class TestNavigation(HandlerTestCase):
    """Test pwd, cd and ls."""

    def test_pwd(self):
        record = self.run('pwd')
        assert record.output == '/home/user'
        assert record.exit_code == 0

    def test_cd_relative_and_back(self):
        assert self.run('cd projects').exit_code == 0
        assert self.state.current_directory == '/home/user/projects'
        self.run('cd ..')
        assert self.state.current_directory == '/home/user'

    def test_cd_absolute_and_home(self):
        self.run('cd /var/log')
        assert self.state.current_directory == '/var/log'
        self.run('cd')
        assert self.state.current_directory == '/home/user'
        self.run('cd /')
        self.run('cd ~')
        assert self.state.current_directory == '/home/user'

    def test_cd_parent_of_root(self):
        self.run('cd /')
        self.run('cd ..')
        assert self.state.current_directory == '/'

    def test_cd_unknown_keeps_directory(self):
        record = self.run('cd nowhere')
        assert record.output == 'cd: nowhere: No such file or directory'
        assert record.exit_code == 1
        assert self.state.current_directory == '/home/user'

    def test_cd_into_file_fails(self):
        assert self.run('cd readme.txt').exit_code == 1
        assert self.state.current_directory == '/home/user'

    def test_ls_short(self):
        assert self.run('ls').output == 'documents  downloads  projects  .bashrc  readme.txt'

    def test_ls_path_operand(self):
        assert self.run('ls projects').output == 'ai-terminal  web-app  script.sh'
        assert self.run('ls /var').output == 'log'

    def test_ls_unknown_path_is_empty(self):
        record = self.run('ls /nowhere')
        assert record.output == ''
        assert record.exit_code == 0

    def test_ls_long(self):
        lines = self.run('ls -la').output.split('\n')
        assert len(lines) == 5
        assert lines[0] == 'drwxr-xr-x 1 user user 4096 1/20/2024 documents'
        assert lines[-1] == '-rw-r--r-- 1 user user 1024 1/20/2024 readme.txt'

    def test_ls_long_with_path(self):
        lines = self.run('ls -l projects').output.split('\n')
        assert lines[-1] == '-rwxr-xr-x 1 user user 512 1/20/2024 script.sh'


class TestFileContent(HandlerTestCase):
    """Test cat, head, tail, wc, stat and file."""

    def test_cat(self):
        assert self.run('cat readme.txt').output == README_TEXT

    def test_cat_missing_file(self):
        record = self.run('cat missing.txt')
        assert record.output == 'cat: missing.txt: No such file or directory'
        assert record.exit_code == 1

    def test_cat_missing_operand(self):
        record = self.run('cat')
        assert record.output == 'cat: missing file operand'
        assert record.exit_code == 1

    def test_cat_numbered(self):
        first = self.run('cat -n .bashrc').output.split('\n')[0]
        assert first == '     1\t# ~/.bashrc: executed by bash(1) for non-login shells.'

    def test_less(self):
        output = self.run('less readme.txt').output
        assert output.startswith("Viewing readme.txt (press 'q' to quit)")
        assert README_TEXT in output

    def test_head(self):
        assert self.run('head -n 3 readme.txt').output == '\n'.join(README_TEXT.splitlines()[:3])
        assert self.run('head readme.txt').output == '\n'.join(README_TEXT.splitlines()[:10])

    def test_head_bad_count_falls_back(self):
        assert self.run('head -n abc readme.txt').output == '\n'.join(README_TEXT.splitlines()[:10])

    def test_tail_follow_defaults_to_syslog(self):
        output = self.run('tail -f').output
        assert output.startswith(SYSLOG_TEXT.splitlines()[0])
        assert output.endswith('[Following log file - press Ctrl+C to stop]')

    def test_tail_count(self):
        output = self.run('tail -n 2 /var/log/syslog').output
        assert output == '\n'.join(SYSLOG_TEXT.splitlines()[-2:])

    def test_tail_missing(self):
        assert self.run('tail').output == 'tail: missing file operand'
        assert self.run('tail nope.log').exit_code == 1

    def test_wc(self):
        lines = len(README_TEXT.splitlines())
        assert self.run('wc -l readme.txt').output == f"{lines} readme.txt"
        assert self.run('wc readme.txt').output.endswith(' readme.txt')

    def test_wc_missing_file(self):
        assert self.run('wc -l nope.txt').output == 'wc: nope.txt: No such file or directory'

    def test_stat(self):
        output = self.run('stat readme.txt').output
        assert '  File: readme.txt' in output
        assert 'Size: 1024' in output
        assert '(0644/-rw-r--r--)' in output

    def test_stat_missing(self):
        record = self.run('stat nope')
        assert record.output == "stat: cannot stat 'nope': No such file or directory"
        assert record.exit_code == 1

    def test_file(self):
        assert self.run('file readme.txt').output == 'readme.txt: ASCII text'
        assert 'shell script' in self.run('file script.sh').output
        assert self.run('file nope').exit_code == 1


class TestFileOperations(HandlerTestCase):
    """Test acknowledgement-only file operations."""

    def test_mkdir(self):
        assert self.run('mkdir newdir').output == "Directory 'newdir' created"
        assert 'newdir' not in self.run('ls').output

    def test_mkdir_missing_operand(self):
        record = self.run('mkdir')
        assert record.output == 'mkdir: missing operand'
        assert record.exit_code == 1

    def test_rm(self):
        assert self.run('rm notes.md').output == "Removed 'notes.md'"
        assert 'and its contents' in self.run('rm -rf build').output

    def test_cp_and_mv(self):
        assert self.run('cp a.txt b.txt').output == "'a.txt' copied to 'b.txt'"
        assert self.run('mv a.txt b.txt').output == "'a.txt' moved to 'b.txt'"
        assert self.run('cp a.txt').exit_code == 1

    def test_touch_and_ln(self):
        assert self.run('touch new.txt').output == "File 'new.txt' created/updated"
        assert self.run('ln -s target link').output.startswith("Symbolic link 'link'")
        assert self.run('ln target').exit_code == 1


class TestSearch(HandlerTestCase):
    """Test find, grep and friends."""

    def test_find_by_name_and_type(self):
        output = self.run('find . -name "*.txt" -type f').output
        assert output == './readme.txt\n./documents/report.txt'

    def test_find_directories(self):
        self.run('cd projects')
        assert self.run('find -type d').output == './ai-terminal\n./web-app'

    def test_find_from_root(self):
        assert self.run('find / -name syslog').output == '/var/log/syslog'

    def test_find_unknown_start(self):
        record = self.run('find nowhere')
        assert record.output == "find: 'nowhere': No such file or directory"
        assert record.exit_code == 1

    def test_grep_file(self):
        record = self.run('grep Welcome readme.txt')
        assert record.output == 'Welcome to AI Terminal v2.0!'
        assert record.exit_code == 0

    def test_grep_ignore_case(self):
        assert self.run('grep -i welcome readme.txt').output == 'Welcome to AI Terminal v2.0!'

    def test_grep_count(self):
        assert self.run('grep -c ^alias .bashrc').output == '9'

    def test_grep_no_match(self):
        record = self.run('grep zzzz readme.txt')
        assert record.output == ''
        assert record.exit_code == 1

    def test_grep_recursive(self):
        lines = self.run('grep -r TODO .').output.split('\n')
        assert len(lines) == 3
        assert all('TODO' in line for line in lines)

    def test_grep_operand_errors(self):
        assert self.run('grep').output == 'grep: missing pattern'
        assert self.run('grep foo').output == 'grep: missing file operand'
        assert self.run('grep foo nope.txt').output == 'grep: nope.txt: No such file or directory'

    def test_which_and_whereis(self):
        assert self.run('which ls').output == '/usr/bin/ls'
        assert self.run('whereis ls').output.startswith('ls: /usr/bin/ls')
        assert self.run('locate').exit_code == 1
