#!/usr/bin/env python3
"""
Tests for the permission and archive handlers.
"""

import random

from shellsim.handlers.archive import symbolic_permissions
from shellsim.terminal import CommandExecutor, SessionState, TerminalConfig


class TestPermissions:
    """Test chmod, chown, chgrp and umask."""

    def setup_method(self):
        """Set up test fixtures."""
        self.executor = CommandExecutor(config=TerminalConfig(simulate_latency=False),
                                        rng=random.Random(0))
        self.state = SessionState()

    def run(self, line):
        return self.executor.execute(line, self.state)

    def test_symbolic_permissions(self):
        assert symbolic_permissions('755') == 'rwxr-xr-x'
        assert symbolic_permissions('0644') == 'rw-r--r--'

    def test_chmod_octal(self):
        assert self.run('chmod 755 script.sh').output == \
            "mode of 'script.sh' changed to 0755 (rwxr-xr-x)"

    def test_chmod_symbolic(self):
        assert self.run('chmod +x script.sh').output == "mode of 'script.sh' changed (+x)"
        assert self.run('chmod u+rw,go-w notes.md').exit_code == 0

    def test_chmod_errors(self):
        assert self.run('chmod 755').output == 'chmod: missing operand'
        record = self.run('chmod 999 file')
        assert record.output == "chmod: invalid mode: '999'"
        assert record.exit_code == 1

    def test_chown_and_chgrp(self):
        assert self.run('chown root:admin file').output == "ownership of 'file' changed to root:admin"
        assert self.run('chown root file').output == "ownership of 'file' changed to root"
        assert self.run('chgrp staff file').output == "group of 'file' changed to staff"
        assert self.run('chown root').exit_code == 1

    def test_umask(self):
        assert self.run('umask').output == '0022'
        assert self.run('umask 077').output == 'umask set to 077'
        assert self.run('umask 9').exit_code == 1


class TestArchives:
    """Test tar, gzip and zip."""

    def setup_method(self):
        """Set up test fixtures."""
        self.executor = CommandExecutor(config=TerminalConfig(simulate_latency=False),
                                        rng=random.Random(0))
        self.state = SessionState()

    def run(self, line):
        return self.executor.execute(line, self.state)

    def test_tar_create(self):
        assert self.run('tar -czf backup.tar.gz documents projects').output == \
            "Archive 'backup.tar.gz' created with 2 item(s)"
        assert self.run('tar -czvf backup.tar.gz documents').output == 'documents'

    def test_tar_list_and_extract(self):
        assert 'documents/report.txt' in self.run('tar -tzf backup.tar.gz').output
        assert self.run('tar -xzf backup.tar.gz').output == "Extracted 'backup.tar.gz'"
        assert self.run('tar xzvf backup.tar.gz').output.startswith('documents/')

    def test_tar_errors(self):
        assert self.run('tar').exit_code == 1
        assert self.run('tar -czf').output == 'tar: missing archive name'
        assert self.run('tar -czf empty.tar.gz').output == \
            'tar: Cowardly refusing to create an empty archive'

    def test_gzip(self):
        assert self.run('gzip data.log').output == 'data.log compressed to data.log.gz'
        assert self.run('gzip -d data.log.gz').output == 'data.log.gz decompressed'
        assert self.run('gunzip data.log.gz').output == 'data.log.gz decompressed to data.log'
        assert self.run('gunzip data.log').exit_code == 1
        assert self.run('gzip').exit_code == 1

    def test_zip(self):
        output = self.run('zip -r site.zip web-app').output
        assert output == "  adding: web-app (deflated 45%)\nArchive 'site.zip' created"
        assert self.run('zip').output == 'zip: missing archive name'
        assert self.run('zip site.zip').output == 'zip: missing files to add'

    def test_unzip(self):
        output = self.run('unzip site.zip').output
        assert output.startswith('Archive:  site.zip')
        assert '  inflating: documents/report.txt' in output
        assert '  inflating: out/documents/report.txt' in self.run('unzip site.zip -d out').output
        assert '4 files' in self.run('unzip -l site.zip').output
        assert self.run('unzip').output == 'unzip: missing archive name'
