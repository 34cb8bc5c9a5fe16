#!/usr/bin/env python3
"""
Tests for the virtual file system.
"""

import pytest

from shellsim.vfs import (
    HOME_DIR, EntryKind, VFSEntry, VirtualFileSystem,
    default_vfs, directory, iter_tree, regular_file,
)


class TestVirtualFileSystem:
    """Test lookups over the seed tree."""

    def setup_method(self):
        """Set up test fixtures."""
        self.vfs = default_vfs()

    def test_home_listing(self):
        """The home directory holds the seed entries in order."""
        names = [entry.name for entry in self.vfs.listing(HOME_DIR)]
        assert names == ['documents', 'downloads', 'projects', '.bashrc', 'readme.txt']

    def test_unknown_listing_is_empty(self):
        assert self.vfs.listing('/nowhere') == ()

    def test_strict_lookup_raises(self):
        with pytest.raises(KeyError):
            self.vfs['/nowhere']

    def test_mapping_is_read_only(self):
        """Neither the tree nor the listings can be modified."""
        with pytest.raises(TypeError):
            self.vfs._tree['/new'] = ()
        assert isinstance(self.vfs['/home'], tuple)

    def test_exists(self):
        assert self.vfs.exists('/')
        assert self.vfs.exists('/home/user/projects')
        assert not self.vfs.exists('/home/user/readme.txt')

    def test_find_entry(self):
        entry = self.vfs.find_entry('/home/user/projects', 'script.sh')
        assert entry.is_file()
        assert entry.permissions == '-rwxr-xr-x'
        assert self.vfs.find_entry('/home/user', 'missing') is None

    def test_registered_files(self):
        assert self.vfs.has_file('readme.txt')
        assert self.vfs.has_file('/var/log/syslog')
        assert self.vfs.read('readme.txt').startswith('Welcome to AI Terminal')
        assert self.vfs.read('missing.txt') is None

    def test_iter_tree_covers_every_listing(self):
        pairs = list(iter_tree(self.vfs))
        assert ('/home/user/projects', self.vfs.find_entry('/home/user/projects', 'web-app')) in pairs
        assert len(pairs) == sum(len(entries) for entries in self.vfs.values())


class TestResolve:
    """Test cd-style path resolution."""

    def setup_method(self):
        """Set up test fixtures."""
        self.vfs = default_vfs()

    def test_home_shortcuts(self):
        assert self.vfs.resolve('/etc', None) == HOME_DIR
        assert self.vfs.resolve('/etc', '~') == HOME_DIR
        assert self.vfs.resolve('/etc', '', home='/home/guest') == '/home/guest'

    def test_parent(self):
        assert self.vfs.resolve('/home/user/projects', '..') == '/home/user'
        assert self.vfs.resolve('/home', '..') == '/'
        assert self.vfs.resolve('/', '..') == '/'

    def test_absolute_is_verbatim(self):
        assert self.vfs.resolve('/home/user', '/var/log') == '/var/log'

    def test_relative_is_appended(self):
        assert self.vfs.resolve('/home/user', 'projects') == '/home/user/projects'
        assert self.vfs.resolve('/', 'etc') == '/etc'

    def test_no_further_normalization(self):
        assert self.vfs.resolve('/home/user', 'documents/') == '/home/user/documents/'
        assert '/home/user/documents/' not in self.vfs


class TestCustomTree:
    """Test building a file system from a substitute seed."""

    def test_small_tree(self):
        vfs = VirtualFileSystem(
            {'/': (directory('data'),), '/data': (regular_file('a.txt', 3),)},
            {'a.txt': 'abc'},
        )
        assert len(vfs) == 2
        assert list(vfs) == ['/', '/data']
        assert vfs.read('a.txt') == 'abc'
        assert vfs['/data'][0] == VFSEntry('a.txt', EntryKind.FILE, size=3, permissions='-rw-r--r--')

    def test_entries_are_frozen(self):
        entry = directory('data')
        with pytest.raises(AttributeError):
            entry.name = 'other'
