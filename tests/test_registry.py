#!/usr/bin/env python3
"""
Tests for the command registry and the help reference.
"""

from shellsim.handlers import default_handlers
from shellsim.registry import (
    COMMAND_COMBINATIONS, LINUX_COMMANDS, PIPE_OPERATORS,
    Category, CommandInfo, CommandRegistry, render_help,
)


class TestCommandRegistry:
    """Test lookups over the command catalogue."""

    def setup_method(self):
        """Set up test fixtures."""
        self.registry = CommandRegistry()

    def test_catalogue_size(self):
        assert len(self.registry) == len(LINUX_COMMANDS)
        assert len(self.registry) > 90

    def test_get(self):
        info = self.registry.get('grep')
        assert info.category is Category.SEARCH
        assert info.usage.startswith('grep')
        assert info.examples
        assert self.registry.get('nosuchcmd') is None

    def test_contains(self):
        assert 'tar' in self.registry
        assert 'clear' not in self.registry

    def test_search(self):
        names = {info.name for info in self.registry.search('DNS')}
        assert 'nslookup' in names
        assert 'dig' in names

    def test_every_category_is_used(self):
        used = {info.category for info in self.registry}
        assert used == set(Category)

    def test_every_command_has_a_handler(self):
        """The catalogue and the handler table agree."""
        handlers = default_handlers()
        assert [name for name in self.registry.names() if name not in handlers] == []
        assert sorted(name for name in handlers if name not in self.registry) == ['clear', 'help']

    def test_injected_catalogue(self):
        info = CommandInfo('frob', 'Frobnicate', Category.SYSTEM, 'frob', ())
        registry = CommandRegistry({'frob': info})
        assert registry.names() == ['frob']
        assert 'ls' not in registry


class TestFormatDetail:
    """Test the help COMMAND page."""

    def setup_method(self):
        """Set up test fixtures."""
        self.registry = CommandRegistry()

    def test_detail_page(self):
        text = self.registry.format_detail('ls')
        assert text.startswith('ls - List directory contents')
        assert 'Category: file' in text
        assert 'Usage:' in text
        assert 'Examples:' in text
        assert 'ls -la' in text

    def test_unknown(self):
        assert self.registry.format_detail('nosuchcmd') is None


class TestRenderHelp:
    """Test the static reference."""

    def test_sections(self):
        text = render_help()
        assert text.startswith('AI Terminal - Linux Command Reference')
        for section in ('FILE SYSTEM:', 'TEXT PROCESSING:', 'NETWORKING:',
                        'PROCESS MANAGEMENT:', 'SYSTEM INFO:', 'PERMISSIONS:',
                        'ARCHIVES:', 'PIPES & REDIRECTION:', 'COMMON COMBINATIONS:'):
            assert section in text

    def test_operators_and_combinations(self):
        text = render_help()
        assert PIPE_OPERATORS['|'] in text
        assert COMMAND_COMBINATIONS[0] in text
        assert "Type 'help [command]'" in text
