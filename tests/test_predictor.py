#!/usr/bin/env python3
"""
Tests for the workflow predictor.
"""

from datetime import datetime

import pytest

from shellsim.predictor import WORKFLOW_PATTERNS, WorkflowPredictor
from shellsim.terminal import CommandRecord


def record(command):
    return CommandRecord('1', command, '', datetime(2024, 1, 20), 0, '/home/user')


class TestStaticPatterns:
    """Test the prefix table."""

    def setup_method(self):
        """Set up test fixtures."""
        self.predictor = WorkflowPredictor()

    def test_find_prefix(self):
        assert self.predictor.predict('fin', []) == 'find . -name "*.txt" -type f'

    def test_case_and_whitespace_insensitive(self):
        assert self.predictor.predict('  FIN ', []) == 'find . -name "*.txt" -type f'

    def test_first_match_wins(self):
        assert self.predictor.predict('gre', []) == 'grep -r "pattern" .'

    def test_exact_key_is_skipped(self):
        """Typing a whole key moves on to longer keys it prefixes."""
        assert self.predictor.predict('find', []) == 'find . -name "*.txt" -type f'
        assert self.predictor.predict('ping', []) is None

    def test_other_families(self):
        assert self.predictor.predict('net', []) == 'netstat -tuln'
        assert self.predictor.predict('chm', []) == 'chmod 755 filename'
        assert self.predictor.predict('una', []) == 'uname -a'
        assert self.predictor.predict('dat', []) == 'date +"%Y-%m-%d %H:%M:%S"'

    def test_short_input(self):
        assert self.predictor.predict('fi', []) is None
        assert self.predictor.predict('', []) is None

    def test_no_match(self):
        assert self.predictor.predict('xyz', []) is None

    def test_table_is_read_only(self):
        assert len(WORKFLOW_PATTERNS) > 30
        with pytest.raises(TypeError):
            WORKFLOW_PATTERNS['new'] = 'x'


class TestHistoryRules:
    """Test predictions steered by the previous command."""

    def setup_method(self):
        """Set up test fixtures."""
        self.predictor = WorkflowPredictor()

    def test_git_workflow(self):
        assert self.predictor.predict('git', [record('git status')]) == 'git add .'
        assert self.predictor.predict('git', [record('git add .')]) == 'git commit -m "Update"'
        assert self.predictor.predict('git', [record('git commit -m x')]) == 'git push origin main'

    def test_git_only_on_bare_git(self):
        assert self.predictor.predict('git pu', [record('git status')]) is None

    def test_only_last_command_counts(self):
        history = [record('git status'), record('ls')]
        assert self.predictor.predict('git', history) is None

    def test_network_workflow(self):
        history = [record('ping -c 4 google.com')]
        assert self.predictor.predict('trx', history) == 'traceroute google.com'
        assert self.predictor.predict('nsx', history) == 'nslookup google.com'

    def test_static_table_takes_precedence(self):
        history = [record('ping google.com')]
        assert self.predictor.predict('tra', history) == 'traceroute google.com'
        assert self.predictor.predict('nsl', history) == 'nslookup google.com'

    def test_search_workflow(self):
        assert self.predictor.predict('grx', [record('find . -name x')]) == 'grep -r "pattern" .'

    def test_history_is_case_folded(self):
        assert self.predictor.predict('git', [record('GIT STATUS')]) == 'git add .'

    def test_plain_strings_accepted(self):
        assert self.predictor.predict('git', ['git status']) == 'git add .'

    def test_empty_history(self):
        assert self.predictor.predict('git', []) is None


class TestProperties:
    """Test purity and non-reflexivity."""

    def test_never_returns_input(self):
        predictor = WorkflowPredictor()
        inputs = list(WORKFLOW_PATTERNS) + list(WORKFLOW_PATTERNS.values()) + ['git', 'top', 'lscpu']
        for typed in inputs:
            suggestion = predictor.predict(typed, [record('git status')])
            assert suggestion is None or suggestion.lower() != typed.lower().strip()

    def test_reflexive_suggestion_is_skipped(self):
        predictor = WorkflowPredictor({'lscpu': 'lscpu', 'lscpu -e': 'lscpu -e'})
        assert predictor.predict('lscpu', []) == 'lscpu -e'
        assert WorkflowPredictor({'top': 'top'}).predict('top', []) is None
        assert WorkflowPredictor({'tops': 'top'}).predict('top', []) is None

    def test_idempotent(self):
        predictor = WorkflowPredictor()
        history = [record('find .')]
        assert predictor.predict('gr', history) == predictor.predict('gr', history)
        assert predictor.predict('grx', history) == predictor.predict('grx', history)

    def test_injected_rules(self):
        predictor = WorkflowPredictor(patterns={}, rules=[('make', lambda typed: True, 'make test')])
        assert predictor.predict('mak', ['make']) == 'make test'
        assert predictor.predict('fin', ['make']) == 'make test'
        assert predictor.predict('fin', ['ls']) is None
