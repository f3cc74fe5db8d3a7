"""
Tests for shortcut expansion.
"""

import pytest

from unfold.parser.shortcuts import complete, expand_shortcut


class TestExpandShortcut:
    """Tests for the built-in shortcut table."""

    @pytest.mark.parametrize("line,expected", [
        ("prg", "list programs"),
        ("programs", "list programs"),
        ("PRJ", "list projects"),
        ("tsk", "list tasks"),
        ("tasks", "list tasks"),
        ("sub", "list subtasks"),
    ])
    def test_list_shortcuts(self, line, expected):
        assert expand_shortcut(line) == expected

    def test_add_wraps_title_in_quotes(self):
        assert expand_shortcut("add task Fix it") == 'create task "Fix it"'

    def test_install_strips_existing_quotes(self):
        assert expand_shortcut('install program "Work stuff"') == 'create program "Work stuff"'

    def test_done_and_start(self):
        assert expand_shortcut("done task ABC123") == "update task ABC123 status:completed"
        assert expand_shortcut("start tsk A1") == "update task A1 status:active"

    def test_man_and_help(self):
        assert expand_shortcut("man unfold") == "man"
        assert expand_shortcut("help create") == "man create"

    def test_plain_help_untouched(self):
        assert expand_shortcut("help") == "help"

    def test_no_match_returns_input_unchanged(self):
        assert expand_shortcut("list tasks status:active") == "list tasks status:active"

    def test_surrounding_whitespace_ignored_for_match(self):
        assert expand_shortcut("  prg  ") == "list programs"


class TestAliases:
    """Tests for user-configured aliases."""

    def test_alias_expands(self):
        aliases = {"today": "list tasks status:due"}
        assert expand_shortcut("Today", aliases) == "list tasks status:due"

    def test_alias_checked_before_builtins(self):
        assert expand_shortcut("prg", {"prg": "list projects"}) == "list projects"

    def test_unknown_alias_falls_through(self):
        assert expand_shortcut("prg", {"today": "list tasks"}) == "list programs"


class TestComplete:
    def test_prefix(self):
        assert complete("man") == ["man", "man list", "man create"]

    def test_limit(self):
        assert len(complete("", limit=5)) == 5

    def test_case_insensitive(self):
        assert complete("LIST T") == ["list tasks"]
