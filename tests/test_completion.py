"""Tests for command and history completion."""

import pytest

from linewise.commands import CommandDescriptor, CommandRegistry, register_general_commands
from linewise.completion import CompletionEngine, common_prefix
from linewise.history import HistoryStore


@pytest.fixture
def engine():
    registry = CommandRegistry()
    register_general_commands(registry)
    registry.register(CommandDescriptor("list", lambda ctx: None, aliases=("ls",)))
    registry.register(CommandDescriptor("login", lambda ctx: None))
    return CompletionEngine(registry, HistoryStore())


class TestCommonPrefix:
    def test_shared_prefix(self):
        assert common_prefix(["history", "hist", "histogram"]) == "hist"

    def test_no_shared_prefix(self):
        assert common_prefix(["help", "list"]) == ""

    def test_empty_input(self):
        assert common_prefix([]) == ""


class TestSuggestions:
    """Test candidate lists."""

    def test_command_prefix(self, engine):
        assert engine.suggestions("hist") == ["history"]

    def test_alias_prefix_yields_canonical_name(self, engine):
        assert engine.suggestions("qu") == ["exit"]

    def test_multiple_matches_in_registration_order(self, engine):
        assert engine.suggestions("l") == ["list", "login"]

    def test_history_matches_follow_commands(self, engine):
        engine.history.record("history clear")

        assert engine.suggestions("hist") == ["history", "history clear"]

    def test_duplicates_removed(self, engine):
        engine.history.record("help")

        assert engine.suggestions("he") == ["help"]

    def test_blank_input_has_no_suggestions(self, engine):
        assert engine.suggestions("") == []
        assert engine.suggestions("   ") == []

    def test_multi_token_uses_history(self, engine):
        engine.history.record("echo hello world")
        engine.history.record("echo goodbye")

        assert engine.suggestions("echo h") == ["echo hello world"]

    def test_argument_completer(self, engine):
        engine.register_argument_completer(
            "ls", lambda partial: ["list recent", "list popular", "other"]
        )

        assert engine.suggestions("list r") == ["list recent"]
        assert engine.suggestions("ls p") == []

    def test_unknown_command_has_no_argument_suggestions(self, engine):
        assert engine.suggestions("nope x") == []


class TestComplete:
    """Test the text filled in on Tab."""

    def test_unique_match_completes(self, engine):
        assert engine.complete("histo") == "history"

    def test_ambiguous_without_longer_prefix(self, engine):
        # help and history share only "h".
        assert engine.complete("h") is None

    def test_ambiguous_extends_to_common_prefix(self, engine):
        engine.registry.register(CommandDescriptor("logout", lambda ctx: None))

        assert engine.complete("lo") == "log"

    def test_no_match(self, engine):
        assert engine.complete("zzz") is None

    def test_full_line_from_history(self, engine):
        engine.history.record("echo hello world")

        assert engine.complete("echo he") == "echo hello world"


class TestReassignedAliases:
    """Test that suggestions follow the registry's live alias table."""

    def test_reassigned_alias_suggests_only_new_owner(self):
        registry = CommandRegistry()
        registry.register(CommandDescriptor("foo", lambda ctx: None, aliases=("fx",)))
        registry.register(CommandDescriptor("bar", lambda ctx: None, aliases=("fx",)))
        engine = CompletionEngine(registry, HistoryStore())

        assert registry.resolve("fx").name == "bar"
        assert engine.suggestions("fx") == ["bar"]
        assert engine.complete("fx") == "bar"

    def test_alias_shadowed_by_name_suggests_name(self):
        registry = CommandRegistry()
        registry.register(CommandDescriptor("history", lambda ctx: None, aliases=("hs",)))
        registry.register(CommandDescriptor("hs", lambda ctx: None))
        engine = CompletionEngine(registry, HistoryStore())

        assert engine.suggestions("hs") == ["hs"]
