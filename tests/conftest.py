"""Pytest configuration and fixtures for linewise tests."""

import tempfile
from pathlib import Path

import pytest

from linewise.commands import CommandDescriptor, CommandProcessor, CommandRegistry
from linewise.history import HistoryStore
from linewise.identity import Identity
from linewise.session import RecordingRenderer, Session
from linewise.storage import MemoryStore


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def history(memory_store):
    return HistoryStore(memory_store)


@pytest.fixture
def registry():
    """Registry with an auth-free echo command and an auth-gated command."""
    reg = CommandRegistry()

    def echo(ctx):
        ctx.text(" ".join(ctx.args))

    def secret(ctx):
        ctx.text("secret data")

    reg.register(CommandDescriptor("echo", echo, description="Print arguments", aliases=("say",)))
    reg.register(CommandDescriptor("secret", secret, description="Needs login", requires_auth=True))
    return reg


@pytest.fixture
def events():
    """List collecting emitted output events."""
    return []


@pytest.fixture
def processor(registry, history):
    return CommandProcessor(registry, history, debug=False)


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def session(registry, history, renderer):
    return Session(registry, history, renderer, debug=False)


@pytest.fixture
def identity():
    return Identity(token="user-token-123", display_name="alice")
