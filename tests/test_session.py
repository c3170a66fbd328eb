"""Tests for session state and output routing."""

import asyncio

import pytest

from linewise.commands import CommandDescriptor, NextStep, ProcessorMode
from linewise.constants import CONTINUATION_PROMPT, DEFAULT_PROMPT
from linewise.history import HistoryStore
from linewise.identity import Identity
from linewise.output import CommandEcho, TextEvent
from linewise.session import RecordingRenderer, Session


class TestSubmit:
    """Test feeding lines through a session."""

    @pytest.mark.asyncio
    async def test_echo_end_to_end(self, session, renderer):
        await session.submit("echo a b c")

        assert renderer.events == [TextEvent("a b c")]
        assert session.lines_submitted == 1

    @pytest.mark.asyncio
    async def test_echo_input_records_command_echo(self, registry):
        renderer = RecordingRenderer()
        session = Session(registry, HistoryStore(), renderer, echo_input=True)

        await session.submit("echo hi")
        await session.submit("")

        assert renderer.events == [CommandEcho("echo hi"), TextEvent("hi")]

    @pytest.mark.asyncio
    async def test_submit_after_end_raises(self, session):
        session.end()

        with pytest.raises(RuntimeError):
            await session.submit("echo late")

    @pytest.mark.asyncio
    async def test_login_unlocks_auth_commands(self, session, renderer, identity):
        session.login(identity)
        await session.submit("secret")
        session.logout()
        await session.submit("secret")

        assert renderer.events[0] == TextEvent("secret data")
        assert renderer.events[1].hint is not None
        assert session.identity is None


class TestSerialization:
    @pytest.mark.asyncio
    async def test_concurrent_submits_reach_wizard_in_order(self, registry, history):
        release = asyncio.Event()
        answers = []

        async def write(ctx):
            await release.wait()
            ctx.text("title?")
            return NextStep(answers.append)

        registry.register(CommandDescriptor("write", write))
        renderer = RecordingRenderer()
        session = Session(registry, history, renderer, echo_input=True)

        first = asyncio.create_task(session.submit("write"))
        second = asyncio.create_task(session.submit("my title"))
        await asyncio.sleep(0)
        release.set()
        await asyncio.gather(first, second)

        assert answers == ["my title"]
        assert renderer.events == [
            CommandEcho("write"),
            TextEvent("title?"),
            CommandEcho("my title"),
        ]
        assert session.mode is ProcessorMode.IDLE

    @pytest.mark.asyncio
    async def test_line_queued_behind_exit_is_rejected(self, registry, history):
        registry.register(CommandDescriptor("bye", lambda ctx: ctx.end_session()))
        session = Session(registry, history, RecordingRenderer())

        results = await asyncio.gather(
            session.submit("bye"), session.submit("echo late"), return_exceptions=True
        )

        assert results[0] is ProcessorMode.IDLE
        assert isinstance(results[1], RuntimeError)
        assert session.renderer.events == []


class TestPrompt:
    @pytest.mark.asyncio
    async def test_prompt_switches_while_continuation_pending(self, registry, history):
        registry.register(CommandDescriptor("ask", lambda ctx: NextStep(lambda line: None)))
        session = Session(registry, history, RecordingRenderer(), prompt="blog> ")

        assert session.prompt == "blog> "
        await session.submit("ask")
        assert session.prompt == CONTINUATION_PROMPT
        assert session.mode is ProcessorMode.AWAITING_CONTINUATION
        await session.submit("answer")
        assert session.prompt == "blog> "

    @pytest.mark.asyncio
    async def test_cancel_pending(self, registry, history):
        registry.register(CommandDescriptor("ask", lambda ctx: NextStep(lambda line: None)))
        session = Session(registry, history, RecordingRenderer())

        assert session.cancel_pending() is False
        await session.submit("ask")
        assert session.cancel_pending() is True
        assert session.prompt == DEFAULT_PROMPT


class TestIsolation:
    @pytest.mark.asyncio
    async def test_sessions_share_registry_not_state(self, registry):
        registry.register(CommandDescriptor("ask", lambda ctx: NextStep(lambda line: None)))
        first = Session(registry, HistoryStore(), RecordingRenderer())
        second = Session(registry, HistoryStore(), RecordingRenderer())

        await first.submit("ask")
        await second.submit("echo independent")

        assert first.mode is ProcessorMode.AWAITING_CONTINUATION
        assert second.renderer.events == [TextEvent("independent")]
        assert second.history.all() == ["echo independent"]


class TestIdentity:
    def test_token_hidden_from_repr(self):
        identity = Identity(token="very-secret-token", display_name="alice")

        assert "very-secret-token" not in repr(identity)
        assert str(identity) == "alice"

    def test_str_without_display_name(self):
        assert str(Identity(token="t")) == "(authenticated)"
