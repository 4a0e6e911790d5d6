"""Tests for slash commands and outbound message splitting."""

import asyncio

import pytest
from langchain_core.messages import HumanMessage

from lola.application.commands import (
    CHUNK_SIZE, CLEARED_MESSAGE, CLI_COMMANDS, CONTINUED_SUFFIX, HELP_TEXT, TELEGRAM_MESSAGE_LIMIT,
    WELCOME_TEXT, handle_command, parse_command, split_message
)
from lola.domain.session.session_registry import SessionRegistry


@pytest.fixture
def registry():
    return SessionRegistry(object)


class TestParseCommand:
    def test_aliases(self):
        assert parse_command("/clear") == "clear"
        assert parse_command("/reset") == "clear"
        assert parse_command("/stats") == "memory"
        assert parse_command("  /MEMORY  ") == "memory"

    def test_bot_suffix(self):
        assert parse_command("/clear@LolaBot") == "clear"

    def test_tasks_are_not_commands(self):
        assert parse_command("find /clear on the page") is None
        assert parse_command("/unknown") is None

    def test_surface_allowed_set(self):
        assert parse_command("/start", CLI_COMMANDS) is None
        assert parse_command("/start") == "start"


class TestHandleCommand:
    @pytest.mark.asyncio
    async def test_clear_then_memory(self, registry):
        session = await registry.resolve("u")
        session.memory.append([HumanMessage(content="a"), HumanMessage(content="b")])

        assert await handle_command("memory", session) == "Memory: 2 messages stored"
        assert await handle_command("clear", session) == CLEARED_MESSAGE
        assert await handle_command("memory", session) == "Memory: 0 messages stored"

    @pytest.mark.asyncio
    async def test_clear_waits_for_running_job(self, registry):
        session = await registry.resolve("u")
        await session.job_lock.acquire()

        clearing = asyncio.create_task(handle_command("clear", session))
        await asyncio.sleep(0)
        session.memory.append([HumanMessage(content="job delta")])
        assert not clearing.done()

        session.job_lock.release()
        await clearing
        assert session.memory.count() == 0

    @pytest.mark.asyncio
    async def test_static_texts(self, registry):
        session = await registry.resolve("u")
        assert await handle_command("start", session) == WELCOME_TEXT
        assert await handle_command("help", session) == HELP_TEXT

    @pytest.mark.asyncio
    async def test_unknown_command(self, registry):
        session = await registry.resolve("u")
        with pytest.raises(ValueError):
            await handle_command("shutdown", session)


class TestSplitMessage:
    def test_short_message_untouched(self):
        assert split_message("hello") == ["hello"]

    def test_exact_limit_is_one_chunk(self):
        text = "x" * TELEGRAM_MESSAGE_LIMIT
        assert split_message(text) == [text]

    def test_long_message_split_in_order(self):
        text = "".join(str(i % 10) for i in range(9000))

        chunks = split_message(text)

        assert len(chunks) == 3
        assert all(len(c) <= TELEGRAM_MESSAGE_LIMIT for c in chunks)
        assert chunks[0].endswith(CONTINUED_SUFFIX)
        assert chunks[1].endswith(CONTINUED_SUFFIX)
        assert not chunks[2].endswith(CONTINUED_SUFFIX)
        assert "".join(c.replace(CONTINUED_SUFFIX, "") for c in chunks) == text
        assert len(chunks[0]) == CHUNK_SIZE + len(CONTINUED_SUFFIX)
