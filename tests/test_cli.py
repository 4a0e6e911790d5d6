"""Tests for the line-oriented CLI surface."""

import pytest

from lola.application.cli.cli import BANNER, CliApp
from lola.domain.session.session_registry import CLI_IDENTITY

from tests.conftest import ScriptedPlanner, answer, make_runtime


class ScriptedInput:
    def __init__(self, lines):
        self.lines = list(lines)

    async def __call__(self):
        return self.lines.pop(0) if self.lines else ""


class TestCliApp:
    @pytest.mark.asyncio
    async def test_task_prints_final_block(self):
        app = CliApp(make_runtime(ScriptedPlanner([answer("Example Domain")])))
        output = await app.handle_line("open example.com\n")
        assert output == "\n=== FINAL ===\nExample Domain\n=============\n"

    @pytest.mark.asyncio
    async def test_blank_line_ignored(self):
        app = CliApp(make_runtime(ScriptedPlanner([answer("unused")])))
        assert await app.handle_line("   \n") is None

    @pytest.mark.asyncio
    async def test_commands(self):
        app = CliApp(make_runtime(ScriptedPlanner([answer("hi")])))
        await app.handle_line("say hi")
        assert await app.handle_line("/memory") == "Memory: 2 messages stored\n"
        await app.handle_line("/clear")
        assert await app.handle_line("/memory") == "Memory: 0 messages stored\n"

    @pytest.mark.asyncio
    async def test_chat_only_command_is_a_task(self):
        planner = ScriptedPlanner([answer("treated as task")])
        app = CliApp(make_runtime(planner))
        output = await app.handle_line("/start")
        assert "treated as task" in output
        assert planner.calls == 1

    @pytest.mark.asyncio
    async def test_job_error(self):
        app = CliApp(make_runtime(ScriptedPlanner([RuntimeError("boom")])))
        assert await app.handle_line("go") == "Job error: boom"

    @pytest.mark.asyncio
    async def test_run_until_eof(self):
        runtime = make_runtime(ScriptedPlanner([answer("one"), answer("two")]))
        written = []
        app = CliApp(runtime, read_line=ScriptedInput(["first\n", "\n", "second\n"]), write=written.append)

        await app.run()

        assert written[0] == BANNER
        assert len(written) == 3
        assert runtime.sessions.get(CLI_IDENTITY).memory.count() == 4
