"""Tests for running jobs against session memory."""

import pytest
from langchain_core.messages import AIMessage, HumanMessage, ToolMessage

from lola.domain.orchestration.core.job_runner import JobFailedError, JobRunner

from tests.conftest import ScriptedPlanner, answer, ask_tools, make_runtime, make_settings, tool_call


class TestJobRunner:
    @pytest.mark.asyncio
    async def test_appends_only_this_jobs_turns(self):
        planner = ScriptedPlanner([ask_tools(tool_call("echo", text="hi")), answer("done")])
        runtime = make_runtime(planner)
        session = await runtime.sessions.resolve("u1")

        reply = await runtime.job_runner.run("say hi", session)

        assert reply == "done"
        assert [type(m) for m in session.memory.all()] == [HumanMessage, AIMessage, ToolMessage, AIMessage]
        assert session.jobs_completed == 1

    @pytest.mark.asyncio
    async def test_second_job_sees_first_jobs_history(self):
        planner = ScriptedPlanner([answer("first"), answer("second")])
        runtime = make_runtime(planner)
        session = await runtime.sessions.resolve("u1")

        await runtime.job_runner.run("one", session)
        await runtime.job_runner.run("two", session)

        seen = [m.content for m in planner.prompts[1][1:]]
        assert seen == ["one", "first", "two"]
        assert [m.content for m in session.memory.all()] == ["one", "first", "two", "second"]

    @pytest.mark.asyncio
    async def test_failed_job_leaves_memory_untouched(self):
        planner = ScriptedPlanner([answer("first"), RuntimeError("planner unavailable")])
        runtime = make_runtime(planner)
        session = await runtime.sessions.resolve("u1")
        await runtime.job_runner.run("one", session)

        with pytest.raises(JobFailedError, match="planner unavailable"):
            await runtime.job_runner.run("two", session)

        assert [m.content for m in session.memory.all()] == ["one", "first"]
        assert not session.busy

    @pytest.mark.asyncio
    async def test_exception_without_message_uses_class_name(self):
        runtime = make_runtime(ScriptedPlanner([ConnectionError()]))
        session = await runtime.sessions.resolve("u1")

        with pytest.raises(JobFailedError, match="ConnectionError"):
            await runtime.job_runner.run("go", session)

    @pytest.mark.asyncio
    async def test_memory_capacity_applies_across_jobs(self):
        runtime = make_runtime(ScriptedPlanner([answer("a1"), answer("a2")]), settings=make_settings(memory_capacity=3))
        session = await runtime.sessions.resolve("u1")

        await runtime.job_runner.run("u1", session)
        await runtime.job_runner.run("u2", session)

        assert [m.content for m in session.memory.all()] == ["a1", "u2", "a2"]

    @pytest.mark.asyncio
    async def test_runner_step_limit_overrides_loop(self):
        planner = ScriptedPlanner(lambda i: ask_tools(tool_call("echo", f"call_{i}", text="x")))
        runtime = make_runtime(planner)
        session = await runtime.sessions.resolve("u1")

        reply = await JobRunner(step_limit=2).run("go", session)

        assert planner.calls == 2
        assert reply == "Stopped after 2 steps without a final answer."
