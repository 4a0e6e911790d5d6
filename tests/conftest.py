"""Shared fakes for the agent tests."""

from contextlib import asynccontextmanager
from typing import Any, Callable, List, Optional, Sequence, Union
import asyncio

import pytest
from langchain_core.messages import AIMessage, BaseMessage

from lola.application.runtime import AgentRuntime
from lola.config import Settings
from lola.domain.orchestration.core.job_runner import JobRunner
from lola.domain.orchestration.core.step_loop import StepLoop
from lola.domain.session.session_registry import SessionRegistry
from lola.domain.tool.tool_executor import ToolExecutor
from lola.domain.tool.tool_registry import ToolActionError, ToolRegistry, ToolSpec


def tool_call(name: str, call_id: str = "call_1", **args) -> dict:
    return {"id": call_id, "name": name, "args": args}


def ask_tools(*calls: dict, content: str = "") -> AIMessage:
    return AIMessage(content=content, tool_calls=list(calls))


def answer(text: str) -> AIMessage:
    return AIMessage(content=text)


class ScriptedPlanner:
    """Planner double that replays responses and records every prompt it saw.

    ``script`` is either a list of responses (the last one repeats once the
    list runs out) or a callable taking the call number.
    """

    def __init__(self, script: Union[Sequence[Union[BaseMessage, Exception]], Callable[[int], BaseMessage]]):
        self.script = script
        self.prompts: List[List[BaseMessage]] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def ainvoke(self, input: Sequence[BaseMessage], **kwargs: Any) -> BaseMessage:
        self.prompts.append(list(input))
        index = len(self.prompts) - 1

        if callable(self.script):
            response = self.script(index)
        else:
            response = self.script[min(index, len(self.script) - 1)]

        if isinstance(response, Exception):
            raise response
        return response


class FakePage:
    def __init__(self):
        self.url = "about:blank"
        self.actions: List[str] = []


class FakeBrowser:
    """Serializes access to a fake page the same way the real controller does"""

    def __init__(self):
        self.page = FakePage()
        self._lock = asyncio.Lock()
        self.active = 0
        self.max_active = 0
        self.closed = False
        self.is_started = False

    @property
    def in_use(self) -> bool:
        return self._lock.locked()

    @asynccontextmanager
    async def acquire(self):
        async with self._lock:
            self.is_started = True
            self.active += 1
            self.max_active = max(self.max_active, self.active)
            try:
                yield self.page
            finally:
                self.active -= 1

    async def close(self):
        self.closed = True


async def echo(page, text: str) -> str:
    if page is not None:
        page.actions.append(text)
    return f"echo:{text}"


async def slow(page, seconds: float = 1.0) -> str:
    await asyncio.sleep(seconds)
    return "finished"


async def explode(page) -> str:
    raise RuntimeError("element detached")


async def refuse(page) -> str:
    raise ToolActionError("Element not found: #buy. Try browser_find_by_text.")


async def clock(page) -> str:
    return "12:00"


def make_tools() -> List[ToolSpec]:
    return [
        ToolSpec(
            name="echo",
            description="Echo text back",
            parameters={
                "type": "object",
                "properties": {"text": {"type": "string"}},
                "required": ["text"],
                "additionalProperties": False,
            },
            handler=echo,
        ),
        ToolSpec(
            name="slow",
            description="Sleep for a while",
            parameters={"type": "object", "properties": {"seconds": {"type": "number"}}},
            handler=slow,
            timeout=0.05,
        ),
        ToolSpec(name="explode", description="Always fails", handler=explode),
        ToolSpec(name="refuse", description="Rejects the action", handler=refuse),
        ToolSpec(name="clock", description="Current time", handler=clock, category="utility", requires_browser=False),
    ]


def make_settings(**overrides) -> Settings:
    values = {"openai_api_key": "sk-test", "step_limit": 5, "memory_capacity": 50}
    values.update(overrides)
    return Settings(**values)


def make_runtime(planner, settings: Optional[Settings] = None, browser: Optional[FakeBrowser] = None) -> AgentRuntime:
    settings = settings or make_settings()
    browser = browser or FakeBrowser()
    registry = ToolRegistry(make_tools())
    executor = ToolExecutor(registry, browser, default_timeout=settings.tool_timeout_seconds)

    def step_loop_factory() -> StepLoop:
        return StepLoop(planner, executor, step_limit=settings.step_limit)

    return AgentRuntime(
        settings=settings,
        browser=browser,
        tool_registry=registry,
        tool_executor=executor,
        planner=planner,
        sessions=SessionRegistry(step_loop_factory, memory_capacity=settings.memory_capacity),
        job_runner=JobRunner(step_limit=settings.step_limit),
    )


@pytest.fixture
def browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture
def registry() -> ToolRegistry:
    return ToolRegistry(make_tools())


@pytest.fixture
def executor(registry, browser) -> ToolExecutor:
    return ToolExecutor(registry, browser, default_timeout=1.0)
