from typing import Optional
import structlog

from lola.config import Settings
from lola.domain.orchestration.core.job_runner import JobRunner
from lola.domain.orchestration.core.step_loop import StepLoop
from lola.domain.prompts.system_prompt import create_system_prompt
from lola.domain.session.session_registry import SessionRegistry
from lola.domain.tool.browser_tools import create_browser_tool_registry
from lola.domain.tool.tool_executor import ToolExecutor
from lola.domain.tool.tool_registry import ToolRegistry
from lola.infrastructure.browser.browser_controller import BrowserController
from lola.infrastructure.llm.planner import Planner, create_planner

logger = structlog.get_logger(__name__)


class AgentRuntime:
    """Process-wide collaborators shared by every surface"""

    def __init__(
        self,
        settings: Settings,
        browser: BrowserController,
        tool_registry: ToolRegistry,
        tool_executor: ToolExecutor,
        planner: Planner,
        sessions: SessionRegistry,
        job_runner: JobRunner
    ):
        self.settings = settings
        self.browser = browser
        self.tool_registry = tool_registry
        self.tool_executor = tool_executor
        self.planner = planner
        self.sessions = sessions
        self.job_runner = job_runner
        self.accepting_jobs = True

    async def aclose(self):
        """Stop accepting jobs, drop sessions and close the shared browser"""

        self.accepting_jobs = False
        await self.sessions.remove_all()
        await self.browser.close()
        logger.info("Runtime closed")


def build_runtime(settings: Settings, browser: Optional[BrowserController] = None) -> AgentRuntime:
    browser = browser or BrowserController(headless=settings.headless)
    tool_registry = create_browser_tool_registry()
    tool_executor = ToolExecutor(tool_registry, browser, default_timeout=settings.tool_timeout_seconds)
    planner = create_planner(settings, tool_registry)
    system_prompt = create_system_prompt()

    def step_loop_factory() -> StepLoop:
        return StepLoop(planner, tool_executor, system_prompt, step_limit=settings.step_limit)

    sessions = SessionRegistry(step_loop_factory, memory_capacity=settings.memory_capacity)

    logger.info(
        "Runtime ready",
        tools=len(tool_registry),
        step_limit=settings.step_limit,
        memory_capacity=settings.memory_capacity,
        headless=settings.headless
    )

    return AgentRuntime(
        settings=settings,
        browser=browser,
        tool_registry=tool_registry,
        tool_executor=tool_executor,
        planner=planner,
        sessions=sessions,
        job_runner=JobRunner(step_limit=settings.step_limit)
    )
