from typing import Awaitable, Callable, Optional
import asyncio
import sys
import threading
import structlog

from lola.application.commands import CLI_COMMANDS, handle_command, parse_command
from lola.application.runtime import AgentRuntime
from lola.domain.orchestration.core.job_runner import JobFailedError
from lola.domain.session.session_registry import CLI_IDENTITY

logger = structlog.get_logger(__name__)

BANNER = (
    "Daemon agent started. Type a task and press Enter. Ctrl+C to stop.\n"
    "Commands: /clear - clear conversation history, /memory - show memory stats\n\n"
    "(To use Telegram, set TELEGRAM_BOT_TOKEN in your .env file)\n"
)


class StdinLineReader:
    """Reads stdin on a daemon thread so Ctrl+C never waits on a blocked read"""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self._queue: Optional[asyncio.Queue] = None

    def _pump(self, loop: asyncio.AbstractEventLoop):
        try:
            for line in iter(self.stream.readline, ""):
                loop.call_soon_threadsafe(self._queue.put_nowait, line)
            loop.call_soon_threadsafe(self._queue.put_nowait, "")
        except RuntimeError:
            # Event loop already closed during shutdown
            return

    async def __call__(self) -> str:
        if self._queue is None:
            self._queue = asyncio.Queue()
            loop = asyncio.get_running_loop()
            threading.Thread(target=self._pump, args=(loop,), daemon=True, name="stdin-reader").start()
        return await self._queue.get()


class CliApp:
    """Line-oriented prompt bound to the single implicit CLI session"""

    def __init__(
        self,
        runtime: AgentRuntime,
        read_line: Optional[Callable[[], Awaitable[str]]] = None,
        write: Callable[[str], None] = print
    ):
        self.runtime = runtime
        self.read_line = read_line or StdinLineReader()
        self.write = write

    async def handle_line(self, line: str) -> Optional[str]:
        """Process one input line and return what to print (None for blank lines)"""

        task = line.strip()
        if not task:
            return None

        session = await self.runtime.sessions.resolve(CLI_IDENTITY)

        command = parse_command(task, CLI_COMMANDS)
        if command:
            return f"{await handle_command(command, session)}\n"

        try:
            answer = await self.runtime.job_runner.run(task, session)
        except JobFailedError as e:
            return f"Job error: {e}"

        return f"\n=== FINAL ===\n{answer}\n=============\n"

    async def run(self):
        """Read tasks until EOF"""

        self.write(BANNER)

        while self.runtime.accepting_jobs:
            line = await self.read_line()
            if line == "":
                break

            output = await self.handle_line(line)
            if output is not None:
                self.write(output)

        logger.info("CLI input closed")


async def run_cli(runtime: AgentRuntime):
    try:
        await CliApp(runtime).run()
    finally:
        await runtime.aclose()
