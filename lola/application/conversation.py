from typing import Awaitable, Callable, FrozenSet, Hashable, Optional
import structlog

from lola.application.commands import (
    CHAT_COMMANDS, EMPTY_TASK_MESSAGE, QUEUED_MESSAGE, handle_command, parse_command
)
from lola.application.runtime import AgentRuntime
from lola.domain.orchestration.core.job_runner import JobFailedError

logger = structlog.get_logger(__name__)

Reply = Callable[[str], Awaitable[None]]

SHUTTING_DOWN_MESSAGE = "The agent is shutting down and not accepting new tasks."
EMPTY_ANSWER_MESSAGE = "(The agent finished without a text answer.)"


class ConversationService:
    """Routes chat messages from any identity-keyed surface to commands or jobs"""

    def __init__(self, runtime: AgentRuntime, allowed_commands: FrozenSet[str] = CHAT_COMMANDS):
        self.runtime = runtime
        self.allowed_commands = allowed_commands

    async def handle_message(
        self,
        identity: Hashable,
        text: Optional[str],
        reply: Reply,
        on_job_start: Optional[Callable[[], Awaitable[None]]] = None
    ) -> None:
        if not text or not text.strip():
            await reply(EMPTY_TASK_MESSAGE)
            return

        session = await self.runtime.sessions.resolve(identity)

        command = parse_command(text, self.allowed_commands)
        if command:
            await reply(await handle_command(command, session))
            return

        if not self.runtime.accepting_jobs:
            await reply(SHUTTING_DOWN_MESSAGE)
            return

        if session.busy:
            await reply(QUEUED_MESSAGE)

        if on_job_start is not None:
            await on_job_start()

        try:
            answer = await self.runtime.job_runner.run(text.strip(), session)
        except JobFailedError as e:
            logger.error("Job error reported to user", identity=str(identity), error=str(e))
            await reply(f"❌ Error: {e}")
            return

        await reply(answer or EMPTY_ANSWER_MESSAGE)
