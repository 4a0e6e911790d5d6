from typing import Optional
import time
import uuid
import structlog

from langchain_core.messages import HumanMessage

from lola.domain.models.agent_state import message_text
from lola.domain.session.session_registry import Session
from lola.infrastructure.observability.logging import agent_logger, metrics

logger = structlog.get_logger(__name__)


class JobFailedError(Exception):
    """A job aborted in the planner or loop machinery; memory was not written"""


class JobRunner:
    """Runs one user request end-to-end against a session"""

    def __init__(self, step_limit: Optional[int] = None):
        self.step_limit = step_limit

    async def run(self, user_text: str, session: Session) -> str:
        """Run a job and return the final answer text.

        Jobs on the same session queue on its lock. Only the turns produced
        by this job are appended to memory, in a single append, and only
        when the job completes.
        """

        async with session.job_lock:
            job_id = uuid.uuid4().hex[:12]
            session_id = str(session.identity)

            with structlog.contextvars.bound_contextvars(session_id=session_id, job_id=job_id):
                previous = session.memory.all()
                previous_count = len(previous)

                agent_logger.log_job_event(
                    "started",
                    session_id,
                    {"task": user_text[:200], "history_turns": previous_count}
                )

                start = time.perf_counter()
                try:
                    result = await session.step_loop.run(
                        [*previous, HumanMessage(content=user_text)],
                        step_limit=self.step_limit,
                        session_id=session_id
                    )
                except Exception as e:
                    duration_ms = (time.perf_counter() - start) * 1000
                    metrics.increment_counter("jobs.failed")
                    logger.error("Job failed", error=str(e), duration_ms=round(duration_ms, 1), exc_info=True)
                    raise JobFailedError(str(e) or e.__class__.__name__) from e

                duration_ms = (time.perf_counter() - start) * 1000
                metrics.record_latency("job", duration_ms)

                new_turns = result[previous_count:]
                if new_turns:
                    session.memory.append(new_turns)

                session.jobs_completed += 1
                session.touch()

                agent_logger.log_job_event(
                    "completed",
                    session_id,
                    {"new_turns": len(new_turns), "stored_turns": session.memory.count()},
                    duration_ms=round(duration_ms, 1)
                )

                return message_text(result[-1]) if result else ""
