from typing import Callable, Dict, Hashable, List, Optional
from datetime import datetime, timezone
import asyncio
import structlog

from lola.domain.context.memory.conversation_memory import ConversationMemory
from lola.domain.orchestration.core.step_loop import StepLoop
from lola.infrastructure.observability.logging import agent_logger, metrics

logger = structlog.get_logger(__name__)

CLI_IDENTITY = "cli"


class Session:
    """One isolated conversation: its memory, its step loop and its job lock"""

    def __init__(self, identity: Hashable, memory: ConversationMemory, step_loop: StepLoop):
        self.identity = identity
        self.memory = memory
        self.step_loop = step_loop
        self.job_lock = asyncio.Lock()
        self.created_at = datetime.now(timezone.utc)
        self.last_activity = self.created_at
        self.jobs_completed = 0

    @property
    def busy(self) -> bool:
        """Whether a job currently holds this session"""
        return self.job_lock.locked()

    def touch(self):
        self.last_activity = datetime.now(timezone.utc)

    def get_summary(self) -> Dict[str, object]:
        return {
            "identity": str(self.identity),
            "turns": self.memory.count(),
            "capacity": self.memory.capacity,
            "busy": self.busy,
            "jobs_completed": self.jobs_completed,
            "created_at": self.created_at.isoformat(),
            "last_activity": self.last_activity.isoformat()
        }


class SessionRegistry:
    """Maps external identities to sessions, created lazily on first resolve.

    Sessions live until ``remove_all()`` at process shutdown; there is no
    expiry and nothing is persisted.
    """

    def __init__(self, step_loop_factory: Callable[[], StepLoop], memory_capacity: int = 50):
        self.step_loop_factory = step_loop_factory
        self.memory_capacity = memory_capacity
        self.sessions: Dict[Hashable, Session] = {}
        self._lock = asyncio.Lock()

    async def resolve(self, identity: Hashable) -> Session:
        """Return the session for ``identity``, creating it exactly once"""

        async with self._lock:
            session = self.sessions.get(identity)
            if session is None:
                session = Session(
                    identity=identity,
                    memory=ConversationMemory(self.memory_capacity),
                    step_loop=self.step_loop_factory()
                )
                self.sessions[identity] = session

                agent_logger.log_session_event(str(identity), "created", {"capacity": self.memory_capacity})
                metrics.set_gauge("sessions.active", len(self.sessions))

            session.touch()
            return session

    def get(self, identity: Hashable) -> Optional[Session]:
        return self.sessions.get(identity)

    def get_active_sessions(self) -> List[Hashable]:
        return list(self.sessions.keys())

    async def remove_all(self) -> int:
        """Drop every session; used at shutdown only"""

        async with self._lock:
            count = len(self.sessions)
            self.sessions.clear()

        metrics.set_gauge("sessions.active", 0)
        logger.info("Sessions removed", count=count)
        return count

    def __len__(self) -> int:
        return len(self.sessions)
