from typing import Any, Protocol, Sequence
import structlog

from langchain_core.messages import BaseMessage
from langchain_openai import ChatOpenAI

from lola.config import Settings
from lola.domain.tool.tool_registry import ToolRegistry

logger = structlog.get_logger(__name__)


class Planner(Protocol):
    """Anything that turns a message sequence into the next assistant turn"""

    async def ainvoke(self, input: Sequence[BaseMessage], **kwargs: Any) -> BaseMessage: ...


def create_planner(settings: Settings, registry: ToolRegistry) -> Planner:
    """Chat model with the tool catalog bound for function calling"""

    llm = ChatOpenAI(
        model=settings.openai_model,
        temperature=settings.temperature,
        api_key=settings.openai_api_key,
    )

    logger.info("Planner configured", model=settings.openai_model, tools=len(registry))
    return llm.bind_tools(registry.as_openai_tools())
