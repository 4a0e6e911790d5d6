from typing import Dict, Any, List, Optional, Union
from pydantic import BaseModel, Field
from datetime import datetime, timezone
from enum import Enum
from langchain_core.messages import BaseMessage, AIMessage


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AgentStatus(str, Enum):
    """Step-loop node states"""
    THINKING = "planner"
    EXECUTING = "tool_executor"
    STEP_LIMIT = "limit_reached"
    DONE = "done"


class ToolInvocation(BaseModel):
    """One tool call requested by the planner during a single cycle"""
    id: str = Field(description="Tool call identifier assigned by the planner")
    name: str = Field(description="Requested tool name")
    arguments: Dict[str, Any] = Field(default_factory=dict)
    malformed_reason: Optional[str] = Field(None, description="Set when the planner emitted unparseable arguments")

    @classmethod
    def from_tool_call(cls, call: Dict[str, Any]) -> "ToolInvocation":
        return cls(id=call.get("id") or "", name=call.get("name") or "", arguments=call.get("args") or {})

    @classmethod
    def from_invalid_tool_call(cls, call: Dict[str, Any]) -> "ToolInvocation":
        return cls(
            id=call.get("id") or "",
            name=call.get("name") or "",
            malformed_reason=call.get("error") or f"Could not parse arguments: {call.get('args')!r}"
        )


class ToolResult(BaseModel):
    """Result of one tool invocation, never raised into the loop"""
    tool_name: str
    success: bool
    output: str = ""
    error: Optional[str] = None
    duration_ms: float = 0.0
    executed_at: datetime = Field(default_factory=_utcnow)

    def to_observation(self) -> str:
        """Text the planner sees for this invocation"""
        if self.success:
            return self.output
        return f"ERROR: {self.error}"


def message_text(message: Optional[BaseMessage]) -> str:
    """Flatten a turn's content to plain text"""
    if message is None:
        return ""

    content: Union[str, List[Any]] = message.content
    if isinstance(content, str):
        return content

    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def has_tool_requests(message: BaseMessage) -> bool:
    """Whether an assistant turn asks for tools (valid or malformed)"""
    if not isinstance(message, AIMessage):
        return False
    return bool(message.tool_calls or message.invalid_tool_calls)
