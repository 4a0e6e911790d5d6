from typing import Dict, Any, Optional, Literal
from pydantic import BaseModel, Field
from datetime import datetime, timezone
from enum import Enum


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EventType(str, Enum):
    """WebSocket event types"""
    MARKDOWN = "markdown"
    PROGRESS = "progress"
    ERROR = "error"
    CONNECTION = "connection"
    USER_MESSAGE = "user_message"


class BaseEvent(BaseModel):
    """Base event model for all WebSocket messages"""
    type: EventType
    timestamp: datetime = Field(default_factory=_utcnow)
    session_id: Optional[str] = None


class MarkdownEvent(BaseEvent):
    """Markdown content event for agent replies"""
    type: Literal[EventType.MARKDOWN] = EventType.MARKDOWN
    payload: str


class ProgressData(BaseModel):
    """Progress indicator data"""
    status: str


class ProgressEvent(BaseEvent):
    type: Literal[EventType.PROGRESS] = EventType.PROGRESS
    payload: ProgressData


class ErrorEvent(BaseEvent):
    """Error event"""
    type: Literal[EventType.ERROR] = EventType.ERROR
    payload: Dict[str, Any]
    error_code: Optional[str] = None


class ConnectionEvent(BaseEvent):
    """Connection status event"""
    type: Literal[EventType.CONNECTION] = EventType.CONNECTION
    status: Literal["connected", "disconnected"]


class UserMessage(BaseEvent):
    """User message event"""
    type: Literal[EventType.USER_MESSAGE] = EventType.USER_MESSAGE
    content: str
    metadata: Optional[Dict[str, Any]] = None


class ChatRequest(BaseModel):
    """REST request for a single task or command"""
    session_id: str = Field(min_length=1, max_length=128)
    message: str


class ChatResponse(BaseModel):
    session_id: str
    response: str
