from typing import Dict, Set, Optional
from fastapi import WebSocket
import asyncio
from datetime import datetime, timezone
import structlog

from .schema.events import BaseEvent, ConnectionEvent, ErrorEvent

logger = structlog.get_logger(__name__)


class ConnectionManager:
    """Manages WebSocket connections keyed by session id"""

    def __init__(self):
        self.active_connections: Dict[str, WebSocket] = {}
        self.session_metadata: Dict[str, Dict] = {}
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket, session_id: str):
        """Accept a new WebSocket connection"""
        await websocket.accept()

        async with self._lock:
            previous = self.active_connections.get(session_id)
            self.active_connections[session_id] = websocket
            self.session_metadata[session_id] = {
                "connected_at": datetime.now(timezone.utc),
                "last_activity": datetime.now(timezone.utc)
            }

        # A reconnect replaces the older socket for the same session
        if previous is not None and previous is not websocket:
            try:
                await previous.close(code=1000, reason="Replaced by a newer connection")
            except Exception as e:
                logger.debug("Error closing replaced WebSocket", session_id=session_id, error=str(e))

        await self.send_event(session_id, ConnectionEvent(status="connected", session_id=session_id))

        logger.info("WebSocket connected", session_id=session_id)

    async def disconnect(self, session_id: str, websocket: Optional[WebSocket] = None):
        """Disconnect a WebSocket connection"""
        async with self._lock:
            current = self.active_connections.get(session_id)
            if current is None or (websocket is not None and current is not websocket):
                return
            ws = self.active_connections.pop(session_id)
            self.session_metadata.pop(session_id, None)

        try:
            await ws.close()
        except Exception as e:
            logger.debug("Error closing WebSocket", session_id=session_id, error=str(e))

        logger.info("WebSocket disconnected", session_id=session_id)

    async def send_event(self, session_id: str, event: BaseEvent) -> bool:
        """Send an event to a specific session"""
        websocket = self.active_connections.get(session_id)
        if websocket is None:
            logger.warning("Attempted to send to disconnected session", session_id=session_id)
            return False

        try:
            await websocket.send_json(event.model_dump(mode="json"))

            if session_id in self.session_metadata:
                self.session_metadata[session_id]["last_activity"] = datetime.now(timezone.utc)

            return True

        except Exception as e:
            logger.error("Failed to send event", session_id=session_id, error=str(e))
            await self.disconnect(session_id, websocket)
            return False

    async def send_error(self, session_id: str, error_message: str, error_code: Optional[str] = None):
        """Send an error event to a session"""
        error_event = ErrorEvent(
            payload={"message": error_message},
            error_code=error_code,
            session_id=session_id
        )
        await self.send_event(session_id, error_event)

    def get_active_sessions(self) -> Set[str]:
        return set(self.active_connections.keys())

    async def disconnect_all(self):
        for session_id in list(self.active_connections.keys()):
            await self.disconnect(session_id)
