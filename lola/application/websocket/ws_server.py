from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Callable, Optional
from datetime import datetime, timezone
from pydantic import ValidationError
import asyncio
import re
import sys
import structlog

from .connection_manager import ConnectionManager
from .schema.events import (
    EventType, MarkdownEvent, ProgressData, ProgressEvent, UserMessage
)
from lola.application.api.route.agent import router as agent_router
from lola.application.conversation import ConversationService
from lola.application.runtime import AgentRuntime, build_runtime
from lola.config import ConfigurationError, Settings
from lola.infrastructure.observability.logging import metrics, setup_logging

logger = structlog.get_logger(__name__)

SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.:\-]{1,128}$")
WORKFLOW_FINISH = "_workflow_finish"


def _default_runtime() -> AgentRuntime:
    return build_runtime(Settings.from_env())


def create_app(runtime_factory: Optional[Callable[[], AgentRuntime]] = None) -> FastAPI:
    """FastAPI app exposing the agent over WebSocket and REST"""

    factory = runtime_factory or _default_runtime

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        runtime = factory()
        app.state.runtime = runtime
        app.state.conversations = ConversationService(runtime)
        app.state.connections = ConnectionManager()
        app.state.pending_jobs = set()
        logger.info("WebSocket server started")

        try:
            yield
        finally:
            await app.state.connections.disconnect_all()
            if app.state.pending_jobs:
                await asyncio.gather(*app.state.pending_jobs, return_exceptions=True)
            await runtime.aclose()
            logger.info("WebSocket server shutdown")

    app = FastAPI(title="LoLa Agent Server", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(agent_router)

    @app.websocket("/ws/agent/{session_id}")
    async def agent_websocket(websocket: WebSocket, session_id: str):
        """Main WebSocket endpoint for agent interaction"""

        if not SESSION_ID_PATTERN.match(session_id):
            await websocket.close(code=1008, reason="Invalid session ID format")
            return

        connections: ConnectionManager = app.state.connections
        await connections.connect(websocket, session_id)

        try:
            while True:
                data = await websocket.receive_json()

                if not isinstance(data, dict) or data.get("type") != EventType.USER_MESSAGE.value:
                    await connections.send_error(session_id, "Unsupported event type", "unsupported_event")
                    continue

                try:
                    message = UserMessage(**data)
                except ValidationError as e:
                    await connections.send_error(session_id, f"Invalid message: {e.errors()}", "invalid_message")
                    continue

                # Run off the receive loop so a queued notice can be sent while a job runs
                task = asyncio.create_task(process_user_message(app, session_id, message))
                app.state.pending_jobs.add(task)
                task.add_done_callback(app.state.pending_jobs.discard)

        except WebSocketDisconnect:
            logger.info("Client disconnected", session_id=session_id)
        except Exception as e:
            logger.error("WebSocket error", error=str(e), session_id=session_id)
        finally:
            await connections.disconnect(session_id, websocket)

    @app.get("/health")
    async def health_check():
        runtime: AgentRuntime = app.state.runtime
        return {
            "status": "healthy" if runtime.accepting_jobs else "shutting_down",
            "active_connections": len(app.state.connections.get_active_sessions()),
            "sessions": len(runtime.sessions),
            "browser_started": runtime.browser.is_started,
            "browser_in_use": runtime.browser.in_use,
            "metrics": metrics.get_metrics_summary(),
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    return app


async def process_user_message(app: FastAPI, session_id: str, message: UserMessage):
    """Process a user message through the conversation service"""

    connections: ConnectionManager = app.state.connections

    async def reply(text: str):
        await connections.send_event(session_id, MarkdownEvent(payload=text, session_id=session_id))

    async def show_progress():
        await connections.send_event(
            session_id,
            ProgressEvent(payload=ProgressData(status="Processing your request..."), session_id=session_id)
        )

    try:
        await app.state.conversations.handle_message(session_id, message.content, reply, on_job_start=show_progress)
    except Exception as e:
        logger.error("Error in agent processing", error=str(e), session_id=session_id)
        await connections.send_error(session_id, str(e))
        return

    await connections.send_event(
        session_id,
        ProgressEvent(payload=ProgressData(status=WORKFLOW_FINISH), session_id=session_id)
    )


app = create_app()


def run():
    """Console entry point for the WebSocket/REST server"""
    import uvicorn

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)

    setup_logging(settings.log_level, settings.log_format)
    uvicorn.run(app, host=settings.host, port=settings.port)
