from typing import List
from fastapi import APIRouter, Request

from lola.application.websocket.schema.events import ChatRequest, ChatResponse


router = APIRouter(prefix="/api/v1/agent", tags=["agent"])


# REST endpoint for simple interactions: one task or command, full answer back
@router.post("/chat", response_model=ChatResponse)
async def chat_endpoint(body: ChatRequest, request: Request) -> ChatResponse:
    replies: List[str] = []

    async def reply(text: str):
        replies.append(text)

    await request.app.state.conversations.handle_message(body.session_id, body.message, reply)
    return ChatResponse(session_id=body.session_id, response="\n\n".join(replies))
