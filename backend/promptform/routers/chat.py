from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..generation import ChatAssistant, ChatSession
from .deps import get_chat_assistant

router = APIRouter(prefix="/chat", tags=["chat"])


class MessageRequest(BaseModel):
	session_id: str
	text: str


@router.post("/session", response_model=ChatSession)
def start_session(assistant: ChatAssistant = Depends(get_chat_assistant)):
	return assistant.start()


@router.post("/message", response_model=ChatSession)
async def send_message(req: MessageRequest, assistant: ChatAssistant = Depends(get_chat_assistant)):
	if not req.text.strip():
		raise HTTPException(status_code=400, detail="text is required")
	try:
		return await assistant.send(req.session_id, req.text)
	except KeyError:
		raise HTTPException(status_code=404, detail="Session not found")
