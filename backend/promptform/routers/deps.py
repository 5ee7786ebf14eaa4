from __future__ import annotations
from typing import AsyncIterator
from fastapi import HTTPException

from ..errors import (
	AttachmentError,
	ConfigurationError,
	GenerationError,
	PromptFormError,
	QuestionNotFoundError,
)
from ..gemini_client import GeminiClient
from ..generation import ChatAssistant, ScriptGenerator


def to_http_exception(err: PromptFormError) -> HTTPException:
	if isinstance(err, ConfigurationError):
		return HTTPException(status_code=503, detail=str(err))
	if isinstance(err, GenerationError):
		return HTTPException(status_code=502, detail=str(err))
	if isinstance(err, QuestionNotFoundError):
		return HTTPException(status_code=404, detail=str(err))
	if isinstance(err, AttachmentError):
		return HTTPException(status_code=400, detail=str(err))
	return HTTPException(status_code=500, detail=str(err))


async def get_generator() -> AsyncIterator[ScriptGenerator]:
	try:
		client = GeminiClient()
	except ConfigurationError as e:
		raise to_http_exception(e)
	try:
		yield ScriptGenerator(client)
	finally:
		await client.aclose()


_assistant = ChatAssistant()


def get_chat_assistant() -> ChatAssistant:
	return _assistant
