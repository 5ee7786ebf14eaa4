from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from typing import Callable, List, Literal, Optional

from pydantic import BaseModel, Field

from ..errors import ConfigurationError, PromptFormError
from ..gemini_client import GeminiClient
from ..settings import settings

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
	"You are a friendly and expert assistant for a user research application. "
	"Your goal is to help users with their research-related questions. "
	"Keep your answers concise and professional."
)
GREETING = "Hello! How can I help you with your user research today?"
UNAVAILABLE_REPLY = "Sorry, I am unable to connect right now. Please check your API key."
ERROR_REPLY = "Sorry, something went wrong. Please try again."


class ChatMessage(BaseModel):
	role: Literal["user", "model"]
	text: str


class ChatSession(BaseModel):
	session_id: str
	messages: List[ChatMessage] = Field(default_factory=list)
	# Turns actually exchanged with the model; the greeting and error replies are display-only
	history: List[ChatMessage] = Field(default_factory=list, exclude=True)


class ChatAssistant:
	"""In-memory research-assistant chat sessions (lost on restart)."""

	def __init__(
		self,
		client_factory: Callable[[], GeminiClient] = GeminiClient,
		max_sessions: Optional[int] = None,
	) -> None:
		self._client_factory = client_factory
		self._max_sessions = max_sessions or settings.chat_max_sessions
		# Ordered oldest to most recently used
		self._sessions: OrderedDict[str, ChatSession] = OrderedDict()

	def start(self) -> ChatSession:
		session = ChatSession(session_id=uuid.uuid4().hex, messages=[ChatMessage(role="model", text=GREETING)])
		self._sessions[session.session_id] = session
		while len(self._sessions) > self._max_sessions:
			dropped, _ = self._sessions.popitem(last=False)
			logger.info("Dropped idle chat session %s", dropped)
		return session

	def get(self, session_id: str) -> ChatSession:
		session = self._sessions[session_id]
		self._sessions.move_to_end(session_id)
		return session

	async def send(self, session_id: str, text: str) -> ChatSession:
		"""
		Append the user's message and the model's reply.

		Model failures become an apologetic reply rather than an exception.

		Raises:
			KeyError: unknown session
			ValueError: blank message
		"""
		session = self.get(session_id)
		text = (text or "").strip()
		if not text:
			raise ValueError("message must not be empty")
		user_message = ChatMessage(role="user", text=text)
		session.messages.append(user_message)

		reply: Optional[str] = None
		client: Optional[GeminiClient] = None
		try:
			client = self._client_factory()
			reply = await client.chat(
				[m.model_dump() for m in session.history],
				text,
				system_instruction=SYSTEM_INSTRUCTION,
			)
		except ConfigurationError as e:
			logger.error("Chat unavailable: %s", e)
			session.messages.append(ChatMessage(role="model", text=UNAVAILABLE_REPLY))
		except PromptFormError as e:
			logger.error("Chat call failed: %s", e)
			session.messages.append(ChatMessage(role="model", text=ERROR_REPLY))
		finally:
			if client is not None:
				await client.aclose()

		if reply is not None:
			model_message = ChatMessage(role="model", text=reply)
			session.messages.append(model_message)
			session.history.extend([user_message, model_message])
		return session
