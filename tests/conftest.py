import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Add backend to sys.path so promptform imports without an editable install
BACKEND_PATH = Path(__file__).resolve().parent.parent / "backend"
if BACKEND_PATH.as_posix() not in sys.path:
	sys.path.insert(0, BACKEND_PATH.as_posix())

from promptform.errors import GenerationError  # noqa: E402
from promptform.script import Document  # noqa: E402


LIKERT = ["Strongly Disagree", "Disagree", "Neutral", "Agree", "Strongly Agree"]


@pytest.fixture
def interview_doc() -> Document:
	"""Interview script with an empty follow-ups group."""
	return Document.model_validate({
		"opening": [{"id": "o1", "text": "Tell me about yourself."}],
		"core": [
			{"topic": "Pain Points", "questions": [{"id": "c1", "text": "What frustrates you?", "type": "FreeText"}]},
		],
		"followUps": [],
		"closing": [{"id": "z1", "text": "Any final thoughts?"}],
		"isQuestionnaire": False,
	})


@pytest.fixture
def questionnaire_doc() -> Document:
	return Document.model_validate({
		"opening": [
			{"id": "o1", "text": "How often do you shop online?", "type": "SingleChoice", "options": ["Daily", "Weekly", "Rarely"]},
		],
		"core": [
			{
				"topic": "Usability",
				"questions": [
					{"id": "q1", "text": "Rate ease of use", "type": "LikertScale", "options": LIKERT},
					{"id": "q2", "text": "Describe your experience", "type": "FreeText"},
				],
			},
			{
				"topic": "Features",
				"questions": [
					{"id": "q3", "text": "Which features do you use?", "type": "MultipleChoice", "options": ["A", "B", "C"]},
					{"id": "q4", "text": "Untyped leftover"},
					{"id": "q5", "text": "What is missing?", "type": "FreeText"},
				],
			},
		],
		"followUps": [],
		"closing": [{"id": "z1", "text": "Anything else?", "type": "FreeText"}],
		"isQuestionnaire": True,
	})


def _script_json(doc_dict: Optional[Dict[str, Any]] = None) -> str:
	"""JSON text the model would return for a minimal script."""
	payload = doc_dict or {
		"opening": [{"id": "o1", "text": "Hi there?"}],
		"core": [{"topic": "Habits", "questions": [{"id": "c1", "text": "What do you do daily?"}]}],
		"followUps": [{"id": "f1", "text": "Why?"}],
		"closing": [{"id": "z1", "text": "Thanks?"}],
	}
	return json.dumps(payload)


class FakeGeminiClient:
	"""Records calls and replays canned answers (or raises)."""

	def __init__(self, replies: Optional[List[Any]] = None) -> None:
		self.replies = list(replies or [])
		self.json_calls: List[Dict[str, Any]] = []
		self.chat_calls: List[Dict[str, Any]] = []
		self.closed = False

	def _next(self) -> str:
		reply = self.replies.pop(0)
		if isinstance(reply, Exception):
			raise reply
		return reply

	async def generate_json(self, parts, *, schema, temperature=None) -> str:
		self.json_calls.append({"parts": parts, "schema": schema, "temperature": temperature})
		return self._next()

	async def chat(self, history, message, *, system_instruction=None) -> str:
		self.chat_calls.append({"history": list(history), "message": message, "system_instruction": system_instruction})
		return self._next()

	async def aclose(self) -> None:
		self.closed = True


@pytest.fixture
def fake_client_factory():
	def _create(*replies):
		return FakeGeminiClient(list(replies))
	return _create


@pytest.fixture
def unavailable_error():
	return GenerationError("Gemini returned HTTP 503")


@pytest.fixture
def script_json():
	"""Factory for model JSON replies."""
	return _script_json


@pytest.fixture
def sample_png() -> bytes:
	"""Small PNG image as raw bytes."""
	from io import BytesIO
	from PIL import Image

	buf = BytesIO()
	Image.new("RGB", (32, 16), color="white").save(buf, format="PNG")
	return buf.getvalue()
