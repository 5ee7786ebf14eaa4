"""
Script document model.

A generated interview or questionnaire is held as an immutable tree:
``Document`` -> groups (opening, core sections, follow-ups, closing) ->
``Question``. Models are frozen pydantic models so that renderers can never
mutate a document and edits produce new documents (see ``editing``).

The JSON shape matches what the generation endpoint returns and what the
browser sends back (camelCase ``followUps`` / ``isQuestionnaire``).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator


OPENING_LABEL = "Opening / Warm-up Questions"
CORE_LABEL_PREFIX = "Core Questions: "
FOLLOW_UPS_LABEL = "Follow-ups / Probes"
CLOSING_LABEL = "Closing / Wrap-up"


class QuestionType(str, Enum):
	FREE_TEXT = "FreeText"
	SINGLE_CHOICE = "SingleChoice"
	MULTIPLE_CHOICE = "MultipleChoice"
	LIKERT_SCALE = "LikertScale"
	# Interview questions carry no type; they serialize back to ``null``.
	UNTYPED = "Untyped"

	@property
	def is_choice(self) -> bool:
		return self in (QuestionType.SINGLE_CHOICE, QuestionType.MULTIPLE_CHOICE, QuestionType.LIKERT_SCALE)


class Question(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str
	text: str
	type: QuestionType = QuestionType.UNTYPED
	options: Tuple[str, ...] = ()

	@field_validator("id", mode="before")
	@classmethod
	def _coerce_id(cls, v: Any) -> Any:
		# Models occasionally emit numeric ids
		if isinstance(v, int) and not isinstance(v, bool):
			return str(v)
		return v

	@field_validator("type", mode="before")
	@classmethod
	def _none_is_untyped(cls, v: Any) -> Any:
		if v is None or v == "":
			return QuestionType.UNTYPED
		return v

	@field_validator("options", mode="before")
	@classmethod
	def _none_is_empty(cls, v: Any) -> Any:
		return () if v is None else v

	@field_serializer("type")
	def _serialize_type(self, v: QuestionType) -> Optional[str]:
		return None if v is QuestionType.UNTYPED else v.value


class Section(BaseModel):
	model_config = ConfigDict(frozen=True)

	topic: str
	questions: Tuple[Question, ...] = ()

	@field_validator("questions", mode="before")
	@classmethod
	def _none_is_empty(cls, v: Any) -> Any:
		return () if v is None else v


class Document(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	opening: Tuple[Question, ...] = ()
	core: Tuple[Section, ...] = ()
	follow_ups: Tuple[Question, ...] = Field(default=(), alias="followUps")
	closing: Tuple[Question, ...] = ()
	is_questionnaire: bool = Field(default=False, alias="isQuestionnaire")

	@field_validator("opening", "core", "follow_ups", "closing", mode="before")
	@classmethod
	def _none_is_empty(cls, v: Any) -> Any:
		return () if v is None else v

	@field_validator("is_questionnaire", mode="before")
	@classmethod
	def _none_is_false(cls, v: Any) -> Any:
		return False if v is None else v

	@model_validator(mode="after")
	def _unique_ids(self) -> "Document":
		seen: set[str] = set()
		for question in self.iter_questions():
			if question.id in seen:
				raise ValueError(f"duplicate question id: {question.id!r}")
			seen.add(question.id)
		return self

	def iter_questions(self) -> Iterator[Question]:
		for group in iter_groups(self):
			yield from group.questions

	@property
	def question_count(self) -> int:
		return sum(1 for _ in self.iter_questions())


class ScriptGroup(NamedTuple):
	"""A heading plus its questions, as every export walks them."""

	label: str
	questions: Tuple[Question, ...]


def iter_groups(doc: Document) -> Iterator[ScriptGroup]:
	"""Yield groups in document order: opening, each core section, follow-ups, closing.

	Empty groups are yielded too; callers decide whether to skip them.
	"""
	yield ScriptGroup(OPENING_LABEL, doc.opening)
	for section in doc.core:
		yield ScriptGroup(f"{CORE_LABEL_PREFIX}{section.topic}", section.questions)
	yield ScriptGroup(FOLLOW_UPS_LABEL, doc.follow_ups)
	yield ScriptGroup(CLOSING_LABEL, doc.closing)
