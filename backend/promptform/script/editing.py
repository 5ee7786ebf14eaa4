from __future__ import annotations

from typing import Optional, Tuple

from ..errors import QuestionNotFoundError
from .models import Document, Question

# Accepted group keys -> Document attribute
_GROUP_FIELDS = {
	"opening": "opening",
	"core": "core",
	"followUps": "follow_ups",
	"follow_ups": "follow_ups",
	"closing": "closing",
}


def _replace_text(questions: Tuple[Question, ...], question_id: str, new_text: str) -> Tuple[Question, ...]:
	for idx, question in enumerate(questions):
		if question.id == question_id:
			updated = question.model_copy(update={"text": new_text})
			return questions[:idx] + (updated,) + questions[idx + 1:]
	raise QuestionNotFoundError(f"question {question_id!r} not found")


def update_question_text(
	doc: Document,
	group: str,
	question_id: str,
	new_text: str,
	section_index: Optional[int] = None,
) -> Document:
	"""
	Return a new Document with one question's text replaced.

	Only the path from the root to the edited question is rebuilt; every other
	group, section and question object is shared with ``doc``.

	Raises:
		QuestionNotFoundError: unknown group, missing/out-of-range section index
			for ``core``, or no question with ``question_id`` in the target list.
	"""
	field = _GROUP_FIELDS.get(group)
	if field is None:
		raise QuestionNotFoundError(f"unknown group {group!r}")
	text = (new_text or "").strip()

	if field == "core":
		if section_index is None or not 0 <= section_index < len(doc.core):
			raise QuestionNotFoundError(f"core section index {section_index!r} out of range")
		section = doc.core[section_index]
		new_section = section.model_copy(
			update={"questions": _replace_text(section.questions, question_id, text)}
		)
		core = doc.core[:section_index] + (new_section,) + doc.core[section_index + 1:]
		return doc.model_copy(update={"core": core})

	questions = getattr(doc, field)
	return doc.model_copy(update={field: _replace_text(questions, question_id, text)})


def find_question(doc: Document, question_id: str) -> Question:
	for question in doc.iter_questions():
		if question.id == question_id:
			return question
	raise QuestionNotFoundError(f"question {question_id!r} not found")
