"""
Survey-tool TXT import format.

Produces the block-tagged plain text accepted by Qualtrics' "Import Survey"
TXT option::

    [[Block:Opening / Warm-up Questions]]

    MC1. How often do you use the app?

    Daily
    Weekly

    TE1. What would you change?

Choice and scale questions share the ``MC`` counter, free-text questions use
``TE``; both run across the whole document. Untyped (interview) questions
cannot be expressed in this format and are dropped.
"""

from __future__ import annotations

import logging
from typing import List

from ..script.models import Document, Question, QuestionType, iter_groups

logger = logging.getLogger(__name__)

MULTIPLE_ANSWER_MARKER = "[[MultipleAnswer]]"
SURVEY_FILENAME = "survey.txt"


class _Counters:
	def __init__(self) -> None:
		self.mc = 0
		self.te = 0


def _emit_question(question: Question, counters: _Counters, lines: List[str]) -> None:
	qtype = question.type
	if qtype is QuestionType.UNTYPED:
		return
	if qtype.is_choice:
		counters.mc += 1
		lines.append(f"MC{counters.mc}. {question.text}")
		if qtype is QuestionType.MULTIPLE_CHOICE:
			lines.append(MULTIPLE_ANSWER_MARKER)
		lines.append("")
		lines.extend(question.options)
	elif qtype is QuestionType.FREE_TEXT:
		counters.te += 1
		lines.append(f"TE{counters.te}. {question.text}")
	else:
		raise AssertionError(f"unhandled question type {qtype!r}")
	lines.append("")


def render_survey_txt(doc: Document) -> str:
	counters = _Counters()
	lines: List[str] = []
	for group in iter_groups(doc):
		if not group.questions:
			continue
		lines.append(f"[[Block:{group.label}]]")
		lines.append("")
		for question in group.questions:
			_emit_question(question, counters, lines)
	logger.debug("Rendered survey TXT: %d choice, %d text entry", counters.mc, counters.te)
	return "\n".join(lines)
