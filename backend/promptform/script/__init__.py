from .models import (
	CLOSING_LABEL,
	CORE_LABEL_PREFIX,
	FOLLOW_UPS_LABEL,
	OPENING_LABEL,
	Document,
	Question,
	QuestionType,
	ScriptGroup,
	Section,
	iter_groups,
)
from .editing import find_question, update_question_text

__all__ = [
	"CLOSING_LABEL",
	"CORE_LABEL_PREFIX",
	"FOLLOW_UPS_LABEL",
	"OPENING_LABEL",
	"Document",
	"Question",
	"QuestionType",
	"ScriptGroup",
	"Section",
	"find_question",
	"iter_groups",
	"update_question_text",
]
