"""
Unit tests for the clipboard outline renderer.
"""

from promptform.export import render_plaintext
from promptform.script import Document


class TestRenderPlaintext:

	def test_interview_scenario(self, interview_doc):
		lines = render_plaintext(interview_doc).split("\n")

		for expected in (
			"## Opening / Warm-up Questions",
			"- Tell me about yourself.",
			"## Core Questions: Pain Points",
			"- What frustrates you?",
			"## Closing / Wrap-up",
			"- Any final thoughts?",
		):
			assert expected in lines
		assert not any(line.startswith("## Follow-ups") for line in lines)

	def test_exact_layout(self, interview_doc):
		assert render_plaintext(interview_doc) == (
			"## Opening / Warm-up Questions\n"
			"- Tell me about yourself.\n"
			"\n"
			"## Core Questions: Pain Points\n"
			"- What frustrates you?\n"
			"\n"
			"## Closing / Wrap-up\n"
			"- Any final thoughts?\n"
		)

	def test_options_are_indented_under_question(self, questionnaire_doc):
		lines = render_plaintext(questionnaire_doc).split("\n")

		idx = lines.index("- Which features do you use?")
		assert lines[idx + 1 : idx + 4] == ["  - A", "  - B", "  - C"]

	def test_free_text_has_no_option_lines(self, questionnaire_doc):
		lines = render_plaintext(questionnaire_doc).split("\n")

		idx = lines.index("- Describe your experience")
		assert not lines[idx + 1].startswith("  - ")

	def test_untyped_question_still_listed(self, questionnaire_doc):
		assert "- Untyped leftover" in render_plaintext(questionnaire_doc)

	def test_preserves_order(self, questionnaire_doc):
		text = render_plaintext(questionnaire_doc)
		positions = [text.index(f"- {q.text}\n") for q in questionnaire_doc.iter_questions()]

		assert positions == sorted(positions)

	def test_empty_core_section_is_skipped(self):
		doc = Document.model_validate({"core": [{"topic": "Empty", "questions": []}]})

		assert render_plaintext(doc) == ""

	def test_deterministic(self, questionnaire_doc):
		assert render_plaintext(questionnaire_doc) == render_plaintext(questionnaire_doc)
