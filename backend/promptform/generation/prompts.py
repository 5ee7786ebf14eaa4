"""
Prompt templates and response schemas for script generation.

Schemas use the Generative Language API's OpenAPI subset (upper-case type
names) and are passed as ``generationConfig.responseSchema``.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from ..research import ResearchParameters
from ..script.models import Document, QuestionType


QUESTION_TYPE_VALUES = [t.value for t in QuestionType if t is not QuestionType.UNTYPED]

_INTERVIEW_QUESTION = {
	"type": "OBJECT",
	"properties": {
		"id": {"type": "STRING", "description": "A unique ID for the question."},
		"text": {"type": "STRING", "description": "The question text."},
	},
	"required": ["id", "text"],
}

_QUESTIONNAIRE_QUESTION = {
	"type": "OBJECT",
	"properties": {
		"id": {"type": "STRING", "description": "A unique ID for the question."},
		"text": {"type": "STRING", "description": "The question text."},
		"type": {
			"type": "STRING",
			"description": "The type of question.",
			"enum": QUESTION_TYPE_VALUES,
		},
		"options": {
			"type": "ARRAY",
			"description": "For choice-based questions ('MultipleChoice', 'SingleChoice', 'LikertScale'), provide an array of choices. Omit for 'FreeText'.",
			"items": {"type": "STRING"},
		},
	},
	"required": ["id", "text", "type"],
}

REQUIRED_GROUPS = ("opening", "core", "followUps", "closing")


def response_schema(questionnaire: bool) -> Dict[str, Any]:
	question = _QUESTIONNAIRE_QUESTION if questionnaire else _INTERVIEW_QUESTION
	return {
		"type": "OBJECT",
		"properties": {
			"opening": {"type": "ARRAY", "description": "Opening / warm-up questions.", "items": question},
			"core": {
				"type": "ARRAY",
				"description": "Core question sections grouped by topic.",
				"items": {
					"type": "OBJECT",
					"properties": {
						"topic": {"type": "STRING"},
						"questions": {"type": "ARRAY", "items": question},
					},
					"required": ["topic", "questions"],
				},
			},
			"followUps": {"type": "ARRAY", "description": "Follow-up / probe questions.", "items": question},
			"closing": {"type": "ARRAY", "description": "Closing / wrap-up questions.", "items": question},
		},
		"required": list(REQUIRED_GROUPS),
	}


def _parameter_block(params: ResearchParameters, tone_label: str = "Desired Tone") -> str:
	return (
		f"- Research Type: {params.research_type}\n"
		f"- Target Audience: {params.target_audience}\n"
		f"- Primary Goal: {params.goal_focus}\n"
		f"- Product Details: {params.product_info.strip() or 'Not specified.'}\n"
		f"- Product Stage: {params.product_stage}\n"
		f"- {tone_label}: {params.tone}\n"
	)


def _image_instruction(params: ResearchParameters) -> str:
	count = len(params.product_images)
	if not count:
		return ""
	return (
		f"A set of {count} product images has been provided. Use these images as a primary reference "
		"to understand the product's interface and features when generating questions.\n"
	)


def build_generation_prompt(params: ResearchParameters) -> str:
	if params.is_questionnaire:
		intro = (
			"You are an expert survey designer. Your task is to generate a structured questionnaire based on the following parameters.\n"
			"Create a mix of question types: 'FreeText', 'SingleChoice', 'MultipleChoice', and 'LikertScale'.\n"
			"For 'SingleChoice', 'MultipleChoice', and 'LikertScale' questions, you MUST provide an 'options' array with the answer choices. "
			"For 'LikertScale', use a standard 5-point scale (e.g., 'Strongly Disagree' to 'Strongly Agree').\n"
			"For 'FreeText' questions, the 'options' array should be omitted.\n"
			f"{_image_instruction(params)}"
			"Ensure every question has a unique 'id' and is tailored to the 'Product Details'.\n"
		)
	else:
		intro = (
			"You are an expert user researcher. Your task is to generate a structured interview script based on the following parameters.\n"
			"Provide insightful and unbiased questions. Group core questions into logical topics.\n"
			"Tailor questions to the 'Product Details' provided.\n"
			f"{_image_instruction(params)}"
			"Ensure every single question has a unique 'id' string field.\n"
		)
	return (
		f"{intro}\n"
		"Parameters:\n"
		f"{_parameter_block(params)}\n"
		"Generate the output in the specified JSON format."
	)


def build_refinement_prompt(params: ResearchParameters, document: Document, instruction: str) -> str:
	image_note = ""
	if params.product_images:
		image_note = f"A set of {len(params.product_images)} product images was provided as a primary reference.\n"
	current = json.dumps(document.model_dump(by_alias=True, mode="json"), indent=2, ensure_ascii=False)
	return (
		"You are an expert user researcher acting as a script editor. You have already generated a script for a user, "
		"and now they have a refinement request.\n"
		"Your task is to take the original parameters, the current script, and the user's new request, and generate a "
		"completely new, updated script in the specified JSON format. The new script should replace the old one entirely.\n\n"
		"***\n\n"
		"### Original Generation Parameters:\n"
		f"{_parameter_block(params, tone_label='Original Tone')}"
		f"{image_note}\n"
		"***\n\n"
		"### Current Script (JSON format):\n"
		f"{current}\n\n"
		"***\n\n"
		"### User's Refinement Request:\n"
		f"\"{instruction}\"\n\n"
		"***\n\n"
		"Now, please provide the full, updated script in the exact same JSON structure as before, incorporating the user's request."
	)
