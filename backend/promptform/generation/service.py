from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..errors import ConfigurationError, GenerationError, MalformedResponseError
from ..gemini_client import GeminiClient, inline_image_part, text_part
from ..research import ResearchParameters
from ..script.models import Document
from ..settings import settings
from .prompts import REQUIRED_GROUPS, build_generation_prompt, build_refinement_prompt, response_schema

logger = logging.getLogger(__name__)

GENERATION_FAILED = "Failed to generate content. The AI model may be temporarily unavailable."
REFINEMENT_FAILED = "Failed to refine content. The AI model may be temporarily unavailable."


def _extract_json_object(text: str) -> Dict[str, Any]:
	"""
	Parse the model's JSON answer.

	Structured output normally returns bare JSON, but fenced or prefixed
	answers are tolerated.

	Raises:
		MalformedResponseError: If no JSON object can be extracted
	"""
	text = (text or "").strip()
	try:
		data = json.loads(text)
		if isinstance(data, dict):
			return data
	except ValueError:
		pass

	code_block = re.search(r"```(?:json)?\s*([\s\S]*?)\s*```", text)
	if code_block:
		try:
			data = json.loads(code_block.group(1))
			if isinstance(data, dict):
				return data
		except ValueError:
			pass

	first = text.find("{")
	last = text.rfind("}")
	if first != -1 and last > first:
		try:
			data = json.loads(text[first : last + 1])
			if isinstance(data, dict):
				return data
		except ValueError:
			pass

	raise MalformedResponseError("Received malformed content from AI. Response was not a JSON object.")


def parse_document(raw: str, *, questionnaire: bool, during: str = "generation") -> Document:
	"""Turn the model's JSON text into a Document, enforcing the four required groups."""
	data = _extract_json_object(raw)
	missing = [key for key in REQUIRED_GROUPS if data.get(key) is None]
	if missing:
		raise MalformedResponseError(
			f"Received malformed content from AI during {during}. Missing required sections: {', '.join(missing)}."
		)
	data["isQuestionnaire"] = questionnaire
	try:
		return Document.model_validate(data)
	except ValidationError as e:
		raise MalformedResponseError(f"Received malformed content from AI during {during}: {e.error_count()} invalid field(s).") from e


class ScriptGenerator:
	"""Produces and refines script Documents through the Gemini structured-output API."""

	def __init__(
		self,
		client: GeminiClient,
		*,
		generation_temperature: Optional[float] = None,
		refinement_temperature: Optional[float] = None,
	) -> None:
		self._client = client
		self._generation_temperature = (
			generation_temperature if generation_temperature is not None else settings.generation_temperature
		)
		self._refinement_temperature = (
			refinement_temperature if refinement_temperature is not None else settings.refinement_temperature
		)

	@staticmethod
	def _parts(prompt: str, params: ResearchParameters) -> List[Dict[str, Any]]:
		parts = [text_part(prompt)]
		for image in params.product_images:
			parts.append(inline_image_part(image.mime_type, image.data))
		return parts

	async def _call(self, prompt: str, params: ResearchParameters, *, questionnaire: bool, temperature: float, failure: str) -> str:
		try:
			return await self._client.generate_json(
				self._parts(prompt, params),
				schema=response_schema(questionnaire),
				temperature=temperature,
			)
		except ConfigurationError:
			raise
		except GenerationError as e:
			logger.error("Model call failed: %s", e)
			raise GenerationError(failure) from e

	async def generate(self, params: ResearchParameters) -> Document:
		questionnaire = params.is_questionnaire
		raw = await self._call(
			build_generation_prompt(params),
			params,
			questionnaire=questionnaire,
			temperature=self._generation_temperature,
			failure=GENERATION_FAILED,
		)
		doc = parse_document(raw, questionnaire=questionnaire, during="generation")
		logger.info(
			"Generated %s with %d questions in %d core sections",
			"questionnaire" if questionnaire else "interview script",
			doc.question_count,
			len(doc.core),
		)
		return doc

	async def adjust_tone(self, params: ResearchParameters, tone: str) -> Document:
		"""Regenerate from scratch with only the tone changed."""
		return await self.generate(params.with_tone(tone))

	async def refine(self, params: ResearchParameters, document: Document, instruction: str) -> Document:
		instruction = (instruction or "").strip()
		if not instruction:
			raise ValueError("refinement instruction must not be empty")
		questionnaire = document.is_questionnaire or params.is_questionnaire
		raw = await self._call(
			build_refinement_prompt(params, document, instruction),
			params,
			questionnaire=questionnaire,
			temperature=self._refinement_temperature,
			failure=REFINEMENT_FAILED,
		)
		doc = parse_document(raw, questionnaire=questionnaire, during="refinement")
		logger.info("Refined script now has %d questions", doc.question_count)
		return doc
