from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from ..errors import PromptFormError
from ..generation import ScriptGenerator
from ..research import TONE_ADJUSTMENTS, ResearchParameters, form_options
from ..script import Document, update_question_text
from .deps import get_generator, to_http_exception

router = APIRouter(prefix="/script", tags=["script"])


class GenerateRequest(BaseModel):
	parameters: ResearchParameters


class RefineRequest(BaseModel):
	parameters: ResearchParameters
	document: Document
	instruction: str


class ToneRequest(BaseModel):
	parameters: ResearchParameters
	tone: str


class EditRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	document: Document
	group: str
	question_id: str = Field(alias="questionId")
	text: str
	section_index: Optional[int] = Field(default=None, alias="sectionIndex")


@router.get("/options")
def get_options():
	return form_options()


@router.post("/generate", response_model=Document)
async def generate(req: GenerateRequest, generator: ScriptGenerator = Depends(get_generator)):
	try:
		return await generator.generate(req.parameters)
	except PromptFormError as e:
		raise to_http_exception(e)


@router.post("/refine", response_model=Document)
async def refine(req: RefineRequest, generator: ScriptGenerator = Depends(get_generator)):
	if not req.instruction.strip():
		raise HTTPException(status_code=400, detail="instruction is required")
	try:
		return await generator.refine(req.parameters, req.document, req.instruction)
	except PromptFormError as e:
		raise to_http_exception(e)


@router.post("/tone", response_model=Document)
async def adjust_tone(req: ToneRequest, generator: ScriptGenerator = Depends(get_generator)):
	if req.tone not in TONE_ADJUSTMENTS:
		raise HTTPException(status_code=400, detail=f"tone must be one of {TONE_ADJUSTMENTS}")
	try:
		return await generator.adjust_tone(req.parameters, req.tone)
	except PromptFormError as e:
		raise to_http_exception(e)


@router.post("/edit", response_model=Document)
def edit_question(req: EditRequest):
	try:
		return update_question_text(req.document, req.group, req.question_id, req.text, req.section_index)
	except PromptFormError as e:
		raise to_http_exception(e)
