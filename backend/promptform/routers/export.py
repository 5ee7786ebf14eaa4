from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

from ..export import PDF_FILENAME, SURVEY_FILENAME, render_pdf, render_plaintext, render_survey_txt
from ..script import Document

router = APIRouter(prefix="/export", tags=["export"])


class ExportRequest(BaseModel):
	document: Document


def _attachment(filename: str) -> dict:
	return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.post("/text", response_class=PlainTextResponse)
def export_text(req: ExportRequest):
	# Copied to the clipboard by the browser
	return PlainTextResponse(render_plaintext(req.document))


@router.post("/survey", response_class=PlainTextResponse)
def export_survey(req: ExportRequest):
	if not req.document.is_questionnaire:
		raise HTTPException(status_code=400, detail="survey export is only available for questionnaires")
	return PlainTextResponse(render_survey_txt(req.document), headers=_attachment(SURVEY_FILENAME))


@router.post("/pdf")
def export_pdf(req: ExportRequest):
	return Response(
		content=render_pdf(req.document),
		media_type="application/pdf",
		headers=_attachment(PDF_FILENAME),
	)
