from __future__ import annotations

from fastapi import APIRouter, File, UploadFile

from ..attachments import load_image
from ..errors import AttachmentError
from ..research import ProductImage
from .deps import to_http_exception

router = APIRouter(prefix="/attachments", tags=["attachments"])


@router.post("", response_model=ProductImage, response_model_by_alias=True)
async def upload_image(file: UploadFile = File(...)):
	content = await file.read()
	try:
		return load_image(content, file.filename or "image", file.content_type)
	except AttachmentError as e:
		raise to_http_exception(e)
