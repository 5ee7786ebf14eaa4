from __future__ import annotations

import base64
import logging
import time
from io import BytesIO
from typing import List, Optional, Sequence

from PIL import Image, UnidentifiedImageError

from .errors import AttachmentError
from .research import ProductImage
from .settings import settings

logger = logging.getLogger(__name__)

# Pillow format name -> MIME type accepted by the model API
SUPPORTED_FORMATS = {
	"PNG": "image/png",
	"JPEG": "image/jpeg",
	"WEBP": "image/webp",
}


def load_image(
	data: bytes,
	filename: str,
	declared_mime: Optional[str] = None,
	*,
	max_bytes: Optional[int] = None,
) -> ProductImage:
	"""Validate an uploaded image and encode it the way the model API expects it."""
	limit = max_bytes if max_bytes is not None else settings.max_attachment_bytes
	if not data:
		raise AttachmentError(f"{filename}: empty file")
	if len(data) > limit:
		raise AttachmentError(f"{filename}: {len(data)} bytes exceeds the {limit} byte limit")
	try:
		with Image.open(BytesIO(data)) as img:
			fmt = img.format
			img.verify()
	except (UnidentifiedImageError, OSError, SyntaxError) as e:
		raise AttachmentError(f"{filename}: not a readable image ({e})") from e

	mime_type = SUPPORTED_FORMATS.get(fmt or "")
	if mime_type is None:
		raise AttachmentError(f"{filename}: unsupported image format {fmt}; use PNG, JPEG or WEBP")
	if declared_mime and declared_mime != mime_type:
		logger.info("Declared type %s for %s does not match detected %s", declared_mime, filename, mime_type)

	return ProductImage(
		data=base64.b64encode(data).decode("ascii"),
		mime_type=mime_type,
		name=f"{filename}-{int(time.time() * 1000)}",
	)


def add_images(
	existing: Sequence[ProductImage],
	new: Sequence[ProductImage],
	*,
	max_count: Optional[int] = None,
) -> List[ProductImage]:
	"""Append images, skipping re-uploads of a file already attached (matched by original filename)."""
	limit = max_count if max_count is not None else settings.max_attachments
	result = list(existing)
	for image in new:
		original = image.name.rsplit("-", 1)[0]
		if any(img.name.startswith(original) for img in result):
			logger.debug("Skipping duplicate attachment %s", original)
			continue
		if len(result) >= limit:
			raise AttachmentError(f"at most {limit} images can be attached")
		result.append(image)
	return result


def remove_image(existing: Sequence[ProductImage], name: str) -> List[ProductImage]:
	return [img for img in existing if img.name != name]
