"""
Module: export.pdf_writer

Purpose:
    Serialize a LayoutResult to PDF bytes with reportlab.

Dependencies:
    - reportlab: PDF generation
    - export.pdf_layout: LayoutResult, PagePlan
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Optional

from reportlab.pdfgen import canvas

from ..script.models import Document
from .pdf_layout import LayoutConfig, LayoutResult, PagePlan, layout_document

logger = logging.getLogger(__name__)

PDF_FILENAME = "generated_script.pdf"


def _draw_page(c: canvas.Canvas, page: PagePlan, page_height: float) -> None:
	for line in page.lines:
		c.setFont(line.font_name, line.font_size)
		# Layout y is measured from the top; reportlab's origin is bottom-left
		y_pt = page_height - line.y
		if line.align == "center":
			c.drawCentredString(line.x, y_pt, line.text)
		else:
			c.drawString(line.x, y_pt, line.text)


def write_pdf(layout: LayoutResult) -> bytes:
	"""
	Render layout pages to an in-memory PDF.

	Args:
		layout: Result of ``layout_document``

	Returns:
		PDF file contents
	"""
	buffer = BytesIO()
	c = canvas.Canvas(buffer, pagesize=(layout.page_width, layout.page_height))
	if layout.title:
		c.setTitle(layout.title)

	for page in layout.pages:
		_draw_page(c, page, layout.page_height)
		c.showPage()

	c.save()
	logger.debug("Rendered %d PDF pages", layout.page_count)
	return buffer.getvalue()


def render_pdf(doc: Document, config: Optional[LayoutConfig] = None) -> bytes:
	return write_pdf(layout_document(doc, config))
