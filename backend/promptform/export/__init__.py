from .plaintext import render_plaintext
from .survey_txt import SURVEY_FILENAME, render_survey_txt
from .pdf_layout import LayoutConfig, LayoutResult, PagePlan, TextLine, layout_document, wrap_text
from .pdf_writer import PDF_FILENAME, render_pdf, write_pdf

__all__ = [
	"LayoutConfig",
	"LayoutResult",
	"PDF_FILENAME",
	"PagePlan",
	"SURVEY_FILENAME",
	"TextLine",
	"layout_document",
	"render_pdf",
	"render_plaintext",
	"render_survey_txt",
	"wrap_text",
	"write_pdf",
]
