"""
Module: export.pdf_layout

Purpose:
    Lay a script Document out onto fixed-size pages for PDF export.
    Produces a pure layout model (pages of positioned text lines); the
    reportlab drawing happens in ``pdf_writer``.

Algorithm:
    A single vertical cursor walks down the page. Before placing a block of
    wrapped lines (title, group heading, question, single option) its height
    is measured; if it would cross the bottom margin a new page is started
    and the cursor returns to the top margin. Text is wrapped on word
    boundaries against the real font metrics.

Coordinates:
    All values are PDF points. ``TextLine.y`` is the baseline measured from
    the TOP of the page; the writer flips it for reportlab.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from ..script.models import Document, Question, iter_groups

logger = logging.getLogger(__name__)

QUESTIONNAIRE_TITLE = "Generated Questionnaire"
SCRIPT_TITLE = "Generated Script"
QUESTION_PREFIX = "- "
OPTION_PREFIX = "• "


@dataclass(frozen=True)
class LayoutConfig:
	"""Page geometry and typography, in points."""
	page_width: float = A4[0]
	page_height: float = A4[1]
	margin: float = 15 * mm

	regular_font: str = "Helvetica"
	bold_font: str = "Helvetica-Bold"

	title_font_size: float = 18
	title_line_height: float = 8 * mm
	title_spacing_after: float = 10 * mm

	heading_font_size: float = 14
	heading_line_height: float = 7 * mm
	# Extra room required below a heading so it is not stranded at the page foot
	heading_keep_with_next: float = 8 * mm
	heading_spacing_after: float = 4 * mm

	question_font_size: float = 11
	question_line_height: float = 5 * mm
	question_indent: float = 2 * mm
	question_width_reduction: float = 5 * mm
	question_spacing_after: float = 2 * mm

	option_font_size: float = 10
	option_line_height: float = 4.5 * mm
	option_indent: float = 5 * mm
	option_width_reduction: float = 10 * mm
	option_list_spacing_after: float = 2 * mm

	group_spacing_after: float = 5 * mm

	@property
	def content_width(self) -> float:
		return self.page_width - 2 * self.margin

	@property
	def content_bottom(self) -> float:
		return self.page_height - self.margin


@dataclass(frozen=True)
class TextLine:
	text: str
	x: float
	y: float
	font_name: str
	font_size: float
	align: str = "left"  # "left" or "center" (x is then the centre line)


@dataclass(frozen=True)
class PagePlan:
	index: int
	lines: Tuple[TextLine, ...]


@dataclass(frozen=True)
class LayoutResult:
	pages: Tuple[PagePlan, ...]
	page_width: float
	page_height: float
	title: str = ""
	warnings: List[str] = field(default_factory=list)

	@property
	def page_count(self) -> int:
		return len(self.pages)


def wrap_text(text: str, font_name: str, font_size: float, max_width: float) -> List[str]:
	"""
	Split text into lines no wider than ``max_width``, breaking only at spaces.

	A single word wider than the available width is kept whole on its own line.
	Explicit newlines start a new line. Always returns at least one line.
	"""
	lines: List[str] = []
	for paragraph in text.split("\n"):
		words = paragraph.split()
		if not words:
			lines.append("")
			continue
		current = words[0]
		for word in words[1:]:
			candidate = f"{current} {word}"
			if stringWidth(candidate, font_name, font_size) <= max_width:
				current = candidate
			else:
				lines.append(current)
				current = word
		lines.append(current)
	return lines


class _PageCursor:
	def __init__(self, config: LayoutConfig) -> None:
		self.config = config
		self.pages: List[PagePlan] = []
		self.current: List[TextLine] = []
		self.y = config.margin
		self.warnings: List[str] = []

	def _warn(self, msg: str) -> None:
		logger.warning(msg)
		self.warnings.append(msg)

	def ensure_space(self, needed: float) -> None:
		if self.y + needed <= self.config.content_bottom:
			return
		if not self.current:
			# A single line taller than the printable area; nothing smaller to break it into
			self._warn(f"Line of {needed:.1f}pt overflows page {len(self.pages) + 1}")
			return
		self.new_page()

	def new_page(self) -> None:
		self.pages.append(PagePlan(index=len(self.pages), lines=tuple(self.current)))
		self.current = []
		self.y = self.config.margin

	def place(
		self,
		lines: Sequence[str],
		x: float,
		line_height: float,
		font_name: str,
		font_size: float,
		align: str = "left",
	) -> None:
		for i, text in enumerate(lines):
			self.current.append(TextLine(text, x, self.y + i * line_height, font_name, font_size, align))
		self.y += len(lines) * line_height

	def place_block(
		self,
		lines: Sequence[str],
		x: float,
		line_height: float,
		font_name: str,
		font_size: float,
		align: str = "left",
		keep_with_next: float = 0.0,
	) -> None:
		"""
		Place wrapped lines as one unit, moving to a new page if they do not fit.

		A block taller than the printable area cannot be kept together; it is
		flowed line by line over as many pages as needed and a warning recorded.
		"""
		needed = len(lines) * line_height + keep_with_next
		printable = self.config.content_bottom - self.config.margin
		if needed <= printable:
			self.ensure_space(needed)
			self.place(lines, x, line_height, font_name, font_size, align)
			return
		self._warn(f"Block of {needed:.1f}pt is taller than a page; splitting it across pages")
		for text in lines:
			self.ensure_space(line_height)
			self.place([text], x, line_height, font_name, font_size, align)

	def finish(self) -> Tuple[PagePlan, ...]:
		if self.current or not self.pages:
			self.new_page()
		return tuple(self.pages)


def _layout_question(cursor: _PageCursor, question: Question) -> None:
	cfg = cursor.config
	q_lines = wrap_text(
		f"{QUESTION_PREFIX}{question.text}",
		cfg.regular_font,
		cfg.question_font_size,
		cfg.content_width - cfg.question_width_reduction,
	)
	cursor.place_block(
		q_lines,
		cfg.margin + cfg.question_indent,
		cfg.question_line_height,
		cfg.regular_font,
		cfg.question_font_size,
		keep_with_next=cfg.question_spacing_after,
	)
	cursor.y += cfg.question_spacing_after

	if not question.options:
		return
	for option in question.options:
		o_lines = wrap_text(
			f"{OPTION_PREFIX}{option}",
			cfg.regular_font,
			cfg.option_font_size,
			cfg.content_width - cfg.option_width_reduction,
		)
		cursor.place_block(o_lines, cfg.margin + cfg.option_indent, cfg.option_line_height, cfg.regular_font, cfg.option_font_size)
	cursor.y += cfg.option_list_spacing_after


def layout_document(doc: Document, config: Optional[LayoutConfig] = None) -> LayoutResult:
	"""
	Paginate a Document.

	Args:
		doc: Script to lay out (not modified)
		config: Page geometry; defaults to A4 portrait with 15 mm margins

	Returns:
		LayoutResult with at least one page (the title page)
	"""
	cfg = config or LayoutConfig()
	cursor = _PageCursor(cfg)

	title = QUESTIONNAIRE_TITLE if doc.is_questionnaire else SCRIPT_TITLE
	title_lines = wrap_text(title, cfg.bold_font, cfg.title_font_size, cfg.content_width)
	cursor.place_block(title_lines, cfg.page_width / 2, cfg.title_line_height, cfg.bold_font, cfg.title_font_size, align="center")
	cursor.y += cfg.title_spacing_after

	for group in iter_groups(doc):
		if not group.questions:
			continue
		heading_lines = wrap_text(group.label, cfg.bold_font, cfg.heading_font_size, cfg.content_width)
		cursor.place_block(
			heading_lines,
			cfg.margin,
			cfg.heading_line_height,
			cfg.bold_font,
			cfg.heading_font_size,
			keep_with_next=cfg.heading_keep_with_next,
		)
		cursor.y += cfg.heading_spacing_after

		for question in group.questions:
			_layout_question(cursor, question)
		cursor.y += cfg.group_spacing_after

	pages = cursor.finish()
	logger.debug("Laid out %d questions on %d pages", doc.question_count, len(pages))
	return LayoutResult(
		pages=pages,
		page_width=cfg.page_width,
		page_height=cfg.page_height,
		title=title,
		warnings=cursor.warnings,
	)
