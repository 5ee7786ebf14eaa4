from __future__ import annotations

import logging
from typing import List

from ..script.models import Document, iter_groups

logger = logging.getLogger(__name__)


def render_plaintext(doc: Document) -> str:
	"""Markdown-style outline of the script, used for the clipboard copy."""
	lines: List[str] = []
	for group in iter_groups(doc):
		if not group.questions:
			continue
		lines.append(f"## {group.label}")
		for question in group.questions:
			lines.append(f"- {question.text}")
			for option in question.options:
				lines.append(f"  - {option}")
		lines.append("")
	logger.debug("Rendered plain text outline (%d lines)", len(lines))
	return "\n".join(lines)
