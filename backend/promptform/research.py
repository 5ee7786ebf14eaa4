from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


RESEARCH_TYPES: List[str] = [
	"Generative Interview (early discovery)",
	"Evaluative Interview (usability, concept testing)",
	"Questionnaire (feature prioritization, perception)",
]

TARGET_AUDIENCES: List[str] = [
	"End Users",
	"Internal Stakeholders",
	"Industry Experts",
	"Customers / Clients",
]

GOAL_FOCUSES: List[str] = [
	"Identify Pain Points",
	"Evaluate Concept or Prototype",
	"Understand Behavior or Context",
	"Measure Satisfaction",
]

PRODUCT_STAGES: List[str] = ["Idea", "MVP", "Launched"]

TONES: List[str] = ["Formal", "Conversational", "Friendly", "Professional"]

# Quick tone switches offered next to a generated script
TONE_ADJUSTMENTS: List[str] = ["Formal", "Conversational", "Friendly"]


class ProductImage(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	data: str  # base64, no data: URL prefix
	mime_type: str = Field(alias="mimeType")
	name: str


class ResearchParameters(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	research_type: str = Field(default="Generative Interview", alias="researchType")
	target_audience: str = Field(default="End Users", alias="targetAudience")
	goal_focus: str = Field(default="Identify Pain Points", alias="goalFocus")
	product_stage: str = Field(default="Idea", alias="productStage")
	tone: str = "Formal"
	product_info: str = Field(default="", alias="productInfo")
	product_images: List[ProductImage] = Field(default_factory=list, alias="productImages")

	@property
	def is_questionnaire(self) -> bool:
		return "questionnaire" in self.research_type.lower()

	def with_tone(self, tone: str) -> "ResearchParameters":
		return self.model_copy(update={"tone": tone})


def form_options() -> dict:
	return {
		"research_types": RESEARCH_TYPES,
		"target_audiences": TARGET_AUDIENCES,
		"goal_focuses": GOAL_FOCUSES,
		"product_stages": PRODUCT_STAGES,
		"tones": TONES,
		"tone_adjustments": TONE_ADJUSTMENTS,
	}
