"""
Data Model
==========

Value types shared by the synthesizer, the analysis pipeline and the HTTP layer.

- StudentResponse / Question / Analysis: the session values. Records are frozen;
  a new batch replaces the old one wholesale.
- ChartEnvelope / DashboardEnvelope: the structured-data blocks an analysis
  answer may embed as a fenced ``json`` block. ``Envelope`` is a closed union
  discriminated on the ``type`` tag.
- *Block / Presentation: the render tree produced by ``formatter.render``.
  Every block carries a ``kind`` tag so the client can dispatch on it.
"""

from __future__ import annotations

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


Quality = Literal["strong", "average", "weak"]
QUALITIES: List[str] = ["strong", "average", "weak"]


# ============================================================================
# SESSION VALUES
# ============================================================================

class StudentResponse(BaseModel):
	"""One synthesized answer. ``id`` is its 1-based position in the batch."""
	model_config = ConfigDict(frozen=True)

	id: int = Field(ge=1)
	content: str = Field(min_length=1)
	quality: Optional[Quality] = None


class Question(BaseModel):
	text: str = Field(min_length=1)
	number_of_responses: int = Field(default=10, ge=1, le=50)


class Analysis(BaseModel):
	model_config = ConfigDict(frozen=True)

	question: str = Field(min_length=1)
	response: str


# ============================================================================
# STRUCTURED DATA ENVELOPES
# ============================================================================

class DataPoint(BaseModel):
	label: str
	value: float
	description: Optional[str] = None


class ChartSpec(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	# Left as a free string; unknown types render as a placeholder
	chart_type: str = Field(alias="chartType")
	title: str = ""
	data: List[DataPoint] = Field(default_factory=list)
	insights: Optional[str] = None


class ChartEnvelope(ChartSpec):
	type: Literal["CHART_DATA"]


class DashboardComponent(BaseModel):
	"""A dashboard entry. Only ``type`` is required; the rest is kept raw so
	that unknown component types can still be shown."""
	model_config = ConfigDict(extra="allow")

	type: str
	title: Optional[str] = None


class DashboardEnvelope(BaseModel):
	type: Literal["DASHBOARD"]
	title: str = ""
	components: List[DashboardComponent] = Field(default_factory=list)


Envelope = Annotated[Union[ChartEnvelope, DashboardEnvelope], Field(discriminator="type")]


# ============================================================================
# PRESENTATION TREE
# ============================================================================

SpanStyle = Literal["plain", "bold", "italic"]
ChartType = Literal["bar", "pie", "line"]
Shape = Literal["narrative", "per_student", "chart", "dashboard"]


class Span(BaseModel):
	text: str
	style: SpanStyle = "plain"


class ListItem(BaseModel):
	number: Optional[int] = None
	spans: List[Span]


class ParagraphBlock(BaseModel):
	kind: Literal["paragraph"] = "paragraph"
	spans: List[Span]
	# Mixed-content paragraphs that mention a student get a distinct treatment
	highlight: bool = False


class StudentCardBlock(BaseModel):
	kind: Literal["student_card"] = "student_card"
	student_id: int
	spans: List[Span]


class OrderedListBlock(BaseModel):
	kind: Literal["ordered_list"] = "ordered_list"
	items: List[ListItem]


class BulletListBlock(BaseModel):
	kind: Literal["bullet_list"] = "bullet_list"
	items: List[ListItem]


class SectionBlock(BaseModel):
	kind: Literal["section"] = "section"
	title: str
	spans: List[Span]


class ChartBlock(BaseModel):
	kind: Literal["chart"] = "chart"
	chart_type: ChartType
	title: str
	data: List[DataPoint]
	insights: Optional[str] = None
	total: float = 0


class UnsupportedChartBlock(BaseModel):
	kind: Literal["unsupported_chart"] = "unsupported_chart"
	chart_type: str
	title: str
	message: str


class SummaryCard(BaseModel):
	kind: Literal["summary"] = "summary"
	title: str
	spans: List[Span]


class InsightsCard(BaseModel):
	kind: Literal["insights"] = "insights"
	title: str
	items: List[ListItem]


class RecommendationsCard(BaseModel):
	kind: Literal["recommendations"] = "recommendations"
	title: str
	items: List[ListItem]


class GenericCard(BaseModel):
	kind: Literal["card"] = "card"
	title: str
	content: str


ComponentBlock = Annotated[
	Union[SummaryCard, ChartBlock, UnsupportedChartBlock, InsightsCard, RecommendationsCard, GenericCard],
	Field(discriminator="kind"),
]


class DashboardBlock(BaseModel):
	kind: Literal["dashboard"] = "dashboard"
	title: str
	components: List[ComponentBlock]


Block = Annotated[
	Union[
		ParagraphBlock,
		StudentCardBlock,
		OrderedListBlock,
		BulletListBlock,
		SectionBlock,
		ChartBlock,
		UnsupportedChartBlock,
		DashboardBlock,
	],
	Field(discriminator="kind"),
]


class Presentation(BaseModel):
	shape: Shape
	# Which narrative rule fired ("student", "mixed", "numbered", "bulleted",
	# "sections", "paragraphs"); "envelope" for chart/dashboard
	layout: str
	blocks: List[Block]


def response_summary(responses: List[StudentResponse]) -> dict[str, Any]:
	counts = {q: 0 for q in QUALITIES}
	for r in responses:
		if r.quality in counts:
			counts[r.quality] += 1
	counts["total"] = len(responses)
	return counts
