"""
Analysis Formatter
==================

Turns the free-form answer of an analysis call into a presentation tree.

Step 1 looks for a fenced ``json`` block holding a CHART_DATA or DASHBOARD
envelope. A block that does not decode into one of those is ignored and the
whole text, fences included, goes down the narrative path.

Step 2 is an ordered list of narrative rules; the first one that matches the
text decides the layout:

1. per-student markers ("**Student 3**:", "__Student 3__:", "Student 3:")
2. numbered items ("1.", "1)", "(1)", "1 -")
3. bullet glyphs
4. section labels ("Summary:", "Analysis:", ...)
5. blank-line separated paragraphs (always matches)

None of this raises on odd input; the worst case is plain paragraphs.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, List, Optional, Pattern, Tuple

from pydantic import TypeAdapter, ValidationError

from .schemas import (
	BulletListBlock,
	ChartBlock,
	ChartEnvelope,
	ChartSpec,
	DashboardBlock,
	DashboardComponent,
	DashboardEnvelope,
	Envelope,
	GenericCard,
	InsightsCard,
	ListItem,
	OrderedListBlock,
	ParagraphBlock,
	Presentation,
	RecommendationsCard,
	SectionBlock,
	Span,
	StudentCardBlock,
	SummaryCard,
	UnsupportedChartBlock,
)

logger = logging.getLogger(__name__)


CHART_TYPES = ("bar", "pie", "line")
SECTION_LABELS = ("Question", "Analysis", "Summary", "Conclusion", "Overview", "Introduction")

_FENCED_JSON = re.compile(r"```[ \t]*json[ \t]*\r?\n?([\s\S]*?)```", re.IGNORECASE)
_ENVELOPE: TypeAdapter[Any] = TypeAdapter(Envelope)

_BLANK_LINE = re.compile(r"\n\s*\n")


# ============================================================================
# INLINE EMPHASIS
# ============================================================================

_INLINE = re.compile(r"\*\*(.+?)\*\*|(?<!\w)__(.+?)__(?!\w)|\*(.+?)\*|(?<!\w)_(.+?)_(?!\w)")


def parse_inline(text: str) -> List[Span]:
	"""Split text into plain/bold/italic spans.

	Bold (``**x**``, ``__x__``) is tried before italic (``*x*``, ``_x_``) at each
	position; matches never overlap.
	"""
	spans: List[Span] = []
	pos = 0
	for m in _INLINE.finditer(text):
		if m.start() > pos:
			spans.append(Span(text=text[pos:m.start()]))
		bold = m.group(1) if m.group(1) is not None else m.group(2)
		if bold is not None:
			spans.append(Span(text=bold, style="bold"))
		else:
			italic = m.group(3) if m.group(3) is not None else m.group(4)
			spans.append(Span(text=italic, style="italic"))
		pos = m.end()
	if pos < len(text):
		spans.append(Span(text=text[pos:]))
	return spans


def spans_to_text(spans: List[Span]) -> str:
	return "".join(s.text for s in spans)


# ============================================================================
# STRUCTURED DATA (CHART / DASHBOARD)
# ============================================================================

def decode_envelope(text: str) -> Optional[Tuple[Any, str]]:
	"""Return ``(envelope, text_outside_block)`` or ``None``.

	Only the first fenced json block is considered.
	"""
	m = _FENCED_JSON.search(text or "")
	if not m:
		return None
	try:
		envelope = _ENVELOPE.validate_json(m.group(1).strip())
	except ValidationError as err:
		logger.debug("Fenced block is not a chart/dashboard envelope: %s", err.errors()[:1])
		return None
	before = text[: m.start()].strip()
	after = text[m.end():].strip()
	outside = "\n\n".join(part for part in (before, after) if part)
	return envelope, outside


def _chart_block(spec: ChartSpec) -> ChartBlock | UnsupportedChartBlock:
	chart_type = (spec.chart_type or "").strip().lower()
	if chart_type not in CHART_TYPES:
		return UnsupportedChartBlock(
			chart_type=spec.chart_type,
			title=spec.title,
			message=f"Unsupported chart type: {spec.chart_type}",
		)
	return ChartBlock(
		chart_type=chart_type,
		title=spec.title,
		data=list(spec.data),
		insights=spec.insights,
		total=sum(p.value for p in spec.data),
	)


def _component_extra(component: DashboardComponent, key: str) -> Any:
	return (component.model_extra or {}).get(key)


def _as_text(value: Any) -> str:
	if value is None:
		return ""
	if isinstance(value, str):
		return value
	return json.dumps(value, indent=2)


def _component_items(component: DashboardComponent) -> List[str]:
	items = _component_extra(component, "items")
	if isinstance(items, list):
		return [_as_text(i) for i in items]
	content = _component_extra(component, "content")
	if isinstance(content, list):
		return [_as_text(i) for i in content]
	if isinstance(content, str) and content.strip():
		return [content]
	return []


def _generic_card(component: DashboardComponent) -> GenericCard:
	extra = dict(component.model_extra or {})
	raw = extra.get("content", extra)
	return GenericCard(title=component.title or component.type, content=_as_text(raw))


def _summary_card(component: DashboardComponent) -> SummaryCard:
	text = _as_text(_component_extra(component, "content"))
	return SummaryCard(title=component.title or "Summary", spans=parse_inline(text))


def _chart_component(component: DashboardComponent):
	raw = component.model_dump()
	raw["title"] = component.title or ""
	try:
		spec = ChartSpec.model_validate(raw)
	except ValidationError:
		return _generic_card(component)
	return _chart_block(spec)


def _insights_card(component: DashboardComponent) -> InsightsCard:
	items = [ListItem(spans=parse_inline(i)) for i in _component_items(component)]
	return InsightsCard(title=component.title or "Insights", items=items)


def _recommendations_card(component: DashboardComponent) -> RecommendationsCard:
	items = [
		ListItem(number=n, spans=parse_inline(i))
		for n, i in enumerate(_component_items(component), start=1)
	]
	return RecommendationsCard(title=component.title or "Recommendations", items=items)


COMPONENT_RENDERERS: dict[str, Callable[[DashboardComponent], Any]] = {
	"summary": _summary_card,
	"chart": _chart_component,
	"insights": _insights_card,
	"recommendations": _recommendations_card,
}


def _dashboard_block(envelope: DashboardEnvelope) -> DashboardBlock:
	components = []
	for component in envelope.components:
		renderer = COMPONENT_RENDERERS.get(component.type.strip().lower(), _generic_card)
		components.append(renderer(component))
	return DashboardBlock(title=envelope.title, components=components)


# ============================================================================
# NARRATIVE RULES
# ============================================================================

# Line-level markers that switch on the per-student layout
_STUDENT_MARKERS: List[Pattern[str]] = [
	re.compile(r"\*\*Student\s*(\d+)\*\*:\s*(.*)", re.IGNORECASE),
	re.compile(r"__Student\s*(\d+)__:\s*(.*)", re.IGNORECASE),
	re.compile(r"Student\s*(\d+):\s*(.*)", re.IGNORECASE),
	re.compile(r"\*\*Student\s*(\d+)\s*\*\*\s*-?\s*(.*)", re.IGNORECASE),
	re.compile(r"Student\s*(\d+)\s*\*\*:\s*(.*)", re.IGNORECASE),
]

# Segment splitters, tried in order; the first with any match wins
_STUDENT_SEGMENTS: List[Pattern[str]] = [
	re.compile(r"\*\*Student\s*(\d+)\*\*:\s*(.*?)(?=\*\*Student\s*\d+\*\*:|\Z)", re.IGNORECASE | re.DOTALL),
	re.compile(r"\*\*Student\s*(\d+):\*\*\s*(.*?)(?=\*\*Student\s*\d+:\*\*|\Z)", re.IGNORECASE | re.DOTALL),
	re.compile(r"__Student\s*(\d+)__:\s*(.*?)(?=__Student\s*\d+__:|\Z)", re.IGNORECASE | re.DOTALL),
	re.compile(r"Student\s*(\d+):\s*(.*?)(?=Student\s*\d+:|\Z)", re.IGNORECASE | re.DOTALL),
	re.compile(r"\*\*Student\s*(\d+)\s*\*\*\s*-?\s*(.*?)(?=\*\*Student\s*\d+\s*\*\*|\Z)", re.IGNORECASE | re.DOTALL),
]

_STUDENT_MENTION = re.compile(r"Student\s*\d+", re.IGNORECASE)

# A list marker left dangling when a numbered or bulleted line carries a student marker
_BARE_LIST_MARKER = re.compile(r"^\s*(?:\d+[.)]|[-*•])\s*$")

_NUMBERED_ITEMS: List[Pattern[str]] = [
	re.compile(r"^(\d+)\.(?!\d)\s*(.*)"),
	re.compile(r"^(\d+)\)\s+(.*)"),
	re.compile(r"^\((\d+)\)\s*(.*)"),
	re.compile(r"^(\d+)\s*[-–—]\s*(.*)"),
]

# "-" and "*" need trailing whitespace so emphasis at line start is not a bullet
_BULLET_ITEMS: List[Pattern[str]] = [
	re.compile(r"^[•·‣⁃◦]\s*(.*)"),
	re.compile(r"^[→➤➢➣]\s*(.*)"),
	re.compile(r"^[✓✔✗✘]\s*(.*)"),
	re.compile(r"^[-*]\s+(.*)"),
]

_SECTION_LINE = re.compile(
	r"^(?:#{1,6}\s*)?(?:\*\*|__)?(" + "|".join(SECTION_LABELS) + r")(?:\*\*|__)?\s*:(?:\*\*|__)?\s*(.*)",
	re.IGNORECASE,
)


def _nonblank_lines(text: str) -> List[str]:
	return [line.strip() for line in text.splitlines() if line.strip()]


def _paragraph_texts(text: str) -> List[str]:
	return [p.strip() for p in _BLANK_LINE.split(text) if p.strip()]


def _paragraph(text: str, *, highlight: bool = False) -> ParagraphBlock:
	return ParagraphBlock(spans=parse_inline(text), highlight=highlight)


def _match_item(line: str, patterns: List[Pattern[str]]) -> Optional[str]:
	for pattern in patterns:
		m = pattern.match(line)
		if m:
			return m.group(m.lastindex or 0)
	return None


def _accumulate_items(lines: List[str], patterns: List[Pattern[str]]) -> Tuple[List[str], List[str]]:
	"""Group lines into items; unmarked lines continue the current item.

	Lines before the first marker are returned separately as a preamble.
	"""
	preamble: List[str] = []
	items: List[str] = []
	current: Optional[str] = None
	for line in lines:
		content = _match_item(line, patterns)
		if content is not None:
			if current is not None:
				items.append(current.strip())
			current = content
		elif current is not None:
			current += " " + line
		else:
			preamble.append(line)
	if current is not None:
		items.append(current.strip())
	return preamble, items


def _with_preamble(preamble: List[str], blocks: list) -> list:
	if preamble:
		return [_paragraph("\n".join(preamble))] + blocks
	return blocks


def _mixed_content(text: str) -> Presentation:
	blocks = [
		_paragraph(p, highlight=bool(_STUDENT_MENTION.search(p)))
		for p in _paragraph_texts(text)
	]
	return Presentation(shape="narrative", layout="mixed", blocks=blocks)


def _trim_list_markers(segment: str) -> str:
	lines = segment.strip().splitlines()
	while lines and _BARE_LIST_MARKER.match(lines[-1]):
		lines.pop()
	return "\n".join(lines).strip()


def _student_rule(text: str, lines: List[str]) -> Optional[Presentation]:
	if not any(p.search(line) for line in lines for p in _STUDENT_MARKERS):
		return None
	for pattern in _STUDENT_SEGMENTS:
		matches = list(pattern.finditer(text))
		if not matches:
			continue
		blocks: list = []
		lead = _trim_list_markers(text[: matches[0].start()])
		if lead:
			blocks.append(_paragraph(lead))
		for m in matches:
			blocks.append(StudentCardBlock(student_id=int(m.group(1)), spans=parse_inline(_trim_list_markers(m.group(2)))))
		return Presentation(shape="per_student", layout="student", blocks=blocks)
	logger.debug("Student markers present but no segment pattern matched; using mixed content")
	return _mixed_content(text)


def _numbered_rule(text: str, lines: List[str]) -> Optional[Presentation]:
	if not any(_match_item(line, _NUMBERED_ITEMS) is not None for line in lines):
		return None
	preamble, items = _accumulate_items(lines, _NUMBERED_ITEMS)
	# Renumbered from 1 regardless of the source numbering
	block = OrderedListBlock(items=[ListItem(number=n, spans=parse_inline(item)) for n, item in enumerate(items, start=1)])
	return Presentation(shape="narrative", layout="numbered", blocks=_with_preamble(preamble, [block]))


def _bulleted_rule(text: str, lines: List[str]) -> Optional[Presentation]:
	if not any(_match_item(line, _BULLET_ITEMS) is not None for line in lines):
		return None
	preamble, items = _accumulate_items(lines, _BULLET_ITEMS)
	block = BulletListBlock(items=[ListItem(spans=parse_inline(item)) for item in items])
	return Presentation(shape="narrative", layout="bulleted", blocks=_with_preamble(preamble, [block]))


def _section_rule(text: str, lines: List[str]) -> Optional[Presentation]:
	if not any(_SECTION_LINE.match(line) for line in lines):
		return None
	blocks: list = []
	preamble: List[str] = []
	title: Optional[str] = None
	body: List[str] = []

	def flush() -> None:
		if title is not None:
			blocks.append(SectionBlock(title=title, spans=parse_inline("\n".join(body).strip())))

	for line in lines:
		m = _SECTION_LINE.match(line)
		if m:
			flush()
			title = m.group(1).capitalize()
			body = [m.group(2).strip()] if m.group(2).strip() else []
		elif title is None:
			preamble.append(line)
		else:
			body.append(line)
	flush()
	return Presentation(shape="narrative", layout="sections", blocks=_with_preamble(preamble, blocks))


def _paragraph_rule(text: str, lines: List[str]) -> Presentation:
	blocks = [_paragraph(p) for p in _paragraph_texts(text)]
	return Presentation(shape="narrative", layout="paragraphs", blocks=blocks)


NARRATIVE_RULES: List[Callable[[str, List[str]], Optional[Presentation]]] = [
	_student_rule,
	_numbered_rule,
	_bulleted_rule,
	_section_rule,
]


def render_narrative(text: str) -> Presentation:
	text = (text or "").strip()
	lines = _nonblank_lines(text)
	for rule in NARRATIVE_RULES:
		presentation = rule(text, lines)
		if presentation is not None:
			return presentation
	return _paragraph_rule(text, lines)


# ============================================================================
# ENTRY POINT
# ============================================================================

def render(text: str) -> Presentation:
	text = text or ""
	decoded = decode_envelope(text)
	if decoded is None:
		return render_narrative(text)
	envelope, outside = decoded
	if isinstance(envelope, ChartEnvelope):
		shape = "chart"
		blocks: list = [_chart_block(envelope)]
	else:
		shape = "dashboard"
		blocks = [_dashboard_block(envelope)]
	if outside:
		blocks.extend(render_narrative(outside).blocks)
	return Presentation(shape=shape, layout="envelope", blocks=blocks)
