"""Tests for the analysis formatter: envelopes, narrative rules and inline emphasis."""

import json

from simulator.formatter import decode_envelope, parse_inline, render, render_narrative, spans_to_text
from simulator.schemas import ChartEnvelope, DashboardEnvelope


def _fence(payload) -> str:
	return "```json\n" + json.dumps(payload) + "\n```"


def _text(block) -> str:
	return spans_to_text(block.spans)


BAR_CHART = {
	"type": "CHART_DATA",
	"chartType": "bar",
	"title": "T",
	"data": [{"label": "A", "value": 3}, {"label": "B", "value": 5}],
}


class TestParseInline:
	"""Tests for parse_inline()."""

	def test_plain_text(self):
		spans = parse_inline("nothing special")
		assert [(s.text, s.style) for s in spans] == [("nothing special", "plain")]

	def test_bold_and_italic(self):
		spans = parse_inline("a **key** term and *soft* emphasis")
		assert [(s.text, s.style) for s in spans] == [
			("a ", "plain"),
			("key", "bold"),
			(" term and ", "plain"),
			("soft", "italic"),
			(" emphasis", "plain"),
		]

	def test_underscore_variants(self):
		spans = parse_inline("__strong__ then _light_")
		assert [(s.text, s.style) for s in spans] == [
			("strong", "bold"),
			(" then ", "plain"),
			("light", "italic"),
		]

	def test_snake_case_is_not_italic(self):
		spans = parse_inline("call snake_case_name here")
		assert [s.style for s in spans] == ["plain"]

	def test_unclosed_marker_stays_literal(self):
		assert spans_to_text(parse_inline("a **dangling marker")) == "a **dangling marker"

	def test_double_underscore_inside_word_is_not_bold(self):
		spans = parse_inline("rename file__draft__v2 later")
		assert [s.style for s in spans] == ["plain"]
		assert spans_to_text(spans) == "rename file__draft__v2 later"


class TestDecodeEnvelope:
	"""Tests for decode_envelope()."""

	def test_chart_envelope(self):
		envelope, outside = decode_envelope(_fence(BAR_CHART) + "\nMost students did well.")
		assert isinstance(envelope, ChartEnvelope)
		assert outside == "Most students did well."

	def test_dashboard_envelope(self):
		envelope, _ = decode_envelope(_fence({"type": "DASHBOARD", "title": "D", "components": []}))
		assert isinstance(envelope, DashboardEnvelope)

	def test_unknown_type_tag(self):
		assert decode_envelope(_fence({"type": "TABLE", "rows": []})) is None

	def test_malformed_json(self):
		assert decode_envelope("```json\n{not json}\n```") is None

	def test_no_fence(self):
		assert decode_envelope("just text") is None


class TestChartShape:
	"""Chart envelopes render as a chart block plus trailing narrative."""

	def test_bar_chart_with_trailing_text(self):
		presentation = render(_fence(BAR_CHART) + "\nMost students did well.")
		assert presentation.shape == "chart"
		chart, paragraph = presentation.blocks
		assert chart.kind == "chart"
		assert chart.chart_type == "bar"
		assert [(p.label, p.value) for p in chart.data] == [("A", 3), ("B", 5)]
		assert chart.total == 8
		assert paragraph.kind == "paragraph"
		assert _text(paragraph) == "Most students did well."

	def test_chart_type_is_case_insensitive(self):
		presentation = render(_fence(dict(BAR_CHART, chartType="PIE")))
		assert presentation.blocks[0].chart_type == "pie"

	def test_unsupported_chart_type(self):
		presentation = render(_fence(dict(BAR_CHART, chartType="scatter")))
		block = presentation.blocks[0]
		assert block.kind == "unsupported_chart"
		assert block.message == "Unsupported chart type: scatter"

	def test_only_first_fence_is_considered(self):
		text = _fence({"type": "TABLE"}) + "\n\n" + _fence(BAR_CHART)
		assert render(text).shape == "narrative"


class TestDashboardShape:
	"""Dashboard envelopes render their components in order."""

	def test_components(self):
		payload = {
			"type": "DASHBOARD",
			"title": "Class overview",
			"components": [
				{"type": "summary", "title": "Overall", "content": "Mostly **solid** work."},
				{"type": "chart", "chartType": "line", "title": "Trend", "data": [{"label": "W1", "value": 2}]},
				{"type": "insights", "items": ["Vocabulary gaps", "Good reasoning"]},
				{"type": "recommendations", "title": "Next steps", "items": ["Practice", "Review"]},
				{"type": "table", "title": "Raw", "content": {"rows": 2}},
			],
		}
		presentation = render(_fence(payload))
		assert presentation.shape == "dashboard"
		dashboard = presentation.blocks[0]
		assert dashboard.title == "Class overview"
		summary, chart, insights, recommendations, generic = dashboard.components
		assert summary.kind == "summary"
		assert [(s.text, s.style) for s in summary.spans][1] == ("solid", "bold")
		assert chart.kind == "chart" and chart.chart_type == "line"
		assert insights.title == "Insights"
		assert [spans_to_text(i.spans) for i in insights.items] == ["Vocabulary gaps", "Good reasoning"]
		assert [i.number for i in recommendations.items] == [1, 2]
		assert generic.kind == "card"
		assert json.loads(generic.content) == {"rows": 2}

	def test_chart_component_without_data_type_falls_back_to_card(self):
		payload = {"type": "DASHBOARD", "title": "D", "components": [{"type": "chart", "title": "Broken"}]}
		dashboard = render(_fence(payload)).blocks[0]
		assert dashboard.components[0].kind == "card"


class TestNarrativeRules:
	"""Rule precedence on plain text answers."""

	def test_per_student_cards(self):
		presentation = render("**Student 1**: Good.\n**Student 2**: Needs work.")
		assert presentation.shape == "per_student"
		assert [(b.student_id, _text(b)) for b in presentation.blocks] == [(1, "Good."), (2, "Needs work.")]

	def test_per_student_keeps_lead_text(self):
		presentation = render("Overall feedback below.\n\nStudent 1: Clear.\nStudent 2: Vague.")
		assert presentation.blocks[0].kind == "paragraph"
		assert [b.student_id for b in presentation.blocks[1:]] == [1, 2]

	def test_bold_colon_inside_marker(self):
		presentation = render("**Student 4:** Strong answer.\n**Student 5:** Weak answer.")
		assert [b.student_id for b in presentation.blocks] == [4, 5]

	def test_double_underscore_markers(self):
		presentation = render("__Student 1__: Clear.\n__Student 2__: Vague.")
		assert presentation.shape == "per_student"
		assert [(b.student_id, _text(b)) for b in presentation.blocks] == [(1, "Clear."), (2, "Vague.")]

	def test_numbered_student_markers_drop_list_numbers(self):
		presentation = render("1. **Student 1**: good work\n2. **Student 2**: needs work")
		assert [(b.kind, _text(b)) for b in presentation.blocks] == [
			("student_card", "good work"),
			("student_card", "needs work"),
		]

	def test_bulleted_student_markers_drop_bullets(self):
		presentation = render("- **Student 1**: good work\n- **Student 2**: needs work")
		assert [(b.student_id, _text(b)) for b in presentation.blocks] == [(1, "good work"), (2, "needs work")]

	def test_marker_without_segment_falls_back_to_mixed(self):
		presentation = render("Student 5 **: solid reasoning\n\nThe class did fine.")
		assert presentation.shape == "narrative"
		assert presentation.layout == "mixed"
		assert [b.highlight for b in presentation.blocks] == [True, False]

	def test_malformed_json_falls_back_to_paragraphs(self):
		presentation = render("```json\n{not json}\n```\nStudents did fine.")
		assert presentation.shape == "narrative"
		assert all(b.kind == "paragraph" for b in presentation.blocks)
		assert "```json" in _text(presentation.blocks[0])

	def test_numbered_list_is_renumbered(self):
		presentation = render("Key points:\n3. First idea\ncontinued here\n7) Second idea")
		assert presentation.layout == "numbered"
		preamble, ordered = presentation.blocks
		assert _text(preamble) == "Key points:"
		assert [(i.number, spans_to_text(i.spans)) for i in ordered.items] == [
			(1, "First idea continued here"),
			(2, "Second idea"),
		]

	def test_parenthesised_and_dashed_numbering(self):
		presentation = render("(1) First point\n2 - Second point")
		assert presentation.layout == "numbered"
		assert [(i.number, spans_to_text(i.spans)) for i in presentation.blocks[0].items] == [
			(1, "First point"),
			(2, "Second point"),
		]

	def test_bullets(self):
		presentation = render("- one\n• two\n* three")
		assert presentation.layout == "bulleted"
		assert [spans_to_text(i.spans) for i in presentation.blocks[0].items] == ["one", "two", "three"]

	def test_leading_emphasis_is_not_a_bullet(self):
		presentation = render("*Note* this is prose.")
		assert presentation.layout == "paragraphs"

	def test_sections(self):
		presentation = render("## Summary: Mostly right.\n**Analysis**: Gaps in vocabulary.\nMore detail.")
		assert presentation.layout == "sections"
		assert [(b.title, _text(b)) for b in presentation.blocks] == [
			("Summary", "Mostly right."),
			("Analysis", "Gaps in vocabulary.\nMore detail."),
		]

	def test_paragraphs(self):
		presentation = render("First thought.\n\nSecond thought.")
		assert presentation.layout == "paragraphs"
		assert [_text(b) for b in presentation.blocks] == ["First thought.", "Second thought."]

	def test_student_mention_in_paragraph_is_not_highlighted(self):
		presentation = render("Student 3 did well overall.\n\nThe rest struggled.")
		assert presentation.layout == "paragraphs"
		assert [b.highlight for b in presentation.blocks] == [False, False]

	def test_student_marker_beats_section_header(self):
		presentation = render("**Student 3**: Great work.\n\nSummary: the class is on track.")
		assert presentation.shape == "per_student"

	def test_student_mention_does_not_beat_section_header(self):
		presentation = render("Analysis: Student 3 did well overall.")
		assert presentation.layout == "sections"

	def test_empty_text(self):
		presentation = render_narrative("")
		assert presentation.layout == "paragraphs"
		assert presentation.blocks == []
