from __future__ import annotations
from typing import Dict, List, Optional

from pydantic import BaseModel

from .schemas import StudentResponse
from .settings import settings


class ChatRequest(BaseModel):
	messages: List[Dict[str, str]]
	max_tokens: int
	temperature: Optional[float] = None


GENERATION_SYSTEM_PROMPT = (
	"You are an educational expert who specializes in simulating realistic student responses. "
	"Generate varied answers that reflect the natural diversity found in real classrooms, including "
	"different levels of understanding, writing abilities, and engagement with the material."
)

ANALYSIS_SYSTEM_PROMPT = (
	"You are an educational expert who provides clear, well-structured analysis. "
	"Always format your responses for maximum readability using markdown-style formatting. "
	'When giving individual student feedback, use "**Student X**:" format. '
	"Use numbered lists (1., 2., 3.) for sequential points and bullet points (-) for lists. "
	"Use **bold** for key terms and *italics* for emphasis. "
	"Separate sections with blank lines and use clear section headers when appropriate. "
	"When a chart or dashboard is requested, reply with a single fenced json block following the schema you are given."
)


def _build_generation_prompt(question: str, count: int) -> str:
	return (
		"You are simulating students answering the following question:\n\n"
		f'"{question}"\n\n'
		f"Generate {count} diverse and realistic student answers. Include strong, average, and weak answers. "
		"Vary tone, language, and correctness slightly to simulate real student variety.\n\n"
		"Format your response as a numbered list where each answer is on its own line, like:\n"
		"1. [First student answer]\n"
		"2. [Second student answer]\n"
		"3. [Third student answer]\n"
		"...\n\n"
		"Make sure each answer feels authentic to how real students would respond, with natural variation "
		"in writing style, depth of understanding, and accuracy."
	)


def build_generation_request(question: str, count: int) -> ChatRequest:
	budget = min(count * settings.generation_tokens_per_response, settings.generation_max_tokens)
	return ChatRequest(
		messages=[
			{"role": "system", "content": GENERATION_SYSTEM_PROMPT},
			{"role": "user", "content": _build_generation_prompt(question, count)},
		],
		max_tokens=budget,
	)


def format_response_listing(responses: List[StudentResponse]) -> str:
	return "\n\n".join(f"Student {r.id}: {r.content}" for r in responses)


RESPONSE_SHAPES = """\
Choose exactly ONE of these response shapes, whichever best answers the question:

1. NARRATIVE: plain well-formatted prose.

2. PER-STUDENT BREAKDOWN: one entry per student, each starting on its own line with
   exactly "**Student <id>**:" followed by the feedback for that student.

3. CHART DATA: a single fenced block tagged json with this schema:
```json
{
  "type": "CHART_DATA",
  "chartType": "bar" | "pie" | "line",
  "title": string,
  "data": [{"label": string, "value": number, "description": string (optional)}],
  "insights": string (optional)
}
```

4. DASHBOARD: a single fenced block tagged json with this schema:
```json
{
  "type": "DASHBOARD",
  "title": string,
  "components": [
    {"type": "summary", "title": string, "content": string},
    {"type": "chart", "chartType": "bar" | "pie" | "line", "title": string, "data": [{"label": string, "value": number}]},
    {"type": "insights", "title": string, "items": [string]},
    {"type": "recommendations", "title": string, "items": [string]}
  ]
}
```
Components appear in the order they should be shown. Any text outside the fenced
block is shown after the chart or dashboard."""

FORMATTING_RULES = """\
FORMATTING INSTRUCTIONS:
- Use clear, structured formatting to make your response easy to read
- For individual student feedback, use exactly this format: "**Student X**:" followed by the feedback
- For numbered points, use "1." "2." etc. at the start of lines
- For bullet points, use "-" at the start of lines
- Use **bold text** for emphasis on key terms or concepts
- Use *italic text* for secondary emphasis
- Separate different sections with blank lines
- If providing an overall analysis, you may start with "Analysis:" as a section header
- Keep paragraphs focused and well-spaced for readability"""


def _build_analysis_prompt(original_question: str, responses: List[StudentResponse], follow_up: str) -> str:
	n = len(responses)
	ids = ", ".join(str(r.id) for r in responses)
	return (
		"You are an education expert. A teacher asked students the following question:\n\n"
		f'"{original_question}"\n\n'
		"The students responded with:\n\n"
		f"{format_response_listing(responses)}\n\n"
		"Now answer this follow-up question:\n"
		f'"{follow_up}"\n\n'
		f"IMPORTANT: If your analysis involves individual student feedback, you MUST provide feedback for ALL {n} "
		f"students (Student IDs: {ids}). Do not skip any students.\n\n"
		f"{RESPONSE_SHAPES}\n\n"
		f"{FORMATTING_RULES}\n\n"
		"Structure your response logically and use the formatting above to enhance clarity."
	)


def build_analysis_request(
	original_question: str,
	responses: List[StudentResponse],
	follow_up: str,
) -> ChatRequest:
	"""Assemble the analysis call. Compliance with the requested shapes is not
	checked here; the formatter parses whatever comes back defensively."""
	return ChatRequest(
		messages=[
			{"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
			{"role": "user", "content": _build_analysis_prompt(original_question, responses, follow_up)},
		],
		max_tokens=settings.analysis_max_tokens,
	)
