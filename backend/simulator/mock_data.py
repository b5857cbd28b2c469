"""
Template-based stand-ins for the generation service.

Used when no credential is available and as the fallback whenever a live call
fails, so the user always sees a populated response list and an analysis.
"""

from __future__ import annotations

import json
import math
import random
from typing import Dict, List, Optional, Tuple

from .schemas import Analysis, Quality, StudentResponse


# Share of positions per tier, in generation order; weak takes the remainder
QUALITY_DISTRIBUTION: List[Tuple[Quality, float]] = [
	("strong", 0.3),
	("average", 0.4),
	("weak", 0.3),
]

RESPONSE_TEMPLATES: Dict[str, List[str]] = {
	"strong": [
		"This is a well-structured answer that demonstrates deep understanding of the concept. The student shows clear reasoning and provides relevant examples to support their explanation.",
		"The response shows excellent comprehension with detailed analysis. The student connects multiple concepts and demonstrates critical thinking skills.",
		"This answer reflects thorough understanding and ability to apply knowledge. The explanation is clear, logical, and shows good grasp of underlying principles.",
	],
	"average": [
		"This answer shows basic understanding but lacks depth. The explanation covers the main points but could benefit from more detail and examples.",
		"The response demonstrates adequate knowledge but misses some key connections. The reasoning is generally sound but somewhat superficial.",
		"This shows reasonable comprehension with some gaps. The student understands the basics but struggles with more complex aspects.",
	],
	"weak": [
		"This response shows limited understanding with several misconceptions. The explanation is unclear and contains factual errors.",
		"The answer demonstrates confusion about key concepts. There are significant gaps in knowledge and reasoning.",
		"This shows minimal comprehension with major misunderstandings. The response lacks coherent structure and contains inaccuracies.",
	],
}

MATH_KEYWORDS = ("math", "equation")
MATH_CLAUSE = " The mathematical reasoning demonstrates various levels of understanding."

ANALYSIS_TEMPLATES: List[str] = [
	"Based on these responses, I can identify several patterns: The stronger answers demonstrate clear understanding while weaker responses show common misconceptions about the core ideas.",
	"These student responses reveal varying levels of comprehension. Key areas for improvement include precise vocabulary and supporting evidence.",
	"The responses indicate that students generally understand the basic concepts, but struggle with applying them to new situations.",
]

FEEDBACK_PHRASES: List[str] = [
	"demonstrates solid understanding with clear explanations",
	"shows basic grasp but could benefit from more specific examples",
	"displays creative thinking with some misconceptions to address",
	"exhibits good foundational knowledge with room for deeper analysis",
	"presents interesting perspective that needs factual refinement",
]


def tier_sizes(count: int) -> Dict[str, int]:
	"""Split ``count`` positions into strong/average/weak (10 -> 3/4/3)."""
	strong = min(count, int(count * QUALITY_DISTRIBUTION[0][1] + 0.5))
	average = min(count - strong, int(count * QUALITY_DISTRIBUTION[1][1] + 0.5))
	return {"strong": strong, "average": average, "weak": count - strong - average}


def generate_mock_responses(
	question: str,
	count: int,
	*,
	rng: Optional[random.Random] = None,
) -> List[StudentResponse]:
	rng = rng or random.Random()
	mentions_math = any(k in question.lower() for k in MATH_KEYWORDS)
	responses: List[StudentResponse] = []
	for quality, size in tier_sizes(count).items():
		for _ in range(size):
			content = rng.choice(RESPONSE_TEMPLATES[quality])
			if mentions_math:
				content += MATH_CLAUSE
			responses.append(StudentResponse(id=len(responses) + 1, content=content, quality=quality))
	# Decorrelate id order and quality from list position
	rng.shuffle(responses)
	return responses


def _fenced(payload: dict) -> str:
	return "```json\n" + json.dumps(payload, indent=2) + "\n```"


def _chart_analysis(responses: List[StudentResponse]) -> str:
	n = len(responses)
	payload = {
		"type": "CHART_DATA",
		"chartType": "pie",
		"title": "Understanding Level Distribution",
		"data": [
			{"label": "Strong Understanding", "value": math.floor(n * 0.3), "description": "Students with comprehensive grasp"},
			{"label": "Developing Understanding", "value": math.floor(n * 0.5), "description": "Students with basic concepts but missing details"},
			{"label": "Needs Support", "value": math.ceil(n * 0.2), "description": "Students requiring additional instruction"},
		],
		"insights": "Most students demonstrate developing understanding, with opportunities for targeted support in specific areas.",
	}
	return "Here's a visual breakdown of the student responses:\n\n" + _fenced(payload)


def _dashboard_analysis(responses: List[StudentResponse]) -> str:
	n = len(responses)
	payload = {
		"type": "DASHBOARD",
		"title": "Student Response Analysis Dashboard",
		"components": [
			{
				"type": "summary",
				"title": "Overall Assessment",
				"content": f"Analysis of {n} student responses reveals varied understanding levels with clear patterns in misconceptions and strengths.",
			},
			{
				"type": "chart",
				"chartType": "bar",
				"title": "Common Themes",
				"data": [
					{"label": "Correct Core Concepts", "value": math.floor(n * 0.7)},
					{"label": "Partial Understanding", "value": math.floor(n * 0.4)},
					{"label": "Misconceptions Present", "value": math.floor(n * 0.3)},
				],
			},
			{
				"type": "insights",
				"title": "Key Learning Insights",
				"items": [
					"Students grasp fundamental concepts but struggle with applications",
					"Common vocabulary gaps observed across multiple responses",
					"Evidence-based reasoning needs development in most responses",
				],
			},
			{
				"type": "recommendations",
				"title": "Teaching Recommendations",
				"items": [
					"Implement guided practice sessions for application skills",
					"Create vocabulary scaffolding activities",
					"Design think-aloud sessions to model reasoning processes",
					"Provide multiple examples connecting theory to practice",
				],
			},
		],
	}
	return _fenced(payload)


def _feedback_analysis(responses: List[StudentResponse]) -> str:
	parts = ["Here's individual feedback for each student:"]
	for index, r in enumerate(sorted(responses, key=lambda r: r.id)):
		phrase = FEEDBACK_PHRASES[index % len(FEEDBACK_PHRASES)]
		parts.append(
			f"**Student {r.id}**: This response {phrase}. "
			"Consider encouraging more detailed explanations and connections to broader concepts."
		)
	return "\n\n".join(parts)


def generate_mock_analysis(
	original_question: str,
	responses: List[StudentResponse],
	analysis_question: str,
	*,
	rng: Optional[random.Random] = None,
) -> Analysis:
	rng = rng or random.Random()
	q = analysis_question.lower()
	if any(k in q for k in ("chart", "visualization", "distribution")):
		text = _chart_analysis(responses)
	elif any(k in q for k in ("dashboard", "comprehensive", "overview")):
		text = _dashboard_analysis(responses)
	elif any(k in q for k in ("individual", "each student", "student feedback")):
		text = _feedback_analysis(responses)
	else:
		text = rng.choice(ANALYSIS_TEMPLATES)
		if "misconception" in q:
			text += " Common misconceptions include oversimplification of complex concepts and difficulty connecting theoretical knowledge to practical applications."
		elif "improve" in q:
			text += " Students would benefit from more concrete examples, guided practice, and scaffolded learning approaches."
		elif "pattern" in q:
			text += " The response patterns suggest varying levels of prior knowledge and different learning styles among students."
	return Analysis(question=analysis_question, response=text)
